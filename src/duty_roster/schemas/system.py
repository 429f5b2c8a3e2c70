from datetime import date

from pydantic import BaseModel


class HolidayRead(BaseModel):
    code: str
    date: date
    name: str
    localized_name: str
