from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from duty_roster.api.routes import api_router
from duty_roster.core.config import get_settings
from duty_roster.core.logging import configure_logging


def create_application() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)
    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        description="API for generating fair monthly staff duty rosters.",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(api_router, prefix="/api")

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Simple health endpoint for infrastructure monitoring."""
        return {"status": "ok"}

    return app


app = create_application()
