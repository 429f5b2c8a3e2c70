from .plan import DutyPlan, DutyPlanRun

__all__ = [
    "DutyPlan",
    "DutyPlanRun",
]
