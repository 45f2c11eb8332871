"""Dependency injection for FastAPI endpoints"""

from datetime import date
from fastapi import Request
from catalyst_engine.config import settings
from catalyst_engine.domain.strategy import StrategyTuning


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_today() -> date:
    """Default as-of date; the engine itself never reads the clock"""
    return date.today()


def get_tuning() -> StrategyTuning:
    """Provide strategy constants with configured overrides"""
    return StrategyTuning(promo_window_days=settings.promo_window_days)


def get_simulator_max_months() -> int:
    return settings.simulator_max_months
