"""Pytest fixtures for testing"""

import pytest
from datetime import date
from fastapi.testclient import TestClient
from catalyst_engine.api.main import create_app
from catalyst_engine.api.dependencies import get_today
from catalyst_engine.domain.models import Card, FinancialConfig, NonCardDebt, Renewal, Snapshot

# 2024-01-01 is a Monday; with a Friday payday the horizon is 4 days
SNAPSHOT_DATE = date(2024, 1, 1)


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client with a pinned clock"""
    app = create_app()
    app.dependency_overrides[get_today] = lambda: SNAPSHOT_DATE
    return TestClient(app)


@pytest.fixture
def base_config() -> FinancialConfig:
    """$200 weekly allowance + $1000 emergency floor, paid on Fridays"""
    return FinancialConfig(
        weekly_spend_allowance_cents=20_000,
        emergency_floor_cents=100_000,
        payday="friday",
    )


def make_card(name: str, balance: int, minimum: int, apr: int, **kwargs) -> Card:
    """Card with whole-dollar balance/minimum and whole-percent APR"""
    return Card(
        id=kwargs.pop("id", name.lower().replace(" ", "-")),
        name=name,
        balance_cents=balance * 100,
        apr_bps=apr * 100,
        min_payment_cents=minimum * 100,
        **kwargs,
    )


def make_loan(name: str, balance: int, minimum: int, apr: int, **kwargs) -> NonCardDebt:
    return NonCardDebt(
        id=kwargs.pop("id", name.lower().replace(" ", "-")),
        name=name,
        balance_cents=balance * 100,
        apr_bps=apr * 100,
        min_payment_cents=minimum * 100,
        **kwargs,
    )


def make_snapshot(checking: int, savings: int = 0, cards=(), renewals=(), **kwargs) -> Snapshot:
    return Snapshot(
        snapshot_date=kwargs.pop("snapshot_date", SNAPSHOT_DATE),
        checking_cents=checking * 100,
        savings_cents=savings * 100,
        cards=tuple(cards),
        renewals=tuple(renewals),
        **kwargs,
    )


def make_renewal(name: str, amount: int, next_due: date, **kwargs) -> Renewal:
    return Renewal(
        id=kwargs.pop("id", name.lower()),
        name=name,
        amount_cents=amount * 100,
        next_due=next_due,
        **kwargs,
    )
