"""POST /v1/simulation - debt payoff what-if endpoints"""

import time
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request

from catalyst_engine.api.v1.schemas import (
    CardSchema,
    CompareRequest,
    CompareResponse,
    NonCardDebtSchema,
    SimulationRequest,
    SimulationResponse,
    TimelinePointSchema,
)
from catalyst_engine.api.dependencies import get_request_id, get_simulator_max_months
from catalyst_engine.domain.exceptions import DomainException
from catalyst_engine.domain.models import Debt, SimulationResult
from catalyst_engine.domain.money import from_cents, to_cents
from catalyst_engine.domain.normalize import card_from_raw, non_card_debt_from_raw
from catalyst_engine.domain.simulator import compare_strategies, simulate_payoff
from catalyst_engine.infrastructure.observability.metrics import record_simulation
from catalyst_engine.infrastructure.observability.logging import log_simulation

router = APIRouter()


def debts_from_request(cards: List[CardSchema], loans: List[NonCardDebtSchema]) -> List[Debt]:
    """Cards and non-card debts as one simulation list"""
    debts = []
    for index, raw in enumerate(cards):
        card = card_from_raw(raw.model_dump(), index)
        debts.append(Debt(card.id, card.name, "card", card.balance_cents, card.apr_bps, card.min_payment_cents))
    for index, raw in enumerate(loans):
        loan = non_card_debt_from_raw(raw.model_dump(), index)
        debts.append(Debt(loan.id, loan.name, "loan", loan.balance_cents, loan.apr_bps, loan.min_payment_cents))
    return debts


def to_simulation_response(result: SimulationResult) -> SimulationResponse:
    return SimulationResponse(
        strategy=result.strategy,
        months=result.months,
        duration=result.duration_label,
        capped=result.capped,
        total_interest=from_cents(result.total_interest_cents),
        timeline=[
            TimelinePointSchema(
                month=point.month,
                total_debt=from_cents(point.remaining_cents),
                interest=from_cents(point.interest_cents),
            )
            for point in result.timeline
        ],
    )


def _record(request_id: str, result: SimulationResult, duration_ms: float) -> None:
    record_simulation(result.strategy, result.months, result.capped)
    log_simulation(request_id, result.strategy, result.months, result.capped, duration_ms)


@router.post("/simulation", response_model=SimulationResponse)
def create_simulation(
    request_body: SimulationRequest,
    request: Request,
    max_months: int = Depends(get_simulator_max_months),
):
    """Simulate month-by-month payoff under one strategy"""
    request_id = get_request_id(request)
    debts = debts_from_request(request_body.cards, request_body.non_card_debts)

    start_time = time.time()

    try:
        result = simulate_payoff(debts, to_cents(request_body.extra_monthly), request_body.strategy, max_months=max_months)
        _record(request_id, result, (time.time() - start_time) * 1000)
        return to_simulation_response(result)

    except DomainException as e:
        logging.warning(f"Invalid simulation request: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/simulation/compare", response_model=CompareResponse)
def compare_simulations(
    request_body: CompareRequest,
    request: Request,
    max_months: int = Depends(get_simulator_max_months),
):
    """
    Baseline (no extra), avalanche and snowball side by side.

    Choosing between them is left to the caller.
    """
    request_id = get_request_id(request)
    debts = debts_from_request(request_body.cards, request_body.non_card_debts)
    start_time = time.time()

    results = compare_strategies(debts, to_cents(request_body.extra_monthly), max_months=max_months)
    duration_ms = (time.time() - start_time) * 1000
    for result in results.values():
        _record(request_id, result, duration_ms)
    return CompareResponse(results={name: to_simulation_response(r) for name, r in results.items()})
