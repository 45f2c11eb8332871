"""POST /v1/strategy - pay-cycle funding plan endpoint"""

import time
import logging
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Request

from catalyst_engine.api.v1.schemas import (
    DebtStrategySchema,
    StrategyRequest,
    StrategyResponse,
    TimeCriticalItemSchema,
)
from catalyst_engine.api.dependencies import get_request_id, get_today, get_tuning
from catalyst_engine.domain.models import StrategyResult
from catalyst_engine.domain.money import from_bps, from_cents
from catalyst_engine.domain.normalize import config_from_raw, snapshot_from_raw
from catalyst_engine.domain.strategy import StrategyTuning, plan_cycle
from catalyst_engine.infrastructure.observability.metrics import record_strategy_plan
from catalyst_engine.infrastructure.observability.logging import log_strategy_plan

router = APIRouter()


def to_strategy_response(result: StrategyResult) -> StrategyResponse:
    """Convert integer cents to dollars at the API boundary"""
    rec = result.recommendation
    return StrategyResponse(
        snapshot_date=result.snapshot_date,
        next_payday=result.next_payday,
        days_to_next_paycheck=result.days_to_next_paycheck,
        total_checking_floor=from_cents(result.floor_cents),
        time_critical_amount=from_cents(result.time_critical_cents),
        time_critical_items=[
            TimeCriticalItemSchema(
                name=item.name,
                amount=from_cents(item.amount_cents),
                due=item.due,
                kind=item.kind,
            )
            for item in result.time_critical_items
        ],
        required_transfer=from_cents(result.required_transfer_cents),
        is_negative_cash_flow=result.is_negative_cash_flow,
        operational_surplus=from_cents(result.operational_surplus_cents),
        cfi_threshold=result.cfi_threshold,
        tax_withholding_pct=from_bps(result.tax_withholding_bps),
        debt_strategy=DebtStrategySchema(
            target_id=rec.debt_id if rec else None,
            target=rec.name if rec else None,
            amount=from_cents(result.recommended_amount_cents),
            method=result.method,
            promo_days_remaining=rec.promo_days_remaining if rec else None,
        ),
    )


@router.post("/strategy", response_model=StrategyResponse)
def create_strategy(
    request_body: StrategyRequest,
    request: Request,
    today: date = Depends(get_today),
    tuning: StrategyTuning = Depends(get_tuning),
):
    """
    Build the funding plan for the current pay cycle.

    Flow:
    1. Normalize loosely-typed config and snapshot into cents/bps
    2. Run the strategy engine
    3. Record metrics and logs
    4. Return dollars
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        config = config_from_raw(request_body.config.model_dump())
        snapshot = snapshot_from_raw(request_body.snapshot.model_dump(), as_of=today)

        result = plan_cycle(config, snapshot, tuning)

        duration_ms = (time.time() - start_time) * 1000
        record_strategy_plan(result.method, result.is_negative_cash_flow)
        log_strategy_plan(
            request_id,
            result.method,
            result.is_negative_cash_flow,
            len(result.time_critical_items),
            duration_ms,
        )

        return to_strategy_response(result)

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")
