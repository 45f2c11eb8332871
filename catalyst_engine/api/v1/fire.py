"""POST /v1/fire - financial independence projection endpoint"""

import time
import logging
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Request

from catalyst_engine.api.v1.schemas import FireProjectionResponse, FireRequest
from catalyst_engine.api.dependencies import get_request_id, get_today
from catalyst_engine.domain.fire import project_fire
from catalyst_engine.domain.models import FireProjectionResult
from catalyst_engine.domain.money import from_bps, from_cents, to_cents
from catalyst_engine.domain.normalize import cards_from_raw, config_from_raw, renewals_from_raw
from catalyst_engine.utils.date_utils import parse_date
from catalyst_engine.infrastructure.observability.metrics import record_fire_projection
from catalyst_engine.infrastructure.observability.logging import log_fire_projection

router = APIRouter()


def to_fire_response(result: FireProjectionResult) -> FireProjectionResponse:
    return FireProjectionResponse(
        status=result.status,
        reason=result.reason,
        annual_income=from_cents(result.annual_income_cents),
        annual_expenses=from_cents(result.annual_expenses_cents),
        annual_savings=from_cents(result.annual_savings_cents),
        savings_rate_pct=from_bps(result.savings_rate_bps) if result.savings_rate_bps is not None else None,
        current_portfolio=from_cents(result.current_portfolio_cents),
        target_portfolio=from_cents(result.target_portfolio_cents),
        safe_withdrawal_pct=from_bps(result.safe_withdrawal_bps),
        expected_return_pct=from_bps(result.expected_return_bps),
        inflation_pct=from_bps(result.inflation_bps),
        real_return_pct=from_bps(result.real_return_bps) if result.real_return_bps is not None else None,
        projected_years_to_fire=result.projected_years_to_fire,
        projected_fire_date=result.projected_fire_date,
        savings_goals_remaining=from_cents(result.savings_goals_remaining_cents),
    )


@router.post("/fire", response_model=FireProjectionResponse)
def create_fire_projection(
    request_body: FireRequest,
    request: Request,
    today: date = Depends(get_today),
):
    """
    Project years to financial independence.

    "unreachable" is a normal 200 response carrying a reason code.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        result = project_fire(
            config_from_raw(request_body.config.model_dump()),
            renewals=renewals_from_raw([r.model_dump() for r in request_body.renewals]),
            cards=cards_from_raw([c.model_dump() for c in request_body.cards]),
            portfolio_value_cents=to_cents(request_body.portfolio_value),
            as_of_date=parse_date(request_body.as_of_date) or today,
        )

        duration_ms = (time.time() - start_time) * 1000
        record_fire_projection(result.status, result.reason)
        log_fire_projection(request_id, result.status, result.reason, duration_ms)

        return to_fire_response(result)

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")
