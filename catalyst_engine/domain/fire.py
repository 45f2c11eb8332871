"""FIRE projection solver - years until the portfolio can fund annual expenses"""

import math
from dataclasses import replace
from datetime import date
from typing import Iterable, Optional, Tuple

from catalyst_engine.domain.models import (
    Card,
    FinancialConfig,
    FireProjectionResult,
    IncomeSource,
    Renewal,
)
from catalyst_engine.domain.money import BPS_SCALE, round_half_up
from catalyst_engine.domain.normalize import DEFAULT_SWR_BPS
from catalyst_engine.utils.date_utils import add_months

STATUS_OK = "ok"
STATUS_UNREACHABLE = "unreachable"

REASON_NEGATIVE_SAVINGS_NONPOSITIVE_RETURN = "negative-savings-and-nonpositive-real-return"
REASON_NO_CAPITAL_BASE = "no-capital-base"
REASON_ZERO_RETURN_NO_SAVINGS = "zero-real-return-without-positive-savings"
REASON_INVALID_LOG_DOMAIN = "invalid-log-domain"
REASON_UNSTABLE_PROJECTION = "unstable-projection"

MAX_PROJECTION_YEARS = 150
ZERO_RETURN_EPSILON = 1e-9

# Periods per year by income frequency
INCOME_PERIODS = {
    "weekly": 52,
    "bi-weekly": 26,
    "biweekly": 26,
    "semi-monthly": 24,
    "semimonthly": 24,
    "quarterly": 4,
    "annual": 1,
    "yearly": 1,
}

PAYCHECK_PERIODS = {
    "weekly": 52,
    "bi-weekly": 26,
    "biweekly": 26,
    "semi-monthly": 24,
    "semimonthly": 24,
    "monthly": 12,
}

# Renewal annualization factors as exact (numerator, denominator)
RENEWAL_FACTORS = {
    "days": (3_652_425, 10_000),  # 365.2425 days per year
    "weeks": (52, 1),
    "months": (12, 1),
    "years": (1, 1),
}


def annualize_income_source(source: IncomeSource) -> int:
    amount = max(0, source.amount_cents)
    return amount * INCOME_PERIODS.get(source.frequency, 12)


def annual_income_cents(config: FinancialConfig) -> int:
    """Explicit income sources, else the standard paycheck by pay frequency"""
    explicit = sum(annualize_income_source(s) for s in config.income_sources)
    if explicit > 0:
        return explicit

    paycheck = max(0, config.paycheck_standard_cents)
    frequency = (config.pay_frequency or "bi-weekly").lower()
    return paycheck * PAYCHECK_PERIODS.get(frequency, 26)


def annualize_renewal(renewal: Renewal) -> int:
    amount = max(0, renewal.amount_cents)
    factor = RENEWAL_FACTORS.get(renewal.interval_unit)
    if amount <= 0 or factor is None:
        return 0
    numerator, denominator = factor
    return round_half_up(amount * numerator, max(1, renewal.interval) * denominator)


def annual_expenses_cents(
    config: FinancialConfig,
    renewals: Iterable[Renewal],
    cards: Iterable[Card],
) -> int:
    budget = sum(max(0, c.monthly_target_cents) for c in config.budget_categories) * 12
    allowance = max(0, config.weekly_spend_allowance_cents) * 52
    bills = sum(annualize_renewal(r) for r in renewals if not r.is_cancelled)
    card_minimums = sum(max(0, c.min_payment_cents) * 12 for c in cards if c.balance_cents > 0)
    loan_minimums = sum(max(0, d.min_payment_cents) * 12 for d in config.non_card_debts if d.balance_cents > 0)
    return budget + allowance + bills + card_minimums + loan_minimums


def current_portfolio_cents(config: FinancialConfig, market_value_cents: int) -> int:
    """Larger of the live market value and the manual mirrors, never their sum"""
    manual = (
        max(0, config.investment_brokerage_cents)
        + max(0, config.investment_roth_cents)
        + max(0, config.k401_balance_cents)
        + max(0, config.hsa_balance_cents)
    )
    return max(max(0, market_value_cents), manual)


def savings_goals_remaining_cents(config: FinancialConfig) -> int:
    """Amount still needed across savings goals; overfunded goals count as zero"""
    return sum(max(0, goal.target_cents - goal.current_cents) for goal in config.savings_goals)


def real_return_bps(expected_return_bps: int, inflation_bps: int) -> int:
    """Fisher relation: (1 + nominal) / (1 + inflation) - 1, in basis points"""
    return round_half_up((BPS_SCALE + expected_return_bps) * BPS_SCALE, BPS_SCALE + inflation_bps) - BPS_SCALE


def _unreachable(base: FireProjectionResult, reason: str) -> FireProjectionResult:
    return replace(
        base,
        status=STATUS_UNREACHABLE,
        reason=reason,
        projected_years_to_fire=None,
        projected_fire_date=None,
    )


def _solve_years(current: int, target: int, savings: int, rate: float) -> Tuple[Optional[float], Optional[str]]:
    """Closed-form horizon as (years, None), or (None, reason) when undefined"""
    if savings <= 0 and rate > 0:
        growth_ratio = target / current
        if growth_ratio <= 1:
            return 0.0, None
        return math.log(growth_ratio) / math.log(1 + rate), None

    if abs(rate) < ZERO_RETURN_EPSILON:
        if savings <= 0:
            return None, REASON_ZERO_RETURN_NO_SAVINGS
        required = target - current
        return (0.0 if required <= 0 else required / savings), None

    # target = P(1+r)^n + C((1+r)^n - 1)/r
    numerator = target * rate + savings
    denominator = current * rate + savings
    if numerator <= 0 or denominator <= 0:
        return None, REASON_INVALID_LOG_DOMAIN
    return math.log(numerator / denominator) / math.log(1 + rate), None


def project_fire(
    config: FinancialConfig,
    renewals: Iterable[Renewal] = (),
    cards: Iterable[Card] = (),
    portfolio_value_cents: int = 0,
    *,
    as_of_date: date,
) -> FireProjectionResult:
    """
    Project the date the portfolio reaches the safe-withdrawal target.

    Unreachable outcomes are returned with a stable reason code rather
    than raised. The caller supplies `as_of_date`; the clock is never read.
    """
    renewals = list(renewals)
    cards = list(cards)

    income = annual_income_cents(config)
    expenses = annual_expenses_cents(config, renewals, cards)
    savings = income - expenses
    current = current_portfolio_cents(config, portfolio_value_cents)

    swr_bps = config.fire_safe_withdrawal_bps if config.fire_safe_withdrawal_bps > 0 else DEFAULT_SWR_BPS
    target = -(-(expenses * BPS_SCALE) // swr_bps)  # ceil

    base = FireProjectionResult(
        status=STATUS_OK,
        reason=None,
        annual_income_cents=income,
        annual_expenses_cents=expenses,
        annual_savings_cents=savings,
        savings_rate_bps=round_half_up(savings * BPS_SCALE, income) if income > 0 else None,
        current_portfolio_cents=current,
        target_portfolio_cents=target,
        safe_withdrawal_bps=swr_bps,
        expected_return_bps=config.fire_expected_return_bps,
        inflation_bps=config.fire_inflation_bps,
        savings_goals_remaining_cents=savings_goals_remaining_cents(config),
    )

    if target <= 0 or current >= target:
        return replace(base, projected_years_to_fire=0.0, projected_fire_date=as_of_date)

    if BPS_SCALE + config.fire_inflation_bps <= 0:
        return _unreachable(base, REASON_UNSTABLE_PROJECTION)

    real_bps = real_return_bps(config.fire_expected_return_bps, config.fire_inflation_bps)
    base = replace(base, real_return_bps=real_bps)

    if savings <= 0 and real_bps <= 0:
        return _unreachable(base, REASON_NEGATIVE_SAVINGS_NONPOSITIVE_RETURN)
    if current <= 0 and savings <= 0:
        return _unreachable(base, REASON_NO_CAPITAL_BASE)

    years, reason = _solve_years(current, target, savings, real_bps / BPS_SCALE)
    if reason is not None:
        return _unreachable(base, reason)

    if years is None or not math.isfinite(years) or years < 0 or years > MAX_PROJECTION_YEARS:
        return _unreachable(base, REASON_UNSTABLE_PROJECTION)

    months = max(0, math.ceil(years * 12))
    return replace(
        base,
        projected_years_to_fire=years,
        projected_fire_date=add_months(as_of_date, months),
    )
