"""
Input adapter - turns loosely-typed user data into strict domain models.

Any numeric field may arrive as a string, a number, or not at all. Everything
is routed through the money codec here so the engine only ever sees integer
cents and basis points. Malformed values degrade to zero, never raise.
"""

from datetime import date
from typing import Any, Iterable, Mapping, Optional, Tuple

from catalyst_engine.domain.models import (
    BudgetCategory,
    Card,
    FinancialConfig,
    IncomeSource,
    NonCardDebt,
    Renewal,
    SavingsGoal,
    Snapshot,
)
from catalyst_engine.domain.money import pct_to_bps, to_bps, to_cents
from catalyst_engine.utils.date_utils import parse_date

DEFAULT_SWR_BPS = 400  # 4.00%
DEFAULT_EXPECTED_RETURN_BPS = 700  # 7.00%
DEFAULT_INFLATION_BPS = 250  # 2.50%
DEFAULT_APR_BPS = 2499


def _first(raw: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """First present, non-None value among alias keys"""
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return default


def _text(value: Any, default: str = "") -> str:
    if value is None:
        return default
    return str(value).strip() or default


def _whole_number(value: Any) -> Optional[int]:
    """Whole part of a number or numeric string; None when unreadable"""
    if value is None or isinstance(value, bool):
        return None
    return to_cents(value) // 100


def _day_of_month(value: Any) -> Optional[int]:
    """Due day 1-31, or None when absent or out of range"""
    day = _whole_number(value)
    return day if day is not None and 1 <= day <= 31 else None


def _positive_int(value: Any, default: int = 1) -> int:
    number = _whole_number(value)
    return number if number is not None and number > 0 else default


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "y")
    return bool(value)


def _many(items: Optional[Iterable[Mapping[str, Any]]], build) -> tuple:
    return tuple(build(item, index) for index, item in enumerate(items or []))


def card_from_raw(raw: Mapping[str, Any], index: int = 0) -> Card:
    name = _text(_first(raw, "name", "nickname", "card_name"), "Card")
    promo_expires = parse_date(_first(raw, "promo_apr_expires", "promo_apr_exp"))
    return Card(
        id=_text(raw.get("id"), f"card-{index}"),
        name=name,
        balance_cents=to_cents(raw.get("balance")),
        apr_bps=to_bps(raw.get("apr")),
        min_payment_cents=to_cents(_first(raw, "min_payment", "minimum")),
        due_day=_day_of_month(_first(raw, "due_day", "payment_due_day")),
        has_promo_apr=_flag(raw.get("has_promo_apr")) and promo_expires is not None,
        promo_apr_expires=promo_expires,
    )


def non_card_debt_from_raw(raw: Mapping[str, Any], index: int = 0) -> NonCardDebt:
    return NonCardDebt(
        id=_text(raw.get("id"), f"loan-{index}"),
        name=_text(raw.get("name"), "Loan"),
        balance_cents=to_cents(raw.get("balance")),
        apr_bps=to_bps(raw.get("apr")),
        min_payment_cents=to_cents(_first(raw, "minimum", "min_payment")),
        due_day=_day_of_month(_first(raw, "due_day", "payment_due_day")),
    )


def renewal_from_raw(raw: Mapping[str, Any], index: int = 0) -> Renewal:
    charged_to = _text(raw.get("charged_to")) or None
    return Renewal(
        id=_text(raw.get("id"), f"renewal-{index}"),
        name=_text(raw.get("name"), "Bill"),
        amount_cents=to_cents(raw.get("amount")),
        next_due=parse_date(raw.get("next_due")),
        charged_to=charged_to,
        interval=_positive_int(raw.get("interval")),
        interval_unit=_text(raw.get("interval_unit"), "months").lower(),
        is_cancelled=_flag(raw.get("is_cancelled")),
    )


def income_source_from_raw(raw: Mapping[str, Any], index: int = 0) -> IncomeSource:
    return IncomeSource(
        name=_text(raw.get("name"), f"Income {index + 1}"),
        amount_cents=to_cents(raw.get("amount")),
        frequency=_text(raw.get("frequency"), "monthly").lower(),
    )


def _budget_category_from_raw(raw: Mapping[str, Any], index: int = 0) -> BudgetCategory:
    return BudgetCategory(
        name=_text(raw.get("name"), f"Category {index + 1}"),
        monthly_target_cents=to_cents(raw.get("monthly_target")),
    )


def _savings_goal_from_raw(raw: Mapping[str, Any], index: int = 0) -> SavingsGoal:
    return SavingsGoal(
        name=_text(raw.get("name"), f"Goal {index + 1}"),
        target_cents=to_cents(_first(raw, "target_amount", "target")),
        current_cents=to_cents(_first(raw, "current_amount", "current")),
    )


def config_from_raw(raw: Optional[Mapping[str, Any]]) -> FinancialConfig:
    """
    Build a FinancialConfig from a settings mapping.

    FIRE percentages accept either whole percents (4) or fractions (0.04).
    Expected return falls back to the legacy arbitrage target APR.
    """
    raw = raw or {}
    pay_frequency = _text(raw.get("pay_frequency")).lower() or None
    payday = _text(raw.get("payday")) or None
    default_apr = to_bps(raw.get("default_apr")) if raw.get("default_apr") is not None else DEFAULT_APR_BPS

    return FinancialConfig(
        weekly_spend_allowance_cents=to_cents(raw.get("weekly_spend_allowance")),
        emergency_floor_cents=to_cents(raw.get("emergency_floor")),
        default_apr_bps=default_apr,
        payday=payday,
        pay_frequency=pay_frequency,
        paycheck_standard_cents=to_cents(_first(raw, "paycheck_standard", "average_paycheck")),
        fire_safe_withdrawal_bps=pct_to_bps(raw.get("fire_safe_withdrawal_pct"), DEFAULT_SWR_BPS),
        fire_expected_return_bps=pct_to_bps(
            _first(raw, "fire_expected_return_pct", "arbitrage_target_apr"),
            DEFAULT_EXPECTED_RETURN_BPS,
        ),
        fire_inflation_bps=pct_to_bps(raw.get("fire_inflation_pct"), DEFAULT_INFLATION_BPS),
        budget_categories=_many(raw.get("budget_categories"), _budget_category_from_raw),
        non_card_debts=_many(raw.get("non_card_debts"), non_card_debt_from_raw),
        income_sources=_many(raw.get("income_sources"), income_source_from_raw),
        savings_goals=_many(raw.get("savings_goals"), _savings_goal_from_raw),
        investment_brokerage_cents=to_cents(raw.get("investment_brokerage")),
        investment_roth_cents=to_cents(raw.get("investment_roth")),
        k401_balance_cents=to_cents(raw.get("k401_balance")),
        hsa_balance_cents=to_cents(raw.get("hsa_balance")),
        tax_withholding_bps=to_bps(raw.get("tax_withholding_rate")),
    )


def cards_from_raw(items: Optional[Iterable[Mapping[str, Any]]]) -> Tuple[Card, ...]:
    return _many(items, card_from_raw)


def renewals_from_raw(items: Optional[Iterable[Mapping[str, Any]]]) -> Tuple[Renewal, ...]:
    return _many(items, renewal_from_raw)


def non_card_debts_from_raw(items: Optional[Iterable[Mapping[str, Any]]]) -> Tuple[NonCardDebt, ...]:
    return _many(items, non_card_debt_from_raw)


def snapshot_from_raw(raw: Optional[Mapping[str, Any]], as_of: date) -> Snapshot:
    """
    Build a Snapshot. `as_of` is used when the mapping carries no valid
    snapshot date; the caller owns the clock.
    """
    raw = raw or {}
    non_card = raw.get("non_card_debts")
    return Snapshot(
        snapshot_date=parse_date(raw.get("snapshot_date")) or as_of,
        checking_cents=to_cents(raw.get("checking_balance")),
        savings_cents=to_cents(raw.get("savings_total")),
        cards=cards_from_raw(raw.get("cards")),
        renewals=renewals_from_raw(raw.get("renewals")),
        non_card_debts=non_card_debts_from_raw(non_card) if non_card is not None else None,
    )
