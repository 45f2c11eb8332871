"""Strategy engine - turns a weekly cash snapshot into a pay-cycle funding plan"""

from dataclasses import dataclass, field
from datetime import date
from functools import cmp_to_key
from typing import List, Mapping, Optional, Tuple

from catalyst_engine.domain.models import (
    Debt,
    DebtRecommendation,
    FinancialConfig,
    Snapshot,
    StrategyResult,
    TimeCriticalItem,
)
from catalyst_engine.domain.ranking import avalanche_key, compare_cfi, compare_promo_urgency
from catalyst_engine.utils.date_utils import (
    DEFAULT_PAY_CYCLE_DAYS,
    add_days,
    days_between,
    next_day_of_month,
    next_payday,
)

METHOD_PROMO_SPRINT = "promo-sprint"
METHOD_CFI_OVERRIDE = "cfi-override"
METHOD_AVALANCHE = "avalanche"


def _default_frequency_multiples() -> Mapping[str, int]:
    return {
        "weekly": 50,
        "bi-weekly": 35,
        "biweekly": 35,
        "semi-monthly": 30,
        "semimonthly": 30,
        "monthly": 25,
    }


@dataclass(frozen=True)
class StrategyTuning:
    """
    Empirical constants behind debt target selection.

    CFI multiples are "balance below N x minimum payment" thresholds.
    The day tiers apply when no pay frequency is configured:
    up to 8 days -> 50x, up to 16 days -> 35x, otherwise 25x.
    """

    promo_window_days: int = 90
    cfi_multiple_by_frequency: Mapping[str, int] = field(default_factory=_default_frequency_multiples)
    cfi_day_tiers: Tuple[Tuple[int, int], ...] = ((8, 50), (16, 35))
    cfi_fallback_multiple: int = 25
    promo_fallback_apr_bps: int = 2500  # post-promo APR when none is known


def cfi_threshold(
    pay_frequency: Optional[str],
    days_to_next_paycheck: int,
    tuning: Optional[StrategyTuning] = None,
) -> int:
    """Minimum-payment multiple below which a debt's CFI beats pure APR"""
    tuning = tuning or StrategyTuning()
    frequency = (pay_frequency or "").strip().lower()
    if frequency in tuning.cfi_multiple_by_frequency:
        return tuning.cfi_multiple_by_frequency[frequency]

    for max_days, multiple in tuning.cfi_day_tiers:
        if days_to_next_paycheck <= max_days:
            return multiple
    return tuning.cfi_fallback_multiple


def collect_debts(config: FinancialConfig, snapshot: Snapshot) -> List[Debt]:
    """Cards from the snapshot plus non-card debts, as ranking views"""
    debts = [
        Debt(
            id=card.id,
            name=card.name,
            kind="card",
            balance_cents=card.balance_cents,
            apr_bps=card.apr_bps,
            min_payment_cents=card.min_payment_cents,
            due_day=card.due_day,
            promo_apr_expires=card.promo_apr_expires if card.has_promo_apr else None,
        )
        for card in snapshot.cards
    ]
    loans = snapshot.non_card_debts if snapshot.non_card_debts is not None else config.non_card_debts
    debts.extend(
        Debt(
            id=loan.id,
            name=loan.name,
            kind="loan",
            balance_cents=loan.balance_cents,
            apr_bps=loan.apr_bps,
            min_payment_cents=loan.min_payment_cents,
            due_day=loan.due_day,
        )
        for loan in loans
    )
    return debts


def _promo_winner(
    debts: List[Debt],
    today: date,
    config: FinancialConfig,
    tuning: StrategyTuning,
) -> Optional[Tuple[Debt, int, int]]:
    """Most urgent promo debt expiring within the window, as (debt, post-APR, days)"""
    candidates = []
    for debt in debts:
        if debt.promo_apr_expires is None:
            continue
        days = days_between(today, debt.promo_apr_expires)
        if 0 < days <= tuning.promo_window_days:
            post_apr = debt.apr_bps or config.default_apr_bps or tuning.promo_fallback_apr_bps
            candidates.append((debt, post_apr, days))

    if not candidates:
        return None

    ordered = sorted(
        candidates,
        key=cmp_to_key(lambda a, b: compare_promo_urgency(a[0], a[1], a[2], b[0], b[1], b[2])),
    )
    return ordered[0]


def _select_target(
    debts: List[Debt],
    surplus_cents: int,
    today: date,
    threshold: int,
    config: FinancialConfig,
    tuning: StrategyTuning,
) -> Optional[DebtRecommendation]:
    """
    Override hierarchy:
    1. Promo expiring soon - deferred interest is the most expensive outcome
    2. CFI below threshold - frees monthly cash flow fastest
    3. Avalanche - highest APR
    """
    active = [d for d in debts if d.balance_cents > 0]
    if not active:
        return None

    promo = _promo_winner(active, today, config, tuning)
    if promo is not None:
        debt, _, days = promo
        return DebtRecommendation(
            debt_id=debt.id,
            name=debt.name,
            method=METHOD_PROMO_SPRINT,
            amount_cents=min(surplus_cents, debt.balance_cents),
            promo_days_remaining=days,
        )

    # Zero-minimum debts never qualify for CFI
    cfi_pool = [d for d in active if d.min_payment_cents > 0]
    if cfi_pool:
        cfi_target = sorted(cfi_pool, key=cmp_to_key(compare_cfi))[0]
        if cfi_target.balance_cents < threshold * cfi_target.min_payment_cents:
            return DebtRecommendation(
                debt_id=cfi_target.id,
                name=cfi_target.name,
                method=METHOD_CFI_OVERRIDE,
                amount_cents=min(surplus_cents, cfi_target.balance_cents),
            )

    apr_target = min(active, key=avalanche_key)
    return DebtRecommendation(
        debt_id=apr_target.id,
        name=apr_target.name,
        method=METHOD_AVALANCHE,
        amount_cents=min(surplus_cents, apr_target.balance_cents),
    )


def plan_cycle(
    config: FinancialConfig,
    snapshot: Snapshot,
    tuning: Optional[StrategyTuning] = None,
) -> StrategyResult:
    """
    Main entry point: build the funding plan for the current pay cycle.

    Steps:
    1. Floor = weekly allowance + emergency floor
    2. Horizon = days until next payday (7-day fallback)
    3. Time-critical gate: cash bills and debt minimums due within the horizon
    4. Required transfer from savings to cover the gate above the floor
    5. Operational surplus after floor, gate and remaining minimums
    6. Debt target for the surplus

    Pure function of its inputs; never raises for malformed data.
    """
    tuning = tuning or StrategyTuning()
    today = snapshot.snapshot_date

    floor = config.weekly_spend_allowance_cents + config.emergency_floor_cents

    payday = next_payday(today, config.payday) if config.payday else add_days(today, DEFAULT_PAY_CYCLE_DAYS)
    horizon = days_between(today, payday)

    # Renewals billed to a card post to that card, not to checking
    card_keys = set()
    for card in snapshot.cards:
        card_keys.add(card.id.casefold())
        card_keys.add(card.name.casefold())

    items: List[TimeCriticalItem] = []
    bills_cents = 0
    for renewal in snapshot.renewals:
        if renewal.is_cancelled or renewal.next_due is None:
            continue
        if days_between(today, renewal.next_due) > horizon:
            continue
        if renewal.charged_to and renewal.charged_to.casefold() in card_keys:
            continue
        amount = max(0, renewal.amount_cents)
        bills_cents += amount
        items.append(TimeCriticalItem(renewal.name, amount, renewal.next_due, "bill"))

    debts = collect_debts(config, snapshot)

    total_minimums = 0
    critical_minimums = 0
    for debt in debts:
        if debt.balance_cents <= 0 or debt.min_payment_cents <= 0:
            continue
        total_minimums += debt.min_payment_cents
        if debt.due_day is None:
            continue
        due = next_day_of_month(today, debt.due_day)
        if 0 <= days_between(today, due) <= horizon:
            critical_minimums += debt.min_payment_cents
            items.append(TimeCriticalItem(f"{debt.name} Minimum", debt.min_payment_cents, due, "minimum"))

    time_critical = bills_cents + critical_minimums

    cash_above_floor = snapshot.checking_cents - floor
    required_transfer = 0
    if cash_above_floor < time_critical:
        required_transfer = max(0, min(time_critical - cash_above_floor, snapshot.savings_cents))

    surplus = cash_above_floor - time_critical - max(0, total_minimums - critical_minimums)

    threshold = cfi_threshold(config.pay_frequency, horizon, tuning)
    recommendation = None
    if surplus > 0:
        recommendation = _select_target(debts, surplus, today, threshold, config, tuning)

    items.sort(key=lambda i: (i.due, i.kind, i.name.casefold(), i.amount_cents))

    return StrategyResult(
        snapshot_date=today,
        next_payday=payday,
        days_to_next_paycheck=horizon,
        floor_cents=floor,
        time_critical_cents=time_critical,
        time_critical_minimums_cents=critical_minimums,
        time_critical_items=tuple(items),
        total_minimums_cents=total_minimums,
        required_transfer_cents=required_transfer,
        is_negative_cash_flow=cash_above_floor < 0,
        operational_surplus_cents=max(0, surplus),
        cfi_threshold=threshold,
        recommendation=recommendation,
        tax_withholding_bps=config.tax_withholding_bps,
    )
