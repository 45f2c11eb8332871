"""Debt payoff simulator - month-by-month amortization under avalanche or snowball"""

from dataclasses import dataclass
from typing import Dict, Iterable, List

from catalyst_engine.domain.exceptions import UnknownPayoffStrategyError
from catalyst_engine.domain.models import Debt, SimulationResult, TimelinePoint
from catalyst_engine.domain.money import monthly_interest_cents
from catalyst_engine.domain.ranking import avalanche_key, snowball_key

MAX_SIMULATION_MONTHS = 360  # 30-year ceiling

STRATEGY_KEYS = {
    "avalanche": avalanche_key,
    "snowball": snowball_key,
}


@dataclass
class _Balance:
    """Mutable per-run balance; the input Debt stays untouched"""

    debt: Debt
    balance_cents: int

    def ranking_view(self) -> Debt:
        return Debt(
            id=self.debt.id,
            name=self.debt.name,
            kind=self.debt.kind,
            balance_cents=self.balance_cents,
            apr_bps=self.debt.apr_bps,
            min_payment_cents=self.debt.min_payment_cents,
        )


def simulate_payoff(
    debts: Iterable[Debt],
    extra_monthly_cents: int,
    strategy: str,
    max_months: int = MAX_SIMULATION_MONTHS,
) -> SimulationResult:
    """
    Simulate paying down `debts` with minimums plus a fixed monthly extra.

    Each month:
    1. Accrue one month of interest on every open balance
    2. Pay each minimum, capped at the balance
    3. Re-rank open debts and pour the extra into them in order,
       spilling to the next debt only once the first hits zero
    4. Sample the aggregate balance (first 3 months, every 3rd, payoff month)

    Stops at zero balance or after `max_months`, reported as capped.
    """
    rank_key = STRATEGY_KEYS.get(strategy)
    if rank_key is None:
        raise UnknownPayoffStrategyError(f"Unknown payoff strategy: {strategy!r}")

    balances = [_Balance(debt=d, balance_cents=d.balance_cents) for d in debts if d.balance_cents > 0]
    if not balances:
        return SimulationResult(strategy=strategy, months=0, total_interest_cents=0)

    extra = max(0, extra_monthly_cents)
    months = 0
    total_interest = 0
    timeline: List[TimelinePoint] = []

    while months < max_months and any(b.balance_cents > 0 for b in balances):
        months += 1
        month_interest = 0

        for b in balances:
            if b.balance_cents <= 0:
                continue
            interest = monthly_interest_cents(b.balance_cents, b.debt.apr_bps)
            b.balance_cents += interest
            month_interest += interest

        total_interest += month_interest

        for b in balances:
            if b.balance_cents <= 0:
                continue
            b.balance_cents -= min(max(0, b.debt.min_payment_cents), b.balance_cents)

        # Ranks shift as balances shrink at different rates
        open_balances = [b for b in balances if b.balance_cents > 0]
        open_balances.sort(key=lambda b: rank_key(b.ranking_view()))
        extra_left = extra
        for b in open_balances:
            if extra_left <= 0:
                break
            payment = min(extra_left, b.balance_cents)
            b.balance_cents -= payment
            extra_left -= payment

        remaining = sum(max(0, b.balance_cents) for b in balances)
        if months <= 3 or months % 3 == 0 or remaining == 0:
            timeline.append(TimelinePoint(month=months, remaining_cents=remaining, interest_cents=month_interest))

    capped = any(b.balance_cents > 0 for b in balances)
    return SimulationResult(
        strategy=strategy,
        months=months,
        total_interest_cents=total_interest,
        timeline=timeline,
        capped=capped,
    )


def compare_strategies(
    debts: Iterable[Debt],
    extra_monthly_cents: int,
    max_months: int = MAX_SIMULATION_MONTHS,
) -> Dict[str, SimulationResult]:
    """Baseline (no extra), avalanche and snowball side by side; picks no winner"""
    debts = list(debts)
    return {
        "baseline": simulate_payoff(debts, 0, "avalanche", max_months),
        "avalanche": simulate_payoff(debts, extra_monthly_cents, "avalanche", max_months),
        "snowball": simulate_payoff(debts, extra_monthly_cents, "snowball", max_months),
    }
