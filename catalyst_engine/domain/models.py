"""Domain models - pure Python dataclasses representing financial entities"""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class Card:
    """Revolving credit card debt"""

    id: str
    name: str
    balance_cents: int
    apr_bps: int
    min_payment_cents: int
    due_day: Optional[int] = None  # day of month the minimum is due
    has_promo_apr: bool = False
    promo_apr_expires: Optional[date] = None


@dataclass(frozen=True)
class NonCardDebt:
    """Installment or personal loan"""

    id: str
    name: str
    balance_cents: int
    apr_bps: int
    min_payment_cents: int
    due_day: Optional[int] = None


@dataclass(frozen=True)
class Renewal:
    """Recurring bill or subscription"""

    id: str
    name: str
    amount_cents: int
    next_due: Optional[date] = None
    charged_to: Optional[str] = None  # card id or name when billed to a card
    interval: int = 1
    interval_unit: str = "months"  # days | weeks | months | years
    is_cancelled: bool = False


@dataclass(frozen=True)
class IncomeSource:
    name: str
    amount_cents: int
    frequency: str = "monthly"


@dataclass(frozen=True)
class BudgetCategory:
    name: str
    monthly_target_cents: int


@dataclass(frozen=True)
class SavingsGoal:
    name: str
    target_cents: int
    current_cents: int = 0


@dataclass(frozen=True)
class FinancialConfig:
    """User-level settings shared by every engine call"""

    weekly_spend_allowance_cents: int = 0
    emergency_floor_cents: int = 0
    default_apr_bps: int = 2499
    payday: Optional[str] = None  # weekday name, e.g. "friday"
    pay_frequency: Optional[str] = None  # weekly | bi-weekly | semi-monthly | monthly
    paycheck_standard_cents: int = 0

    # FIRE assumptions
    fire_safe_withdrawal_bps: int = 400
    fire_expected_return_bps: int = 700
    fire_inflation_bps: int = 250

    budget_categories: Tuple[BudgetCategory, ...] = ()
    non_card_debts: Tuple[NonCardDebt, ...] = ()
    income_sources: Tuple[IncomeSource, ...] = ()
    savings_goals: Tuple[SavingsGoal, ...] = ()

    # Manually mirrored investment balances
    investment_brokerage_cents: int = 0
    investment_roth_cents: int = 0
    k401_balance_cents: int = 0
    hsa_balance_cents: int = 0

    tax_withholding_bps: int = 0  # passed through, never applied


@dataclass(frozen=True)
class Snapshot:
    """Point-in-time balances for one planning call"""

    snapshot_date: date
    checking_cents: int = 0
    savings_cents: int = 0
    cards: Tuple[Card, ...] = ()
    renewals: Tuple[Renewal, ...] = ()
    non_card_debts: Optional[Tuple[NonCardDebt, ...]] = None  # None: use the config's list


@dataclass(frozen=True)
class Debt:
    """Unified ranking view over cards and non-card debts"""

    id: str
    name: str
    kind: str  # "card" or "loan"
    balance_cents: int
    apr_bps: int
    min_payment_cents: int
    due_day: Optional[int] = None
    promo_apr_expires: Optional[date] = None


@dataclass(frozen=True)
class TimeCriticalItem:
    """Obligation due before the next paycheck"""

    name: str
    amount_cents: int
    due: date
    kind: str  # "bill" or "minimum"


@dataclass(frozen=True)
class DebtRecommendation:
    """Debt chosen to receive this cycle's surplus"""

    debt_id: str
    name: str
    method: str  # promo-sprint | cfi-override | avalanche
    amount_cents: int
    promo_days_remaining: Optional[int] = None


@dataclass(frozen=True)
class StrategyResult:
    """Funding plan for the current pay cycle"""

    snapshot_date: date
    next_payday: date
    days_to_next_paycheck: int
    floor_cents: int
    time_critical_cents: int
    time_critical_minimums_cents: int
    time_critical_items: Tuple[TimeCriticalItem, ...]
    total_minimums_cents: int
    required_transfer_cents: int
    is_negative_cash_flow: bool
    operational_surplus_cents: int
    cfi_threshold: int
    recommendation: Optional[DebtRecommendation] = None
    tax_withholding_bps: int = 0

    @property
    def method(self) -> Optional[str]:
        return self.recommendation.method if self.recommendation else None

    @property
    def recommended_amount_cents(self) -> int:
        return self.recommendation.amount_cents if self.recommendation else 0


@dataclass(frozen=True)
class FireProjectionResult:
    """Financial independence projection, or an unreachable classification"""

    status: str  # "ok" | "unreachable"
    reason: Optional[str]
    annual_income_cents: int
    annual_expenses_cents: int
    annual_savings_cents: int
    savings_rate_bps: Optional[int]
    current_portfolio_cents: int
    target_portfolio_cents: int
    safe_withdrawal_bps: int
    expected_return_bps: int
    inflation_bps: int
    real_return_bps: Optional[int] = None
    projected_years_to_fire: Optional[float] = None
    projected_fire_date: Optional[date] = None
    savings_goals_remaining_cents: int = 0


@dataclass(frozen=True)
class TimelinePoint:
    month: int
    remaining_cents: int
    interest_cents: int


@dataclass(frozen=True)
class SimulationResult:
    """Month-by-month payoff outcome under one strategy"""

    strategy: str
    months: int
    total_interest_cents: int
    timeline: List[TimelinePoint] = field(default_factory=list)
    capped: bool = False

    @property
    def duration_label(self) -> str:
        if self.capped:
            return "30y+"
        years, months = divmod(self.months, 12)
        if years and months:
            return f"{years}y {months}m"
        if years:
            return f"{years}y"
        return f"{months}m"
