"""Pydantic schemas for API request/response validation"""

from datetime import date
from decimal import Decimal
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

# User-entered numbers may arrive as text ("$1,234.56") or numbers
RawNumber = Optional[Union[int, float, str]]


class CardSchema(BaseModel):
    """Credit card as entered by the user"""

    id: Optional[str] = None
    name: Optional[str] = None
    balance: RawNumber = None
    apr: RawNumber = None
    min_payment: RawNumber = None
    due_day: RawNumber = None
    has_promo_apr: bool = False
    promo_apr_expires: Optional[str] = None


class NonCardDebtSchema(BaseModel):
    """Installment or personal loan"""

    id: Optional[str] = None
    name: Optional[str] = None
    balance: RawNumber = None
    apr: RawNumber = None
    minimum: RawNumber = None
    due_day: RawNumber = None


class RenewalSchema(BaseModel):
    """Recurring bill or subscription"""

    id: Optional[str] = None
    name: Optional[str] = None
    amount: RawNumber = None
    next_due: Optional[str] = None
    charged_to: Optional[str] = None
    interval: RawNumber = 1
    interval_unit: Optional[str] = None
    is_cancelled: bool = False


class IncomeSourceSchema(BaseModel):
    name: Optional[str] = None
    amount: RawNumber = None
    frequency: Optional[str] = None


class BudgetCategorySchema(BaseModel):
    name: Optional[str] = None
    monthly_target: RawNumber = None


class SavingsGoalSchema(BaseModel):
    name: Optional[str] = None
    target_amount: RawNumber = None
    current_amount: RawNumber = None


class FinancialConfigSchema(BaseModel):
    """User settings; percentages accept 4 or 0.04 for 4%"""

    weekly_spend_allowance: RawNumber = None
    emergency_floor: RawNumber = None
    default_apr: RawNumber = None
    payday: Optional[str] = None
    pay_frequency: Optional[str] = None
    paycheck_standard: RawNumber = None
    fire_safe_withdrawal_pct: RawNumber = None
    fire_expected_return_pct: RawNumber = None
    fire_inflation_pct: RawNumber = None
    arbitrage_target_apr: RawNumber = None
    budget_categories: List[BudgetCategorySchema] = Field(default_factory=list)
    non_card_debts: List[NonCardDebtSchema] = Field(default_factory=list)
    income_sources: List[IncomeSourceSchema] = Field(default_factory=list)
    savings_goals: List[SavingsGoalSchema] = Field(default_factory=list)
    investment_brokerage: RawNumber = None
    investment_roth: RawNumber = None
    k401_balance: RawNumber = None
    hsa_balance: RawNumber = None
    tax_withholding_rate: RawNumber = None


class SnapshotSchema(BaseModel):
    """Point-in-time balances; snapshot_date defaults to today"""

    snapshot_date: Optional[str] = None
    checking_balance: RawNumber = None
    savings_total: RawNumber = None
    cards: List[CardSchema] = Field(default_factory=list)
    renewals: List[RenewalSchema] = Field(default_factory=list)
    non_card_debts: Optional[List[NonCardDebtSchema]] = None


class StrategyRequest(BaseModel):
    """Request body for POST /v1/strategy"""

    config: FinancialConfigSchema = Field(default_factory=FinancialConfigSchema)
    snapshot: SnapshotSchema = Field(default_factory=SnapshotSchema)


class TimeCriticalItemSchema(BaseModel):
    name: str
    amount: Decimal
    due: date
    kind: str


class DebtStrategySchema(BaseModel):
    target_id: Optional[str] = None
    target: Optional[str] = None
    amount: Decimal
    method: Optional[str] = None
    promo_days_remaining: Optional[int] = None


class StrategyResponse(BaseModel):
    """Response for POST /v1/strategy (dollars)"""

    snapshot_date: date
    next_payday: date
    days_to_next_paycheck: int
    total_checking_floor: Decimal
    time_critical_amount: Decimal
    time_critical_items: List[TimeCriticalItemSchema]
    required_transfer: Decimal
    is_negative_cash_flow: bool
    operational_surplus: Decimal
    cfi_threshold: int
    tax_withholding_pct: Decimal
    debt_strategy: DebtStrategySchema


class FireRequest(BaseModel):
    """Request body for POST /v1/fire"""

    config: FinancialConfigSchema = Field(default_factory=FinancialConfigSchema)
    renewals: List[RenewalSchema] = Field(default_factory=list)
    cards: List[CardSchema] = Field(default_factory=list)
    portfolio_value: RawNumber = None
    as_of_date: Optional[str] = None


class FireProjectionResponse(BaseModel):
    """Response for POST /v1/fire (dollars and percents)"""

    status: str
    reason: Optional[str] = None
    annual_income: Decimal
    annual_expenses: Decimal
    annual_savings: Decimal
    savings_rate_pct: Optional[Decimal] = None
    current_portfolio: Decimal
    target_portfolio: Decimal
    safe_withdrawal_pct: Decimal
    expected_return_pct: Decimal
    inflation_pct: Decimal
    real_return_pct: Optional[Decimal] = None
    projected_years_to_fire: Optional[float] = None
    projected_fire_date: Optional[date] = None
    savings_goals_remaining: Decimal = Decimal("0.00")


class SimulationRequest(BaseModel):
    """Request body for POST /v1/simulation"""

    cards: List[CardSchema] = Field(default_factory=list)
    non_card_debts: List[NonCardDebtSchema] = Field(default_factory=list)
    extra_monthly: RawNumber = 0
    strategy: Literal["avalanche", "snowball"] = "avalanche"


class CompareRequest(BaseModel):
    """Request body for POST /v1/simulation/compare"""

    cards: List[CardSchema] = Field(default_factory=list)
    non_card_debts: List[NonCardDebtSchema] = Field(default_factory=list)
    extra_monthly: RawNumber = 0


class TimelinePointSchema(BaseModel):
    month: int
    total_debt: Decimal
    interest: Decimal


class SimulationResponse(BaseModel):
    """Response for POST /v1/simulation"""

    strategy: str
    months: int
    duration: str
    capped: bool
    total_interest: Decimal
    timeline: List[TimelinePointSchema]


class CompareResponse(BaseModel):
    """Response for POST /v1/simulation/compare; no strategy is ranked"""

    results: Dict[str, SimulationResponse]
