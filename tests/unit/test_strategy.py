"""Unit tests for the pay-cycle strategy engine"""

import pytest
from dataclasses import replace
from datetime import date
from catalyst_engine.domain.models import Debt
from catalyst_engine.domain.ranking import avalanche_key
from catalyst_engine.domain.strategy import StrategyTuning, cfi_threshold, plan_cycle
from conftest import make_card, make_loan, make_renewal, make_snapshot


def test_floor_and_surplus(base_config):
    """Floor = allowance + emergency; surplus is cash above it"""
    result = plan_cycle(base_config, make_snapshot(checking=2500, savings=500))

    assert result.floor_cents == 120_000
    assert result.next_payday == date(2024, 1, 5)
    assert result.days_to_next_paycheck == 4
    assert result.operational_surplus_cents == 130_000
    assert result.is_negative_cash_flow is False
    assert result.required_transfer_cents == 0
    assert result.recommendation is None
    assert result.recommended_amount_cents == 0


def test_insolvency_transfer(base_config):
    """Shortfall below the floor is pulled from savings"""
    snapshot = make_snapshot(
        checking=1100,
        savings=5000,
        renewals=[make_renewal("Rent", 1500, date(2024, 1, 3))],
    )
    result = plan_cycle(base_config, snapshot)

    assert result.time_critical_cents == 150_000
    # cash above floor = -100, so 1500 - (-100) = 1600
    assert result.required_transfer_cents == 160_000
    assert result.is_negative_cash_flow is True
    assert result.operational_surplus_cents == 0


def test_required_transfer_capped_at_savings(base_config):
    snapshot = make_snapshot(
        checking=1100,
        savings=100,
        renewals=[make_renewal("Rent", 1500, date(2024, 1, 3))],
    )
    result = plan_cycle(base_config, snapshot)

    assert result.required_transfer_cents == 10_000


def test_time_critical_vs_deferred_minimums(base_config):
    """Only minimums due before payday enter the gate; the rest still reduce surplus"""
    snapshot = make_snapshot(
        checking=2000,
        cards=[
            make_card("Card A", 500, 50, 0, due_day=3),  # inside the window
            make_card("Card B", 1000, 100, 0, due_day=20),  # outside the window
        ],
    )
    result = plan_cycle(base_config, snapshot)

    assert result.time_critical_cents == 5_000
    assert result.time_critical_minimums_cents == 5_000
    assert result.total_minimums_cents == 15_000
    assert [item.name for item in result.time_critical_items] == ["Card A Minimum"]
    assert result.time_critical_items[0].due == date(2024, 1, 3)
    # 800 above floor - 50 critical - 100 deferred
    assert result.operational_surplus_cents == 65_000


def test_gate_skips_card_charged_cancelled_and_late_bills(base_config):
    snapshot = make_snapshot(
        checking=3000,
        cards=[make_card("Visa", 0, 0, 20)],
        renewals=[
            make_renewal("Streaming", 20, date(2024, 1, 2), charged_to="visa"),
            make_renewal("Gym", 40, date(2024, 1, 2), is_cancelled=True),
            make_renewal("Insurance", 200, date(2024, 1, 20)),
            make_renewal("Phone", 80, date(2024, 1, 4)),
            make_renewal("Overdue Water", 30, date(2023, 12, 28)),
        ],
    )
    result = plan_cycle(base_config, snapshot)

    assert [item.name for item in result.time_critical_items] == ["Overdue Water", "Phone"]
    assert result.time_critical_cents == 11_000
    assert result.time_critical_minimums_cents == 0


def test_non_card_debt_minimum_in_gate(base_config):
    config = replace(base_config, non_card_debts=(make_loan("Car Loan", 10000, 300, 8, due_day=3),))
    result = plan_cycle(config, make_snapshot(checking=1800))

    assert result.time_critical_cents == 30_000
    assert result.recommendation.name == "Car Loan"
    assert result.recommended_amount_cents == 30_000


def test_snapshot_loans_replace_config_loans(base_config):
    config = replace(base_config, non_card_debts=(make_loan("Old Loan", 5000, 100, 5),))
    snapshot = make_snapshot(checking=5000, non_card_debts=(make_loan("Student Loan", 8000, 90, 6),))
    result = plan_cycle(config, snapshot)

    assert result.recommendation.name == "Student Loan"


def test_promo_sprint_beats_higher_apr(base_config):
    snapshot = make_snapshot(
        checking=5000,
        cards=[
            make_card("Target Promo", 1000, 50, 20, has_promo_apr=True, promo_apr_expires=date(2024, 2, 1)),
            make_card("High APR", 2000, 100, 28),
        ],
    )
    result = plan_cycle(base_config, snapshot)

    assert result.method == "promo-sprint"
    assert result.recommendation.name == "Target Promo"
    assert result.recommendation.promo_days_remaining == 31
    assert result.recommended_amount_cents == 100_000  # never more than the balance


def test_promo_outside_window_is_ignored(base_config):
    snapshot = make_snapshot(
        checking=5000,
        cards=[
            make_card("Far Promo", 10000, 100, 20, has_promo_apr=True, promo_apr_expires=date(2024, 6, 1)),
            make_card("Expired Promo", 10000, 100, 18, has_promo_apr=True, promo_apr_expires=date(2024, 1, 1)),
            make_card("High APR", 10000, 100, 28),
        ],
    )
    result = plan_cycle(base_config, snapshot)

    assert result.method == "avalanche"
    assert result.recommendation.name == "High APR"


def test_promo_window_is_tunable(base_config):
    snapshot = make_snapshot(
        checking=5000,
        cards=[
            make_card("Far Promo", 10000, 100, 20, has_promo_apr=True, promo_apr_expires=date(2024, 6, 1)),
            make_card("High APR", 10000, 100, 28),
        ],
    )
    result = plan_cycle(base_config, snapshot, StrategyTuning(promo_window_days=180))

    assert result.method == "promo-sprint"
    assert result.recommendation.name == "Far Promo"


def test_most_urgent_promo_wins(base_config):
    """urgency = balance * APR / days; 3000*25/60 beats 1000*20/31"""
    snapshot = make_snapshot(
        checking=9000,
        cards=[
            make_card("Soon Small", 1000, 50, 20, has_promo_apr=True, promo_apr_expires=date(2024, 2, 1)),
            make_card("Later Big", 3000, 50, 25, has_promo_apr=True, promo_apr_expires=date(2024, 3, 1)),
        ],
    )
    result = plan_cycle(base_config, snapshot)

    assert result.recommendation.name == "Later Big"
    assert result.recommendation.promo_days_remaining == 60


def test_equal_promo_urgency_goes_to_fewer_days(base_config):
    """1000*20%/30 days == 1000*40%/60 days; the sooner expiry wins over the higher APR"""
    snapshot = make_snapshot(
        checking=9000,
        cards=[
            make_card("Late Promo", 1000, 50, 40, has_promo_apr=True, promo_apr_expires=date(2024, 3, 1)),
            make_card("Early Promo", 1000, 50, 20, has_promo_apr=True, promo_apr_expires=date(2024, 1, 31)),
        ],
    )
    result = plan_cycle(base_config, snapshot)

    assert result.method == "promo-sprint"
    assert result.recommendation.name == "Early Promo"
    assert result.recommendation.promo_days_remaining == 30


def test_equal_cfi_ratio_breaks_on_apr_then_balance(base_config):
    """1000/50 and 2000/100 share a ratio of 20"""
    by_apr = make_snapshot(
        checking=9000,
        cards=[
            make_card("Small Low APR", 1000, 50, 15),
            make_card("Large High APR", 2000, 100, 22),
        ],
    )
    by_balance = make_snapshot(
        checking=9000,
        cards=[
            make_card("Large", 2000, 100, 20),
            make_card("Small", 1000, 50, 20),
        ],
    )

    apr_result = plan_cycle(base_config, by_apr)
    balance_result = plan_cycle(base_config, by_balance)

    assert apr_result.method == "cfi-override"
    assert apr_result.recommendation.name == "Large High APR"
    assert balance_result.method == "cfi-override"
    assert balance_result.recommendation.name == "Small"


def test_cfi_override_beats_apr(base_config):
    snapshot = make_snapshot(
        checking=5000,
        cards=[
            make_card("Low CFI", 500, 25, 15),  # CFI 20
            make_card("High APR", 3000, 100, 28),  # CFI 30
        ],
    )
    result = plan_cycle(base_config, snapshot)

    assert result.cfi_threshold == 50
    assert result.method == "cfi-override"
    assert result.recommendation.name == "Low CFI"


def test_avalanche_when_nothing_overrides(base_config):
    snapshot = make_snapshot(
        checking=5000,
        cards=[
            make_card("Big Balance", 5000, 100, 19),  # CFI 50
            make_card("High APR", 10000, 200, 28),  # CFI 50
        ],
    )
    result = plan_cycle(base_config, snapshot)

    assert result.method == "avalanche"
    assert result.recommendation.name == "High APR"


def test_cfi_threshold_follows_pay_frequency(base_config):
    """CFI 33: beats the weekly 50x threshold, not the monthly 25x one"""
    cards = [make_card("Mid CFI", 1000, 30, 10), make_card("High APR", 20000, 100, 29)]

    weekly = plan_cycle(replace(base_config, pay_frequency="weekly"), make_snapshot(checking=9000, cards=cards))
    monthly = plan_cycle(replace(base_config, pay_frequency="monthly"), make_snapshot(checking=9000, cards=cards))

    assert weekly.method == "cfi-override"
    assert weekly.recommendation.name == "Mid CFI"
    assert monthly.method == "avalanche"
    assert monthly.recommendation.name == "High APR"


@pytest.mark.parametrize(
    "frequency, days, expected",
    [
        ("weekly", 30, 50),
        ("bi-weekly", 1, 35),
        ("Semi-Monthly", 1, 30),
        ("monthly", 1, 25),
        (None, 4, 50),
        (None, 8, 50),
        (None, 9, 35),
        (None, 16, 35),
        (None, 17, 25),
        ("fortnightly", 12, 35),
    ],
)
def test_cfi_threshold_table(frequency, days, expected):
    assert cfi_threshold(frequency, days) == expected


def test_no_surplus_no_target(base_config):
    snapshot = make_snapshot(checking=1200, cards=[make_card("High APR", 10000, 200, 28)])
    result = plan_cycle(base_config, snapshot)

    assert result.operational_surplus_cents == 0
    assert result.recommendation is None
    assert result.method is None
    assert result.recommended_amount_cents == 0


def test_apr_tie_breaks_on_minimum_then_name(base_config):
    """Same APR and balance: higher minimum wins, then name"""
    by_minimum = make_snapshot(
        checking=9000,
        cards=[make_card("Alpha Card", 10000, 50, 20), make_card("Beta Card", 10000, 80, 20)],
    )
    by_name = make_snapshot(
        checking=9000,
        cards=[make_card("beta card", 10000, 80, 20), make_card("Alpha Card", 10000, 80, 20)],
    )

    assert plan_cycle(base_config, by_minimum).recommendation.name == "Beta Card"
    assert plan_cycle(base_config, by_name).recommendation.name == "Alpha Card"


def test_avalanche_key_is_total():
    debts = [
        Debt("b", "Same", "card", 1000, 2000, 50),
        Debt("a", "same", "card", 1000, 2000, 50),
        Debt("c", "Lower APR", "card", 10, 1000, 50),
        Debt("d", "Smaller", "card", 900, 2000, 50),
    ]
    ordered = [d.id for d in sorted(debts, key=avalanche_key)]
    assert ordered == ["d", "a", "b", "c"]
    assert [d.id for d in sorted(reversed(debts), key=avalanche_key)] == ordered


def test_zero_minimum_never_cfi_target(base_config):
    snapshot = make_snapshot(
        checking=6000,
        cards=[make_card("No Minimum", 500, 0, 5), make_card("High APR", 3000, 100, 29)],
    )
    result = plan_cycle(base_config, snapshot)

    assert result.recommendation.name == "High APR"


def test_zero_minimum_debt_only_reachable_by_apr(base_config):
    snapshot = make_snapshot(
        checking=6000,
        cards=[make_card("No Minimum", 500, 0, 30), make_card("Slow Loan", 20000, 100, 10)],
    )
    result = plan_cycle(base_config, snapshot)

    assert result.recommendation.name == "No Minimum"
    assert result.method == "avalanche"


def test_plan_is_deterministic(base_config):
    cards = [
        make_card("A", 1000, 40, 22, due_day=2),
        make_card("B", 1000, 40, 22, due_day=4),
        make_card("C", 2500, 60, 17, has_promo_apr=True, promo_apr_expires=date(2024, 3, 15)),
    ]
    renewals = [make_renewal("Rent", 900, date(2024, 1, 3)), make_renewal("Power", 90, date(2024, 1, 3))]

    first = plan_cycle(base_config, make_snapshot(checking=4000, savings=300, cards=cards, renewals=renewals))
    second = plan_cycle(base_config, make_snapshot(checking=4000, savings=300, cards=cards, renewals=renewals))
    shuffled = plan_cycle(
        base_config,
        make_snapshot(checking=4000, savings=300, cards=reversed(cards), renewals=reversed(renewals)),
    )

    assert first == second
    assert shuffled == first


def test_missing_payday_uses_seven_days():
    from catalyst_engine.domain.models import FinancialConfig

    result = plan_cycle(FinancialConfig(), make_snapshot(checking=100))

    assert result.next_payday == date(2024, 1, 8)
    assert result.days_to_next_paycheck == 7
    assert result.cfi_threshold == 50
