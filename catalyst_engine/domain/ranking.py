"""Total orders over debts - every ranking resolves to exactly one winner"""

from typing import Tuple
from catalyst_engine.domain.models import Debt


def _name_key(debt: Debt) -> Tuple[str, str]:
    return (debt.name or "").casefold(), debt.id or ""


def avalanche_key(debt: Debt) -> tuple:
    """APR desc -> balance asc -> minimum desc -> name -> id"""
    return (-debt.apr_bps, debt.balance_cents, -debt.min_payment_cents) + _name_key(debt)


def snowball_key(debt: Debt) -> tuple:
    """Balance asc -> APR desc -> minimum desc -> name -> id"""
    return (debt.balance_cents, -debt.apr_bps, -debt.min_payment_cents) + _name_key(debt)


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def compare_cfi(a: Debt, b: Debt) -> int:
    """
    Order by balance-to-minimum ratio ascending (lowest CFI first).

    Ratios are compared by cross-multiplication so no division happens.
    Both debts must have a positive minimum. Ties fall through to
    APR desc, balance asc, then name.
    """
    assert a.min_payment_cents > 0 and b.min_payment_cents > 0
    ratio = _sign(a.balance_cents * b.min_payment_cents - b.balance_cents * a.min_payment_cents)
    if ratio:
        return ratio
    if a.apr_bps != b.apr_bps:
        return -1 if a.apr_bps > b.apr_bps else 1
    if a.balance_cents != b.balance_cents:
        return -1 if a.balance_cents < b.balance_cents else 1
    a_key, b_key = _name_key(a), _name_key(b)
    return (a_key > b_key) - (a_key < b_key)


def compare_promo_urgency(
    a: Debt,
    a_apr_bps: int,
    a_days: int,
    b: Debt,
    b_apr_bps: int,
    b_days: int,
) -> int:
    """
    Order promo debts by urgency descending.

    urgency = balance * post-expiry APR / days-to-expiry, compared as
    a_num * b_days vs b_num * a_days. Ties go to fewer days remaining,
    then avalanche order.
    """
    assert a_days > 0 and b_days > 0
    a_urgency = a.balance_cents * a_apr_bps * b_days
    b_urgency = b.balance_cents * b_apr_bps * a_days
    if a_urgency != b_urgency:
        return -1 if a_urgency > b_urgency else 1
    if a_days != b_days:
        return -1 if a_days < b_days else 1
    a_key, b_key = avalanche_key(a), avalanche_key(b)
    return (a_key > b_key) - (a_key < b_key)
