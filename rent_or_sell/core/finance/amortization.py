# rent_or_sell/core/finance/amortization.py

from __future__ import annotations

from datetime import date

# Months between origination and the first scheduled payment (~45 days).
FIRST_PAYMENT_GAP_MONTHS = 1


def monthly_rate(annual_rate_percent: float) -> float:
    """Convert an annual percent (e.g., 4 = 4%) to a monthly fraction."""
    return annual_rate_percent / 100.0 / 12.0


def compute_monthly_payment(principal: float, annual_rate_percent: float, term_years: int) -> float:
    """
    Level monthly P&I payment for a fully amortizing loan.

        M = P * [r(1+r)^n] / [(1+r)^n - 1],  r = rate/100/12, n = years*12

    A zero rate (or one too small to move 1 + r off 1.0) pays the principal off in
    equal installments.
    """
    n = term_years * 12
    r = monthly_rate(annual_rate_percent)
    factor = (1.0 + r) ** n
    if factor == 1.0:
        return principal / n
    return principal * (r * factor) / (factor - 1.0)


def compute_remaining_balance(principal: float, rate: float, total_months: int, months_paid: int) -> float:
    """
    Remaining principal after `months_paid` level payments.

        B = P * [(1+r)^n - (1+r)^p] / [(1+r)^n - 1]

    Floored at 0: past payoff (months_paid > total_months) the balance reports zero,
    never negative debt.
    """
    factor = (1.0 + rate) ** total_months
    if factor == 1.0:
        return max(0.0, principal - (principal / total_months) * months_paid)

    paid_factor = (1.0 + rate) ** months_paid
    balance = principal * (factor - paid_factor) / (factor - 1.0)
    return max(0.0, balance)


def months_elapsed_since_origination(origination: date, as_of: date) -> int:
    """
    Payments made between origination and `as_of`.

    Counts whole calendar months (day of month ignored), then drops one month for
    the gap before the first payment is due. A loan originated 2022-07-19 has its
    first payment on 2022-09-01, so as of 2022-09 one payment has been made.
    """
    months = (as_of.year - origination.year) * 12 + (as_of.month - origination.month)
    return max(0, months - FIRST_PAYMENT_GAP_MONTHS)
