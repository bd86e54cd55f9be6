# rent_or_sell/core/finance/engine.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from rent_or_sell.schemas.models import BetterOption, MonthlyBreakdown, ScenarioInputs, YearResult

from .amortization import (
    compute_monthly_payment,
    compute_remaining_balance,
    monthly_rate,
    months_elapsed_since_origination,
)

# Simplified stand-ins for the primary-residence exclusion: a flat married-filing-jointly
# cap, and "sold within 3 years" as a proxy for the 2-of-5-years occupancy test.
PRIMARY_RESIDENCE_EXEMPTION_CAP = 500_000.0
PRIMARY_RESIDENCE_WINDOW_YEARS = 3


@dataclass
class ProjectionState:
    """Running totals threaded through one projection, year over year."""

    cumulative_rental_cash_flow: float = 0.0
    sell_year0_baseline: float | None = None


def _grow(val: float, rate_percent: float, years: int) -> float:
    return val * ((1.0 + rate_percent / 100.0) ** years)


def capital_gains_tax_owed(
    capital_gain: float,
    net_sale_proceeds: float,
    *,
    tax_rate_percent: float,
    primary_residence: bool,
    year: int,
) -> float:
    """
    Tax on the sale gain under deliberately simplified rules (not tax law):
      - no gain, no tax
      - underwater sale (net proceeds < 0): no tax, there is no cash to pay it
      - primary residence sold within the window: first $500k of gain exempt
      - otherwise the full gain is taxed
    """
    if capital_gain <= 0:
        return 0.0
    if net_sale_proceeds < 0:
        return 0.0
    if primary_residence and year <= PRIMARY_RESIDENCE_WINDOW_YEARS:
        taxable_gain = max(0.0, capital_gain - PRIMARY_RESIDENCE_EXEMPTION_CAP)
        return taxable_gain * (tax_rate_percent / 100.0)
    return capital_gain * (tax_rate_percent / 100.0)


def sell_trajectory_value(baseline: float, investment_return_percent: float, year: int) -> float:
    """Year-0 proceeds invested for `year` years; a negative baseline stays flat (a loss does not compound)."""
    if baseline > 0:
        return _grow(baseline, investment_return_percent, year)
    return baseline


def derive_year(
    fi: ScenarioInputs,
    year: int,
    *,
    months_elapsed: int,
    monthly_payment: float,
    state: ProjectionState,
) -> YearResult:
    """
    Derive one year's row from the inputs and the running state.

    Updates `state` in place: adds this year's cash flow to the cumulative total and,
    at Year 0, captures the sell baseline.
    """
    # Property
    home_value = _grow(fi.current_home_value, fi.home_appreciation, year)
    loan_balance = compute_remaining_balance(
        fi.original_loan_amount,
        monthly_rate(fi.interest_rate),
        fi.mortgage_term * 12,
        months_elapsed + year * 12,
    )
    equity = home_value - loan_balance

    # Rental (rent growth starts in Year 2; Year 1 uses the entered rent)
    current_rent = _grow(fi.rental_price, fi.annual_rent_increase, max(0, year - 1))
    annual_rent = current_rent * 12.0
    annual_mgmt_fee = annual_rent * (fi.property_mgmt_fee / 100.0)

    # P&I is fixed; taxes, insurance, HOA and maintenance inflate
    carrying = fi.monthly_taxes + fi.monthly_insurance + fi.monthly_hoa + fi.monthly_maintenance
    monthly_ownership_cost = monthly_payment + _grow(carrying, fi.cost_inflation, year)
    annual_ownership_cost = monthly_ownership_cost * 12.0

    rental_profit = annual_rent - annual_mgmt_fee - annual_ownership_cost
    rental_tax = rental_profit * (fi.rental_tax_rate / 100.0) if rental_profit > 0 else 0.0

    # Year 0 is the decision point: no realized cash flow
    year_cash_flow = 0.0 if year == 0 else rental_profit - rental_tax
    state.cumulative_rental_cash_flow += year_cash_flow
    cumulative = 0.0 if year == 0 else state.cumulative_rental_cash_flow

    # Sale
    selling_costs = home_value * (fi.selling_fees / 100.0)
    net_sale_proceeds = home_value - loan_balance - selling_costs
    capital_gain = home_value - fi.purchase_price
    tax_owed = capital_gains_tax_owed(
        capital_gain,
        net_sale_proceeds,
        tax_rate_percent=fi.capital_gains_tax,
        primary_residence=fi.primary_residence,
        year=year,
    )
    net_after_tax = net_sale_proceeds - tax_owed

    if year == 0:
        state.sell_year0_baseline = net_after_tax
    baseline = state.sell_year0_baseline if state.sell_year0_baseline is not None else net_after_tax
    sell_value = sell_trajectory_value(baseline, fi.investment_return, year)

    # Year 0 shows no cash-out value unless the sale is underwater
    hold_net_worth = net_after_tax + cumulative
    if year == 0 and net_after_tax > 0:
        hold_net_worth = 0.0

    better: BetterOption = "hold" if hold_net_worth > sell_value else "sell"

    if year == 0:
        breakdown = MonthlyBreakdown(rent=0.0, expenses=0.0)
    else:
        breakdown = MonthlyBreakdown(rent=current_rent, expenses=monthly_ownership_cost + annual_mgmt_fee / 12.0)

    return YearResult(
        year=year,
        home_value=home_value,
        loan_balance=loan_balance,
        equity=equity,
        net_rental_cash_flow=year_cash_flow,
        cumulative_rental_cash_flow=cumulative,
        hold_net_worth=hold_net_worth,
        selling_costs=selling_costs,
        capital_gain=capital_gain,
        capital_gains_tax_owed=tax_owed,
        net_sale_proceeds=net_sale_proceeds,
        net_after_tax_proceeds=net_after_tax,
        sell_trajectory_value=sell_value,
        better_option=better,
        monthly_breakdown=breakdown,
    )


def project(fi: ScenarioInputs, *, as_of: date | None = None) -> tuple[YearResult, ...]:
    """
    Project hold vs. sell for Years 0..years_to_hold in a single forward pass.

    `as_of` is the reference "today" for counting payments already made; it defaults to
    the current date. Same inputs and same `as_of` give identical results.
    """
    today = as_of or date.today()
    months_elapsed = months_elapsed_since_origination(fi.loan_origin_date, today)
    payment = compute_monthly_payment(fi.original_loan_amount, fi.interest_rate, fi.mortgage_term)

    state = ProjectionState()
    return tuple(
        derive_year(fi, y, months_elapsed=months_elapsed, monthly_payment=payment, state=state)
        for y in range(0, fi.years_to_hold + 1)
    )
