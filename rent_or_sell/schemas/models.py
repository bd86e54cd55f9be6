# rent_or_sell/schemas/models.py

from __future__ import annotations

from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

BetterOption = Literal["hold", "sell"]

# =========================
# Core inputs
# =========================


class ScenarioInputs(BaseModel):
    """
    Validated snapshot of every form field for one calculation run.

    Percent fields are entered as percents (4 = 4%), exactly as the form shows them.
    Range checks live in the normalizer (rent_or_sell.core.normalize); the engine
    assumes every value here is already within its documented bounds.
    """

    model_config = ConfigDict(frozen=True)

    # Purchase & loan
    purchase_price: float = Field(..., description="Original purchase price; the capital-gains basis.")
    current_home_value: float = Field(..., description="Today's market value of the home.")
    loan_origin_date: date = Field(..., description="Date the mortgage was originated.")
    original_loan_amount: float = Field(..., description="Original loan principal.")
    interest_rate: float = Field(..., description="Annual interest rate in percent (e.g., 4 = 4%).")
    mortgage_term: int = Field(30, ge=1, description="Mortgage term in years.")
    primary_residence: bool = Field(False, description="Whether the home is the owner's primary residence.")

    # Monthly carrying costs (inflated by cost_inflation each year)
    monthly_hoa: float = Field(0.0, description="Monthly HOA dues.")
    monthly_taxes: float = Field(0.0, description="Monthly property taxes.")
    monthly_insurance: float = Field(0.0, description="Monthly homeowner's insurance.")
    monthly_maintenance: float = Field(0.0, description="Monthly maintenance allowance.")

    # Rental
    rental_price: float = Field(0.0, description="Monthly rent at the start of the hold.")
    annual_rent_increase: float = Field(0.0, description="Annual rent growth in percent, applied from Year 2.")
    property_mgmt_fee: float = Field(0.0, description="Property management fee as a percent of rent.")
    rental_tax_rate: float = Field(0.0, description="Income tax rate in percent on positive rental profit.")

    # Market & sale
    home_appreciation: float = Field(0.0, description="Annual home appreciation in percent (may be negative).")
    cost_inflation: float = Field(0.0, description="Annual inflation in percent for taxes, insurance, HOA and maintenance.")
    selling_fees: float = Field(0.0, description="Selling costs as a percent of sale price.")
    capital_gains_tax: float = Field(0.0, description="Capital-gains tax rate in percent.")
    investment_return: float = Field(0.0, description="Annual return in percent on invested sale proceeds.")
    years_to_hold: int = Field(10, ge=1, description="Holding horizon in years.")


# =========================
# Computed outputs
# =========================


class MonthlyBreakdown(BaseModel):
    """Monthly rent vs. all-in monthly expenses for one year (display only)."""

    model_config = ConfigDict(frozen=True)

    rent: float = Field(0.0, description="Monthly rent charged in this year.")
    expenses: float = Field(0.0, description="P&I + inflated carrying costs + management fee, per month.")


class YearResult(BaseModel):
    """
    One row per projected year (0..years_to_hold). Year 0 is the decision point.
    """

    model_config = ConfigDict(frozen=True)

    year: int = Field(..., description="Year index; 0 is today.")
    home_value: float = Field(..., description="Appreciated home value.")
    loan_balance: float = Field(..., description="Remaining principal, never negative.")
    equity: float = Field(..., description="home_value - loan_balance (may be negative).")

    # Hold path
    net_rental_cash_flow: float = Field(..., description="After-tax rental cash flow for this year (0 at Year 0).")
    cumulative_rental_cash_flow: float = Field(..., description="Rental cash flow summed over Years 1..year.")
    hold_net_worth: float = Field(..., description="Cash out at this year plus cumulative rental cash flow.")

    # Sale path
    selling_costs: float = Field(..., description="home_value × selling fee.")
    capital_gain: float = Field(..., description="home_value - purchase_price (improvements ignored).")
    capital_gains_tax_owed: float = Field(..., description="Tax owed on the gain under the simplified exemption rules.")
    net_sale_proceeds: float = Field(..., description="home_value - loan_balance - selling_costs (may be negative).")
    net_after_tax_proceeds: float = Field(..., description="net_sale_proceeds - capital_gains_tax_owed.")
    sell_trajectory_value: float = Field(..., description="Year-0 proceeds grown at the investment return (held flat if negative).")

    better_option: BetterOption = Field(..., description='"hold" when hold_net_worth beats the sell trajectory; ties go to "sell".')
    monthly_breakdown: MonthlyBreakdown = Field(default_factory=MonthlyBreakdown)


class ProjectionSummary(BaseModel):
    """End-of-horizon comparison, built from the final YearResult only."""

    model_config = ConfigDict(frozen=True)

    final_year: int
    hold_net_worth: float = Field(..., description="Rent Now + Sell Later at the final year.")
    sell_value: float = Field(..., description="Sell Now + Invest Proceeds at the final year.")
    difference: float = Field(..., description="hold_net_worth - sell_value.")
    better_option: BetterOption
    monthly_payment: float = Field(0.0, description="Fixed monthly P&I for the original loan.")


class ChartSeries(BaseModel):
    """Two line series indexed by year, plus tooltip lines for the hold series."""

    labels: list[str] = Field(default_factory=list, description='X-axis labels ("Year 0", "Year 1", ...).')
    hold_label: str = "Cash Out + Rent P/L"
    sell_label: str = "Sell Now + Invest Proceeds"
    hold: list[float] = Field(default_factory=list)
    sell: list[float] = Field(default_factory=list)
    tooltips: list[list[str]] = Field(default_factory=list, description="Per-year monthly rent/expense lines.")


class RecalcResult(BaseModel):
    """Everything one recalculation produces for the rendering layer."""

    model_config = ConfigDict(frozen=True)

    inputs: ScenarioInputs
    years: tuple[YearResult, ...]
    summary: ProjectionSummary
    form: dict[str, str] = Field(default_factory=dict, description="Canonical (repaired) form values.")
    repaired: list[str] = Field(default_factory=list, description="Form keys whose values were repaired.")
    share_query: str = Field("", description="Query string that restores this scenario.")
