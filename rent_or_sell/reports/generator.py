# rent_or_sell/reports/generator.py
from __future__ import annotations

import math
from collections.abc import Sequence
from pathlib import Path

from rent_or_sell.schemas.models import (
    ChartSeries,
    ProjectionSummary,
    ScenarioInputs,
    YearResult,
)


def fmt_currency(x: float) -> str:
    """
    Format a float as whole-dollar USD with thousands separators.

    Example:
        123456.789 -> $123,457
        -2000 -> -$2,000
        -0.4 -> $0 (no negative zero)
        inf / nan -> n/a
    """
    if not math.isfinite(x):
        return "n/a"
    # half away from zero, like Intl.NumberFormat
    whole = math.floor(abs(x) + 0.5)
    sign = "-" if x < 0 and whole else ""
    return f"{sign}${whole:,}"


def _fmt_pct(x: float) -> str:
    """
    Format a percent value (already ×100) with up to two decimals.

    Example:
        4.25 -> 4.25%
        3.0 -> 3%
    """
    return f"{x:.2f}".rstrip("0").rstrip(".") + "%"


def _section(title: str) -> str:
    """
    Render a level-2 heading for Markdown sections.
    """
    return f"\n## {title}\n"


def _option_label(option: str) -> str:
    return "Rent" if option == "hold" else "Sell"


# -----------------------
# Header & top sections
# -----------------------


def _render_header(fi: ScenarioInputs, title: str | None = None) -> str:
    years = fi.years_to_hold
    return f"# {title or 'Rent vs. Sell Analysis'}\n\nHolding horizon: **{years} year{'s' if years != 1 else ''}**\n"


def _render_inputs(fi: ScenarioInputs, monthly_payment: float) -> str:
    """
    Recap of the validated inputs the projection ran on.
    """
    lines = [
        _section("Inputs"),
        f"- **Purchase Price:** {fmt_currency(fi.purchase_price)}",
        f"- **Current Home Value:** {fmt_currency(fi.current_home_value)}",
        f"- **Loan:** {fmt_currency(fi.original_loan_amount)} at {_fmt_pct(fi.interest_rate)} "
        f"for {fi.mortgage_term} years, originated {fi.loan_origin_date.isoformat()}",
        f"- **Monthly P&I:** {fmt_currency(monthly_payment)}",
        f"- **Primary Residence:** {'Yes' if fi.primary_residence else 'No'}",
        f"- **Monthly HOA / Taxes / Insurance / Maintenance:** {fmt_currency(fi.monthly_hoa)} / "
        f"{fmt_currency(fi.monthly_taxes)} / {fmt_currency(fi.monthly_insurance)} / {fmt_currency(fi.monthly_maintenance)}",
        f"- **Monthly Rent:** {fmt_currency(fi.rental_price)} (+{_fmt_pct(fi.annual_rent_increase)}/yr from Year 2)",
        f"- **Management Fee / Rental Tax:** {_fmt_pct(fi.property_mgmt_fee)} / {_fmt_pct(fi.rental_tax_rate)}",
        f"- **Appreciation / Cost Inflation:** {_fmt_pct(fi.home_appreciation)} / {_fmt_pct(fi.cost_inflation)}",
        f"- **Selling Fees / Capital Gains Tax:** {_fmt_pct(fi.selling_fees)} / {_fmt_pct(fi.capital_gains_tax)}",
        f"- **Investment Return:** {_fmt_pct(fi.investment_return)}",
    ]
    return "\n".join(lines) + "\n"


def _render_summary(summary: ProjectionSummary) -> str:
    """
    End-of-horizon comparison block.
    """
    lines = [
        _section(f"Summary at Year {summary.final_year}"),
        f"- **Rent Now + Sell Later:** {fmt_currency(summary.hold_net_worth)}",
        f"- **Sell Now + Invest Proceeds:** {fmt_currency(summary.sell_value)}",
        f"- **Difference (Rent - Sell):** {fmt_currency(summary.difference)}",
        f"- **Better Option:** {_option_label(summary.better_option)}",
    ]
    return "\n".join(lines) + "\n"


def _render_methodology() -> str:
    """
    Describe the two tracks and flag the simplified tax rules.
    """
    lines = [
        _section("Methodology"),
        "**Rent Now + Sell Later** = after-tax sale proceeds in that year + rental cash flow accumulated "
        "since Year 1. Year 0 shows $0 unless selling today would be underwater.",
        "",
        "**Sell Now + Invest Proceeds** = Year 0 after-tax proceeds grown at the investment return. "
        "A negative Year 0 figure is carried flat, not compounded.",
        "",
        "**Approximations** (not tax advice):",
        "- Capital gain is sale price minus purchase price; improvements are ignored.",
        "- A primary residence sold within 3 years excludes the first $500,000 of gain "
        "(a proxy for the 2-of-5-years rule).",
        "- No capital-gains tax is charged on an underwater sale.",
        "- Rental losses carry no tax benefit.",
    ]
    return "\n".join(lines) + "\n"


# -----------------------
# Year table
# -----------------------


def _render_year_table(years: Sequence[YearResult]) -> str:
    """
    One row per year, every money column currency-formatted.

    Columns:
      Year | Home Value | Loan Balance | Equity | Selling Costs | Cap Gains Tax |
      Net Proceeds | Rental CF | Cumulative CF | Rent + Sell Later | Sell + Invest | Better
    """
    header = [
        _section("Year-by-Year Projection"),
        "| Year | Home Value | Loan Balance | Equity | Selling Costs | Cap Gains Tax | Net Proceeds "
        "| Rental CF | Cumulative CF | Rent + Sell Later | Sell + Invest | Better |",
        "| ---: | ---: | ---: | ---: | ---: | ---: | ---: | ---: | ---: | ---: | ---: | :---: |",
    ]
    rows = []
    for y in years:
        rows.append(
            f"| {y.year} "
            f"| {fmt_currency(y.home_value)} "
            f"| {fmt_currency(y.loan_balance)} "
            f"| {fmt_currency(y.equity)} "
            f"| {fmt_currency(y.selling_costs)} "
            f"| {fmt_currency(y.capital_gains_tax_owed)} "
            f"| {fmt_currency(y.net_after_tax_proceeds)} "
            f"| {fmt_currency(y.net_rental_cash_flow)} "
            f"| {fmt_currency(y.cumulative_rental_cash_flow)} "
            f"| {fmt_currency(y.hold_net_worth)} "
            f"| {fmt_currency(y.sell_trajectory_value)} "
            f"| {_option_label(y.better_option)} |"
        )
    return "\n".join(header + rows) + "\n"


def _render_share(share_query: str | None) -> str:
    if not share_query:
        return ""
    return _section("Share") + f"\n`?{share_query}`\n"


# -----------------------
# Chart series
# -----------------------


def build_chart_series(years: Sequence[YearResult]) -> ChartSeries:
    """
    Two series indexed by year: hold net worth and the sell trajectory. Hold-series
    tooltips carry that year's monthly rent and expenses.
    """
    return ChartSeries(
        labels=[f"Year {y.year}" for y in years],
        hold=[y.hold_net_worth for y in years],
        sell=[y.sell_trajectory_value for y in years],
        tooltips=[
            [
                f"Monthly Rent: {fmt_currency(y.monthly_breakdown.rent)}",
                f"Monthly Expenses: {fmt_currency(y.monthly_breakdown.expenses)}",
            ]
            for y in years
        ],
    )


def write_chart_json(path: str | Path, series: ChartSeries) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(series.model_dump_json(indent=2), encoding="utf-8")


# -----------------------
# Orchestration
# -----------------------


def generate_report(
    inputs: ScenarioInputs,
    years: Sequence[YearResult],
    summary: ProjectionSummary,
    *,
    share_query: str | None = None,
    title_override: str | None = None,
) -> str:
    """
    Generate the Markdown report for one projection.

    Sections:
      - Header: holding horizon
      - Summary: end-of-horizon values, difference and better option
      - Inputs: validated values the projection ran on
      - Methodology: how each track is built and which rules are approximations
      - Year-by-Year Projection: one row per year
      - Share: query string that restores the scenario (if provided)
    """
    parts = [
        _render_header(inputs, title_override),
        _render_summary(summary),
        _render_inputs(inputs, summary.monthly_payment),
        _render_methodology(),
        _render_year_table(years),
        _render_share(share_query),
    ]
    return "\n".join(p for p in parts if p).rstrip() + "\n"


def write_report(
    path: str | Path,
    inputs: ScenarioInputs,
    years: Sequence[YearResult],
    summary: ProjectionSummary,
    *,
    share_query: str | None = None,
) -> None:
    """
    Write the Markdown report to disk, creating parent directories.
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(generate_report(inputs, years, summary, share_query=share_query), encoding="utf-8")
