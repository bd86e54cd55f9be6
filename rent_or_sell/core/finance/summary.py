# rent_or_sell/core/finance/summary.py
from __future__ import annotations

from collections.abc import Sequence

from rent_or_sell.schemas.models import ProjectionSummary, YearResult


def summarize(years: Sequence[YearResult], *, monthly_payment: float = 0.0) -> ProjectionSummary:
    """End-of-horizon comparison. Reads the final row only."""
    if not years:
        raise ValueError("summarize() needs at least one projected year")

    final = years[-1]
    return ProjectionSummary(
        final_year=final.year,
        hold_net_worth=final.hold_net_worth,
        sell_value=final.sell_trajectory_value,
        difference=final.hold_net_worth - final.sell_trajectory_value,
        better_option=final.better_option,
        monthly_payment=monthly_payment,
    )
