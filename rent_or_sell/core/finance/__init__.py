# rent_or_sell/core/finance/__init__.py

from .amortization import (
    compute_monthly_payment,
    compute_remaining_balance,
    monthly_rate,
    months_elapsed_since_origination,
)
from .engine import ProjectionState, derive_year, project
from .summary import summarize

__all__ = [
    "project",
    "derive_year",
    "ProjectionState",
    "summarize",
    "compute_monthly_payment",
    "compute_remaining_balance",
    "monthly_rate",
    "months_elapsed_since_origination",
]
