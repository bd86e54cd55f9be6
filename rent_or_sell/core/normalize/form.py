# rent_or_sell/core/normalize/form.py
"""
Form normalizer (raw text fields → ScenarioInputs).

Policy: repair, don't reject. Every field comes in as text keyed by its form id
(the same keys the share link uses). Empty or unparseable numbers fall back to the
field default, out-of-range numbers are clamped to the nearest bound, and a missing,
malformed or future loan origination date becomes today. Nothing here raises for
any string input; repairs are logged at DEBUG.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from rent_or_sell.schemas.models import ScenarioInputs

logger = logging.getLogger(__name__)

# Ceiling for money amounts; keeps 30 years of growth well inside float range.
MONEY_MAX = 1e12


@dataclass(frozen=True)
class NumericField:
    key: str  # form id / query-string key
    attr: str  # ScenarioInputs attribute
    default: float
    lo: float
    hi: float = MONEY_MAX
    is_int: bool = False


# Numeric form fields: default for empty/unparseable input, then [lo, hi] clamp.
NUMERIC_FIELDS: tuple[NumericField, ...] = (
    NumericField("purchasePrice", "purchase_price", 300_000, 0),
    NumericField("originalLoanAmount", "original_loan_amount", 240_000, 0),
    NumericField("interestRate", "interest_rate", 4, 0, 30),
    NumericField("mortgageTerm", "mortgage_term", 30, 1, 50, is_int=True),
    NumericField("currentHomeValue", "current_home_value", 400_000, 0),
    NumericField("monthlyHOA", "monthly_hoa", 0, 0),
    NumericField("monthlyTaxes", "monthly_taxes", 0, 0),
    NumericField("monthlyInsurance", "monthly_insurance", 0, 0),
    NumericField("monthlyMaintenance", "monthly_maintenance", 0, 0),
    NumericField("rentalPrice", "rental_price", 2_000, 0),
    NumericField("annualRentIncrease", "annual_rent_increase", 3, 0, 20),
    NumericField("propertyMgmtFee", "property_mgmt_fee", 0, 0, 100),
    NumericField("rentalTaxRate", "rental_tax_rate", 0, 0, 100),
    NumericField("homeAppreciation", "home_appreciation", 3, -20, 30),
    NumericField("costInflation", "cost_inflation", 0, 0, 20),
    NumericField("sellingFees", "selling_fees", 6, 0, 100),
    NumericField("capitalGainsTax", "capital_gains_tax", 15, 0, 100),
    NumericField("investmentReturn", "investment_return", 5, -50, 50),
    NumericField("yearsToHold", "years_to_hold", 10, 1, 30, is_int=True),
)

DATE_KEY = "loanOriginDate"
PRIMARY_KEY = "primaryResidence"

# Every persisted key, in form order. The monthly P&I box is derived, never stored.
FORM_KEYS: tuple[str, ...] = (
    "purchasePrice",
    DATE_KEY,
    "originalLoanAmount",
    "interestRate",
    "mortgageTerm",
    PRIMARY_KEY,
    "currentHomeValue",
    "monthlyHOA",
    "monthlyTaxes",
    "monthlyInsurance",
    "monthlyMaintenance",
    "rentalPrice",
    "annualRentIncrease",
    "propertyMgmtFee",
    "rentalTaxRate",
    "homeAppreciation",
    "costInflation",
    "sellingFees",
    "capitalGainsTax",
    "investmentReturn",
    "yearsToHold",
)

_TRUTHY = {"yes", "true", "1", "on", "y"}
_FALSY = {"no", "false", "0", "off", "n"}


def parse_number(text: Any) -> float | None:
    """Lenient numeric parse: strips $, %, commas and spaces. None if not a finite number."""
    if text is None:
        return None
    if isinstance(text, bool):
        return None
    if isinstance(text, int | float):
        val = float(text)
        return val if math.isfinite(val) else None
    t = str(text).strip().replace("$", "").replace("%", "").replace(",", "").replace(" ", "").replace("\u00a0", "")
    if not t:
        return None
    try:
        val = float(t)
    except ValueError:
        return None
    return val if math.isfinite(val) else None


def clamp(val: float, lo: float, hi: float) -> float:
    return min(hi, max(lo, val))


def normalize_number(spec: NumericField, raw: Any) -> float | int:
    """Parse, default, truncate (int fields) and clamp one numeric field."""
    parsed = parse_number(raw)
    if parsed is None:
        if raw not in (None, ""):
            logger.debug("form: %s=%r is not a number, using default %s", spec.key, raw, spec.default)
        parsed = float(spec.default)

    if spec.is_int:
        parsed = float(math.trunc(parsed))

    val = clamp(parsed, spec.lo, spec.hi)
    if val != parsed:
        logger.debug("form: %s=%s clamped to %s", spec.key, parsed, val)
    return int(val) if spec.is_int else val


def normalize_origin_date(raw: Any, today: date) -> date:
    """ISO date, not after today; anything else becomes today."""
    if isinstance(raw, datetime):
        parsed: date | None = raw.date()
    elif isinstance(raw, date):
        parsed = raw
    else:
        try:
            parsed = date.fromisoformat(str(raw).strip()) if raw not in (None, "") else None
        except ValueError:
            parsed = None

    if parsed is None or parsed > today:
        logger.debug("form: %s=%r replaced with %s", DATE_KEY, raw, today.isoformat())
        return today
    return parsed


def normalize_primary(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    return str(raw or "").strip().lower() in _TRUTHY


def normalize_form(raw: Mapping[str, Any], *, today: date | None = None) -> ScenarioInputs:
    """
    Build a validated ScenarioInputs from raw form values.

    Args:
        raw: Form id → value (normally strings; numbers/bools from JSON are accepted).
        today: Reference date for the origination check (defaults to date.today()).

    Returns:
        ScenarioInputs with every field in range.
    """
    today = today or date.today()
    values: dict[str, Any] = {f.attr: normalize_number(f, raw.get(f.key)) for f in NUMERIC_FIELDS}
    values["loan_origin_date"] = normalize_origin_date(raw.get(DATE_KEY), today)
    values["primary_residence"] = normalize_primary(raw.get(PRIMARY_KEY))
    return ScenarioInputs(**values)


def _fmt_number(val: float | int) -> str:
    if isinstance(val, int):
        return str(val)
    # 4.0 → "4", 4.25 → "4.25"
    if float(val).is_integer():
        return str(int(val))
    return repr(float(val))


def to_form(fi: ScenarioInputs) -> dict[str, str]:
    """Canonical form strings for a validated snapshot, in form order."""
    out: dict[str, str] = {}
    numeric = {f.key: f for f in NUMERIC_FIELDS}
    for key in FORM_KEYS:
        if key == DATE_KEY:
            out[key] = fi.loan_origin_date.isoformat()
        elif key == PRIMARY_KEY:
            out[key] = "yes" if fi.primary_residence else "no"
        else:
            out[key] = _fmt_number(getattr(fi, numeric[key].attr))
    return out


def default_form(today: date | None = None) -> dict[str, str]:
    """The form as it loads with no saved state."""
    return to_form(normalize_form({}, today=today))


def repaired_fields(raw: Mapping[str, Any], fi: ScenarioInputs) -> list[str]:
    """
    Keys whose supplied value was changed by normalization.

    Missing keys are not reported; empty strings that fell back to a default are.
    """
    canonical = to_form(fi)
    changed: list[str] = []
    for key in FORM_KEYS:
        if key not in raw:
            continue
        supplied = raw[key]
        if key == PRIMARY_KEY:
            if not isinstance(supplied, bool) and str(supplied or "").strip().lower() not in _TRUTHY | _FALSY:
                changed.append(key)
            continue
        if key == DATE_KEY:
            if str(supplied).strip() != canonical[key]:
                changed.append(key)
            continue
        num = parse_number(supplied)
        if num is None or _fmt_number(num) != canonical[key]:
            changed.append(key)
    return changed
