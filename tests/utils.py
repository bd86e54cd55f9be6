# tests/utils.py
"""
Single source of truth for test data, factories, and canonical payloads.
Update values here to cascade across the test suite.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from rent_or_sell.schemas.models import ScenarioInputs

# -----------------------------
# Global defaults (edit once)
# -----------------------------

# Reference "today" for every test; keeps elapsed-payment math deterministic.
AS_OF = date(2026, 10, 18)

# Loan originated exactly 10 years before AS_OF → 120 calendar months, 119 payments.
TEN_YEARS_AGO = date(2016, 10, 18)

# The worked example: 300k purchase, 400k today, 240k @ 4% / 30y, 2k rent.
CANONICAL_SCENARIO: dict[str, Any] = {
    "purchase_price": 300_000.0,
    "current_home_value": 400_000.0,
    "loan_origin_date": TEN_YEARS_AGO,
    "original_loan_amount": 240_000.0,
    "interest_rate": 4.0,
    "mortgage_term": 30,
    "primary_residence": False,
    "monthly_hoa": 0.0,
    "monthly_taxes": 0.0,
    "monthly_insurance": 0.0,
    "monthly_maintenance": 0.0,
    "rental_price": 2_000.0,
    "annual_rent_increase": 3.0,
    "property_mgmt_fee": 0.0,
    "rental_tax_rate": 0.0,
    "home_appreciation": 3.0,
    "cost_inflation": 0.0,
    "selling_fees": 6.0,
    "capital_gains_tax": 15.0,
    "investment_return": 5.0,
    "years_to_hold": 1,
}

# Same scenario as raw form text, keyed by form id.
CANONICAL_FORM: dict[str, str] = {
    "purchasePrice": "300000",
    "loanOriginDate": TEN_YEARS_AGO.isoformat(),
    "originalLoanAmount": "240000",
    "interestRate": "4",
    "mortgageTerm": "30",
    "primaryResidence": "no",
    "currentHomeValue": "400000",
    "monthlyHOA": "0",
    "monthlyTaxes": "0",
    "monthlyInsurance": "0",
    "monthlyMaintenance": "0",
    "rentalPrice": "2000",
    "annualRentIncrease": "3",
    "propertyMgmtFee": "0",
    "rentalTaxRate": "0",
    "homeAppreciation": "3",
    "costInflation": "0",
    "sellingFees": "6",
    "capitalGainsTax": "15",
    "investmentReturn": "5",
    "yearsToHold": "1",
}

# -----------------------------
# Factories
# -----------------------------


def make_scenario_inputs(**overrides: Any) -> ScenarioInputs:
    """Canonical ScenarioInputs with optional field overrides."""
    return ScenarioInputs(**{**CANONICAL_SCENARIO, **overrides})


def make_free_and_clear(**overrides: Any) -> ScenarioInputs:
    """No loan, no sale friction, no growth: isolates the rental cash-flow math."""
    base: dict[str, Any] = {
        "original_loan_amount": 0.0,
        "home_appreciation": 0.0,
        "annual_rent_increase": 0.0,
        "selling_fees": 0.0,
        "capital_gains_tax": 0.0,
        "investment_return": 0.0,
        "years_to_hold": 3,
    }
    return make_scenario_inputs(**{**base, **overrides})


def make_underwater(**overrides: Any) -> ScenarioInputs:
    """
    Sale loses money at Year 0: 200k value, 240k loan just originated, 6% fees.
    Net sale proceeds = 200k - 240k - 12k = -52k, while the gain over a 150k basis is +50k.
    """
    base: dict[str, Any] = {
        "purchase_price": 150_000.0,
        "current_home_value": 200_000.0,
        "loan_origin_date": AS_OF,
        "home_appreciation": 0.0,
        "years_to_hold": 5,
    }
    return make_scenario_inputs(**{**base, **overrides})


def make_form(**overrides: str) -> dict[str, str]:
    """Canonical raw form (strings) with optional key overrides."""
    return {**CANONICAL_FORM, **overrides}
