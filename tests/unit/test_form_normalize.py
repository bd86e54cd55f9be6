# tests/unit/test_form_normalize.py
"""Repair, don't reject: every raw form value yields a usable ScenarioInputs."""

from __future__ import annotations

from datetime import date

import pytest

from rent_or_sell.core.normalize import FORM_KEYS, default_form, normalize_form, repaired_fields, to_form
from rent_or_sell.core.normalize.form import MONEY_MAX, parse_number
from tests.utils import AS_OF, CANONICAL_FORM, TEN_YEARS_AGO, make_form


def test_canonical_form_parses():
    fi = normalize_form(CANONICAL_FORM, today=AS_OF)
    assert fi.purchase_price == 300_000.0
    assert fi.loan_origin_date == TEN_YEARS_AGO
    assert fi.mortgage_term == 30
    assert fi.years_to_hold == 1
    assert fi.primary_residence is False


def test_empty_form_uses_documented_defaults():
    fi = normalize_form({}, today=AS_OF)
    assert fi.purchase_price == 300_000.0
    assert fi.current_home_value == 400_000.0
    assert fi.original_loan_amount == 240_000.0
    assert fi.interest_rate == 4.0
    assert fi.mortgage_term == 30
    assert fi.years_to_hold == 10
    assert fi.rental_price == 2_000.0
    assert fi.selling_fees == 6.0
    assert fi.loan_origin_date == AS_OF
    assert fi.primary_residence is False


@pytest.mark.parametrize(
    ("key", "raw", "attr", "expected"),
    [
        ("interestRate", "45", "interest_rate", 30.0),
        ("interestRate", "-1", "interest_rate", 0.0),
        ("homeAppreciation", "-35", "home_appreciation", -20.0),
        ("homeAppreciation", "31", "home_appreciation", 30.0),
        ("investmentReturn", "-80", "investment_return", -50.0),
        ("annualRentIncrease", "25", "annual_rent_increase", 20.0),
        ("costInflation", "21", "cost_inflation", 20.0),
        ("propertyMgmtFee", "150", "property_mgmt_fee", 100.0),
        ("sellingFees", "-3", "selling_fees", 0.0),
        ("purchasePrice", "-5", "purchase_price", 0.0),
        ("yearsToHold", "0", "years_to_hold", 1),
        ("yearsToHold", "99", "years_to_hold", 30),
        ("yearsToHold", "5.7", "years_to_hold", 5),
    ],
)
def test_out_of_range_values_are_clamped(key, raw, attr, expected):
    fi = normalize_form(make_form(**{key: raw}), today=AS_OF)
    assert getattr(fi, attr) == expected


@pytest.mark.parametrize("raw", ["", "abc", "nan", "inf", "-inf", "1e400", "   "])
def test_unparseable_numbers_fall_back_to_default(raw):
    fi = normalize_form(make_form(interestRate=raw, yearsToHold=raw), today=AS_OF)
    assert fi.interest_rate == 4.0
    assert fi.years_to_hold == 10


def test_currency_formatting_is_accepted():
    fi = normalize_form(make_form(currentHomeValue="$425,000", interestRate="6.5%"), today=AS_OF)
    assert fi.current_home_value == 425_000.0
    assert fi.interest_rate == 6.5


def test_parse_number_accepts_json_numbers():
    assert parse_number(12) == 12.0
    assert parse_number(4.5) == 4.5
    assert parse_number(True) is None
    assert parse_number(None) is None


@pytest.mark.parametrize("raw", ["", "not-a-date", "2026-13-40", "2030-01-01", "2026-10-19"])
def test_bad_or_future_origin_date_becomes_today(raw):
    fi = normalize_form(make_form(loanOriginDate=raw), today=AS_OF)
    assert fi.loan_origin_date == AS_OF


def test_valid_origin_date_kept():
    fi = normalize_form(make_form(loanOriginDate="2020-02-29"), today=AS_OF)
    assert fi.loan_origin_date == date(2020, 2, 29)
    same_day = normalize_form(make_form(loanOriginDate=AS_OF.isoformat()), today=AS_OF)
    assert same_day.loan_origin_date == AS_OF


@pytest.mark.parametrize(("raw", "expected"), [("yes", True), ("YES", True), ("true", True), ("no", False), ("", False)])
def test_primary_residence_flag(raw, expected):
    assert normalize_form(make_form(primaryResidence=raw), today=AS_OF).primary_residence is expected


def test_garbage_everywhere_never_raises():
    junk = {key: "💥 ?" for key in FORM_KEYS}
    fi = normalize_form(junk, today=AS_OF)
    assert fi.years_to_hold == 10
    assert fi.loan_origin_date == AS_OF


def test_to_form_round_trip():
    fi = normalize_form(CANONICAL_FORM, today=AS_OF)
    assert to_form(fi) == CANONICAL_FORM
    assert list(to_form(fi)) == list(FORM_KEYS)

    fractional = normalize_form(make_form(interestRate="4.125"), today=AS_OF)
    assert to_form(fractional)["interestRate"] == "4.125"


def test_default_form_is_canonical():
    form = default_form(AS_OF)
    assert form["yearsToHold"] == "10"
    assert form["loanOriginDate"] == AS_OF.isoformat()
    assert normalize_form(form, today=AS_OF) == normalize_form({}, today=AS_OF)


def test_repaired_fields_lists_only_changed_keys():
    raw = make_form(interestRate="45", yearsToHold="", purchasePrice="300,000", loanOriginDate="2099-01-01")
    fi = normalize_form(raw, today=AS_OF)
    assert repaired_fields(raw, fi) == ["loanOriginDate", "interestRate", "yearsToHold"]
    assert repaired_fields(CANONICAL_FORM, normalize_form(CANONICAL_FORM, today=AS_OF)) == []


@pytest.mark.parametrize(
    ("key", "attr"),
    [
        ("purchasePrice", "purchase_price"),
        ("currentHomeValue", "current_home_value"),
        ("originalLoanAmount", "original_loan_amount"),
        ("monthlyTaxes", "monthly_taxes"),
        ("rentalPrice", "rental_price"),
    ],
)
def test_money_amounts_are_capped(raw_form, as_of, key, attr):
    fi = normalize_form(raw_form(**{key: "1e308"}), today=as_of)
    assert getattr(fi, attr) == MONEY_MAX
    assert to_form(fi)[key] == "1000000000000"


@pytest.mark.parametrize(("value", "reported"), [("maybe", True), ("", True), ("YES", False), ("no", False), ("on", False)])
def test_unrecognized_primary_residence_is_reported(raw_form, as_of, value, reported):
    raw = raw_form(primaryResidence=value)
    fi = normalize_form(raw, today=as_of)
    assert ("primaryResidence" in repaired_fields(raw, fi)) is reported
