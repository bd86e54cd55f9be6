# tests/unit/test_engine_capital_gains.py
"""
Capital-gains rules are deliberate approximations, not tax law:
  - underwater sale → no tax
  - primary residence within 3 years → flat $500k exemption
"""

from __future__ import annotations

import pytest

from rent_or_sell.core.finance import project
from rent_or_sell.core.finance.engine import (
    PRIMARY_RESIDENCE_EXEMPTION_CAP,
    capital_gains_tax_owed,
)
from tests.utils import AS_OF, make_scenario_inputs, make_underwater


def test_no_tax_without_gain():
    assert capital_gains_tax_owed(0.0, 50_000.0, tax_rate_percent=20.0, primary_residence=False, year=1) == 0.0
    assert capital_gains_tax_owed(-10_000.0, 50_000.0, tax_rate_percent=20.0, primary_residence=False, year=1) == 0.0


def test_full_gain_taxed_for_investment_property():
    tax = capital_gains_tax_owed(100_000.0, 10.0, tax_rate_percent=15.0, primary_residence=False, year=0)
    assert tax == pytest.approx(15_000.0)


def test_approx_underwater_sale_owes_no_tax():
    y0 = project(make_underwater(), as_of=AS_OF)[0]
    assert y0.capital_gain == pytest.approx(50_000.0)
    assert y0.net_sale_proceeds < 0
    assert y0.capital_gains_tax_owed == 0.0
    assert y0.net_after_tax_proceeds == y0.net_sale_proceeds


def test_approx_primary_residence_exemption_within_window():
    # 600k gain, flat value: first 500k exempt through Year 3, full gain taxed after
    fi = make_scenario_inputs(
        primary_residence=True,
        current_home_value=900_000.0,
        home_appreciation=0.0,
        years_to_hold=5,
    )
    years = project(fi, as_of=AS_OF)
    taxes = [y.capital_gains_tax_owed for y in years]
    assert taxes[:4] == pytest.approx([15_000.0] * 4)
    assert taxes[4:] == pytest.approx([90_000.0, 90_000.0])


def test_approx_primary_residence_gain_under_cap_is_tax_free():
    fi = make_scenario_inputs(primary_residence=True, years_to_hold=3)
    years = project(fi, as_of=AS_OF)
    assert all(y.capital_gain < PRIMARY_RESIDENCE_EXEMPTION_CAP for y in years)
    assert [y.capital_gains_tax_owed for y in years] == [0.0, 0.0, 0.0, 0.0]


def test_gain_ignores_improvements_and_uses_purchase_price():
    years = project(make_scenario_inputs(years_to_hold=2), as_of=AS_OF)
    for y in years:
        assert y.capital_gain == pytest.approx(y.home_value - 300_000.0)


def test_loss_on_value_owes_nothing():
    fi = make_scenario_inputs(purchase_price=500_000.0, years_to_hold=2)
    years = project(fi, as_of=AS_OF)
    assert years[0].capital_gain < 0
    assert years[0].capital_gains_tax_owed == 0.0
