from dataclasses import replace

import pytest

from energy_proposals.calculations.proposal_calculation_usecase import (
    find_rebate,
    run_proposal_calculations,
)
from energy_proposals.models.bills import ElectricityBill
from energy_proposals.models.customer import Customer
from energy_proposals.models.reference import RebateType, StateRebate


def _present_sum(items):
    return sum(v for v in items.values() if v is not None)


# ============================================================================
# SCENARIO: VIC household, gas hot water, no pool, no EV
# ============================================================================

def test_usage_and_sizing(gas_calculations):
    c = gas_calculations

    assert c.daily_average_kwh == 20
    assert c.projected_annual_cost == 2190
    assert c.recommended_battery_kwh == 10
    assert c.vpp_participation_assumed is True
    assert c.recommended_solar_kw == 7.0
    assert c.solar_annual_generation == 10220


def test_hot_water_savings_are_consistent(gas_calculations):
    c = gas_calculations
    assert c.hot_water_savings == 206.81
    assert c.hot_water_savings == pytest.approx(c.hot_water_current_gas_cost - c.hot_water_heat_pump_cost)
    assert c.hot_water_annual_supply_saved == 438.0


def test_gas_customer_gets_bundle_provider(gas_calculations):
    c = gas_calculations
    assert c.selected_vpp_provider == "Origin VPP"
    assert c.vpp_annual_value == 337
    assert all(item.has_gas_bundle for item in c.vpp_provider_comparison)


def test_investments_and_rebates_follow_proposed_items(gas_calculations):
    c = gas_calculations

    assert c.investment_solar == 7700
    assert c.investment_battery == 9000
    assert c.investment_heat_pump_hw == 3500
    assert c.investment_rc_ac is None
    assert c.investment_induction is None
    assert c.investment_ev_charger is None
    assert c.investment_pool_heat_pump is None

    assert c.solar_rebate_amount == 1400
    assert c.battery_rebate_amount == 2950
    assert c.heat_pump_hw_rebate_amount == 1000
    # VIC has a heating rebate, but no reverse cycle unit is proposed
    assert c.heat_pump_ac_rebate_amount is None


def test_totals_equal_their_constituents(gas_calculations):
    c = gas_calculations

    assert c.total_investment == _present_sum(c.investment_items()) == 20200
    assert c.total_rebates == _present_sum(c.rebate_items()) == 5350
    assert c.net_investment == c.total_investment - c.total_rebates
    assert c.total_annual_savings == _present_sum(c.benefit_items())


def test_benefits_and_payback(gas_calculations):
    c = gas_calculations

    assert c.electricity_savings == 2637
    assert c.gas_savings == 1086
    assert c.ev_annual_savings is None
    assert c.total_annual_savings == 4060
    assert c.payback_years == 3.7
    assert c.payback_defined is True


def test_emissions_and_projection(gas_calculations):
    c = gas_calculations

    assert c.co2_current_tonnes == 7.64
    assert c.co2_reduction_percent == 100.0
    assert len(c.cost_projection) == 25


def test_calculation_is_idempotent(gas_customer, electricity_bill, gas_bill, providers, rebates):
    first = run_proposal_calculations(gas_customer, electricity_bill, gas_bill, providers, rebates)
    second = run_proposal_calculations(gas_customer, electricity_bill, gas_bill, providers, rebates)
    assert first == second


# ============================================================================
# FEATURE SWITCHES
# ============================================================================

def test_no_gas_bill_leaves_gas_fields_unset(plain_calculations):
    c = plain_calculations

    assert c.has_gas_bill is False
    assert c.gas_annual_cost is None
    assert c.hot_water_savings is None
    assert c.gas_savings is None
    assert c.has_electrification_investment is False
    # Without a gas bill every provider in the state is a candidate
    assert c.selected_vpp_provider == "Amber for Batteries"


def test_existing_solar_skips_solar(electricity_bill, providers, rebates):
    customer = Customer(full_name="Has Panels", state="VIC", has_existing_solar=True, existing_solar_kw=5)
    c = run_proposal_calculations(customer, electricity_bill, None, providers, rebates)

    assert c.recommended_solar_kw is None
    assert c.investment_solar is None
    assert c.solar_rebate_amount is None
    assert c.electricity_savings is None


def test_pool_and_ev(ev_pool_customer, electricity_bill, providers, rebates):
    c = run_proposal_calculations(ev_pool_customer, electricity_bill, None, providers, rebates)

    assert c.pool_heat_pump_savings == 6570
    assert c.investment_pool_heat_pump == 4000
    assert c.ev_annual_savings == 1440
    assert c.investment_ev_charger == 1500
    assert c.recommended_battery_kwh == 13
    assert c.total_annual_savings == _present_sum(c.benefit_items())


def test_pool_without_volume_is_not_estimated(electricity_bill):
    customer = Customer(full_name="Pool Owner", state="VIC", has_pool=True)
    c = run_proposal_calculations(customer, electricity_bill)

    assert c.pool_heat_pump_savings is None
    assert c.investment_pool_heat_pump is None


def test_vpp_participation_off_sizes_from_usage(gas_customer, electricity_bill):
    c = run_proposal_calculations(gas_customer, electricity_bill, vpp_participation=False)
    assert c.recommended_battery_kwh == 10
    assert c.vpp_participation_assumed is False

    small = ElectricityBill(total_usage_kwh=900, total_amount=300, billing_days=90)
    assert run_proposal_calculations(gas_customer, small, vpp_participation=False).recommended_battery_kwh == 5
    assert run_proposal_calculations(gas_customer, small, vpp_participation=True).recommended_battery_kwh == 10


def test_no_reference_data_means_no_vpp_and_no_rebates(gas_customer, electricity_bill):
    c = run_proposal_calculations(gas_customer, electricity_bill)

    assert c.selected_vpp_provider is None
    assert c.vpp_annual_value is None
    assert c.vpp_provider_comparison == ()
    assert c.total_rebates == 0
    assert all(v is None for v in c.rebate_items().values())


def test_zero_usage_reports_undefined_payback(electricity_bill):
    customer = Customer(full_name="Empty House", state="VIC", has_existing_solar=True)
    bill = replace(electricity_bill, total_usage_kwh=0, total_amount=0)
    c = run_proposal_calculations(customer, bill)

    assert c.total_annual_savings == 0
    assert c.payback_years == 0.0
    assert c.payback_defined is False


def test_payload_is_camel_case_with_nulls(plain_calculations):
    payload = plain_calculations.to_payload()

    assert payload["dailyAverageKwh"] == 20
    assert payload["gasAnnualCost"] is None
    assert isinstance(payload["vppProviderComparison"], list)
    assert payload["vppProviderComparison"][0]["strategicFit"] in {"excellent", "good", "moderate", "poor"}


# ============================================================================
# REBATE LOOKUP
# ============================================================================

def test_find_rebate_skips_inactive_entries():
    rebates = [
        StateRebate("VIC", RebateType.SOLAR, 1000, is_active=False),
        StateRebate("VIC", RebateType.SOLAR, 1400),
    ]
    assert find_rebate(rebates, "vic", RebateType.SOLAR).amount == 1400
    assert find_rebate(rebates, "NSW", RebateType.SOLAR) is None
