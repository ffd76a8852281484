"""
Proposal Calculation Use Case

Purpose:
- Turn one customer + bills into a single flat Calculations record
- Every downstream consumer (slides, exports, progress UI) reads only this record

Order of steps:
- usage -> gas + electrification -> pool -> EV -> battery -> solar -> VPP
  -> payback -> emissions -> long-range projection

Important:
- The electricity bill is required; callers reject its absence upstream
- Everything else is optional and simply switches features off
- Pure: same inputs, same record
"""

from __future__ import annotations

from typing import Dict, Optional, Sequence

from energy_proposals.calculations.calculation_models import Calculations
from energy_proposals.models.bills import ElectricityBill, GasBill
from energy_proposals.models.customer import Customer
from energy_proposals.models.reference import RebateType, StateRebate, VppProvider
from energy_proposals.services.constants import (
    BATTERY_EXPORT_SHIFT,
    DAYS_PER_YEAR,
    DEFAULT_DAILY_SUPPLY_CHARGE,
    DEFAULT_FEED_IN_TARIFF_CENTS,
    EV_KM_PER_YEAR,
    EV_KWH_PER_100KM,
    GAS_ELIMINATION_SAVINGS_FRACTION,
    PETROL_PRICE_PER_LITRE,
    PRICE_EV_CHARGER,
    PRICE_HEAT_PUMP_HOT_WATER,
    PRICE_INDUCTION_COOKTOP,
    PRICE_POOL_HEAT_PUMP,
    PRICE_REVERSE_CYCLE_AC,
    SOLAR_SELF_CONSUMPTION,
    round_half_up,
)
from energy_proposals.services.electrification import (
    cooking_savings,
    electricity_rate_cents,
    heating_cooling_savings,
    hot_water_savings,
)
from energy_proposals.services.emissions import calculate_emissions
from energy_proposals.services.optional_features import estimate_ev_savings, estimate_pool_heat_pump
from energy_proposals.services.payback import calculate_payback
from energy_proposals.services.projection import project_costs
from energy_proposals.services.sizing import size_battery, size_solar
from energy_proposals.services.usage import analyse_gas, project_usage
from energy_proposals.services.vpp import compare_vpp_providers
from energy_proposals.utils.logger import get_logger

logger = get_logger(__name__)

# Investment category -> rebate category
REBATE_CATEGORY: Dict[str, RebateType] = {
    "solar": RebateType.SOLAR,
    "battery": RebateType.BATTERY,
    "heat_pump_hw": RebateType.HEAT_PUMP_HW,
    "rc_ac": RebateType.HEAT_PUMP_AC,
    "induction": RebateType.INDUCTION,
    "ev_charger": RebateType.EV_CHARGER,
}


def find_rebate(
    rebates: Sequence[StateRebate],
    state: Optional[str],
    rebate_type: RebateType,
) -> Optional[StateRebate]:
    """First active rebate for the state and category, in list order."""
    state = (state or "").upper()
    for rebate in rebates:
        if rebate.is_active and rebate.state.upper() == state and rebate.rebate_type == rebate_type:
            return rebate
    return None


def _whole(value: Optional[float]) -> Optional[float]:
    return None if value is None else round_half_up(value, 0)


def run_proposal_calculations(
    customer: Customer,
    electricity_bill: ElectricityBill,
    gas_bill: Optional[GasBill] = None,
    vpp_providers: Sequence[VppProvider] = (),
    rebates: Sequence[StateRebate] = (),
    *,
    vpp_participation: bool = True,
) -> Calculations:
    """
    Run every calculator for one proposal and collect the results.
    """

    logger.info(
        "Running proposal calculations | customer=%s state=%s gas=%s",
        customer.full_name, customer.state, gas_bill is not None,
    )

    # ------------------------------------------------------------
    # Usage
    # ------------------------------------------------------------
    usage = project_usage(electricity_bill)
    rate = electricity_rate_cents(electricity_bill)

    daily_supply = electricity_bill.daily_supply_charge or DEFAULT_DAILY_SUPPLY_CHARGE
    annual_supply_charge = round_half_up(daily_supply * DAYS_PER_YEAR, 2)
    feed_in = electricity_bill.feed_in_tariff_cents or DEFAULT_FEED_IN_TARIFF_CENTS
    annual_solar_credit = round_half_up((electricity_bill.solar_exports_kwh or 0) * feed_in / 100, 2)

    # ------------------------------------------------------------
    # Gas + electrification (gas bill only)
    # ------------------------------------------------------------
    gas = hot_water = heating = cooking = None
    gas_annual_supply_charge = None
    if gas_bill is not None:
        gas = analyse_gas(gas_bill)
        hot_water = hot_water_savings(gas_bill, rate)
        heating = heating_cooling_savings(gas_bill, rate)
        cooking = cooking_savings(gas_bill, rate)
        gas_annual_supply_charge = hot_water.supply_charge_saved

    # ------------------------------------------------------------
    # Optional features
    # ------------------------------------------------------------
    pool = None
    if customer.has_pool and customer.pool_volume_litres:
        pool = estimate_pool_heat_pump(customer.pool_volume_litres, rate)

    ev = estimate_ev_savings(rate) if customer.wants_ev else None

    # ------------------------------------------------------------
    # Sizing
    # ------------------------------------------------------------
    battery = size_battery(usage.daily_average_kwh, customer.wants_ev, vpp_participation)

    solar = None
    if not customer.has_existing_solar:
        solar = size_solar(usage.yearly_usage_kwh, battery.recommended_kwh, customer.wants_ev)

    # ------------------------------------------------------------
    # VPP
    # ------------------------------------------------------------
    comparison = compare_vpp_providers(vpp_providers, customer.state, gas_bill is not None)
    selected = comparison[0] if comparison else None

    # ------------------------------------------------------------
    # Investments (None = not proposed)
    # ------------------------------------------------------------
    has_gas = gas_bill is not None
    investments: Dict[str, Optional[float]] = {
        "solar": solar.estimated_cost if solar else None,
        "battery": battery.estimated_cost,
        "heat_pump_hw": PRICE_HEAT_PUMP_HOT_WATER if has_gas and customer.has_hot_water_appliance else None,
        "rc_ac": PRICE_REVERSE_CYCLE_AC if has_gas and customer.has_heating_appliance else None,
        "induction": PRICE_INDUCTION_COOKTOP if has_gas and customer.has_cooktop_appliance else None,
        "ev_charger": PRICE_EV_CHARGER if customer.wants_ev else None,
        "pool_heat_pump": PRICE_POOL_HEAT_PUMP if pool else None,
    }
    investments = {k: _whole(v) for k, v in investments.items()}

    # ------------------------------------------------------------
    # Rebates (only for proposed items)
    # ------------------------------------------------------------
    applied_rebates: Dict[str, Optional[float]] = {}
    for category, rebate_type in REBATE_CATEGORY.items():
        rebate = find_rebate(rebates, customer.state, rebate_type)
        applied = rebate is not None and investments.get(category) is not None
        applied_rebates[rebate_type.value] = _whole(rebate.amount) if applied else None

    # ------------------------------------------------------------
    # Annual benefits
    # ------------------------------------------------------------
    electricity_savings = None
    if solar is not None:
        generation = solar.annual_generation_kwh
        rate_dollars = rate / 100
        self_consumed = generation * SOLAR_SELF_CONSUMPTION * rate_dollars
        battery_shifted = generation * (1 - SOLAR_SELF_CONSUMPTION) * BATTERY_EXPORT_SHIFT * rate_dollars
        electricity_savings = _whole(self_consumed + battery_shifted)

    gas_savings = _whole(gas.annual_gas_cost * GAS_ELIMINATION_SAVINGS_FRACTION) if gas else None
    vpp_value = selected.estimated_annual_value if selected else None
    ev_savings = _whole(ev.savings_with_solar) if ev else None

    benefits = {
        "electricity": electricity_savings,
        "gas": gas_savings,
        "vpp": vpp_value,
        "ev": ev_savings,
    }

    payback = calculate_payback(investments, applied_rebates, benefits)
    if not payback.payback_defined:
        logger.warning(
            "No annual benefit for %s; payback reported as 0 (undefined)",
            customer.full_name,
        )

    # ------------------------------------------------------------
    # Emissions + projection
    # ------------------------------------------------------------
    emissions = calculate_emissions(
        annual_kwh=usage.yearly_usage_kwh,
        annual_gas_mj=gas.annual_gas_mj if gas else 0.0,
        solar_generation_kwh=solar.annual_generation_kwh if solar else 0.0,
        gas_eliminated=has_gas,
    )

    current_energy_cost = usage.projected_annual_cost + (gas.annual_gas_cost if gas else 0.0)
    projection = project_costs(current_energy_cost, payback.total_annual_benefit)

    logger.info(
        "Calculations complete | battery=%skWh solar=%skW vpp=%s savings=%s payback=%s",
        battery.recommended_kwh,
        solar.recommended_kw if solar else None,
        selected.provider if selected else None,
        payback.total_annual_benefit,
        payback.payback_years,
    )

    # ------------------------------------------------------------
    # Final record
    # ------------------------------------------------------------
    return Calculations(
        bill_retailer=electricity_bill.retailer,
        bill_period_start=electricity_bill.billing_period_start,
        bill_period_end=electricity_bill.billing_period_end,
        bill_days=electricity_bill.billing_days,
        bill_total_amount=electricity_bill.total_amount,
        bill_total_usage_kwh=electricity_bill.total_usage_kwh,
        bill_daily_supply_charge=electricity_bill.daily_supply_charge,
        bill_peak_usage_kwh=electricity_bill.peak_usage_kwh,
        bill_off_peak_usage_kwh=electricity_bill.off_peak_usage_kwh,
        bill_shoulder_usage_kwh=electricity_bill.shoulder_usage_kwh,
        bill_peak_rate_cents=electricity_bill.peak_rate_cents,
        bill_off_peak_rate_cents=electricity_bill.off_peak_rate_cents,
        bill_shoulder_rate_cents=electricity_bill.shoulder_rate_cents,
        bill_feed_in_tariff_cents=electricity_bill.feed_in_tariff_cents,
        bill_solar_exports_kwh=electricity_bill.solar_exports_kwh,
        gas_bill_retailer=gas_bill.retailer if gas_bill else None,
        gas_bill_days=gas_bill.billing_days if gas_bill else None,
        gas_bill_total_amount=gas_bill.total_amount if gas_bill else None,
        gas_bill_daily_supply_charge=gas_bill.daily_supply_charge if gas_bill else None,
        gas_bill_usage_mj=gas_bill.gas_usage_mj if gas_bill else None,
        gas_bill_rate_cents_mj=gas_bill.gas_rate_cents_per_mj if gas_bill else None,
        daily_average_kwh=usage.daily_average_kwh,
        monthly_usage_kwh=usage.monthly_usage_kwh,
        yearly_usage_kwh=usage.yearly_usage_kwh,
        daily_average_cost=usage.daily_average_cost,
        projected_annual_cost=usage.projected_annual_cost,
        electricity_rate_cents=rate,
        annual_supply_charge=annual_supply_charge,
        annual_usage_charge=round_half_up(usage.projected_annual_cost - annual_supply_charge, 2),
        annual_solar_credit=annual_solar_credit,
        gas_annual_cost=gas.annual_gas_cost if gas else None,
        gas_daily_gas_cost=gas.daily_gas_cost if gas else None,
        gas_annual_mj=gas.annual_gas_mj if gas else None,
        gas_kwh_equivalent=gas.gas_kwh_equivalent if gas else None,
        gas_co2_emissions=gas.co2_emissions_kg if gas else None,
        gas_annual_supply_charge=gas_annual_supply_charge,
        hot_water_savings=hot_water.annual_savings if hot_water else None,
        hot_water_current_gas_cost=hot_water.current_gas_cost if hot_water else None,
        hot_water_heat_pump_cost=hot_water.electric_cost if hot_water else None,
        hot_water_annual_supply_saved=hot_water.supply_charge_saved if hot_water else None,
        heating_cooling_savings=heating.annual_savings if heating else None,
        heating_current_gas_cost=heating.current_gas_cost if heating else None,
        heating_rc_ac_cost=heating.electric_cost if heating else None,
        cooking_savings=cooking.annual_savings if cooking else None,
        cooking_current_gas_cost=cooking.current_gas_cost if cooking else None,
        cooking_induction_cost=cooking.electric_cost if cooking else None,
        pool_heat_pump_savings=pool.savings_vs_gas if pool else None,
        pool_recommended_kw=pool.recommended_kw if pool else None,
        pool_annual_operating_cost=pool.annual_operating_cost if pool else None,
        recommended_battery_kwh=battery.recommended_kwh,
        battery_product=battery.product,
        battery_estimated_cost=battery.estimated_cost,
        battery_reasoning=battery.reasoning,
        vpp_participation_assumed=vpp_participation,
        recommended_solar_kw=solar.recommended_kw if solar else None,
        solar_panel_count=solar.panel_count if solar else None,
        solar_annual_generation=solar.annual_generation_kwh if solar else None,
        solar_estimated_cost=solar.estimated_cost if solar else None,
        selected_vpp_provider=selected.provider if selected else None,
        vpp_annual_value=vpp_value,
        vpp_daily_credit_annual=selected.daily_credit_annual if selected else None,
        vpp_event_payments_annual=selected.event_payments_annual if selected else None,
        vpp_bundle_discount=selected.bundle_discount if selected else None,
        vpp_provider_comparison=tuple(comparison),
        ev_petrol_cost=ev.petrol_annual_cost if ev else None,
        ev_grid_charge_cost=ev.grid_charge_cost if ev else None,
        ev_solar_charge_cost=ev.solar_charge_cost if ev else None,
        ev_annual_savings=ev_savings,
        ev_km_per_year=EV_KM_PER_YEAR if ev else None,
        ev_consumption_per_100km=EV_KWH_PER_100KM if ev else None,
        ev_petrol_price_per_litre=PETROL_PRICE_PER_LITRE if ev else None,
        co2_current_tonnes=emissions.current_co2_tonnes,
        co2_projected_tonnes=emissions.projected_co2_tonnes,
        co2_reduction_tonnes=emissions.reduction_tonnes,
        co2_reduction_percent=emissions.reduction_percent,
        solar_rebate_amount=applied_rebates[RebateType.SOLAR.value],
        battery_rebate_amount=applied_rebates[RebateType.BATTERY.value],
        heat_pump_hw_rebate_amount=applied_rebates[RebateType.HEAT_PUMP_HW.value],
        heat_pump_ac_rebate_amount=applied_rebates[RebateType.HEAT_PUMP_AC.value],
        induction_rebate_amount=applied_rebates[RebateType.INDUCTION.value],
        ev_charger_rebate_amount=applied_rebates[RebateType.EV_CHARGER.value],
        investment_solar=investments["solar"],
        investment_battery=investments["battery"],
        investment_heat_pump_hw=investments["heat_pump_hw"],
        investment_rc_ac=investments["rc_ac"],
        investment_induction=investments["induction"],
        investment_ev_charger=investments["ev_charger"],
        investment_pool_heat_pump=investments["pool_heat_pump"],
        electricity_savings=electricity_savings,
        gas_savings=gas_savings,
        total_investment=payback.total_investment,
        total_rebates=payback.total_rebates,
        net_investment=payback.net_investment,
        total_annual_savings=payback.total_annual_benefit,
        payback_years=payback.payback_years,
        payback_defined=payback.payback_defined,
        ten_year_savings=payback.ten_year_savings,
        twenty_five_year_savings=payback.twenty_five_year_savings,
        cost_projection=tuple(projection),
    )
