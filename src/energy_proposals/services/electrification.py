# src/energy_proposals/services/electrification.py
"""
Gas-to-electric savings per appliance category.

Rules:
- Each category owns a fixed share of the billed gas usage
- Heat pumps divide the gas-equivalent kWh by their COP
- Induction uses its own efficiency ratio, not a COP
- Costs are annualised from the billing period and rounded to cents
- annual_savings is taken from the rounded costs, so it equals
  current_gas_cost - electric_cost to the cent
"""

from typing import Optional

from energy_proposals.models.bills import ElectricityBill, GasBill
from energy_proposals.services.constants import (
    COOKING_GAS_SHARE,
    DAYS_PER_YEAR,
    DEFAULT_DAILY_SUPPLY_CHARGE,
    DEFAULT_ELECTRICITY_RATE_CENTS,
    DEFAULT_GAS_RATE_CENTS_PER_MJ,
    GAS_MJ_TO_KWH,
    HEAT_PUMP_COP,
    HEATING_GAS_SHARE,
    HOT_WATER_GAS_SHARE,
    INDUCTION_EFFICIENCY_RATIO,
    annualise,
    resolve_billing_days,
    round_half_up,
)
from energy_proposals.services.energy_models import ApplianceSavings


def electricity_rate_cents(bill: ElectricityBill) -> float:
    """Peak rate, then flat usage rate, then the default."""
    return bill.peak_rate_cents or bill.usage_rate_cents or DEFAULT_ELECTRICITY_RATE_CENTS


def _electrify(
    gas_bill: GasBill,
    share: float,
    efficiency: float,
    electricity_rate: float,
    supply_charge_saved: Optional[float] = None,
) -> ApplianceSavings:
    days = resolve_billing_days(gas_bill.billing_days)
    gas_rate = gas_bill.gas_rate_cents_per_mj or DEFAULT_GAS_RATE_CENTS_PER_MJ

    share_mj = (gas_bill.gas_usage_mj or 0.0) * share
    electric_kwh = share_mj * GAS_MJ_TO_KWH / efficiency

    current_gas_cost = round_half_up(annualise(share_mj * gas_rate / 100, days), 2)
    electric_cost = round_half_up(annualise(electric_kwh * electricity_rate / 100, days), 2)

    return ApplianceSavings(
        gas_share_mj=round_half_up(share_mj, 2),
        electric_kwh=round_half_up(annualise(electric_kwh, days), 2),
        current_gas_cost=current_gas_cost,
        electric_cost=electric_cost,
        annual_savings=round_half_up(current_gas_cost - electric_cost, 2),
        supply_charge_saved=supply_charge_saved,
    )


def hot_water_savings(gas_bill: GasBill, electricity_rate: float) -> ApplianceSavings:
    daily_supply = gas_bill.daily_supply_charge or DEFAULT_DAILY_SUPPLY_CHARGE
    return _electrify(
        gas_bill,
        HOT_WATER_GAS_SHARE,
        HEAT_PUMP_COP,
        electricity_rate,
        supply_charge_saved=round_half_up(daily_supply * DAYS_PER_YEAR, 2),
    )


def heating_cooling_savings(gas_bill: GasBill, electricity_rate: float) -> ApplianceSavings:
    return _electrify(gas_bill, HEATING_GAS_SHARE, HEAT_PUMP_COP, electricity_rate)


def cooking_savings(gas_bill: GasBill, electricity_rate: float) -> ApplianceSavings:
    return _electrify(gas_bill, COOKING_GAS_SHARE, INDUCTION_EFFICIENCY_RATIO, electricity_rate)
