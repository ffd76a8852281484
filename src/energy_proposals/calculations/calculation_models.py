from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, Optional, Tuple

from energy_proposals.services.energy_models import VppComparisonItem, YearProjection
from energy_proposals.utils.serialization import to_wire


# ------------------------------------------------------------
# Single output of a calculation run
#
# Every field is optional: None means "not part of this proposal"
# and is never read as 0 by any total.
# ------------------------------------------------------------
@dataclass(frozen=True)
class Calculations:
    # --------------------------------------------------
    # Electricity bill echo
    # --------------------------------------------------
    bill_retailer: Optional[str] = None
    bill_period_start: Optional[date] = None
    bill_period_end: Optional[date] = None
    bill_days: Optional[int] = None
    bill_total_amount: Optional[float] = None
    bill_total_usage_kwh: Optional[float] = None
    bill_daily_supply_charge: Optional[float] = None
    bill_peak_usage_kwh: Optional[float] = None
    bill_off_peak_usage_kwh: Optional[float] = None
    bill_shoulder_usage_kwh: Optional[float] = None
    bill_peak_rate_cents: Optional[float] = None
    bill_off_peak_rate_cents: Optional[float] = None
    bill_shoulder_rate_cents: Optional[float] = None
    bill_feed_in_tariff_cents: Optional[float] = None
    bill_solar_exports_kwh: Optional[float] = None

    # --------------------------------------------------
    # Gas bill echo
    # --------------------------------------------------
    gas_bill_retailer: Optional[str] = None
    gas_bill_days: Optional[int] = None
    gas_bill_total_amount: Optional[float] = None
    gas_bill_daily_supply_charge: Optional[float] = None
    gas_bill_usage_mj: Optional[float] = None
    gas_bill_rate_cents_mj: Optional[float] = None

    # --------------------------------------------------
    # Usage
    # --------------------------------------------------
    daily_average_kwh: Optional[float] = None
    monthly_usage_kwh: Optional[float] = None
    yearly_usage_kwh: Optional[float] = None
    daily_average_cost: Optional[float] = None
    projected_annual_cost: Optional[float] = None
    electricity_rate_cents: Optional[float] = None
    annual_supply_charge: Optional[float] = None
    annual_usage_charge: Optional[float] = None
    annual_solar_credit: Optional[float] = None

    # --------------------------------------------------
    # Gas
    # --------------------------------------------------
    gas_annual_cost: Optional[float] = None
    gas_daily_gas_cost: Optional[float] = None
    gas_annual_mj: Optional[float] = None
    gas_kwh_equivalent: Optional[float] = None
    gas_co2_emissions: Optional[float] = None
    gas_annual_supply_charge: Optional[float] = None

    # --------------------------------------------------
    # Electrification
    # --------------------------------------------------
    hot_water_savings: Optional[float] = None
    hot_water_current_gas_cost: Optional[float] = None
    hot_water_heat_pump_cost: Optional[float] = None
    hot_water_annual_supply_saved: Optional[float] = None  # daily supply charge x 365
    heating_cooling_savings: Optional[float] = None
    heating_current_gas_cost: Optional[float] = None
    heating_rc_ac_cost: Optional[float] = None
    cooking_savings: Optional[float] = None
    cooking_current_gas_cost: Optional[float] = None
    cooking_induction_cost: Optional[float] = None

    # --------------------------------------------------
    # Pool
    # --------------------------------------------------
    pool_heat_pump_savings: Optional[float] = None
    pool_recommended_kw: Optional[float] = None
    pool_annual_operating_cost: Optional[float] = None

    # --------------------------------------------------
    # Battery / solar
    # --------------------------------------------------
    recommended_battery_kwh: Optional[int] = None
    battery_product: Optional[str] = None
    battery_estimated_cost: Optional[float] = None
    battery_reasoning: Optional[str] = None
    vpp_participation_assumed: Optional[bool] = None

    recommended_solar_kw: Optional[float] = None
    solar_panel_count: Optional[int] = None
    solar_annual_generation: Optional[float] = None
    solar_estimated_cost: Optional[float] = None

    # --------------------------------------------------
    # VPP
    # --------------------------------------------------
    selected_vpp_provider: Optional[str] = None
    vpp_annual_value: Optional[float] = None
    vpp_daily_credit_annual: Optional[float] = None
    vpp_event_payments_annual: Optional[float] = None
    vpp_bundle_discount: Optional[float] = None
    vpp_provider_comparison: Tuple[VppComparisonItem, ...] = ()

    # --------------------------------------------------
    # EV
    # --------------------------------------------------
    ev_petrol_cost: Optional[float] = None
    ev_grid_charge_cost: Optional[float] = None
    ev_solar_charge_cost: Optional[float] = None
    ev_annual_savings: Optional[float] = None
    ev_km_per_year: Optional[int] = None
    ev_consumption_per_100km: Optional[float] = None
    ev_petrol_price_per_litre: Optional[float] = None

    # --------------------------------------------------
    # Emissions
    # --------------------------------------------------
    co2_current_tonnes: Optional[float] = None
    co2_projected_tonnes: Optional[float] = None
    co2_reduction_tonnes: Optional[float] = None
    co2_reduction_percent: Optional[float] = None

    # --------------------------------------------------
    # Rebates (only where the matching investment exists)
    # --------------------------------------------------
    solar_rebate_amount: Optional[float] = None
    battery_rebate_amount: Optional[float] = None
    heat_pump_hw_rebate_amount: Optional[float] = None
    heat_pump_ac_rebate_amount: Optional[float] = None
    induction_rebate_amount: Optional[float] = None
    ev_charger_rebate_amount: Optional[float] = None

    # --------------------------------------------------
    # Investments
    # --------------------------------------------------
    investment_solar: Optional[float] = None
    investment_battery: Optional[float] = None
    investment_heat_pump_hw: Optional[float] = None
    investment_rc_ac: Optional[float] = None
    investment_induction: Optional[float] = None
    investment_ev_charger: Optional[float] = None
    investment_pool_heat_pump: Optional[float] = None

    # --------------------------------------------------
    # Annual benefits (vpp_annual_value / ev_annual_savings also count)
    # --------------------------------------------------
    electricity_savings: Optional[float] = None
    gas_savings: Optional[float] = None

    # --------------------------------------------------
    # Totals
    # --------------------------------------------------
    total_investment: Optional[float] = None
    total_rebates: Optional[float] = None
    net_investment: Optional[float] = None
    total_annual_savings: Optional[float] = None
    payback_years: Optional[float] = None
    payback_defined: Optional[bool] = None
    ten_year_savings: Optional[float] = None
    twenty_five_year_savings: Optional[float] = None

    cost_projection: Tuple[YearProjection, ...] = ()

    # --------------------------------------------------
    # Named constituents of each total
    # --------------------------------------------------
    def investment_items(self) -> Dict[str, Optional[float]]:
        return {
            "solar": self.investment_solar,
            "battery": self.investment_battery,
            "heat_pump_hw": self.investment_heat_pump_hw,
            "rc_ac": self.investment_rc_ac,
            "induction": self.investment_induction,
            "ev_charger": self.investment_ev_charger,
            "pool_heat_pump": self.investment_pool_heat_pump,
        }

    def rebate_items(self) -> Dict[str, Optional[float]]:
        return {
            "solar": self.solar_rebate_amount,
            "battery": self.battery_rebate_amount,
            "heat_pump_hw": self.heat_pump_hw_rebate_amount,
            "heat_pump_ac": self.heat_pump_ac_rebate_amount,
            "induction": self.induction_rebate_amount,
            "ev_charger": self.ev_charger_rebate_amount,
        }

    def benefit_items(self) -> Dict[str, Optional[float]]:
        return {
            "electricity": self.electricity_savings,
            "gas": self.gas_savings,
            "vpp": self.vpp_annual_value,
            "ev": self.ev_annual_savings,
        }

    @property
    def has_gas_bill(self) -> bool:
        return self.gas_annual_cost is not None

    @property
    def has_electrification_investment(self) -> bool:
        return any(
            v is not None
            for v in (self.investment_heat_pump_hw, self.investment_rc_ac, self.investment_induction)
        )

    def to_payload(self) -> dict:
        """camelCase dict for persistence and renderers (None -> null)."""
        return to_wire(self)
