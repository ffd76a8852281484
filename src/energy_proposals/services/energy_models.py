from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


# ------------------------------------------------------------
# Electricity usage projection
# ------------------------------------------------------------
@dataclass(frozen=True)
class UsageProjection:
    daily_average_kwh: float
    monthly_usage_kwh: float
    yearly_usage_kwh: float
    daily_average_cost: float
    projected_annual_cost: float


# ------------------------------------------------------------
# Gas footprint
# ------------------------------------------------------------
@dataclass(frozen=True)
class GasAnalysis:
    annual_gas_cost: float
    daily_gas_cost: float
    annual_gas_mj: float
    gas_kwh_equivalent: float
    co2_emissions_kg: float


# ------------------------------------------------------------
# One electrified appliance category
# ------------------------------------------------------------
@dataclass(frozen=True)
class ApplianceSavings:
    gas_share_mj: float
    electric_kwh: float
    current_gas_cost: float
    electric_cost: float
    annual_savings: float

    # Hot water only: the gas daily supply charge no longer paid
    supply_charge_saved: Optional[float] = None


# ------------------------------------------------------------
# Optional features
# ------------------------------------------------------------
@dataclass(frozen=True)
class PoolHeatPumpEstimate:
    recommended_kw: float
    annual_kwh: float
    annual_operating_cost: float
    gas_heating_cost: float
    savings_vs_gas: float


@dataclass(frozen=True)
class EvSavings:
    km_per_year: int
    annual_kwh: float
    petrol_annual_cost: float
    grid_charge_cost: float
    solar_charge_cost: float
    savings_vs_petrol: float
    savings_with_solar: float


# ------------------------------------------------------------
# Sizing
# ------------------------------------------------------------
@dataclass(frozen=True)
class BatteryRecommendation:
    raw_kwh: float
    recommended_kwh: int
    estimated_cost: float
    reasoning: str
    product: str


@dataclass(frozen=True)
class SolarRecommendation:
    target_generation_kwh: float
    recommended_kw: float
    panel_count: int
    annual_generation_kwh: float
    estimated_cost: float


# ------------------------------------------------------------
# VPP
# ------------------------------------------------------------
class StrategicFit(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    MODERATE = "moderate"
    POOR = "poor"


@dataclass(frozen=True)
class VppComparisonItem:
    provider: str
    program_name: Optional[str]
    daily_credit_annual: float
    event_payments_annual: float
    bundle_discount: float
    estimated_annual_value: float
    has_gas_bundle: bool
    fit_score: int
    strategic_fit: StrategicFit


# ------------------------------------------------------------
# Economics
# ------------------------------------------------------------
@dataclass(frozen=True)
class PaybackResult:
    total_investment: float
    total_rebates: float
    net_investment: float
    total_annual_benefit: float
    payback_years: float
    ten_year_savings: float
    twenty_five_year_savings: float

    # False when there is no annual benefit; payback_years is then a 0 sentinel
    payback_defined: bool = True


@dataclass(frozen=True)
class EmissionsResult:
    current_co2_tonnes: float
    projected_co2_tonnes: float
    reduction_tonnes: float
    reduction_percent: float


@dataclass(frozen=True)
class YearProjection:
    year: int
    inflated_cost: float
    cost_with_system: float
    cumulative_saving: float
