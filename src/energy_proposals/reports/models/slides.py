# src/energy_proposals/reports/models/slides.py
"""
Slide records handed to every renderer.

Each SlideType has exactly one content class. Renderers switch on
slide_type and can rely on the content class that goes with it:
Slide refuses any other pairing, and the module refuses to import if a
SlideType has no content class.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Dict, Optional, Tuple, Type, Union

from energy_proposals.services.energy_models import VppComparisonItem, YearProjection
from energy_proposals.utils.serialization import to_wire


class SlideType(str, Enum):
    COVER = "cover"
    EXECUTIVE_SUMMARY = "executive_summary"
    BILL_ANALYSIS = "bill_analysis"
    MONTHLY_USAGE = "monthly_usage"
    YEARLY_PROJECTION = "yearly_projection"
    GAS_FOOTPRINT = "gas_footprint"
    GAS_APPLIANCES = "gas_appliances"
    STRATEGIC_ASSESSMENT = "strategic_assessment"
    BATTERY_RECOMMENDATION = "battery_recommendation"
    SOLAR_RECOMMENDATION = "solar_recommendation"
    VPP_COMPARISON = "vpp_comparison"
    VPP_RECOMMENDATION = "vpp_recommendation"
    HOT_WATER = "hot_water"
    HEATING_COOLING = "heating_cooling"
    INDUCTION_COOKING = "induction_cooking"
    EV_ANALYSIS = "ev_analysis"
    EV_CHARGER = "ev_charger"
    POOL_HEAT_PUMP = "pool_heat_pump"
    ELECTRIFICATION_INVESTMENT = "electrification_investment"
    SAVINGS_SUMMARY = "savings_summary"
    FINANCIAL_SUMMARY = "financial_summary"
    ENVIRONMENTAL_IMPACT = "environmental_impact"
    ROADMAP = "roadmap"
    CONCLUSION = "conclusion"
    CONTACT = "contact"


# ------------------------------------------------------------
# Row types used inside content
# ------------------------------------------------------------
@dataclass(frozen=True)
class MonthlyUsagePoint:
    month: str
    usage_kwh: float
    season: str


@dataclass(frozen=True)
class ApplianceRow:
    appliance: str
    replacement: Optional[str]
    annual_savings: Optional[float]


@dataclass(frozen=True)
class InvestmentRow:
    item: str
    investment: float
    rebate: Optional[float]


@dataclass(frozen=True)
class Milestone:
    phase: int
    title: str
    timeline: str


# ------------------------------------------------------------
# Content per slide type
# ------------------------------------------------------------
@dataclass(frozen=True)
class CoverContent:
    customer_name: str
    customer_address: str
    prepared_date: date


@dataclass(frozen=True)
class ExecutiveSummaryContent:
    current_annual_cost: Optional[float]
    total_annual_savings: Optional[float]
    payback_years: Optional[float]
    payback_defined: Optional[bool]
    net_investment: Optional[float]
    recommended_battery_kwh: Optional[int]
    recommended_solar_kw: Optional[float]
    selected_vpp_provider: Optional[str]


@dataclass(frozen=True)
class BillAnalysisContent:
    retailer: Optional[str]
    billing_days: Optional[int]
    total_amount: Optional[float]
    daily_average_kwh: Optional[float]
    monthly_usage_kwh: Optional[float]
    yearly_usage_kwh: Optional[float]
    projected_annual_cost: Optional[float]
    annual_supply_charge: Optional[float]
    annual_usage_charge: Optional[float]
    annual_solar_credit: Optional[float]
    peak_rate_cents: Optional[float]
    off_peak_rate_cents: Optional[float]
    feed_in_tariff_cents: Optional[float]


@dataclass(frozen=True)
class MonthlyUsageContent:
    daily_average_kwh: Optional[float]
    monthly_usage_kwh: Optional[float]
    yearly_usage_kwh: Optional[float]
    months: Tuple[MonthlyUsagePoint, ...]


@dataclass(frozen=True)
class YearlyProjectionContent:
    yearly_usage_kwh: Optional[float]
    projected_annual_cost: Optional[float]
    current_energy_cost: float
    inflation_rate_percent: float
    ten_year_cost_no_action: float
    projection: Tuple[YearProjection, ...]


@dataclass(frozen=True)
class GasFootprintContent:
    gas_annual_cost: Optional[float]
    gas_kwh_equivalent: Optional[float]
    gas_co2_emissions: Optional[float]
    gas_annual_supply_charge: Optional[float]
    gas_annual_mj: Optional[float]


@dataclass(frozen=True)
class GasAppliancesContent:
    appliances: Tuple[ApplianceRow, ...]


@dataclass(frozen=True)
class StrategicAssessmentContent:
    advantages: Tuple[str, ...]
    considerations: Tuple[str, ...]


@dataclass(frozen=True)
class BatteryRecommendationContent:
    recommended_battery_kwh: Optional[int]
    battery_product: Optional[str]
    battery_estimated_cost: Optional[float]
    battery_reasoning: Optional[str]
    battery_rebate_amount: Optional[float]
    vpp_participation_assumed: Optional[bool]


@dataclass(frozen=True)
class SolarRecommendationContent:
    recommended_solar_kw: Optional[float]
    solar_panel_count: Optional[int]
    solar_annual_generation: Optional[float]
    solar_estimated_cost: Optional[float]
    solar_rebate_amount: Optional[float]


@dataclass(frozen=True)
class VppComparisonContent:
    providers: Tuple[VppComparisonItem, ...]


@dataclass(frozen=True)
class VppRecommendationContent:
    selected_vpp_provider: Optional[str]
    vpp_annual_value: Optional[float]
    vpp_daily_credit_annual: Optional[float]
    vpp_event_payments_annual: Optional[float]
    vpp_bundle_discount: Optional[float]
    strategic_fit: Optional[str]


@dataclass(frozen=True)
class HotWaterContent:
    hot_water_savings: Optional[float]
    current_gas_cost: Optional[float]
    heat_pump_cost: Optional[float]
    annual_supply_saved: Optional[float]  # daily supply charge x 365
    investment: Optional[float]
    rebate: Optional[float]


@dataclass(frozen=True)
class HeatingCoolingContent:
    heating_cooling_savings: Optional[float]
    current_gas_cost: Optional[float]
    reverse_cycle_cost: Optional[float]
    investment: Optional[float]
    rebate: Optional[float]


@dataclass(frozen=True)
class InductionCookingContent:
    cooking_savings: Optional[float]
    current_gas_cost: Optional[float]
    induction_cost: Optional[float]
    investment: Optional[float]
    rebate: Optional[float]


@dataclass(frozen=True)
class EvAnalysisContent:
    ev_petrol_cost: Optional[float]
    ev_grid_charge_cost: Optional[float]
    ev_solar_charge_cost: Optional[float]
    ev_annual_savings: Optional[float]
    km_per_year: Optional[int]
    consumption_per_100km: Optional[float]
    petrol_price_per_litre: Optional[float]


@dataclass(frozen=True)
class EvChargerContent:
    has_ev: bool
    ev_interest: str
    investment: Optional[float]
    rebate: Optional[float]


@dataclass(frozen=True)
class PoolHeatPumpContent:
    pool_volume_litres: Optional[float]
    recommended_kw: Optional[float]
    pool_heat_pump_savings: Optional[float]
    annual_operating_cost: Optional[float]
    investment: Optional[float]


@dataclass(frozen=True)
class ElectrificationInvestmentContent:
    items: Tuple[InvestmentRow, ...]
    electrification_investment: float
    electrification_rebates: float
    gas_annual_supply_charge: Optional[float]
    total_investment: Optional[float]
    total_rebates: Optional[float]
    net_investment: Optional[float]


@dataclass(frozen=True)
class SavingsSummaryContent:
    total_annual_savings: Optional[float]
    electricity_savings: Optional[float]
    gas_savings: Optional[float]
    vpp_annual_value: Optional[float]
    ev_annual_savings: Optional[float]
    hot_water_savings: Optional[float]
    heating_cooling_savings: Optional[float]
    cooking_savings: Optional[float]
    pool_heat_pump_savings: Optional[float]


@dataclass(frozen=True)
class FinancialSummaryContent:
    total_investment: Optional[float]
    total_rebates: Optional[float]
    net_investment: Optional[float]
    total_annual_savings: Optional[float]
    payback_years: Optional[float]
    payback_defined: Optional[bool]
    ten_year_savings: Optional[float]
    twenty_five_year_savings: Optional[float]


@dataclass(frozen=True)
class EnvironmentalImpactContent:
    co2_current_tonnes: Optional[float]
    co2_projected_tonnes: Optional[float]
    co2_reduction_tonnes: Optional[float]
    co2_reduction_percent: Optional[float]
    trees_equivalent: int


@dataclass(frozen=True)
class RoadmapContent:
    milestones: Tuple[Milestone, ...]


@dataclass(frozen=True)
class ConclusionContent:
    key_benefits: Tuple[str, ...]


@dataclass(frozen=True)
class ContactContent:
    prepared_by: str
    title: str
    company: str
    address: str
    phone: str
    email: str
    website: str


SlideContent = Union[
    CoverContent,
    ExecutiveSummaryContent,
    BillAnalysisContent,
    MonthlyUsageContent,
    YearlyProjectionContent,
    GasFootprintContent,
    GasAppliancesContent,
    StrategicAssessmentContent,
    BatteryRecommendationContent,
    SolarRecommendationContent,
    VppComparisonContent,
    VppRecommendationContent,
    HotWaterContent,
    HeatingCoolingContent,
    InductionCookingContent,
    EvAnalysisContent,
    EvChargerContent,
    PoolHeatPumpContent,
    ElectrificationInvestmentContent,
    SavingsSummaryContent,
    FinancialSummaryContent,
    EnvironmentalImpactContent,
    RoadmapContent,
    ConclusionContent,
    ContactContent,
]

CONTENT_TYPES: Dict[SlideType, Type] = {
    SlideType.COVER: CoverContent,
    SlideType.EXECUTIVE_SUMMARY: ExecutiveSummaryContent,
    SlideType.BILL_ANALYSIS: BillAnalysisContent,
    SlideType.MONTHLY_USAGE: MonthlyUsageContent,
    SlideType.YEARLY_PROJECTION: YearlyProjectionContent,
    SlideType.GAS_FOOTPRINT: GasFootprintContent,
    SlideType.GAS_APPLIANCES: GasAppliancesContent,
    SlideType.STRATEGIC_ASSESSMENT: StrategicAssessmentContent,
    SlideType.BATTERY_RECOMMENDATION: BatteryRecommendationContent,
    SlideType.SOLAR_RECOMMENDATION: SolarRecommendationContent,
    SlideType.VPP_COMPARISON: VppComparisonContent,
    SlideType.VPP_RECOMMENDATION: VppRecommendationContent,
    SlideType.HOT_WATER: HotWaterContent,
    SlideType.HEATING_COOLING: HeatingCoolingContent,
    SlideType.INDUCTION_COOKING: InductionCookingContent,
    SlideType.EV_ANALYSIS: EvAnalysisContent,
    SlideType.EV_CHARGER: EvChargerContent,
    SlideType.POOL_HEAT_PUMP: PoolHeatPumpContent,
    SlideType.ELECTRIFICATION_INVESTMENT: ElectrificationInvestmentContent,
    SlideType.SAVINGS_SUMMARY: SavingsSummaryContent,
    SlideType.FINANCIAL_SUMMARY: FinancialSummaryContent,
    SlideType.ENVIRONMENTAL_IMPACT: EnvironmentalImpactContent,
    SlideType.ROADMAP: RoadmapContent,
    SlideType.CONCLUSION: ConclusionContent,
    SlideType.CONTACT: ContactContent,
}

_unmapped = set(SlideType) - set(CONTENT_TYPES)
if _unmapped:
    raise RuntimeError(f"Slide types without a content class: {sorted(t.value for t in _unmapped)}")


# ------------------------------------------------------------
# Slide record
# ------------------------------------------------------------
@dataclass(frozen=True)
class Slide:
    slide_number: int
    slide_type: SlideType
    title: str
    is_conditional: bool
    is_included: bool
    content: SlideContent

    def __post_init__(self):
        expected = CONTENT_TYPES[self.slide_type]
        if not isinstance(self.content, expected):
            raise TypeError(
                f"{self.slide_type.value} slide needs {expected.__name__}, "
                f"got {type(self.content).__name__}"
            )

    def to_payload(self) -> dict:
        return to_wire(self)
