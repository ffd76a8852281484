# src/energy_proposals/reports/adapters/slide_assembler.py

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from energy_proposals.calculations.calculation_models import Calculations
from energy_proposals.models.customer import ApplianceCategory, Customer, appliance_category
from energy_proposals.reports.models.slides import (
    ApplianceRow,
    BatteryRecommendationContent,
    BillAnalysisContent,
    ConclusionContent,
    ContactContent,
    CoverContent,
    ElectrificationInvestmentContent,
    EnvironmentalImpactContent,
    EvAnalysisContent,
    EvChargerContent,
    ExecutiveSummaryContent,
    FinancialSummaryContent,
    GasAppliancesContent,
    GasFootprintContent,
    HeatingCoolingContent,
    HotWaterContent,
    InductionCookingContent,
    InvestmentRow,
    Milestone,
    MonthlyUsageContent,
    MonthlyUsagePoint,
    PoolHeatPumpContent,
    RoadmapContent,
    SavingsSummaryContent,
    Slide,
    SlideContent,
    SlideType,
    SolarRecommendationContent,
    StrategicAssessmentContent,
    VppComparisonContent,
    VppRecommendationContent,
    YearlyProjectionContent,
)
from energy_proposals.services.constants import ELECTRICITY_INFLATION_RATE, round_half_up
from energy_proposals.services.emissions import trees_equivalent
from energy_proposals.services.projection import cumulative_cost
from energy_proposals.utils.config import settings
from energy_proposals.utils.formatting import fmt_currency, fmt_number
from energy_proposals.utils.logger import get_logger

logger = get_logger(__name__)


class ListMode(Enum):
    FULL = "full"                    # every slide, canonical numbering, with flags
    INCLUDED_ONLY = "included_only"  # included slides, numbered from 1


@dataclass(frozen=True)
class SlideContext:
    customer: Customer
    calc: Calculations
    prepared_on: date
    contact: ContactContent


# Seasonal shape of a southern-hemisphere household load (Jan..Dec)
MONTHLY_PROFILE: Tuple[Tuple[str, float, str], ...] = (
    ("Jan", 0.75, "Summer"),
    ("Feb", 0.75, "Summer"),
    ("Mar", 0.90, "Autumn"),
    ("Apr", 1.05, "Autumn"),
    ("May", 1.20, "Winter onset"),
    ("Jun", 1.35, "Winter peak"),
    ("Jul", 1.35, "Winter peak"),
    ("Aug", 1.25, "Winter"),
    ("Sep", 1.10, "Spring"),
    ("Oct", 0.95, "Spring"),
    ("Nov", 0.85, "Summer onset"),
    ("Dec", 0.75, "Summer"),
)


def contact_from_settings() -> ContactContent:
    return ContactContent(
        prepared_by=settings.consultant_name,
        title=settings.consultant_title,
        company=settings.company_name,
        address=settings.company_address,
        phone=settings.company_phone,
        email=settings.company_email,
        website=settings.company_website,
    )


# =========================
# INCLUSION PREDICATES
# =========================
def _always(ctx: SlideContext) -> bool:
    return True


def _has_gas(ctx: SlideContext) -> bool:
    return ctx.calc.has_gas_bill


def _has_gas_appliances(ctx: SlideContext) -> bool:
    return _has_gas(ctx) and len(ctx.customer.gas_appliances) > 0


def _needs_solar(ctx: SlideContext) -> bool:
    return not ctx.customer.has_existing_solar and ctx.calc.recommended_solar_kw is not None


def _has_hot_water(ctx: SlideContext) -> bool:
    return (
        _has_gas(ctx)
        and ctx.customer.has_hot_water_appliance
        and ctx.calc.hot_water_savings is not None
    )


def _has_heating(ctx: SlideContext) -> bool:
    return (
        _has_gas(ctx)
        and ctx.customer.has_heating_appliance
        and ctx.calc.heating_cooling_savings is not None
    )


def _has_cooktop(ctx: SlideContext) -> bool:
    return (
        _has_gas(ctx)
        and ctx.customer.has_cooktop_appliance
        and ctx.calc.cooking_savings is not None
    )


def _has_ev_savings(ctx: SlideContext) -> bool:
    return ctx.customer.wants_ev and ctx.calc.ev_annual_savings is not None


def _wants_ev(ctx: SlideContext) -> bool:
    return ctx.customer.wants_ev


def _has_pool(ctx: SlideContext) -> bool:
    return ctx.customer.has_pool and ctx.calc.pool_heat_pump_savings is not None


def _has_electrification(ctx: SlideContext) -> bool:
    return _has_gas(ctx) and ctx.calc.has_electrification_investment


# =========================
# CONTENT BUILDERS
# =========================
def _cover(ctx: SlideContext) -> CoverContent:
    return CoverContent(
        customer_name=ctx.customer.full_name,
        customer_address=ctx.customer.address,
        prepared_date=ctx.prepared_on,
    )


def _executive_summary(ctx: SlideContext) -> ExecutiveSummaryContent:
    c = ctx.calc
    return ExecutiveSummaryContent(
        current_annual_cost=c.projected_annual_cost,
        total_annual_savings=c.total_annual_savings,
        payback_years=c.payback_years,
        payback_defined=c.payback_defined,
        net_investment=c.net_investment,
        recommended_battery_kwh=c.recommended_battery_kwh,
        recommended_solar_kw=c.recommended_solar_kw,
        selected_vpp_provider=c.selected_vpp_provider,
    )


def _bill_analysis(ctx: SlideContext) -> BillAnalysisContent:
    c = ctx.calc
    return BillAnalysisContent(
        retailer=c.bill_retailer,
        billing_days=c.bill_days,
        total_amount=c.bill_total_amount,
        daily_average_kwh=c.daily_average_kwh,
        monthly_usage_kwh=c.monthly_usage_kwh,
        yearly_usage_kwh=c.yearly_usage_kwh,
        projected_annual_cost=c.projected_annual_cost,
        annual_supply_charge=c.annual_supply_charge,
        annual_usage_charge=c.annual_usage_charge,
        annual_solar_credit=c.annual_solar_credit,
        peak_rate_cents=c.bill_peak_rate_cents,
        off_peak_rate_cents=c.bill_off_peak_rate_cents,
        feed_in_tariff_cents=c.bill_feed_in_tariff_cents,
    )


def _monthly_usage(ctx: SlideContext) -> MonthlyUsageContent:
    c = ctx.calc
    monthly = c.monthly_usage_kwh or 0.0
    return MonthlyUsageContent(
        daily_average_kwh=c.daily_average_kwh,
        monthly_usage_kwh=c.monthly_usage_kwh,
        yearly_usage_kwh=c.yearly_usage_kwh,
        months=tuple(
            MonthlyUsagePoint(month=m, usage_kwh=round_half_up(monthly * factor, 0), season=season)
            for m, factor, season in MONTHLY_PROFILE
        ),
    )


def _yearly_projection(ctx: SlideContext) -> YearlyProjectionContent:
    c = ctx.calc
    current = (c.projected_annual_cost or 0.0) + (c.gas_annual_cost or 0.0)
    return YearlyProjectionContent(
        yearly_usage_kwh=c.yearly_usage_kwh,
        projected_annual_cost=c.projected_annual_cost,
        current_energy_cost=current,
        inflation_rate_percent=ELECTRICITY_INFLATION_RATE * 100,
        ten_year_cost_no_action=cumulative_cost(current, 10),
        projection=c.cost_projection,
    )


def _gas_footprint(ctx: SlideContext) -> GasFootprintContent:
    c = ctx.calc
    return GasFootprintContent(
        gas_annual_cost=c.gas_annual_cost,
        gas_kwh_equivalent=c.gas_kwh_equivalent,
        gas_co2_emissions=c.gas_co2_emissions,
        gas_annual_supply_charge=c.gas_annual_supply_charge,
        gas_annual_mj=c.gas_annual_mj,
    )


def _appliance_row(name: str, calc: Calculations) -> ApplianceRow:
    category = appliance_category(name)
    if category is ApplianceCategory.HOT_WATER:
        return ApplianceRow(name, "Heat pump hot water", calc.hot_water_savings)
    if category is ApplianceCategory.HEATING:
        return ApplianceRow(name, "Reverse cycle air conditioning", calc.heating_cooling_savings)
    if category is ApplianceCategory.COOKING:
        return ApplianceRow(name, "Induction cooktop", calc.cooking_savings)
    return ApplianceRow(name, None, None)


def _gas_appliances(ctx: SlideContext) -> GasAppliancesContent:
    return GasAppliancesContent(
        appliances=tuple(_appliance_row(a, ctx.calc) for a in ctx.customer.gas_appliances)
    )


def _strategic_assessment(ctx: SlideContext) -> StrategicAssessmentContent:
    advantages = [
        "Reduce electricity costs",
        "Energy independence",
        "VPP income potential",
        "Environmental benefits",
    ]
    considerations = [
        "Upfront investment",
        "Payback period",
        "Technology maintenance",
    ]
    if ctx.calc.has_gas_bill:
        advantages.append("Eliminate the gas supply charge")
    if ctx.customer.has_existing_solar:
        considerations.append("Integration with the existing solar inverter")
    return StrategicAssessmentContent(tuple(advantages), tuple(considerations))


def _battery(ctx: SlideContext) -> BatteryRecommendationContent:
    c = ctx.calc
    return BatteryRecommendationContent(
        recommended_battery_kwh=c.recommended_battery_kwh,
        battery_product=c.battery_product,
        battery_estimated_cost=c.battery_estimated_cost,
        battery_reasoning=c.battery_reasoning,
        battery_rebate_amount=c.battery_rebate_amount,
        vpp_participation_assumed=c.vpp_participation_assumed,
    )


def _solar(ctx: SlideContext) -> SolarRecommendationContent:
    c = ctx.calc
    return SolarRecommendationContent(
        recommended_solar_kw=c.recommended_solar_kw,
        solar_panel_count=c.solar_panel_count,
        solar_annual_generation=c.solar_annual_generation,
        solar_estimated_cost=c.solar_estimated_cost,
        solar_rebate_amount=c.solar_rebate_amount,
    )


def _vpp_comparison(ctx: SlideContext) -> VppComparisonContent:
    return VppComparisonContent(providers=ctx.calc.vpp_provider_comparison)


def _vpp_recommendation(ctx: SlideContext) -> VppRecommendationContent:
    c = ctx.calc
    selected = c.vpp_provider_comparison[0] if c.vpp_provider_comparison else None
    return VppRecommendationContent(
        selected_vpp_provider=c.selected_vpp_provider,
        vpp_annual_value=c.vpp_annual_value,
        vpp_daily_credit_annual=c.vpp_daily_credit_annual,
        vpp_event_payments_annual=c.vpp_event_payments_annual,
        vpp_bundle_discount=c.vpp_bundle_discount,
        strategic_fit=selected.strategic_fit.value if selected else None,
    )


def _hot_water(ctx: SlideContext) -> HotWaterContent:
    c = ctx.calc
    return HotWaterContent(
        hot_water_savings=c.hot_water_savings,
        current_gas_cost=c.hot_water_current_gas_cost,
        heat_pump_cost=c.hot_water_heat_pump_cost,
        annual_supply_saved=c.hot_water_annual_supply_saved,
        investment=c.investment_heat_pump_hw,
        rebate=c.heat_pump_hw_rebate_amount,
    )


def _heating_cooling(ctx: SlideContext) -> HeatingCoolingContent:
    c = ctx.calc
    return HeatingCoolingContent(
        heating_cooling_savings=c.heating_cooling_savings,
        current_gas_cost=c.heating_current_gas_cost,
        reverse_cycle_cost=c.heating_rc_ac_cost,
        investment=c.investment_rc_ac,
        rebate=c.heat_pump_ac_rebate_amount,
    )


def _induction(ctx: SlideContext) -> InductionCookingContent:
    c = ctx.calc
    return InductionCookingContent(
        cooking_savings=c.cooking_savings,
        current_gas_cost=c.cooking_current_gas_cost,
        induction_cost=c.cooking_induction_cost,
        investment=c.investment_induction,
        rebate=c.induction_rebate_amount,
    )


def _ev_analysis(ctx: SlideContext) -> EvAnalysisContent:
    c = ctx.calc
    return EvAnalysisContent(
        ev_petrol_cost=c.ev_petrol_cost,
        ev_grid_charge_cost=c.ev_grid_charge_cost,
        ev_solar_charge_cost=c.ev_solar_charge_cost,
        ev_annual_savings=c.ev_annual_savings,
        km_per_year=c.ev_km_per_year,
        consumption_per_100km=c.ev_consumption_per_100km,
        petrol_price_per_litre=c.ev_petrol_price_per_litre,
    )


def _ev_charger(ctx: SlideContext) -> EvChargerContent:
    return EvChargerContent(
        has_ev=ctx.customer.has_ev,
        ev_interest=ctx.customer.ev_interest.value,
        investment=ctx.calc.investment_ev_charger,
        rebate=ctx.calc.ev_charger_rebate_amount,
    )


def _pool(ctx: SlideContext) -> PoolHeatPumpContent:
    c = ctx.calc
    return PoolHeatPumpContent(
        pool_volume_litres=ctx.customer.pool_volume_litres,
        recommended_kw=c.pool_recommended_kw,
        pool_heat_pump_savings=c.pool_heat_pump_savings,
        annual_operating_cost=c.pool_annual_operating_cost,
        investment=c.investment_pool_heat_pump,
    )


def _electrification(ctx: SlideContext) -> ElectrificationInvestmentContent:
    c = ctx.calc
    candidates = (
        ("Heat pump hot water", c.investment_heat_pump_hw, c.heat_pump_hw_rebate_amount),
        ("Reverse cycle air conditioning", c.investment_rc_ac, c.heat_pump_ac_rebate_amount),
        ("Induction cooktop", c.investment_induction, c.induction_rebate_amount),
    )
    rows = tuple(
        InvestmentRow(item=name, investment=amount, rebate=rebate)
        for name, amount, rebate in candidates
        if amount is not None
    )
    return ElectrificationInvestmentContent(
        items=rows,
        electrification_investment=sum(r.investment for r in rows),
        electrification_rebates=sum(r.rebate for r in rows if r.rebate is not None),
        gas_annual_supply_charge=c.gas_annual_supply_charge,
        total_investment=c.total_investment,
        total_rebates=c.total_rebates,
        net_investment=c.net_investment,
    )


def _savings_summary(ctx: SlideContext) -> SavingsSummaryContent:
    c = ctx.calc
    return SavingsSummaryContent(
        total_annual_savings=c.total_annual_savings,
        electricity_savings=c.electricity_savings,
        gas_savings=c.gas_savings,
        vpp_annual_value=c.vpp_annual_value,
        ev_annual_savings=c.ev_annual_savings,
        hot_water_savings=c.hot_water_savings,
        heating_cooling_savings=c.heating_cooling_savings,
        cooking_savings=c.cooking_savings,
        pool_heat_pump_savings=c.pool_heat_pump_savings,
    )


def _financial_summary(ctx: SlideContext) -> FinancialSummaryContent:
    c = ctx.calc
    return FinancialSummaryContent(
        total_investment=c.total_investment,
        total_rebates=c.total_rebates,
        net_investment=c.net_investment,
        total_annual_savings=c.total_annual_savings,
        payback_years=c.payback_years,
        payback_defined=c.payback_defined,
        ten_year_savings=c.ten_year_savings,
        twenty_five_year_savings=c.twenty_five_year_savings,
    )


def _environmental_impact(ctx: SlideContext) -> EnvironmentalImpactContent:
    c = ctx.calc
    return EnvironmentalImpactContent(
        co2_current_tonnes=c.co2_current_tonnes,
        co2_projected_tonnes=c.co2_projected_tonnes,
        co2_reduction_tonnes=c.co2_reduction_tonnes,
        co2_reduction_percent=c.co2_reduction_percent,
        trees_equivalent=trees_equivalent(c.co2_reduction_tonnes or 0.0),
    )


def _roadmap(ctx: SlideContext) -> RoadmapContent:
    c = ctx.calc
    steps: List[Tuple[str, str]] = [
        (
            "Battery Installation" if ctx.customer.has_existing_solar else "Solar & Battery Installation",
            "Month 1-2",
        )
    ]
    if c.selected_vpp_provider:
        steps.append(("VPP Enrollment", "Month 2"))
    if c.investment_heat_pump_hw is not None:
        steps.append(("Hot Water Upgrade", "Month 3-4"))
    if c.investment_rc_ac is not None:
        steps.append(("Heating & Cooling Upgrade", "Month 4-6"))
    if c.investment_induction is not None:
        steps.append(("Induction Cooktop", "Month 6"))
    if c.investment_ev_charger is not None:
        steps.append(("EV Charger Installation", "Month 6"))
    if c.investment_pool_heat_pump is not None:
        steps.append(("Pool Heat Pump", "Month 6-8"))

    return RoadmapContent(
        milestones=tuple(
            Milestone(phase=i, title=title, timeline=timeline)
            for i, (title, timeline) in enumerate(steps, start=1)
        )
    )


def _conclusion(ctx: SlideContext) -> ConclusionContent:
    c = ctx.calc
    if c.payback_defined:
        payback_line = f"{c.payback_years} year payback period"
    else:
        payback_line = "Payback depends on the final system selection"
    return ConclusionContent(
        key_benefits=(
            f"Save {fmt_currency(c.total_annual_savings)} annually",
            payback_line,
            f"Reduce CO2 by {fmt_number(c.co2_reduction_tonnes, 1)} tonnes/year",
            "Energy independence and price protection",
        )
    )


def _contact(ctx: SlideContext) -> ContactContent:
    return ctx.contact


# =========================
# CANONICAL SEQUENCE
# =========================
@dataclass(frozen=True)
class SlideSpec:
    slide_type: SlideType
    title: str
    is_conditional: bool
    include: Callable[[SlideContext], bool]
    build: Callable[[SlideContext], SlideContent]


SLIDE_SEQUENCE: Tuple[SlideSpec, ...] = (
    SlideSpec(SlideType.COVER, "Cover Page", False, _always, _cover),
    SlideSpec(SlideType.EXECUTIVE_SUMMARY, "Executive Summary", False, _always, _executive_summary),
    SlideSpec(SlideType.BILL_ANALYSIS, "Current Bill Analysis", False, _always, _bill_analysis),
    SlideSpec(SlideType.MONTHLY_USAGE, "Monthly Usage Analysis", False, _always, _monthly_usage),
    SlideSpec(SlideType.YEARLY_PROJECTION, "Yearly Cost Projection", False, _always, _yearly_projection),
    SlideSpec(SlideType.GAS_FOOTPRINT, "Current Gas Footprint", True, _has_gas, _gas_footprint),
    SlideSpec(SlideType.GAS_APPLIANCES, "Gas Appliance Inventory", True, _has_gas_appliances, _gas_appliances),
    SlideSpec(SlideType.STRATEGIC_ASSESSMENT, "Strategic Assessment", False, _always, _strategic_assessment),
    SlideSpec(SlideType.BATTERY_RECOMMENDATION, "Recommended Battery Size", False, _always, _battery),
    SlideSpec(SlideType.SOLAR_RECOMMENDATION, "Proposed Solar PV System", True, _needs_solar, _solar),
    SlideSpec(SlideType.VPP_COMPARISON, "VPP Provider Comparison", False, _always, _vpp_comparison),
    SlideSpec(SlideType.VPP_RECOMMENDATION, "VPP Recommendation", False, _always, _vpp_recommendation),
    SlideSpec(SlideType.HOT_WATER, "Hot Water Electrification", True, _has_hot_water, _hot_water),
    SlideSpec(SlideType.HEATING_COOLING, "Heating & Cooling Upgrade", True, _has_heating, _heating_cooling),
    SlideSpec(SlideType.INDUCTION_COOKING, "Induction Cooking Upgrade", True, _has_cooktop, _induction),
    SlideSpec(SlideType.EV_ANALYSIS, "EV Analysis - Low KM Vehicle", True, _has_ev_savings, _ev_analysis),
    SlideSpec(SlideType.EV_CHARGER, "EV Charger Recommendation", True, _wants_ev, _ev_charger),
    SlideSpec(SlideType.POOL_HEAT_PUMP, "Pool Heat Pump", True, _has_pool, _pool),
    SlideSpec(
        SlideType.ELECTRIFICATION_INVESTMENT,
        "Full Electrification Investment",
        True,
        _has_electrification,
        _electrification,
    ),
    SlideSpec(SlideType.SAVINGS_SUMMARY, "Total Savings Summary", False, _always, _savings_summary),
    SlideSpec(SlideType.FINANCIAL_SUMMARY, "Financial Summary & Payback", False, _always, _financial_summary),
    SlideSpec(SlideType.ENVIRONMENTAL_IMPACT, "Environmental Impact", False, _always, _environmental_impact),
    SlideSpec(SlideType.ROADMAP, "Recommended Roadmap", False, _always, _roadmap),
    SlideSpec(SlideType.CONCLUSION, "Conclusion", False, _always, _conclusion),
    SlideSpec(SlideType.CONTACT, "Contact", False, _always, _contact),
)

_sequenced = [spec.slide_type for spec in SLIDE_SEQUENCE]
if sorted(_sequenced, key=lambda t: t.value) != sorted(SlideType, key=lambda t: t.value):
    raise RuntimeError("SLIDE_SEQUENCE must list every SlideType exactly once")


def renumber(slides: Sequence[Slide]) -> List[Slide]:
    """Number slides contiguously from 1 in their given order."""
    return [replace(s, slide_number=i) for i, s in enumerate(slides, start=1)]


def included_slides(slides: Sequence[Slide]) -> List[Slide]:
    """FULL list -> INCLUDED_ONLY list."""
    return renumber([s for s in slides if s.is_included])


def build_proposal_slides(
    customer: Customer,
    calc: Calculations,
    mode: ListMode = ListMode.FULL,
    prepared_on: Optional[date] = None,
    contact: Optional[ContactContent] = None,
) -> List[Slide]:
    """
    Build the slide list for one proposal.

    Order is fixed by SLIDE_SEQUENCE; only inclusion varies.
    FULL keeps every slide at its canonical position (1..25).
    INCLUDED_ONLY drops excluded slides and renumbers from 1.
    """
    ctx = SlideContext(
        customer=customer,
        calc=calc,
        prepared_on=prepared_on or date.today(),
        contact=contact or contact_from_settings(),
    )

    slides: List[Slide] = []
    for position, spec in enumerate(SLIDE_SEQUENCE, start=1):
        slides.append(
            Slide(
                slide_number=position,
                slide_type=spec.slide_type,
                title=spec.title,
                is_conditional=spec.is_conditional,
                is_included=spec.include(ctx),
                content=spec.build(ctx),
            )
        )

    included_count = sum(1 for s in slides if s.is_included)
    logger.info(
        "Assembled slides | customer=%s included=%s/%s mode=%s",
        customer.full_name, included_count, len(slides), mode.value,
    )

    if mode is ListMode.INCLUDED_ONLY:
        return included_slides(slides)
    return slides
