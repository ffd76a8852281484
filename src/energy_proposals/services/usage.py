from energy_proposals.models.bills import ElectricityBill, GasBill
from energy_proposals.services.constants import (
    CO2_KG_PER_MJ_GAS,
    DAYS_PER_MONTH,
    DAYS_PER_YEAR,
    GAS_MJ_TO_KWH,
    annualise,
    resolve_billing_days,
    round_half_up,
)
from energy_proposals.services.energy_models import GasAnalysis, UsageProjection


def project_usage(bill: ElectricityBill) -> UsageProjection:
    """
    Normalise one billing period into daily / monthly / yearly figures.

    Monthly and yearly both scale the unrounded daily average, so
    monthly == daily * 30 and yearly == daily * 365 up to output rounding.
    """
    days = resolve_billing_days(bill.billing_days)
    usage = bill.total_usage_kwh or 0.0
    amount = bill.total_amount or 0.0

    daily_kwh = usage / days
    daily_cost = amount / days

    return UsageProjection(
        daily_average_kwh=round_half_up(daily_kwh, 2),
        monthly_usage_kwh=round_half_up(daily_kwh * DAYS_PER_MONTH, 2),
        yearly_usage_kwh=round_half_up(daily_kwh * DAYS_PER_YEAR, 2),
        daily_average_cost=round_half_up(daily_cost, 2),
        projected_annual_cost=round_half_up(daily_cost * DAYS_PER_YEAR, 2),
    )


def analyse_gas(bill: GasBill) -> GasAnalysis:
    days = resolve_billing_days(bill.billing_days)
    mj = bill.gas_usage_mj or 0.0
    amount = bill.total_amount or 0.0

    return GasAnalysis(
        annual_gas_cost=round_half_up(annualise(amount, days), 2),
        daily_gas_cost=round_half_up(amount / days, 2),
        annual_gas_mj=round_half_up(annualise(mj, days), 2),
        gas_kwh_equivalent=round_half_up(mj * GAS_MJ_TO_KWH, 2),
        co2_emissions_kg=round_half_up(mj * CO2_KG_PER_MJ_GAS * (DAYS_PER_YEAR / days), 2),
    )
