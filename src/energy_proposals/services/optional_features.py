from energy_proposals.services.constants import (
    EV_KM_PER_YEAR,
    EV_KWH_PER_100KM,
    HEAT_PUMP_COP,
    PETROL_L_PER_100KM,
    PETROL_PRICE_PER_LITRE,
    POOL_GAS_COST_RATIO,
    POOL_HEATING_DAYS,
    POOL_HOURS_PER_DAY,
    POOL_KW_PER_1000L,
    round_half_up,
)
from energy_proposals.services.energy_models import EvSavings, PoolHeatPumpEstimate


def estimate_pool_heat_pump(pool_volume_litres: float, electricity_rate: float) -> PoolHeatPumpEstimate:
    """
    Pool heating with a heat pump for six months a year, 8 hours a day.
    Gas heating for the same pool is taken as 3.5x the heat pump running cost.
    """
    recommended_kw = pool_volume_litres / 1000 * POOL_KW_PER_1000L
    annual_kwh = recommended_kw * POOL_HOURS_PER_DAY * POOL_HEATING_DAYS / HEAT_PUMP_COP

    operating_cost = round_half_up(annual_kwh * electricity_rate / 100, 0)
    gas_cost = round_half_up(operating_cost * POOL_GAS_COST_RATIO, 0)

    return PoolHeatPumpEstimate(
        recommended_kw=round_half_up(recommended_kw, 1),
        annual_kwh=round_half_up(annual_kwh, 0),
        annual_operating_cost=operating_cost,
        gas_heating_cost=gas_cost,
        savings_vs_gas=gas_cost - operating_cost,
    )


def estimate_ev_savings(electricity_rate: float) -> EvSavings:
    annual_kwh = EV_KM_PER_YEAR / 100 * EV_KWH_PER_100KM
    petrol_cost = round_half_up(EV_KM_PER_YEAR / 100 * PETROL_L_PER_100KM * PETROL_PRICE_PER_LITRE, 0)
    grid_cost = round_half_up(annual_kwh * electricity_rate / 100, 0)
    solar_cost = 0.0

    return EvSavings(
        km_per_year=EV_KM_PER_YEAR,
        annual_kwh=annual_kwh,
        petrol_annual_cost=petrol_cost,
        grid_charge_cost=grid_cost,
        solar_charge_cost=solar_cost,
        savings_vs_petrol=petrol_cost - grid_cost,
        savings_with_solar=petrol_cost - solar_cost,
    )
