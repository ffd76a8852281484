from energy_proposals.services.constants import (
    CO2_KG_PER_KWH_GRID,
    CO2_KG_PER_MJ_GAS,
    TREES_PER_TONNE_CO2,
    round_half_up,
)
from energy_proposals.services.energy_models import EmissionsResult


def calculate_emissions(
    annual_kwh: float,
    annual_gas_mj: float,
    solar_generation_kwh: float,
    gas_eliminated: bool,
) -> EmissionsResult:
    """
    Household CO2 today vs after the proposed system.

    Solar offsets grid usage down to zero, never below. The gas term drops
    out entirely when the proposal electrifies the gas appliances.
    """
    gas_kg = annual_gas_mj * CO2_KG_PER_MJ_GAS
    current = (annual_kwh * CO2_KG_PER_KWH_GRID + gas_kg) / 1000

    grid_kwh = max(0.0, annual_kwh - solar_generation_kwh)
    projected = (grid_kwh * CO2_KG_PER_KWH_GRID + (0.0 if gas_eliminated else gas_kg)) / 1000

    reduction = current - projected
    percent = reduction / current * 100 if current > 0 else 0.0

    return EmissionsResult(
        current_co2_tonnes=round_half_up(current, 2),
        projected_co2_tonnes=round_half_up(projected, 2),
        reduction_tonnes=round_half_up(reduction, 2),
        reduction_percent=round_half_up(percent, 1),
    )


def trees_equivalent(reduction_tonnes: float) -> int:
    return int(round_half_up(reduction_tonnes * TREES_PER_TONNE_CO2, 0))
