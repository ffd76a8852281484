from typing import List

from energy_proposals.services.constants import (
    ELECTRICITY_INFLATION_RATE,
    PROJECTION_YEARS,
    round_half_up,
)
from energy_proposals.services.energy_models import YearProjection


def project_costs(
    current_annual_cost: float,
    annual_savings: float,
    years: int = PROJECTION_YEARS,
    inflation_rate: float = ELECTRICITY_INFLATION_RATE,
) -> List[YearProjection]:
    """
    Year-by-year energy cost with and without the proposed system.

    Savings are held flat while prices inflate, and the cost with the
    system never drops below zero.
    """
    projections: List[YearProjection] = []
    cumulative = 0.0

    for year in range(1, years + 1):
        inflated = current_annual_cost * (1 + inflation_rate) ** year
        with_system = max(0.0, inflated - annual_savings)
        cumulative += inflated - with_system

        projections.append(
            YearProjection(
                year=year,
                inflated_cost=round_half_up(inflated, 0),
                cost_with_system=round_half_up(with_system, 0),
                cumulative_saving=round_half_up(cumulative, 0),
            )
        )

    return projections


def cumulative_cost(current_annual_cost: float, years: int, inflation_rate: float = ELECTRICITY_INFLATION_RATE) -> float:
    """Total spend over `years` with no action, starting at today's price."""
    return round_half_up(
        sum(current_annual_cost * (1 + inflation_rate) ** i for i in range(years)),
        0,
    )
