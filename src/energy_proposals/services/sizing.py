# src/energy_proposals/services/sizing.py
"""
Battery and solar sizing.

Rules:
- Battery sizes always come from the standard ladder
- Ladder ties resolve to the first (smaller) entry
- Solar is only sized for homes without an existing system
"""

import math

import numpy as np

from energy_proposals.services.constants import (
    BATTERY_COST_PER_KWH,
    BATTERY_DAILY_USAGE_FRACTION,
    BATTERY_EV_BUFFER_KWH,
    BATTERY_PRODUCT,
    BATTERY_SIZE_LADDER_KWH,
    BATTERY_VPP_MINIMUM_KWH,
    DAYS_PER_YEAR,
    EV_KM_PER_YEAR,
    EV_KWH_PER_100KM,
    SOLAR_BATTERY_CYCLE_FRACTION,
    SOLAR_COST_PER_KW,
    SOLAR_OVERSIZE_FACTOR,
    SOLAR_PANEL_WATTS,
    SOLAR_SIZE_STEP_KW,
    SOLAR_YIELD_KWH_PER_KW_DAY,
    round_half_up,
    round_up_to_step,
)
from energy_proposals.services.energy_models import BatteryRecommendation, SolarRecommendation

_LADDER = np.array(BATTERY_SIZE_LADDER_KWH, dtype=float)


def snap_to_battery_ladder(raw_kwh: float) -> int:
    # argmin returns the first index among equal distances
    idx = int(np.argmin(np.abs(_LADDER - raw_kwh)))
    return int(BATTERY_SIZE_LADDER_KWH[idx])


def size_battery(
    daily_usage_kwh: float,
    wants_ev: bool,
    vpp_participation: bool,
) -> BatteryRecommendation:
    raw = daily_usage_kwh * BATTERY_DAILY_USAGE_FRACTION
    reasoning = "Sized to cover evening and overnight usage (45% of daily load)"

    if wants_ev:
        raw += BATTERY_EV_BUFFER_KWH
        reasoning += ", plus EV charging buffer"

    if vpp_participation and raw < BATTERY_VPP_MINIMUM_KWH:
        raw = BATTERY_VPP_MINIMUM_KWH
        reasoning += f", minimum {BATTERY_VPP_MINIMUM_KWH}kWh for VPP income"

    recommended = snap_to_battery_ladder(raw)

    return BatteryRecommendation(
        raw_kwh=round_half_up(raw, 2),
        recommended_kwh=recommended,
        estimated_cost=float(recommended * BATTERY_COST_PER_KWH),
        reasoning=reasoning,
        product=BATTERY_PRODUCT,
    )


def size_solar(
    yearly_usage_kwh: float,
    battery_kwh: float,
    wants_ev: bool,
) -> SolarRecommendation:
    target = yearly_usage_kwh * SOLAR_OVERSIZE_FACTOR
    target += battery_kwh * DAYS_PER_YEAR * SOLAR_BATTERY_CYCLE_FRACTION
    if wants_ev:
        target += EV_KM_PER_YEAR / 100 * EV_KWH_PER_100KM

    raw_kw = target / (SOLAR_YIELD_KWH_PER_KW_DAY * DAYS_PER_YEAR)
    system_kw = round_up_to_step(raw_kw, SOLAR_SIZE_STEP_KW)
    panel_count = math.ceil(round(system_kw * 1000 / SOLAR_PANEL_WATTS, 9))

    return SolarRecommendation(
        target_generation_kwh=round_half_up(target, 0),
        recommended_kw=system_kw,
        panel_count=panel_count,
        annual_generation_kwh=round_half_up(system_kw * SOLAR_YIELD_KWH_PER_KW_DAY * DAYS_PER_YEAR, 0),
        estimated_cost=round_half_up(system_kw * SOLAR_COST_PER_KW, 0),
    )
