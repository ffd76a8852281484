# src/energy_proposals/services/constants.py
"""
Domain constants and numeric helpers shared by every calculator.

Rules:
- Constants are indicative domain assumptions, not measured values
- Rates are cents (per kWh or per MJ) unless the name says dollars
- Helpers are pure; no calculator keeps state between calls
"""

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

# ------------------------------------------------------------
# Billing defaults
# ------------------------------------------------------------
DEFAULT_BILLING_DAYS = 90
DEFAULT_ELECTRICITY_RATE_CENTS = 30.0
DEFAULT_GAS_RATE_CENTS_PER_MJ = 3.5
DEFAULT_FEED_IN_TARIFF_CENTS = 5.0
DEFAULT_DAILY_SUPPLY_CHARGE = 1.20

DAYS_PER_YEAR = 365
DAYS_PER_MONTH = 30

# ------------------------------------------------------------
# Gas / emissions
# ------------------------------------------------------------
GAS_MJ_TO_KWH = 0.2778
CO2_KG_PER_KWH_GRID = 0.79
CO2_KG_PER_MJ_GAS = 0.0512
GAS_ELIMINATION_SAVINGS_FRACTION = 0.85
TREES_PER_TONNE_CO2 = 45

# ------------------------------------------------------------
# Electrification
# ------------------------------------------------------------
HOT_WATER_GAS_SHARE = 0.40
HEATING_GAS_SHARE = 0.35
COOKING_GAS_SHARE = 0.05
HEAT_PUMP_COP = 4.0
INDUCTION_EFFICIENCY_RATIO = 2.25

# ------------------------------------------------------------
# Pool heat pump
# ------------------------------------------------------------
POOL_KW_PER_1000L = 0.6
POOL_HOURS_PER_DAY = 8
POOL_HEATING_DAYS = 182.5
POOL_GAS_COST_RATIO = 3.5

# ------------------------------------------------------------
# EV
# ------------------------------------------------------------
EV_KM_PER_YEAR = 10_000
EV_KWH_PER_100KM = 15
PETROL_L_PER_100KM = 8
PETROL_PRICE_PER_LITRE = 1.80

# ------------------------------------------------------------
# Battery / solar sizing
# ------------------------------------------------------------
BATTERY_DAILY_USAGE_FRACTION = 0.45
BATTERY_EV_BUFFER_KWH = 5
BATTERY_VPP_MINIMUM_KWH = 10
BATTERY_SIZE_LADDER_KWH = (5, 7, 10, 13, 15, 20, 26, 30)
BATTERY_COST_PER_KWH = 900
BATTERY_PRODUCT = "Sigenergy SigenStor"

SOLAR_OVERSIZE_FACTOR = 1.1
SOLAR_BATTERY_CYCLE_FRACTION = 0.5
SOLAR_YIELD_KWH_PER_KW_DAY = 4
SOLAR_SIZE_STEP_KW = 0.5
SOLAR_PANEL_WATTS = 400
SOLAR_COST_PER_KW = 1100
SOLAR_SELF_CONSUMPTION = 0.80
BATTERY_EXPORT_SHIFT = 0.30

# ------------------------------------------------------------
# VPP
# ------------------------------------------------------------
DEFAULT_VPP_EVENTS_PER_YEAR = 10

# ------------------------------------------------------------
# Indicative hardware prices ($)
# ------------------------------------------------------------
PRICE_HEAT_PUMP_HOT_WATER = 3500
PRICE_REVERSE_CYCLE_AC = 8000
PRICE_INDUCTION_COOKTOP = 2000
PRICE_EV_CHARGER = 1500
PRICE_POOL_HEAT_PUMP = 4000

# ------------------------------------------------------------
# Long-range projection
# ------------------------------------------------------------
ELECTRICITY_INFLATION_RATE = 0.035
PROJECTION_YEARS = 25


# ------------------------------------------------------------
# Helpers
# ------------------------------------------------------------
def round_half_up(value: float, places: int = 2) -> float:
    """Round like a cashier: 0.5 always goes away from zero."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def resolve_billing_days(billing_days: Optional[int]) -> int:
    """Absent or zero billing days fall back to a quarterly bill."""
    return billing_days if billing_days else DEFAULT_BILLING_DAYS


def annualise(value: float, billing_days: int) -> float:
    return value * DAYS_PER_YEAR / billing_days


def round_up_to_step(value: float, step: float) -> float:
    # Float noise such as 6.0000000001 must not bump a whole step
    return math.ceil(round(value / step, 9)) * step
