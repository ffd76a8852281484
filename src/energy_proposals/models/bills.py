from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


# ------------------------------------------------------------
# Electricity bill (one billing period, as extracted)
# ------------------------------------------------------------
@dataclass(frozen=True)
class ElectricityBill:
    total_usage_kwh: float
    total_amount: float
    billing_days: Optional[int] = None
    retailer: Optional[str] = None
    billing_period_start: Optional[date] = None
    billing_period_end: Optional[date] = None
    daily_supply_charge: Optional[float] = None

    # Tariff breakdown
    peak_usage_kwh: Optional[float] = None
    off_peak_usage_kwh: Optional[float] = None
    shoulder_usage_kwh: Optional[float] = None
    peak_rate_cents: Optional[float] = None
    off_peak_rate_cents: Optional[float] = None
    shoulder_rate_cents: Optional[float] = None
    usage_rate_cents: Optional[float] = None

    # Solar
    feed_in_tariff_cents: Optional[float] = None
    solar_exports_kwh: Optional[float] = None

    # 0-100, reported by the extraction step
    extraction_confidence: Optional[float] = None


# ------------------------------------------------------------
# Gas bill
# ------------------------------------------------------------
@dataclass(frozen=True)
class GasBill:
    gas_usage_mj: float
    total_amount: float
    billing_days: Optional[int] = None
    retailer: Optional[str] = None
    billing_period_start: Optional[date] = None
    billing_period_end: Optional[date] = None
    daily_supply_charge: Optional[float] = None
    gas_rate_cents_per_mj: Optional[float] = None
    extraction_confidence: Optional[float] = None
