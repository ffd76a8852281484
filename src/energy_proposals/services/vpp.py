# src/energy_proposals/services/vpp.py
"""
VPP provider comparison.

Rules:
- Only providers available in the customer's state are compared
- A customer with a gas bill is only offered gas-bundle providers
- Missing credits / payments / discounts count as 0, missing event counts as 10
- Output is sorted by estimated annual value, highest first; equal values
  keep the order of the provider list
"""

from typing import List, Sequence

import pandas as pd

from energy_proposals.models.reference import VppProvider
from energy_proposals.services.constants import (
    DAYS_PER_YEAR,
    DEFAULT_VPP_EVENTS_PER_YEAR,
    round_half_up,
)
from energy_proposals.services.energy_models import StrategicFit, VppComparisonItem
from energy_proposals.utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = [
    "provider",
    "program_name",
    "daily_credit",
    "event_payment",
    "events_per_year",
    "bundle_discount",
    "has_gas_bundle",
]


def fit_score(annual_value: float, needs_gas_bundle: bool, has_gas_bundle: bool) -> int:
    score = 0
    if annual_value >= 500:
        score += 3
    elif annual_value >= 300:
        score += 2
    elif annual_value >= 100:
        score += 1

    if needs_gas_bundle:
        if has_gas_bundle:
            score += 2
    else:
        score += 1
    return score


def strategic_fit(score: int) -> StrategicFit:
    if score >= 4:
        return StrategicFit.EXCELLENT
    if score >= 3:
        return StrategicFit.GOOD
    if score >= 2:
        return StrategicFit.MODERATE
    return StrategicFit.POOR


def eligible_providers(
    providers: Sequence[VppProvider],
    state: str,
    needs_gas_bundle: bool,
) -> List[VppProvider]:
    state = (state or "").upper()
    eligible = [p for p in providers if state in {s.upper() for s in p.available_states}]
    if needs_gas_bundle:
        eligible = [p for p in eligible if p.has_gas_bundle]
    return eligible


def compare_vpp_providers(
    providers: Sequence[VppProvider],
    state: str,
    needs_gas_bundle: bool,
) -> List[VppComparisonItem]:
    eligible = eligible_providers(providers, state, needs_gas_bundle)
    logger.debug(
        "VPP comparison | state=%s gas_bundle=%s eligible=%s/%s",
        state, needs_gas_bundle, len(eligible), len(providers),
    )
    if not eligible:
        return []

    df = pd.DataFrame(
        [
            (
                p.name,
                p.program_name,
                p.daily_credit,
                p.event_payment,
                p.estimated_events_per_year,
                p.bundle_discount,
                p.has_gas_bundle,
            )
            for p in eligible
        ],
        columns=_COLUMNS,
    )

    for col in ("daily_credit", "event_payment", "bundle_discount"):
        df[col] = pd.to_numeric(df[col], errors="coerce").fillna(0.0)
    df["events_per_year"] = (
        pd.to_numeric(df["events_per_year"], errors="coerce").fillna(DEFAULT_VPP_EVENTS_PER_YEAR)
    )

    # Components are rounded first so the value is exactly their sum
    def whole(series: pd.Series) -> pd.Series:
        return series.map(lambda v: round_half_up(v, 0))

    df["daily_credit_annual"] = whole(df["daily_credit"] * DAYS_PER_YEAR)
    df["event_payments_annual"] = whole(df["event_payment"] * df["events_per_year"])
    df["bundle_discount"] = whole(df["bundle_discount"])
    df["annual_value"] = (
        df["daily_credit_annual"] + df["event_payments_annual"] + df["bundle_discount"]
    )

    df["fit_score"] = [
        fit_score(value, needs_gas_bundle, bool(bundle))
        for value, bundle in zip(df["annual_value"], df["has_gas_bundle"])
    ]

    df = df.sort_values("annual_value", ascending=False, kind="stable")

    return [
        VppComparisonItem(
            provider=row.provider,
            program_name=row.program_name,
            daily_credit_annual=float(row.daily_credit_annual),
            event_payments_annual=float(row.event_payments_annual),
            bundle_discount=float(row.bundle_discount),
            estimated_annual_value=float(row.annual_value),
            has_gas_bundle=bool(row.has_gas_bundle),
            fit_score=int(row.fit_score),
            strategic_fit=strategic_fit(int(row.fit_score)),
        )
        for row in df.itertuples(index=False)
    ]
