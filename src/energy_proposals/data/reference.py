# src/energy_proposals/data/reference.py
"""
Reference data: VPP providers and state rebates.

Both lists are read-only inputs to the calculation. They come from CSV
files when paths are configured, otherwise from the seed lists below.
"""

from pathlib import Path
from typing import List, Optional, Tuple

import pandas as pd

from energy_proposals.models.reference import RebateType, StateRebate, VppProvider
from energy_proposals.utils.config import settings
from energy_proposals.utils.errors import ReferenceDataError
from energy_proposals.utils.logger import get_logger

logger = get_logger(__name__)

VPP_COLUMNS = ["name", "available_states"]
REBATE_COLUMNS = ["state", "rebate_type", "amount"]

_MAINLAND = ("NSW", "VIC", "QLD", "SA")

# =========================
# SEED DATA
# =========================
# Indicative credit and event figures, not published plan prices
SEED_VPP_PROVIDERS: Tuple[VppProvider, ...] = (
    VppProvider("Amber for Batteries", _MAINLAND, "SmartShift", 0.50, 15.0, 12, 0.0, False),
    VppProvider("Tesla VPP", ("NSW", "VIC", "SA"), "Tesla Energy Plan", 0.35, 10.0, 10, 0.0, False),
    VppProvider("Reposit", _MAINLAND + ("TAS",), "GridCredits", 0.30, 12.0, 12, 0.0, False),
    VppProvider("AGL VPP", _MAINLAND, "Bring Your Own Battery", 0.30, 10.0, 10, 100.0, True),
    VppProvider("Origin VPP", _MAINLAND, "Origin Loop", 0.25, 8.0, 12, 150.0, True),
    VppProvider("Energy Australia", _MAINLAND, "Battery Rewards", 0.20, 10.0, 8, 120.0, True),
    VppProvider("Powershop", _MAINLAND + ("TAS",), "Grid Rewards", 0.28, 6.0, None, 0.0, False),
    VppProvider("Globird", _MAINLAND, "ZeroHero VPP", 0.30, 5.0, 10, 80.0, True),
)

SEED_STATE_REBATES: Tuple[StateRebate, ...] = (
    StateRebate("VIC", RebateType.SOLAR, 1400, "Solar Homes Program"),
    StateRebate("VIC", RebateType.BATTERY, 2950, "Solar Battery Rebate"),
    StateRebate("VIC", RebateType.HEAT_PUMP_HW, 1000, "Hot Water Rebate"),
    StateRebate("VIC", RebateType.HEAT_PUMP_AC, 1000, "Home Heating & Cooling Upgrade"),
    StateRebate("NSW", RebateType.SOLAR, 600, "Energy Savings Scheme"),
    StateRebate("NSW", RebateType.BATTERY, 2400, "Empowering Homes"),
    StateRebate("NSW", RebateType.HEAT_PUMP_HW, 800, "Energy Savings Scheme - HW"),
    StateRebate("QLD", RebateType.SOLAR, 500, "QLD Solar Rebate"),
    StateRebate("QLD", RebateType.BATTERY, 3000, "Battery Booster"),
    StateRebate("SA", RebateType.SOLAR, 500, "SA Home Battery Scheme"),
    StateRebate("SA", RebateType.BATTERY, 4500, "SA Home Battery Scheme"),
    StateRebate("SA", RebateType.HEAT_PUMP_HW, 700, "Retailer Energy Productivity Scheme"),
    StateRebate("WA", RebateType.SOLAR, 400, "Distributed Energy Buyback"),
    StateRebate("WA", RebateType.BATTERY, 2000, "WA Battery Subsidy"),
    StateRebate("TAS", RebateType.SOLAR, 500, "TAS Energy Saver Loan"),
    StateRebate("TAS", RebateType.BATTERY, 2000, "TAS Battery Scheme"),
    StateRebate("ACT", RebateType.SOLAR, 800, "Sustainable Household Scheme"),
    StateRebate("ACT", RebateType.BATTERY, 3500, "Next Gen Energy Storage"),
    StateRebate("ACT", RebateType.HEAT_PUMP_HW, 1200, "Home Energy Support"),
    StateRebate("NT", RebateType.SOLAR, 400, "NT Solar Scheme"),
    StateRebate("NT", RebateType.BATTERY, 1500, "NT Battery Support"),
)


# =========================
# HELPERS
# =========================
def _read_csv(path: Path, required: List[str]) -> pd.DataFrame:
    path = Path(path)
    if not path.exists():
        raise ReferenceDataError(f"Reference file not found: {path}")

    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    df.columns = [c.strip().lower() for c in df.columns]

    missing = [c for c in required if c not in df.columns]
    if missing:
        raise ReferenceDataError(f"{path.name} is missing columns: {', '.join(missing)}")
    return df


def _opt_float(raw: str, column: str, path: Path) -> Optional[float]:
    raw = (raw or "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError as e:
        raise ReferenceDataError(f"{path.name}: {column}={raw!r} is not a number") from e


def _flag(raw: str, default: bool) -> bool:
    raw = (raw or "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "y")


# =========================
# LOADERS
# =========================
def load_vpp_providers(path: Path) -> List[VppProvider]:
    """
    available_states holds state codes separated by '|' or ';' (e.g. "NSW|VIC").
    Blank numeric cells are read as missing, not 0.
    """
    df = _read_csv(path, VPP_COLUMNS)
    providers: List[VppProvider] = []

    for _, r in df.iterrows():
        states = tuple(
            s.strip().upper()
            for s in r["available_states"].replace(";", "|").split("|")
            if s.strip()
        )
        events = _opt_float(r.get("estimated_events_per_year", ""), "estimated_events_per_year", path)
        providers.append(
            VppProvider(
                name=r["name"].strip(),
                available_states=states,
                program_name=(r.get("program_name", "") or "").strip() or None,
                daily_credit=_opt_float(r.get("daily_credit", ""), "daily_credit", path),
                event_payment=_opt_float(r.get("event_payment", ""), "event_payment", path),
                estimated_events_per_year=int(events) if events is not None else None,
                bundle_discount=_opt_float(r.get("bundle_discount", ""), "bundle_discount", path),
                has_gas_bundle=_flag(r.get("has_gas_bundle", ""), False),
            )
        )

    logger.info("Loaded %s VPP providers from %s", len(providers), path)
    return providers


def load_state_rebates(path: Path) -> List[StateRebate]:
    df = _read_csv(path, REBATE_COLUMNS)
    rebates: List[StateRebate] = []

    for _, r in df.iterrows():
        raw_type = r["rebate_type"].strip().lower()
        try:
            rebate_type = RebateType(raw_type)
        except ValueError as e:
            raise ReferenceDataError(f"{Path(path).name}: unknown rebate_type {raw_type!r}") from e

        amount = _opt_float(r["amount"], "amount", path)
        if amount is None:
            raise ReferenceDataError(f"{Path(path).name}: rebate without an amount for {r['state']}")

        rebates.append(
            StateRebate(
                state=r["state"].strip().upper(),
                rebate_type=rebate_type,
                amount=amount,
                name=(r.get("name", "") or "").strip() or None,
                is_active=_flag(r.get("is_active", ""), True),
            )
        )

    logger.info("Loaded %s state rebates from %s", len(rebates), path)
    return rebates


def get_vpp_providers(path: Optional[Path] = None) -> List[VppProvider]:
    path = path or settings.vpp_providers_path
    if path is None:
        return list(SEED_VPP_PROVIDERS)
    return load_vpp_providers(path)


def get_state_rebates(path: Optional[Path] = None) -> List[StateRebate]:
    path = path or settings.state_rebates_path
    if path is None:
        return list(SEED_STATE_REBATES)
    return load_state_rebates(path)
