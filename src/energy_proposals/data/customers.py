# src/energy_proposals/data/customers.py

import re
from dataclasses import replace
from typing import Dict, List, Optional, Tuple

from energy_proposals.models.customer import Customer, EvInterest
from energy_proposals.utils.errors import InputDataError
from energy_proposals.utils.logger import get_logger
from energy_proposals.utils.serialization import from_wire

logger = get_logger(__name__)

# State names / codes, checked in this order
STATE_NAME_PATTERNS: Dict[str, List[re.Pattern]] = {
    "VIC": [re.compile(r"\bVIC\b", re.I), re.compile(r"\bVictoria\b", re.I)],
    "NSW": [re.compile(r"\bNSW\b", re.I), re.compile(r"\bNew South Wales\b", re.I)],
    "QLD": [re.compile(r"\bQLD\b", re.I), re.compile(r"\bQueensland\b", re.I)],
    "SA": [re.compile(r"\bSA\b", re.I), re.compile(r"\bSouth Australia\b", re.I)],
    "WA": [re.compile(r"\bWA\b", re.I), re.compile(r"\bWestern Australia\b", re.I)],
    "TAS": [re.compile(r"\bTAS\b", re.I), re.compile(r"\bTasmania\b", re.I)],
    "NT": [re.compile(r"\bNT\b", re.I), re.compile(r"\bNorthern Territory\b", re.I)],
    "ACT": [re.compile(r"\bACT\b", re.I), re.compile(r"\bAustralian Capital Territory\b", re.I)],
}

# Postcode ranges; ACT comes before the wider NSW 2xxx range
POSTCODE_PATTERNS: Tuple[Tuple[str, re.Pattern], ...] = (
    ("ACT", re.compile(r"\b2[67]\d{2}\b")),
    ("VIC", re.compile(r"\b3\d{3}\b")),
    ("NSW", re.compile(r"\b2\d{3}\b")),
    ("QLD", re.compile(r"\b4\d{3}\b")),
    ("SA", re.compile(r"\b5\d{3}\b")),
    ("WA", re.compile(r"\b6\d{3}\b")),
    ("TAS", re.compile(r"\b7\d{3}\b")),
    ("NT", re.compile(r"\b0\d{3}\b")),
)

_ALIASES = {
    "name": "full_name",
    "pool_volume": "pool_volume_litres",
    "existing_solar_size": "existing_solar_kw",
    "existing_solar_age": "existing_solar_age_years",
}


def detect_state_from_address(address: str) -> Optional[str]:
    """
    Best-effort state code from a free-text address.
    A state name or code anywhere in the address wins over a postcode.
    """
    address = address or ""
    for state, patterns in STATE_NAME_PATTERNS.items():
        if any(p.search(address) for p in patterns):
            return state
    for state, pattern in POSTCODE_PATTERNS:
        if pattern.search(address):
            return state
    return None


def resolve_state(customer: Customer, default_state: str) -> Customer:
    """Fill a missing state from the address, then from the default."""
    if customer.state:
        return replace(customer, state=customer.state.upper())

    detected = detect_state_from_address(customer.address)
    if detected is None:
        logger.warning(
            "No state for %s; using default %s", customer.full_name, default_state
        )
    return replace(customer, state=detected or default_state)


def _bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "y")
    return bool(value)


def _opt_float(value) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


def parse_customer(record: dict) -> Customer:
    data = {_ALIASES.get(k, k): v for k, v in from_wire(record).items()}

    if not data.get("full_name"):
        raise InputDataError("Customer record needs a full name")

    try:
        ev_interest = EvInterest((data.get("ev_interest") or "none").lower())
    except ValueError as e:
        raise InputDataError(f"Unknown evInterest: {data.get('ev_interest')!r}") from e

    appliances = data.get("gas_appliances") or ()
    if isinstance(appliances, str):
        appliances = appliances.split(",")

    try:
        return Customer(
            full_name=str(data["full_name"]).strip(),
            address=str(data.get("address") or "").strip(),
            state=(str(data["state"]).strip().upper() or None) if data.get("state") else None,
            has_pool=_bool(data.get("has_pool", False)),
            pool_volume_litres=_opt_float(data.get("pool_volume_litres")),
            has_ev=_bool(data.get("has_ev", False)),
            ev_interest=ev_interest,
            has_existing_solar=_bool(data.get("has_existing_solar", False)),
            existing_solar_kw=_opt_float(data.get("existing_solar_kw")),
            existing_solar_age_years=_opt_float(data.get("existing_solar_age_years")),
            gas_appliances=tuple(str(a).strip() for a in appliances if str(a).strip()),
        )
    except (TypeError, ValueError) as e:
        raise InputDataError(f"Customer record for {data['full_name']!r} is invalid: {e}") from e
