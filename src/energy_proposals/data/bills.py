# src/energy_proposals/data/bills.py
"""
Bill records from the extraction step.

Parsing turns an extracted record (camelCase or snake_case keys) into a
bill dataclass. Validation is advisory: it lists problems worth a manual
review but never blocks a calculation.
"""

from dataclasses import dataclass, fields
from datetime import date
from typing import List, Optional, Type, TypeVar

from energy_proposals.models.bills import ElectricityBill, GasBill
from energy_proposals.utils.errors import InputDataError
from energy_proposals.utils.logger import get_logger
from energy_proposals.utils.serialization import from_wire

logger = get_logger(__name__)

MIN_BILLING_DAYS = 1
MAX_BILLING_DAYS = 120
MIN_EXTRACTION_CONFIDENCE = 50

# Alternative key names seen in extracted records
_ALIASES = {
    "gas_rate_cents_mj": "gas_rate_cents_per_mj",
    "usage_kwh": "total_usage_kwh",
    "usage_mj": "gas_usage_mj",
}

_DATE_FIELDS = {"billing_period_start", "billing_period_end"}
_INT_FIELDS = {"billing_days"}
_TEXT_FIELDS = {"retailer"}

B = TypeVar("B", ElectricityBill, GasBill)


@dataclass(frozen=True)
class BillValidation:
    valid: bool
    errors: List[str]


# =========================
# PARSING
# =========================
def _coerce(name: str, value):
    if value is None or value == "":
        return None
    if name in _TEXT_FIELDS:
        return str(value).strip() or None
    if name in _DATE_FIELDS:
        return value if isinstance(value, date) else date.fromisoformat(str(value)[:10])
    if name in _INT_FIELDS:
        return int(float(value))
    return float(value)


def _parse(record: dict, bill_cls: Type[B]) -> B:
    data = {_ALIASES.get(k, k): v for k, v in from_wire(record).items()}
    known = {f.name for f in fields(bill_cls)}

    kwargs = {}
    for name in known:
        if name not in data:
            continue
        try:
            kwargs[name] = _coerce(name, data[name])
        except (TypeError, ValueError) as e:
            raise InputDataError(f"{bill_cls.__name__}.{name}: cannot read {data[name]!r}") from e

    # Required numbers default to 0 so that validation, not parsing, reports them
    for name in ("total_amount", "total_usage_kwh", "gas_usage_mj"):
        if name in known and kwargs.get(name) is None:
            kwargs[name] = 0.0

    return bill_cls(**kwargs)


def parse_electricity_bill(record: dict) -> ElectricityBill:
    return _parse(record, ElectricityBill)


def parse_gas_bill(record: dict) -> GasBill:
    return _parse(record, GasBill)


# =========================
# VALIDATION
# =========================
def _common_checks(
    retailer: Optional[str],
    billing_days: Optional[int],
    confidence: Optional[float],
) -> List[str]:
    errors: List[str] = []

    if not retailer:
        errors.append("Retailer name is missing")

    if billing_days is not None and not MIN_BILLING_DAYS <= billing_days <= MAX_BILLING_DAYS:
        errors.append(
            f"Billing days seems incorrect (should be {MIN_BILLING_DAYS}-{MAX_BILLING_DAYS})"
        )

    if confidence is not None and confidence < MIN_EXTRACTION_CONFIDENCE:
        errors.append("Low extraction confidence - manual review recommended")

    return errors


def validate_electricity_bill(bill: ElectricityBill) -> BillValidation:
    errors: List[str] = []
    if not bill.total_amount or bill.total_amount <= 0:
        errors.append("Total amount is missing or invalid")
    if not bill.total_usage_kwh or bill.total_usage_kwh <= 0:
        errors.append("Total usage is missing or invalid")
    errors += _common_checks(bill.retailer, bill.billing_days, bill.extraction_confidence)

    for error in errors:
        logger.warning("Electricity bill check | %s", error)
    return BillValidation(valid=not errors, errors=errors)


def validate_gas_bill(bill: GasBill) -> BillValidation:
    errors: List[str] = []
    if not bill.total_amount or bill.total_amount <= 0:
        errors.append("Total amount is missing or invalid")
    if not bill.gas_usage_mj or bill.gas_usage_mj <= 0:
        errors.append("Gas usage is missing or invalid")
    errors += _common_checks(bill.retailer, bill.billing_days, bill.extraction_confidence)

    for error in errors:
        logger.warning("Gas bill check | %s", error)
    return BillValidation(valid=not errors, errors=errors)
