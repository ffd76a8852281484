import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from energy_proposals.data.bills import parse_electricity_bill, parse_gas_bill
from energy_proposals.data.customers import parse_customer
from energy_proposals.models.bills import ElectricityBill, GasBill
from energy_proposals.models.customer import Customer
from energy_proposals.utils.errors import InputDataError
from energy_proposals.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ProposalInput:
    customer: Customer
    electricity_bill: Optional[ElectricityBill]
    gas_bill: Optional[GasBill] = None


def parse_proposal_input(record: dict) -> ProposalInput:
    """
    {"customer": {...}, "electricityBill": {...}, "gasBill": {...} | null}

    A missing electricity bill is kept as None here; the application layer
    decides what to do with it.
    """
    if "customer" not in record:
        raise InputDataError("Proposal input needs a 'customer' record")

    electricity = record.get("electricityBill") or record.get("electricity_bill")
    gas = record.get("gasBill") or record.get("gas_bill")

    return ProposalInput(
        customer=parse_customer(record["customer"]),
        electricity_bill=parse_electricity_bill(electricity) if electricity else None,
        gas_bill=parse_gas_bill(gas) if gas else None,
    )


def load_proposal_input(path: Path) -> ProposalInput:
    path = Path(path)
    try:
        record = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise InputDataError(f"Input file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise InputDataError(f"{path.name} is not valid JSON: {e}") from e

    logger.info("Loaded proposal input | %s", path)
    return parse_proposal_input(record)
