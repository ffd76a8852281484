from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


@dataclass(frozen=True)
class VppProvider:
    name: str
    available_states: Tuple[str, ...]
    program_name: Optional[str] = None
    daily_credit: Optional[float] = None
    event_payment: Optional[float] = None
    estimated_events_per_year: Optional[int] = None
    bundle_discount: Optional[float] = None
    has_gas_bundle: bool = False


class RebateType(str, Enum):
    SOLAR = "solar"
    BATTERY = "battery"
    HEAT_PUMP_HW = "heat_pump_hw"
    HEAT_PUMP_AC = "heat_pump_ac"
    EV_CHARGER = "ev_charger"
    INDUCTION = "induction"


@dataclass(frozen=True)
class StateRebate:
    state: str
    rebate_type: RebateType
    amount: float
    name: Optional[str] = None
    is_active: bool = True
