from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class EvInterest(str, Enum):
    NONE = "none"
    INTERESTED = "interested"
    OWNS = "owns"


class ApplianceCategory(str, Enum):
    HOT_WATER = "hot_water"
    HEATING = "heating"
    COOKING = "cooking"


def appliance_category(name: str) -> Optional[ApplianceCategory]:
    """
    Classify a gas appliance by name. Hot water is checked first so a
    "Hot Water Heater" is never read as space heating.
    """
    lowered = name.lower()
    if "hot water" in lowered:
        return ApplianceCategory.HOT_WATER
    if "heat" in lowered:
        return ApplianceCategory.HEATING
    if "cook" in lowered or "stove" in lowered:
        return ApplianceCategory.COOKING
    return None


@dataclass(frozen=True)
class Customer:
    full_name: str
    address: str = ""
    state: Optional[str] = None

    has_pool: bool = False
    pool_volume_litres: Optional[float] = None

    has_ev: bool = False
    ev_interest: EvInterest = EvInterest.NONE

    has_existing_solar: bool = False
    existing_solar_kw: Optional[float] = None
    existing_solar_age_years: Optional[float] = None

    gas_appliances: Tuple[str, ...] = ()

    # --------------------------------------------------
    # Derived flags (appliance matching is case-insensitive)
    # --------------------------------------------------
    @property
    def wants_ev(self) -> bool:
        return self.has_ev or self.ev_interest in (EvInterest.INTERESTED, EvInterest.OWNS)

    def _has_appliance(self, category: ApplianceCategory) -> bool:
        return any(appliance_category(a) is category for a in self.gas_appliances)

    @property
    def has_hot_water_appliance(self) -> bool:
        return self._has_appliance(ApplianceCategory.HOT_WATER)

    @property
    def has_heating_appliance(self) -> bool:
        return self._has_appliance(ApplianceCategory.HEATING)

    @property
    def has_cooktop_appliance(self) -> bool:
        return self._has_appliance(ApplianceCategory.COOKING)
