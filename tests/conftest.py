"""
Shared fixtures: one "typical" household with a gas bill, plus variants.
"""

import pytest

from energy_proposals.calculations.proposal_calculation_usecase import run_proposal_calculations
from energy_proposals.data.reference import SEED_STATE_REBATES, SEED_VPP_PROVIDERS
from energy_proposals.models.bills import ElectricityBill, GasBill
from energy_proposals.models.customer import Customer, EvInterest
from energy_proposals.reports.models.slides import ContactContent


# ============================================================================
# INPUT RECORDS
# ============================================================================

@pytest.fixture
def electricity_bill() -> ElectricityBill:
    """1800 kWh over 90 days for $540 -> 20 kWh/day, $2,190/yr."""
    return ElectricityBill(
        total_usage_kwh=1800,
        total_amount=540,
        billing_days=90,
        retailer="AGL",
    )


@pytest.fixture
def gas_bill() -> GasBill:
    return GasBill(
        gas_usage_mj=9000,
        total_amount=315,
        billing_days=90,
        retailer="Origin",
    )


@pytest.fixture
def gas_customer() -> Customer:
    return Customer(
        full_name="Jane Citizen",
        address="12 Example Street, Malvern East VIC 3145",
        state="VIC",
        gas_appliances=("Gas Hot Water",),
    )


@pytest.fixture
def plain_customer() -> Customer:
    return Customer(full_name="Sam Sparks", state="VIC")


@pytest.fixture
def ev_pool_customer() -> Customer:
    return Customer(
        full_name="Alex Waters",
        state="NSW",
        has_pool=True,
        pool_volume_litres=40000,
        ev_interest=EvInterest.INTERESTED,
    )


@pytest.fixture
def providers():
    return list(SEED_VPP_PROVIDERS)


@pytest.fixture
def rebates():
    return list(SEED_STATE_REBATES)


@pytest.fixture
def contact() -> ContactContent:
    return ContactContent(
        prepared_by="Test Consultant",
        title="Renewables Strategist & Designer",
        company="Energy Proposals",
        address="1 Test Lane",
        phone="03 9000 0000",
        email="consultant@example.com",
        website="example.com",
    )


# ============================================================================
# CALCULATED RECORDS
# ============================================================================

@pytest.fixture
def gas_calculations(gas_customer, electricity_bill, gas_bill, providers, rebates):
    return run_proposal_calculations(
        gas_customer, electricity_bill, gas_bill, providers, rebates
    )


@pytest.fixture
def plain_calculations(plain_customer, electricity_bill, providers, rebates):
    return run_proposal_calculations(plain_customer, electricity_bill, None, providers, rebates)
