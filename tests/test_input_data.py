import json
from dataclasses import replace
from datetime import date

import pytest

from energy_proposals.data.bills import (
    parse_electricity_bill,
    parse_gas_bill,
    validate_electricity_bill,
    validate_gas_bill,
)
from energy_proposals.data.customers import detect_state_from_address, parse_customer, resolve_state
from energy_proposals.data.proposal_inputs import load_proposal_input, parse_proposal_input
from energy_proposals.models.bills import ElectricityBill, GasBill
from energy_proposals.models.customer import ApplianceCategory, Customer, EvInterest, appliance_category
from energy_proposals.utils.errors import InputDataError


# ============================================================================
# BILL VALIDATION
# ============================================================================

def test_valid_electricity_bill(electricity_bill):
    result = validate_electricity_bill(electricity_bill)
    assert result.valid is True
    assert result.errors == []


def test_electricity_bill_problems_in_order():
    bill = ElectricityBill(total_usage_kwh=0, total_amount=0, billing_days=200, extraction_confidence=40)
    result = validate_electricity_bill(bill)

    assert result.valid is False
    assert result.errors == [
        "Total amount is missing or invalid",
        "Total usage is missing or invalid",
        "Retailer name is missing",
        "Billing days seems incorrect (should be 1-120)",
        "Low extraction confidence - manual review recommended",
    ]


def test_gas_bill_problems():
    result = validate_gas_bill(GasBill(gas_usage_mj=0, total_amount=100, retailer="Origin", billing_days=90))
    assert result.errors == ["Gas usage is missing or invalid"]


def test_missing_billing_days_is_not_flagged(electricity_bill):
    assert validate_electricity_bill(replace(electricity_bill, billing_days=None)).valid is True


# ============================================================================
# BILL PARSING
# ============================================================================

def test_parse_electricity_bill_camel_case():
    bill = parse_electricity_bill(
        {
            "retailer": " AGL ",
            "billingPeriodStart": "2026-04-01T00:00:00",
            "billingDays": "90",
            "totalAmount": "540.00",
            "totalUsageKwh": 1800,
            "peakRateCents": 32.5,
            "unknownField": "ignored",
        }
    )

    assert bill.retailer == "AGL"
    assert bill.billing_period_start == date(2026, 4, 1)
    assert bill.billing_days == 90
    assert bill.total_amount == 540.0
    assert bill.peak_rate_cents == 32.5


def test_parse_bill_defaults_missing_required_numbers_to_zero():
    bill = parse_gas_bill({"retailer": "Origin", "gasRateCentsMj": 3.1})
    assert bill.gas_usage_mj == 0
    assert bill.total_amount == 0
    assert bill.gas_rate_cents_per_mj == 3.1
    assert validate_gas_bill(bill).valid is False


def test_parse_bill_rejects_unreadable_values():
    with pytest.raises(InputDataError):
        parse_electricity_bill({"totalAmount": "lots", "totalUsageKwh": 10})


# ============================================================================
# CUSTOMERS
# ============================================================================

@pytest.mark.parametrize(
    "address, expected",
    [
        ("12 Example Street, Malvern East VIC 3145", "VIC"),
        ("1 George St, Sydney NSW 2000", "NSW"),
        ("5 Queen St, Brisbane 4000", "QLD"),
        ("10 Marcus Clarke St, Canberra 2601", "ACT"),
        ("Hobart, Tasmania", "TAS"),
        ("Darwin 0800", "NT"),
        ("Somewhere without clues", None),
        ("", None),
    ],
)
def test_detect_state_from_address(address, expected):
    assert detect_state_from_address(address) == expected


def test_resolve_state_prefers_record_then_address_then_default():
    assert resolve_state(Customer("A", address="Perth WA 6000", state="qld"), "VIC").state == "QLD"
    assert resolve_state(Customer("B", address="Perth WA 6000"), "VIC").state == "WA"
    assert resolve_state(Customer("C"), "SA").state == "SA"


def test_parse_customer():
    customer = parse_customer(
        {
            "fullName": "Jane Citizen",
            "address": "Malvern East VIC 3145",
            "hasPool": "yes",
            "poolVolume": "45000",
            "hasEV": False,
            "evInterest": "Interested",
            "existingSolarSize": "",
            "gasAppliances": "Gas Hot Water, Gas Cooktop",
        }
    )

    assert customer.full_name == "Jane Citizen"
    assert customer.state is None
    assert customer.has_pool is True
    assert customer.pool_volume_litres == 45000
    assert customer.ev_interest is EvInterest.INTERESTED
    assert customer.wants_ev is True
    assert customer.existing_solar_kw is None
    assert customer.gas_appliances == ("Gas Hot Water", "Gas Cooktop")
    assert customer.has_hot_water_appliance and customer.has_cooktop_appliance
    assert not customer.has_heating_appliance


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Gas Hot Water", ApplianceCategory.HOT_WATER),
        ("Gas Hot Water Heater", ApplianceCategory.HOT_WATER),
        ("Gas Ducted Heating", ApplianceCategory.HEATING),
        ("Space Heater", ApplianceCategory.HEATING),
        ("Gas Cooktop", ApplianceCategory.COOKING),
        ("Gas Stove", ApplianceCategory.COOKING),
        ("Gas BBQ", None),
    ],
)
def test_appliance_category(name, expected):
    assert appliance_category(name) is expected


def test_hot_water_heater_only_flags_hot_water():
    customer = Customer("Heater Only", gas_appliances=("Gas Hot Water Heater",))
    assert customer.has_hot_water_appliance
    assert not customer.has_heating_appliance


def test_parse_customer_requires_name():
    with pytest.raises(InputDataError):
        parse_customer({"address": "Somewhere"})


def test_parse_customer_rejects_unknown_ev_interest():
    with pytest.raises(InputDataError):
        parse_customer({"name": "X", "evInterest": "maybe"})


# ============================================================================
# PROPOSAL INPUT FILES
# ============================================================================

def test_parse_proposal_input_without_gas():
    proposal = parse_proposal_input(
        {
            "customer": {"fullName": "Sam Sparks"},
            "electricityBill": {"totalUsageKwh": 1800, "totalAmount": 540, "billingDays": 90},
        }
    )
    assert proposal.electricity_bill.total_usage_kwh == 1800
    assert proposal.gas_bill is None


def test_parse_proposal_input_keeps_missing_electricity_bill():
    proposal = parse_proposal_input({"customer": {"fullName": "Sam Sparks"}, "gasBill": None})
    assert proposal.electricity_bill is None


def test_parse_proposal_input_needs_customer():
    with pytest.raises(InputDataError):
        parse_proposal_input({"electricityBill": {}})


def test_load_proposal_input(tmp_path):
    path = tmp_path / "proposal.json"
    path.write_text(
        json.dumps(
            {
                "customer": {"fullName": "Jane Citizen", "gasAppliances": ["Gas Hot Water"]},
                "electricityBill": {"totalUsageKwh": 1800, "totalAmount": 540},
                "gasBill": {"gasUsageMj": 9000, "totalAmount": 315},
            }
        ),
        encoding="utf-8",
    )
    proposal = load_proposal_input(path)

    assert proposal.customer.gas_appliances == ("Gas Hot Water",)
    assert proposal.gas_bill.gas_usage_mj == 9000


def test_load_proposal_input_errors(tmp_path):
    with pytest.raises(InputDataError):
        load_proposal_input(tmp_path / "missing.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(InputDataError):
        load_proposal_input(broken)
