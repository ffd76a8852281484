from datetime import datetime, timedelta
from pathlib import Path

import pytest

from energy_proposals.data.reference import (
    SEED_STATE_REBATES,
    SEED_VPP_PROVIDERS,
    get_state_rebates,
    get_vpp_providers,
    load_state_rebates,
    load_vpp_providers,
)
from energy_proposals.models.reference import RebateType
from energy_proposals.utils.errors import ReferenceDataError
from energy_proposals.utils.file_utils import cleanup_old_files
from energy_proposals.utils.formatting import fmt_currency, fmt_number, fmt_percent, fmt_years
from energy_proposals.utils.serialization import camel_case, from_wire, snake_case

REFERENCE_DIR = Path(__file__).resolve().parent.parent / "reference_data"


# ============================================================================
# REFERENCE DATA
# ============================================================================

def test_load_vpp_providers(tmp_path):
    path = tmp_path / "vpp.csv"
    path.write_text(
        "name,program_name,available_states,daily_credit,event_payment,estimated_events_per_year,bundle_discount,has_gas_bundle\n"
        "Alpha,Alpha Plan,NSW|vic,0.5,10,,100,yes\n"
        "Beta,,QLD;SA,,,12,,\n",
        encoding="utf-8",
    )
    alpha, beta = load_vpp_providers(path)

    assert alpha.available_states == ("NSW", "VIC")
    assert alpha.daily_credit == 0.5
    assert alpha.estimated_events_per_year is None
    assert alpha.has_gas_bundle is True

    assert beta.available_states == ("QLD", "SA")
    assert beta.program_name is None
    assert beta.daily_credit is None
    assert beta.estimated_events_per_year == 12
    assert beta.has_gas_bundle is False


def test_load_state_rebates(tmp_path):
    path = tmp_path / "rebates.csv"
    path.write_text(
        "state,rebate_type,amount,is_active\n"
        "vic,solar,1400,\n"
        "VIC,battery,2950,false\n",
        encoding="utf-8",
    )
    solar, battery = load_state_rebates(path)

    assert solar.state == "VIC"
    assert solar.rebate_type is RebateType.SOLAR
    assert solar.is_active is True
    assert battery.is_active is False


def test_reference_errors(tmp_path):
    with pytest.raises(ReferenceDataError):
        load_vpp_providers(tmp_path / "missing.csv")

    no_states = tmp_path / "vpp.csv"
    no_states.write_text("name,daily_credit\nAlpha,0.5\n", encoding="utf-8")
    with pytest.raises(ReferenceDataError, match="available_states"):
        load_vpp_providers(no_states)

    bad_type = tmp_path / "rebates.csv"
    bad_type.write_text("state,rebate_type,amount\nVIC,windmill,100\n", encoding="utf-8")
    with pytest.raises(ReferenceDataError, match="windmill"):
        load_state_rebates(bad_type)

    bad_amount = tmp_path / "amounts.csv"
    bad_amount.write_text("state,rebate_type,amount\nVIC,solar,lots\n", encoding="utf-8")
    with pytest.raises(ReferenceDataError):
        load_state_rebates(bad_amount)


def test_seed_data_is_the_default():
    assert get_vpp_providers() == list(SEED_VPP_PROVIDERS)
    assert get_state_rebates() == list(SEED_STATE_REBATES)


def test_shipped_csv_matches_seed_data():
    assert load_vpp_providers(REFERENCE_DIR / "vpp_providers.csv") == list(SEED_VPP_PROVIDERS)
    assert load_state_rebates(REFERENCE_DIR / "state_rebates.csv") == list(SEED_STATE_REBATES)


# ============================================================================
# SERIALIZATION / FORMATTING
# ============================================================================

def test_case_conversion():
    assert camel_case("hot_water_savings") == "hotWaterSavings"
    assert camel_case("payback_years") == "paybackYears"
    assert snake_case("totalUsageKwh") == "total_usage_kwh"
    assert snake_case("hasEV") == "has_ev"
    assert from_wire({"fullName": "A", "has_pool": True}) == {"full_name": "A", "has_pool": True}


def test_formatters():
    assert fmt_currency(1234.4) == "$1,234"
    assert fmt_currency(1234.4, 2) == "$1,234.40"
    assert fmt_currency(None) == "N/A"
    assert fmt_number(7300) == "7,300"
    assert fmt_percent(42.5) == "42.5%"
    assert fmt_years(3.7) == "3.7 years"
    assert fmt_years(None) == "N/A"


# ============================================================================
# CLEANUP
# ============================================================================

def test_cleanup_old_files(tmp_path):
    folder = tmp_path / "20260101_jane"
    folder.mkdir()
    (folder / "calculations.json").write_text("{}", encoding="utf-8")
    (folder / "slides_outline.csv").write_text("", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("keep", encoding="utf-8")

    assert cleanup_old_files(tmp_path, retention_days=30, now=datetime.now()) == 0
    assert folder.exists()

    removed = cleanup_old_files(tmp_path, retention_days=30, now=datetime.now() + timedelta(days=31))
    assert removed == 2
    assert not folder.exists()
    assert (tmp_path / "notes.txt").exists()


def test_cleanup_missing_directory(tmp_path):
    assert cleanup_old_files(tmp_path / "nope") == 0
