import json
from datetime import date
from pathlib import Path

import pandas as pd
import pytest

from energy_proposals.application.proposal_app import ProposalApplication
from energy_proposals.cli.proposal_cli import main
from energy_proposals.data.proposal_inputs import ProposalInput
from energy_proposals.models.bills import ElectricityBill
from energy_proposals.models.customer import Customer
from energy_proposals.presentation.console import render_proposal_summary
from energy_proposals.reports.adapters.slide_assembler import ListMode, build_proposal_slides
from energy_proposals.reports.export.proposal_export import proposal_folder_name
from energy_proposals.utils.errors import MissingElectricityBillError

SAMPLE_INPUT = Path(__file__).resolve().parent.parent / "reference_data" / "sample_proposal.json"
PREPARED = date(2026, 10, 1)


def test_missing_electricity_bill_is_rejected(gas_customer, gas_bill, tmp_path):
    proposal = ProposalInput(customer=gas_customer, electricity_bill=None, gas_bill=gas_bill)

    with pytest.raises(MissingElectricityBillError) as exc:
        ProposalApplication().run(proposal=proposal, output_root=tmp_path)

    assert exc.value.customer_name == "Jane Citizen"
    assert list(tmp_path.iterdir()) == []


def test_run_exports_payloads(gas_customer, electricity_bill, gas_bill, tmp_path):
    proposal = ProposalInput(customer=gas_customer, electricity_bill=electricity_bill, gas_bill=gas_bill)
    result = ProposalApplication().run(proposal=proposal, output_root=tmp_path, prepared_on=PREPARED)

    assert result.export.folder == tmp_path / "20261001_jane_citizen"
    assert result.electricity_validation.valid is True
    assert result.gas_validation.valid is True

    calculations = json.loads(result.export.calculations_json.read_text(encoding="utf-8"))
    assert calculations["selectedVppProvider"] == "Origin VPP"
    assert calculations["hotWaterSavings"] == 206.81

    slides = json.loads(result.export.slides_json.read_text(encoding="utf-8"))
    assert len(slides) == 25
    assert slides[0]["content"]["customerName"] == "Jane Citizen"

    outline = pd.read_csv(result.export.outline_csv)
    assert list(outline.columns) == ["slide_number", "slide_type", "title", "is_conditional", "is_included"]
    assert outline["slide_number"].tolist() == list(range(1, 26))
    hot_water = outline[outline["slide_type"] == "hot_water"].iloc[0]
    assert bool(hot_water["is_included"]) is True


def test_run_resolves_state_from_address(electricity_bill, tmp_path):
    customer = Customer(full_name="Addressed", address="1 George St, Sydney NSW 2000")
    result = ProposalApplication().run(
        proposal=ProposalInput(customer, electricity_bill),
        output_root=tmp_path,
        export=False,
    )

    assert result.customer.state == "NSW"
    assert result.export is None
    assert result.calculations.solar_rebate_amount == 600


def test_included_only_and_vpp_override(plain_customer, tmp_path):
    small_bill = ElectricityBill(total_usage_kwh=900, total_amount=300, billing_days=90)
    result = ProposalApplication().run(
        proposal=ProposalInput(plain_customer, small_bill),
        output_root=tmp_path,
        list_mode=ListMode.INCLUDED_ONLY,
        vpp_participation=False,
        export=False,
    )

    assert result.calculations.recommended_battery_kwh == 5
    assert all(s.is_included for s in result.slides)
    assert [s.slide_number for s in result.slides] == list(range(1, len(result.slides) + 1))


def test_sample_input_end_to_end(tmp_path):
    result = ProposalApplication().run(proposal=SAMPLE_INPUT, output_root=tmp_path, prepared_on=PREPARED)

    assert result.customer.state == "VIC"
    assert result.calculations.investment_rc_ac == 8000
    assert result.calculations.investment_induction == 2000
    assert result.calculations.investment_ev_charger == 1500
    assert result.export.folder.name == "20261001_jane_citizen"


def test_console_summary(gas_customer, gas_calculations, contact):
    slides = build_proposal_slides(gas_customer, gas_calculations, contact=contact)
    text = render_proposal_summary(gas_calculations, slides, "Jane Citizen")

    assert "ENERGY PROPOSAL SUMMARY" in text
    assert "Customer: Jane Citizen" in text
    assert "$20,200" in text
    assert "3.7 years" in text
    assert "hot_water" in text


def test_folder_name_slug():
    assert proposal_folder_name("Jane O'Brien-Smith", PREPARED) == "20261001_jane_o_brien_smith"
    assert proposal_folder_name("!!!", PREPARED) == "20261001_customer"


# ============================================================================
# CLI
# ============================================================================

def test_cli_runs_sample(tmp_path, capsys):
    code = main([str(SAMPLE_INPUT), "--output", str(tmp_path), "--date", "2026-10-01", "--included-only"])

    out = capsys.readouterr().out
    assert code == 0
    assert "ENERGY PROPOSAL SUMMARY" in out
    assert "Proposal exported to" in out
    assert (tmp_path / "20261001_jane_citizen" / "slides.json").exists()


def test_cli_reports_missing_bill(tmp_path, capsys):
    path = tmp_path / "input.json"
    path.write_text(json.dumps({"customer": {"fullName": "No Bill"}}), encoding="utf-8")

    code = main([str(path), "--no-export"])

    assert code == 1
    assert "ERROR: An electricity bill is required" in capsys.readouterr().err


def test_cli_reports_bad_input(tmp_path, capsys):
    code = main([str(tmp_path / "missing.json"), "--no-export"])
    assert code == 1
    assert "ERROR:" in capsys.readouterr().err
