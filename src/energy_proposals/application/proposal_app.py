# src/energy_proposals/application/proposal_app.py
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import List, Optional, Union

from energy_proposals.calculations.calculation_models import Calculations
from energy_proposals.calculations.proposal_calculation_usecase import run_proposal_calculations
from energy_proposals.data.bills import BillValidation, validate_electricity_bill, validate_gas_bill
from energy_proposals.data.customers import resolve_state
from energy_proposals.data.proposal_inputs import ProposalInput, load_proposal_input
from energy_proposals.data.reference import get_state_rebates, get_vpp_providers
from energy_proposals.models.customer import Customer
from energy_proposals.reports.adapters.slide_assembler import ListMode, build_proposal_slides
from energy_proposals.reports.export.proposal_export import ProposalExport, export_proposal
from energy_proposals.reports.models.slides import Slide
from energy_proposals.utils.config import settings
from energy_proposals.utils.errors import MissingElectricityBillError
from energy_proposals.utils.file_utils import cleanup_old_files
from energy_proposals.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ProposalRunResult:
    customer: Customer
    calculations: Calculations
    slides: List[Slide]
    electricity_validation: BillValidation
    gas_validation: Optional[BillValidation]
    export: Optional[ProposalExport]


class ProposalApplication:
    """
    Application-layer orchestration for one proposal.

    Load inputs -> validate -> calculate -> assemble slides -> export.
    Validation is advisory; only a missing electricity bill stops the run.
    """

    def run(
        self,
        *,
        proposal: Union[ProposalInput, Path],
        output_root: Optional[Path] = None,
        vpp_providers_path: Optional[Path] = None,
        rebates_path: Optional[Path] = None,
        list_mode: ListMode = ListMode.FULL,
        vpp_participation: Optional[bool] = None,
        prepared_on: Optional[date] = None,
        export: bool = True,
        cleanup: bool = False,
    ) -> ProposalRunResult:

        if not isinstance(proposal, ProposalInput):
            proposal = load_proposal_input(proposal)

        # 1. Electricity bill is mandatory
        if proposal.electricity_bill is None:
            raise MissingElectricityBillError(proposal.customer.full_name)

        customer = resolve_state(proposal.customer, settings.default_state)

        # 2. Advisory checks
        electricity_validation = validate_electricity_bill(proposal.electricity_bill)
        gas_validation = (
            validate_gas_bill(proposal.gas_bill) if proposal.gas_bill is not None else None
        )

        # 3. Reference data (CSV override -> configured path -> seed tables)
        providers = get_vpp_providers(vpp_providers_path)
        rebates = get_state_rebates(rebates_path)

        if vpp_participation is None:
            vpp_participation = settings.assume_vpp_participation

        # 4. Calculate + assemble
        calculations = run_proposal_calculations(
            customer,
            proposal.electricity_bill,
            proposal.gas_bill,
            providers,
            rebates,
            vpp_participation=vpp_participation,
        )

        prepared_on = prepared_on or date.today()
        slides = build_proposal_slides(customer, calculations, list_mode, prepared_on=prepared_on)

        # 5. Export (optional)
        output_root = Path(output_root or settings.output_root)
        exported: Optional[ProposalExport] = None
        if export:
            exported = export_proposal(
                output_root=output_root,
                customer_name=customer.full_name,
                prepared_on=prepared_on,
                calculations=calculations,
                slides=slides,
            )

        if cleanup:
            removed = cleanup_old_files(output_root, settings.report_retention_days)
            logger.info("Cleanup finished | removed=%s", removed)

        return ProposalRunResult(
            customer=customer,
            calculations=calculations,
            slides=slides,
            electricity_validation=electricity_validation,
            gas_validation=gas_validation,
            export=exported,
        )
