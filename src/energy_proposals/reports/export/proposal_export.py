# src/energy_proposals/reports/export/proposal_export.py

import json
import re
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Sequence

import pandas as pd

from energy_proposals.calculations.calculation_models import Calculations
from energy_proposals.reports.models.slides import Slide
from energy_proposals.utils.logger import get_logger

logger = get_logger(__name__)

OUTLINE_COLUMNS = ["slide_number", "slide_type", "title", "is_conditional", "is_included"]


@dataclass(frozen=True)
class ProposalExport:
    folder: Path
    calculations_json: Path
    slides_json: Path
    outline_csv: Path


def proposal_folder_name(customer_name: str, prepared_on: date) -> str:
    slug = re.sub(r"[^a-z0-9]+", "_", customer_name.lower()).strip("_") or "customer"
    return f"{prepared_on:%Y%m%d}_{slug}"


def slides_outline(slides: Sequence[Slide]) -> pd.DataFrame:
    """One row per slide, in list order."""
    return pd.DataFrame(
        [
            (s.slide_number, s.slide_type.value, s.title, s.is_conditional, s.is_included)
            for s in slides
        ],
        columns=OUTLINE_COLUMNS,
    )


def _write_json(path: Path, payload) -> None:
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def export_proposal(
    *,
    output_root: Path,
    customer_name: str,
    prepared_on: date,
    calculations: Calculations,
    slides: Sequence[Slide],
) -> ProposalExport:
    """
    Write the two payloads a proposal record carries, plus a CSV outline:

    <output_root>/<yyyymmdd>_<customer>/
        calculations.json
        slides.json
        slides_outline.csv
    """
    folder = Path(output_root) / proposal_folder_name(customer_name, prepared_on)
    folder.mkdir(parents=True, exist_ok=True)

    export = ProposalExport(
        folder=folder,
        calculations_json=folder / "calculations.json",
        slides_json=folder / "slides.json",
        outline_csv=folder / "slides_outline.csv",
    )

    _write_json(export.calculations_json, calculations.to_payload())
    _write_json(export.slides_json, [s.to_payload() for s in slides])
    slides_outline(slides).to_csv(export.outline_csv, index=False)

    logger.info("Proposal exported | %s (%s slides)", folder, len(slides))
    return export
