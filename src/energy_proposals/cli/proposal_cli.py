# src/energy_proposals/cli/proposal_cli.py

from datetime import date
from pathlib import Path
from typing import Optional, Sequence
import argparse
import sys

from energy_proposals.application.proposal_app import ProposalApplication
from energy_proposals.presentation.console import render_proposal_summary
from energy_proposals.reports.adapters.slide_assembler import ListMode


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Calculate an energy proposal and assemble its slide deck."
    )

    parser.add_argument("input", type=str, help="Proposal input JSON (customer + bills).")
    parser.add_argument("--output", type=str, default=None, help="Export folder root.")
    parser.add_argument("--date", type=str, help="Prepared date (YYYY-MM-DD). Defaults to today.")
    parser.add_argument("--vpp-providers", type=str, help="VPP provider CSV (overrides seed data).")
    parser.add_argument("--rebates", type=str, help="State rebate CSV (overrides seed data).")
    parser.add_argument("--included-only", action="store_true", help="Only list included slides.")
    parser.add_argument("--no-vpp", action="store_true", help="Size the battery without VPP participation.")
    parser.add_argument("--no-export", action="store_true", help="Print the summary only.")
    parser.add_argument("--cleanup", action="store_true", help="Clean up old exports after generation.")

    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    try:
        app = ProposalApplication()

        result = app.run(
            proposal=Path(args.input),
            output_root=Path(args.output) if args.output else None,
            vpp_providers_path=Path(args.vpp_providers) if args.vpp_providers else None,
            rebates_path=Path(args.rebates) if args.rebates else None,
            list_mode=ListMode.INCLUDED_ONLY if args.included_only else ListMode.FULL,
            vpp_participation=False if args.no_vpp else None,
            prepared_on=date.fromisoformat(args.date) if args.date else None,
            export=not args.no_export,
            cleanup=args.cleanup,
        )

        print(render_proposal_summary(result.calculations, result.slides, result.customer.full_name))

        for error in result.electricity_validation.errors:
            print(f"WARNING (electricity bill): {error}")
        if result.gas_validation is not None:
            for error in result.gas_validation.errors:
                print(f"WARNING (gas bill): {error}")

        if result.export is not None:
            print(f"Proposal exported to {result.export.folder}")
        return 0

    except Exception as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
