from __future__ import annotations

import io
from typing import List, Optional, Sequence

from energy_proposals.calculations.calculation_models import Calculations
from energy_proposals.reports.models.slides import Slide
from energy_proposals.utils.formatting import fmt_currency, fmt_number, fmt_percent, fmt_years


def _format_table(rows: Sequence[Sequence[object]], headers: List[str]) -> str:
    output = io.StringIO()

    widths = [len(h) for h in headers]
    for row in rows:
        for i, v in enumerate(row):
            widths[i] = max(widths[i], len(str(v)))

    def fmt(r):
        return " ".join(str(r[i]).ljust(widths[i]) for i in range(len(headers)))

    print(fmt(headers), file=output)
    print(" ".join("-" * w for w in widths), file=output)
    for row in rows:
        print(fmt(row), file=output)

    return output.getvalue()


def render_proposal_summary(
    calc: Calculations,
    slides: Sequence[Slide],
    customer_name: Optional[str] = None,
) -> str:
    out = io.StringIO()

    print("\n" + "=" * 70, file=out)
    print("ENERGY PROPOSAL SUMMARY", file=out)
    print("=" * 70, file=out)
    if customer_name:
        print(f"Customer: {customer_name}", file=out)
    print(f"Retailer: {calc.bill_retailer or 'N/A'}", file=out)
    print(file=out)

    print(f"Daily Usage:          {fmt_number(calc.daily_average_kwh, 2)} kWh", file=out)
    print(f"Yearly Usage:         {fmt_number(calc.yearly_usage_kwh)} kWh", file=out)
    print(f"Annual Cost:          {fmt_currency(calc.projected_annual_cost)}", file=out)
    if calc.has_gas_bill:
        print(f"Gas Annual Cost:      {fmt_currency(calc.gas_annual_cost)}", file=out)
    print(file=out)

    print(f"Battery:  {fmt_number(calc.recommended_battery_kwh)} kWh ({calc.battery_product})", file=out)
    print(f"Solar:    {fmt_number(calc.recommended_solar_kw, 1)} kW", file=out)
    print(f"VPP:      {calc.selected_vpp_provider or 'N/A'} ({fmt_currency(calc.vpp_annual_value)}/yr)", file=out)
    print(file=out)

    print(f"Total Investment:     {fmt_currency(calc.total_investment)}", file=out)
    print(f"Total Rebates:        {fmt_currency(calc.total_rebates)}", file=out)
    print(f"Net Investment:       {fmt_currency(calc.net_investment)}", file=out)
    print(f"Annual Savings:       {fmt_currency(calc.total_annual_savings)}", file=out)
    payback = fmt_years(calc.payback_years) if calc.payback_defined else "N/A (no annual benefit)"
    print(f"Payback:              {payback}", file=out)
    print(f"CO2 Reduction:        {fmt_number(calc.co2_reduction_tonnes, 2)} t "
          f"({fmt_percent(calc.co2_reduction_percent)})", file=out)

    print("\n" + "=" * 70 + "\n", file=out)

    print("== Slides ==\n", file=out)
    rows = [
        (
            s.slide_number,
            s.slide_type.value,
            s.title,
            "yes" if s.is_included else "no",
        )
        for s in slides
    ]
    print(_format_table(rows, ["#", "type", "title", "included"]), file=out)

    return out.getvalue()
