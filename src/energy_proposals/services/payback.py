# src/energy_proposals/services/payback.py
"""
Investment payback.

Rules:
- None entries in any map mean "not part of this proposal" and are skipped,
  never summed as 0
- All currency figures are whole dollars; payback years keep one decimal
- No annual benefit means no payback: payback_years is reported as 0 and
  payback_defined is False so callers can tell it apart from an instant payback
"""

from typing import Mapping, Optional

from energy_proposals.services.constants import round_half_up
from energy_proposals.services.energy_models import PaybackResult


def sum_present(amounts: Mapping[str, Optional[float]]) -> float:
    return float(sum(round_half_up(v, 0) for v in amounts.values() if v is not None))


def calculate_payback(
    investments: Mapping[str, Optional[float]],
    rebates: Mapping[str, Optional[float]],
    benefits: Mapping[str, Optional[float]],
) -> PaybackResult:
    total_investment = sum_present(investments)
    total_rebates = sum_present(rebates)
    total_benefit = sum_present(benefits)

    net_investment = total_investment - total_rebates

    if total_benefit != 0:
        payback_years = round_half_up(net_investment / total_benefit, 1)
        payback_defined = True
    else:
        payback_years = 0.0
        payback_defined = False

    return PaybackResult(
        total_investment=total_investment,
        total_rebates=total_rebates,
        net_investment=net_investment,
        total_annual_benefit=total_benefit,
        payback_years=payback_years,
        ten_year_savings=total_benefit * 10 - net_investment,
        twenty_five_year_savings=total_benefit * 25 - net_investment,
        payback_defined=payback_defined,
    )
