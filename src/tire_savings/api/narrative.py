"""Narrative generator — plain-text interpretation of a calculation report.

Turns a ``CalculationReport`` into the short summary a salesperson reads
out or pastes into an e-mail: monthly and annual totals, where the money
comes from, and how long a carcass lasts.
"""

from __future__ import annotations

from tire_savings.models.results import CalculationReport


def _money(value: float, currency: str) -> str:
    return f"{currency} {value:,.2f}"


def generate_narrative(report: CalculationReport, currency: str = "R$") -> str:
    """Generate a plain-text narrative from a calculation report.

    Returns a structured text block covering:
      1. Headline savings (monthly, annual, per tire)
      2. Savings breakdown, largest term first
      3. Tire lifecycle
      4. Assumptions used
    """
    r = report.result
    s = r.itemized_savings
    c = r.tire_cycle
    t = report.tire_cycle_totals
    p = report.percentages

    terms = [
        ("Fuel savings", s.fuel_savings),
        ("CPK improvement", s.cpk_improvement),
        ("Carcass savings", s.carcass_savings),
        ("Tracking", r.tracking.tracking_total_cost),
    ]
    terms.sort(key=lambda x: x[1], reverse=True)

    sections: list[str] = []

    # ── 1. Headline ──
    sections.append("=" * 60)
    sections.append(f"SAVINGS SUMMARY — {report.company_name}")
    sections.append("=" * 60)
    sections.append(
        f"Total monthly savings: {_money(s.total, currency)}\n"
        f"Total annual savings: {_money(report.annual_savings, currency)}\n"
        f"Savings per tire per month: {_money(r.savings_per_tire_per_month, currency)}"
    )
    if report.additional_gains_total > 0:
        sections.append(
            f"Additional gains listed (not in the total): "
            f"{_money(report.additional_gains_total, currency)} per month"
        )

    # ── 2. Breakdown ──
    sections.append("")
    sections.append("=" * 60)
    sections.append("WHERE THE SAVINGS COME FROM")
    sections.append("=" * 60)
    for name, val in terms:
        share = (val / s.total * 100) if s.total > 0 else 0
        sections.append(f"  {name:20s}  {_money(val, currency):>18s}  ({share:5.1f}%)")
    top_name, top_val = terms[0]
    if top_val > 0:
        sections.append(f"\nLargest driver: {top_name}.")
    if t.num_recaps == 0:
        sections.append("No retreading reported, so there are no carcass savings.")

    # ── 3. Tire lifecycle ──
    sections.append("")
    sections.append("=" * 60)
    sections.append("TIRE LIFECYCLE")
    sections.append("=" * 60)
    sections.append(
        f"Retreads per carcass: {t.num_recaps}\n"
        f"Kilometres per carcass: {t.total_km:,}\n"
        f"New tire: {c.new:.1f} months | R1: {c.r1:.1f} months | R2: {c.r2:.1f} months\n"
        f"Full cycle: {c.total:.1f} months\n"
        f"Cost per km: {currency} {t.cost_per_km:.4f}"
    )

    # ── 4. Assumptions ──
    sections.append("")
    sections.append("=" * 60)
    sections.append("ASSUMPTIONS")
    sections.append("=" * 60)
    sections.append(
        f"Fuel savings: {p.fuel_savings_pct:g}%\n"
        f"CPK improvement: {p.cpk_improvement_pct:g}%\n"
        f"Carcass savings: {p.carcass_savings_pct:g}%"
    )

    return "\n".join(sections)


def generate_comparison_narrative(reports: list[CalculationReport], currency: str = "R$") -> str:
    """Short ranking text for several reports, highest total first."""
    if not reports:
        return "No calculations to compare."

    ranked = sorted(reports, key=lambda rep: rep.result.itemized_savings.total, reverse=True)
    lines = [f"Comparing {len(reports)} calculations (highest monthly savings first):"]
    for pos, rep in enumerate(ranked, start=1):
        s = rep.result.itemized_savings
        lines.append(
            f"  {pos}. {rep.company_name}: {_money(s.total, currency)}/month, "
            f"{_money(rep.result.savings_per_tire_per_month, currency)} per tire"
        )
    if len(ranked) > 1:
        spread = ranked[0].result.itemized_savings.total - ranked[-1].result.itemized_savings.total
        lines.append(f"Spread between best and worst: {_money(spread, currency)}/month.")
    return "\n".join(lines)
