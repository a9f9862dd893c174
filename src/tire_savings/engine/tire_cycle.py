"""Tire lifecycle — kilometres, months and cost of one carcass.

A carcass runs ``tire_lifespan`` km new, then ``r1_tire_lifespan`` km after
the first retread and ``r2_tire_lifespan`` km after the second. Retread
lifespans only count when ``retreading_cycles`` says the retread happens.
"""

from __future__ import annotations

from tire_savings.config.calculation import CalculationInput
from tire_savings.models.results import TireCycle, TireCycleTotals


def compute_tire_cycle_totals(calc: CalculationInput) -> TireCycleTotals:
    """Totals for the full carcass lifecycle.

    total_km        = tire_lifespan + r1_km + r2_km
    total_months    = total_km / monthly_mileage
    tire_total_cost = tire_price + num_recaps × retread_price
    cost_per_km     = tire_total_cost / total_km
    """
    num_recaps = calc.num_recaps

    r1_km = (calc.r1_tire_lifespan or 0) if num_recaps >= 1 else 0
    r2_km = (calc.r2_tire_lifespan or 0) if num_recaps >= 2 else 0
    total_km = calc.tire_lifespan + r1_km + r2_km

    total_months = total_km / calc.monthly_mileage
    tire_total_cost = calc.tire_price + num_recaps * calc.retread_price
    cost_per_km = tire_total_cost / total_km if total_km > 0 else 0.0

    return TireCycleTotals(
        num_recaps=num_recaps,
        r1_km=r1_km,
        r2_km=r2_km,
        total_km=total_km,
        total_months=total_months,
        tire_total_cost=tire_total_cost,
        cost_per_km=cost_per_km,
    )


def compute_tire_cycle_breakdown(calc: CalculationInput, totals: TireCycleTotals) -> TireCycle:
    """Months spent in each stage; ``total`` is the lifecycle length.

    ``r1``/``r2`` report any lifespan entered, retread or not, so they add up
    to ``total`` only when every entered retread is performed.
    """
    return TireCycle(
        new=calc.tire_lifespan / calc.monthly_mileage,
        r1=(calc.r1_tire_lifespan or 0) / calc.monthly_mileage,
        r2=(calc.r2_tire_lifespan or 0) / calc.monthly_mileage,
        total=totals.total_months,
    )
