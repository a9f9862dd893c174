"""Monthly savings — fuel, CPK improvement, carcass and tracking.

Each term is monthly, in currency units, and left unrounded. The formulas
are business-defined; keep them exactly as written, including the carcass
term that applies the carcass percentage twice.
"""

from __future__ import annotations

from tire_savings.config.calculation import CalculationInput
from tire_savings.config.percentages import DEFAULT_PERCENTAGES, SavingsPercentages
from tire_savings.engine.tire_cycle import compute_tire_cycle_breakdown, compute_tire_cycle_totals
from tire_savings.models.results import (
    ItemizedSavings,
    SavingsResult,
    TireCycleTotals,
    TrackingCost,
)


def compute_fuel_savings(calc: CalculationInput, fuel_savings_pct: float) -> float:
    """(monthly_mileage / fuel_consumption) × fuel_price × fleet_size × fuel%."""
    return (
        (calc.monthly_mileage / calc.fuel_consumption)
        * calc.fuel_price
        * calc.fleet_size
        * (fuel_savings_pct / 100)
    )


def compute_cpk_improvement(
    calc: CalculationInput,
    totals: TireCycleTotals,
    cpk_improvement_pct: float,
) -> float:
    """Extra lifecycle kilometres, spread per month, valued at cost per km.

    km_gain_total    = total_km × cpk%
    km_gain_per_month = km_gain_total / total_months
    cpk_improvement  = km_gain_per_month × cost_per_km × total_tires
    """
    km_gain_total = totals.total_km * (cpk_improvement_pct / 100)
    km_gain_per_month = km_gain_total / totals.total_months
    return km_gain_per_month * totals.cost_per_km * calc.total_tires


def compute_carcass_savings(
    calc: CalculationInput,
    totals: TireCycleTotals,
    carcass_savings_pct: float,
) -> float:
    """Carcass savings from retreading; 0 when no retreads are performed.

    first_part  = carcass% × retreadings_per_month × total_tires
    second_part = cost_per_km × (1 − carcass%) × (total_km − tire_lifespan)
    carcass     = first_part × second_part
    """
    if calc.retreading_cycles == "0":
        return 0.0

    num_recaps = totals.num_recaps
    total_km = totals.total_km

    total_life_months = total_km / calc.monthly_mileage
    retreadings_per_month = (12 / (total_life_months / num_recaps)) / 12
    first_part = (carcass_savings_pct / 100) * retreadings_per_month * calc.total_tires

    total_cost = calc.tire_price + num_recaps * calc.retread_price
    cost_per_km = total_cost / total_km
    reduction_factor = 1 - carcass_savings_pct / 100
    km_difference = total_km - calc.tire_lifespan
    second_part = cost_per_km * reduction_factor * km_difference

    return first_part * second_part


def compute_tracking(calc: CalculationInput) -> TrackingCost:
    """Monthly tracking cost for the tracked part of the fleet."""
    return TrackingCost(
        vehicles_with_tracking=calc.vehicles_with_tracking,
        tracking_cost_per_vehicle=calc.tracking_cost_per_vehicle,
        tracking_total_cost=calc.vehicles_with_tracking * calc.tracking_cost_per_vehicle,
    )


def compute_savings(
    calc: CalculationInput,
    percentages: SavingsPercentages = DEFAULT_PERCENTAGES,
) -> SavingsResult:
    """Compute the itemized monthly savings and tire lifecycle for one input.

    ``percentages`` supplies the values for any percentage the input leaves
    unset. The function is pure: same input, same output, no I/O.
    """
    pct = percentages.resolve(calc)
    totals = compute_tire_cycle_totals(calc)

    fuel_savings = compute_fuel_savings(calc, pct.fuel_savings_pct)
    cpk_improvement = compute_cpk_improvement(calc, totals, pct.cpk_improvement_pct)
    carcass_savings = compute_carcass_savings(calc, totals, pct.carcass_savings_pct)
    tracking = compute_tracking(calc)

    total = fuel_savings + cpk_improvement + carcass_savings + tracking.tracking_total_cost
    per_tire = total / calc.total_tires if calc.total_tires > 0 else 0.0

    return SavingsResult(
        itemized_savings=ItemizedSavings(
            fuel_savings=fuel_savings,
            cpk_improvement=cpk_improvement,
            carcass_savings=carcass_savings,
            total=total,
        ),
        tracking=tracking,
        tire_cycle=compute_tire_cycle_breakdown(calc, totals),
        savings_per_tire_per_month=per_tire,
    )
