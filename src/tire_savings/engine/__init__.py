"""Engine — the savings calculation, defined once for every caller."""

from tire_savings.engine.tire_cycle import compute_tire_cycle_breakdown, compute_tire_cycle_totals
from tire_savings.engine.savings import (
    compute_carcass_savings,
    compute_cpk_improvement,
    compute_fuel_savings,
    compute_savings,
    compute_tracking,
)

compute = compute_savings

__all__ = [
    "compute",
    "compute_savings",
    "compute_fuel_savings",
    "compute_cpk_improvement",
    "compute_carcass_savings",
    "compute_tracking",
    "compute_tire_cycle_totals",
    "compute_tire_cycle_breakdown",
]
