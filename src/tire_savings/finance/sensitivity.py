"""Sensitivity / tornado analysis on total monthly savings.

Vary one input at a time, recompute, and measure how far the total moves.
Bars come back sorted by swing, so the assumption that matters most is first.

Default sweep set:
  - fuel_price ± 10%
  - tire_price ± 10%
  - retread_price ± 10%
  - monthly_mileage ± 20%
  - fuel_savings_percentage ± 50%
  - cpk_improvement_percentage ± 50%
  - carcass_savings_percentage ± 50%
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import get_args

import numpy as np

from tire_savings.config.calculation import CalculationInput
from tire_savings.config.percentages import DEFAULT_PERCENTAGES, SavingsPercentages
from tire_savings.engine.savings import compute_savings


@dataclass(frozen=True)
class TornadoBar:
    """One bar in the tornado chart."""

    param_name: str
    """Human-readable parameter name."""

    param_field: str
    """CalculationInput field that was swept (e.g. 'fuel_price')."""

    base_value: float
    low_value: float
    high_value: float

    total_at_low: float
    """Total monthly savings when param = low_value."""

    total_at_high: float
    """Total monthly savings when param = high_value."""

    delta_total: float
    """abs(total_at_high − total_at_low) — total swing width."""


@dataclass
class SensitivityResult:
    """Complete sensitivity analysis output."""

    base_total: float
    """Total monthly savings of the unmodified calculation."""

    bars: list[TornadoBar] = field(default_factory=list)
    """Tornado bars sorted by delta_total (descending)."""


DEFAULT_SWEEPS: list[tuple[str, str, float, float]] = [
    ("Fuel price", "fuel_price", -0.10, 0.10),
    ("New tire price", "tire_price", -0.10, 0.10),
    ("Retread price", "retread_price", -0.10, 0.10),
    ("Monthly mileage", "monthly_mileage", -0.20, 0.20),
    ("Fuel savings %", "fuel_savings_percentage", -0.50, 0.50),
    ("CPK improvement %", "cpk_improvement_percentage", -0.50, 0.50),
    ("Carcass savings %", "carcass_savings_percentage", -0.50, 0.50),
]

_PERCENTAGE_FIELDS = {
    "fuel_savings_percentage": "fuel_savings_pct",
    "cpk_improvement_percentage": "cpk_improvement_pct",
    "carcass_savings_percentage": "carcass_savings_pct",
}


def _base_value(calc: CalculationInput, name: str, percentages: SavingsPercentages) -> float:
    """Current value of a field; unset percentages read through the defaults."""
    if name in _PERCENTAGE_FIELDS:
        resolved = percentages.resolve(calc)
        return float(getattr(resolved, _PERCENTAGE_FIELDS[name]))
    value = getattr(calc, name)
    if value is None:
        raise ValueError(f"cannot sweep unset field {name!r}")
    return float(value)


def _is_numeric_field(name: str) -> bool:
    annotation = CalculationInput.model_fields[name].annotation
    return annotation in (int, float) or any(a in (int, float) for a in get_args(annotation))


def _clamp_to_field(name: str, value: float) -> float:
    """Keep a swept value inside the field's ge/le bounds; round int fields.

    Raises
    ------
    ValueError
        If the value falls outside an exclusive (gt/lt) bound, which has no
        value to clamp to.
    """
    field_info = CalculationInput.model_fields[name]
    for meta in field_info.metadata:
        ge = getattr(meta, "ge", None)
        le = getattr(meta, "le", None)
        gt = getattr(meta, "gt", None)
        lt = getattr(meta, "lt", None)
        if ge is not None:
            value = max(value, ge)
        if le is not None:
            value = min(value, le)
        if gt is not None and value <= gt:
            raise ValueError(f"{name} must stay above {gt}, got {value:g}")
        if lt is not None and value >= lt:
            raise ValueError(f"{name} must stay below {lt}, got {value:g}")
    if field_info.annotation is int or int in get_args(field_info.annotation):
        value = round(value)
    return value


def with_value(calc: CalculationInput, name: str, value: float) -> CalculationInput:
    """Copy of ``calc`` with one field replaced, validated again."""
    data = calc.model_dump()
    data[name] = _clamp_to_field(name, value)
    return CalculationInput.model_validate(data)


def _total(calc: CalculationInput, percentages: SavingsPercentages) -> float:
    return compute_savings(calc, percentages).itemized_savings.total


def run_sensitivity(
    calc: CalculationInput,
    percentages: SavingsPercentages = DEFAULT_PERCENTAGES,
    sweeps: list[tuple[str, str, float, float]] | None = None,
) -> SensitivityResult:
    """Run a one-at-a-time sensitivity analysis.

    Parameters
    ----------
    calc : CalculationInput
        Base calculation.
    percentages : SavingsPercentages
        Defaults for percentages the calculation leaves unset.
    sweeps : list[tuple[name, field, low_pct, high_pct]] | None
        Parameter sweeps. None = use DEFAULT_SWEEPS. Unknown, non-numeric and
        unset optional fields are skipped.

    Returns
    -------
    SensitivityResult
        Tornado bars sorted by swing in total monthly savings.

    Raises
    ------
    ValueError
        If a sweep pushes a field past an exclusive bound (e.g. a fuel price
        of zero).
    """
    if sweeps is None:
        sweeps = DEFAULT_SWEEPS

    base_total = _total(calc, percentages)
    bars: list[TornadoBar] = []

    for name, field_name, low_pct, high_pct in sweeps:
        if field_name not in CalculationInput.model_fields or not _is_numeric_field(field_name):
            continue
        try:
            base_val = _base_value(calc, field_name, percentages)
        except ValueError:
            continue

        low_calc = with_value(calc, field_name, base_val * (1 + low_pct))
        high_calc = with_value(calc, field_name, base_val * (1 + high_pct))
        total_low = _total(low_calc, percentages)
        total_high = _total(high_calc, percentages)

        bars.append(TornadoBar(
            param_name=name,
            param_field=field_name,
            base_value=base_val,
            low_value=float(getattr(low_calc, field_name)),
            high_value=float(getattr(high_calc, field_name)),
            total_at_low=round(total_low, 2),
            total_at_high=round(total_high, 2),
            delta_total=round(abs(total_high - total_low), 2),
        ))

    bars.sort(key=lambda b: b.delta_total, reverse=True)

    return SensitivityResult(base_total=round(base_total, 2), bars=bars)


def sweep_curve(
    calc: CalculationInput,
    field_name: str,
    low_pct: float,
    high_pct: float,
    points: int = 11,
    percentages: SavingsPercentages = DEFAULT_PERCENTAGES,
) -> tuple[np.ndarray, np.ndarray]:
    """Total monthly savings over an evenly spaced range of one input.

    Returns ``(values, totals)``; ``values`` are the clamped field values
    actually used.
    """
    base_val = _base_value(calc, field_name, percentages)
    targets = np.linspace(base_val * (1 + low_pct), base_val * (1 + high_pct), points)

    values = np.empty(points)
    totals = np.empty(points)
    for i, target in enumerate(targets):
        swept = with_value(calc, field_name, float(target))
        values[i] = float(getattr(swept, field_name))
        totals[i] = _total(swept, percentages)
    return values, totals
