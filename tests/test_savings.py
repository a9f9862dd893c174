"""Tests for the savings engine — worked scenarios and invariants."""

from __future__ import annotations

import pytest

from tire_savings.config import CalculationInput, SavingsPercentages
from tire_savings.engine import compute, compute_savings
from tire_savings.engine.savings import (
    compute_carcass_savings,
    compute_cpk_improvement,
    compute_fuel_savings,
    compute_tracking,
)
from tire_savings.engine.tire_cycle import compute_tire_cycle_totals


# ═══════════════════════════════════════════════════════════════════════════
# Worked scenarios
# ═══════════════════════════════════════════════════════════════════════════

class TestScenarios:
    """Hand-computed figures for the reference fleets."""

    def test_no_retread(self, no_retread):
        r = compute_savings(no_retread)
        s = r.itemized_savings
        # (10000 / 2.5) × 5.79 × 50 × 1%
        assert s.fuel_savings == pytest.approx(11_580.0)
        # 4000 km gain / 8 months × 0.035 × 300
        assert s.cpk_improvement == pytest.approx(5_250.0)
        assert s.carcass_savings == 0
        assert s.total == pytest.approx(16_830.0)
        assert r.savings_per_tire_per_month == pytest.approx(56.1)
        assert r.tire_cycle.new == 8.0
        assert r.tire_cycle.total == 8.0

    def test_one_retread(self, one_retread):
        r = compute_savings(one_retread)
        s = r.itemized_savings
        assert s.fuel_savings == pytest.approx(11_580.0)
        # 500 km/month × (3400 / 140000) × 300
        assert s.cpk_improvement == pytest.approx(3_642.857142857, rel=1e-9)
        # (30 / 14) × (9180 / 7)
        assert s.carcass_savings == pytest.approx(275_400 / 98, rel=1e-9)
        assert s.total == pytest.approx(18_033.0612245, rel=1e-9)
        assert r.tire_cycle.new == 8.0
        assert r.tire_cycle.r1 == 6.0
        assert r.tire_cycle.r2 == 0
        assert r.tire_cycle.total == 14.0

    def test_two_retreads(self, two_retreads):
        s = compute_savings(two_retreads).itemized_savings
        assert s.cpk_improvement == pytest.approx(600_000_000 / 195_000, rel=1e-9)
        # (90 / 19.5) × (78200 / 39)
        assert s.carcass_savings == pytest.approx(14_076_000 / 1_521, rel=1e-9)
        assert s.carcass_savings == pytest.approx(9_254.43787, rel=1e-8)

    def test_compute_alias(self, one_retread):
        assert compute is compute_savings
        assert compute(one_retread) == compute_savings(one_retread)


# ═══════════════════════════════════════════════════════════════════════════
# Individual terms
# ═══════════════════════════════════════════════════════════════════════════

class TestTerms:

    def test_fuel_formula(self, no_retread):
        assert compute_fuel_savings(no_retread, 2.0) == pytest.approx(23_160.0)
        assert compute_fuel_savings(no_retread, 0.0) == 0.0

    def test_cpk_zero_percent(self, two_retreads):
        totals = compute_tire_cycle_totals(two_retreads)
        assert compute_cpk_improvement(two_retreads, totals, 0.0) == 0.0

    def test_carcass_parts(self, one_retread):
        totals = compute_tire_cycle_totals(one_retread)
        retreadings_per_month = 1 / 14
        first_part = 0.10 * retreadings_per_month * 300
        second_part = (3_400 / 140_000) * 0.90 * (140_000 - 80_000)
        assert compute_carcass_savings(one_retread, totals, 10.0) == pytest.approx(
            first_part * second_part, rel=1e-12
        )

    def test_carcass_zero_at_full_discount(self, one_retread):
        totals = compute_tire_cycle_totals(one_retread)
        assert compute_carcass_savings(one_retread, totals, 100.0) == 0.0

    def test_tracking_record(self, tracked):
        t = compute_tracking(tracked)
        assert t.vehicles_with_tracking == 20
        assert t.tracking_cost_per_vehicle == 89.90
        assert t.tracking_total_cost == pytest.approx(1_798.0)


# ═══════════════════════════════════════════════════════════════════════════
# Invariants
# ═══════════════════════════════════════════════════════════════════════════

class TestInvariants:

    def test_deterministic(self, two_retreads):
        assert compute_savings(two_retreads) == compute_savings(two_retreads)

    def test_no_retread_means_no_carcass(self, base_fleet):
        calc = CalculationInput(
            **base_fleet,
            retreading_cycles="0",
            r1_tire_lifespan=70_000,
            carcass_savings_percentage=40,
        )
        assert compute_savings(calc).itemized_savings.carcass_savings == 0

    @pytest.mark.parametrize("fixture", ["no_retread", "one_retread", "two_retreads", "tracked"])
    def test_total_is_exact_sum(self, fixture, request):
        r = compute_savings(request.getfixturevalue(fixture))
        s = r.itemized_savings
        expected = s.fuel_savings + s.cpk_improvement + s.carcass_savings + r.tracking.tracking_total_cost
        assert s.total == expected

    @pytest.mark.parametrize("fixture", ["no_retread", "one_retread", "two_retreads", "tracked"])
    def test_per_tire_division(self, fixture, request):
        calc = request.getfixturevalue(fixture)
        r = compute_savings(calc)
        assert r.savings_per_tire_per_month == r.itemized_savings.total / calc.total_tires

    def test_tracking_is_linear(self, no_retread, tracked):
        base = compute_savings(no_retread).itemized_savings.total
        with_tracking = compute_savings(tracked).itemized_savings.total
        assert with_tracking - base == pytest.approx(20 * 89.90)

    def test_no_tracking_boundary(self, no_retread):
        r = compute_savings(no_retread)
        assert r.tracking.tracking_total_cost == 0
        s = r.itemized_savings
        assert s.total == s.fuel_savings + s.cpk_improvement + s.carcass_savings

    def test_zero_tires_gives_zero_per_tire(self, no_retread):
        degenerate = no_retread.model_construct(**{**no_retread.model_dump(), "total_tires": 0})
        r = compute_savings(degenerate)
        assert r.savings_per_tire_per_month == 0.0


# ═══════════════════════════════════════════════════════════════════════════
# Percentages
# ═══════════════════════════════════════════════════════════════════════════

class TestPercentages:

    def test_input_percentage_overrides_default(self, base_fleet):
        calc = CalculationInput(**base_fleet, retreading_cycles="0", fuel_savings_percentage=2)
        assert compute_savings(calc).itemized_savings.fuel_savings == pytest.approx(23_160.0)

    def test_explicit_defaults_fill_unset_values(self, no_retread):
        pct = SavingsPercentages(fuel_savings_pct=3.0, cpk_improvement_pct=5.0, carcass_savings_pct=10.0)
        r = compute_savings(no_retread, pct)
        assert r.itemized_savings.fuel_savings == pytest.approx(34_740.0)

    def test_input_wins_over_explicit_defaults(self, base_fleet):
        calc = CalculationInput(**base_fleet, retreading_cycles="0", fuel_savings_percentage=1)
        pct = SavingsPercentages(fuel_savings_pct=50.0)
        assert compute_savings(calc, pct).itemized_savings.fuel_savings == pytest.approx(11_580.0)

    def test_zero_percentages(self, base_fleet):
        calc = CalculationInput(
            **base_fleet,
            retreading_cycles="1",
            r1_tire_lifespan=60_000,
            fuel_savings_percentage=0,
            cpk_improvement_percentage=0,
            carcass_savings_percentage=0,
        )
        s = compute_savings(calc).itemized_savings
        assert s.fuel_savings == 0
        assert s.cpk_improvement == 0
        # carcass first part is zero when carcass% is zero
        assert s.carcass_savings == 0
        assert s.total == 0
