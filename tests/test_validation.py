"""Validation tests for CalculationInput, SavingsPercentages and Submission."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from tire_savings.config import (
    DEFAULT_PERCENTAGES,
    AdditionalGain,
    CalculationInput,
    SavingsPercentages,
    Submission,
)


def _error_fields(exc: pytest.ExceptionInfo) -> set[str]:
    return {str(err["loc"][-1]) for err in exc.value.errors()}


# ═══════════════════════════════════════════════════════════════════════════
# Field constraints
# ═══════════════════════════════════════════════════════════════════════════

class TestCalculationInputConstraints:
    """Every bound on CalculationInput is enforced."""

    @pytest.mark.parametrize("field,bad", [
        ("fleet_size", 0),
        ("total_tires", 0),
        ("fuel_consumption", 0),
        ("fuel_consumption", -1.5),
        ("fuel_price", 0),
        ("monthly_mileage", 0),
        ("tire_lifespan", 0),
        ("tire_price", 0.5),
        ("retread_price", 0),
        ("vehicles_with_tracking", -1),
        ("tracking_cost_per_vehicle", -0.01),
        ("fuel_savings_percentage", -1),
        ("fuel_savings_percentage", 100.1),
        ("cpk_improvement_percentage", 101),
        ("carcass_savings_percentage", -5),
    ])
    def test_rejects_out_of_range(self, base_fleet, field, bad):
        kwargs = {**base_fleet, "retreading_cycles": "0", field: bad}
        with pytest.raises(ValidationError):
            CalculationInput(**kwargs)

    def test_boundaries_accepted(self, base_fleet):
        calc = CalculationInput(
            **{**base_fleet, "tire_price": 1, "retread_price": 1, "fleet_size": 1},
            retreading_cycles="0",
            fuel_savings_percentage=0,
            cpk_improvement_percentage=100,
            vehicles_with_tracking=0,
            tracking_cost_per_vehicle=0,
        )
        assert calc.fleet_size == 1
        assert calc.cpk_improvement_percentage == 100

    def test_missing_required_field(self, base_fleet):
        kwargs = {**base_fleet, "retreading_cycles": "0"}
        del kwargs["fuel_price"]
        with pytest.raises(ValidationError) as exc:
            CalculationInput(**kwargs)
        assert "fuelPrice" in _error_fields(exc)

    def test_unknown_retreading_cycles(self, base_fleet):
        with pytest.raises(ValidationError):
            CalculationInput(**base_fleet, retreading_cycles="3")

    def test_one_error_per_offending_field(self, base_fleet):
        kwargs = {**base_fleet, "retreading_cycles": "0", "fleet_size": 0, "fuel_price": -1}
        with pytest.raises(ValidationError) as exc:
            CalculationInput(**kwargs)
        assert _error_fields(exc) == {"fleetSize", "fuelPrice"}

    def test_tracking_defaults(self, no_retread):
        assert no_retread.vehicles_with_tracking == 0
        assert no_retread.tracking_cost_per_vehicle == 0.0

    def test_percentages_default_to_unset(self, no_retread):
        assert no_retread.fuel_savings_percentage is None
        assert no_retread.cpk_improvement_percentage is None
        assert no_retread.carcass_savings_percentage is None


# ═══════════════════════════════════════════════════════════════════════════
# Retreading rules
# ═══════════════════════════════════════════════════════════════════════════

class TestRetreadingRules:

    @pytest.mark.parametrize("cycles", ["1", "2"])
    def test_r1_required(self, base_fleet, cycles):
        with pytest.raises(ValidationError) as exc:
            CalculationInput(**base_fleet, retreading_cycles=cycles, r2_tire_lifespan=50_000)
        assert "r1TireLifespan" in _error_fields(exc)
        assert "at least one retread" in str(exc.value)

    def test_r2_required_with_two_retreads(self, base_fleet):
        with pytest.raises(ValidationError) as exc:
            CalculationInput(**base_fleet, retreading_cycles="2", r1_tire_lifespan=60_000)
        assert _error_fields(exc) == {"r2TireLifespan"}
        assert "two retreads" in str(exc.value)

    def test_r2_not_required_with_one_retread(self, one_retread):
        assert one_retread.r2_tire_lifespan is None

    def test_lifespans_optional_without_retreads(self, no_retread):
        assert no_retread.r1_tire_lifespan is None
        assert no_retread.r2_tire_lifespan is None

    def test_lifespan_must_be_positive(self, base_fleet):
        with pytest.raises(ValidationError):
            CalculationInput(**base_fleet, retreading_cycles="1", r1_tire_lifespan=0)

    @pytest.mark.parametrize("raw,expected", [(0, "0"), (1, "1"), (2, "2")])
    def test_integer_cycles_coerced(self, base_fleet, raw, expected):
        calc = CalculationInput(
            **base_fleet,
            retreading_cycles=raw,
            r1_tire_lifespan=60_000,
            r2_tire_lifespan=55_000,
        )
        assert calc.retreading_cycles == expected
        assert calc.num_recaps == raw


# ═══════════════════════════════════════════════════════════════════════════
# JSON boundary
# ═══════════════════════════════════════════════════════════════════════════

class TestCamelCase:

    def test_accepts_camel_case(self):
        calc = CalculationInput.model_validate({
            "fleetSize": 50,
            "totalTires": 300,
            "fuelConsumption": 2.5,
            "fuelPrice": 5.79,
            "monthlyMileage": 10_000,
            "tireLifespan": 80_000,
            "tirePrice": 2_800,
            "retreadPrice": 600,
            "retreadingCycles": "1",
            "r1TireLifespan": 60_000,
            "fuelSavingsPercentage": 2,
        })
        assert calc.r1_tire_lifespan == 60_000
        assert calc.fuel_savings_percentage == 2

    def test_dumps_camel_case(self, one_retread):
        data = one_retread.model_dump(by_alias=True)
        assert data["fleetSize"] == 50
        assert data["r1TireLifespan"] == 60_000
        assert "fleet_size" not in data

    def test_frozen(self, no_retread):
        with pytest.raises(ValidationError):
            no_retread.fleet_size = 10


# ═══════════════════════════════════════════════════════════════════════════
# SavingsPercentages
# ═══════════════════════════════════════════════════════════════════════════

class TestSavingsPercentages:

    def test_defaults(self):
        assert DEFAULT_PERCENTAGES.fuel_savings_pct == 1.0
        assert DEFAULT_PERCENTAGES.cpk_improvement_pct == 5.0
        assert DEFAULT_PERCENTAGES.carcass_savings_pct == 10.0

    def test_range(self):
        SavingsPercentages(fuel_savings_pct=0, carcass_savings_pct=100)
        with pytest.raises(ValidationError):
            SavingsPercentages(fuel_savings_pct=-0.1)
        with pytest.raises(ValidationError):
            SavingsPercentages(cpk_improvement_pct=100.5)

    def test_resolve_mixes_input_and_defaults(self, base_fleet):
        calc = CalculationInput(
            **base_fleet, retreading_cycles="0", cpk_improvement_percentage=0,
        )
        pct = DEFAULT_PERCENTAGES.resolve(calc)
        assert pct.fuel_savings_pct == 1.0
        # zero is a value, not "unset"
        assert pct.cpk_improvement_pct == 0
        assert pct.carcass_savings_pct == 10.0


# ═══════════════════════════════════════════════════════════════════════════
# Submission
# ═══════════════════════════════════════════════════════════════════════════

class TestSubmission:

    def test_company_name_required(self, no_retread):
        with pytest.raises(ValidationError):
            Submission(company_name="", calculation=no_retread)

    def test_optional_metadata(self, no_retread):
        s = Submission(company_name="Beta Log", calculation=no_retread)
        assert s.tire_pressure_check is None
        assert s.fuel_savings_source is None
        assert s.additional_gains == []

    def test_gain_value_non_negative(self):
        AdditionalGain(name="Fines avoided", value=0)
        with pytest.raises(ValidationError):
            AdditionalGain(name="Fines avoided", value=-10)

    def test_nested_camel_case(self):
        s = Submission.model_validate({
            "companyName": "Gamma",
            "additionalGains": [{"name": "Insurance", "value": 250}],
            "calculation": {
                "fleetSize": 10, "totalTires": 60, "fuelConsumption": 3,
                "fuelPrice": 6, "monthlyMileage": 8_000, "tireLifespan": 70_000,
                "tirePrice": 2_500, "retreadPrice": 550, "retreadingCycles": 0,
            },
        })
        assert s.additional_gains[0].value == 250
        assert s.calculation.retreading_cycles == "0"
