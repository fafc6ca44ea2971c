"""
Tests for value types, canonical JSON and float comparisons
"""

import numpy as np
import pytest
from pwl_engine import (
    BoundType,
    CaseSplit,
    ConstraintError,
    Equation,
    EquationType,
    ErrorCode,
    LinearExpression,
    PropagationResult,
    PropagationStatus,
    TableauRow,
    TableauRowEntry,
    Tightening,
    canonical_dumps,
    canonical_hash,
)
from pwl_engine import float_utils


class TestFloatUtils:
    """Test epsilon-aware comparisons."""

    def test_sign_predicates(self):
        assert float_utils.is_zero(1e-12)
        assert not float_utils.is_positive(1e-12)
        assert float_utils.is_positive(1e-6)
        assert float_utils.is_negative(-1e-6)
        assert not float_utils.is_negative(-1e-12)

    def test_ordering(self):
        assert float_utils.gt(1.0, 0.5)
        assert not float_utils.gt(1.0, 1.0 - 1e-12)
        assert float_utils.gte(1.0 - 1e-12, 1.0)
        assert float_utils.lt(0.5, 1.0)
        assert float_utils.lte(1.0, 1.0)

    def test_infinities(self):
        assert float_utils.are_equal(float_utils.infinity(), float('inf'))
        assert not float_utils.is_finite(float_utils.negative_infinity())
        assert float_utils.gt(0.0, float_utils.negative_infinity())

    def test_format_bound(self):
        assert float_utils.format_bound(float('-inf')) == "-inf"
        assert float_utils.format_bound(float('inf')) == "inf"
        assert float_utils.format_bound(1.5) == "1.500000"


class TestEquation:
    """Test linear equations."""

    def test_evaluate_and_satisfy(self):
        equation = Equation(EquationType.EQ)
        equation.add_addend(1.0, 0)
        equation.add_addend(-1.0, 1)
        equation.set_scalar(0.0)

        assert equation.get_participating_variables() == [0, 1]
        assert equation.is_satisfied({0: 2.0, 1: 2.0})
        assert not equation.is_satisfied({0: 2.0, 1: 1.0})

    def test_inequalities(self):
        ge = Equation(EquationType.GE, scalar=1.0)
        ge.add_addend(2.0, 0)
        assert ge.is_satisfied({0: 0.5})
        assert not ge.is_satisfied({0: 0.4})

        le = Equation(EquationType.LE, scalar=1.0)
        le.add_addend(2.0, 0)
        assert le.is_satisfied({0: 0.5})
        assert not le.is_satisfied({0: 0.6})

    def test_update_variable_index(self):
        equation = Equation()
        equation.add_addend(1.0, 3)
        equation.update_variable_index(3, 7)
        assert equation.get_participating_variables() == [7]


class TestCaseSplit:
    """Test case split bundles."""

    def test_single_equation(self):
        split = CaseSplit()
        split.add_equation(Equation())
        with pytest.raises(AssertionError):
            split.add_equation(Equation())

    def test_update_variable_index(self):
        split = CaseSplit()
        split.store_bound_tightening(Tightening(2, 0.0, BoundType.UB))
        equation = Equation()
        equation.add_addend(1.0, 2)
        split.add_equation(equation)

        split.update_variable_index(2, 5)
        assert split.get_bound_tightenings() == [Tightening(5, 0.0, BoundType.UB)]
        assert split.get_equations()[0].get_participating_variables() == [5]

    def test_dump(self):
        split = CaseSplit()
        split.store_bound_tightening(Tightening(0, 0.0, BoundType.LB))
        assert "x0 >= 0.0" in split.dump()


class TestPropagationResult:
    """Test merging of propagation outcomes."""

    def test_feasible_default(self):
        result = PropagationResult.feasible()
        assert result.status == PropagationStatus.FEASIBLE
        assert not result.infeasible
        assert result.certificate == {}

    def test_infeasibility_wins(self):
        result = PropagationResult.feasible()
        result.tightenings.append(Tightening(0, 1.0, BoundType.LB))

        refuted = PropagationResult.infeasible_because("empty_interval", variable=0)
        merged = result.merge(refuted)

        assert merged is result
        assert merged.infeasible
        assert merged.certificate == {"type": "empty_interval", "variable": 0}
        assert merged.tightenings == [Tightening(0, 1.0, BoundType.LB)]

    def test_first_certificate_kept(self):
        result = PropagationResult.infeasible_because("first")
        result.merge(PropagationResult.infeasible_because("second"))
        assert result.certificate["type"] == "first"


class TestRowsAndExpressions:
    """Test tableau rows and linear expressions."""

    def test_tableau_row(self):
        row = TableauRow(lhs=1, row=[TableauRowEntry(0, 1.0), TableauRowEntry(2, 1.0)], scalar=0.5)
        assert row.size == 2
        assert row.evaluate_rhs({0: 1.0, 2: 2.0}) == 3.5

    def test_linear_expression(self):
        cost = LinearExpression(constant=1.0)
        cost.add_to_addend(0, 2.0)
        cost.add_to_addend(0, -1.0)
        assert cost.evaluate({0: 3.0}) == 4.0


class TestCanonicalJson:
    """Test deterministic serialization."""

    def test_key_order_irrelevant(self):
        assert canonical_dumps({"b": 1, "a": 2}) == canonical_dumps({"a": 2, "b": 1})
        assert canonical_hash({"b": 1, "a": 2}) == canonical_hash({"a": 2, "b": 1})

    def test_numpy_and_enum_values(self):
        encoded = canonical_dumps({"x": np.float64(1.5), "v": np.array([1, 2]), "t": BoundType.LB})
        assert encoded == '{"t":"lb","v":[1,2],"x":1.5}'


class TestConstraintError:
    """Test error codes."""

    def test_code_and_message(self):
        error = ConstraintError(ErrorCode.PHASE_REVERSAL, "ACTIVE -> INACTIVE")
        assert error.code == ErrorCode.PHASE_REVERSAL
        assert "ACTIVE -> INACTIVE" in str(error)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
