"""
Tests for Query and the aux-variable transformation
"""

import pytest
from pwl_engine import BoundType, PhaseStatus, Query, ReluConstraint, Tightening


def relu_query(b_lower=None):
    query = Query(2)
    relu = ReluConstraint(0, 1)
    if b_lower is not None:
        relu.notify_lower_bound(0, b_lower)
    query.add_piecewise_linear_constraint(relu)
    return query, relu


class TestQuery:
    """Test the problem model."""

    def test_bounds(self):
        query = Query(3)
        query.set_lower_bound(0, -1.0)
        query.set_upper_bound(2, 4.0)
        assert query.get_lower_bound(0) == -1.0
        assert query.get_upper_bound(2) == 4.0
        assert query.get_upper_bound(1) == float('inf')

    def test_out_of_range_bound(self):
        query = Query(1)
        with pytest.raises(AssertionError):
            query.set_lower_bound(1, 0.0)

    def test_fingerprint_tracks_content(self):
        first, _ = relu_query()
        second, _ = relu_query()
        assert first.fingerprint() == second.fingerprint()

        second.set_upper_bound(0, 1.0)
        assert first.fingerprint() != second.fingerprint()


class TestAuxTransformation:
    """Test transform_to_use_aux_variables."""

    def test_adds_variable_and_equation(self):
        query, relu = relu_query(b_lower=-3.0)
        relu.transform_to_use_aux_variables(query)

        assert relu.aux_variable_in_use()
        assert relu.get_aux() == 2
        assert query.get_number_of_variables() == 3
        assert relu.get_native_aux_vars() == [2]
        assert relu.serialize_to_string() == "relu,1,0,2"

        assert len(query.equations) == 1
        equation = query.equations[0]
        assert [(a.coefficient, a.variable) for a in equation.addends] == [
            (1.0, 1), (-1.0, 0), (-1.0, 2)
        ]
        assert equation.scalar == 0.0
        assert equation.is_satisfied({0: -2.0, 1: 0.0, 2: 2.0})

        assert query.get_lower_bound(2) == 0.0
        assert query.get_upper_bound(2) == 3.0

    def test_idempotent(self):
        query, relu = relu_query(b_lower=-3.0)
        query.transform_to_use_aux_variables()
        query.transform_to_use_aux_variables()

        assert query.get_number_of_variables() == 3
        assert len(query.equations) == 1

    def test_positive_input_pins_aux(self):
        query, relu = relu_query(b_lower=2.0)
        relu.transform_to_use_aux_variables(query)
        assert query.get_upper_bound(2) == 0.0

    def test_unbounded_input_leaves_aux_unbounded(self):
        query, relu = relu_query()
        relu.transform_to_use_aux_variables(query)
        assert query.get_upper_bound(2) == float('inf')

    def test_active_split_uses_aux(self):
        query, relu = relu_query()
        relu.transform_to_use_aux_variables(query)

        split = relu.get_case_split(PhaseStatus.RELU_PHASE_ACTIVE)
        assert Tightening(2, 0.0, BoundType.UB) in split.get_bound_tightenings()
        assert split.get_equations() == []

    def test_tableau_aux_var_registration(self):
        query, relu = relu_query()
        relu.transform_to_use_aux_variables(query)
        relu.add_tableau_aux_var(7, 2)
        assert relu.get_tableau_aux_vars() == [7]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
