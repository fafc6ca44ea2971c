"""
Tests for the reference BoundManager and its explainer
"""

import numpy as np
import pytest
from pwl_engine import (
    BoundManager,
    BoundType,
    EngineConfig,
    PiecewiseLinearFunctionType,
    PLCLemma,
    TableauRow,
)


class TestBoundManager:
    """Test bound storage and tightening."""

    def test_unbounded_by_default(self):
        manager = BoundManager(2)
        assert manager.get_lower_bound(0) == -np.inf
        assert manager.get_upper_bound(1) == np.inf
        assert manager.get_lower_bound(10) == -np.inf

    def test_grows_on_demand(self):
        manager = BoundManager()
        manager.set_upper_bound(4, 3.0)
        assert manager.num_variables == 5
        assert manager.get_upper_bound(4) == 3.0
        assert manager.get_lower_bound(4) == -np.inf

    def test_only_strict_tightening_accepted(self):
        manager = BoundManager(1)
        assert manager.tighten_lower_bound(0, 1.0)
        assert not manager.tighten_lower_bound(0, 1.0)
        assert not manager.tighten_lower_bound(0, 0.5)
        assert manager.tighten_upper_bound(0, 4.0)
        assert not manager.tighten_upper_bound(0, 4.0 + 1e-12)
        assert manager.get_lower_bound(0) == 1.0
        assert manager.get_upper_bound(0) == 4.0

    def test_consistency(self):
        manager = BoundManager(2)
        manager.set_lower_bound(1, 2.0)
        manager.set_upper_bound(1, 1.0)
        assert manager.consistent_bounds(0)
        assert not manager.consistent_bounds(1)
        assert manager.inconsistent_variables() == [1]

    def test_store_and_restore(self):
        manager = BoundManager(2)
        manager.set_lower_bound(0, -1.0)
        snapshot = manager.store_local_bounds()

        manager.tighten_lower_bound(0, 0.5)
        manager.restore_local_bounds(snapshot)
        assert manager.get_lower_bound(0) == -1.0

        # Snapshot stays usable after restore
        manager.tighten_lower_bound(0, 0.5)
        manager.restore_local_bounds(snapshot)
        assert manager.get_lower_bound(0) == -1.0


class TestBoundExplainer:
    """Test proof-mode justifications."""

    def test_explainer_only_in_proof_mode(self):
        assert BoundManager(1).get_bound_explainer() is None
        assert not BoundManager(1).should_produce_proofs()

        manager = BoundManager(1, EngineConfig(produce_proofs=True))
        assert manager.should_produce_proofs()
        assert manager.get_bound_explainer() is not None

    def test_row_explanation(self):
        manager = BoundManager(3, EngineConfig(produce_proofs=True))
        row = TableauRow(lhs=1)
        manager.tighten_upper_bound(0, 2.0, row)

        explanation = manager.get_bound_explainer().get_explanation(0, BoundType.UB)
        assert explanation.row is row
        assert explanation.lemma is None
        assert explanation.value == 2.0

    def test_lemma_explanation(self):
        manager = BoundManager(3, EngineConfig(produce_proofs=True))
        changed = manager.add_lemma_explanation_and_tighten_bound(
            2, 0.0, BoundType.UB, [1], BoundType.LB, PiecewiseLinearFunctionType.RELU)

        assert changed
        explainer = manager.get_bound_explainer()
        assert len(explainer.lemmas) == 1
        assert explainer.get_explanation(2, BoundType.UB).lemma is explainer.lemmas[0]

    def test_rejected_lemma_not_recorded(self):
        manager = BoundManager(3, EngineConfig(produce_proofs=True))
        manager.set_upper_bound(2, 0.0)
        changed = manager.add_lemma_explanation_and_tighten_bound(
            2, 1.0, BoundType.UB, [1], BoundType.LB, PiecewiseLinearFunctionType.RELU)

        assert not changed
        assert manager.get_bound_explainer().lemmas == []

    def test_unjustified_tightening_clears_explanation(self):
        """Test that a row-less tightening drops the older row."""
        manager = BoundManager(1, EngineConfig(produce_proofs=True))
        manager.tighten_upper_bound(0, 2.0, TableauRow(lhs=1))
        assert manager.tighten_upper_bound(0, 1.0)

        assert manager.get_upper_bound(0) == 1.0
        assert manager.get_bound_explainer().get_explanation(0, BoundType.UB) is None

    def test_row_replaces_lemma(self):
        """Test that the latest justification wins."""
        manager = BoundManager(3, EngineConfig(produce_proofs=True))
        manager.add_lemma_explanation_and_tighten_bound(
            2, 1.0, BoundType.UB, [1], BoundType.LB, PiecewiseLinearFunctionType.RELU)
        row = TableauRow(lhs=1)
        manager.tighten_upper_bound(2, 0.5, row)

        explanation = manager.get_bound_explainer().get_explanation(2, BoundType.UB)
        assert explanation.row is row
        assert explanation.lemma is None
        assert explanation.value == 0.5

    def test_rejected_tightening_keeps_explanation(self):
        """Test that a refused tightening leaves the explanation alone."""
        manager = BoundManager(1, EngineConfig(produce_proofs=True))
        row = TableauRow(lhs=1)
        manager.tighten_lower_bound(0, 2.0, row)
        assert not manager.tighten_lower_bound(0, 1.0)
        assert manager.get_bound_explainer().get_explanation(0, BoundType.LB).row is row


class TestPLCLemma:
    """Test lemma hashing."""

    def make_lemma(self, bound=0.0):
        return PLCLemma(
            causing_vars=[1],
            affected_var=2,
            bound=bound,
            causing_var_bound=BoundType.LB,
            affected_var_bound=BoundType.UB,
            constraint_type=PiecewiseLinearFunctionType.RELU
        )

    def test_hash_is_deterministic(self):
        assert self.make_lemma().lemma_hash == self.make_lemma().lemma_hash
        assert self.make_lemma(0.0).lemma_hash != self.make_lemma(1.0).lemma_hash

    def test_verify_detects_tampering(self):
        lemma = self.make_lemma()
        assert lemma.verify()
        lemma.bound = 5.0
        assert not lemma.verify()

    def test_canonical_form(self):
        canonical = self.make_lemma().to_canonical()
        assert canonical["constraint_type"] == "relu"
        assert canonical["causing_var_bound"] == "lb"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
