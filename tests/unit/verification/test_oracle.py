# =============================================================================
# File:   tests/unit/verification/test_oracle.py
# =============================================================================
#
# Coverage:
#   - the engine is invoked exactly once per check
#   - engine and descriptor errors propagate unchanged and are logged
#   - exact / structural response checks raise MismatchError with the report
#   - quality checks pass within tolerance, fail outside it, and are skipped
#     without evaluating the metric when fewer than two clusters exist
#   - option checks accept a correct engine and reject a leaking one
# =============================================================================

import pytest

import dbscan_oracle.verification.oracle as oracle_module
from dbscan_oracle.compute import (
    ComputeResult,
    HomogenTable,
    InvalidDescriptorError,
    InvalidInputError,
    ResultOptions,
    compute,
)
from dbscan_oracle.core.logging_layer import (
    COMPUTE_FAILED,
    COMPUTE_INVOKED,
    CONTRACT_CHECKED,
    QUALITY_SKIPPED,
    VALIDATION_FAILED,
    VALIDATION_PASSED,
    EventFilter,
)
from dbscan_oracle.verification import (
    ComputeOracle,
    ContractViolation,
    MismatchError,
    UndefinedMetric,
)
from dbscan_oracle.verification.data_models.validation_report import QualityReport


class _CountingEngine:
    """Wraps the real engine and records every call."""

    def __init__(self):
        self.calls = []

    def __call__(self, descriptor, data, weights=None):
        self.calls.append(descriptor)
        return compute(descriptor, data, weights)


def _scripted_engine(labels, cluster_count, extra=None):
    """Engine returning a fixed labelling regardless of input."""
    def engine(descriptor, data, weights=None):
        kwargs = {"responses": HomogenTable.from_array(labels)}
        kwargs.update(extra or {})
        return ComputeResult(descriptor.result_options, cluster_count, **kwargs)
    return engine


# ---------------------------------------------------------------------------
# run
# ---------------------------------------------------------------------------

class TestRun:

    def test_engine_called_once_with_descriptor(self, chain):
        engine = _CountingEngine()
        oracle = ComputeOracle(engine=engine, float_type="float32")
        oracle.run(chain, None, 1.0, 2, ResultOptions.ALL)
        assert len(engine.calls) == 1
        desc = engine.calls[0]
        assert desc.epsilon == 1.0
        assert desc.min_observations == 2
        assert desc.result_options == ResultOptions.ALL
        assert desc.float_type == "float32"

    def test_invalid_descriptor_propagates_and_logs(self, chain):
        engine = _CountingEngine()
        oracle = ComputeOracle(engine=engine)
        with pytest.raises(InvalidDescriptorError):
            oracle.run(chain, None, -1.0, 2, ResultOptions.RESPONSES)
        assert engine.calls == []
        failed = oracle.logger.events_of_type(COMPUTE_FAILED)
        assert failed[0].data["exception_type"] == "InvalidDescriptorError"

    def test_engine_error_propagates_unchanged(self, chain):
        bad_weights = HomogenTable.wrap([1.0, 1.0], 2, 1)
        oracle = ComputeOracle()
        with pytest.raises(InvalidInputError) as info:
            oracle.check_responses(chain, bad_weights, 1.0, 2, [0] * 7)
        assert info.value.field_name == "weights"
        assert oracle.logger.events_of_type(VALIDATION_PASSED) == []

    def test_events_reproducible_with_fixed_clock(self, chain, fixed_clock):
        hashes = []
        for _ in range(2):
            oracle = ComputeOracle(scenario_id="CORE-02", clock=fixed_clock)
            oracle.check_responses(chain, None, 1.0, 2, [-1, 0, 0, 0, -1, -1, -1])
            hashes.append([e.hash for e in oracle.logger.query_events(EventFilter())])
        assert len(hashes[0]) == 2
        assert hashes[0] == hashes[1]


# ---------------------------------------------------------------------------
# check_responses
# ---------------------------------------------------------------------------

class TestCheckResponses:

    @pytest.mark.parametrize("float_type", ["float32", "float64"])
    def test_chain_exact_match(self, chain, float_type):
        oracle = ComputeOracle(float_type=float_type)
        report = oracle.check_responses(chain, None, 1.0, 2, [-1, 0, 0, 0, -1, -1, -1])
        assert report.passed
        assert report.context.float_type == float_type
        assert len(oracle.logger.events_of_type(COMPUTE_INVOKED)) == 1
        assert len(oracle.logger.events_of_type(VALIDATION_PASSED)) == 1

    def test_mismatch_raises_with_every_row(self, chain):
        oracle = ComputeOracle(scenario_id="CORE-01")
        with pytest.raises(MismatchError) as info:
            oracle.check_responses(chain, None, 1.0, 2, [0, 1, 1, 1, 2, 3, 4])
        report = info.value.report
        assert [m.row_index for m in report.mismatches] == [0, 1, 2, 3, 4, 5, 6]
        assert "CORE-01" in str(info.value)
        assert "epsilon=1.0" in str(info.value)
        assert oracle.logger.events_of_type(VALIDATION_FAILED)[0].data["mismatch_count"] == 7

    def test_structural_accepts_relabelling(self):
        engine = _scripted_engine([1, 1, 0], 2)
        data = HomogenTable.wrap([0.0, 0.1, 5.0], 3, 1)
        oracle = ComputeOracle(engine=engine)
        with pytest.raises(MismatchError):
            oracle.check_responses(data, None, 1.0, 1, [0, 0, 1])
        report = ComputeOracle(engine=engine).check_responses(
            data, None, 1.0, 1, [0, 0, 1], structural=True
        )
        assert report.mode == "structural"

    def test_weighted_context(self):
        data = HomogenTable.wrap([0.0, 1.0], 2, 1)
        weights = HomogenTable.wrap([6.0, 5.0], 2, 1)
        report = ComputeOracle().check_responses(data, weights, 0.5, 6, [0, -1])
        assert report.context.weighted


# ---------------------------------------------------------------------------
# check_quality
# ---------------------------------------------------------------------------

class TestCheckQuality:

    def test_within_tolerance_passes(self, two_blobs):
        report = ComputeOracle().check_quality(two_blobs, 1.5, 2, 0.10001, 1e-3)
        assert report.passed
        assert not report.skipped
        assert report.cluster_count == 2
        assert report.value == pytest.approx(0.1)

    def test_outside_tolerance_raises(self, two_blobs):
        oracle = ComputeOracle(dataset_id="blobs")
        with pytest.raises(MismatchError) as info:
            oracle.check_quality(two_blobs, 1.5, 2, 0.2, 1e-3)
        report = info.value.report
        assert isinstance(report, QualityReport)
        assert report.value == pytest.approx(0.1)
        assert report.reference == 0.2
        assert report.ratio == pytest.approx(0.5)
        assert report.relative_tolerance == 1e-3
        assert "dataset=blobs" in str(info.value)

    @pytest.mark.parametrize("min_obs, clusters", [(2, 1), (4, 0)])
    def test_below_two_clusters_skipped_without_metric(
        self, chain, monkeypatch, min_obs, clusters
    ):
        def _never(*args, **kwargs):
            raise AssertionError("metric evaluated")
        monkeypatch.setattr(oracle_module, "davies_bouldin_index", _never)

        oracle = ComputeOracle()
        report = oracle.check_quality(chain, 1.0, min_obs, 0.5)
        assert report.skipped
        assert not report.passed
        assert report.cluster_count == clusters
        assert report.value is None
        assert len(oracle.logger.events_of_type(QUALITY_SKIPPED)) == 1

    def test_coincident_centroids_propagate(self):
        engine = _scripted_engine([0, 0, 1], 2)
        data = HomogenTable.wrap([-1.0, 1.0, 0.0], 3, 1)
        with pytest.raises(UndefinedMetric):
            ComputeOracle(engine=engine).check_quality(data, 1.0, 1, 0.5)

    def test_zero_reference_and_zero_value(self):
        # two single-point clusters: dispersion 0, index 0
        data = HomogenTable.wrap([0.0, 10.0], 2, 1)
        report = ComputeOracle().check_quality(data, 1.0, 1, 0.0, 1e-6)
        assert report.passed
        assert report.value == 0.0


# ---------------------------------------------------------------------------
# check_modes
# ---------------------------------------------------------------------------

class TestCheckModes:

    @pytest.mark.parametrize("options", ResultOptions.all_subsets(), ids=repr)
    def test_every_subset_passes(self, chain, options):
        oracle = ComputeOracle()
        checks = oracle.check_modes(chain, None, 1.0, 1, options)
        assert all(c.passed for c in checks)
        assert len(oracle.logger.events_of_type(CONTRACT_CHECKED)) == 1

    def test_leaking_engine_rejected(self, chain):
        table = HomogenTable.wrap([1, 1, 1, 1, 1, 1, 1], 7, 1)

        def leaky(descriptor, data, weights=None):
            result = ComputeResult(ResultOptions.ALL, 5, table, table, table, table)
            return result
        oracle = ComputeOracle(engine=leaky)
        with pytest.raises(ContractViolation) as info:
            oracle.check_modes(chain, None, 1.0, 1, ResultOptions.RESPONSES)
        assert len(info.value.checks) == 3
        assert len(oracle.logger.events_of_type(VALIDATION_FAILED)) == 1
