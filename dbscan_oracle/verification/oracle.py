# dbscan_oracle/verification/oracle.py
# ComputeOracle -- runs the compute engine and routes its result to the
# validators.
#
# One ComputeOracle belongs to one scenario. It holds no state beyond its
# scenario identity and its event log, and is discarded with the scenario.
#
# The engine is invoked exactly once per run(). Its exceptions are logged
# and re-raised unchanged. Nothing is retried. The oracle never asks the
# engine for a quality index; it only reads result outputs.

from datetime import datetime, timezone
from typing import Callable, Optional, Sequence, Tuple

from dbscan_oracle.compute.descriptor import Descriptor
from dbscan_oracle.compute.engine import compute
from dbscan_oracle.compute.options import ResultOptions
from dbscan_oracle.compute.result import ComputeResult
from dbscan_oracle.compute.table import HomogenTable
from dbscan_oracle.core.logging_layer import (
    COMPUTE_FAILED,
    COMPUTE_INVOKED,
    CONTRACT_CHECKED,
    QUALITY_SKIPPED,
    VALIDATION_FAILED,
    VALIDATION_PASSED,
    EventLogger,
)
from dbscan_oracle.utils.constants import (
    DEFAULT_DBI_TOLERANCE,
    DEFAULT_FLOAT_TYPE,
    MIN_CLUSTERS_FOR_QUALITY,
)
from dbscan_oracle.verification.data_models.validation_report import (
    ContractCheck,
    QualityReport,
    ScenarioContext,
    ValidationReport,
)
from dbscan_oracle.verification.exact_match import (
    ExactMatchValidator,
    StructuralMatchValidator,
)
from dbscan_oracle.verification.exceptions import ContractViolation, MismatchError
from dbscan_oracle.verification.option_mask import OptionMaskEnforcer
from dbscan_oracle.verification.quality_metric import centers_of_mass, davies_bouldin_index
from dbscan_oracle.verification.tolerance import relative_difference, within_tolerance

Engine = Callable[[Descriptor, HomogenTable, Optional[HomogenTable]], ComputeResult]


def _now_utc() -> datetime:
    """Audit timestamps only. Never influences a verdict."""
    return datetime.now(timezone.utc)


def _is_weighted(weights: Optional[HomogenTable]) -> bool:
    return weights is not None and weights.has_data


class ComputeOracle:
    """
    Orchestrates one validation scenario.

    Methods:
      run(data, weights, epsilon, min_observations, options) -> ComputeResult
      check_responses(...) -> ValidationReport     (raises MismatchError)
      check_quality(...)   -> QualityReport        (raises MismatchError)
      check_modes(...)     -> tuple of ContractCheck (raises ContractViolation)
    """

    def __init__(
        self,
        engine:      Engine = compute,
        float_type:  str = DEFAULT_FLOAT_TYPE,
        scenario_id: str = "",
        dataset_id:  str = "inline",
        logger:      Optional[EventLogger] = None,
        clock:       Callable[[], datetime] = _now_utc,
    ) -> None:
        self._engine      = engine
        self._float_type  = float_type
        self._scenario_id = scenario_id
        self._dataset_id  = dataset_id
        self._logger      = logger if logger is not None else EventLogger()
        self._clock       = clock

    @property
    def logger(self) -> EventLogger:
        return self._logger

    def context(
        self,
        epsilon:          float,
        min_observations: int,
        weights:          Optional[HomogenTable] = None,
    ) -> ScenarioContext:
        return ScenarioContext(
            scenario_id=self._scenario_id,
            dataset_id=self._dataset_id,
            epsilon=float(epsilon),
            min_observations=int(min_observations),
            float_type=self._float_type,
            weighted=_is_weighted(weights),
        )

    def _log(self, event_type: str, context: ScenarioContext, **data) -> None:
        payload = {
            "scenario_id":      context.scenario_id,
            "dataset_id":       context.dataset_id,
            "epsilon":          context.epsilon,
            "min_observations": context.min_observations,
            "float_type":       context.float_type,
            "weighted":         context.weighted,
        }
        payload.update(data)
        self._logger.log_event(event_type, payload, self._clock())

    # -----------------------------------------------------------------------
    # run
    # -----------------------------------------------------------------------

    def run(
        self,
        data:             HomogenTable,
        weights:          Optional[HomogenTable],
        epsilon:          float,
        min_observations: int,
        options:          ResultOptions,
    ) -> ComputeResult:
        """
        Build a descriptor and invoke the engine exactly once.

        Engine errors (including descriptor validation) are logged as
        COMPUTE_FAILED and re-raised unchanged.
        """
        context = self.context(epsilon, min_observations, weights)
        self._log(COMPUTE_INVOKED, context, result_options=options.names())
        try:
            descriptor = Descriptor(
                epsilon=epsilon,
                min_observations=min_observations,
                result_options=options,
                float_type=self._float_type,
            )
            return self._engine(descriptor, data, weights)
        except Exception as exc:
            self._log(
                COMPUTE_FAILED, context,
                exception_type=type(exc).__name__,
                detail=str(exc),
            )
            raise

    # -----------------------------------------------------------------------
    # check_responses
    # -----------------------------------------------------------------------

    def check_responses(
        self,
        data:             HomogenTable,
        weights:          Optional[HomogenTable],
        epsilon:          float,
        min_observations: int,
        reference:        Sequence[int],
        structural:       bool = False,
    ) -> ValidationReport:
        """
        Compare computed responses to `reference`.

        structural=False requires identical labels row by row; True accepts
        any bijective relabelling of the clusters.

        Raises MismatchError listing every disagreeing row.
        """
        context = self.context(epsilon, min_observations, weights)
        result = self.run(data, weights, epsilon, min_observations, ResultOptions.RESPONSES)
        validator = StructuralMatchValidator() if structural else ExactMatchValidator()
        report = validator.validate(result.get_responses(), reference, context=context)

        if not report.passed:
            self._log(
                VALIDATION_FAILED, context,
                mode=report.mode,
                mismatch_count=len(report.mismatches),
            )
            raise MismatchError(
                report.summary(),
                report=report,
                field_name="responses",
                value=tuple(m.row_index for m in report.mismatches),
            )
        self._log(VALIDATION_PASSED, context, mode=report.mode, row_count=report.row_count)
        return report

    # -----------------------------------------------------------------------
    # check_quality
    # -----------------------------------------------------------------------

    def check_quality(
        self,
        data:               HomogenTable,
        epsilon:            float,
        min_observations:   int,
        reference_score:    float,
        relative_tolerance: float = DEFAULT_DBI_TOLERANCE,
        weights:            Optional[HomogenTable] = None,
    ) -> QualityReport:
        """
        Compare the Davies-Bouldin index of the computed partition with
        `reference_score`.

        With fewer than two clusters the index is undefined: the metric is
        not evaluated and a skipped report is returned.

        Raises MismatchError when the relative difference is not below
        `relative_tolerance`. UndefinedMetric (coincident centroids)
        propagates.
        """
        context = self.context(epsilon, min_observations, weights)
        result = self.run(data, weights, epsilon, min_observations, ResultOptions.RESPONSES)
        count = result.cluster_count

        if count < MIN_CLUSTERS_FOR_QUALITY:
            reason = (
                "cluster_count=" + str(count)
                + " is below " + str(MIN_CLUSTERS_FOR_QUALITY)
            )
            self._log(QUALITY_SKIPPED, context, cluster_count=count, reason=reason)
            return QualityReport(
                passed=False,
                skipped=True,
                cluster_count=count,
                value=None,
                reference=float(reference_score),
                ratio=None,
                relative_tolerance=float(relative_tolerance),
                context=context,
                skip_reason=reason,
            )

        responses = result.get_responses()
        _, centroids = centers_of_mass(data, responses)
        value = davies_bouldin_index(data, responses, centroids)
        report = QualityReport(
            passed=within_tolerance(value, reference_score, relative_tolerance),
            skipped=False,
            cluster_count=count,
            value=value,
            reference=float(reference_score),
            ratio=relative_difference(value, reference_score),
            relative_tolerance=float(relative_tolerance),
            context=context,
        )

        if not report.passed:
            self._log(
                VALIDATION_FAILED, context,
                mode="quality", value=value, reference=float(reference_score),
                ratio=report.ratio, relative_tolerance=float(relative_tolerance),
            )
            raise MismatchError(
                report.summary(),
                report=report,
                field_name="davies_bouldin_index",
                value=value,
            )
        self._log(
            VALIDATION_PASSED, context,
            mode="quality", value=value, cluster_count=count,
        )
        return report

    # -----------------------------------------------------------------------
    # check_modes
    # -----------------------------------------------------------------------

    def check_modes(
        self,
        data:             HomogenTable,
        weights:          Optional[HomogenTable],
        epsilon:          float,
        min_observations: int,
        options:          ResultOptions,
    ) -> Tuple[ContractCheck, ...]:
        """
        Run with `options` and verify every unrequested output raises
        DomainError while every requested one does not.

        Raises ContractViolation carrying every failed check.
        """
        context = self.context(epsilon, min_observations, weights)
        result = self.run(data, weights, epsilon, min_observations, options)
        try:
            checks = OptionMaskEnforcer().enforce(options, result, context=context)
        except ContractViolation as exc:
            self._log(
                VALIDATION_FAILED, context,
                mode="options",
                result_options=options.names(),
                failed=tuple(c.option_name for c in exc.checks),
            )
            raise
        self._log(CONTRACT_CHECKED, context, result_options=options.names())
        return checks
