import pytest

from dbscan_oracle.compute import ComputeError, InvalidInputError
from dbscan_oracle.verification import (
    ContractViolation,
    MismatchError,
    OracleError,
    UndefinedMetric,
    UpstreamFailure,
)
from dbscan_oracle.verification.data_models.validation_report import (
    ContractCheck,
    ValidationReport,
)


class TestOracleErrorBase:

    def test_empty_message_rejected(self):
        with pytest.raises(ValueError):
            OracleError("")

    def test_non_string_field_name_rejected(self):
        with pytest.raises(ValueError):
            OracleError("boom", field_name=3)

    def test_attributes(self):
        err = OracleError("boom", field_name="responses", value=(1, 2))
        assert err.message == "boom"
        assert err.field_name == "responses"
        assert err.value == (1, 2)
        assert str(err) == "boom"

    def test_repr(self):
        assert repr(OracleError("boom", "x", 1)) == (
            "OracleError(field_name='x', value=1, message='boom')"
        )

    def test_value_equality(self):
        assert OracleError("boom", "x", 1) == OracleError("boom", "x", 1)
        assert OracleError("boom", "x", 1) != OracleError("boom", "x", 2)

    def test_subclass_not_equal_to_base(self):
        assert UndefinedMetric("r") != OracleError("UndefinedMetric: r.", "davies_bouldin_index")

    def test_hashable(self):
        assert len({OracleError("a"), OracleError("b")}) == 2


class TestConcreteErrors:

    def test_contract_violation_lists_checks(self, context):
        checks = (
            ContractCheck("core_flags", requested=False, accessible=True),
            ContractCheck("responses", requested=True, accessible=False),
        )
        err = ContractViolation(checks, context=context)
        assert err.field_name == "core_flags"
        assert err.value == ("core_flags", "responses")
        assert "2 result option check(s) failed" in err.message
        assert "scenario=CORE-02" in err.message

    def test_contract_violation_needs_checks(self):
        with pytest.raises(ValueError):
            ContractViolation(())

    def test_mismatch_carries_report_context(self, context):
        report = ValidationReport(False, "exact", 1, (), context=context)
        err = MismatchError("1 of 1 rows differ", report=report)
        assert err.report is report
        assert err.message.startswith("MismatchError: 1 of 1 rows differ [")

    def test_mismatch_without_report(self):
        assert MismatchError("x").message == "MismatchError: x"

    def test_undefined_metric_message(self):
        err = UndefinedMetric("partition has 1", value=1)
        assert err.message == "UndefinedMetric: partition has 1."
        assert err.field_name == "davies_bouldin_index"

    def test_upstream_failure_is_compute_error(self):
        assert UpstreamFailure is ComputeError
        assert issubclass(InvalidInputError, UpstreamFailure)
        assert not issubclass(UpstreamFailure, OracleError)
