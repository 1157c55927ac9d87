import pytest

from dbscan_oracle.compute import (
    ComputeResult,
    DomainError,
    HomogenTable,
    ResultOption,
    ResultOptions,
)


def _full_result(options: ResultOptions) -> ComputeResult:
    table = HomogenTable.wrap([0, 1], 2, 1)
    return ComputeResult(
        result_options=options,
        cluster_count=2,
        responses=table,
        core_flags=table,
        core_observations=table,
        core_observation_indices=table,
    )


class TestComputeResultGating:

    def test_requested_output_readable(self):
        result = _full_result(ResultOptions.RESPONSES)
        assert result.get_responses().row_count == 2
        assert result.responses.row_count == 2

    @pytest.mark.parametrize("getter", [
        "get_core_flags",
        "get_core_observations",
        "get_core_observation_indices",
    ])
    def test_unrequested_output_raises_domain_error(self, getter):
        result = _full_result(ResultOptions.RESPONSES)
        with pytest.raises(DomainError):
            getattr(result, getter)()

    def test_property_access_is_gated(self):
        result = _full_result(ResultOptions.NONE)
        with pytest.raises(DomainError):
            _ = result.responses

    def test_domain_error_names_option(self):
        result = _full_result(ResultOptions.NONE)
        with pytest.raises(DomainError, match="core_flags") as info:
            result.get(ResultOption.CORE_FLAGS)
        assert info.value.field_name == "core_flags"

    def test_cluster_count_always_readable(self):
        assert _full_result(ResultOptions.NONE).cluster_count == 2

    def test_result_options_reported(self):
        opts = ResultOptions.CORE_FLAGS | ResultOptions.RESPONSES
        assert _full_result(opts).result_options == opts

    def test_requested_but_absent_value_reads_none(self):
        result = ComputeResult(ResultOptions.RESPONSES, cluster_count=0)
        assert result.get_responses() is None

    def test_repr(self):
        assert "cluster_count=2" in repr(_full_result(ResultOptions.ALL))
