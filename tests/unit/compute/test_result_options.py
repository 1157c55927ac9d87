import pytest

from dbscan_oracle.compute import ResultOption, ResultOptions


class TestResultOptionsComposition:
    """Union, membership and the ALL / NONE constants."""

    def test_union_contains_both_members(self):
        opts = ResultOptions.RESPONSES | ResultOptions.CORE_FLAGS
        assert opts.test(ResultOption.RESPONSES)
        assert opts.test(ResultOption.CORE_FLAGS)
        assert not opts.test(ResultOption.CORE_OBSERVATIONS)

    def test_union_with_bare_member(self):
        opts = ResultOptions.RESPONSES | ResultOption.CORE_FLAGS
        assert ResultOption.CORE_FLAGS in opts

    def test_bare_member_on_left(self):
        opts = ResultOption.CORE_FLAGS | ResultOptions.RESPONSES
        assert opts == ResultOptions.RESPONSES | ResultOptions.CORE_FLAGS

    def test_all_is_union_of_every_member(self):
        union = ResultOptions.NONE
        for member in ResultOption:
            union = union | ResultOptions([member])
        assert union == ResultOptions.ALL
        assert len(ResultOptions.ALL) == len(ResultOption)

    def test_none_is_empty(self):
        assert len(ResultOptions.NONE) == 0
        assert not ResultOptions.NONE

    def test_union_is_idempotent(self):
        assert ResultOptions.RESPONSES | ResultOptions.RESPONSES == ResultOptions.RESPONSES

    def test_union_does_not_mutate_operands(self):
        left = ResultOptions.RESPONSES
        _ = left | ResultOptions.CORE_FLAGS
        assert left == ResultOptions([ResultOption.RESPONSES])

    def test_equal_sets_hash_equal(self):
        a = ResultOptions([ResultOption.CORE_FLAGS, ResultOption.RESPONSES])
        b = ResultOptions([ResultOption.RESPONSES, ResultOption.CORE_FLAGS])
        assert a == b
        assert hash(a) == hash(b)


class TestResultOptionsImmutability:

    def test_attribute_assignment_raises(self):
        opts = ResultOptions.RESPONSES
        with pytest.raises(AttributeError):
            opts._members = frozenset()

    def test_non_member_rejected(self):
        with pytest.raises(TypeError):
            ResultOptions(["responses"])


class TestResultOptionsHelpers:

    def test_all_subsets_has_sixteen_distinct_entries(self):
        subsets = ResultOptions.all_subsets()
        assert len(subsets) == 16
        assert len(set(subsets)) == 16

    def test_all_subsets_starts_empty_ends_full(self):
        subsets = ResultOptions.all_subsets()
        assert subsets[0] == ResultOptions.NONE
        assert subsets[-1] == ResultOptions.ALL

    def test_names_follow_declaration_order(self):
        opts = ResultOptions.CORE_OBSERVATION_INDICES | ResultOptions.RESPONSES
        assert opts.names() == ("responses", "core_observation_indices")

    def test_from_names_round_trip(self):
        assert ResultOptions.from_names(ResultOptions.ALL.names()) == ResultOptions.ALL

    def test_from_names_unknown_raises(self):
        with pytest.raises(ValueError):
            ResultOptions.from_names(["centroids"])

    def test_repr_of_none(self):
        assert repr(ResultOptions.NONE) == "ResultOptions.NONE"

    def test_repr_lists_members(self):
        assert "CORE_FLAGS" in repr(ResultOptions.CORE_FLAGS)


class TestResultOptionComposition:

    def test_members_compose_directly(self):
        opts = ResultOption.RESPONSES | ResultOption.CORE_FLAGS
        assert isinstance(opts, ResultOptions)
        assert opts == ResultOptions.RESPONSES | ResultOptions.CORE_FLAGS

    def test_chained_members_reach_all(self):
        opts = (
            ResultOption.RESPONSES
            | ResultOption.CORE_FLAGS
            | ResultOption.CORE_OBSERVATIONS
            | ResultOption.CORE_OBSERVATION_INDICES
        )
        assert opts == ResultOptions.ALL

    def test_non_option_operand_rejected(self):
        with pytest.raises(TypeError):
            ResultOption.RESPONSES | "core_flags"
