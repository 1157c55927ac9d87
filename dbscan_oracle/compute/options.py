# dbscan_oracle/compute/options.py
# Result options: the set of optional outputs a compute request asks for.
#
# A ResultOptions value is an immutable set of ResultOption members. There
# is no integer bit layout; adding an output means adding an enum member.

from __future__ import annotations

from enum import Enum
from itertools import combinations
from typing import FrozenSet, Iterable, Iterator, Tuple


class ResultOption(Enum):
    """One optional output of a clustering computation."""
    RESPONSES                = "responses"
    CORE_FLAGS               = "core_flags"
    CORE_OBSERVATIONS        = "core_observations"
    CORE_OBSERVATION_INDICES = "core_observation_indices"

    def __or__(self, other: object) -> "ResultOptions":
        if not isinstance(other, (ResultOption, ResultOptions)):
            return NotImplemented
        return ResultOptions([self]) | other


class ResultOptions:
    """
    Immutable set of requested result options.

    Compose with `|`:
        ResultOptions.RESPONSES | ResultOptions.CORE_FLAGS

    ResultOptions.ALL is the union of every ResultOption member.
    ResultOptions.NONE requests no optional output.
    """

    __slots__ = ("_members",)

    # Populated after the class body.
    NONE:                     "ResultOptions"
    ALL:                      "ResultOptions"
    RESPONSES:                "ResultOptions"
    CORE_FLAGS:               "ResultOptions"
    CORE_OBSERVATIONS:        "ResultOptions"
    CORE_OBSERVATION_INDICES: "ResultOptions"

    def __init__(self, members: Iterable[ResultOption] = ()) -> None:
        frozen = frozenset(members)
        for member in frozen:
            if not isinstance(member, ResultOption):
                raise TypeError(
                    "ResultOptions members must be ResultOption; got "
                    + repr(member)
                )
        object.__setattr__(self, "_members", frozen)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("ResultOptions is immutable")

    @property
    def members(self) -> FrozenSet[ResultOption]:
        return self._members

    def test(self, option: ResultOption) -> bool:
        """Return True if `option` is requested."""
        return option in self._members

    def __contains__(self, option: object) -> bool:
        return option in self._members

    def __or__(self, other: "ResultOptions") -> "ResultOptions":
        if isinstance(other, ResultOption):
            return ResultOptions(self._members | {other})
        if not isinstance(other, ResultOptions):
            return NotImplemented
        return ResultOptions(self._members | other._members)

    __ror__ = __or__

    def __iter__(self) -> Iterator[ResultOption]:
        # Declaration order keeps reports stable.
        return (m for m in ResultOption if m in self._members)

    def __len__(self) -> int:
        return len(self._members)

    def __bool__(self) -> bool:
        return bool(self._members)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResultOptions):
            return NotImplemented
        return self._members == other._members

    def __hash__(self) -> int:
        return hash(self._members)

    def __repr__(self) -> str:
        if not self._members:
            return "ResultOptions.NONE"
        return " | ".join("ResultOptions." + m.name for m in self)

    def names(self) -> Tuple[str, ...]:
        """Option value strings in declaration order."""
        return tuple(m.value for m in self)

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "ResultOptions":
        """Build from option value strings, e.g. ("responses", "core_flags")."""
        return cls(ResultOption(name) for name in names)

    @classmethod
    def all_subsets(cls) -> Tuple["ResultOptions", ...]:
        """Every subset of ResultOption, smallest first (2**n entries)."""
        members = list(ResultOption)
        subsets = []
        for size in range(len(members) + 1):
            for combo in combinations(members, size):
                subsets.append(cls(combo))
        return tuple(subsets)


ResultOptions.NONE = ResultOptions()
ResultOptions.ALL = ResultOptions(ResultOption)
ResultOptions.RESPONSES = ResultOptions([ResultOption.RESPONSES])
ResultOptions.CORE_FLAGS = ResultOptions([ResultOption.CORE_FLAGS])
ResultOptions.CORE_OBSERVATIONS = ResultOptions([ResultOption.CORE_OBSERVATIONS])
ResultOptions.CORE_OBSERVATION_INDICES = ResultOptions([ResultOption.CORE_OBSERVATION_INDICES])
