"""Domain entities for tag time-series data."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from axiom_client.domain.entities.errors import UnknownTagError


@dataclass(frozen=True, slots=True)
class Sample:
    """A single reading. ``value`` is None when the service reports it missing."""

    timestamp: Any
    value: Any = None
    quality: Optional[Any] = None

    @property
    def is_missing(self) -> bool:
        return self.value is None


@dataclass(slots=True)
class TagDataset:
    """
    Samples keyed by tag identifier.

    Fragments are merged in arrival order; a tag's sequence only ever grows
    by appending. Tag insertion order is the order tags were first seen.
    """

    series: Dict[str, List[Sample]] = field(default_factory=dict)

    def merge(self, fragment: Mapping[str, Iterable[Sample]]) -> None:
        for tag, samples in fragment.items():
            self.series.setdefault(tag, []).extend(samples)

    def samples(self, tag: str) -> List[Sample]:
        if tag not in self.series:
            raise UnknownTagError(tag)
        return self.series[tag]

    def fill_missing(self, value: Any) -> "TagDataset":
        """Return a copy where missing values are replaced by ``value``."""
        return TagDataset(
            series={
                tag: [
                    replace(sample, value=value) if sample.is_missing else sample
                    for sample in samples
                ]
                for tag, samples in self.series.items()
            }
        )

    @property
    def tags(self) -> Tuple[str, ...]:
        return tuple(self.series)

    @property
    def is_empty(self) -> bool:
        return not self.series

    def __contains__(self, tag: object) -> bool:
        return tag in self.series

    def __iter__(self) -> Iterator[str]:
        return iter(self.series)

    def __len__(self) -> int:
        return len(self.series)


def extract_values(samples: Iterable[Sample]) -> List[Any]:
    """Return the values of ``samples`` in order, missing markers included."""
    return [sample.value for sample in samples]
