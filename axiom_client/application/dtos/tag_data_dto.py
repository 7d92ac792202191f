"""
Tag Data DTOs - Application Layer

Query templates for ``getTagData2`` and the shape of each returned page.
A template carries the immutable part of a query: the session token and the
continuation token are added per page by the pagination engine.
"""

from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator

from axiom_client.application.dtos.base import RequestDTO, ResponseDTO
from axiom_client.domain.entities.tag_data import Sample
from axiom_client.shared.consts import (
    DEFAULT_AGGREGATE_INTERVAL,
    DEFAULT_AGGREGATE_NAME,
    DEFAULT_END_TIME,
    DEFAULT_MAX_SIZE,
    DEFAULT_START_TIME,
)


class CurrentValuesQueryDTO(RequestDTO):
    """Snapshot of the latest value of each tag."""

    tags: List[str] = Field(min_length=1)


class RawDataQueryDTO(CurrentValuesQueryDTO):
    """Every stored value within a time window."""

    start_time: str = DEFAULT_START_TIME
    end_time: str = DEFAULT_END_TIME
    max_size: int = Field(default=DEFAULT_MAX_SIZE, gt=0)


class ProcessedDataQueryDTO(RawDataQueryDTO):
    """Values aggregated server-side over fixed intervals."""

    aggregate_name: str = DEFAULT_AGGREGATE_NAME
    aggregate_interval: str = DEFAULT_AGGREGATE_INTERVAL


class SampleDTO(ResponseDTO):
    """One ``{t, v, q}`` entry of a tag's series."""

    t: Any = None
    v: Any = None
    q: Optional[Any] = None

    def to_domain(self) -> Sample:
        return Sample(timestamp=self.t, value=self.v, quality=self.q)


class TagDataPageDTO(ResponseDTO):
    """A page of tag data; a null or absent continuation marks the last page."""

    data: Dict[str, List[SampleDTO]] = Field(default_factory=dict)
    continuation: Optional[Any] = None

    @field_validator("data", mode="before")
    @classmethod
    def _null_data_is_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def is_last(self) -> bool:
        return self.continuation is None

    def fragment(self) -> Dict[str, List[Sample]]:
        return {
            tag: [sample.to_domain() for sample in samples]
            for tag, samples in self.data.items()
        }
