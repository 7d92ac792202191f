"""Domain entities for the live data feed."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from axiom_client.domain.entities.tag_data import TagDataset


@dataclass(slots=True)
class LiveDataPage:
    """Values delivered by one ``getLiveData`` poll."""

    dataset: TagDataset = field(default_factory=TagDataset)
    continuation: Optional[str] = None
