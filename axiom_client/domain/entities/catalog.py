"""Domain entities for the tag hierarchy."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True, slots=True)
class TagNode:
    """A node of the tag hierarchy returned by ``browseNodes``."""

    key: str
    full_path: str
    has_nodes: bool = False
    attributes: Dict[str, Any] = field(default_factory=dict, compare=False)
