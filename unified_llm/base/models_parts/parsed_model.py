"""Result of splitting a ``provider/model`` identifier."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ParsedModel:
    """Provider hint (lowercased, optional) and the bare model name."""

    provider: Optional[str]
    model: str


__all__ = ["ParsedModel"]
