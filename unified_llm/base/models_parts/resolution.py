"""Outcome of routing a model identifier."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Resolution:
    """Selected adapter (``None`` when nothing matched) and outgoing model name.

    ``adapter`` is typed loosely to keep this module free of adapter imports;
    at runtime it satisfies ``CompletionProvider``.
    """

    adapter: Optional[Any]
    model: str

    @property
    def found(self) -> bool:
        return self.adapter is not None


__all__ = ["Resolution"]
