"""Pydantic request DTOs."""

from .completion import (
    CompletionRequestDTO,
    FunctionCallDTO,
    FunctionCallResultDTO,
    MessageDTO,
    Role,
    coerce_request,
)

__all__ = [
    "Role",
    "FunctionCallDTO",
    "FunctionCallResultDTO",
    "MessageDTO",
    "CompletionRequestDTO",
    "coerce_request",
]
