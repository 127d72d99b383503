"""
Pydantic DTOs for canonical chat-completion requests.

Purpose
-------
Validate inbound requests in the OpenAI chat-completion schema before they
reach the router. Unknown keys are preserved on both messages and requests so
that proxies can forward them verbatim and vendor adapters can pick up what
they understand.

Fallback semantics: Not applicable. Validation either succeeds or raises a
`pydantic.ValidationError`. The HTTP service maps it to a 400 response.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

# ``function`` is the legacy OpenAI alias of ``tool``.
Role = Literal["system", "user", "assistant", "tool", "function"]


class FunctionCallDTO(BaseModel):
    """A function invocation requested by the assistant.

    ``arguments`` is JSON text, exactly as the OpenAI schema carries it.
    """

    model_config = ConfigDict(extra="allow")

    name: str = Field(..., min_length=1)
    arguments: str = ""


class FunctionCallResultDTO(BaseModel):
    """The caller-supplied result of a previously requested function call."""

    model_config = ConfigDict(extra="allow")

    name: str = Field(..., min_length=1)
    content: Any = None


class MessageDTO(BaseModel):
    """One conversation turn in canonical form.

    Rules:
        - ``role`` must be one of Role.
        - ``content`` may be None only when the turn carries a function call
          or a function result.
    """

    model_config = ConfigDict(extra="allow")

    role: Role
    content: Optional[str] = None
    function_call: Optional[FunctionCallDTO] = None
    function_call_result: Optional[FunctionCallResultDTO] = None

    @model_validator(mode="after")
    def _validate_content(self) -> "MessageDTO":
        if self.content is None and self.function_call is None and self.function_call_result is None:
            if self.role in ("system", "user"):
                raise ValueError(f"{self.role} message must include content")
        return self

    @property
    def extras(self) -> Dict[str, Any]:
        """Unknown keys carried on the message (``name``, ``tool_call_id``, ...)."""
        return dict(self.model_extra or {})

    def to_payload(self) -> Dict[str, Any]:
        """Return the wire dict; ``content`` is always present, other Nones dropped."""
        data = self.model_dump(exclude_none=True)
        data["content"] = self.content
        return data


class CompletionRequestDTO(BaseModel):
    """Canonical chat-completion request.

    Parameters:
        model: Model identifier, optionally ``provider/model`` (non-empty).
        messages: Ordered, non-empty conversation.
        temperature: Optional sampling temperature.
        max_tokens: Optional positive output token cap.
        stream: Whether the caller wants a stream (the router decides by
            entry point; this flag is forwarded as-is).
        tools / functions: Optional tool declarations in OpenAI format.
        additional_params: Open map merged at the top level of the vendor
            request after everything else.

    Raises:
        ValidationError: On empty model/messages, invalid roles or bounds.
    """

    model_config = ConfigDict(extra="allow")

    model: str = Field(..., min_length=1)
    messages: List[MessageDTO] = Field(..., min_length=1)
    temperature: Optional[float] = None
    max_tokens: Optional[int] = Field(default=None, gt=0)
    stream: Optional[bool] = None
    tools: Optional[List[Dict[str, Any]]] = None
    functions: Optional[List[Dict[str, Any]]] = None
    additional_params: Optional[Dict[str, Any]] = None

    def with_model(self, name: str) -> "CompletionRequestDTO":
        """Return a copy of this request addressed to ``name``."""
        return self.model_copy(update={"model": name})

    def to_payload(self) -> Dict[str, Any]:
        """Return the canonical JSON body.

        ``additional_params`` is merged at top level (its keys win) and
        ``None`` values are dropped.
        """
        data = self.model_dump(exclude_none=True, exclude={"messages", "additional_params"})
        data["messages"] = [m.to_payload() for m in self.messages]
        data.update(self.additional_params or {})
        return data


def coerce_request(request: Any) -> CompletionRequestDTO:
    """Accept a DTO or a mapping and return a validated ``CompletionRequestDTO``."""
    if isinstance(request, CompletionRequestDTO):
        return request
    return CompletionRequestDTO.model_validate(request)


__all__ = [
    "Role",
    "FunctionCallDTO",
    "FunctionCallResultDTO",
    "MessageDTO",
    "CompletionRequestDTO",
    "coerce_request",
]
