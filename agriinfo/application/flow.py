from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Sequence, Type, TypeVar

from pydantic import BaseModel

from ..domain.errors import (
    InvalidRequest,
    InvalidResponse,
    ModelInvocationError,
    SchemaViolation,
)
from ..infra.model_capability import ModelCapability
from ..observability.logging_utils import log_error_event, log_event, summarize_text
from ..prompts.renderer import PromptRenderer
from ..schemas.validation import validate_shape


InT = TypeVar("InT", bound=BaseModel)
OutT = TypeVar("OutT", bound=BaseModel)


def _no_media(_: BaseModel) -> Sequence[str]:
    return ()


@dataclass(frozen=True)
class StructuredFlow(Generic[InT, OutT]):
    """
    One model-backed operation: validate input, render the prompt, call the
    model once, validate the answer.

    Holds no per-call state, so a single instance serves concurrent calls.
    """

    name: str
    template_name: str
    input_shape: Type[InT]
    output_shape: Type[OutT]
    media: Callable[[InT], Sequence[str]] = _no_media

    async def run(
        self,
        payload: Any,
        *,
        renderer: PromptRenderer,
        capability: ModelCapability,
    ) -> OutT:
        log_event("flow_start", flow=self.name)
        try:
            request = validate_shape(self.input_shape, payload)
        except SchemaViolation as exc:
            log_event(
                "flow_invalid_request",
                flow=self.name,
                field=exc.field,
                constraint=exc.constraint,
            )
            raise InvalidRequest(
                f"invalid {self.name} request: {exc}", violation=exc
            ) from exc

        prompt = renderer.render(self.template_name, request)
        log_event("flow_prompt", flow=self.name, prompt_summary=summarize_text(prompt))

        try:
            raw = await capability.invoke(
                prompt, self.output_shape, media=self.media(request)
            )
        except ModelInvocationError as exc:
            log_error_event("flow_model_error", flow=self.name, error=str(exc))
            raise
        except Exception as exc:
            log_error_event("flow_model_error", flow=self.name, error=str(exc))
            raise ModelInvocationError(str(exc) or exc.__class__.__name__) from exc

        try:
            result = validate_shape(self.output_shape, raw)
        except SchemaViolation as exc:
            log_error_event(
                "flow_invalid_response",
                flow=self.name,
                field=exc.field,
                constraint=exc.constraint,
            )
            raise InvalidResponse(
                f"model answer for {self.name} is invalid: {exc}", violation=exc
            ) from exc

        log_event("flow_success", flow=self.name)
        return result
