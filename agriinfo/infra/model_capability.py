from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Protocol, Sequence, Type

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage
from pydantic import BaseModel

from ..domain.errors import ModelInvocationError
from ..observability.logging_utils import log_event


class ModelCapability(Protocol):
    async def invoke(
        self,
        prompt: str,
        output_shape: Type[BaseModel],
        *,
        media: Sequence[str] = (),
    ) -> Any:
        ...


def build_message(prompt: str, media: Sequence[str] = ()) -> HumanMessage:
    if not media:
        return HumanMessage(content=prompt)
    parts: List[Dict[str, Any]] = [{"type": "text", "text": prompt}]
    for url in media:
        parts.append({"type": "image_url", "image_url": {"url": url}})
    return HumanMessage(content=parts)


class ChatModelCapability:
    """
    Structured-output call over a LangChain chat model.

    The answer is returned as the raw mapping produced by the model; shape
    checks are left to the caller.
    """

    def __init__(
        self,
        model_factory: Callable[[], BaseChatModel],
        *,
        timeout_seconds: float,
    ) -> None:
        self._model_factory = model_factory
        self._timeout_seconds = timeout_seconds

    async def invoke(
        self,
        prompt: str,
        output_shape: Type[BaseModel],
        *,
        media: Sequence[str] = (),
    ) -> Any:
        try:
            llm = self._model_factory()
        except Exception as exc:
            raise ModelInvocationError(f"model unavailable: {exc}") from exc
        schema = output_shape.model_json_schema(by_alias=True)
        runnable = llm.with_structured_output(schema)
        message = build_message(prompt, media)
        log_event(
            "model_call",
            output_shape=output_shape.__name__,
            media_count=len(media),
        )
        try:
            return await asyncio.wait_for(
                runnable.ainvoke([message]), timeout=self._timeout_seconds
            )
        except asyncio.TimeoutError as exc:
            raise ModelInvocationError(
                f"model call timed out after {self._timeout_seconds:g}s"
            ) from exc
        except Exception as exc:
            raise ModelInvocationError(str(exc) or exc.__class__.__name__) from exc
