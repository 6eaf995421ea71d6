from __future__ import annotations

from typing import Any, Optional, Sequence

from ...infra.model_capability import ModelCapability
from ...prompts.identify import IDENTIFY_TEMPLATE_NAME
from ...prompts.renderer import PromptRenderer
from ...schemas.models import IdentificationResult, ImageIdentificationRequest
from ..flow import StructuredFlow


def _photo_media(request: ImageIdentificationRequest) -> Sequence[str]:
    return (request.encoded_image,)


IDENTIFY_FLOW = StructuredFlow(
    name="identify_fruit_vegetable",
    template_name=IDENTIFY_TEMPLATE_NAME,
    input_shape=ImageIdentificationRequest,
    output_shape=IdentificationResult,
    media=_photo_media,
)


class IdentificationService:
    """Identify produce in a photo and describe how to grow it."""

    def __init__(
        self,
        capability: ModelCapability,
        renderer: Optional[PromptRenderer] = None,
    ) -> None:
        self._capability = capability
        self._renderer = renderer or PromptRenderer()

    async def identify(self, request: Any) -> IdentificationResult:
        """
        Run one identification.

        Args:
            request: ``ImageIdentificationRequest`` or a mapping with
                ``encodedImage`` and optional ``languageCode``.

        Raises:
            InvalidRequest: the request failed validation; the model is not called.
            ModelInvocationError: the model call failed.
            InvalidResponse: the model answer is missing or has empty fields.
        """
        return await IDENTIFY_FLOW.run(
            request, renderer=self._renderer, capability=self._capability
        )
