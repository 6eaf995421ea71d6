from __future__ import annotations

from typing import Any, Optional

from ...infra.model_capability import ModelCapability
from ...prompts.guidance import (
    GROWTH_INSTRUCTIONS_TEMPLATE_NAME,
    OPTIMAL_GROWTH_CONDITIONS_TEMPLATE_NAME,
    SEED_ACQUISITION_TEMPLATE_NAME,
)
from ...prompts.renderer import PromptRenderer
from ...schemas.models import (
    GrowthInstructionsResult,
    NamedProduceQuery,
    OptimalGrowthConditionsResult,
    SeedAcquisitionResult,
)
from ..flow import StructuredFlow


GROWTH_INSTRUCTIONS_FLOW = StructuredFlow(
    name="generate_growth_instructions",
    template_name=GROWTH_INSTRUCTIONS_TEMPLATE_NAME,
    input_shape=NamedProduceQuery,
    output_shape=GrowthInstructionsResult,
)

OPTIMAL_GROWTH_CONDITIONS_FLOW = StructuredFlow(
    name="generate_optimal_growth_conditions",
    template_name=OPTIMAL_GROWTH_CONDITIONS_TEMPLATE_NAME,
    input_shape=NamedProduceQuery,
    output_shape=OptimalGrowthConditionsResult,
)

SEED_ACQUISITION_FLOW = StructuredFlow(
    name="generate_seed_acquisition_info",
    template_name=SEED_ACQUISITION_TEMPLATE_NAME,
    input_shape=NamedProduceQuery,
    output_shape=SeedAcquisitionResult,
)


class GuidanceService:
    """Text guidance for a produce name, without a photo."""

    def __init__(
        self,
        capability: ModelCapability,
        renderer: Optional[PromptRenderer] = None,
    ) -> None:
        self._capability = capability
        self._renderer = renderer or PromptRenderer()

    async def generate_growth_instructions(self, query: Any) -> GrowthInstructionsResult:
        return await GROWTH_INSTRUCTIONS_FLOW.run(
            query, renderer=self._renderer, capability=self._capability
        )

    async def generate_optimal_growth_conditions(
        self, query: Any
    ) -> OptimalGrowthConditionsResult:
        return await OPTIMAL_GROWTH_CONDITIONS_FLOW.run(
            query, renderer=self._renderer, capability=self._capability
        )

    async def generate_seed_acquisition_info(self, query: Any) -> SeedAcquisitionResult:
        return await SEED_ACQUISITION_FLOW.run(
            query, renderer=self._renderer, capability=self._capability
        )
