from __future__ import annotations

from typing import Dict

from ..schemas.models import NamedProduceQuery
from .template import PromptTemplate


GROWTH_INSTRUCTIONS_TEMPLATE_NAME = "generate-growth-instructions"
OPTIMAL_GROWTH_CONDITIONS_TEMPLATE_NAME = "generate-optimal-growth-conditions"
SEED_ACQUISITION_TEMPLATE_NAME = "generate-seed-acquisition-info"

GROWTH_INSTRUCTIONS_PROMPT = (
    "You are an expert agriculturalist. Generate step-by-step instructions on how "
    "to grow the following fruit or vegetable:\n"
    "\n"
    "{produce_name}\n"
    "\n"
    "Instructions:"
)

OPTIMAL_GROWTH_CONDITIONS_PROMPT = (
    "You are an expert agriculturalist.\n"
    "\n"
    "Provide the optimal growth conditions (sunlight, soil, watering and "
    "temperature) for the following produce:\n"
    "\n"
    "Produce: {produce_name}\n"
)

SEED_ACQUISITION_PROMPT = (
    "You are an expert in agriculture and horticulture. A user wants to grow their "
    "own {produce_name} and needs information on how to acquire the seeds to grow "
    "it.\n"
    "\n"
    "Provide detailed information on how to acquire seeds for {produce_name}. "
    "Include where to buy seeds, how to harvest seeds from existing plants, and "
    "any other relevant information."
)


def build_produce_fields(query: NamedProduceQuery) -> Dict[str, str]:
    return {"produce_name": query.produce_name.strip()}


GROWTH_INSTRUCTIONS_TEMPLATE = PromptTemplate(
    name=GROWTH_INSTRUCTIONS_TEMPLATE_NAME,
    text=GROWTH_INSTRUCTIONS_PROMPT,
    fields=build_produce_fields,
)

OPTIMAL_GROWTH_CONDITIONS_TEMPLATE = PromptTemplate(
    name=OPTIMAL_GROWTH_CONDITIONS_TEMPLATE_NAME,
    text=OPTIMAL_GROWTH_CONDITIONS_PROMPT,
    fields=build_produce_fields,
)

SEED_ACQUISITION_TEMPLATE = PromptTemplate(
    name=SEED_ACQUISITION_TEMPLATE_NAME,
    text=SEED_ACQUISITION_PROMPT,
    fields=build_produce_fields,
)
