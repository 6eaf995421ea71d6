from .guidance import (
    GROWTH_INSTRUCTIONS_TEMPLATE_NAME,
    OPTIMAL_GROWTH_CONDITIONS_TEMPLATE_NAME,
    SEED_ACQUISITION_TEMPLATE_NAME,
)
from .identify import IDENTIFY_TEMPLATE_NAME
from .renderer import DEFAULT_TEMPLATES, PromptRenderer
from .template import PromptTemplate

__all__ = [
    "DEFAULT_TEMPLATES",
    "GROWTH_INSTRUCTIONS_TEMPLATE_NAME",
    "IDENTIFY_TEMPLATE_NAME",
    "OPTIMAL_GROWTH_CONDITIONS_TEMPLATE_NAME",
    "PromptRenderer",
    "PromptTemplate",
    "SEED_ACQUISITION_TEMPLATE_NAME",
]
