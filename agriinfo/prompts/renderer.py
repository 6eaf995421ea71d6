from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from pydantic import BaseModel

from .guidance import (
    GROWTH_INSTRUCTIONS_TEMPLATE,
    OPTIMAL_GROWTH_CONDITIONS_TEMPLATE,
    SEED_ACQUISITION_TEMPLATE,
)
from .identify import IDENTIFY_TEMPLATE
from .template import PromptTemplate


DEFAULT_TEMPLATES = (
    IDENTIFY_TEMPLATE,
    GROWTH_INSTRUCTIONS_TEMPLATE,
    OPTIMAL_GROWTH_CONDITIONS_TEMPLATE,
    SEED_ACQUISITION_TEMPLATE,
)


class PromptRenderer:
    """Fill named templates with fields of an already validated record."""

    def __init__(self, templates: Optional[Iterable[PromptTemplate]] = None) -> None:
        registry = {template.name: template for template in templates or DEFAULT_TEMPLATES}
        self._templates: Mapping[str, PromptTemplate] = MappingProxyType(registry)

    @property
    def template_names(self) -> list[str]:
        return sorted(self._templates)

    def render(self, template_name: str, record: BaseModel) -> str:
        template = self._templates.get(template_name)
        if template is None:
            raise KeyError(f"unknown prompt template: {template_name}")
        return template.render(record)
