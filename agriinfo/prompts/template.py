from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping

from pydantic import BaseModel


@dataclass(frozen=True)
class PromptTemplate:
    """Named instruction text with ``str.format`` placeholders."""

    name: str
    text: str
    fields: Callable[[BaseModel], Mapping[str, str]]

    def render(self, record: BaseModel) -> str:
        return self.text.format(**self.fields(record))
