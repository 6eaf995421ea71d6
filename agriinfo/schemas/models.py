from __future__ import annotations

from enum import Enum
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ..domain.media import parse_data_uri


def _require_text(value: str) -> str:
    if not value.strip():
        raise ValueError("must be a non-empty string")
    return value


NonEmptyStr = Annotated[str, AfterValidator(_require_text)]


class LanguageCode(str, Enum):
    EN = "en"
    HI = "hi"


LANGUAGE_NAMES = {
    LanguageCode.EN: "English",
    LanguageCode.HI: "Hindi",
}


class _Record(BaseModel):
    """Immutable payload exchanged over the API with camelCase field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class ImageIdentificationRequest(_Record):
    """Photo of a fruit or vegetable plus the language the answer is wanted in."""

    encoded_image: str = Field(
        ...,
        description=(
            "A photo of a fruit or vegetable, as a data URI that must include a MIME "
            "type and use Base64 encoding: 'data:<mimetype>;base64,<encoded_data>'."
        ),
    )
    language_code: Optional[LanguageCode] = Field(
        default=None,
        description="Output language: 'en' for English or 'hi' for Hindi. "
        "Omit to let the model answer in its default language.",
    )

    @field_validator("encoded_image", mode="after")
    @classmethod
    def check_encoded_image(cls, value: str) -> str:
        uri = parse_data_uri(value)
        if not uri.is_image:
            raise ValueError(f"expected an image MIME type, got {uri.mime_type}")
        return value

    @property
    def image_mime_type(self) -> str:
        return parse_data_uri(self.encoded_image).mime_type


class IdentificationResult(_Record):
    """Identification plus beginner gardening guidance, in the requested language."""

    common_name: NonEmptyStr = Field(
        ...,
        description="The common name of the identified fruit or vegetable, "
        "in the requested language.",
    )
    seed_acquisition: NonEmptyStr = Field(
        ...,
        description="A simple guide on how to get seeds for the plant, "
        "in the requested language.",
    )
    growth_conditions: NonEmptyStr = Field(
        ...,
        description="A friendly description of the best sun, soil and water "
        "conditions for growing the plant, in the requested language.",
    )
    growth_process: NonEmptyStr = Field(
        ...,
        description="An easy-to-follow, step-by-step guide to growing the plant "
        "from start to finish, in the requested language.",
    )


class NamedProduceQuery(_Record):
    produce_name: NonEmptyStr = Field(
        ..., description="The name of the fruit or vegetable."
    )


class GrowthInstructionsResult(_Record):
    growth_instructions: NonEmptyStr = Field(
        ...,
        description="Step-by-step instructions on how to grow the specified "
        "fruit or vegetable.",
    )


class OptimalGrowthConditionsResult(_Record):
    sunlight: NonEmptyStr = Field(
        ..., description="The optimal amount of sunlight required."
    )
    soil: NonEmptyStr = Field(..., description="The optimal soil conditions required.")
    watering: NonEmptyStr = Field(..., description="The optimal watering schedule.")
    temperature: NonEmptyStr = Field(
        ..., description="The optimal temperature range."
    )


class SeedAcquisitionResult(_Record):
    seed_acquisition_info: NonEmptyStr = Field(
        ...,
        description="Information about how to acquire seeds for the specified "
        "fruit or vegetable.",
    )


class HealthResponse(BaseModel):
    status: str
    llm: str
