from __future__ import annotations

from typing import Dict

from ..schemas.models import LANGUAGE_NAMES, ImageIdentificationRequest
from .template import PromptTemplate


IDENTIFY_TEMPLATE_NAME = "identify-fruit-vegetable"

IDENTIFY_PROMPT = (
    "You are a friendly and helpful gardening expert. "
    "Identify the fruit or vegetable in the photo and provide the information "
    "requested in the output schema: its common name, how to get seeds, the best "
    "growing conditions and the growing process from start to finish.\n"
    "{language_clause}"
    "Your tone should be simple, encouraging and easy to understand for a "
    "beginner gardener. Avoid technical jargon.\n"
    "\n"
    "Photo: {photo_reference}\n"
    "{language_line}"
)

LANGUAGE_CLAUSE = (
    "CRITICAL: You MUST write the entire response in {language_name} "
    "(language code '{language_code}'). Every field in the JSON output must be "
    "fully translated into {language_name}; no field may remain in another "
    "language.\n"
)


def build_identify_fields(request: ImageIdentificationRequest) -> Dict[str, str]:
    fields = {
        "photo_reference": f"attached image ({request.image_mime_type})",
        "language_clause": "",
        "language_line": "",
    }
    if request.language_code is None:
        return fields
    code = request.language_code.value
    name = LANGUAGE_NAMES[request.language_code]
    fields["language_clause"] = LANGUAGE_CLAUSE.format(
        language_name=name, language_code=code
    )
    fields["language_line"] = f"Language Code: {code}\n"
    return fields


IDENTIFY_TEMPLATE = PromptTemplate(
    name=IDENTIFY_TEMPLATE_NAME,
    text=IDENTIFY_PROMPT,
    fields=build_identify_fields,
)
