from .models import (
    LANGUAGE_NAMES,
    GrowthInstructionsResult,
    HealthResponse,
    IdentificationResult,
    ImageIdentificationRequest,
    LanguageCode,
    NamedProduceQuery,
    OptimalGrowthConditionsResult,
    SeedAcquisitionResult,
)
from .validation import validate_shape, violation_from_error

__all__ = [
    "LANGUAGE_NAMES",
    "GrowthInstructionsResult",
    "HealthResponse",
    "IdentificationResult",
    "ImageIdentificationRequest",
    "LanguageCode",
    "NamedProduceQuery",
    "OptimalGrowthConditionsResult",
    "SeedAcquisitionResult",
    "validate_shape",
    "violation_from_error",
]
