from .flow import StructuredFlow
from .services import GuidanceService, IdentificationService

__all__ = ["GuidanceService", "IdentificationService", "StructuredFlow"]
