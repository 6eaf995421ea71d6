from .guidance_service import GuidanceService
from .identification_service import IdentificationService

__all__ = ["GuidanceService", "IdentificationService"]
