from __future__ import annotations

from typing import Any, Dict, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel

from ..domain.errors import (
    InvalidRequest,
    InvalidResponse,
    ModelInvocationError,
    SchemaViolation,
)
from ..schemas.models import (
    GrowthInstructionsResult,
    IdentificationResult,
    ImageIdentificationRequest,
    NamedProduceQuery,
    OptimalGrowthConditionsResult,
    SeedAcquisitionResult,
)
from ..schemas.validation import validate_shape


ModelT = TypeVar("ModelT", bound=BaseModel)


def _error_detail(response: httpx.Response) -> Dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    detail = body.get("detail") if isinstance(body, dict) else None
    return detail if isinstance(detail, dict) else {}


def _violation(detail: Dict[str, Any]) -> Optional[SchemaViolation]:
    if "field" not in detail:
        return None
    return SchemaViolation(str(detail["field"]), str(detail.get("constraint", "")))


class BackendClient:
    """Calls the AgriInfo HTTP API and maps failures back onto the error types."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 90.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport

    async def identify(self, request: ImageIdentificationRequest) -> IdentificationResult:
        return await self._post(
            "/api/v1/identify",
            request.model_dump(mode="json", by_alias=True, exclude_none=True),
            IdentificationResult,
        )

    async def generate_growth_instructions(
        self, query: NamedProduceQuery
    ) -> GrowthInstructionsResult:
        return await self._post(
            "/api/v1/growth-instructions",
            query.model_dump(by_alias=True),
            GrowthInstructionsResult,
        )

    async def generate_optimal_growth_conditions(
        self, query: NamedProduceQuery
    ) -> OptimalGrowthConditionsResult:
        return await self._post(
            "/api/v1/optimal-growth-conditions",
            query.model_dump(by_alias=True),
            OptimalGrowthConditionsResult,
        )

    async def generate_seed_acquisition_info(
        self, query: NamedProduceQuery
    ) -> SeedAcquisitionResult:
        return await self._post(
            "/api/v1/seed-acquisition-info",
            query.model_dump(by_alias=True),
            SeedAcquisitionResult,
        )

    async def _post(self, path: str, payload: Dict[str, Any], shape: Type[ModelT]) -> ModelT:
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(path, json=payload)
        except httpx.HTTPError as exc:
            raise ModelInvocationError(f"backend request failed: {exc}") from exc

        if response.status_code == 422:
            detail = _error_detail(response)
            raise InvalidRequest(
                detail.get("message", "request rejected"), violation=_violation(detail)
            )
        if response.status_code == 502:
            detail = _error_detail(response)
            raise InvalidResponse(
                detail.get("message", "invalid model answer"),
                violation=_violation(detail),
            )
        if response.is_error:
            detail = _error_detail(response)
            raise ModelInvocationError(
                detail.get("message", f"backend returned {response.status_code}")
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise InvalidResponse("backend returned a non-JSON body") from exc
        try:
            return validate_shape(shape, body)
        except SchemaViolation as exc:
            raise InvalidResponse(f"backend answer is invalid: {exc}", violation=exc) from exc
