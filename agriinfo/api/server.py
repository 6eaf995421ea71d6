import logging
import uuid
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import Any, Dict, Type

from fastapi import Body, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..application.services import GuidanceService, IdentificationService
from ..domain.errors import (
    AgriInfoError,
    InvalidRequest,
    InvalidResponse,
    ModelInvocationError,
)
from ..infra.config import get_config
from ..infra.llm import get_vision_model
from ..infra.model_capability import ChatModelCapability
from ..observability.logging_utils import init_logging, trace_scope
from ..schemas.models import (
    GrowthInstructionsResult,
    HealthResponse,
    IdentificationResult,
    ImageIdentificationRequest,
    NamedProduceQuery,
    OptimalGrowthConditionsResult,
    SeedAcquisitionResult,
)


logger = logging.getLogger(__name__)

TRACE_HEADER = "X-Trace-Id"


@lru_cache(maxsize=1)
def get_model_capability() -> ChatModelCapability:
    cfg = get_config()
    return ChatModelCapability(
        get_vision_model, timeout_seconds=cfg.llm_timeout_seconds
    )


@lru_cache(maxsize=1)
def get_identification_service() -> IdentificationService:
    return IdentificationService(get_model_capability())


@lru_cache(maxsize=1)
def get_guidance_service() -> GuidanceService:
    return GuidanceService(get_model_capability())


@asynccontextmanager
async def lifespan(_: FastAPI):
    cfg = get_config()
    init_logging(log_path=cfg.log_path, level=cfg.log_level.upper())
    logger.info("AgriInfo API started, llm provider: %s", cfg.llm_provider)
    yield


app = FastAPI(title="AgriInfo", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[TRACE_HEADER],
)


@app.middleware("http")
async def _trace_requests(request: Request, call_next):
    trace_id = request.headers.get(TRACE_HEADER) or uuid.uuid4().hex
    with trace_scope(trace_id):
        response = await call_next(request)
    response.headers[TRACE_HEADER] = trace_id
    return response


def _error_detail(exc: AgriInfoError) -> Dict[str, Any]:
    detail: Dict[str, Any] = {"error": exc.kind, "message": str(exc)}
    violation = getattr(exc, "violation", None)
    if violation is not None:
        detail.update(violation.to_dict())
    return detail


@app.exception_handler(InvalidRequest)
async def _invalid_request_handler(_: Request, exc: InvalidRequest):
    return JSONResponse(status_code=422, content={"detail": _error_detail(exc)})


@app.exception_handler(InvalidResponse)
async def _invalid_response_handler(_: Request, exc: InvalidResponse):
    return JSONResponse(status_code=502, content={"detail": _error_detail(exc)})


@app.exception_handler(ModelInvocationError)
async def _model_error_handler(_: Request, exc: ModelInvocationError):
    return JSONResponse(status_code=503, content={"detail": _error_detail(exc)})


@app.exception_handler(Exception)
async def _unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error at %s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": {"error": "internal_error", "message": str(exc)}},
    )


def _inline_refs(node: Any, defs: Dict[str, Any]) -> Any:
    if isinstance(node, dict):
        ref = node.get("$ref")
        if isinstance(ref, str) and ref.startswith("#/$defs/"):
            target = _inline_refs(defs[ref.rsplit("/", 1)[-1]], defs)
            siblings = {key: value for key, value in node.items() if key != "$ref"}
            return {**target, **_inline_refs(siblings, defs)}
        return {key: _inline_refs(value, defs) for key, value in node.items()}
    if isinstance(node, list):
        return [_inline_refs(item, defs) for item in node]
    return node


def _documented_body(shape: Type[BaseModel]) -> Dict[str, Any]:
    """
    OpenAPI request body for ``shape``.

    Routes take the raw JSON object so that the services report schema
    violations themselves; this only feeds the generated docs.
    """
    schema = shape.model_json_schema(by_alias=True)
    defs = schema.pop("$defs", {})
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": _inline_refs(schema, defs)}},
        }
    }


@app.get("/health", response_model=HealthResponse)
async def health():
    cfg = get_config()
    return HealthResponse(status="ok", llm=cfg.llm_provider)


@app.post(
    "/api/v1/identify",
    response_model=IdentificationResult,
    openapi_extra=_documented_body(ImageIdentificationRequest),
)
async def identify_fruit_vegetable(payload: Dict[str, Any] = Body(...)):
    return await get_identification_service().identify(payload)


@app.post(
    "/api/v1/growth-instructions",
    response_model=GrowthInstructionsResult,
    openapi_extra=_documented_body(NamedProduceQuery),
)
async def generate_growth_instructions(payload: Dict[str, Any] = Body(...)):
    return await get_guidance_service().generate_growth_instructions(payload)


@app.post(
    "/api/v1/optimal-growth-conditions",
    response_model=OptimalGrowthConditionsResult,
    openapi_extra=_documented_body(NamedProduceQuery),
)
async def generate_optimal_growth_conditions(payload: Dict[str, Any] = Body(...)):
    return await get_guidance_service().generate_optimal_growth_conditions(payload)


@app.post(
    "/api/v1/seed-acquisition-info",
    response_model=SeedAcquisitionResult,
    openapi_extra=_documented_body(NamedProduceQuery),
)
async def generate_seed_acquisition_info(payload: Dict[str, Any] = Body(...)):
    return await get_guidance_service().generate_seed_acquisition_info(payload)
