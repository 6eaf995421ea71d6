import json
import os
import sys
import unittest
from pathlib import Path
from unittest.mock import patch

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from fastapi.testclient import TestClient

from agriinfo.api.server import app
from agriinfo.application.services import GuidanceService, IdentificationService
from agriinfo.domain.errors import ModelInvocationError
from agriinfo.infra.config import get_config


PNG_DATA_URI = (
    "data:image/png;base64,"
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)

RESULT = {
    "commonName": "टमाटर",
    "seedAcquisition": "बीज खरीदें।",
    "growthConditions": "धूप।",
    "growthProcess": "बोएं और पानी दें।",
}


class _StubCapability:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = 0

    async def invoke(self, prompt, output_shape, *, media=()):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.response


class ApiServerTests(unittest.TestCase):
    def setUp(self) -> None:
        self._env_backup = os.environ.get("LLM_PROVIDER")
        os.environ["LLM_PROVIDER"] = "openai"
        get_config.cache_clear()
        self.client = TestClient(app)

    def tearDown(self) -> None:
        if self._env_backup is None:
            os.environ.pop("LLM_PROVIDER", None)
        else:
            os.environ["LLM_PROVIDER"] = self._env_backup
        get_config.cache_clear()

    def _patch_identify(self, capability):
        return patch(
            "agriinfo.api.server.get_identification_service",
            return_value=IdentificationService(capability),
        )

    def _patch_guidance(self, capability):
        return patch(
            "agriinfo.api.server.get_guidance_service",
            return_value=GuidanceService(capability),
        )

    def test_health(self) -> None:
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "ok", "llm": "openai"})

    def test_openapi_documents_request_bodies(self) -> None:
        paths = self.client.get("/openapi.json").json()["paths"]

        def body_schema(path):
            return paths[path]["post"]["requestBody"]["content"]["application/json"]["schema"]

        identify = body_schema("/api/v1/identify")
        self.assertIn("encodedImage", identify["properties"])
        self.assertIn("encodedImage", identify["required"])
        self.assertIn('"hi"', json.dumps(identify["properties"]["languageCode"]))
        self.assertNotIn("$defs", json.dumps(identify))
        for path in (
            "/api/v1/growth-instructions",
            "/api/v1/optimal-growth-conditions",
            "/api/v1/seed-acquisition-info",
        ):
            with self.subTest(path=path):
                self.assertIn("produceName", body_schema(path)["required"])

    def test_identify_returns_record(self) -> None:
        stub = _StubCapability(response=dict(RESULT))
        with self._patch_identify(stub):
            response = self.client.post(
                "/api/v1/identify",
                json={"encodedImage": PNG_DATA_URI, "languageCode": "hi"},
            )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), RESULT)
        self.assertTrue(response.headers.get("X-Trace-Id"))

    def test_trace_id_is_echoed(self) -> None:
        stub = _StubCapability(response=dict(RESULT))
        with self._patch_identify(stub):
            response = self.client.post(
                "/api/v1/identify",
                json={"encodedImage": PNG_DATA_URI},
                headers={"X-Trace-Id": "trace-123"},
            )
        self.assertEqual(response.headers["X-Trace-Id"], "trace-123")

    def test_invalid_image_is_422(self) -> None:
        stub = _StubCapability(response=dict(RESULT))
        with self._patch_identify(stub):
            response = self.client.post(
                "/api/v1/identify",
                json={"encodedImage": "tomato.png", "languageCode": "en"},
            )
        self.assertEqual(response.status_code, 422)
        detail = response.json()["detail"]
        self.assertEqual(detail["error"], "invalid_request")
        self.assertEqual(detail["field"], "encodedImage")
        self.assertEqual(stub.calls, 0)

    def test_partial_answer_is_502(self) -> None:
        stub = _StubCapability(response={"commonName": "Tomato"})
        with self._patch_identify(stub):
            response = self.client.post(
                "/api/v1/identify", json={"encodedImage": PNG_DATA_URI}
            )
        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json()["detail"]["error"], "invalid_response")

    def test_model_failure_is_503(self) -> None:
        stub = _StubCapability(error=ModelInvocationError("quota exceeded"))
        with self._patch_identify(stub):
            response = self.client.post(
                "/api/v1/identify", json={"encodedImage": PNG_DATA_URI}
            )
        self.assertEqual(response.status_code, 503)
        detail = response.json()["detail"]
        self.assertEqual(detail["error"], "model_invocation_failed")
        self.assertEqual(detail["message"], "quota exceeded")

    def test_growth_instructions(self) -> None:
        stub = _StubCapability(response={"growthInstructions": "Plant in spring..."})
        with self._patch_guidance(stub):
            response = self.client.post(
                "/api/v1/growth-instructions", json={"produceName": "tomato"}
            )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"growthInstructions": "Plant in spring..."})

    def test_empty_produce_name_is_422(self) -> None:
        stub = _StubCapability(response={"seedAcquisitionInfo": "x"})
        with self._patch_guidance(stub):
            response = self.client.post(
                "/api/v1/seed-acquisition-info", json={"produceName": ""}
            )
        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.json()["detail"]["field"], "produceName")
        self.assertEqual(stub.calls, 0)

    def test_optimal_growth_conditions(self) -> None:
        answer = {
            "sunlight": "Full sun",
            "soil": "Loam",
            "watering": "Twice a week",
            "temperature": "20-30 °C",
        }
        with self._patch_guidance(_StubCapability(response=answer)):
            response = self.client.post(
                "/api/v1/optimal-growth-conditions", json={"produceName": "okra"}
            )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), answer)


if __name__ == "__main__":
    unittest.main()
