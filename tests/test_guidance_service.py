import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from agriinfo.application.services import GuidanceService
from agriinfo.domain.errors import InvalidRequest, InvalidResponse
from agriinfo.schemas import (
    GrowthInstructionsResult,
    NamedProduceQuery,
    OptimalGrowthConditionsResult,
    SeedAcquisitionResult,
)


class _StubCapability:
    def __init__(self, response):
        self.response = response
        self.calls = []

    async def invoke(self, prompt, output_shape, *, media=()):
        self.calls.append({"prompt": prompt, "shape": output_shape, "media": tuple(media)})
        return self.response


class GrowthInstructionsTests(unittest.IsolatedAsyncioTestCase):
    async def test_returns_stub_record_unchanged(self) -> None:
        stub = _StubCapability({"growthInstructions": "Plant in spring..."})
        result = await GuidanceService(stub).generate_growth_instructions(
            {"produceName": "tomato"}
        )

        self.assertIsInstance(result, GrowthInstructionsResult)
        self.assertEqual(result.model_dump(by_alias=True), {"growthInstructions": "Plant in spring..."})
        self.assertEqual(len(stub.calls), 1)
        self.assertEqual(stub.calls[0]["media"], ())
        self.assertIn("tomato", stub.calls[0]["prompt"])

    async def test_empty_produce_name_is_rejected(self) -> None:
        stub = _StubCapability({"growthInstructions": "Plant in spring..."})
        service = GuidanceService(stub)
        for name in ("", "   "):
            with self.subTest(name=name):
                with self.assertRaises(InvalidRequest) as ctx:
                    await service.generate_growth_instructions({"produceName": name})
                self.assertEqual(ctx.exception.violation.field, "produceName")
        self.assertEqual(stub.calls, [])

    async def test_missing_output_is_invalid_response(self) -> None:
        stub = _StubCapability({"instructions": "wrong key"})
        with self.assertRaises(InvalidResponse):
            await GuidanceService(stub).generate_growth_instructions(
                NamedProduceQuery(produce_name="tomato")
            )


class OptimalGrowthConditionsTests(unittest.IsolatedAsyncioTestCase):
    async def test_returns_all_conditions(self) -> None:
        answer = {
            "sunlight": "6-8 hours of direct sun",
            "soil": "Loamy, well-drained, pH 6.2-6.8",
            "watering": "Deeply twice a week",
            "temperature": "21-29 °C",
        }
        stub = _StubCapability(answer)
        result = await GuidanceService(stub).generate_optimal_growth_conditions(
            {"produceName": "tomato"}
        )

        self.assertIsInstance(result, OptimalGrowthConditionsResult)
        self.assertEqual(result.model_dump(by_alias=True), answer)
        self.assertIs(stub.calls[0]["shape"], OptimalGrowthConditionsResult)

    async def test_partial_conditions_are_rejected(self) -> None:
        stub = _StubCapability({"sunlight": "full sun", "soil": "loam", "watering": ""})
        with self.assertRaises(InvalidResponse) as ctx:
            await GuidanceService(stub).generate_optimal_growth_conditions(
                {"produceName": "tomato"}
            )
        self.assertEqual(ctx.exception.violation.field, "watering")


class SeedAcquisitionTests(unittest.IsolatedAsyncioTestCase):
    async def test_returns_seed_info(self) -> None:
        stub = _StubCapability({"seedAcquisitionInfo": "Save seeds from ripe fruit."})
        result = await GuidanceService(stub).generate_seed_acquisition_info(
            {"produceName": "pumpkin"}
        )

        self.assertIsInstance(result, SeedAcquisitionResult)
        self.assertEqual(result.seed_acquisition_info, "Save seeds from ripe fruit.")
        self.assertEqual(stub.calls[0]["prompt"].count("pumpkin"), 2)

    async def test_missing_name_is_rejected(self) -> None:
        stub = _StubCapability({"seedAcquisitionInfo": "x"})
        with self.assertRaises(InvalidRequest):
            await GuidanceService(stub).generate_seed_acquisition_info({})
        self.assertEqual(stub.calls, [])


if __name__ == "__main__":
    unittest.main()
