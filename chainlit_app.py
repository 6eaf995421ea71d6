import logging

import chainlit as cl
from chainlit.input_widget import Select

from agriinfo.client import BackendClient, ClientController
from agriinfo.domain.errors import AgriInfoError
from agriinfo.infra.config import get_config
from agriinfo.observability.logging_utils import init_logging
from agriinfo.schemas.models import IdentificationResult, LanguageCode, NamedProduceQuery

LANGUAGES = [code.value for code in LanguageCode]
GUIDANCE_FAILED_MESSAGE = "Could not generate this guidance. Please try again."

logger = logging.getLogger(__name__)


def _backend() -> BackendClient:
    return BackendClient(get_config().backend_url)


def _render_result(result: IdentificationResult) -> str:
    return (
        f"## {result.common_name}\n\n"
        f"### 🌱 Seed acquisition\n{result.seed_acquisition}\n\n"
        f"### ☀️ Growth conditions\n{result.growth_conditions}\n\n"
        f"### 🪴 Growth process\n{result.growth_process}"
    )


def _followup_actions(produce_name: str) -> list:
    payload = {"produce_name": produce_name}
    return [
        cl.Action(name="growth_instructions", payload=payload, label="Step-by-step instructions"),
        cl.Action(name="growth_conditions", payload=payload, label="Optimal conditions"),
        cl.Action(name="seed_acquisition", payload=payload, label="Where to get seeds"),
    ]


@cl.on_chat_start
async def start():
    cfg = get_config()
    init_logging(log_path=cfg.log_path, level=cfg.log_level.upper())
    default = cfg.default_language if cfg.default_language in LANGUAGES else "en"
    settings = await cl.ChatSettings(
        [
            Select(
                id="language",
                label="Answer language",
                values=LANGUAGES,
                initial_index=LANGUAGES.index(default),
            )
        ]
    ).send()
    cl.user_session.set("language", settings.get("language", default))
    cl.user_session.set("controller", ClientController(_backend().identify))
    await cl.Message(
        content="👩‍🌾 Welcome to AgriInfo! Attach a photo of a fruit or vegetable "
        "and I will tell you what it is and how to grow it."
    ).send()


@cl.on_settings_update
async def on_settings_update(settings):
    cl.user_session.set("language", settings.get("language"))


@cl.on_message
async def on_message(message: cl.Message):
    controller: ClientController = cl.user_session.get("controller")
    images = [
        element
        for element in message.elements or []
        if (getattr(element, "mime", None) or "").startswith("image/")
    ]
    if images:
        image = images[0]
        if not controller.select_file(image.path, image.mime):
            await cl.Message(content=controller.error).send()
            return
    else:
        controller.clear_selection()

    pending = cl.Message(content="Identifying...")
    if controller.has_selection:
        await pending.send()
    result = await controller.submit(cl.user_session.get("language"))
    if result is None:
        if controller.has_selection:
            await pending.remove()
        await cl.Message(content=controller.error).send()
        return

    pending.content = _render_result(result)
    pending.actions = _followup_actions(result.common_name)
    await pending.update()


async def _run_guidance(action: cl.Action, call, render) -> None:
    query = NamedProduceQuery(produce_name=action.payload["produce_name"])
    try:
        result = await call(query)
    except AgriInfoError as exc:
        logger.error("Guidance request failed (%s): %s", exc.kind, exc)
        await cl.Message(content=GUIDANCE_FAILED_MESSAGE).send()
        return
    await cl.Message(content=render(result)).send()


@cl.action_callback("growth_instructions")
async def on_growth_instructions(action: cl.Action):
    await _run_guidance(
        action,
        _backend().generate_growth_instructions,
        lambda r: f"### Step-by-step instructions\n{r.growth_instructions}",
    )


@cl.action_callback("growth_conditions")
async def on_growth_conditions(action: cl.Action):
    await _run_guidance(
        action,
        _backend().generate_optimal_growth_conditions,
        lambda r: (
            "### Optimal growth conditions\n"
            f"- **Sunlight:** {r.sunlight}\n"
            f"- **Soil:** {r.soil}\n"
            f"- **Watering:** {r.watering}\n"
            f"- **Temperature:** {r.temperature}"
        ),
    )


@cl.action_callback("seed_acquisition")
async def on_seed_acquisition(action: cl.Action):
    await _run_guidance(
        action,
        _backend().generate_seed_acquisition_info,
        lambda r: f"### Getting seeds\n{r.seed_acquisition_info}",
    )
