from functools import lru_cache

from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI

from .config import get_config


@lru_cache(maxsize=1)
def get_vision_model() -> BaseChatModel:
    cfg = get_config()
    if cfg.llm_provider != "openai":
        raise ValueError("Only OpenAI is supported as LLM provider, set LLM_PROVIDER=openai")
    if not cfg.openai_api_key:
        raise ValueError("OPENAI_API_KEY is not configured, cannot call the OpenAI API")
    kwargs = {
        "api_key": cfg.openai_api_key,
        "temperature": cfg.llm_temperature,
        "model": cfg.vision_model,
    }
    if cfg.openai_api_base:
        kwargs["base_url"] = cfg.openai_api_base
    return ChatOpenAI(**kwargs)
