from requirement_analyzer import config
from requirement_analyzer.errors import ConfigurationError
from .chat_completions_client import ChatCompletionsClient


def get_llm_client() -> ChatCompletionsClient:
    if not config.OPENROUTER_API_KEY:
        raise ConfigurationError("OPENROUTER_API_KEY is not configured")

    return ChatCompletionsClient(
        base_url=config.OPENROUTER_BASE_URL,
        api_key=config.OPENROUTER_API_KEY,
        temperature=config.LLM_TEMPERATURE,
        max_tokens=config.LLM_MAX_TOKENS,
        timeout=config.LLM_TIMEOUT_SECONDS,
        referer=config.APP_REFERER,
        title=config.APP_TITLE,
    )
