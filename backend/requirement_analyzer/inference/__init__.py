from requirement_analyzer.inference.base import LLMClient
from requirement_analyzer.inference.chat_completions_client import (
    ChatCompletionsClient,
    classify_status,
)
from requirement_analyzer.inference.config import get_llm_client
from requirement_analyzer.inference.prompt import SYSTEM_PROMPT, build_messages
