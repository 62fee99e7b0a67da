import os
from dotenv import load_dotenv

# Load .env from project root
load_dotenv()


def _get_list(name: str, default: str) -> list[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


def _get_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


# ------------------------------------------------------------
# LLM provider (OpenRouter, chat completions)
# ------------------------------------------------------------
OPENROUTER_API_KEY = os.getenv("OPENROUTER_API_KEY")
OPENROUTER_BASE_URL = os.getenv("OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1")

# Free models, in order of preference
CANDIDATE_MODELS = _get_list(
    "CANDIDATE_MODELS",
    "qwen/qwen3-235b-a22b:free,"
    "meta-llama/llama-3.2-3b-instruct:free,"
    "mistralai/mistral-7b-instruct:free",
)

# Delays between retries of a rate limited model, in milliseconds
RETRY_DELAYS_MS = [int(v) for v in _get_list("RETRY_DELAYS_MS", "800,2000,4000")]

LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.5"))
LLM_MAX_TOKENS = int(os.getenv("LLM_MAX_TOKENS", "6000"))
LLM_TIMEOUT_SECONDS = float(os.getenv("LLM_TIMEOUT_SECONDS", "120"))

# Suggested wait returned to the caller once every model is saturated
SATURATED_RETRY_AFTER_MS = int(os.getenv("SATURATED_RETRY_AFTER_MS", "30000"))

APP_REFERER = os.getenv("APP_REFERER", "http://localhost:8000")
APP_TITLE = os.getenv("APP_TITLE", "Requirement Analyzer")

# ------------------------------------------------------------
# Persistence
# ------------------------------------------------------------
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./requirement_analyzer.db")

# true: one transaction per analysis; false: commit every row as it is inserted
PERSIST_ATOMIC = _get_bool("PERSIST_ATOMIC", True)

# ------------------------------------------------------------
# Logging
# ------------------------------------------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# ------------------------------------------------------------
# HTTP server
# ------------------------------------------------------------
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))
