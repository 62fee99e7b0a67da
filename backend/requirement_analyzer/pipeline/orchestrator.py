"""
Prompt/Model Orchestrator.

Tries each candidate model in preference order. What happens after a failed
call depends only on the error kind:

    QUOTA_EXHAUSTED → FATAL       (stop everything, no retry, no fallback)
    RATE_LIMITED    → RETRY       (same model, after the next scheduled delay)
                    → NEXT_MODEL  (once the delays are used up)
    UNAVAILABLE     → NEXT_MODEL  (no retry)

When every model is exhausted the caller gets a "saturated" error with a
suggested wait.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence

from requirement_analyzer import config
from requirement_analyzer.errors import (
    InsufficientCreditsError,
    ProviderError,
    ProviderErrorKind,
    ProviderSaturatedError,
)
from requirement_analyzer.inference.base import LLMClient
from requirement_analyzer.inference.prompt import build_messages

logger = logging.getLogger(__name__)


class Decision(Enum):
    RETRY = "retry"
    NEXT_MODEL = "next_model"
    FATAL = "fatal"


def decide(kind: ProviderErrorKind, attempt: int, max_retries: int) -> Decision:
    """`attempt` is zero-based; `max_retries` is the number of scheduled delays."""
    if kind is ProviderErrorKind.QUOTA_EXHAUSTED:
        return Decision.FATAL
    if kind is ProviderErrorKind.RATE_LIMITED and attempt < max_retries:
        return Decision.RETRY
    return Decision.NEXT_MODEL


@dataclass
class GenerationResult:
    payload: Dict[str, Any]
    model: str
    attempts: int


class ModelOrchestrator:
    def __init__(
        self,
        client: LLMClient,
        models: Optional[Sequence[str]] = None,
        retry_delays_ms: Optional[Sequence[int]] = None,
        saturated_retry_after_ms: Optional[int] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.client = client
        self.models = list(models if models is not None else config.CANDIDATE_MODELS)
        self.retry_delays_ms = list(
            retry_delays_ms if retry_delays_ms is not None else config.RETRY_DELAYS_MS
        )
        self.saturated_retry_after_ms = (
            saturated_retry_after_ms
            if saturated_retry_after_ms is not None
            else config.SATURATED_RETRY_AFTER_MS
        )
        self.sleep = sleep

    def generate(self, specification: str) -> GenerationResult:
        messages = build_messages(specification)
        total_attempts = 0

        for model in self.models:
            result = self._try_model(model, messages, total_attempts)
            if isinstance(result, GenerationResult):
                return result
            total_attempts = result

        logger.error(
            "[Orchestrator] All %d candidate models exhausted after %d attempts",
            len(self.models),
            total_attempts,
        )
        raise ProviderSaturatedError(retry_after_ms=self.saturated_retry_after_ms)

    def _try_model(self, model: str, messages: List[Dict], total_attempts: int):
        """
        Returns a GenerationResult on success, otherwise the updated attempt
        count so the caller moves on to the next model.
        """
        max_retries = len(self.retry_delays_ms)

        for attempt in range(max_retries + 1):
            total_attempts += 1
            logger.info("[Orchestrator] Trying model=%s attempt=%d", model, attempt + 1)

            try:
                payload = self.client.generate(model, messages)
            except ProviderError as e:
                decision = decide(e.kind, attempt, max_retries)

                if decision is Decision.FATAL:
                    logger.error("[Orchestrator] Insufficient credits (model=%s)", model)
                    raise InsufficientCreditsError(details=e.details or None) from e

                if decision is Decision.RETRY:
                    delay_ms = self.retry_delays_ms[attempt]
                    logger.warning(
                        "[Orchestrator] Rate limited on %s, retrying in %dms",
                        model,
                        delay_ms,
                    )
                    self.sleep(delay_ms / 1000)
                    continue

                if e.kind is ProviderErrorKind.RATE_LIMITED:
                    logger.warning(
                        "[Orchestrator] Persistent rate limit on %s, trying next model",
                        model,
                    )
                else:
                    logger.error("[Orchestrator] Model %s failed: %s", model, e)
                return total_attempts

            logger.info(
                "[Orchestrator] Successful response from %s (attempt %d)",
                model,
                attempt + 1,
            )
            return GenerationResult(payload=payload, model=model, attempts=total_attempts)

        return total_attempts
