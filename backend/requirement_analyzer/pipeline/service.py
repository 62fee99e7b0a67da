import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from requirement_analyzer.db.models import AnalysisLog, Process
from requirement_analyzer.errors import (
    EmptySpecificationError,
    MalformedJSONError,
    OutputShapeError,
    PersistenceError,
)
from requirement_analyzer.inference.base import LLMClient
from requirement_analyzer.inference.config import get_llm_client
from requirement_analyzer.pipeline.normalizer import parse_analysis
from requirement_analyzer.pipeline.orchestrator import ModelOrchestrator
from requirement_analyzer.pipeline.persister import AnalysisPersister

logger = logging.getLogger(__name__)


def extract_content(payload: Dict[str, Any]) -> str:
    """choices[0].message.content of a chat completion payload."""
    try:
        content = payload["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise MalformedJSONError("Provider payload has no message content") from e

    if not isinstance(content, str):
        raise MalformedJSONError("Provider payload has no message content")
    return content


class AnalysisService:
    """
    One analysis run:
    validate input → orchestrate models → normalize → persist → log
    """

    def __init__(
        self,
        session: Session,
        client: Optional[LLMClient] = None,
        orchestrator: Optional[ModelOrchestrator] = None,
        persister: Optional[AnalysisPersister] = None,
    ):
        self.session = session
        self._client = client
        self._orchestrator = orchestrator
        self.persister = persister or AnalysisPersister(session)

    def _get_orchestrator(self) -> ModelOrchestrator:
        """Lazy so that a missing API key only fails real runs."""
        if self._orchestrator is None:
            self._orchestrator = ModelOrchestrator(self._client or get_llm_client())
        return self._orchestrator

    def run(self, specification: str) -> List[Process]:
        if not specification or not specification.strip():
            raise EmptySpecificationError()

        logger.info("[Service] Analyzing specification (%d chars)", len(specification))

        result = self._get_orchestrator().generate(specification)
        content = ""

        try:
            content = extract_content(result.payload)
            logger.info(
                "[Service] Content generated by %s (%d chars)",
                result.model,
                len(content),
            )
            analysis = parse_analysis(content)
        except OutputShapeError as e:
            logger.error("[Service] Failed to parse JSON: %s", e.details)
            logger.error("[Service] Content that failed: %s", content[:500])
            self._log(specification, result.model, content, "parse_error", e.details)
            raise

        try:
            processes = self.persister.persist(analysis)
        except PersistenceError as e:
            self._log(specification, result.model, content, "persistence_error", e.details)
            raise

        self._log(specification, result.model, content, "success")
        return processes

    def _log(
        self,
        specification: str,
        model: str,
        raw_output: str,
        status: str,
        error: Optional[str] = None,
    ) -> None:
        # Audit failures are logged, never raised
        try:
            self.session.add(
                AnalysisLog(
                    specification=specification,
                    model=model,
                    raw_output=raw_output,
                    status=status,
                    error=error,
                )
            )
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.warning("[Service] Could not record analysis log: %s", e)
