"""
Persists a parsed AnalysisIR depth-first, parent before child.

Two modes:

- atomic: one transaction; identifiers come from flush(); a failure rolls
  back every row of the run.
- per-row: every row is committed as soon as it is inserted; a failure stops
  the remaining inserts and keeps the rows already committed.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from requirement_analyzer import config
from requirement_analyzer.db.models import Process, Subprocess, UseCase
from requirement_analyzer.errors import PersistenceError
from requirement_analyzer.ir.analysis_ir import AnalysisIR

logger = logging.getLogger(__name__)


class AnalysisPersister:
    def __init__(self, session: Session, atomic: Optional[bool] = None):
        self.session = session
        self.atomic = config.PERSIST_ATOMIC if atomic is None else atomic

    def persist(self, analysis: AnalysisIR) -> List[Process]:
        logger.info(
            "[Persister] Inserting %d processes (atomic=%s)",
            len(analysis.processes),
            self.atomic,
        )

        try:
            processes = self._insert_tree(analysis)
            if self.atomic:
                self.session.commit()
        # OverflowError: an integer the driver cannot bind (e.g. a huge kind)
        except (SQLAlchemyError, OverflowError) as e:
            self.session.rollback()
            logger.error("[Persister] Insert failed: %s", e)
            raise PersistenceError(
                "Failed to store the analysis results.",
                details=str(e.__cause__ or e),
            ) from e

        logger.info("[Persister] Data inserted successfully")
        return processes

    def _insert_tree(self, analysis: AnalysisIR) -> List[Process]:
        processes = []

        for proc in analysis.processes:
            process = self._save(
                Process(name=proc.name, description=proc.description)
            )
            logger.debug("[Persister] Process inserted: %s", process.id)

            for sub in proc.subprocesses:
                subprocess = self._save(
                    Subprocess(
                        process_id=process.id,
                        name=sub.name,
                        description=sub.description,
                    )
                )
                logger.debug("[Persister] Subprocess inserted: %s", subprocess.id)

                for uc in sub.use_cases:
                    use_case = self._save(
                        UseCase(
                            subprocess_id=subprocess.id,
                            name=uc.name,
                            description=uc.description,
                            actor=uc.actor,
                            kind=uc.kind,
                            preconditions=uc.preconditions,
                            postconditions=uc.postconditions,
                            acceptance_criteria=uc.acceptance_criteria,
                        )
                    )
                    logger.debug("[Persister] Use case inserted: %s", use_case.id)

            processes.append(process)

        return processes

    def _save(self, row):
        """Insert one row and make its generated identifier available."""
        self.session.add(row)
        if self.atomic:
            self.session.flush()
        else:
            self.session.commit()
        return row
