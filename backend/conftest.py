import json

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from requirement_analyzer.db.models import Base
from requirement_analyzer.errors import ProviderError, ProviderErrorKind
from requirement_analyzer.inference.base import LLMClient


# ============================================================
# DATABASE
# ============================================================

@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def session(session_factory):
    session = session_factory()
    yield session
    session.close()


# ============================================================
# LLM FAKES
# ============================================================

class ScriptedClient(LLMClient):
    """
    Replays outcomes per model, in order. An outcome is either a payload
    dict or a ProviderError to raise. The last outcome repeats.
    """

    def __init__(self, script):
        self.script = {model: list(outcomes) for model, outcomes in script.items()}
        self.calls = []
        self.messages = []

    def generate(self, model, messages):
        self.calls.append(model)
        self.messages.append(messages)

        outcomes = self.script.get(model)
        if not outcomes:
            raise ProviderError(ProviderErrorKind.UNAVAILABLE, details="not scripted")

        outcome = outcomes.pop(0) if len(outcomes) > 1 else outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _completion(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def _analysis_document(processes=2, subprocesses=2, use_cases=2, kind=1):
    return {
        "procesos": [
            {
                "nombre": f"Process {p}",
                "descripcion": f"Process {p} description",
                "subprocesos": [
                    {
                        "nombre": f"Subprocess {p}.{s}",
                        "descripcion": f"Subprocess {p}.{s} description",
                        "casos_uso": [
                            {
                                "nombre": f"Use case {p}.{s}.{u}",
                                "descripcion": "Does something useful",
                                "actor_principal": "User",
                                "tipo_caso_uso": kind,
                                "precondiciones": "Logged in",
                                "postcondiciones": "Saved",
                                "criterios_de_aceptacion": "Shows a confirmation",
                            }
                            for u in range(1, use_cases + 1)
                        ],
                    }
                    for s in range(1, subprocesses + 1)
                ],
            }
            for p in range(1, processes + 1)
        ]
    }


@pytest.fixture
def scripted_client():
    return ScriptedClient


@pytest.fixture
def completion():
    return _completion


@pytest.fixture
def analysis_document():
    return _analysis_document


@pytest.fixture
def analysis_json(analysis_document):
    return json.dumps(analysis_document(), indent=2)


@pytest.fixture
def rate_limited():
    return ProviderError(ProviderErrorKind.RATE_LIMITED, status=429, details="slow down")


@pytest.fixture
def no_credits():
    return ProviderError(ProviderErrorKind.QUOTA_EXHAUSTED, status=402, details="no credits")


@pytest.fixture
def unavailable():
    return ProviderError(ProviderErrorKind.UNAVAILABLE, status=500, details="boom")


@pytest.fixture
def no_sleep():
    """Records requested delays instead of sleeping."""
    delays = []

    def sleep(seconds):
        delays.append(seconds)

    sleep.delays = delays
    return sleep
