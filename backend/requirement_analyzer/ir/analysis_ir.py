from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .use_case_kind import UseCaseKind, coerce_kind


def normalize_text(value: Any) -> str:
    """
    Converts:
      None               → ""
      ["a", "b"]         → "a\\nb"
      {"x": "a"}         → "a"
      42                 → "42"
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        return "\n".join(normalize_text(item) for item in value)
    if isinstance(value, dict):
        return "\n".join(normalize_text(item) for item in value.values())
    return str(value)


class _DraftModel(BaseModel):
    # Wire keys follow the model's JSON (Spanish); attributes are English
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class UseCaseDraft(_DraftModel):
    name: str = Field(alias="nombre")
    description: str = Field(default="", alias="descripcion")
    actor: str = Field(default="", alias="actor_principal")
    kind: int = Field(default=int(UseCaseKind.FUNCTIONAL), alias="tipo_caso_uso")
    preconditions: str = Field(default="", alias="precondiciones")
    postconditions: str = Field(default="", alias="postcondiciones")
    acceptance_criteria: str = Field(default="", alias="criterios_de_aceptacion")

    @field_validator(
        "description",
        "actor",
        "preconditions",
        "postconditions",
        "acceptance_criteria",
        mode="before",
    )
    @classmethod
    def _text(cls, value: Any) -> str:
        return normalize_text(value)

    @field_validator("kind", mode="before")
    @classmethod
    def _kind(cls, value: Any) -> Any:
        if value is None:
            return int(UseCaseKind.FUNCTIONAL)
        return coerce_kind(value)


class SubprocessDraft(_DraftModel):
    name: str = Field(alias="nombre")
    description: str = Field(default="", alias="descripcion")
    use_cases: List[UseCaseDraft] = Field(default_factory=list, alias="casos_uso")

    @field_validator("description", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return normalize_text(value)

    @field_validator("use_cases", mode="before")
    @classmethod
    def _list(cls, value: Any) -> Any:
        return [] if value is None else value


class ProcessDraft(_DraftModel):
    name: str = Field(alias="nombre")
    description: str = Field(default="", alias="descripcion")
    subprocesses: List[SubprocessDraft] = Field(default_factory=list, alias="subprocesos")

    @field_validator("description", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return normalize_text(value)

    @field_validator("subprocesses", mode="before")
    @classmethod
    def _list(cls, value: Any) -> Any:
        return [] if value is None else value


# ---- Root IR ----

class AnalysisIR(BaseModel):
    """Transient process tree parsed from one model response."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    processes: List[ProcessDraft] = Field(alias="procesos")

    @property
    def subprocess_count(self) -> int:
        return sum(len(p.subprocesses) for p in self.processes)

    @property
    def use_case_count(self) -> int:
        return sum(len(s.use_cases) for p in self.processes for s in p.subprocesses)
