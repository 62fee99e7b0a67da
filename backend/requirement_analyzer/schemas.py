from pydantic import BaseModel
from typing import List, Optional


class AnalyzeRequest(BaseModel):
    specification: str


class UseCaseOut(BaseModel):
    id_caso_uso: int
    id_subproceso: int
    nombre: str
    descripcion: Optional[str] = None
    actor_principal: Optional[str] = None
    tipo_caso_uso: int
    tipo_caso_uso_label: str  # "Unknown" for codes outside 1-3
    precondiciones: Optional[str] = None
    postcondiciones: Optional[str] = None
    criterios_de_aceptacion: Optional[str] = None


class SubprocessOut(BaseModel):
    id_subproceso: int
    id_proceso: int
    nombre: str
    descripcion: Optional[str] = None
    casos_uso: List[UseCaseOut] = []


class ProcessOut(BaseModel):
    id_proceso: int
    nombre: str
    descripcion: Optional[str] = None
    subprocesos: List[SubprocessOut] = []


class AnalyzeResponse(BaseModel):
    success: bool
    data: List[ProcessOut]


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    retry_after_ms: Optional[int] = None
    details: Optional[str] = None
