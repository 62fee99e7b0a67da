from typing import Any, Dict, List

from requirement_analyzer.db.models import Process, Subprocess, UseCase
from requirement_analyzer.ir.use_case_kind import kind_label


def serialize_use_case(use_case: UseCase) -> Dict[str, Any]:
    return {
        "id_caso_uso": use_case.id,
        "id_subproceso": use_case.subprocess_id,
        "nombre": use_case.name,
        "descripcion": use_case.description,
        "actor_principal": use_case.actor,
        "tipo_caso_uso": use_case.kind,
        "tipo_caso_uso_label": kind_label(use_case.kind),
        "precondiciones": use_case.preconditions,
        "postcondiciones": use_case.postconditions,
        "criterios_de_aceptacion": use_case.acceptance_criteria,
    }


def serialize_subprocess(subprocess: Subprocess) -> Dict[str, Any]:
    return {
        "id_subproceso": subprocess.id,
        "id_proceso": subprocess.process_id,
        "nombre": subprocess.name,
        "descripcion": subprocess.description,
        "casos_uso": [serialize_use_case(uc) for uc in subprocess.use_cases],
    }


def serialize_process(process: Process) -> Dict[str, Any]:
    return {
        "id_proceso": process.id,
        "nombre": process.name,
        "descripcion": process.description,
        "subprocesos": [serialize_subprocess(s) for s in process.subprocesses],
    }


def serialize_tree(processes: List[Process]) -> List[Dict[str, Any]]:
    """
    Persisted rows → wire format the front end renders.
    Children keep insertion order.
    """
    return [serialize_process(p) for p in processes]
