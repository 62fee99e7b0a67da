import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from requirement_analyzer.api.serializers import serialize_tree
from requirement_analyzer.db.session import get_session
from requirement_analyzer.errors import AnalysisError
from requirement_analyzer.pipeline.service import AnalysisService
from requirement_analyzer.schemas import AnalyzeRequest, AnalyzeResponse, ErrorResponse

logger = logging.getLogger(__name__)

CORS_ALLOW_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": ", ".join(CORS_ALLOW_HEADERS),
}

router = APIRouter()


def get_analysis_service(session: Session = Depends(get_session)) -> AnalysisService:
    return AnalysisService(session)


@router.options("/analyze-requirements")
def analyze_requirements_preflight():
    return Response(status_code=200, headers=CORS_HEADERS)


@router.post(
    "/analyze-requirements",
    response_model=AnalyzeResponse,
    responses={
        400: {"model": ErrorResponse},
        402: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def analyze_requirements(
    request: AnalyzeRequest,
    service: AnalysisService = Depends(get_analysis_service),
):
    """
    Generate processes → subprocesses → use cases from a free-text
    specification, store them and return the stored tree.
    """
    try:
        processes = service.run(request.specification)
        data = serialize_tree(processes)
    except AnalysisError:
        raise
    except Exception as e:
        logger.exception("[API] Error in analyze-requirements")
        raise AnalysisError(str(e) or "Unknown error") from e

    return {"success": True, "data": data}


@router.get("/health")
def health():
    return {"status": "ok"}
