import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from requirement_analyzer import config
from requirement_analyzer.api.cors import PreflightCORSMiddleware
from requirement_analyzer.api.routes import CORS_ALLOW_HEADERS, router
from requirement_analyzer.db.session import init_db
from requirement_analyzer.errors import AnalysisError
from requirement_analyzer.logging_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Requirement Analyzer",
    version="0.1.0",
)

# Middleware FIRST
app.add_middleware(
    PreflightCORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=CORS_ALLOW_HEADERS,
)

# Routes AFTER middleware
app.include_router(router)


@app.exception_handler(AnalysisError)
def handle_analysis_error(request: Request, exc: AnalysisError):
    if exc.status_code >= 500:
        logger.error("[API] %s: %s", type(exc).__name__, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(RequestValidationError)
def handle_validation_error(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": "Invalid request body: expected { specification: string }",
            "details": str(exc.errors()),
        },
    )


@app.on_event("startup")
def startup():
    # DO NOT crash the app when the database is not ready
    init_db()


def serve():
    import uvicorn

    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT)


if __name__ == "__main__":
    serve()
