from requirement_analyzer.pipeline.normalizer import CLEANUP_STEPS, clean_response, parse_analysis
from requirement_analyzer.pipeline.orchestrator import (
    Decision,
    GenerationResult,
    ModelOrchestrator,
    decide,
)
from requirement_analyzer.pipeline.persister import AnalysisPersister
from requirement_analyzer.pipeline.service import AnalysisService, extract_content
