from requirement_analyzer.db.models import (
    AnalysisLog,
    Base,
    Process,
    Subprocess,
    UseCase,
)
