from requirement_analyzer.ir.analysis_ir import (
    AnalysisIR,
    ProcessDraft,
    SubprocessDraft,
    UseCaseDraft,
)
from requirement_analyzer.ir.use_case_kind import (
    UseCaseKind,
    UNKNOWN_LABEL,
    kind_label,
)
