import argparse
import sys
from typing import Callable, List, Optional, TextIO

from sqlalchemy.orm import Session

from requirement_analyzer.db.models import Process
from requirement_analyzer.db.session import SessionLocal, init_db
from requirement_analyzer.errors import AnalysisError
from requirement_analyzer.ir.use_case_kind import kind_label
from requirement_analyzer.logging_config import setup_logging
from requirement_analyzer.pipeline.service import AnalysisService


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Break a software specification into processes, subprocesses and use cases",
    )
    parser.add_argument(
        "file",
        nargs="?",
        help="Specification text file (reads stdin when omitted)",
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    return parser


def render_outline(processes: List[Process]) -> str:
    lines = []
    for process in processes:
        lines.append(f"{process.id}. {process.name}")
        for subprocess in process.subprocesses:
            lines.append(f"    {subprocess.id}. {subprocess.name}")
            for use_case in subprocess.use_cases:
                line = f"        [{kind_label(use_case.kind)}] {use_case.name}"
                if use_case.actor:
                    line += f" — {use_case.actor}"
                lines.append(line)
    return "\n".join(lines)


def _read_specification(path: Optional[str], stdin: TextIO) -> str:
    if path:
        with open(path, encoding="utf-8") as fh:
            return fh.read()
    return stdin.read()


def main(
    argv: Optional[List[str]] = None,
    service_factory: Callable[[Session], AnalysisService] = AnalysisService,
) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        specification = _read_specification(args.file, sys.stdin)
    except OSError as e:
        print(f"Error: cannot read {args.file}: {e.strerror or e}", file=sys.stderr)
        return 1

    init_db(retries=1)
    session = SessionLocal()

    try:
        processes = service_factory(session).run(specification)
        print(render_outline(processes))
    except AnalysisError as e:
        message = e.message
        if e.retry_after_ms:
            message += f" (suggestion: wait {round(e.retry_after_ms / 1000)}s)"
        print(f"Error: {message}", file=sys.stderr)
        if e.details:
            print(e.details, file=sys.stderr)
        return 1
    finally:
        session.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
