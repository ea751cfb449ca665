"""
End-to-end driver: lex, parse, analyze and optionally run a program.

Every entry point returns a PipelineResult instead of raising, so callers
branch on ``result.ok`` and ``result.error.kind``.

Author: xwest
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .errors import NeutronError
from .lexer import Lexer
from .parser import Parser, Program
from .analyzer import SemanticAnalyzer, AnalysisResult
from .interpreter import Interpreter, Value, DEFAULT_ENTRY_POINT

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Outcome of running source text through the pipeline."""
    program: Optional[Program] = None
    analysis: Optional[AnalysisResult] = None
    value: Optional[Value] = None
    error: Optional[NeutronError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def check_source(source: str, filename: str = "<string>") -> PipelineResult:
    """Lex, parse and analyze ``source``."""
    return _run_pipeline(source, filename, run=False)


def run_source(source: str, filename: str = "<string>",
               entry_point: str = DEFAULT_ENTRY_POINT) -> PipelineResult:
    """Check ``source`` and, if that passes, interpret it."""
    return _run_pipeline(source, filename, run=True, entry_point=entry_point)


def check_file(path: str, run: bool = False,
               entry_point: str = DEFAULT_ENTRY_POINT) -> PipelineResult:
    """
    Read a source file and push it through the pipeline.

    Raises:
        OSError: If the file cannot be read
    """
    return _run_pipeline(read_source(path), path, run=run, entry_point=entry_point)


def read_source(path: str) -> str:
    """Read a UTF-8 source file; OSError propagates."""
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def _run_pipeline(source: str, filename: str, run: bool,
                  entry_point: str = DEFAULT_ENTRY_POINT) -> PipelineResult:
    result = PipelineResult()

    try:
        result.program = Parser(Lexer(source, filename)).parse_program()
        result.analysis = SemanticAnalyzer().analyze(result.program)
        logger.debug("%s: lexing, parsing and semantic analysis passed", filename)

        if run:
            result.value = Interpreter(entry_point).interpret(result.program)
            logger.debug("%s: program finished with %s", filename, result.value)
    except NeutronError as e:
        logger.debug("%s: %s error %s", filename, e.kind.value, e.code)
        result.error = e

    return result
