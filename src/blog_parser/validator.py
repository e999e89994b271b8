"""Validation of parsed pages.

The parser keeps every Error at the top level of its output (a paragraph
returns the Error in its own place), so the validator only looks at
top-level expressions and, for paragraphs, their direct children.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Union

from common.base.logging_config import get_logger
from .expression import Error, Expression, Newline, Paragraph, ParseError

logger = get_logger(__name__)

@dataclass(frozen=True)
class DiagnosticLocation:
    """Where a diagnostic occurred: after an expression, or at the start of the file."""
    after: Optional[str] = None

    @classmethod
    def beginning(cls) -> "DiagnosticLocation":
        return cls()

    @property
    def at_beginning(self) -> bool:
        return self.after is None

    def describe(self) -> str:
        if self.at_beginning:
            return "at beginning of file"
        return f"after expression '{self.after}'"

    def __str__(self) -> str:
        return self.describe()

@dataclass(frozen=True)
class Diagnostic:
    """A user-facing description of one parse failure."""
    message: str
    location: DiagnosticLocation
    filename: Optional[Path] = None
    error: Optional[ParseError] = None

    def __str__(self) -> str:
        text = f"{self.message} ({self.location})"
        if self.filename is not None:
            return f"could not parse file '{self.filename}': {text}"
        return text

def _locate(expressions: Sequence[Expression], index: int) -> DiagnosticLocation:
    """Find the nearest preceding expression that is neither an error nor a newline."""
    for previous in reversed(expressions[:index]):
        if isinstance(previous, (Error, Newline)):
            continue
        return DiagnosticLocation(after=previous.display())
    return DiagnosticLocation.beginning()

def _check(expressions: Sequence[Expression], filename: Optional[Path],
           diagnostics: List[Diagnostic], nested: bool = False) -> None:
    for i, expression in enumerate(expressions):
        if isinstance(expression, Error):
            diagnostics.append(Diagnostic(
                message=expression.error.message,
                location=_locate(expressions, i),
                filename=filename,
                error=expression.error,
            ))
        elif isinstance(expression, Paragraph) and not nested:
            _check(expression.children, filename, diagnostics, nested=True)

def validate(expressions: Sequence[Expression],
             filename: Optional[Union[str, Path]] = None) -> List[Diagnostic]:
    """
    Collect a diagnostic for every Error expression of a page.

    :param expressions: Top-level expressions returned by the parser
    :param filename: Source file name, used in the diagnostic messages
    :return: Diagnostics in source order; an empty list means the page is valid
    """
    path = Path(filename) if filename is not None else None
    diagnostics: List[Diagnostic] = []

    _check(expressions, path, diagnostics)

    if diagnostics:
        logger.debug(f"Found {len(diagnostics)} parse error(s) in {path or 'page'}")
    return diagnostics
