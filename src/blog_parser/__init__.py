"""Blog Parser - A parser and HTML generator for Blog Builder markup."""

from datetime import date
from pathlib import Path
from typing import Optional, Union

from common.config.site_config import Config
from common.result import BlogResult
from .lexer import tokenize
from .parser import parse
from .validator import Diagnostic, validate
from .html_generator import emit, render

def process_page(source: str, config: Config, page_name: str,
                 root: Optional[Union[str, Path]] = None,
                 filename: Optional[Union[str, Path]] = None,
                 today: Optional[date] = None) -> BlogResult[str]:
    """Main entry point for page processing: source text in, HTML document or diagnostics out."""
    expressions = parse(source)
    diagnostics = validate(expressions, filename=filename)
    if diagnostics:
        return BlogResult(errors=diagnostics)
    return emit(expressions, config, page_name, root=root, today=today)

__all__ = ['Diagnostic', 'tokenize', 'parse', 'validate', 'emit', 'render', 'process_page']
