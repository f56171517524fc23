"""Lex, parse, desugar and print one formula at a time."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from loguru import logger

from setsugar.config.settings import TransformConfig
from setsugar.core.ast import Node
from setsugar.core.errors import FormulaTooDeepError, SetSugarError
from setsugar.core.printer import render
from setsugar.core.transformer import transform
from setsugar.surface.lexer import lex
from setsugar.surface.parser import parse
from setsugar.utils.location import Location

ERROR_PREFIX = "Error: "
COMMENT_PREFIX = "#"


def translate(
    source: str,
    config: TransformConfig | None = None,
    *,
    filename: str | None = None,
    line: int = 1,
) -> Node:
    """Parse a formula and eliminate the enabled constructs.

    Raises:
        LexerError: If the input contains an unknown character
        ParseError: If the input is not a well-formed formula
        FormulaTooDeepError: If the formula nests too deeply to rewrite
    """
    tokens = lex(source, filename, line)
    logger.debug("pipeline.lex tokens={}", len(tokens))
    try:
        tree = parse(tokens)
        logger.debug("pipeline.parse formula={}", tree)
        return transform(tree, config)
    except RecursionError as exc:
        raise FormulaTooDeepError(tokens[0].location if tokens else None) from exc


def desugar(
    source: str,
    config: TransformConfig | None = None,
    *,
    filename: str | None = None,
    line: int = 1,
) -> str:
    """Translate a formula and render the result.

    Raises the same errors as translate().
    """
    tree = translate(source, config, filename=filename, line=line)
    try:
        return render(tree)
    except RecursionError as exc:
        raise FormulaTooDeepError(Location(line, 1, filename)) from exc


def run(source: str, config: TransformConfig | None = None) -> str:
    """Translate a formula and render the result, or the error, as text."""
    try:
        return desugar(source, config)
    except SetSugarError as exc:
        logger.debug("pipeline.error source={!r} error={}", source, exc)
        return f"{ERROR_PREFIX}{exc}"


@dataclass(frozen=True)
class LineResult:
    """Outcome for one line of a batch file."""

    line: int
    source: str
    output: str
    ok: bool


def run_lines(
    lines: Iterable[str],
    config: TransformConfig | None = None,
    filename: str | None = None,
) -> Iterator[LineResult]:
    """Translate one formula per line.

    Blank lines and lines starting with '#' are skipped. Errors are reported
    per line and do not stop the batch.
    """
    for number, raw in enumerate(lines, start=1):
        source = raw.strip()
        if not source or source.startswith(COMMENT_PREFIX):
            continue
        try:
            output = desugar(raw, config, filename=filename, line=number)
        except SetSugarError as exc:
            logger.debug("pipeline.error line={} error={}", number, exc)
            yield LineResult(number, source, f"{ERROR_PREFIX}{exc}", ok=False)
            continue
        yield LineResult(number, source, output, ok=True)
