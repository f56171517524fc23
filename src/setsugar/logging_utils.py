"""Runtime logging helpers."""

from __future__ import annotations

import inspect
import logging
import sys
from logging import Handler

from loguru import logger
from rich import get_console
from rich.logging import RichHandler

from setsugar.config.settings import LogProfile, LogSettings

_PROFILE_FORMATS: dict[LogProfile, str] = {
    "shell": "{message}",
    "default": "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<6} | {name}:{function}:{line} | {message}",
}
_CONFIGURED_PROFILE: LogProfile | None = None


class InterceptHandler(logging.Handler):
    """Handler that forwards stdlib logging messages to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = inspect.currentframe(), 0
        while frame:
            filename = frame.f_code.co_filename
            is_logging = filename == logging.__file__
            is_frozen = "importlib" in filename and "_bootstrap" in filename
            if depth > 0 and not (is_logging or is_frozen):
                break
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _build_shell_handler() -> Handler:
    return RichHandler(
        console=get_console(),
        show_level=True,
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )


def parse_log_filter(value: str) -> tuple[str, dict[str | None, str | int | bool]]:
    """Parse a SETSUGAR_LOG_FILTER value.

    Format: "level" or "level,module1=level,module2=level"
    Examples:
        - "info" - global INFO level
        - "debug,setsugar.core=debug" - global DEBUG, setsugar.core at DEBUG
        - "info,setsugar.surface=false" - global INFO, setsugar.surface disabled

    Returns:
        (global_level, module_filter_dict)
    """
    parts = [p.strip() for p in value.lower().split(",") if p.strip()]

    filter_dict: dict[str | None, str | int | bool] = {}
    global_level = "warning"

    for part in parts:
        if "=" in part:
            module, level = part.split("=", 1)
            module = module.strip()
            level = level.strip()
            if level == "false":
                filter_dict[module] = False
            else:
                filter_dict[module] = level.upper()
        else:
            global_level = part

    return global_level, filter_dict


def _setup_stdlib_intercept() -> None:
    """Forward stdlib logging to loguru."""
    root_logger = logging.getLogger()
    if not any(isinstance(handler, InterceptHandler) for handler in root_logger.handlers):
        root_logger.addHandler(InterceptHandler())


def configure_logging(*, profile: LogProfile | None = None, settings: LogSettings | None = None) -> None:
    """Configure process-level logging once per profile.

    Log levels controlled by SETSUGAR_LOG_FILTER:
    - "warning" - the default, only problems are shown
    - "debug,setsugar.core=debug" - trace every desugaring pass
    - "info,setsugar.surface=false" - silence the lexer and parser
    """
    global _CONFIGURED_PROFILE

    settings = settings or LogSettings()
    profile = profile or settings.profile
    if profile == _CONFIGURED_PROFILE:
        return

    global_level, module_filter = parse_log_filter(settings.filter)
    # The sink takes every record; the filter applies the global level to
    # modules without their own entry.
    level_filter = {"": global_level.upper(), **module_filter}

    logger.remove()

    if profile == "shell":
        logger.add(
            _build_shell_handler(),
            level=0,
            format=_PROFILE_FORMATS[profile],
            backtrace=False,
            diagnose=False,
            filter=level_filter,
        )
    else:
        logger.add(
            sys.stderr,
            level=0,
            format=_PROFILE_FORMATS[profile],
            backtrace=False,
            diagnose=False,
            filter=level_filter,
        )

    _setup_stdlib_intercept()

    _CONFIGURED_PROFILE = profile
