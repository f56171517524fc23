"""Interactive shell: type formulas, toggle eliminations, read the result."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import FileHistory
from rich import get_console
from rich.console import Console
from rich.text import Text

from setsugar.config.settings import SWITCHES, TransformConfig
from setsugar.core.errors import SetSugarError
from setsugar.pipeline import desugar
from setsugar.surface.types import (
    BINARY_OPERATOR_SYMBOLS,
    CONNECTIVE_SYMBOLS,
    CONSTANT_SYMBOLS,
    QUANTIFIER_SYMBOLS,
    RELATION_SYMBOLS,
    UNARY_OPERATOR_SYMBOLS,
)

HELP_TEXT = """\
Enter a formula to desugar it with the enabled switches.

  :config          show the switches
  :toggle NAME     turn one switch on or off
  :all / :none     turn every switch on / off
  :symbols         list the accepted spellings of every symbol
  :help            show this help
  :quit            leave the shell"""


@dataclass(frozen=True)
class ShellReply:
    """What the shell prints for one line of input."""

    text: str
    error: bool = False
    exit: bool = False


def symbol_table() -> str:
    """Every concept with its accepted spellings, canonical one first."""
    rows: dict[str, list[str]] = {}
    for table in (
        RELATION_SYMBOLS,
        CONNECTIVE_SYMBOLS,
        QUANTIFIER_SYMBOLS,
        CONSTANT_SYMBOLS,
        UNARY_OPERATOR_SYMBOLS,
        BINARY_OPERATOR_SYMBOLS,
    ):
        for spelling, concept in table.items():
            name = concept if isinstance(concept, str) else concept.value
            rows.setdefault(name, []).append(spelling)
    width = max(len(name) for name in rows)
    return "\n".join(f"{name:<{width}}  {'  '.join(spellings)}" for name, spellings in rows.items())


class InteractiveCli:
    """Read-translate-print loop over a mutable set of switches."""

    HISTORY_FILE = Path.home() / ".setsugar_history"
    COMMANDS = (":help", ":config", ":toggle", ":all", ":none", ":symbols", ":quit", ":q")

    def __init__(
        self,
        config: TransformConfig | None = None,
        *,
        history_file: Path | None = None,
        console: Console | None = None,
    ) -> None:
        self.config = config if config is not None else TransformConfig()
        self._history_file = history_file or self.HISTORY_FILE
        self._console = console or get_console()

    def run(self) -> None:
        session = self._build_prompt()
        self._console.print("setsugar: type :help for commands, :quit to leave.", highlight=False)
        while True:
            try:
                raw = session.prompt("set> ")
            except KeyboardInterrupt:
                continue
            except EOFError:
                break
            reply = self.handle(raw)
            if reply.text:
                style = "red" if reply.error else ""
                self._console.print(Text(reply.text, style=style))
            if reply.exit:
                break

    def handle(self, raw: str) -> ShellReply:
        """Process one line of input."""
        line = raw.strip()
        if not line:
            return ShellReply("")
        if line.startswith(":"):
            return self._command(line)
        try:
            return ShellReply(desugar(line, self.config))
        except SetSugarError as exc:
            return ShellReply(f"Error: {exc}", error=True)

    def _command(self, line: str) -> ShellReply:
        name, _, argument = line.partition(" ")
        argument = argument.strip()
        match name:
            case ":quit" | ":q":
                return ShellReply("", exit=True)
            case ":help" | ":h":
                return ShellReply(HELP_TEXT)
            case ":config":
                return ShellReply(self._describe_config())
            case ":toggle":
                try:
                    self.config = self.config.toggled(argument)
                except ValueError as exc:
                    return ShellReply(str(exc), error=True)
                state = "on" if getattr(self.config, argument) else "off"
                return ShellReply(f"{argument}: {state}")
            case ":all":
                self.config = TransformConfig.only(*SWITCHES)
                return ShellReply(self._describe_config())
            case ":none":
                self.config = TransformConfig.none()
                return ShellReply(self._describe_config())
            case ":symbols":
                return ShellReply(symbol_table())
            case _:
                return ShellReply(f"Unknown command {name}; type :help", error=True)

    def _describe_config(self) -> str:
        width = max(len(name) for name in SWITCHES)
        return "\n".join(
            f"{name:<{width}}  {'on' if getattr(self.config, name) else 'off'}" for name in SWITCHES
        )

    def _build_prompt(self) -> PromptSession[str]:
        self._history_file.parent.mkdir(parents=True, exist_ok=True)
        history = FileHistory(str(self._history_file))
        completer = WordCompleter([*self.COMMANDS, *SWITCHES], ignore_case=True)
        return PromptSession(completer=completer, complete_while_typing=False, history=history)
