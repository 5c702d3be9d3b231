"""
Terminal output and diagnostic bookkeeping.

The Reporter only prints. Diagnostics records every problem found during a
merge, prints it as soon as it is recorded, and decides whether the merged
schema may be written.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import click


class Reporter:
    """Colored console output for progress, warnings, results and errors."""

    def __init__(self, err: bool = False):
        """
        Args:
            err: Send everything to stderr instead of stdout
        """
        self.err = err

    def progress(self, message: str) -> None:
        click.secho(message, fg="bright_black", err=self.err)

    def warning(self, message: str) -> None:
        click.secho(message, fg="bright_yellow", err=self.err)

    def result(self, message: str) -> None:
        click.echo(message, err=self.err)

    def error(self, message: str) -> None:
        click.secho(message, fg="bright_red", err=self.err)


class DiagnosticKind(Enum):
    SCHEMA_VALIDATION = "schema-validation"
    ROLE_USAGE = "role-usage"
    MISSING_TYPE = "missing-type"
    PARSE = "parse"


@dataclass
class Diagnostic:
    """A single recorded problem."""

    kind: DiagnosticKind
    message: str
    type_name: str | None = None  # Type the problem is reported against


@dataclass
class Diagnostics:
    """Error accumulator threaded through every pipeline stage.

    Attributes:
        reporter: Where recorded diagnostics are printed
        records: Diagnostics in the order they were found
        missing_types: Type names already reported as missing
    """

    reporter: Reporter = field(default_factory=Reporter)
    records: list[Diagnostic] = field(default_factory=list)
    missing_types: set[str] = field(default_factory=set)

    @property
    def failed(self) -> bool:
        return bool(self.records)

    def record(self, diagnostic: Diagnostic, text: str) -> None:
        self.records.append(diagnostic)
        self.reporter.error(text)

    def schema_error(self, data_path: str, message: str, type_name: str | None = None) -> None:
        """Record one error reported by the umbrella meta-schema validator."""
        self.record(
            Diagnostic(DiagnosticKind.SCHEMA_VALIDATION, f"{data_path} {message}", type_name),
            f"  {data_path} {message}",
        )

    def role_error(self, type_name: str, message: str) -> None:
        self.record(Diagnostic(DiagnosticKind.ROLE_USAGE, message, type_name), f"{type_name}: {message}")

    def missing(self, type_name: str) -> None:
        """Record a reference to a type that was never loaded, once per name."""
        if type_name in self.missing_types:
            return
        self.missing_types.add(type_name)
        self.record(
            Diagnostic(DiagnosticKind.MISSING_TYPE, f"Missing {type_name} schema file from merge.", type_name),
            f"Missing {type_name} schema file from merge.",
        )

    def thrown(self, error: Exception, type_name: str | None = None) -> None:
        """Record an exception raised while loading one input file."""
        self.record(Diagnostic(DiagnosticKind.PARSE, str(error), type_name), f"  {error}")

    def of_kind(self, kind: DiagnosticKind) -> list[Diagnostic]:
        return [d for d in self.records if d.kind is kind]
