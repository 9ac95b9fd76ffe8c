"""Diagnostic issue and result types."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Severity(str, Enum):
    """Severity level of a diagnostic."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass
class ValidationIssue:
    """A single problem found in a scenario or network."""

    code: str
    message: str
    severity: Severity
    node: str | None = None
    edge: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def location(self) -> str:
        """Where the issue was found, e.g. ``[depot]`` or ``[depot->clinic]``."""
        if self.edge:
            return f"[{self.edge}]"
        if self.node:
            return f"[{self.node}]"
        return ""

    def __str__(self) -> str:
        location = f" {self.location}" if self.location else ""
        return f"{self.severity.value.upper()}: {self.code}{location} - {self.message}"


@dataclass
class ValidationResult:
    """All issues collected by one or more checks."""

    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.WARNING]

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    @property
    def is_valid(self) -> bool:
        """True when no error-level issue was found."""
        return not self.has_errors

    def codes(self) -> list[str]:
        return [i.code for i in self.issues]

    def add_error(
        self,
        code: str,
        message: str,
        node: str | None = None,
        edge: str | None = None,
        **details: Any,
    ) -> None:
        self._add(Severity.ERROR, code, message, node, edge, details)

    def add_warning(
        self,
        code: str,
        message: str,
        node: str | None = None,
        edge: str | None = None,
        **details: Any,
    ) -> None:
        self._add(Severity.WARNING, code, message, node, edge, details)

    def merge(self, other: "ValidationResult") -> None:
        """Merge another result into this one."""
        self.issues.extend(other.issues)

    def _add(
        self,
        severity: Severity,
        code: str,
        message: str,
        node: str | None,
        edge: str | None,
        details: dict[str, Any],
    ) -> None:
        self.issues.append(
            ValidationIssue(
                code=code,
                message=message,
                severity=severity,
                node=node,
                edge=edge,
                details=details,
            )
        )
