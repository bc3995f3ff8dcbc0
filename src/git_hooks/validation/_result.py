from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

Level = Literal["error", "warning"]


@dataclass(frozen=True)
class ValidationIssue:
    level: Level
    path: str  # YAML path such as hooks[0].on_event[1]
    message: str

    def __str__(self) -> str:
        return f"{self.level}: {self.path}: {self.message}"


@dataclass
class ValidationResult:
    """Findings collected while checking a hooks document.

    Warnings never make a document invalid; a single error does.
    """

    issues: list[ValidationIssue] = field(default_factory=list)

    def error(self, path: str, message: str) -> None:
        self.issues.append(ValidationIssue("error", path, message))

    def warning(self, path: str, message: str) -> None:
        self.issues.append(ValidationIssue("warning", path, message))

    def _of(self, level: Level) -> list[ValidationIssue]:
        return [i for i in self.issues if i.level == level]

    @property
    def errors(self) -> list[ValidationIssue]:
        return self._of("error")

    @property
    def warnings(self) -> list[ValidationIssue]:
        return self._of("warning")

    @property
    def valid(self) -> bool:
        return not self.errors

    def extend(self, other: ValidationResult) -> ValidationResult:
        return ValidationResult(issues=[*self.issues, *other.issues])
