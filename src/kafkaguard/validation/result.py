"""Validation result model for kafkaguard.

A ValidationResult is an append-only log of errors and warnings with a derived
verdict: it is valid exactly when it holds no errors. Warnings are advisory and
never affect validity. Results compose with ``merge``, which concatenates both
logs in call order.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ValidationErrorType(str, Enum):
    """Blocking error taxonomy."""
    MISSING_REQUIRED = "missing_required"
    INVALID_VALUE = "invalid_value"
    OUT_OF_RANGE = "out_of_range"
    INVALID_CHOICE = "invalid_choice"
    INVALID_CLASS = "invalid_class"
    INVALID_FORMAT = "invalid_format"
    GENERAL = "general"


class ValidationWarningType(str, Enum):
    """Advisory warning taxonomy."""
    PERFORMANCE = "performance"
    SECURITY = "security"
    DEPRECATED = "deprecated"
    BEST_PRACTICE = "best_practice"
    RELIABILITY = "reliability"
    GENERAL = "general"


def _has_text(value: str | None) -> bool:
    return value is not None and bool(value.strip())


def _format(property_name: str | None, message: str, suggestion: str | None) -> str:
    text = f"[{property_name}] {message}" if property_name is not None else message
    if _has_text(suggestion):
        text += f" Suggestion: {suggestion}"
    return text


@dataclass(frozen=True)
class ValidationError:
    """A single blocking validation failure.

    Identity is (property_name, message, type): two errors that differ only in
    suggestion or in the actual/expected values compare and hash equal.
    """
    property_name: str | None
    message: str
    type: ValidationErrorType = ValidationErrorType.GENERAL
    suggestion: str | None = field(default=None, compare=False)
    actual_value: Any = field(default=None, compare=False)
    expected_value: Any = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.type is None:
            object.__setattr__(self, "type", ValidationErrorType.GENERAL)

    @property
    def has_suggestion(self) -> bool:
        return _has_text(self.suggestion)

    @property
    def formatted_message(self) -> str:
        """Message prefixed with the property name and followed by the suggestion."""
        return _format(self.property_name, self.message, self.suggestion)

    def to_dict(self) -> dict:
        return {
            "property": self.property_name,
            "type": self.type.value,
            "message": self.message,
            "suggestion": self.suggestion,
            "actual": _jsonable(self.actual_value),
            "expected": _jsonable(self.expected_value),
        }

    def __str__(self) -> str:
        return self.formatted_message

    @classmethod
    def missing_required(cls, property_name: str) -> "ValidationError":
        return cls(
            property_name,
            "Required property is missing",
            ValidationErrorType.MISSING_REQUIRED,
            "Please provide a value for this required property",
        )

    @classmethod
    def invalid_value(cls, property_name: str, actual_value: Any, expected_value: Any) -> "ValidationError":
        return cls(
            property_name,
            f"Invalid value: {actual_value}",
            ValidationErrorType.INVALID_VALUE,
            f"Expected: {expected_value}",
            actual_value,
            expected_value,
        )

    @classmethod
    def out_of_range(cls, property_name: str, actual_value: Any,
                     min_value: Any, max_value: Any) -> "ValidationError":
        return cls(
            property_name,
            f"Value {actual_value} is out of range",
            ValidationErrorType.OUT_OF_RANGE,
            f"Value must be between {min_value} and {max_value}",
            actual_value,
            f"{min_value} - {max_value}",
        )


@dataclass(frozen=True)
class ValidationWarning:
    """An advisory finding; same identity rules as ValidationError."""
    property_name: str | None
    message: str
    type: ValidationWarningType = ValidationWarningType.GENERAL
    suggestion: str | None = field(default=None, compare=False)
    actual_value: Any = field(default=None, compare=False)
    expected_value: Any = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.type is None:
            object.__setattr__(self, "type", ValidationWarningType.GENERAL)

    @property
    def has_suggestion(self) -> bool:
        return _has_text(self.suggestion)

    @property
    def formatted_message(self) -> str:
        return _format(self.property_name, self.message, self.suggestion)

    def to_dict(self) -> dict:
        return {
            "property": self.property_name,
            "type": self.type.value,
            "message": self.message,
            "suggestion": self.suggestion,
            "actual": _jsonable(self.actual_value),
            "expected": _jsonable(self.expected_value),
        }

    def __str__(self) -> str:
        return self.formatted_message

    @classmethod
    def performance(cls, property_name: str, message: str, suggestion: str) -> "ValidationWarning":
        return cls(property_name, message, ValidationWarningType.PERFORMANCE, suggestion)

    @classmethod
    def security(cls, property_name: str, message: str, suggestion: str) -> "ValidationWarning":
        return cls(property_name, message, ValidationWarningType.SECURITY, suggestion)

    @classmethod
    def reliability(cls, property_name: str, message: str, suggestion: str) -> "ValidationWarning":
        return cls(property_name, message, ValidationWarningType.RELIABILITY, suggestion)

    @classmethod
    def best_practice(cls, property_name: str, message: str, suggestion: str) -> "ValidationWarning":
        return cls(property_name, message, ValidationWarningType.BEST_PRACTICE, suggestion)

    @classmethod
    def deprecated(cls, property_name: str, replacement: str) -> "ValidationWarning":
        return cls(
            property_name,
            "Property is deprecated",
            ValidationWarningType.DEPRECATED,
            f"Use {replacement} instead",
        )


def _jsonable(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


@dataclass
class ValidationResult:
    """Errors and warnings produced by one or more validation rules."""
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    def __post_init__(self) -> None:
        # Never alias caller-owned lists
        self.errors = list(self.errors or [])
        self.warnings = list(self.warnings or [])

    def add_error(self, error: ValidationError | None) -> None:
        """Append an error; None is ignored."""
        if error is not None:
            self.errors.append(error)

    def add_warning(self, warning: ValidationWarning | None) -> None:
        """Append a warning; None is ignored."""
        if warning is not None:
            self.warnings.append(warning)

    def merge(self, other: "ValidationResult | None") -> "ValidationResult":
        """Append every error and warning of ``other`` to this result.

        Returns this result so merges can be chained.
        """
        if other is not None:
            # Snapshot first so that merging a result into itself terminates
            self.errors.extend(list(other.errors))
            self.warnings.extend(list(other.warnings))
        return self

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    @property
    def total_issues(self) -> int:
        return len(self.errors) + len(self.warnings)

    @property
    def recovery_suggestions(self) -> list[str]:
        """Non-blank suggestions from errors then warnings, first occurrence kept."""
        suggestions: list[str] = []
        for issue in [*self.errors, *self.warnings]:
            if issue.has_suggestion and issue.suggestion not in suggestions:
                suggestions.append(issue.suggestion)
        return suggestions

    def detailed_message(self, title: str = "Configuration validation result") -> str:
        """Render errors, warnings and suggestions as numbered sections.

        Empty sections are omitted.
        """
        lines = [title]

        sections = [
            ("Errors", [error.formatted_message for error in self.errors]),
            ("Warnings", [warning.formatted_message for warning in self.warnings]),
            ("Suggestions", self.recovery_suggestions),
        ]
        for heading, entries in sections:
            if not entries:
                continue
            lines.append("")
            lines.append(f"{heading}:")
            for index, entry in enumerate(entries, start=1):
                lines.append(f"  {index}. {entry}")

        return "\n".join(lines)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "valid": self.is_valid,
            "errors": [error.to_dict() for error in self.errors],
            "warnings": [warning.to_dict() for warning in self.warnings],
            "suggestions": self.recovery_suggestions,
        }

    def __str__(self) -> str:
        return (
            f"ValidationResult(errors={len(self.errors)}, "
            f"warnings={len(self.warnings)}, valid={self.is_valid})"
        )

    @classmethod
    def success(cls) -> "ValidationResult":
        """An empty result, the identity for merge."""
        return cls()

    @classmethod
    def error(cls, error: ValidationError) -> "ValidationResult":
        result = cls()
        result.add_error(error)
        return result

    @classmethod
    def warning(cls, warning: ValidationWarning) -> "ValidationResult":
        result = cls()
        result.add_warning(warning)
        return result
