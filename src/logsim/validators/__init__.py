"""Validators for emitted log events."""

from .event_validator import EventValidator, ValidationError, ValidationResult, ValidationSeverity

__all__ = [
    "EventValidator",
    "ValidationError",
    "ValidationResult",
    "ValidationSeverity",
]
