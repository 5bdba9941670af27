"""
paretomerge exception hierarchy.

Every error carries a human-readable message, an optional suggestion and a
details dict. All paretomerge exceptions inherit from ParetoMergeError so the
command line can report them uniformly.

Example:
    try:
        report = merge_files(paths, shape, rule, "merged.set")
    except ParetoMergeError as e:
        print(f"Merge failed: {e}")
"""

from __future__ import annotations

from typing import Any


class ParetoMergeError(Exception):
    """
    Base exception for all paretomerge errors.

    Attributes:
        message: Human-readable error description
        suggestion: Optional suggestion for fixing the error
        details: Optional dict with additional context
    """

    stage = "merge"

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the full error message with suggestion."""
        msg = self.message
        if self.suggestion:
            msg += f"\n\nSuggestion: {self.suggestion}"
        return msg


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(ParetoMergeError):
    """Raised when options are malformed, missing, or conflicting."""

    stage = "configuration"


class InvalidEpsilonError(ConfigurationError):
    """Raised when an epsilon vector cannot be used for epsilon-box dominance."""

    def __init__(self, message: str, epsilon: Any = None) -> None:
        suggestion = "Pass comma-separated positive reals, e.g. --epsilon 0.01,0.05"
        super().__init__(message, suggestion, {"epsilon": epsilon})


# =============================================================================
# Runtime Errors
# =============================================================================


class DimensionMismatchError(ParetoMergeError):
    """Raised when a candidate's vector lengths disagree with the session shape."""

    stage = "ingestion"

    def __init__(
        self,
        message: str,
        expected: int | None = None,
        actual: int | None = None,
        path: str | None = None,
    ) -> None:
        suggestion = "Check --vars and --dimension (or --problem) against the input files"
        super().__init__(message, suggestion, {"expected": expected, "actual": actual, "path": path})


# =============================================================================
# Data/IO Errors
# =============================================================================


class SourceReadError(ParetoMergeError):
    """Raised when a source cannot be opened or one of its records cannot be decoded."""

    stage = "reading"

    def __init__(self, message: str, path: str | None = None, line: int | None = None) -> None:
        suggestion = "The result file may be corrupted or truncated."
        super().__init__(message, suggestion, {"path": path, "line": line})


class SinkWriteError(ParetoMergeError):
    """Raised when the merged set cannot be persisted."""

    stage = "writing"

    def __init__(self, message: str, path: str | None = None) -> None:
        suggestion = "Check that the output directory exists and is writable, or pick another --output."
        super().__init__(message, suggestion, {"path": path})


__all__ = [
    "ParetoMergeError",
    "ConfigurationError",
    "InvalidEpsilonError",
    "DimensionMismatchError",
    "SourceReadError",
    "SinkWriteError",
]
