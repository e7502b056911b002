"""
Exception classes for goburden.

Every fatal condition is raised as a subclass of GoBurdenError so that the
command line front end can report it as a single message and a non-zero
exit status. Soft data-quality problems are logged, never raised.
"""

from typing import Dict, Iterable, Optional


class GoBurdenError(Exception):
    """Base exception for all goburden errors."""

    def __init__(self, message: str, details: Optional[Dict] = None):
        """Initialize goburden error.

        Parameters
        ----------
        message : str
            Error message
        details : dict, optional
            Additional error details
        """
        super().__init__(message)
        self.details = details or {}


class ConfigurationError(GoBurdenError):
    """Raised when required inputs or options are missing or invalid."""


class OntologySourceError(ConfigurationError):
    """Raised when an ontology file cannot be parsed."""

    def __init__(self, message: str, file_path: Optional[str] = None, line_number: Optional[int] = None):
        """Initialize ontology source error."""
        location = ""
        if file_path is not None:
            location = f" ({file_path}" + (f", line {line_number})" if line_number else ")")
        super().__init__(f"{message}{location}", {"file": file_path, "line": line_number})


class UnresolvableReferenceError(ConfigurationError):
    """Raised when ontology terms reference parents that can never be resolved."""

    def __init__(self, unresolved: Iterable[str], missing_targets: Iterable[str] = ()):
        """Initialize unresolvable reference error."""
        self.unresolved = sorted(unresolved)
        self.missing_targets = sorted(missing_targets)
        preview = ", ".join(self.unresolved[:10])
        if len(self.unresolved) > 10:
            preview += ", ..."
        message = f"{len(self.unresolved)} ontology term(s) have unresolvable parents: {preview}"
        if self.missing_targets:
            message += f" (targets absent from the ontology: {', '.join(self.missing_targets[:10])})"
        else:
            message += " (relation cycle)"
        super().__init__(
            message,
            {"unresolved": self.unresolved, "missing_targets": self.missing_targets},
        )


class GeneAssociationFormatError(ConfigurationError):
    """Raised when a gene association line is malformed."""

    def __init__(self, file_path: str, line_number: int, reason: str):
        """Initialize gene association format error."""
        message = f"{reason} in line {line_number} of {file_path}"
        super().__init__(message, {"file": file_path, "line": line_number})


class CohortError(ConfigurationError):
    """Raised when the case/control cohort cannot be used."""


class FileFormatError(GoBurdenError):
    """Raised when a file has an invalid format."""

    def __init__(self, file_path: str, expected_format: str, reason: str = ""):
        """Initialize file format error."""
        message = f"Invalid file format for {file_path}. Expected: {expected_format}"
        if reason:
            message += f" ({reason})"
        super().__init__(message, {"file": file_path, "expected_format": expected_format})


class MissingNodeError(GoBurdenError, LookupError):
    """Raised when a resolved ontology term has no node in the DAG."""

    def __init__(self, term_id: str):
        """Initialize missing node error."""
        super().__init__(f"No DAG node for ontology term '{term_id}'", {"term": term_id})
        self.term_id = term_id
