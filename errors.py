"""Failure taxonomy for the fetch/clean/validate pipeline.

Validation problems are not exceptions: `validator.validate` returns a
`models.ValidationFailure` value instead.
"""

from __future__ import annotations


class PipelineError(RuntimeError):
    """Base class for recoverable pipeline failures."""


class TransportError(PipelineError):
    """Network failure, non-success status, timeout or missing credentials."""


class ParseError(PipelineError):
    """Cleaned text (or a feed payload) could not be turned into structured data."""
