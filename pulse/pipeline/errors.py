"""Job-level errors. Anything raised from here ends the run with a non-zero exit."""

from __future__ import annotations


class IngestFatalError(RuntimeError):
    """Base class for conditions that abort an indexing job."""


class NoInputFilesError(IngestFatalError):
    pass


class IndexCreationError(IngestFatalError):
    pass


class FinalCommitError(IngestFatalError):
    """The last commit failed; writes since the previous checkpoint may be lost."""
