"""Exceptions raised by agldt."""

from __future__ import annotations

from typing import Optional


class AgldtError(Exception):
    """Base class for agldt errors."""


class StructuralError(AgldtError, ValueError):
    """The normalized markup does not match the expected treebank shape."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        if path:
            message = f"{path}: {message}"
        super().__init__(message)


class DefinitionFault(AgldtError):
    """A feature type or tagset definition is inconsistent.

    This is a programmer error in the feature definitions, never a data error.
    """


class AggregationPreconditionError(AssertionError):
    """Concordance entries with different lemmas were merged."""
