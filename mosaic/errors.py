"""Error types raised by the mosaic assembly engine."""

from __future__ import annotations


class MosaicError(ValueError):
    """Base class for all mosaic assembly failures."""


class FormatError(MosaicError):
    """A tile or pattern block is malformed (dimensions or alphabet)."""


class InconsistentInputError(MosaicError):
    """Tiles do not describe a single square mosaic."""


class UnsolvableError(MosaicError):
    """Assembly search exhausted every branch without completing the grid."""
