"""RailOptic exception hierarchy.

Operator-facing failures are reported as ``Err`` values (see ``core.result``);
these exceptions cover programming and configuration errors only.
"""


class RailOpticError(Exception):
    """Root of all RailOptic domain exceptions."""


class InvalidTrainError(RailOpticError):
    """A train was constructed with out-of-range attributes."""


class DuplicateTrainError(RailOpticError):
    """Two trains in one registry share an id."""


class ConfigurationError(RailOpticError):
    """Invalid or missing configuration."""
