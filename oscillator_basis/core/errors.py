"""
Exception hierarchy for basis generation and orbital selection.

Every error raised here marks an inconsistent request (bad configuration,
an undersized basis, or conflicting selection criteria). None of them are
transient, so callers propagate them instead of retrying.
"""


class BasisError(Exception):
    """Base class for all errors raised by oscillator_basis."""


class ConfigurationError(BasisError, ValueError):
    """Invalid or incomplete configuration input."""


class SizingError(BasisError, RuntimeError):
    """The basis could not be grown to the requested number of states."""


class SelectionError(BasisError, ValueError):
    """Selection criteria could not be resolved against a state catalog."""
