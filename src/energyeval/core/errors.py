"""
Exception hierarchy for energy evaluation.

All errors are raised synchronously to the caller of the energy query,
before any pair energy is computed where the failure is a precondition.
"""


class EnergyEvalError(Exception):
    """Base class for all energyeval errors."""


class ConfigurationMismatch(EnergyEvalError, ValueError):
    """
    Component counts, frozen mask and potential disagree.

    Raised when list lengths or the composite matrix dimension do not
    line up, or when the counts do not cover the system.
    """

    @classmethod
    def lengths(cls, name_a: str, len_a: int, name_b: str, len_b: int) -> "ConfigurationMismatch":
        """Build the error for two quantities of different length."""
        return cls(
            f"Length of {name_a} ({len_a}) does not match "
            f"length of {name_b} ({len_b})"
        )


class UnsupportedGeometry(EnergyEvalError, ValueError):
    """Cell or periodicity that the distance computation cannot handle."""


class BackendFailure(EnergyEvalError, RuntimeError):
    """The external energy calculator failed or returned garbage."""
