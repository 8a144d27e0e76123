"""Exceptions raised while building an RBF interpolant."""


class InterpolationError(Exception):
    """Base exception for all interpolant construction errors."""

    pass


class DimensionMismatchError(InterpolationError, ValueError):
    """
    Raised when sample points and values do not line up.

    Either the point and value lists differ in length, or the value
    vectors do not share a common, non-zero length.
    """

    pass


class SingularSystemError(InterpolationError):
    """
    Raised when elimination finds no usable pivot.

    Typical causes are duplicated sample points or a kernel that makes
    the augmented system rank deficient.

    Attributes
    ----------
    step : int
        Zero-based elimination step at which no pivot was found. Equal to
        the number of pivots that were successfully eliminated.
    size : int
        Dimension of the square system.
    """

    def __init__(self, step: int, size: int):
        self.step = step
        self.size = size
        super().__init__(
            f"Singular system: no pivot found at step {step} of {size} "
            f"(rank {step}). Check for duplicate sample points."
        )
