"""
Data structures for nonlinear RBF interpolation.

All types are immutable NamedTuples.
"""

from typing import Any, Callable, NamedTuple

import jax
from jax import Array

from .kernels import kernel_row


class BuildConfig(NamedTuple):
    """Immutable interpolant construction configuration."""

    singular_rtol: float = 1e-12  # Pivots <= singular_rtol * max|M| count as zero
    verbose: bool = False  # Progress bar while filling the kernel block


class AugmentedSystem(NamedTuple):
    """Augmented RBF system ready for elimination."""

    matrix: Array  # Kernel block bordered by the affine constraint (n+1, n+1)
    rhs: Array  # Sample values followed by a zero row (n+1, d)


class EliminationResult(NamedTuple):
    """Output of full-pivot Gauss-Jordan elimination."""

    reduced: Array  # Matrix after elimination, identity when nonsingular
    solution: Array  # Solution rows in original unknown order (n+1, d)
    pivot_trail: Array  # Column swapped into pivot position at each step (n+1,)
    rank: int  # Number of completed elimination steps


class Interpolator(NamedTuple):
    """
    Immutable RBF interpolant.

    Evaluates ``offset + sum_i kernel(query, points[i]) * sample_weights[i]``.
    Evaluation never mutates state, so one instance can be shared across
    threads.
    """

    kernel: Callable[[Any, Any], Any]  # Symmetric radial basis function
    points: tuple  # Sample points, in construction order
    weights: Array  # Solved weights (n+1, d); last row is the affine offset

    @property
    def n_samples(self) -> int:
        return len(self.points)

    @property
    def dim(self) -> int:
        """Length of the value vectors produced by evaluation."""
        return self.weights.shape[1]

    @property
    def sample_weights(self) -> Array:
        return self.weights[:-1]

    @property
    def offset(self) -> Array:
        return self.weights[-1]

    def evaluate(self, query: Any) -> Array:
        """
        Evaluate the interpolant at a single query point.

        Parameters
        ----------
        query : Any
            Point compatible with the kernel's domain.

        Returns
        -------
        Array
            Interpolated value vector, shape (d,).
        """
        with jax.profiler.TraceAnnotation("Interpolator.evaluate"):
            row = kernel_row(self.kernel, self.points, query)
            return self.offset + row @ self.sample_weights

    def __call__(self, query: Any) -> Array:
        return self.evaluate(query)
