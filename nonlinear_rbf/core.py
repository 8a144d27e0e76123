"""
Core interpolant construction and evaluation.

Pure functional interface: ``build`` returns an immutable Interpolator,
evaluation never mutates it.
"""

import logging
from typing import Any, Callable, Sequence

import jax.numpy as jnp
from jax import Array

from .kernels import get_kernel
from .solver import solve_linear_system
from .system import build_augmented_system
from .types import BuildConfig, Interpolator

logger = logging.getLogger(__name__)


def build(
    kernel: Callable[[Any, Any], Any] | str,
    points: Sequence[Any],
    values: Sequence[Any],
    config: BuildConfig = BuildConfig(),
) -> Interpolator | None:
    """
    Build an RBF interpolant with a constant affine term.

    Parameters
    ----------
    kernel : Callable or str
        Symmetric kernel ``phi(a, b) -> scalar``, or a preset name
        ('r3_number', 'r3_vector', 'angle3_vector'). Must not be an even
        power of a distance.
    points : Sequence
        Sample points, length n.
    values : Sequence
        Sample value vectors, length n, each of common length d >= 1.
    config : BuildConfig
        Construction configuration.

    Returns
    -------
    Interpolator | None
        The interpolant, or None when no values are supplied.

    Raises
    ------
    DimensionMismatchError
        If points and values do not line up.
    SingularSystemError
        If the augmented system is singular (e.g. duplicate points).
    """
    phi = get_kernel(kernel) if isinstance(kernel, str) else kernel
    points = tuple(points)

    system = build_augmented_system(phi, points, values, verbose=config.verbose)
    if system is None:
        logger.debug("No sample values supplied, no interpolant built")
        return None

    weights = solve_linear_system(system.matrix, system.rhs, config.singular_rtol)

    interpolator = Interpolator(kernel=phi, points=points, weights=weights)
    logger.info(
        "Built RBF interpolant: %d samples, %d components",
        interpolator.n_samples,
        interpolator.dim,
    )
    return interpolator


def evaluate(interpolator: Interpolator, query: Any) -> Array:
    """
    Evaluate an interpolant at a single query point.

    Differentiable with respect to ``query`` when the kernel is written
    with jax.numpy.

    Parameters
    ----------
    interpolator : Interpolator
        Interpolant from build().
    query : Any
        Point compatible with the kernel's domain.

    Returns
    -------
    Array
        Interpolated value vector, shape (d,).
    """
    return interpolator.evaluate(query)


def evaluate_many(interpolator: Interpolator, queries: Sequence[Any]) -> Array:
    """
    Evaluate an interpolant at several query points.

    Parameters
    ----------
    interpolator : Interpolator
        Interpolant from build().
    queries : Sequence
        Query points, length m.

    Returns
    -------
    Array
        Interpolated values, shape (m, d).
    """
    results = [interpolator.evaluate(q) for q in queries]
    if not results:
        return jnp.zeros((0, interpolator.dim))
    return jnp.stack(results)
