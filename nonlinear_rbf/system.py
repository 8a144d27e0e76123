"""
Augmented RBF system assembly.

Builds the saddle-point system
    [Phi 1] [w]   [values]
    [1.T 0] [c] = [0     ]
where Phi[i, j] = phi(points[i], points[j]) and the border of ones ties
the sample weights to a constant (affine) term c.

Uses NumPy buffers for assembly since the kernel is an arbitrary Python
callable over opaque points.
"""

import logging
from typing import Any, Callable, Sequence

import jax.numpy as jnp
import numpy as np
from tqdm import tqdm

from .exceptions import DimensionMismatchError
from .types import AugmentedSystem

logger = logging.getLogger(__name__)


def _stack_values(values: Sequence[Any]) -> np.ndarray:
    """Copy value vectors into a (n, d) float64 array, checking dimensions."""
    vectors = [np.atleast_1d(np.asarray(v, dtype=np.float64)) for v in values]

    for i, v in enumerate(vectors):
        if v.ndim != 1:
            raise DimensionMismatchError(
                f"Value {i} must be a scalar or 1-D vector, got shape {v.shape}"
            )

    dims = sorted({v.shape[0] for v in vectors})
    if len(dims) != 1:
        raise DimensionMismatchError(f"Value vectors have differing lengths: {dims}")
    if dims[0] == 0:
        raise DimensionMismatchError("Value vectors must have at least one component")

    return np.stack(vectors)


def build_augmented_system(
    phi: Callable[[Any, Any], Any],
    points: Sequence[Any],
    values: Sequence[Any],
    verbose: bool = False,
) -> AugmentedSystem | None:
    """
    Assemble the augmented RBF matrix and right-hand side.

    Parameters
    ----------
    phi : Callable
        Symmetric kernel ``phi(a, b) -> scalar``. Called once per
        unordered pair of points (including i == j).
    points : Sequence
        Sample points, length n.
    values : Sequence
        Sample value vectors, length n, each of common length d.
        Scalars are treated as length-1 vectors.
    verbose : bool
        Show progress bar while filling the kernel block.

    Returns
    -------
    AugmentedSystem | None
        matrix : shape (n+1, n+1)
        rhs : shape (n+1, d), copies of the values followed by a zero row
        None when no values are supplied.

    Raises
    ------
    DimensionMismatchError
        If points and values differ in length, or value vectors differ
        in length.
    """
    if len(values) == 0:
        return None

    rhs_values = _stack_values(values)
    n, d = rhs_values.shape

    if len(points) != n:
        raise DimensionMismatchError(
            f"Mismatch: {len(points)} points vs {n} values"
        )

    logger.debug("Assembling augmented system: n=%d, d=%d", n, d)

    matrix = np.zeros((n + 1, n + 1))

    rows = tqdm(range(n), desc="Assembling kernel block") if verbose else range(n)
    for i in rows:
        for j in range(i, n):
            phir = float(phi(points[i], points[j]))
            matrix[i, j] = phir
            matrix[j, i] = phir

    # Affine border, corner stays zero
    matrix[n, :n] = 1.0
    matrix[:n, n] = 1.0

    rhs = np.zeros((n + 1, d))
    rhs[:n] = rhs_values

    return AugmentedSystem(matrix=jnp.asarray(matrix), rhs=jnp.asarray(rhs))
