"""
RBF kernel presets and dispatcher.

Preset kernels (all odd powers of a distance):
- r3_number: phi(a, b) = |b - a|³ for scalars
- r3_vector: phi(a, b) = ||b - a||³ for vectors
- angle3_vector: phi(a, b) = angle(a, b)³ for 3D directions

Any symmetric callable ``phi(a, b) -> scalar`` can be used instead.
Never use an even power of a distance: the kernel block of the
augmented system becomes singular.
"""

from enum import Enum
from typing import Any, Callable, Sequence

import jax.numpy as jnp
from jax import Array


class KernelType(str, Enum):
    """Preset kernel names."""

    R3_NUMBER = "r3_number"
    R3_VECTOR = "r3_vector"
    ANGLE3_VECTOR = "angle3_vector"


def r3_number(a: float, b: float) -> Array:
    """
    Cubic distance between scalars.

    phi(a, b) = |b - a|³
    """
    return jnp.abs(jnp.asarray(b) - jnp.asarray(a)) ** 3


def r3_vector(a: Array, b: Array) -> Array:
    """
    Cubic Euclidean distance between vectors.

    phi(a, b) = ||b - a||³

    Notes
    -----
    Uses the squared distance to avoid the sqrt gradient singularity at
    coincident points.
    """
    diff = jnp.asarray(b) - jnp.asarray(a)
    return jnp.power(jnp.sum(diff**2), 1.5)


def angle3_vector(a: Array, b: Array) -> Array:
    """
    Cubic angle between 3D direction vectors.

    phi(a, b) = angle(a, b)³, angle in radians in [0, pi].

    Parameters
    ----------
    a, b : Array
        Vectors of shape (3,). Need not be normalized.

    Returns
    -------
    Array
        Scalar kernel value.
    """
    a = jnp.asarray(a)
    b = jnp.asarray(b)
    # atan2 form stays accurate for nearly parallel vectors
    angle = jnp.arctan2(jnp.linalg.norm(jnp.cross(a, b)), jnp.dot(a, b))
    return angle**3


PHI_DEFAULTS = {
    KernelType.R3_NUMBER: r3_number,
    KernelType.R3_VECTOR: r3_vector,
    KernelType.ANGLE3_VECTOR: angle3_vector,
}


def get_kernel(kernel: str) -> Callable[[Any, Any], Array]:
    """
    Look up a preset kernel by name.

    Parameters
    ----------
    kernel : str
        Kernel name: 'r3_number', 'r3_vector' or 'angle3_vector'.

    Returns
    -------
    Callable
        Kernel function ``phi(a, b)``.

    Raises
    ------
    ValueError
        If kernel name is not recognized.
    """
    kernel_type = KernelType(kernel)

    if kernel_type == KernelType.R3_NUMBER:
        return r3_number
    elif kernel_type == KernelType.R3_VECTOR:
        return r3_vector
    elif kernel_type == KernelType.ANGLE3_VECTOR:
        return angle3_vector
    else:
        raise ValueError(f"Unknown kernel type: {kernel}")


def kernel_row(
    phi: Callable[[Any, Any], Any],
    points: Sequence[Any],
    query: Any,
) -> Array:
    """
    Evaluate a kernel between a query point and every sample point.

    Parameters
    ----------
    phi : Callable
        Kernel function.
    points : Sequence
        Sample points, length n.
    query : Any
        Query point.

    Returns
    -------
    Array
        Kernel values ``[phi(query, points[i])]``, shape (n,).
    """
    return jnp.stack([jnp.asarray(phi(query, p), dtype=jnp.float64) for p in points])
