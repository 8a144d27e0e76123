"""
Nonlinear RBF: scattered-data interpolation with radial basis functions.

Builds ``f(p) = c + sum_i phi(p, p_i) * w_i`` from samples (p_i -> v_i),
solving the augmented system by full-pivot Gaussian elimination.

Usage
-----
>>> import nonlinear_rbf
>>> import jax.numpy as jnp
>>>
>>> points = [jnp.array([0.0, 0.0, 0.0]), jnp.array([1.0, 0.0, 0.0]),
...           jnp.array([0.0, 1.0, 0.0]), jnp.array([1.0, 1.0, 0.0])]
>>> values = [[1.0], [2.0], [3.0], [4.0]]
>>> interp = nonlinear_rbf.build(nonlinear_rbf.r3_vector, points, values)
>>> interp(jnp.array([0.5, 0.5, 0.0]))  # ~ [2.5]
>>>
>>> # Autodiff with respect to the query point
>>> import jax
>>> grad_fn = jax.grad(lambda p: interp(p)[0])
>>> gradient = grad_fn(jnp.array([0.5, 0.5, 0.0]))
"""

import jax

# Enable float64 for numerical stability of the elimination
jax.config.update("jax_enable_x64", True)

from .core import build, evaluate, evaluate_many
from .exceptions import DimensionMismatchError, InterpolationError, SingularSystemError
from .kernels import PHI_DEFAULTS, KernelType, angle3_vector, get_kernel, r3_number, r3_vector
from .solver import eliminate, solve_linear_system
from .system import build_augmented_system
from .types import AugmentedSystem, BuildConfig, EliminationResult, Interpolator

try:
    from importlib.metadata import version

    __version__ = version("nonlinear_rbf")
except Exception:
    __version__ = "unknown"

__all__ = [
    # Core functions
    "build",
    "evaluate",
    "evaluate_many",
    # Building blocks
    "build_augmented_system",
    "eliminate",
    "solve_linear_system",
    # Kernels
    "KernelType",
    "PHI_DEFAULTS",
    "get_kernel",
    "r3_number",
    "r3_vector",
    "angle3_vector",
    # Types
    "AugmentedSystem",
    "BuildConfig",
    "EliminationResult",
    "Interpolator",
    # Errors
    "InterpolationError",
    "DimensionMismatchError",
    "SingularSystemError",
]
