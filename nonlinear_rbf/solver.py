"""
Dense linear solve by full-pivot Gauss-Jordan elimination.

Solves M @ X = Y for square M and a block of right-hand sides Y. At each
step the largest remaining entry (over all unprocessed rows and all
columns) is moved into the pivot position by a row swap and a column
swap. Slower than partial pivoting, but error stays low for the small
systems RBF interpolation produces.
"""

import logging

import jax
import jax.numpy as jnp
from jax import Array

from .exceptions import DimensionMismatchError, SingularSystemError
from .types import EliminationResult

logger = logging.getLogger(__name__)


def _swap(index: Array, a, b) -> Array:
    """Permutation of ``index`` exchanging positions a and b."""
    return index.at[a].set(b).at[b].set(a)


@jax.jit
def _eliminate_impl(
    matrix: Array,
    rhs: Array,
    singular_rtol: float,
) -> tuple[Array, Array, Array, Array]:
    """Core elimination loop for JIT compilation."""
    size = matrix.shape[0]
    index = jnp.arange(size)
    threshold = singular_rtol * jnp.max(jnp.abs(matrix))

    def pivot_step(dag, carry):
        reduced, solution, trail, rank = carry
        dag = jnp.asarray(dag).astype(index.dtype)

        # Full pivot search over rows dag.. and every column
        candidates = jnp.where((index >= dag)[:, None], jnp.abs(reduced), 0.0)
        flat = jnp.argmax(candidates)
        pivot_row = (flat // size).astype(index.dtype)
        pivot_col = (flat % size).astype(index.dtype)

        # Once a step fails, every later step is a no-op
        found = (rank == dag) & (candidates[pivot_row, pivot_col] > threshold)

        def reduce_step(carry):
            reduced, solution, trail, rank = carry

            row_order = _swap(index, dag, pivot_row)
            reduced = reduced[row_order]
            solution = solution[row_order]

            # Columns are unknowns; the rhs columns are independent systems
            col_order = _swap(index, dag, pivot_col)
            reduced = reduced[:, col_order]
            trail = trail.at[dag].set(pivot_col)

            pivot_value = reduced[dag, dag]
            unit_row = reduced[dag] / pivot_value
            unit_rhs = solution[dag] / pivot_value

            factors = reduced[:, dag].at[dag].set(0.0)
            reduced = reduced.at[dag].set(unit_row) - factors[:, None] * unit_row[None, :]
            solution = solution.at[dag].set(unit_rhs) - factors[:, None] * unit_rhs[None, :]

            return reduced, solution, trail, rank + 1

        return jax.lax.cond(found, reduce_step, lambda carry: carry, carry)

    init = (matrix, rhs, index, jnp.zeros((), dtype=index.dtype))
    reduced, solution, trail, rank = jax.lax.fori_loop(0, size, pivot_step, init)

    # Undo column swaps on the solution rows, last swap first
    def unpermute(k, solution):
        step = jnp.asarray(size - 1 - k).astype(index.dtype)
        return solution[_swap(index, step, trail[step])]

    solution = jax.lax.fori_loop(0, size, unpermute, solution)

    return reduced, solution, trail, rank


def eliminate(
    matrix: Array,
    rhs: Array,
    singular_rtol: float = 1e-12,
) -> EliminationResult:
    """
    Run full-pivot Gauss-Jordan elimination without raising on singularity.

    Parameters
    ----------
    matrix : Array
        Square system matrix, shape (m, m).
    rhs : Array
        Right-hand sides, shape (m, d) or (m,).
    singular_rtol : float
        A pivot with magnitude <= singular_rtol * max|matrix| is treated
        as zero and stops elimination.

    Returns
    -------
    EliminationResult
        Reduced matrix, solution of shape (m, d), pivot trail and rank.
        When ``rank < m`` the system is singular and the solution rows are
        not meaningful.

    Raises
    ------
    DimensionMismatchError
        If matrix is not square or rhs row count differs.
    """
    matrix = jnp.asarray(matrix, dtype=jnp.float64)
    rhs = jnp.asarray(rhs, dtype=jnp.float64)
    if rhs.ndim == 1:
        rhs = rhs[:, None]

    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise DimensionMismatchError(f"Matrix must be square, got shape {matrix.shape}")
    if rhs.ndim != 2 or rhs.shape[0] != matrix.shape[0]:
        raise DimensionMismatchError(
            f"Mismatch: rhs shape {rhs.shape} vs matrix shape {matrix.shape}"
        )

    reduced, solution, trail, rank = _eliminate_impl(matrix, rhs, singular_rtol)

    return EliminationResult(
        reduced=reduced,
        solution=solution,
        pivot_trail=trail,
        rank=int(rank),
    )


def solve_linear_system(
    matrix: Array,
    rhs: Array,
    singular_rtol: float = 1e-12,
) -> Array:
    """
    Solve M @ X = Y by full-pivot Gauss-Jordan elimination.

    Parameters
    ----------
    matrix : Array
        Square system matrix, shape (m, m).
    rhs : Array
        Right-hand sides, shape (m, d) or (m,).
    singular_rtol : float
        Relative pivot threshold, see ``eliminate``.

    Returns
    -------
    Array
        Solution X, shape (m, d).

    Raises
    ------
    SingularSystemError
        If no usable pivot is found before the system is fully reduced.
    """
    result = eliminate(matrix, rhs, singular_rtol)
    size = result.solution.shape[0]

    if result.rank < size:
        logger.warning(
            "Elimination halted at step %d of %d: no pivot above threshold",
            result.rank,
            size,
        )
        raise SingularSystemError(step=result.rank, size=size)

    logger.debug("Solved %dx%d system with %d right-hand sides", size, size, result.solution.shape[1])
    return result.solution
