"""Tests for full-pivot Gauss-Jordan elimination."""

import jax
import jax.numpy as jnp
import pytest

from nonlinear_rbf.exceptions import DimensionMismatchError, SingularSystemError
from nonlinear_rbf.solver import eliminate, solve_linear_system
from nonlinear_rbf.types import EliminationResult


class TestSolveLinearSystem:
    """Test solutions of nonsingular systems."""

    def test_random_round_trip(self):
        """M @ X should reproduce Y for a random nonsingular system."""
        k1, k2 = jax.random.split(jax.random.PRNGKey(0))
        M = jax.random.normal(k1, (6, 6))
        Y = jax.random.normal(k2, (6, 3))

        X = solve_linear_system(M, Y)

        assert X.shape == (6, 3)
        assert jnp.allclose(M @ X, Y, atol=1e-10), f"Residual: {M @ X - Y}"

    def test_matches_direct_solve(self):
        """Solution order should match the original unknowns."""
        M = jnp.array([
            [1.0, 2.0, 3.0],
            [4.0, 5.0, 6.0],
            [7.0, 8.0, 10.0],
        ])
        Y = jnp.array([[1.0], [2.0], [3.0]])

        X = solve_linear_system(M, Y)

        assert jnp.allclose(X, jnp.linalg.solve(M, Y), atol=1e-12)

    def test_multiple_column_swaps(self):
        """Anti-diagonal dominant matrix forces a column swap at each step."""
        M = jnp.array([
            [0.5, 0.0, 0.0, 9.0],
            [0.0, 0.1, 7.0, 0.0],
            [0.0, 5.0, 0.2, 0.0],
            [3.0, 0.0, 0.0, 0.3],
        ])
        Y = jnp.array([
            [1.0, -1.0],
            [2.0, 0.5],
            [3.0, 2.0],
            [4.0, 0.0],
        ])

        X = solve_linear_system(M, Y)

        assert jnp.allclose(X, jnp.linalg.inv(M) @ Y, atol=1e-12)

    def test_columns_independent(self):
        """Each rhs column is solved as its own system."""
        k1, k2 = jax.random.split(jax.random.PRNGKey(1))
        M = jax.random.normal(k1, (5, 5))
        Y = jax.random.normal(k2, (5, 2))

        X = solve_linear_system(M, Y)
        X0 = solve_linear_system(M, Y[:, :1])
        X1 = solve_linear_system(M, Y[:, 1:])

        assert jnp.allclose(X[:, :1], X0, atol=1e-12)
        assert jnp.allclose(X[:, 1:], X1, atol=1e-12)

    def test_vector_rhs(self):
        """1-D rhs is treated as a single column."""
        M = jnp.array([[2.0, 1.0], [1.0, 3.0]])
        y = jnp.array([3.0, 5.0])

        X = solve_linear_system(M, y)

        assert X.shape == (2, 1)
        assert jnp.allclose(M @ X[:, 0], y, atol=1e-12)

    def test_does_not_modify_inputs(self):
        """Inputs are left untouched."""
        M = jnp.array([[0.0, 2.0], [3.0, 1.0]])
        Y = jnp.array([[1.0], [1.0]])
        M_before = M.copy()
        Y_before = Y.copy()

        solve_linear_system(M, Y)

        assert jnp.array_equal(M, M_before)
        assert jnp.array_equal(Y, Y_before)


class TestEliminate:
    """Test elimination diagnostics."""

    def test_returns_result(self):
        """Eliminate should return EliminationResult."""
        result = eliminate(jnp.eye(3), jnp.ones((3, 1)))

        assert isinstance(result, EliminationResult)
        assert result.rank == 3

    def test_reduces_to_identity(self):
        """Nonsingular matrix reduces to identity."""
        k1, k2 = jax.random.split(jax.random.PRNGKey(2))
        M = jax.random.normal(k1, (4, 4))
        Y = jax.random.normal(k2, (4, 1))

        result = eliminate(M, Y)

        assert jnp.allclose(result.reduced, jnp.eye(4), atol=1e-12)

    def test_pivot_trail(self):
        """Trail records the column swapped into each pivot position."""
        M = jnp.array([[1.0, 0.0], [0.0, 3.0]])
        Y = jnp.array([[1.0], [6.0]])

        result = eliminate(M, Y)

        assert result.pivot_trail.tolist() == [1, 1]
        assert jnp.allclose(result.solution[:, 0], jnp.array([1.0, 2.0]))

    def test_singular_rank(self):
        """Rank-deficient matrix stops elimination early."""
        M = jnp.array([[1.0, 2.0], [2.0, 4.0]])
        Y = jnp.array([[1.0], [2.0]])

        result = eliminate(M, Y)

        assert result.rank == 1

    def test_zero_matrix(self):
        """Zero matrix has no pivot at all."""
        result = eliminate(jnp.zeros((3, 3)), jnp.ones((3, 1)))

        assert result.rank == 0

    def test_singular_rtol(self):
        """Pivots below the relative threshold count as zero."""
        M = jnp.array([[1.0, 0.0], [0.0, 1e-8]])
        Y = jnp.array([[1.0], [1.0]])

        assert eliminate(M, Y).rank == 2
        assert eliminate(M, Y, singular_rtol=1e-6).rank == 1

    def test_non_square(self):
        """Matrix must be square."""
        with pytest.raises(DimensionMismatchError, match="square"):
            eliminate(jnp.ones((2, 3)), jnp.ones((2, 1)))

    def test_rhs_rows_mismatch(self):
        """Rhs must have one row per unknown."""
        with pytest.raises(DimensionMismatchError, match="Mismatch"):
            eliminate(jnp.eye(3), jnp.ones((2, 1)))


class TestSingularSystem:
    """Test singular system reporting."""

    def test_raises(self):
        """Singular system should raise instead of returning a partial solution."""
        M = jnp.array([[1.0, 2.0], [2.0, 4.0]])
        Y = jnp.array([[1.0], [2.0]])

        with pytest.raises(SingularSystemError) as excinfo:
            solve_linear_system(M, Y)

        assert excinfo.value.step == 1
        assert excinfo.value.size == 2

    def test_message(self):
        """Error message names the failing step."""
        with pytest.raises(SingularSystemError, match="step 0 of 2"):
            solve_linear_system(jnp.zeros((2, 2)), jnp.ones((2, 1)))
