"""
Tests for the dense linear algebra primitives and the matrix exponential.
"""

import warnings

import numpy as np
import pytest
from scipy.linalg import expm

from chains import build_generator_matrix
from compute import (
    gaussian_elimination, gauss_jordan_inverse, SingularMatrixError, matrix_exponential,
)
from compute.expm import infinity_norm, scaling_exponent


class TestGaussianElimination:

    def test_solves_system(self):
        a = np.array([[2.0, 1.0, -1.0], [-3.0, -1.0, 2.0], [-2.0, 1.0, 2.0]])
        b = np.array([8.0, -11.0, -3.0])

        x = gaussian_elimination(a, b)

        assert np.allclose(x, [2.0, 3.0, -1.0])

    def test_needs_pivoting(self):
        a = np.array([[0.0, 1.0], [1.0, 0.0]])
        x = gaussian_elimination(a, np.array([3.0, 4.0]))

        assert np.allclose(x, [4.0, 3.0])

    def test_singular_returns_none(self):
        a = np.array([[1.0, 2.0], [2.0, 4.0]])

        assert gaussian_elimination(a, np.array([1.0, 2.0])) is None

    def test_inputs_untouched(self):
        a = np.array([[4.0, 1.0], [1.0, 3.0]])
        b = np.array([1.0, 2.0])
        a_copy, b_copy = a.copy(), b.copy()

        gaussian_elimination(a, b)

        assert np.array_equal(a, a_copy)
        assert np.array_equal(b, b_copy)


class TestGaussJordanInverse:

    def test_inverse(self):
        rng = np.random.default_rng(3)
        a = rng.normal(size=(5, 5)) + 5 * np.eye(5)

        inv = gauss_jordan_inverse(a)

        assert np.allclose(inv @ a, np.eye(5), atol=1e-10)

    def test_singular_warns_and_skips(self):
        a = np.array([[1.0, 2.0], [2.0, 4.0]])

        with pytest.warns(RuntimeWarning):
            inv = gauss_jordan_inverse(a)

        assert inv.shape == (2, 2)

    def test_singular_strict_raises(self):
        a = np.zeros((3, 3))

        with pytest.raises(SingularMatrixError):
            gauss_jordan_inverse(a, raise_on_singular=True)


class TestMatrixExponential:

    def test_identity_at_zero(self, all_examples):
        for name, chain in all_examples.items():
            q = build_generator_matrix(chain)
            p = matrix_exponential(q, chain.states, 0.0)
            assert np.allclose(p, np.eye(chain.num_states), atol=1e-6), name

    def test_two_state_long_run(self, two_state):
        q = build_generator_matrix(two_state)

        p = matrix_exponential(q, two_state.states, 20.0)

        assert np.allclose(p, 0.5, atol=1e-3)

    def test_rows_stochastic(self, cycle):
        q = build_generator_matrix(cycle)

        for t in [0.1, 1.0, 5.0, 30.0]:
            p = matrix_exponential(q, cycle.states, t)
            assert np.allclose(p.sum(axis=1), 1.0, atol=1e-6)
            assert np.all(p > -1e-9)

    def test_semigroup(self, all_examples):
        for name, chain in all_examples.items():
            q = build_generator_matrix(chain)
            s, t = 0.7, 1.9
            combined = matrix_exponential(q, chain.states, s + t)
            product = matrix_exponential(q, chain.states, s) @ matrix_exponential(q, chain.states, t)
            assert np.allclose(combined, product, atol=1e-2), name

    def test_matches_scipy(self, cycle):
        q = build_generator_matrix(cycle)

        for t in [0.05, 0.5, 2.0]:
            assert np.allclose(matrix_exponential(q, cycle.states, t), expm(q * t), atol=1e-3)

    def test_no_warnings_for_valid_chain(self, cycle):
        q = build_generator_matrix(cycle)

        with warnings.catch_warnings():
            warnings.simplefilter('error')
            matrix_exponential(q, cycle.states, 3.0)

    def test_empty_chain(self):
        assert matrix_exponential(np.zeros((0, 0)), [], 1.0).shape == (0, 0)

    def test_scaling_exponent(self):
        assert scaling_exponent(0.0) == 0
        assert scaling_exponent(0.5) == 0
        assert scaling_exponent(1.0) == 0
        assert scaling_exponent(3.0) == 2
        assert scaling_exponent(40.0) == 6
        assert infinity_norm(np.array([[-1.0, 1.0], [2.0, -2.0]])) == 4.0
