"""
Foundation module tests: field.py, hypercube.py, polynomial.py
"""
import random

import pytest

from zkfold.multifolding.field import (
    FR, CURVE_ORDER, G1, Z1, ec_mul, ec_add, ec_neg, random_fr, to_fr,
)
from zkfold.multifolding.hypercube import BooleanHypercube
from zkfold.multifolding.polynomial import (
    MultilinearPolynomial,
    SparseMatrix,
    VirtualPolynomial,
    eq_eval,
    eq_evals,
    vec_to_mle,
)


# =====================================================================
# FR / G1
# =====================================================================

class TestField:
    def test_fr_wraps_curve_order(self):
        assert FR(CURVE_ORDER + 5) == FR(5)
        assert FR(0) - FR(1) == FR(CURVE_ORDER - 1)

    def test_to_fr(self):
        assert to_fr(7) == FR(7)
        x = FR(9)
        assert to_fr(x) is x

    def test_random_fr_deterministic_with_seed(self):
        assert random_fr(random.Random(11)) == random_fr(random.Random(11))

    def test_random_fr_in_range(self):
        rng = random.Random(3)
        for _ in range(20):
            assert 0 <= int(random_fr(rng)) < CURVE_ORDER

    def test_random_fr_consumes_rng(self):
        rng = random.Random(3)
        assert random_fr(rng) != random_fr(rng)

    def test_ec_mul_zero_is_identity(self):
        assert ec_mul(G1, FR(0)) is Z1
        assert ec_mul(Z1, 5) is Z1

    def test_ec_add_neg(self):
        P = ec_mul(G1, 5)
        assert ec_add(P, ec_neg(P)) is Z1
        assert ec_add(Z1, P) == P

    def test_ec_mul_linear(self):
        assert ec_add(ec_mul(G1, 2), ec_mul(G1, 3)) == ec_mul(G1, FR(5))


# =====================================================================
# BooleanHypercube
# =====================================================================

class TestBooleanHypercube:
    def test_length(self):
        assert len(BooleanHypercube(3)) == 8
        assert len(list(BooleanHypercube(3))) == 8

    def test_dimension_zero_has_single_empty_point(self):
        assert list(BooleanHypercube(0)) == [[]]

    def test_little_endian_order(self):
        points = [[int(b) for b in p] for p in BooleanHypercube(2)]
        assert points == [[0, 0], [1, 0], [0, 1], [1, 1]]

    def test_restartable(self):
        cube = BooleanHypercube(2)
        assert list(cube) == list(cube)

    def test_points_distinct(self):
        points = {tuple(int(b) for b in p) for p in BooleanHypercube(4)}
        assert len(points) == 16

    def test_at_out_of_range(self):
        with pytest.raises(IndexError):
            BooleanHypercube(2).at(4)

    def test_negative_dimension(self):
        with pytest.raises(ValueError):
            BooleanHypercube(-1)


# =====================================================================
# eq / MultilinearPolynomial
# =====================================================================

class TestEq:
    def test_eq_on_boolean_points_is_kronecker_delta(self):
        cube = list(BooleanHypercube(3))
        for i, a in enumerate(cube):
            for j, b in enumerate(cube):
                assert eq_eval(a, b) == (FR(1) if i == j else FR(0))

    def test_eq_evals_matches_eq_eval(self):
        r = [FR(7), FR(9), FR(11)]
        table = eq_evals(r)
        assert len(table) == 8
        for i, point in enumerate(BooleanHypercube(3)):
            assert table[i] == eq_eval(r, point)

    def test_eq_evals_sums_to_one(self):
        r = [FR(123), FR(456)]
        total = FR(0)
        for e in eq_evals(r):
            total = total + e
        assert total == FR(1)

    def test_eq_length_mismatch(self):
        with pytest.raises(ValueError):
            eq_eval([FR(1)], [FR(1), FR(0)])


class TestMultilinearPolynomial:
    def test_evaluate_on_hypercube_returns_entries(self):
        vals = [FR(v) for v in (3, 1, 4, 1, 5, 9, 2, 6)]
        mle = vec_to_mle(3, vals)
        cube = BooleanHypercube(3)
        for i in range(len(cube)):
            assert mle.evaluate(cube.at(i)) == vals[i]

    def test_zero_padding(self):
        mle = vec_to_mle(2, [FR(1), FR(2), FR(3)])
        assert mle.evaluations == [FR(1), FR(2), FR(3), FR(0)]

    def test_evaluate_matches_eq_sum(self):
        rng = random.Random(5)
        vals = [random_fr(rng) for _ in range(8)]
        r = [random_fr(rng) for _ in range(3)]
        expected = FR(0)
        for e, v in zip(eq_evals(r), vals):
            expected = expected + e * v
        assert vec_to_mle(3, vals).evaluate(r) == expected

    def test_linear_combination(self):
        rng = random.Random(6)
        a = vec_to_mle(2, [random_fr(rng) for _ in range(4)])
        b = vec_to_mle(2, [random_fr(rng) for _ in range(4)])
        rho = random_fr(rng)
        r = [random_fr(rng), random_fr(rng)]
        assert (a + b * rho).evaluate(r) == a.evaluate(r) + rho * b.evaluate(r)
        assert (a - a).evaluate(r) == FR(0)
        assert 3 * b == b * 3

    def test_too_many_evaluations(self):
        with pytest.raises(ValueError):
            MultilinearPolynomial(1, [FR(1), FR(2), FR(3)])

    def test_wrong_point_length(self):
        with pytest.raises(ValueError):
            vec_to_mle(2, [FR(1)]).evaluate([FR(0)])

    def test_add_different_num_vars(self):
        with pytest.raises(ValueError):
            vec_to_mle(1, [FR(1)]) + vec_to_mle(2, [FR(1)])


class TestVirtualPolynomial:
    def test_product_and_sum(self):
        a = vec_to_mle(1, [FR(2), FR(3)])
        b = vec_to_mle(1, [FR(5), FR(7)])
        q = VirtualPolynomial(1)
        q.add_product(FR(1), [a, b])
        q.add_product(FR(0) - FR(1), [a])
        # q(0) = 2*5 - 2, q(1) = 3*7 - 3
        assert q.evaluate([FR(0)]) == FR(8)
        assert q.evaluate([FR(1)]) == FR(18)
        assert q.degree == 2

    def test_shared_mle_stored_once(self):
        a = vec_to_mle(1, [FR(2), FR(3)])
        q = VirtualPolynomial(1)
        q.add_product(1, [a, a])
        q.add_product(4, [a])
        assert len(q.mles) == 1
        assert q.evaluate([FR(1)]) == FR(9 + 12)

    def test_empty_polynomial_is_zero(self):
        q = VirtualPolynomial(2)
        assert q.degree == 0
        assert q.evaluate([FR(3), FR(4)]) == FR(0)

    def test_num_vars_mismatch(self):
        q = VirtualPolynomial(2)
        with pytest.raises(ValueError):
            q.add_product(1, [vec_to_mle(1, [FR(1)])])


# =====================================================================
# SparseMatrix
# =====================================================================

class TestSparseMatrix:
    DENSE = [
        [0, 1, 0],
        [2, 0, 3],
    ]

    def test_from_dense_drops_zeros(self):
        M = SparseMatrix.from_dense(self.DENSE)
        assert (M.rows, M.cols) == (2, 3)
        assert len(M.entries) == 3

    def test_roundtrip_dense(self):
        M = SparseMatrix.from_dense(self.DENSE)
        assert M.to_dense() == [[FR(v) for v in row] for row in self.DENSE]

    def test_mul_vector(self):
        M = SparseMatrix.from_dense(self.DENSE)
        assert M.mul_vector([FR(1), FR(10), FR(100)]) == [FR(10), FR(302)]

    def test_mul_vector_length_mismatch(self):
        M = SparseMatrix.from_dense(self.DENSE)
        with pytest.raises(ValueError):
            M.mul_vector([FR(1), FR(2)])

    def test_weighted_row_sum(self):
        M = SparseMatrix.from_dense(self.DENSE)
        assert M.weighted_row_sum([FR(5), FR(7)]) == [FR(14), FR(5), FR(21)]

    def test_ragged_rows(self):
        with pytest.raises(ValueError):
            SparseMatrix.from_dense([[1, 2], [3]])

    def test_out_of_range_entry(self):
        with pytest.raises(ValueError):
            SparseMatrix(2, 2, [(2, 0, FR(1))])
