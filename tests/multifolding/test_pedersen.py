"""
Tests for the Pedersen vector commitment.

Covers:
- Params.setup (lengths, determinism under a seed)
- commit (known values, blinding, length overflow)
- additive homomorphism: commit(a, r) + ρ·commit(b, s) == commit(a + ρb, r + ρs)
- Commitment value semantics (immutability, equality)
"""

import random

import pytest

from zkfold.multifolding.field import FR, G1, Z1, ec_add, ec_mul, random_fr
from zkfold.multifolding.pedersen import Commitment, Params, commit


@pytest.fixture(scope="module")
def small_params():
    """3원소 벡터용 파라미터."""
    return Params.setup(random.Random(42), 3)


class TestParams:
    """Params.setup 테스트."""

    def test_lengths(self, small_params):
        assert small_params.max_length == 3
        assert len(small_params.generators) == 3
        assert small_params.h is not None

    def test_deterministic_with_same_seed(self):
        p1 = Params.setup(random.Random(7), 2)
        p2 = Params.setup(random.Random(7), 2)
        assert p1.generators == p2.generators
        assert p1.h == p2.h

    def test_generators_distinct(self, small_params):
        points = small_params.generators + [small_params.h]
        for i in range(len(points)):
            for j in range(i + 1, len(points)):
                assert points[i] != points[j]

    def test_zero_length(self):
        params = Params.setup(random.Random(1), 0)
        assert params.max_length == 0

    def test_negative_length(self):
        with pytest.raises(ValueError):
            Params.setup(random.Random(1), -1)


class TestCommit:
    """commit 함수 테스트."""

    def test_known_value(self, small_params):
        v = [FR(2), FR(0), FR(5)]
        r = FR(9)
        expected = ec_mul(small_params.h, r)
        expected = ec_add(expected, ec_mul(small_params.generators[0], 2))
        expected = ec_add(expected, ec_mul(small_params.generators[2], 5))
        assert commit(small_params, v, r) == Commitment(expected)

    def test_zero_vector_zero_blinding_is_identity(self, small_params):
        C = commit(small_params, [FR(0)] * 3, FR(0))
        assert C.point is Z1

    def test_shorter_vector_allowed(self, small_params):
        assert commit(small_params, [FR(4)], FR(1)) == commit(
            small_params, [FR(4), FR(0), FR(0)], FR(1)
        )

    def test_blinding_changes_commitment(self, small_params):
        v = [FR(1), FR(2), FR(3)]
        assert commit(small_params, v, FR(1)) != commit(small_params, v, FR(2))

    def test_vector_changes_commitment(self, small_params):
        r = FR(11)
        assert commit(small_params, [FR(1), FR(2), FR(3)], r) != commit(
            small_params, [FR(1), FR(2), FR(4)], r
        )

    def test_vector_too_long(self, small_params):
        with pytest.raises(ValueError):
            commit(small_params, [FR(1)] * 4, FR(0))

    def test_accepts_ints(self, small_params):
        assert commit(small_params, [1, 2, 3], 4) == commit(
            small_params, [FR(1), FR(2), FR(3)], FR(4)
        )


class TestHomomorphism:
    """덧셈 동형성 테스트 (폴딩의 근거)."""

    def test_addition(self, small_params):
        a, b = [FR(1), FR(2), FR(3)], [FR(4), FR(5), FR(6)]
        lhs = commit(small_params, a, FR(7)) + commit(small_params, b, FR(8))
        rhs = commit(small_params, [x + y for x, y in zip(a, b)], FR(15))
        assert lhs == rhs

    def test_random_linear_combination(self, small_params):
        rng = random.Random(99)
        a = [random_fr(rng) for _ in range(3)]
        b = [random_fr(rng) for _ in range(3)]
        r, s, rho = random_fr(rng), random_fr(rng), random_fr(rng)
        lhs = commit(small_params, a, r) + commit(small_params, b, s) * rho
        rhs = commit(small_params, [x + rho * y for x, y in zip(a, b)], r + rho * s)
        assert lhs == rhs

    def test_int_scalar_both_sides(self, small_params):
        C = commit(small_params, [FR(1)], FR(1))
        assert 3 * C == C * 3 == C + C + C


class TestCommitmentValue:
    """Commitment 값 객체 테스트."""

    def test_immutable(self):
        C = Commitment(G1)
        with pytest.raises(AttributeError):
            C.point = None

    def test_equality(self):
        assert Commitment(ec_mul(G1, 2)) == Commitment(ec_add(G1, G1))
        assert Commitment(G1) != Commitment(ec_mul(G1, 2))

    def test_not_equal_to_raw_point(self):
        assert Commitment(G1) != G1

    def test_repr(self):
        assert repr(Commitment(None)) == "Commitment(infinity)"
        assert repr(Commitment(G1)).startswith("Commitment(x=1, y=2")
