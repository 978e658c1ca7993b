"""
CCS (Customizable Constraint System) 모양과 평가 오라클
========================================================

CCS는 R1CS, Plonkish, AIR를 한 틀로 일반화한 제약 시스템이다.

**구조**:
  - M₀, ..., M_{t-1}: m × n 행렬
  - S₀, ..., S_{q-1}: 각 항에 들어가는 행렬 인덱스 멀티셋
  - c₀, ..., c_{q-1}: 항 계수
  - z = (1, x, w): 길이 n인 전체 할당, x는 길이 l의 공개 입력

  만족 조건:  Σᵢ cᵢ · ∘_{j ∈ Sᵢ} (M_j · z) = 0   (∘: 원소별 곱)

**다중선형 형태**:
  s = ⌈log₂ m⌉, s' = ⌈log₂ n⌉ 이라 하면 위 조건은 특성 다항식

    q(x) = Σᵢ cᵢ · ∏_{j ∈ Sᵢ} (Σ_{y ∈ {0,1}^s'} M̃_j(x, y) · z̃(y))

  가 하이퍼큐브 {0,1}^s 위에서 모두 0인 것과 같다.
  Σ_y M̃_j(x, y) · z̃(y) 는 (M_j · z)의 MLE와 같으므로 여기서는 행렬-벡터
  곱을 먼저 계산한 뒤 MLE로 만든다.

**이 모듈이 제공하는 오라클**:
  - evaluate_all_matrix_sums(z, r): v_j = Σ_y M̃_j(r, y)·z̃(y), j = 0..t-1
  - characteristic_polynomial(z): q(x) (VirtualPolynomial)
  - matrix_evaluation_polynomials(z, r): L_j(y) = M̃_j(r, y)·z̃(y)
  - compute_sigmas_and_thetas(z1, z2, r_x'): 폴딩에 들어갈 σ, θ

R1CS (A·z) ∘ (B·z) - (C·z) = 0 은 t=3, q=2, d=2, S = [{0,1}, {2}], c = [1, -1]
인 CCS이다 (from_r1cs).

사용 예시:
    >>> ccs = get_test_ccs()
    >>> z = get_test_z(3)
    >>> ccs.check_relation(z)
"""

import logging

from zkfold.multifolding.errors import RelationNotSatisfied
from zkfold.multifolding.field import FR, to_fr
from zkfold.multifolding.hypercube import BooleanHypercube
from zkfold.multifolding.lcccs import to_cccs, to_lcccs
from zkfold.multifolding.polynomial import (
    SparseMatrix,
    VirtualPolynomial,
    eq_evals,
    vec_to_mle,
)

logger = logging.getLogger(__name__)


def ceil_log2(n):
    """2^k ≥ n 을 만족하는 최소 k (n ≤ 1 이면 0)."""
    if n <= 1:
        return 0
    return (n - 1).bit_length()


class CCS:
    """CCS 모양. 여러 인스턴스가 공유하는 읽기 전용 객체이다.

    속성:
        m: 제약(행) 수
        n: 전체 할당 z의 길이
        l: 공개 입력 길이
        t: 행렬 수 (= LCCCS의 v 길이)
        q: 항 수
        d: 항 하나에 곱해지는 행렬의 최대 개수 (차수)
        s: ⌈log₂ m⌉ (하이퍼큐브 차원, sum-check 라운드 수)
        s_prime: ⌈log₂ n⌉
        M: SparseMatrix 리스트 (길이 t)
        S: 행렬 인덱스 리스트의 리스트 (길이 q)
        c: FR 계수 리스트 (길이 q)
    """

    def __init__(self, M, S, c, l):
        if not M:
            raise ValueError("CCS에는 행렬이 하나 이상 있어야 합니다")
        m, n = M[0].rows, M[0].cols
        for j, M_j in enumerate(M):
            if (M_j.rows, M_j.cols) != (m, n):
                raise ValueError(f"행렬 M_{j}의 크기가 {m}×{n}이 아닙니다")
        if len(S) != len(c):
            raise ValueError(f"S({len(S)})와 c({len(c)})의 길이가 다릅니다")
        for multiset in S:
            for j in multiset:
                if not 0 <= j < len(M):
                    raise ValueError(f"S가 존재하지 않는 행렬 M_{j}를 가리킵니다")
        if not 0 <= l < n:
            raise ValueError(f"공개 입력 길이 l={l}이 n={n}에 맞지 않습니다")

        self.M = list(M)
        self.S = [list(multiset) for multiset in S]
        self.c = [to_fr(ci) for ci in c]
        self.m = m
        self.n = n
        self.l = l
        self.t = len(M)
        self.q = len(S)
        self.d = max((len(multiset) for multiset in S), default=0)
        self.s = ceil_log2(m)
        self.s_prime = ceil_log2(n)

    @classmethod
    def from_r1cs(cls, A, B, C, l):
        """R1CS 행렬 (A, B, C)를 CCS로 옮긴다.

        (A·z) ∘ (B·z) - (C·z) = 0
          ⟹  t=3, q=2, d=2, S = [[0, 1], [2]], c = [1, -1]

        Args:
            A, B, C: 2차원 리스트 (정수 또는 FR), 크기 m × n
            l: 공개 입력 길이

        Returns:
            CCS
        """
        M = [SparseMatrix.from_dense(mat) for mat in (A, B, C)]
        return cls(M, [[0, 1], [2]], [FR(1), FR(0) - FR(1)], l)

    # ─────────────────────────────────────────────────────────────
    # 입력 검사
    # ─────────────────────────────────────────────────────────────

    def _check_z(self, z):
        if len(z) != self.n:
            raise ValueError(f"할당 z의 길이 {len(z)}가 n={self.n}과 다릅니다")

    def _check_point(self, r, expected, name):
        if len(r) != expected:
            raise ValueError(f"{name}의 길이 {len(r)}가 {expected}와 다릅니다")

    # ─────────────────────────────────────────────────────────────
    # 평가 오라클
    # ─────────────────────────────────────────────────────────────

    def _mz_mles(self, z):
        """[MLE(M_j · z) for j in 0..t-1], 각각 s변수."""
        z = [to_fr(zi) for zi in z]
        return [vec_to_mle(self.s, M_j.mul_vector(z)) for M_j in self.M]

    def evaluate_all_matrix_sums(self, z, r):
        """v_j = Σ_{y ∈ {0,1}^s'} M̃_j(r, y) · z̃(y)  (j = 0..t-1).

        LCCCS의 주장값 v를 만들고 검사할 때 쓰는 오라클이다.

        Args:
            z: 길이 n의 할당 (첫 원소는 1 또는 LCCCS의 u)
            r: 길이 s의 평가 점

        Returns:
            list[FR]: 길이 t
        """
        self._check_z(z)
        self._check_point(r, self.s, "r")
        return [mle.evaluate(r) for mle in self._mz_mles(z)]

    compute_all_sum_Mz_evals = evaluate_all_matrix_sums

    def characteristic_polynomial(self, z):
        """q(x) = Σᵢ cᵢ · ∏_{j ∈ Sᵢ} MLE(M_j·z)(x) 를 구성한다.

        z가 CCS를 만족하면 q는 {0,1}^s 위에서 모두 0이다.
        """
        self._check_z(z)
        mles = self._mz_mles(z)
        q = VirtualPolynomial(self.s)
        for c_i, multiset in zip(self.c, self.S):
            q.add_product(c_i, [mles[j] for j in multiset])
        return q

    compute_q = characteristic_polynomial

    def matrix_evaluation_polynomials(self, z, r):
        """L_j(y) = M̃_j(r, y) · z̃(y)  (s'변수 MLE, j = 0..t-1).

        Σ_{y ∈ {0,1}^s'} L_j(y) = v_j 이므로 v_j를 오라클과 독립적으로
        검산할 수 있다.
        """
        self._check_z(z)
        self._check_point(r, self.s, "r")
        z = [to_fr(zi) for zi in z]
        weights = eq_evals(r)
        polys = []
        for M_j in self.M:
            row = M_j.weighted_row_sum(weights)
            polys.append(vec_to_mle(self.s_prime, [a * b for a, b in zip(row, z)]))
        return polys

    compute_Ls = matrix_evaluation_polynomials

    def compute_sigmas_and_thetas(self, z1, z2, r_x_prime):
        """두 할당의 새 평가 점 r_x'에서의 주장값을 계산한다.

        σ_j = Σ_y M̃_j(r_x', y) · z̃₁(y)   (실행 중인 LCCCS 쪽)
        θ_j = Σ_y M̃_j(r_x', y) · z̃₂(y)   (새 CCCS 쪽)

        sum-check 축약의 최종 출력에 해당한다. z1의 첫 원소는 LCCCS의 u여야
        접힌 인스턴스가 관계를 만족한다.

        Returns:
            tuple(list[FR], list[FR]): (sigmas, thetas), 각각 길이 t
        """
        sigmas = self.evaluate_all_matrix_sums(z1, r_x_prime)
        thetas = self.evaluate_all_matrix_sums(z2, r_x_prime)
        return sigmas, thetas

    # ─────────────────────────────────────────────────────────────
    # 관계 검사 (커밋먼트 없음)
    # ─────────────────────────────────────────────────────────────

    def check_relation(self, z):
        """Σᵢ cᵢ · ∘_{j ∈ Sᵢ} (M_j · z) == 0 을 행마다 확인한다.

        Raises:
            RelationNotSatisfied: 어느 행이라도 0이 아닐 때
        """
        self._check_z(z)
        z = [to_fr(zi) for zi in z]
        Mz = [M_j.mul_vector(z) for M_j in self.M]
        for row in range(self.m):
            acc = FR(0)
            for c_i, multiset in zip(self.c, self.S):
                term = c_i
                for j in multiset:
                    term = term * Mz[j][row]
                acc = acc + term
            if acc != FR(0):
                logger.warning("CCS 관계 불만족: %d번째 제약", row)
                raise RelationNotSatisfied(
                    f"{row}번째 제약을 만족하지 않습니다",
                    point=BooleanHypercube(self.s).at(row),
                )

    # ─────────────────────────────────────────────────────────────
    # 인스턴스 생성
    # ─────────────────────────────────────────────────────────────

    def to_cccs(self, rng, params, z):
        """to_cccs(self, ...) 참고."""
        return to_cccs(self, rng, params, z)

    def to_lcccs(self, rng, params, z):
        """to_lcccs(self, ...) 참고."""
        return to_lcccs(self, rng, params, z)

    def __eq__(self, other):
        if not isinstance(other, CCS):
            return NotImplemented
        return (
            self.l == other.l
            and self.M == other.M
            and self.S == other.S
            and self.c == other.c
        )

    def __repr__(self):
        return (
            f"CCS(m={self.m}, n={self.n}, l={self.l}, t={self.t}, q={self.q}, "
            f"d={self.d}, s={self.s}, s_prime={self.s_prime})"
        )


# ─────────────────────────────────────────────────────────────────────
# 테스트용 회로: x³ + x + 5 = y
# ─────────────────────────────────────────────────────────────────────

def get_test_r1cs():
    """x³ + x + 5 = y 의 R1CS (m=4, n=6).

    z = [1, x, y, x², x³, x³ + x]

        x   · x = x²
        x²  · x = x³
        (x + x³) · 1 = sym
        (5 + sym) · 1 = y
    """
    A = [
        [0, 1, 0, 0, 0, 0],
        [0, 0, 0, 1, 0, 0],
        [0, 1, 0, 0, 1, 0],
        [5, 0, 0, 0, 0, 1],
    ]
    B = [
        [0, 1, 0, 0, 0, 0],
        [0, 1, 0, 0, 0, 0],
        [1, 0, 0, 0, 0, 0],
        [1, 0, 0, 0, 0, 0],
    ]
    C = [
        [0, 0, 0, 1, 0, 0],
        [0, 0, 0, 0, 1, 0],
        [0, 0, 0, 0, 0, 1],
        [0, 0, 1, 0, 0, 0],
    ]
    return A, B, C


def get_test_ccs():
    """공개 입력 x 하나(l=1)를 가진 테스트 CCS."""
    A, B, C = get_test_r1cs()
    return CCS.from_r1cs(A, B, C, l=1)


def get_test_z(x):
    """get_test_ccs를 만족하는 할당 [1, x, y, x², x³, x³ + x]."""
    x = to_fr(x)
    return [
        FR(1),
        x,
        x * x * x + x + FR(5),
        x * x,
        x * x * x,
        x * x * x + x,
    ]
