"""
커밋된 CCS 인스턴스: CCCS, LCCCS 그리고 폴딩
==============================================

멀티폴딩(HyperNova) 방식에서 "실행 중인(running)" 인스턴스와 "새(fresh)"
인스턴스를 하나로 접는 계층이다.

**인스턴스 종류**:
  - CCCS  (C, x):                 증인 w를 커밋먼트 C 뒤에 숨긴 CCS 인스턴스
  - LCCCS (C, u, x, r_x, v):      한 번의 sum-check 선형화로 "점 r_x에서의
                                  평가값이 v"라는 주장 하나로 줄인 인스턴스
  - Witness (w, r_w):             비공개 할당과 커밋먼트 블라인딩

  전체 할당은 z = (u, x, w)이며 CCCS와 새로 만든 LCCCS에서는 u = 1이다.

**관계**:
  CCCS  : C = commit(w, r_w)  이고  q(z)가 {0,1}^s 위에서 모두 0
  LCCCS : C = commit(w, r_w)  이고  v_j = Σ_y M̃_j(r_x, y)·z̃(y)  (모든 j)

**폴딩 (챌린지 ρ 하나)**:
    C'   = C1 + ρ·C2
    u'   = u1 + ρ
    x'   = x1 + ρ·x2
    r_x' = r_x_prime                 (이전 점은 버린다)
    v'_j = σ_j + ρ·θ_j
    w'   = w1 + ρ·w2,   r_w' = r_w1 + ρ·r_w2

  z' = z1 + ρ·z2 이고 Σ_y M̃_j(r, y)·z̃(y)가 z에 대해 선형이므로, σ와 θ가
  같은 r_x_prime에서 올바르게 계산되었다면 접힌 인스턴스도 LCCCS 관계를
  만족한다.

  fold는 저수준 연산이다. ρ, σ, θ, r_x_prime이 이 인스턴스 쌍에 대해
  올바르게 만들어졌는지는 검사하지 않는다. 잘못된 입력은 예외 없이
  관계를 만족하지 않는 인스턴스를 만들 뿐이며, 걸러내는 것은 이후의
  check_relation 몫이다.

사용 예시:
    >>> lcccs, w1 = to_lcccs(ccs, rng, params, z1)
    >>> cccs, w2 = to_cccs(ccs, rng, params, z2)
    >>> folded = LCCCS.fold(lcccs, cccs, sigmas, thetas, r_x_prime, rho)
    >>> w_folded = LCCCS.fold_witness(w1, w2, rho)
    >>> folded.check_relation(params, w_folded)
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Tuple

from zkfold.multifolding.errors import (
    CommitmentMismatch,
    LinearizedEvaluationMismatch,
    RelationNotSatisfied,
)
from zkfold.multifolding.field import FR, random_fr, to_fr
from zkfold.multifolding.hypercube import BooleanHypercube
from zkfold.multifolding.pedersen import Commitment, commit

logger = logging.getLogger(__name__)


def _as_fr_tuple(values):
    return tuple(to_fr(v) for v in values)


def _linear_combination(a, b, rho, name):
    """a + rho · b (원소별). 길이가 다르면 ValueError."""
    if len(a) != len(b):
        raise ValueError(f"{name}의 길이가 다릅니다: {len(a)} != {len(b)}")
    return tuple(a_i + rho * b_i for a_i, b_i in zip(a, b))


# ─────────────────────────────────────────────────────────────────────
# 데이터 모델
# ─────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Witness:
    """LCCCS / CCCS의 증인.

    w는 길이 n - l - 1의 비공개 할당, r_w는 커밋먼트 블라인딩이다.
    r_w는 인스턴스에 절대 들어가지 않는다.
    """
    w: Tuple[FR, ...]
    r_w: FR

    def __post_init__(self):
        object.__setattr__(self, "w", _as_fr_tuple(self.w))
        object.__setattr__(self, "r_w", to_fr(self.r_w))


def _check_binding(C, params, witness, n_private):
    """C가 (w, r_w)의 커밋먼트인지 확인한다.

    Pedersen 열기 증명을 검증하는 것이 아니라, 증인을 아는 쪽이 커밋먼트를
    다시 계산해 비교하는 평문 검사이다.
    """
    if len(witness.w) != n_private:
        logger.warning("증인 길이 불일치: %d != %d", len(witness.w), n_private)
        raise CommitmentMismatch(
            f"증인 길이 {len(witness.w)}가 n - l - 1 = {n_private}과 다릅니다"
        )
    if C != commit(params, list(witness.w), witness.r_w):
        logger.warning("커밋먼트 불일치")
        raise CommitmentMismatch("C가 증인 (w, r_w)의 커밋먼트가 아닙니다")


@dataclass(frozen=True)
class CCCS:
    """커밋된 CCS 인스턴스 (공개 입력만 있고 누적 상태는 없음)."""
    ccs: Any = field(repr=False)
    C: Commitment
    x: Tuple[FR, ...]

    def __post_init__(self):
        object.__setattr__(self, "x", _as_fr_tuple(self.x))
        if len(self.x) != self.ccs.l:
            raise ValueError(f"x의 길이 {len(self.x)}가 l={self.ccs.l}과 다릅니다")

    def check_relation(self, params, witness):
        """CCCS 관계를 검사한다.

        1. C == commit(w, r_w)
        2. z = (1, x, w)에 대해 q(z)가 {0,1}^s의 모든 점에서 0

        2는 2^s번 평가하는 비간결(non-succinct) 전체 검사이다.

        Raises:
            CommitmentMismatch: 커밋먼트가 증인과 맞지 않을 때
            RelationNotSatisfied: q(z)가 0이 아닌 점이 있을 때
        """
        ccs = self.ccs
        _check_binding(self.C, params, witness, ccs.n - ccs.l - 1)

        z = [FR(1)] + list(self.x) + list(witness.w)
        q = ccs.characteristic_polynomial(z)
        for point in BooleanHypercube(ccs.s):
            if q.evaluate(point) != FR(0):
                logger.warning("CCCS 관계 불만족: q(%s) != 0", [int(b) for b in point])
                raise RelationNotSatisfied(
                    "특성 다항식이 하이퍼큐브 위에서 0이 아닙니다", point=point
                )


@dataclass(frozen=True)
class LCCCS:
    """선형화된 커밋 CCS 인스턴스.

    속성:
        ccs: 공유 CCS 모양 (복사하지 않는다)
        C: w의 Pedersen 커밋먼트
        u: 누적 스칼라. 새로 만든 인스턴스는 1, 폴딩마다 ρ가 더해진다.
        x: 공개 입력 (길이 l)
        r_x: 평가 점 (길이 s)
        v: 행렬별 주장값 (길이 t)
    """
    ccs: Any = field(repr=False)
    C: Commitment
    u: FR
    x: Tuple[FR, ...]
    r_x: Tuple[FR, ...]
    v: Tuple[FR, ...]

    def __post_init__(self):
        object.__setattr__(self, "u", to_fr(self.u))
        object.__setattr__(self, "x", _as_fr_tuple(self.x))
        object.__setattr__(self, "r_x", _as_fr_tuple(self.r_x))
        object.__setattr__(self, "v", _as_fr_tuple(self.v))
        ccs = self.ccs
        if len(self.x) != ccs.l:
            raise ValueError(f"x의 길이 {len(self.x)}가 l={ccs.l}과 다릅니다")
        if len(self.r_x) != ccs.s:
            raise ValueError(f"r_x의 길이 {len(self.r_x)}가 s={ccs.s}와 다릅니다")
        if len(self.v) != ccs.t:
            raise ValueError(f"v의 길이 {len(self.v)}가 t={ccs.t}와 다릅니다")

    def check_relation(self, params, witness):
        """LCCCS 관계를 검사한다.

        1. C == commit(w, r_w)
        2. z = (u, x, w)에 대해 v_j == Σ_y M̃_j(r_x, y)·z̃(y)  (모든 j)

        z의 첫 원소가 1이 아니라 u인 점에 주의. 폴딩된 인스턴스는
        z' = z1 + ρ·z2 이므로 첫 원소가 u1 + ρ가 된다.

        Raises:
            CommitmentMismatch: 커밋먼트가 증인과 맞지 않을 때
            LinearizedEvaluationMismatch: v가 다시 계산한 값과 다를 때
        """
        ccs = self.ccs
        _check_binding(self.C, params, witness, ccs.n - ccs.l - 1)

        z = [self.u] + list(self.x) + list(witness.w)
        computed_v = ccs.evaluate_all_matrix_sums(z, list(self.r_x))
        for j, (claimed, computed) in enumerate(zip(self.v, computed_v)):
            if claimed != computed:
                logger.warning("LCCCS 평가값 불일치: v[%d]", j)
                raise LinearizedEvaluationMismatch(
                    f"v[{j}]가 r_x에서 다시 계산한 값과 다릅니다", index=j
                )

    @staticmethod
    def fold(lcccs1, cccs2, sigmas, thetas, r_x_prime, rho):
        """실행 중인 LCCCS와 새 CCCS를 챌린지 ρ로 접는다.

        C' = C1 + ρ·C2,  u' = u1 + ρ,  x' = x1 + ρ·x2,
        r_x' = r_x_prime,  v' = σ + ρ·θ

        입력은 바꾸지 않으며 같은 입력에 대해 항상 같은 결과를 낸다.
        σ, θ, r_x_prime은 두 인스턴스와 이 ρ에 대해 외부 sum-check 축약이
        만든 값이어야 한다 (여기서는 검사하지 않음).

        Args:
            lcccs1: 실행 중인 LCCCS
            cccs2: 새 CCCS
            sigmas: 길이 t, lcccs1 쪽 주장값
            thetas: 길이 t, cccs2 쪽 주장값
            r_x_prime: 길이 s, 새 평가 점
            rho: 폴딩 챌린지 (FR)

        Returns:
            LCCCS: 접힌 인스턴스 (lcccs1과 같은 CCS 객체를 공유)

        Raises:
            ValueError: x, sigmas/thetas, r_x_prime의 길이가 맞지 않을 때
        """
        ccs = lcccs1.ccs
        rho = to_fr(rho)
        if len(sigmas) != ccs.t:
            raise ValueError(f"sigmas의 길이 {len(sigmas)}가 t={ccs.t}와 다릅니다")
        if len(r_x_prime) != ccs.s:
            raise ValueError(f"r_x_prime의 길이 {len(r_x_prime)}가 s={ccs.s}와 다릅니다")

        C = lcccs1.C + cccs2.C * rho
        u = lcccs1.u + rho
        x = _linear_combination(lcccs1.x, cccs2.x, rho, "x")
        v = _linear_combination(_as_fr_tuple(sigmas), _as_fr_tuple(thetas), rho, "sigmas/thetas")

        logger.debug("LCCCS 폴딩: u' = %d", int(u))
        return LCCCS(ccs=ccs, C=C, u=u, x=x, r_x=r_x_prime, v=v)

    @staticmethod
    def fold_witness(w1, w2, rho):
        """증인을 fold와 같은 ρ로 접는다: w' = w1 + ρ·w2, r_w' = r_w1 + ρ·r_w2."""
        rho = to_fr(rho)
        w = _linear_combination(w1.w, w2.w, rho, "w")
        return Witness(w=w, r_w=w1.r_w + rho * w2.r_w)


# ─────────────────────────────────────────────────────────────────────
# 할당 → 인스턴스
# ─────────────────────────────────────────────────────────────────────

def _split_assignment(ccs, z):
    if len(z) != ccs.n:
        raise ValueError(f"할당 z의 길이 {len(z)}가 n={ccs.n}과 다릅니다")
    z = [to_fr(zi) for zi in z]
    return z, z[1:1 + ccs.l], z[1 + ccs.l:]


def to_cccs(ccs, rng, params, z):
    """만족하는 할당 z = (1, x, w)에서 CCCS와 증인을 만든다.

    새 블라인딩 r_w를 하나 뽑아 C = commit(w, r_w)를 계산한다.
    평가 점은 고르지 않는다. 실행 중인 인스턴스와 접으려면 먼저 외부
    sum-check 선형화를 거친다.

    Args:
        ccs: CCS 모양
        rng: 랜덤 소스 (randrange 제공)
        params: Pedersen Params (최대 길이 ≥ n - l - 1)
        z: 길이 n의 할당

    Returns:
        tuple(CCCS, Witness)
    """
    _, x, w = _split_assignment(ccs, z)
    r_w = random_fr(rng)
    C = commit(params, w, r_w)
    logger.debug("CCCS 생성: n=%d, l=%d", ccs.n, ccs.l)
    return CCCS(ccs=ccs, C=C, x=x), Witness(w=w, r_w=r_w)


def to_lcccs(ccs, rng, params, z):
    """만족하는 할당 z에서 첫 실행 인스턴스(LCCCS, u = 1)를 만든다.

    난수는 r_w, r_x[0], ..., r_x[s-1] 순서로 뽑는다.
    v_j = Σ_y M̃_j(r_x, y)·z̃(y) 는 CCS 오라클로 계산한다.

    Returns:
        tuple(LCCCS, Witness)
    """
    z, x, w = _split_assignment(ccs, z)
    r_w = random_fr(rng)
    C = commit(params, w, r_w)

    r_x = [random_fr(rng) for _ in range(ccs.s)]
    v = ccs.evaluate_all_matrix_sums(z, r_x)

    logger.debug("LCCCS 생성: s=%d, t=%d", ccs.s, ccs.t)
    return LCCCS(ccs=ccs, C=C, u=FR(1), x=x, r_x=r_x, v=v), Witness(w=w, r_w=r_w)
