"""
멀티폴딩 기반 모듈: 스칼라 필드 및 G1 그룹 연산
==================================================

CCCS / LCCCS 계층 전체에서 사용하는 대수적 도구를 정의한다.

**유한체 FR**:
  bn128 타원곡선의 스칼라 필드. 할당 벡터 z, 평가 점 r_x, 주장값 v,
  폴딩 챌린지 rho가 모두 이 필드의 원소이다.

**G1 연산**:
  Pedersen 벡터 커밋먼트의 덧셈 동형성(C1 + rho·C2)에 필요한
  점 덧셈, 스칼라 곱셈, 역원.

**랜덤성 주입**:
  난수는 항상 호출자가 넘겨주는 rng 객체에서 뽑는다 (전역 생성기 없음).
  - 테스트: random.Random(seed) → 결정론적
  - 실사용: random.SystemRandom() → OS 엔트로피

사용 예시:
    >>> import random
    >>> from zkfold.multifolding.field import FR, G1, ec_mul, random_fr
    >>> rng = random.Random(7)
    >>> rho = random_fr(rng)
    >>> P = ec_mul(G1, rho)
"""

from py_ecc.fields import bn128_FQ as FQ
from py_ecc import bn128


# ─────────────────────────────────────────────────────────────────────
# 유한체(Finite Field) FR
# ─────────────────────────────────────────────────────────────────────

class FR(FQ):
    """bn128 스칼라 필드 위의 유한체 원소.

    py_ecc의 FQ를 상속하므로 +, -, *, /, ** 연산 결과도 FR이다.

    예시:
        >>> FR(3) * FR(5)      # FR(15)
        >>> FR(0) - FR(1)      # FR(CURVE_ORDER - 1)
    """
    field_modulus = bn128.curve_order


CURVE_ORDER = bn128.curve_order


def to_fr(value):
    """int 또는 FR을 FR로 맞춘다."""
    if isinstance(value, FR):
        return value
    return FR(int(value))


def random_fr(rng):
    """주입된 랜덤 소스에서 균일한 FR 원소 하나를 뽑는다.

    Args:
        rng: randrange(stop)을 제공하는 객체
             (random.Random, random.SystemRandom 등)

    Returns:
        FR: [0, CURVE_ORDER) 범위의 균일 난수
    """
    return FR(rng.randrange(CURVE_ORDER))


# ─────────────────────────────────────────────────────────────────────
# G1 그룹 연산
# ─────────────────────────────────────────────────────────────────────

# G1 생성자
G1 = bn128.G1

# 항등원 (무한원점). bn128에서는 None으로 표현한다.
Z1 = None


def ec_mul(point, scalar):
    """타원곡선 스칼라 곱셈: scalar · point.

    Args:
        point: G1 위의 점 (또는 Z1)
        scalar: 정수 또는 FR 원소

    Returns:
        scalar · point. scalar ≡ 0 이면 Z1.
    """
    if isinstance(scalar, FR):
        scalar = int(scalar)
    if point is Z1:
        return Z1
    return bn128.multiply(point, scalar % CURVE_ORDER)


def ec_add(p1, p2):
    """타원곡선 점 덧셈: p1 + p2. 어느 쪽이 Z1이어도 된다."""
    return bn128.add(p1, p2)


def ec_neg(point):
    """점의 역원 -point."""
    if point is Z1:
        return Z1
    return bn128.neg(point)
