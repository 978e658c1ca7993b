"""
Pedersen 벡터 커밋먼트
=======================

CCCS / LCCCS의 커밋먼트 C는 증인 벡터 w에 대한 Pedersen 커밋먼트이다.

**커밋먼트**:
  C = r_w · H + Σᵢ wᵢ · Gᵢ
  - Gᵢ, H: 서로의 이산로그 관계를 아무도 모르는 G1 점 (공개 파라미터)
  - r_w: 블라인딩 난수 → 완전 하이딩(perfectly hiding)
  - 이산로그 가정 하에서 계산적 바인딩(computationally binding)

**덧셈 동형성**:
  commit(a, r) + ρ·commit(b, s) = commit(a + ρ·b, r + ρ·s)

  폴딩은 이 성질에 전적으로 의존한다. 두 인스턴스의 커밋먼트를
  C' = C1 + ρ·C2로 합치면 이는 접힌 증인 w' = w1 + ρ·w2에 대한
  커밋먼트와 정확히 같다.

**파라미터 생성**:
  교육용 구현에서는 Gᵢ = kᵢ · G1 (kᵢ는 rng에서 뽑은 뒤 버리는 스칼라)로
  만든다. kᵢ를 아는 쪽은 바인딩을 깰 수 있으므로 실제 시스템에서는
  hash-to-curve로 생성해야 한다.

사용 예시:
    >>> params = Params.setup(rng, max_length=4)
    >>> C = commit(params, w, r_w)
"""

from zkfold.multifolding.field import FR, G1, Z1, ec_mul, ec_add, random_fr, to_fr


class Params:
    """Pedersen 공개 파라미터.

    속성:
        h: 블라인딩 생성자 H
        generators: [G₀, G₁, ..., G_{max_length-1}]
    """

    def __init__(self, h, generators):
        self.h = h
        self.generators = generators

    @property
    def max_length(self):
        return len(self.generators)

    @classmethod
    def setup(cls, rng, max_length):
        """최대 max_length 길이 벡터를 커밋할 수 있는 파라미터를 생성한다.

        Args:
            rng: 랜덤 소스 (randrange 제공)
            max_length: 커밋할 벡터의 최대 길이. CCS에서는 n - l - 1.

        Returns:
            Params
        """
        if max_length < 0:
            raise ValueError(f"max_length는 음수일 수 없습니다: {max_length}")
        generators = [ec_mul(G1, random_fr(rng)) for _ in range(max_length)]
        h = ec_mul(G1, random_fr(rng))
        return cls(h, generators)


class Commitment:
    """G1 점 하나를 감싼 불변 커밋먼트 값.

    + 와 스칼라 * 를 지원해 C1 + rho * C2 를 그대로 쓸 수 있다.
    """

    __slots__ = ("point",)

    def __init__(self, point):
        object.__setattr__(self, "point", point)

    def __setattr__(self, name, value):
        raise AttributeError("Commitment는 변경할 수 없습니다")

    def __add__(self, other):
        if not isinstance(other, Commitment):
            return NotImplemented
        return Commitment(ec_add(self.point, other.point))

    def __mul__(self, scalar):
        if not isinstance(scalar, (int, FR)):
            return NotImplemented
        return Commitment(ec_mul(self.point, scalar))

    def __rmul__(self, scalar):
        return self.__mul__(scalar)

    def __eq__(self, other):
        if not isinstance(other, Commitment):
            return NotImplemented
        return self.point == other.point

    def __repr__(self):
        if self.point is Z1:
            return "Commitment(infinity)"
        x, y = self.point
        return f"Commitment(x={int(x)}, y={int(y)})"


def commit(params, vector, blinding):
    """벡터를 Pedersen 커밋한다.

    C = blinding · H + Σᵢ vector[i] · Gᵢ

    Args:
        params: Params
        vector: FR 원소 리스트 (길이 ≤ params.max_length)
        blinding: FR 블라인딩 r

    Returns:
        Commitment

    Raises:
        ValueError: 벡터가 파라미터가 지원하는 길이보다 길 때

    예시:
        >>> C1 = commit(params, [FR(1), FR(2)], FR(5))
        >>> C2 = commit(params, [FR(3), FR(4)], FR(6))
        >>> C1 + C2 * FR(7) == commit(params, [FR(22), FR(30)], FR(47))  # True
    """
    if len(vector) > params.max_length:
        raise ValueError(
            f"벡터 길이 {len(vector)}가 Pedersen 최대 길이 {params.max_length}를 초과합니다"
        )

    result = ec_mul(params.h, to_fr(blinding))
    for g_i, v_i in zip(params.generators, vector):
        v_i = to_fr(v_i)
        if v_i == FR(0):
            continue
        result = ec_add(result, ec_mul(g_i, v_i))

    return Commitment(result)
