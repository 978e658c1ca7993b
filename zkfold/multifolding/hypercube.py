"""
불리언 하이퍼큐브 {0,1}^s 열거기
=================================

CCCS 관계 검사는 특성 다항식 q(x)가 하이퍼큐브의 모든 점에서 0인지
확인한다. 이 모듈은 그 점들을 지연(lazy) 생성한다.

**점의 순서**:
  i번째 점의 k번째 좌표는 i의 k번째 비트이다 (리틀 엔디안).
  MultilinearPolynomial의 평가값 배열 인덱스와 같은 순서이므로
  hypercube.at(i)에서의 평가값 == mle.evaluations[i] 가 성립한다.

    s = 2:  (0,0), (1,0), (0,1), (1,1)

사용 예시:
    >>> for point in BooleanHypercube(2):
    ...     q.evaluate(point)
"""

from zkfold.multifolding.field import FR


class BooleanHypercube:
    """{0,1}^dimension 위의 모든 점을 순회하는 재시작 가능한 이터러블.

    __iter__를 호출할 때마다 새 제너레이터를 만들기 때문에
    같은 객체를 여러 번 순회할 수 있다.
    """

    def __init__(self, dimension):
        if dimension < 0:
            raise ValueError(f"하이퍼큐브 차원은 음수일 수 없습니다: {dimension}")
        self.dimension = dimension

    def __len__(self):
        return 1 << self.dimension

    def at(self, index):
        """index번째 점 [b_0, b_1, ..., b_{s-1}] (b_k = index의 k번째 비트)."""
        if not 0 <= index < len(self):
            raise IndexError(f"하이퍼큐브 인덱스 범위 초과: {index}")
        return [FR((index >> k) & 1) for k in range(self.dimension)]

    def __iter__(self):
        for index in range(len(self)):
            yield self.at(index)

    def __repr__(self):
        return f"BooleanHypercube(dimension={self.dimension})"
