"""
멀티폴딩 기반 모듈: 다중선형 확장(MLE)과 희소 행렬
====================================================

CCS 오라클(v_j 계산, 특성 다항식 q, σ/θ 계산)이 사용하는 다항식 도구.

**다중선형 확장 (Multilinear Extension)**:
  길이 2^k인 벡터 f를 {0,1}^k 위의 함수로 보고, 각 변수에 대해 1차인
  유일한 다항식 f̃로 확장한다.

    f̃(x) = Σ_{b ∈ {0,1}^k} eq(x, b) · f(b)
    eq(x, b) = ∏ᵢ (xᵢ·bᵢ + (1 - xᵢ)(1 - bᵢ))

  인덱스 규칙: evaluations[i]는 점 (i의 0번 비트, 1번 비트, ...)에서의 값.

**VirtualPolynomial**:
  MLE들의 곱의 선형결합  Σᵢ cᵢ · ∏_{j ∈ Sᵢ} f̃ⱼ(x).
  CCS 특성 다항식 q(x)가 이 형태이다.

**SparseMatrix**:
  CCS 행렬 M_j. 대부분의 원소가 0이므로 (행, 열, 값) 목록으로 저장한다.

사용 예시:
    >>> mle = vec_to_mle(2, [FR(1), FR(2), FR(3), FR(4)])
    >>> mle.evaluate([FR(1), FR(0)])  # evaluations[1] = FR(2)
"""

from zkfold.multifolding.field import FR, to_fr


# ─────────────────────────────────────────────────────────────────────
# eq 다항식
# ─────────────────────────────────────────────────────────────────────

def eq_eval(x, y):
    """eq(x, y) = ∏ᵢ (xᵢ·yᵢ + (1 - xᵢ)(1 - yᵢ)).

    x, y가 모두 불리언 벡터이면 x == y일 때만 1이다.
    """
    if len(x) != len(y):
        raise ValueError(f"eq 입력 길이가 다릅니다: {len(x)} != {len(y)}")
    result = FR(1)
    for xi, yi in zip(x, y):
        xi, yi = to_fr(xi), to_fr(yi)
        result = result * (xi * yi + (FR(1) - xi) * (FR(1) - yi))
    return result


def eq_evals(r):
    """{ eq(r, b) : b ∈ {0,1}^len(r) } 테이블을 하이퍼큐브 순서로 반환한다.

    k번째 변수를 처리할 때 테이블 크기가 두 배가 되며, 새로 생긴 절반이
    k번째 비트가 1인 점들이다.

    Args:
        r: FR 원소 리스트

    Returns:
        list[FR]: 길이 2^len(r)
    """
    table = [FR(1)]
    for rk in r:
        rk = to_fr(rk)
        low = [e * (FR(1) - rk) for e in table]
        high = [e * rk for e in table]
        table = low + high
    return table


# ─────────────────────────────────────────────────────────────────────
# MultilinearPolynomial
# ─────────────────────────────────────────────────────────────────────

class MultilinearPolynomial:
    """평가값 표현의 다중선형 다항식.

    속성:
        num_vars: 변수 개수 k
        evaluations: 길이 2^k의 FR 리스트 (부족하면 0으로 채운다)
    """

    def __init__(self, num_vars, evaluations):
        size = 1 << num_vars
        if len(evaluations) > size:
            raise ValueError(
                f"평가값 {len(evaluations)}개는 {num_vars}변수 MLE에 담을 수 없습니다"
            )
        self.num_vars = num_vars
        self.evaluations = [to_fr(e) for e in evaluations]
        self.evaluations += [FR(0)] * (size - len(self.evaluations))

    def evaluate(self, point):
        """임의의 점에서 MLE를 평가한다.

        변수를 하나씩 고정해 나간다. 0번 변수가 인덱스의 최하위 비트이므로
        인접한 두 평가값 (2j, 2j+1)을 r₀로 보간하면 변수가 하나 줄어든다.

            f'(j) = f(2j) + r₀ · (f(2j+1) - f(2j))

        Args:
            point: 길이 num_vars의 FR 리스트

        Returns:
            FR: f̃(point)
        """
        if len(point) != self.num_vars:
            raise ValueError(
                f"평가 점 길이 {len(point)}가 변수 개수 {self.num_vars}와 다릅니다"
            )
        evals = list(self.evaluations)
        for rk in point:
            rk = to_fr(rk)
            evals = [
                evals[2 * j] + rk * (evals[2 * j + 1] - evals[2 * j])
                for j in range(len(evals) // 2)
            ]
        return evals[0]

    def _require_same_vars(self, other):
        if other.num_vars != self.num_vars:
            raise ValueError(
                f"변수 개수가 다른 MLE끼리 연산할 수 없습니다: "
                f"{self.num_vars} != {other.num_vars}"
            )

    def __add__(self, other):
        if not isinstance(other, MultilinearPolynomial):
            return NotImplemented
        self._require_same_vars(other)
        return MultilinearPolynomial(
            self.num_vars,
            [a + b for a, b in zip(self.evaluations, other.evaluations)],
        )

    def __sub__(self, other):
        if not isinstance(other, MultilinearPolynomial):
            return NotImplemented
        self._require_same_vars(other)
        return MultilinearPolynomial(
            self.num_vars,
            [a - b for a, b in zip(self.evaluations, other.evaluations)],
        )

    def __mul__(self, scalar):
        """스칼라곱. MLE끼리의 곱은 다중선형이 아니므로 VirtualPolynomial을 쓴다."""
        if not isinstance(scalar, (int, FR)):
            return NotImplemented
        scalar = to_fr(scalar)
        return MultilinearPolynomial(
            self.num_vars, [e * scalar for e in self.evaluations]
        )

    def __rmul__(self, scalar):
        return self.__mul__(scalar)

    def __eq__(self, other):
        if not isinstance(other, MultilinearPolynomial):
            return NotImplemented
        return (
            self.num_vars == other.num_vars
            and self.evaluations == other.evaluations
        )

    def __repr__(self):
        return f"MultilinearPolynomial(num_vars={self.num_vars}, evaluations={[int(e) for e in self.evaluations]})"


def vec_to_mle(num_vars, vec):
    """벡터를 num_vars 변수 MLE로 해석한다 (모자라는 부분은 0)."""
    return MultilinearPolynomial(num_vars, vec)


# ─────────────────────────────────────────────────────────────────────
# VirtualPolynomial: Σ cᵢ · ∏ MLE
# ─────────────────────────────────────────────────────────────────────

class VirtualPolynomial:
    """MLE 곱들의 선형결합.

    같은 MLE 객체가 여러 곱에 등장하면 한 번만 저장하고 인덱스로
    참조한다. evaluate는 점마다 각 MLE를 한 번씩만 평가한다.

    속성:
        num_vars: 변수 개수
        mles: 서로 다른 MLE 목록
        products: [(계수, [mles 인덱스, ...]), ...]
    """

    def __init__(self, num_vars):
        self.num_vars = num_vars
        self.mles = []
        self.products = []

    @property
    def degree(self):
        """개별 변수 기준 최대 차수 = 가장 긴 곱의 길이."""
        return max((len(indices) for _, indices in self.products), default=0)

    def _index_of(self, mle):
        for i, existing in enumerate(self.mles):
            if existing is mle:
                return i
        self.mles.append(mle)
        return len(self.mles) - 1

    def add_product(self, coefficient, mles):
        """coefficient · ∏ mles 항을 추가한다."""
        for mle in mles:
            if mle.num_vars != self.num_vars:
                raise ValueError(
                    f"MLE 변수 개수 {mle.num_vars}가 {self.num_vars}와 다릅니다"
                )
        indices = [self._index_of(mle) for mle in mles]
        self.products.append((to_fr(coefficient), indices))

    def evaluate(self, point):
        if len(point) != self.num_vars:
            raise ValueError(
                f"평가 점 길이 {len(point)}가 변수 개수 {self.num_vars}와 다릅니다"
            )
        values = [mle.evaluate(point) for mle in self.mles]
        result = FR(0)
        for coefficient, indices in self.products:
            term = coefficient
            for i in indices:
                term = term * values[i]
            result = result + term
        return result


# ─────────────────────────────────────────────────────────────────────
# SparseMatrix
# ─────────────────────────────────────────────────────────────────────

class SparseMatrix:
    """(행, 열, 값) 목록으로 저장한 FR 행렬."""

    def __init__(self, rows, cols, entries):
        self.rows = rows
        self.cols = cols
        self.entries = []
        for row, col, value in entries:
            if not (0 <= row < rows and 0 <= col < cols):
                raise ValueError(f"행렬 범위를 벗어난 원소: ({row}, {col})")
            value = to_fr(value)
            if value != FR(0):
                self.entries.append((row, col, value))

    @classmethod
    def from_dense(cls, dense):
        """2차원 리스트(정수 또는 FR)에서 희소 행렬을 만든다."""
        rows = len(dense)
        cols = len(dense[0]) if rows else 0
        entries = []
        for i, row in enumerate(dense):
            if len(row) != cols:
                raise ValueError("모든 행의 길이가 같아야 합니다")
            for j, value in enumerate(row):
                entries.append((i, j, value))
        return cls(rows, cols, entries)

    def to_dense(self):
        dense = [[FR(0)] * self.cols for _ in range(self.rows)]
        for row, col, value in self.entries:
            dense[row][col] = value
        return dense

    def mul_vector(self, z):
        """M · z (길이 rows)."""
        if len(z) != self.cols:
            raise ValueError(f"벡터 길이 {len(z)}가 열 개수 {self.cols}와 다릅니다")
        result = [FR(0)] * self.rows
        for row, col, value in self.entries:
            result[row] = result[row] + value * to_fr(z[col])
        return result

    def weighted_row_sum(self, weights):
        """Σᵢ weights[i] · M[i, :] (길이 cols).

        weights = eq_evals(r)이면 결과의 y번째 원소가 M̃(r, y)이다.
        """
        result = [FR(0)] * self.cols
        for row, col, value in self.entries:
            if row < len(weights):
                result[col] = result[col] + weights[row] * value
        return result

    def __eq__(self, other):
        if not isinstance(other, SparseMatrix):
            return NotImplemented
        return (
            self.rows == other.rows
            and self.cols == other.cols
            and sorted(self.entries, key=lambda e: (e[0], e[1]))
            == sorted(other.entries, key=lambda e: (e[0], e[1]))
        )
