"""
CCS 관계 검사 실패 유형
========================

검증자는 악의적이거나 잘못된 인스턴스를 받아도 죽지 않아야 한다.
따라서 모든 실패는 assert가 아니라 잡을 수 있는 예외로 표현한다.

    CCSError (ValueError)
    ├── RelationNotSatisfied          q(x) ≠ 0 인 하이퍼큐브 점 존재
    ├── CommitmentMismatch            C ≠ commit(w, r_w)
    └── LinearizedEvaluationMismatch  v ≠ Σ_y M_j(r_x, y)·z(y)

검증은 결정론적이므로 재시도는 의미가 없다. 실패는 최종이다.
"""


class CCSError(ValueError):
    """CCS / CCCS / LCCCS 관계 검사 실패의 공통 부모."""


class RelationNotSatisfied(CCSError):
    """CCS 관계가 성립하지 않는다.

    속성:
        point: 특성 다항식이 0이 아닌 첫 하이퍼큐브 점 (알 수 없으면 None)
    """

    def __init__(self, message="CCS 관계를 만족하지 않습니다", point=None):
        super().__init__(message)
        self.point = point


class CommitmentMismatch(CCSError):
    """인스턴스의 커밋먼트가 증인 (w, r_w)로 다시 계산한 값과 다르다."""


class LinearizedEvaluationMismatch(CCSError):
    """LCCCS의 주장값 v가 r_x에서 다시 계산한 값과 다르다.

    속성:
        index: 처음으로 어긋난 행렬 인덱스 j (길이 불일치면 None)
    """

    def __init__(self, message="LCCCS 평가값이 일치하지 않습니다", index=None):
        super().__init__(message)
        self.index = index
