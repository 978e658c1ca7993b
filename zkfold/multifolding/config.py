"""
멀티폴딩 계층 실행 설정
========================

로깅과 랜덤 소스 선택을 한곳에서 정한다.

환경 변수:
    ZKFOLD_LOG_LEVEL   로그 레벨 (DEBUG, INFO, WARN, ...)
    ZKFOLD_LOG_FILE    로그 파일 경로 (없으면 파일 출력 안 함)
    ZKFOLD_SEED        정수 시드. 지정하면 결정론적 rng를 쓴다 (테스트/데모 전용)
"""

import os
import random
from dataclasses import dataclass
from typing import Optional


@dataclass
class FoldingConfig:
    """멀티폴딩 데모/드라이버의 설정값"""
    log_level: str = "INFO"
    log_file: Optional[str] = None
    console: bool = True
    seed: Optional[int] = None

    @classmethod
    def from_env(cls, environ=None) -> 'FoldingConfig':
        env = os.environ if environ is None else environ
        seed = env.get("ZKFOLD_SEED")
        return cls(
            log_level=env.get("ZKFOLD_LOG_LEVEL", cls.log_level),
            log_file=env.get("ZKFOLD_LOG_FILE") or None,
            seed=int(seed) if seed else None,
        )


def make_rng(config: FoldingConfig):
    """설정에 맞는 랜덤 소스를 만든다.

    시드가 있으면 random.Random(seed), 없으면 OS 엔트로피를 쓰는
    random.SystemRandom을 반환한다. 둘 다 randrange를 제공한다.
    """
    if config.seed is not None:
        return random.Random(config.seed)
    return random.SystemRandom()
