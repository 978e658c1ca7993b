"""
멀티폴딩 E2E 데모: x³ + x + 5 = y 회로의 두 인스턴스 접기
===========================================================

실행:
    python -m zkfold.multifolding.example
    ZKFOLD_LOG_LEVEL=DEBUG ZKFOLD_SEED=42 python -m zkfold.multifolding.example

흐름:
    1. CCS 구성 (R1CS → CCS)
    2. Pedersen 파라미터 생성
    3. 실행 인스턴스 LCCCS (x = 3), 새 인스턴스 CCCS (x = 4)
    4. 각 인스턴스 관계 검사
    5. σ, θ 계산 후 챌린지 ρ로 폴딩
    6. 접힌 인스턴스 검사
    7. fold와 fold_witness에 서로 다른 ρ를 넣으면 거부되는지 확인
"""

from zkfold.multifolding.ccs import get_test_ccs, get_test_z
from zkfold.multifolding.config import FoldingConfig, make_rng
from zkfold.multifolding.errors import CCSError
from zkfold.multifolding.field import FR, random_fr
from zkfold.multifolding.lcccs import LCCCS
from zkfold.multifolding.log import init_logging
from zkfold.multifolding.pedersen import Params


def main(config=None):
    config = config or FoldingConfig.from_env()
    init_logging(config)
    rng = make_rng(config)

    print("=" * 60)
    print("  CCS Multifolding Demo")
    print("  회로: x³ + x + 5 = y,  LCCCS(x=3) ⊕ CCCS(x=4)")
    print("=" * 60)

    # ── 1. CCS 구성 ──
    print("\n[1] CCS 구성...")
    ccs = get_test_ccs()
    print(f"    {ccs}")

    z1 = get_test_z(3)
    z2 = get_test_z(4)
    ccs.check_relation(z1)
    ccs.check_relation(z2)
    print(f"    z1 = {[int(v) for v in z1]}")
    print(f"    z2 = {[int(v) for v in z2]}")

    # ── 2. Pedersen 파라미터 ──
    print("\n[2] Pedersen 파라미터 생성...")
    params = Params.setup(rng, ccs.n - ccs.l - 1)
    print(f"    생성자 수: {params.max_length}")

    # ── 3. 인스턴스 생성 ──
    print("\n[3] 인스턴스 생성...")
    lcccs, w1 = ccs.to_lcccs(rng, params, z1)
    cccs, w2 = ccs.to_cccs(rng, params, z2)
    print(f"    LCCCS: u = {int(lcccs.u)}, x = {[int(v) for v in lcccs.x]}")
    print(f"    CCCS:  x = {[int(v) for v in cccs.x]}")

    # ── 4. 관계 검사 ──
    print("\n[4] 관계 검사...")
    lcccs.check_relation(params, w1)
    cccs.check_relation(params, w2)
    print("    LCCCS ✓, CCCS ✓")

    # ── 5. 폴딩 ──
    # σ, θ, r_x'은 원래 sum-check 축약이 만든다. 여기서는 직접 계산한다.
    print("\n[5] 폴딩...")
    r_x_prime = [random_fr(rng) for _ in range(ccs.s)]
    z1_running = [lcccs.u] + list(lcccs.x) + list(w1.w)
    sigmas, thetas = ccs.compute_sigmas_and_thetas(z1_running, z2, r_x_prime)
    rho = random_fr(rng)

    folded = LCCCS.fold(lcccs, cccs, sigmas, thetas, r_x_prime, rho)
    w_folded = LCCCS.fold_witness(w1, w2, rho)
    print(f"    u' = u1 + ρ = {int(folded.u)}")

    # ── 6. 접힌 인스턴스 검사 ──
    print("\n[6] 접힌 인스턴스 검사...")
    result = True
    try:
        folded.check_relation(params, w_folded)
        print("    검사 결과: 성공 ✓")
    except CCSError as e:
        result = False
        print(f"    검사 결과: 실패 ✗ ({e})")

    # ── 7. ρ 불일치 ──
    print("\n[7] fold / fold_witness에 서로 다른 ρ 사용...")
    wrong_witness = LCCCS.fold_witness(w1, w2, rho + FR(1))
    rejected = False
    try:
        folded.check_relation(params, wrong_witness)
    except CCSError as e:
        rejected = True
        print(f"    거부됨 ✗ (예상대로): {type(e).__name__}")
    if not rejected:
        print("    통과됨 (예상과 다름)")

    print("\n" + "=" * 60)
    if result and rejected:
        print("  데모 완료: 모든 검사 통과!")
    else:
        print("  데모 완료: 일부 검사 실패")
    print("=" * 60)

    return result and rejected


if __name__ == "__main__":
    main()
