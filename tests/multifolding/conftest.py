import random

import pytest

from zkfold.multifolding.ccs import get_test_ccs, get_test_z
from zkfold.multifolding.field import random_fr
from zkfold.multifolding.pedersen import Params


# ── 테스트 상수 ──
PARAMS_SEED = 2024
RUNNING_X = 3
FRESH_X = 4


@pytest.fixture(scope="session")
def ccs():
    """x³ + x + 5 = y 테스트 CCS (m=4, n=6, l=1)."""
    return get_test_ccs()


@pytest.fixture(scope="session")
def params(ccs):
    """n - l - 1 길이 벡터용 Pedersen 파라미터."""
    return Params.setup(random.Random(PARAMS_SEED), ccs.n - ccs.l - 1)


@pytest.fixture
def rng():
    return random.Random(0)


@pytest.fixture(scope="session")
def fold_inputs(ccs, params):
    """LCCCS(x=3), CCCS(x=4)와 그 폴딩 입력 (σ, θ, r_x', ρ)."""
    rng = random.Random(1)
    z1 = get_test_z(RUNNING_X)
    z2 = get_test_z(FRESH_X)

    lcccs, w1 = ccs.to_lcccs(rng, params, z1)
    cccs, w2 = ccs.to_cccs(rng, params, z2)

    r_x_prime = [random_fr(rng) for _ in range(ccs.s)]
    sigmas, thetas = ccs.compute_sigmas_and_thetas(z1, z2, r_x_prime)
    rho = random_fr(rng)

    return {
        "z1": z1, "z2": z2,
        "lcccs": lcccs, "w1": w1,
        "cccs": cccs, "w2": w2,
        "r_x_prime": r_x_prime,
        "sigmas": sigmas, "thetas": thetas,
        "rho": rho,
    }
