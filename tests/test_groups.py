import pytest

from srpauth.core.crypto import compute_hash, int_to_bytes, xor_bytes
from srpauth.core.errors import CryptoSetupError
from srpauth.core.groups import GROUP_TABLE, lookup
from srpauth.core.protocol import SrpStrength


@pytest.mark.parametrize("strength", list(SrpStrength))
def test_modulus_size_matches_strength(strength):
    constants = lookup(strength)

    assert constants.N.bit_length() == int(strength)
    assert constants.n_length * 8 == int(strength)
    assert constants.N % 2 == 1


@pytest.mark.parametrize("strength, generator", [
    (SrpStrength.BITS_1024, 2),
    (SrpStrength.BITS_2048, 2),
    (SrpStrength.BITS_3072, 5),
    (SrpStrength.BITS_8192, 19),
])
def test_generators(strength, generator):
    assert lookup(strength).g == generator


def test_every_strength_has_a_group():
    assert set(GROUP_TABLE) == set(SrpStrength)


def test_well_known_modulus_prefix():
    assert hex(lookup(SrpStrength.BITS_1024).N).startswith("0xeeaf0ab9adb38dd6")
    assert hex(lookup(SrpStrength.BITS_2048).N).startswith("0xac6bdb41324a9a9b")


def test_kb2_is_hash_of_n_xor_hash_of_g():
    constants = lookup(SrpStrength.BITS_1024)
    algorithm = constants.algorithm

    expected = xor_bytes(
        compute_hash(algorithm, int_to_bytes(constants.N)),
        compute_hash(algorithm, b"\x02")
    )
    assert constants.kb2 == expected
    assert len(constants.kb2) == 64


def test_k_uses_padded_generator():
    constants = lookup(SrpStrength.BITS_1024)
    padded_g = (2).to_bytes(128, "big")

    digest = compute_hash(constants.algorithm, int_to_bytes(constants.N), padded_g)
    assert constants.k == int.from_bytes(digest, "big")


def test_lookup_accepts_wire_integer_and_caches():
    assert lookup(1024) is lookup(SrpStrength.BITS_1024)


@pytest.mark.parametrize("strength", [0, -1, 512, 1025])
def test_unknown_strength_rejected(strength):
    with pytest.raises(CryptoSetupError):
        lookup(strength)
