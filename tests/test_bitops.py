import itertools

import pytest

from a5crypto.BitOps import (
    format_register,
    majority,
    pack_bits_msb_first,
    parity,
    to_bitstring,
    unpack_bits_msb_first,
)


def naive_parity(x):
    return bin(x).count("1") % 2


@pytest.mark.parametrize("x", [
    0, 1, 2, 3, 0x80, 0xFF, 0x100, 0x072000, 0x7FFFFF,
    0xFFFFFFFF, 0x1FFFFFFFF, 0xFFFFFFFFFFFFFFFF, 0x8000000000000001,
    (1 << 100) | 1, (1 << 100) | (1 << 3) | 1,
])
def test_parity_matches_bit_count(x):
    assert parity(x) == naive_parity(x)


def test_parity_of_zero_and_all_ones():
    assert parity(0) == 0
    assert parity((1 << 64) - 1) == 0
    assert parity((1 << 19) - 1) == 1
    assert parity((1 << 22) - 1) == 0
    assert parity((1 << 23) - 1) == 1


def test_parity_small_range():
    for x in range(1 << 12):
        assert parity(x) == naive_parity(x)


def test_parity_rejects_negative():
    with pytest.raises(ValueError):
        parity(-1)


def test_majority_all_combinations():
    for a, b, c in itertools.product((0, 1), repeat=3):
        expected = 1 if a + b + c >= 2 else 0
        assert majority(a, b, c) == expected


def test_majority_uses_truthiness():
    # 마스킹된 비트 값(예: 0x100)을 그대로 넘겨도 동작
    assert majority(0x100, 0x400, 0) == 1
    assert majority(0x100, 0, 0) == 0


def test_pack_msb_first():
    assert pack_bits_msb_first([1, 0, 0, 0, 0, 0, 0, 0], 1) == b"\x80"
    assert pack_bits_msb_first([1] * 9, 2) == b"\xff\x80"
    assert pack_bits_msb_first([], 3) == b"\x00\x00\x00"


def test_pack_too_many_bits():
    with pytest.raises(ValueError):
        pack_bits_msb_first([0] * 9, 1)


def test_unpack_msb_first():
    assert unpack_bits_msb_first(b"\xa0", 3) == [1, 0, 1]
    assert unpack_bits_msb_first(b"\x00\xc0", 10) == [0] * 8 + [1, 1]
    with pytest.raises(ValueError):
        unpack_bits_msb_first(b"\x00", 9)


def test_to_bitstring():
    assert to_bitstring([1, 0, 1, 1]) == "1011"


def test_format_register():
    assert format_register(5, 6) == "5 \t0001 01"
    assert format_register(0x7FFFF, 19) == "524287 \t1111 1111 1111 1111 111"
