import pytest

from a5crypto.LfsrRegister import (
    R1,
    R2,
    R3,
    REGISTERS,
    RegisterSpec,
    advance,
    feedback_polynomial,
    is_primitive,
    polynomial_expr,
)


def test_register_table():
    assert [s.width for s in REGISTERS] == [19, 22, 23]
    assert [s.mask for s in REGISTERS] == [0x07FFFF, 0x3FFFFF, 0x7FFFFF]
    assert [s.clock_bit for s in REGISTERS] == [8, 10, 10]
    assert [s.output_bit for s in REGISTERS] == [18, 21, 22]
    assert R1.tap_positions() == [13, 16, 17, 18]
    assert R2.tap_positions() == [20, 21]
    assert R3.tap_positions() == [7, 20, 21, 22]


def test_advance_shifts_in_feedback():
    # 탭 비트 하나만 켜져 있으면 피드백 1
    assert advance(1 << 13, R1.mask, R1.taps) == (1 << 14) | 1
    # 탭과 겹치지 않으면 피드백 0
    assert advance(1, R1.mask, R1.taps) == 2
    # 최상위 비트는 밀려나고 (탭이므로) 피드백 1
    assert advance(1 << 18, R1.mask, R1.taps) == 1


def test_advance_zero_is_fixed_point():
    for spec in REGISTERS:
        assert spec.advance(0) == 0


@pytest.mark.parametrize("spec", REGISTERS, ids=lambda s: s.name)
def test_advance_stays_within_width(spec):
    value = spec.mask
    for _ in range(500):
        value = spec.advance(value)
        assert 0 <= value <= spec.mask


def test_feedback_polynomials():
    def degrees(coeffs):
        n = len(coeffs) - 1
        return sorted((n - i for i, c in enumerate(coeffs) if c), reverse=True)

    assert degrees(feedback_polynomial(R1)) == [19, 5, 2, 1, 0]
    assert degrees(feedback_polynomial(R2)) == [22, 1, 0]
    assert degrees(feedback_polynomial(R3)) == [23, 15, 2, 1, 0]


@pytest.mark.parametrize("spec", REGISTERS, ids=lambda s: s.name)
def test_register_polynomials_are_primitive(spec):
    assert is_primitive(spec)


def test_non_primitive_taps_detected():
    # x^4 + x^2 + 1 = (x^2 + x + 1)^2 : 기약 아님
    reducible = RegisterSpec("T", 4, 0b1010, 1, 3)
    assert feedback_polynomial(reducible) == [1, 0, 1, 0, 1]
    assert not is_primitive(reducible)

    # x^4 + x^3 + x^2 + x + 1 : 기약이지만 주기 5
    irreducible_only = RegisterSpec("T", 4, 0b1111, 1, 3)
    assert not is_primitive(irreducible_only)

    # x^4 + x + 1 : 원시
    primitive = RegisterSpec("T", 4, 0b1100, 1, 3)
    assert is_primitive(primitive)


def test_small_primitive_register_has_full_period():
    spec = RegisterSpec("T", 4, 0b1100, 1, 3)
    seen = set()
    value = 1
    for _ in range(15):
        seen.add(value)
        value = spec.advance(value)
    assert value == 1
    assert len(seen) == 15


def test_polynomial_expr():
    assert str(polynomial_expr(R2)) == "x**22 + x + 1"
