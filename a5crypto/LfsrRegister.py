# a5crypto/LfsrRegister.py
from typing import List, NamedTuple, Tuple

from sympy import Poly, factorint, symbols
from sympy.polys.domains import ZZ
from sympy.polys.galoistools import gf_irreducible_p, gf_pow_mod

from a5crypto.BitOps import parity


def advance(register: int, mask: int, taps: int) -> int:
    """
    레지스터 한 칸 클록:
    탭 위치 비트들의 패리티를 피드백으로 계산하고
    왼쪽 시프트 → 폭으로 마스킹 → 0번 비트에 피드백 삽입
    """
    fb = parity(register & taps)
    register = (register << 1) & mask
    return register | fb


class RegisterSpec(NamedTuple):
    name: str
    width: int          # 비트 폭
    taps: int           # 피드백 탭 마스크
    clock_bit: int      # 다수결에 쓰는 비트 위치
    output_bit: int     # 출력에 쓰는 비트 위치 (최상위 비트)

    @property
    def mask(self) -> int:
        return (1 << self.width) - 1

    def advance(self, value: int) -> int:
        return advance(value, self.mask, self.taps)

    def clock_value(self, value: int) -> int:
        return (value >> self.clock_bit) & 1

    def output_value(self, value: int) -> int:
        return (value >> self.output_bit) & 1

    def tap_positions(self) -> List[int]:
        return [i for i in range(self.width) if (self.taps >> i) & 1]


# 19 + 22 + 23 = 64 비트
R1 = RegisterSpec("R1", 19, 0x072000, 8, 18)    # taps 18,17,16,13
R2 = RegisterSpec("R2", 22, 0x300000, 10, 21)   # taps 21,20
R3 = RegisterSpec("R3", 23, 0x700080, 10, 22)   # taps 22,21,20,7

REGISTERS: Tuple[RegisterSpec, RegisterSpec, RegisterSpec] = (R1, R2, R3)


# ===== 피드백 다항식 검사 =====

def feedback_polynomial(spec: RegisterSpec) -> List[int]:
    """
    탭 마스크에 대응하는 GF(2) 다항식 계수 (최고차항부터)

    탭 t 는 x^(width-1-t) 항에 대응하고 x^width 항이 추가된다.
    R1 → x^19 + x^5 + x^2 + x + 1
    """
    coeffs = [0] * (spec.width + 1)
    coeffs[0] = 1
    for t in spec.tap_positions():
        degree = spec.width - 1 - t
        coeffs[spec.width - degree] ^= 1
    return coeffs


def is_primitive(spec: RegisterSpec) -> bool:
    """
    피드백 다항식이 GF(2) 위의 원시다항식인지 확인.
    기약이고, 2^n - 1 의 모든 소인수 q 에 대해 x^((2^n-1)/q) != 1 (mod f) 이면 원시.
    → 이 경우 레지스터 주기는 최대 (2^n - 1)
    """
    f = [ZZ(c) for c in feedback_polynomial(spec)]
    if not gf_irreducible_p(f, 2, ZZ):
        return False

    order = (1 << spec.width) - 1
    x = [ZZ(1), ZZ(0)]
    one = [ZZ(1)]

    if gf_pow_mod(x, order, f, 2, ZZ) != one:
        return False

    for q in factorint(order):
        if gf_pow_mod(x, order // q, f, 2, ZZ) == one:
            return False
    return True


def polynomial_expr(spec: RegisterSpec):
    """출력용 sympy 식"""
    x = symbols("x")
    return Poly(feedback_polynomial(spec), x, modulus=2).as_expr()
