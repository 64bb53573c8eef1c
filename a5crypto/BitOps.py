# a5crypto/BitOps.py
from typing import Iterable, List

WORD_BITS = 64
WORD_MASK = (1 << WORD_BITS) - 1


def parity(x: int) -> int:
    """
    x 의 1 비트 개수를 2로 나눈 나머지 (짝수면 0, 홀수면 1)
    64비트씩 접어서 반씩 XOR 한다.
    """
    if x < 0:
        raise ValueError("parity는 음이 아닌 정수만 받습니다.")

    # 64비트보다 넓으면 64비트 단위로 먼저 접기
    w = 0
    while x:
        w ^= x & WORD_MASK
        x >>= WORD_BITS

    w ^= w >> 32
    w ^= w >> 16
    w ^= w >> 8
    w ^= w >> 4
    w ^= w >> 2
    w ^= w >> 1
    return w & 1


def majority(a, b, c) -> int:
    # 셋 중 두 개 이상이 참이면 1
    total = (a != 0) + (b != 0) + (c != 0)
    return 1 if total >= 2 else 0


def pack_bits_msb_first(bits: Iterable[int], n_bytes: int) -> bytes:
    """
    비트 열 → 바이트열 (각 바이트 MSB부터 채움, 남는 비트는 0)
    """
    buf = bytearray(n_bytes)
    for i, bit in enumerate(bits):
        if i >= n_bytes * 8:
            raise ValueError(f"비트 수가 {n_bytes}바이트를 넘습니다.")
        buf[i // 8] |= (bit & 1) << (7 - (i & 7))
    return bytes(buf)


def unpack_bits_msb_first(buf: bytes, n_bits: int) -> List[int]:
    if n_bits > len(buf) * 8:
        raise ValueError("n_bits가 버퍼 크기보다 큽니다.")
    return [(buf[i // 8] >> (7 - (i & 7))) & 1 for i in range(n_bits)]


def to_bitstring(bits: Iterable[int]) -> str:
    return "".join(str(b & 1) for b in bits)


def format_register(value: int, width: int) -> str:
    """
    레지스터 스냅샷 문자열: 10진수 값, 탭, 4비트씩 끊은 2진수
    예) "10 \t0000 0000 0000 0000 101"
    """
    digits = format(value, f"0{width}b")
    groups = [digits[i:i + 4] for i in range(0, width, 4)]
    return f"{value} \t" + " ".join(groups)
