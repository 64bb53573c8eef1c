# a5crypto/KeyMaterial.py
# pip install pycryptodome
from typing import Union

from Crypto.Util.number import bytes_to_long, long_to_bytes

KEY_BITS = 64
KEY_BYTES = KEY_BITS // 8
FRAME_BITS = 22

KeyLike = Union[int, bytes, bytearray, str]
FrameLike = Union[int, str]


def _parse_hex(text: str, what: str) -> int:
    s = text.strip().lower()
    if s.startswith("0x"):
        s = s[2:]
    s = s.replace(" ", "").replace("_", "")
    if not s:
        raise ValueError(f"{what}: empty hex string")
    try:
        return int(s, 16)
    except ValueError:
        raise ValueError(f"{what}: not a hex string: {text!r}") from None


def check_key(key: int) -> int:
    # 범위를 넘는 비트는 잘라내지 않고 거부
    if not (0 <= key < (1 << KEY_BITS)):
        raise ValueError(f"key must satisfy 0 <= key < 2^{KEY_BITS}")
    return key


def check_frame(frame: int) -> int:
    if not (0 <= frame < (1 << FRAME_BITS)):
        raise ValueError(f"frame must satisfy 0 <= frame < 2^{FRAME_BITS}")
    return frame


def parse_key(value: KeyLike) -> int:
    """
    키 입력 정규화 → 64비트 정수
    - int  : 그대로 범위 검사
    - bytes: 정확히 8바이트 (key[0] 이 최상위 바이트)
    - str  : 16진수 문자열 ("0x" 접두사, 공백 허용)
    """
    if isinstance(value, bool):
        raise TypeError("key must be int, bytes or hex str")
    if isinstance(value, int):
        return check_key(value)
    if isinstance(value, (bytes, bytearray)):
        if len(value) != KEY_BYTES:
            raise ValueError(f"key must be exactly {KEY_BYTES} bytes, got {len(value)}")
        return bytes_to_long(bytes(value))
    if isinstance(value, str):
        return check_key(_parse_hex(value, "key"))
    raise TypeError("key must be int, bytes or hex str")


def parse_frame(value: FrameLike) -> int:
    """프레임 번호: int 또는 16진수 문자열"""
    if isinstance(value, bool):
        raise TypeError("frame must be int or hex str")
    if isinstance(value, int):
        return check_frame(value)
    if isinstance(value, str):
        return check_frame(_parse_hex(value, "frame"))
    raise TypeError("frame must be int or hex str")


def key_to_bytes(key: int) -> bytes:
    """64비트 키 → 8바이트 배열 (big-endian, 앞쪽 0 패딩 유지)"""
    return long_to_bytes(check_key(key), KEY_BYTES)
