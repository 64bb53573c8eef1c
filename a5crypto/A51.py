# a5crypto/A51.py
"""
GSM A5/1 키스트림 생성기.

세 개의 LFSR(R1, R2, R3)을 다수결 클록 제어로 묶어서
프레임 하나당 방향별 114비트 키스트림 두 개를 만든다.
  - downlink : A→B 방향, 먼저 생성
  - uplink   : B→A 방향, downlink 이후 상태에서 이어서 생성

상태(A51State)는 항상 호출자가 소유하며 전역 변수는 없다.
"""
from enum import Enum
from typing import Callable, List, NamedTuple, Optional, Tuple

from a5crypto.BitOps import majority, pack_bits_msb_first
from a5crypto.KeyMaterial import (
    FRAME_BITS,
    KEY_BITS,
    FrameLike,
    KeyLike,
    key_to_bytes,
    parse_frame,
    parse_key,
)
from a5crypto.LfsrRegister import R1, R2, R3

KEYSTREAM_BITS = 114
KEYSTREAM_BYTES = (KEYSTREAM_BITS + 7) // 8   # 15
DISCARD_CYCLES = 100

DOWNLINK = "downlink"
UPLINK = "uplink"


class KeySchedule(Enum):
    STANDARD = "standard"   # 키 64비트 + 프레임 22비트 혼합 + 100회 버림
    SPLIT = "split"         # 키를 19/22/23비트로 나눠 바로 적재 (프레임 혼합/버림 없음)


class A51State:
    """세 레지스터의 현재 값. 매 갱신마다 폭으로 마스킹된다."""

    def __init__(self, r1: int = 0, r2: int = 0, r3: int = 0):
        self.r1 = r1 & R1.mask
        self.r2 = r2 & R2.mask
        self.r3 = r3 & R3.mask

    def registers(self) -> Tuple[int, int, int]:
        return self.r1, self.r2, self.r3

    def copy(self) -> "A51State":
        return A51State(self.r1, self.r2, self.r3)

    def __eq__(self, other):
        if not isinstance(other, A51State):
            return NotImplemented
        return self.registers() == other.registers()

    def __repr__(self):
        return f"A51State(r1={self.r1:#07x}, r2={self.r2:#08x}, r3={self.r3:#08x})"


# ===== 클록 제어 =====

def clock_decision(state: A51State, force_all: bool = False) -> Tuple[bool, bool, bool]:
    """
    이번 사이클에 움직일 레지스터 (R1, R2, R3)
    각 레지스터의 클록 비트가 다수결 값과 같으면 클록.
    force_all 이면 셋 다 클록 (키 적재 중에만 사용)
    """
    c1 = R1.clock_value(state.r1)
    c2 = R2.clock_value(state.r2)
    c3 = R3.clock_value(state.r3)
    maj = majority(c1, c2, c3)
    return (
        force_all or c1 == maj,
        force_all or c2 == maj,
        force_all or c3 == maj,
    )


def step(state: A51State, force_all: bool = False) -> A51State:
    move1, move2, move3 = clock_decision(state, force_all)
    if move1:
        state.r1 = R1.advance(state.r1)
    if move2:
        state.r2 = R2.advance(state.r2)
    if move3:
        state.r3 = R3.advance(state.r3)
    return state


def output_bit(state: A51State) -> int:
    # 각 레지스터 최상위 비트 XOR
    return R1.output_value(state.r1) ^ R2.output_value(state.r2) ^ R3.output_value(state.r3)


# ===== 키/프레임 적재 =====

def _xor_bit_all(state: A51State, bit: int) -> None:
    state.r1 ^= bit
    state.r2 ^= bit
    state.r3 ^= bit


def _load_standard(state: A51State, key: int, frame: int) -> None:
    # 키 바이트 배열 기준: key[0] 의 LSB 부터
    key_bytes = key_to_bytes(key)
    for i in range(KEY_BITS):
        step(state, force_all=True)
        _xor_bit_all(state, (key_bytes[i // 8] >> (i & 7)) & 1)

    # 프레임 번호 LSB 부터
    for i in range(FRAME_BITS):
        step(state, force_all=True)
        _xor_bit_all(state, (frame >> i) & 1)

    # 출력 없이 섞기. 출력 비트는 클록 이후에 뽑는 방식이므로
    # 첫 번째 키스트림 클록까지 여기서 미리 수행한다.
    for _ in range(DISCARD_CYCLES + 1):
        step(state)


def _load_split(state: A51State, key: int) -> None:
    # R1 ← 키 비트 63..45, R2 ← 44..23, R3 ← 22..0 (MSB 먼저)
    remaining = KEY_BITS
    values = []
    for spec in (R1, R2, R3):
        reg = 0
        for i in range(spec.width):
            bit = (key >> (remaining - i - 1)) & 1
            reg = ((reg << 1) & spec.mask) | bit
        remaining -= spec.width
        values.append(reg)
    state.r1, state.r2, state.r3 = values


def initialize(key: KeyLike, frame: FrameLike,
               schedule: KeySchedule = KeySchedule.STANDARD) -> A51State:
    """
    (key, frame) → 새 A51State
    key  : 64비트 (int / 8바이트 / 16진수 문자열)
    frame: 22비트 (int / 16진수 문자열)
    범위를 넘는 값은 ValueError
    """
    key = parse_key(key)
    frame = parse_frame(frame)
    schedule = KeySchedule(schedule)

    state = A51State()
    if schedule is KeySchedule.STANDARD:
        _load_standard(state, key, frame)
    else:
        _load_split(state, key)
    return state


# ===== 키스트림 생성 =====

Observer = Callable[[str, int, A51State, int], None]


def _run_direction(state: A51State, direction: str, observer: Optional[Observer]) -> bytes:
    bits = []
    for i in range(KEYSTREAM_BITS):
        bit = output_bit(state)
        if observer is not None:
            observer(direction, i, state, bit)
        bits.append(bit)
        step(state)
    return pack_bits_msb_first(bits, KEYSTREAM_BYTES)


def generate(state: A51State, observer: Optional[Observer] = None) -> Tuple[bytes, bytes]:
    """
    114비트 키스트림 두 개 (downlink, uplink) 생성.
    각 15바이트, MSB부터 채움 (마지막 바이트 하위 6비트는 0)

    observer(direction, index, state, bit) 는 클록 직전에 호출된다.
    state 는 살아있는 객체이므로 보관하려면 copy() 할 것.
    """
    downlink = _run_direction(state, DOWNLINK, observer)
    uplink = _run_direction(state, UPLINK, observer)
    return downlink, uplink


def keystream(key: KeyLike, frame: FrameLike,
              schedule: KeySchedule = KeySchedule.STANDARD) -> Tuple[bytes, bytes]:
    return generate(initialize(key, frame, schedule))


# ===== 관찰용 트레이스 =====

class TraceEntry(NamedTuple):
    direction: str
    index: int
    r1: int
    r2: int
    r3: int
    bit: int


class TraceRecorder:
    """generate() 에 observer 로 넘기면 사이클마다 스냅샷을 쌓는다."""

    def __init__(self, limit: Optional[int] = None):
        self.limit = limit
        self.entries: List[TraceEntry] = []

    def __call__(self, direction: str, index: int, state: A51State, bit: int) -> None:
        if self.limit is not None and len(self.entries) >= self.limit:
            return
        self.entries.append(TraceEntry(direction, index, state.r1, state.r2, state.r3, bit))

    def bits(self, direction: str) -> List[int]:
        return [e.bit for e in self.entries if e.direction == direction]
