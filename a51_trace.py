# a51_trace.py
import argparse
import sys
from typing import List, Optional

from a5crypto.A51 import (
    DOWNLINK,
    KEYSTREAM_BITS,
    KeySchedule,
    TraceRecorder,
    generate,
    initialize,
)
from a5crypto.BitOps import format_register, to_bitstring, unpack_bits_msb_first
from a5crypto.KeyMaterial import parse_frame, parse_key
from a5crypto.LfsrRegister import REGISTERS, is_primitive, polynomial_expr

# 공개된 A5/1 테스트 벡터
TEST_KEY = 0x1223456789ABCDEF
TEST_FRAME = 0x134
TEST_DOWNLINK = bytes.fromhex("534EAA582FE8151AB6E1855A728C00")
TEST_UPLINK = bytes.fromhex("24FD35A35D5FB6526D32F906DF1AC0")


def sep_line(title):
    print("\n" + "=" * 80)
    print(title)
    print("=" * 80)


def print_taps() -> bool:
    sep_line("[A51] 피드백 다항식")
    ok = True
    for spec in REGISTERS:
        prim = is_primitive(spec)
        ok = ok and prim
        print(f"{spec.name}: width={spec.width}, taps={spec.tap_positions()[::-1]}, "
              f"clock bit={spec.clock_bit}")
        print(f"    {polynomial_expr(spec)}  (원시다항식: {prim})")
    return ok


def print_trace(recorder: TraceRecorder) -> None:
    for e in recorder.entries:
        print(f"[{e.direction}] 반복 {e.index + 1}")
        print("R1 = " + format_register(e.r1, REGISTERS[0].width))
        print("R2 = " + format_register(e.r2, REGISTERS[1].width))
        print("R3 = " + format_register(e.r3, REGISTERS[2].width))
        print(f"키스트림 비트: {e.bit}\n")


def run_selftest() -> bool:
    sep_line("[A51] 테스트 벡터 확인")
    downlink, uplink = generate(initialize(TEST_KEY, TEST_FRAME))
    ok_down = downlink == TEST_DOWNLINK
    ok_up = uplink == TEST_UPLINK
    print(f"downlink: {downlink.hex().upper()}  일치: {ok_down}")
    print(f"uplink  : {uplink.hex().upper()}  일치: {ok_up}")
    return ok_down and ok_up


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="A5/1 keystream trace")
    parser.add_argument("--key", default=f"{TEST_KEY:016X}", help="64-bit key (hex)")
    parser.add_argument("--frame", default=f"{TEST_FRAME:X}", help="22-bit frame number (hex)")
    parser.add_argument(
        "--schedule",
        choices=[s.value for s in KeySchedule],
        default=KeySchedule.STANDARD.value,
    )
    parser.add_argument("--cycles", type=int, default=6,
                        help="number of downlink cycles to print (0 = none)")
    parser.add_argument("--taps", action="store_true", help="print feedback polynomials")
    parser.add_argument("--selftest", action="store_true", help="check the published test vector")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        key = parse_key(args.key)
        frame = parse_frame(args.frame)
    except ValueError as e:
        parser.error(str(e))
    if args.cycles < 0:
        parser.error("--cycles must be >= 0")

    schedule = KeySchedule(args.schedule)

    print("***************************")
    print("A5/1 keystream trace")
    print("***************************")
    print(f"[A51] key = {key:016X}, frame = {frame:#x}, schedule = {schedule.value}")

    ok = True
    if args.taps:
        ok = print_taps() and ok

    state = initialize(key, frame, schedule)
    recorder = TraceRecorder(limit=min(args.cycles, KEYSTREAM_BITS))
    downlink, uplink = generate(state, observer=recorder)

    if recorder.entries:
        sep_line(f"[A51] {DOWNLINK} 처음 {len(recorder.entries)} 사이클")
        print_trace(recorder)

    sep_line("[A51] 키스트림")
    print(f"downlink(hex): {downlink.hex().upper()}")
    print(f"uplink(hex)  : {uplink.hex().upper()}")
    print(f"downlink(bit): {to_bitstring(unpack_bits_msb_first(downlink, KEYSTREAM_BITS))}")
    print(f"uplink(bit)  : {to_bitstring(unpack_bits_msb_first(uplink, KEYSTREAM_BITS))}")

    if args.selftest:
        ok = run_selftest() and ok

    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
