import random

from amaranth.sim import Simulator

import csa
from csa import compress

MASK32 = (1 << 32) - 1


def test_compress_basic():
    test_cases = [
        # (a, b, c, expected_sum, expected_carry)
        (0, 0, 0, 0, 0),
        (1, 0, 0, 1, 0),
        (1, 1, 0, 0, 2),
        (1, 1, 1, 1, 2),
        (0b1010, 0b0110, 0b0011, 0b1111, 0b0100),
        (MASK32, 0, 0, MASK32, 0),
    ]

    for a, b, c, exp_sum, exp_carry in test_cases:
        s, cy = compress(a, b, c)
        assert s == exp_sum, f"({a}, {b}, {c}): got sum={s:#x}, expected {exp_sum:#x}"
        assert cy == exp_carry, f"({a}, {b}, {c}): got carry={cy:#x}, expected {exp_carry:#x}"


def test_compress_preserves_value():
    random.seed(42)
    for _ in range(1000):
        # keep the total below 2**32 so equality is exact
        a = random.randint(0, 2**30 - 1)
        b = random.randint(0, 2**30 - 1)
        c = random.randint(0, 2**30 - 1)
        s, cy = compress(a, b, c)
        assert s + cy == a + b + c
        assert cy & 1 == 0, "carry vector must not have a carry-in"


def test_compress_wraps_modulo_width():
    random.seed(7)
    for _ in range(1000):
        a = random.randint(0, MASK32)
        b = random.randint(0, MASK32)
        c = random.randint(0, MASK32)
        s, cy = compress(a, b, c)
        assert s <= MASK32 and cy <= MASK32
        assert (s + cy) & MASK32 == (a + b + c) & MASK32


def test_compress_narrow_width():
    # every 3-bit combination, exhaustively
    for a in range(8):
        for b in range(8):
            for c in range(8):
                s, cy = compress(a, b, c, width=3)
                assert (s + cy) % 8 == (a + b + c) % 8


def test_carry_save_adder_random():
    """Hardware compressor matches the software one"""
    dut = csa.CarrySaveAdder(width=32)

    async def bench(ctx):
        random.seed(42)
        for _ in range(100):
            a = random.randint(0, MASK32)
            b = random.randint(0, MASK32)
            c = random.randint(0, MASK32)

            ctx.set(dut.a, a)
            ctx.set(dut.b, b)
            ctx.set(dut.c, c)

            exp_sum, exp_carry = compress(a, b, c)
            result_sum = ctx.get(dut.sum)
            result_carry = ctx.get(dut.carry)

            assert result_sum == exp_sum, f"sum: got {result_sum:#x}, expected {exp_sum:#x}"
            assert result_carry == exp_carry, f"carry: got {result_carry:#x}, expected {exp_carry:#x}"

    sim = Simulator(dut)
    sim.add_testbench(bench)
    sim.run()


def test_carry_save_adder_top_carry_dropped():
    dut = csa.CarrySaveAdder(width=8)

    async def bench(ctx):
        ctx.set(dut.a, 0x80)
        ctx.set(dut.b, 0x80)
        ctx.set(dut.c, 0x01)

        assert ctx.get(dut.sum) == 0x01
        assert ctx.get(dut.carry) == 0x00

    sim = Simulator(dut)
    sim.add_testbench(bench)
    sim.run()
