import numpy as np
from amaranth.sim import Simulator

from array_multiplier import ArrayMultiplier, array_multiply, golden_product
from scoreboard import CORNER_CASES


def test_golden_matches_array_reference():
    """The shift-and-add baseline and the golden product agree"""
    np.random.seed(456)
    a = np.random.randint(0, 1 << 16, size=1000)
    b = np.random.randint(0, 1 << 16, size=1000)
    for x, y in zip(a.tolist(), b.tolist()):
        assert array_multiply(x, y) == golden_product(x, y) == x * y


def test_golden_corner_cases():
    for multiplier, multiplicand, expected in CORNER_CASES:
        assert golden_product(multiplicand, multiplier) == expected
        assert array_multiply(multiplicand, multiplier) == expected


def test_array_multiplier_hardware():
    dut = ArrayMultiplier()

    np.random.seed(123)
    cases = [(b, a) for a, b, _ in CORNER_CASES]
    cases += list(zip(np.random.randint(0, 1 << 16, size=50).tolist(), np.random.randint(0, 1 << 16, size=50).tolist()))

    async def bench(ctx):
        for multiplicand, multiplier in cases:
            ctx.set(dut.multiplicand, multiplicand)
            ctx.set(dut.multiplier, multiplier)

            product = ctx.get(dut.product)
            expected = golden_product(multiplicand, multiplier)
            assert product == expected, f"{multiplicand} * {multiplier}: got {product}, expected {expected}"

    sim = Simulator(dut)
    sim.add_testbench(bench)
    sim.run()
