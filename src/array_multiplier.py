from amaranth import *
from amaranth.build import Platform
from amaranth.lib import wiring
from amaranth.lib.wiring import In, Out

from partial_products import OPERAND_WIDTH, PRODUCT_WIDTH


def golden_product(multiplicand: int, multiplier: int) -> int:
    mask = (1 << OPERAND_WIDTH) - 1
    return (multiplicand & mask) * (multiplier & mask)


def array_multiply(multiplicand: int, multiplier: int) -> int:
    """Shift-and-add over the multiplier bits, one adder per row"""
    mask = (1 << OPERAND_WIDTH) - 1
    multiplicand &= mask
    acc = 0
    for i in range(OPERAND_WIDTH):
        if (multiplier >> i) & 1:
            acc += multiplicand << i
    return acc & ((1 << PRODUCT_WIDTH) - 1)


class ArrayMultiplier(wiring.Component):
    """Single-cycle reference multiplier

    A plain chain of 16 ripple adders, each adding the gated, shifted
    multiplicand onto the running total. Slow, but obviously correct.
    """

    multiplicand: In(OPERAND_WIDTH)
    multiplier: In(OPERAND_WIDTH)
    product: Out(PRODUCT_WIDTH)

    def elaborate(self, platform: Platform | None) -> Module:
        m = Module()

        b_ext = Signal(PRODUCT_WIDTH)
        m.d.comb += b_ext.eq(self.multiplicand)

        acc = [Signal(PRODUCT_WIDTH, name=f"acc_{i}") for i in range(OPERAND_WIDTH + 1)]
        m.d.comb += acc[0].eq(0)

        for i in range(OPERAND_WIDTH):
            row = Mux(self.multiplier[i], b_ext << i, 0)
            m.d.comb += acc[i + 1].eq(acc[i] + row)

        m.d.comb += self.product.eq(acc[OPERAND_WIDTH])

        return m
