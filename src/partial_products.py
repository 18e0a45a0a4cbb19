from amaranth import *
from amaranth.build import Platform
from amaranth.lib import wiring
from amaranth.lib.wiring import In, Out

OPERAND_WIDTH = 16
PRODUCT_WIDTH = 32


def partial_products(multiplicand: int, multiplier: int) -> tuple[int, ...]:
    """One shifted copy of the multiplicand per set multiplier bit"""
    multiplicand &= (1 << OPERAND_WIDTH) - 1
    mask = (1 << PRODUCT_WIDTH) - 1
    return tuple(
        ((multiplicand << i) & mask) if (multiplier >> i) & 1 else 0 for i in range(OPERAND_WIDTH)
    )


class PartialProductGenerator(wiring.Component):
    """AND-array partial products for a 16x16 unsigned multiply

    pp[i] = multiplier[i] ? multiplicand << i : 0, each 32 bits wide.
    """

    def __init__(self):
        super().__init__(
            {
                "multiplicand": In(OPERAND_WIDTH),
                "multiplier": In(OPERAND_WIDTH),
                "pp": Out(PRODUCT_WIDTH).array(OPERAND_WIDTH),
            }
        )

    def elaborate(self, platform: Platform | None) -> Module:
        m = Module()

        # widen before shifting so the top bits survive
        b_ext = Signal(PRODUCT_WIDTH)
        m.d.comb += b_ext.eq(self.multiplicand)

        for i in range(OPERAND_WIDTH):
            shifted = Signal(PRODUCT_WIDTH, name=f"shifted_{i}")
            m.d.comb += shifted.eq(b_ext << i)
            m.d.comb += self.pp[i].eq(Mux(self.multiplier[i], shifted, 0))

        return m
