from amaranth import *
from amaranth.build import Platform
from amaranth.lib import wiring
from amaranth.lib.wiring import In, Out


def combine(total: int, carry: int, width: int = 32) -> int:
    return (total + carry) & ((1 << width) - 1)


class FinalAdder(wiring.Component):
    """Carry-propagate add of the last sum/carry pair

    The carry out is dropped: a 16x16 product always fits in 32 bits.
    """

    def __init__(self, width: int = 32):
        if width < 1:
            raise ValueError(f"width must be positive, got {width}")
        self.width = width

        super().__init__(
            {
                "sum": In(width),
                "carry": In(width),
                "result": Out(width),
            }
        )

    def elaborate(self, platform: Platform | None) -> Module:
        m = Module()

        full = Signal(self.width + 1)
        m.d.comb += full.eq(self.sum + self.carry)
        m.d.comb += self.result.eq(full[0 : self.width])

        return m
