from amaranth import *
from amaranth.build import Platform
from amaranth.lib import wiring
from amaranth.lib.wiring import In, Out


def compress(a: int, b: int, c: int, width: int = 32) -> tuple[int, int]:
    """3:2 compressor on plain ints

    Returns (sum, carry) with the carry already shifted into place, so
    sum + carry == a + b + c modulo 2**width.
    """
    mask = (1 << width) - 1
    a, b, c = a & mask, b & mask, c & mask
    total = a ^ b ^ c
    majority = (a & b) | (b & c) | (a & c)
    return total, (majority << 1) & mask


class CarrySaveAdder(wiring.Component):
    """3:2 compressor: three vectors in, sum and shifted carry out

    No carry propagation, so the delay is one full-adder cell regardless
    of width.
    """

    def __init__(self, width: int = 32):
        if width < 1:
            raise ValueError(f"width must be positive, got {width}")
        self.width = width

        super().__init__(
            {
                "a": In(width),
                "b": In(width),
                "c": In(width),
                "sum": Out(width),
                "carry": Out(width),
            }
        )

    def elaborate(self, platform: Platform | None) -> Module:
        m = Module()

        majority = Signal(self.width)

        m.d.comb += self.sum.eq(self.a ^ self.b ^ self.c)
        m.d.comb += majority.eq((self.a & self.b) | (self.b & self.c) | (self.a & self.c))

        # bit 0 of the carry vector is the (absent) carry-in
        m.d.comb += self.carry.eq(Cat(Const(0, 1), majority[: self.width - 1]))

        return m
