from amaranth import *
from amaranth.build import Platform
from amaranth.lib import wiring
from amaranth.lib.wiring import In, Out

LATENCY = 4


def advance_validity(chain: int, reset: bool, depth: int = LATENCY) -> int:
    """Next value of the validity shift register

    Every running edge injects a token at bit 0; reset clears the chain.
    """
    if reset:
        return 0
    return ((chain << 1) | 1) & ((1 << depth) - 1)


def is_valid(chain: int, depth: int = LATENCY) -> bool:
    return bool((chain >> (depth - 1)) & 1)


class ValidityTracker(wiring.Component):
    """Shift register mirroring the data pipeline depth

    valid rises on the depth-th running edge after reset is released and
    stays high until the next reset.
    """

    def __init__(self, depth: int = LATENCY):
        if depth < 1:
            raise ValueError(f"depth must be positive, got {depth}")
        self.depth = depth

        super().__init__(
            {
                "reset": In(1),
                "valid": Out(1),
            }
        )

    def elaborate(self, platform: Platform | None) -> Module:
        m = Module()

        chain = Signal(self.depth)

        with m.If(self.reset):
            m.d.sync += chain.eq(0)
        with m.Else():
            m.d.sync += chain.eq(Cat(Const(1, 1), chain[: self.depth - 1]))

        m.d.comb += self.valid.eq(chain[self.depth - 1])

        return m
