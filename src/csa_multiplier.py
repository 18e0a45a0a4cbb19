from amaranth import *
from amaranth.build import Platform
from amaranth.lib import wiring
from amaranth.lib.wiring import In, Out

from final_adder import FinalAdder
from partial_products import OPERAND_WIDTH, PRODUCT_WIDTH, PartialProductGenerator
from reduction_tree import STAGE2_LEVELS, STAGE3_LEVELS, ReductionTree
from validity import LATENCY, ValidityTracker


class CSAMultiplier(wiring.Component):
    """Four-stage pipelined 16x16 -> 32 unsigned multiplier

    Stage 1: partial products -> pp_reg (16 terms)
    Stage 2: CSA levels A-C (16 -> 6) -> mid_reg
    Stage 3: CSA levels D-F (6 -> 2) -> sum_reg, carry_reg
    Stage 4: carry-propagate add -> product

    Operands sampled on edge t come out on edge t + 4 with valid high.
    reset is synchronous and drops anything in flight.
    """

    multiplicand: In(OPERAND_WIDTH)
    multiplier: In(OPERAND_WIDTH)
    reset: In(1)

    product: Out(PRODUCT_WIDTH, init=0)
    valid: Out(1)

    def __init__(self):
        super().__init__()

        self.pp_reg = [Signal(PRODUCT_WIDTH, name=f"pp_reg_{i}") for i in range(OPERAND_WIDTH)]
        self.mid_reg = [Signal(PRODUCT_WIDTH, name=f"mid_reg_{i}") for i in range(STAGE2_LEVELS[-1].outputs)]
        self.sum_reg = Signal(PRODUCT_WIDTH)
        self.carry_reg = Signal(PRODUCT_WIDTH)

    def elaborate(self, platform: Platform | None) -> Module:
        m = Module()

        m.submodules.ppgen = ppgen = PartialProductGenerator()
        m.submodules.stage2 = stage2 = ReductionTree(STAGE2_LEVELS, PRODUCT_WIDTH)
        m.submodules.stage3 = stage3 = ReductionTree(STAGE3_LEVELS, PRODUCT_WIDTH)
        m.submodules.final = final = FinalAdder(PRODUCT_WIDTH)
        m.submodules.validity = validity = ValidityTracker(LATENCY)

        # ---- Combinational stages, fed from the previous bank ----
        m.d.comb += ppgen.multiplicand.eq(self.multiplicand)
        m.d.comb += ppgen.multiplier.eq(self.multiplier)

        for i, reg in enumerate(self.pp_reg):
            m.d.comb += stage2.terms_in[i].eq(reg)

        for i, reg in enumerate(self.mid_reg):
            m.d.comb += stage3.terms_in[i].eq(reg)

        m.d.comb += final.sum.eq(self.sum_reg)
        m.d.comb += final.carry.eq(self.carry_reg)

        # ---- Register banks ----
        m.d.comb += validity.reset.eq(self.reset)

        with m.If(self.reset):
            m.d.sync += [reg.eq(0) for reg in self.pp_reg]
            m.d.sync += [reg.eq(0) for reg in self.mid_reg]
            m.d.sync += [
                self.sum_reg.eq(0),
                self.carry_reg.eq(0),
                self.product.eq(0),
            ]
        with m.Else():
            for i, reg in enumerate(self.pp_reg):
                m.d.sync += reg.eq(ppgen.pp[i])
            for i, reg in enumerate(self.mid_reg):
                m.d.sync += reg.eq(stage2.terms_out[i])
            m.d.sync += [
                self.sum_reg.eq(stage3.terms_out[0]),
                self.carry_reg.eq(stage3.terms_out[1]),
                self.product.eq(final.result),
            ]

        m.d.comb += self.valid.eq(validity.valid)

        return m


if __name__ == "__main__":
    from amaranth.back import verilog

    top = CSAMultiplier()
    with open("csa_multiplier.v", "w") as f:
        f.write(verilog.convert(top, name="csa_multiplier"))
