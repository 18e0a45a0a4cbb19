"""Cycle-accurate software model of the CSA multiplier pipeline

Mirrors csa_multiplier.CSAMultiplier edge for edge. The whole next state
is built from the pre-edge state before anything is replaced, which is
what the sync domain does in hardware.
"""

from dataclasses import dataclass, field

from final_adder import combine
from partial_products import OPERAND_WIDTH, PRODUCT_WIDTH, partial_products
from reduction_tree import STAGE2_LEVELS, STAGE3_LEVELS, reduce_levels
from validity import LATENCY, advance_validity, is_valid

MID_TERMS = STAGE2_LEVELS[-1].outputs


@dataclass(frozen=True)
class PipelineState:
    pp: tuple[int, ...] = field(default=(0,) * OPERAND_WIDTH)
    mid: tuple[int, ...] = field(default=(0,) * MID_TERMS)
    final_sum: int = 0
    final_carry: int = 0
    product: int = 0
    validity: int = 0

    @property
    def valid(self) -> bool:
        return is_valid(self.validity, LATENCY)

    def is_zero(self) -> bool:
        return (
            not any(self.pp)
            and not any(self.mid)
            and self.final_sum == 0
            and self.final_carry == 0
            and self.product == 0
            and self.validity == 0
        )


def advance(state: PipelineState, multiplicand: int, multiplier: int, reset: bool = False) -> PipelineState:
    """One clock edge: every bank loads from the bank before it"""
    if reset:
        return PipelineState()

    operand_mask = (1 << OPERAND_WIDTH) - 1

    final_sum, final_carry = reduce_levels(state.mid, STAGE3_LEVELS, PRODUCT_WIDTH)

    return PipelineState(
        pp=partial_products(multiplicand & operand_mask, multiplier & operand_mask),
        mid=reduce_levels(state.pp, STAGE2_LEVELS, PRODUCT_WIDTH),
        final_sum=final_sum,
        final_carry=final_carry,
        product=combine(state.final_sum, state.final_carry, PRODUCT_WIDTH),
        validity=advance_validity(state.validity, False, LATENCY),
    )


class MultiplierModel:
    def __init__(self):
        self.state = PipelineState()
        self.cycle = 0

    def reset(self):
        self.step(0, 0, reset=True)

    def step(self, multiplicand: int, multiplier: int, reset: bool = False) -> tuple[int, bool]:
        self.state = advance(self.state, multiplicand, multiplier, reset)
        self.cycle += 1
        return self.state.product, self.state.valid

    def run(self, operands) -> list[tuple[int, bool]]:
        return [self.step(a, b) for a, b in operands]
