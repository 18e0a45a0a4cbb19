from dataclasses import dataclass

from amaranth import *
from amaranth.build import Platform
from amaranth.lib import wiring
from amaranth.lib.wiring import In, Out

from csa import CarrySaveAdder, compress


@dataclass(frozen=True)
class Level:
    """One row of compressors in the reduction tree

    Each group is a triple of input indices fed to one compressor. Outputs
    are ordered sum_0, carry_0, sum_1, carry_1, ... followed by the
    passthrough terms in the order listed.
    """

    name: str
    inputs: int
    groups: tuple[tuple[int, int, int], ...]
    passthrough: tuple[int, ...]

    def __post_init__(self):
        used = []
        for group in self.groups:
            if len(group) != 3:
                raise ValueError(f"level {self.name}: compressor group {group} is not a triple")
            used.extend(group)
        used.extend(self.passthrough)
        if sorted(used) != list(range(self.inputs)):
            raise ValueError(f"level {self.name}: every one of {self.inputs} inputs must be used exactly once")

    @property
    def outputs(self) -> int:
        return 2 * len(self.groups) + len(self.passthrough)


# 16 -> 11 -> 8 -> 6 | 6 -> 4 -> 3 -> 2
LEVEL_A = Level("A", 16, ((0, 1, 2), (3, 4, 5), (6, 7, 8), (9, 10, 11), (12, 13, 14)), (15,))
LEVEL_B = Level("B", 11, ((0, 1, 2), (3, 4, 5), (6, 7, 8)), (9, 10))
LEVEL_C = Level("C", 8, ((0, 1, 2), (3, 4, 5)), (6, 7))
LEVEL_D = Level("D", 6, ((0, 1, 2), (3, 4, 5)), ())
LEVEL_E = Level("E", 4, ((0, 1, 2),), (3,))
LEVEL_F = Level("F", 3, ((0, 1, 2),), ())

LEVELS = (LEVEL_A, LEVEL_B, LEVEL_C, LEVEL_D, LEVEL_E, LEVEL_F)

# the 6-term output of stage 2 is registered before stage 3
STAGE2_LEVELS = (LEVEL_A, LEVEL_B, LEVEL_C)
STAGE3_LEVELS = (LEVEL_D, LEVEL_E, LEVEL_F)


def check_chain(levels) -> None:
    for prev, cur in zip(levels, levels[1:]):
        if prev.outputs != cur.inputs:
            raise ValueError(f"level {prev.name} emits {prev.outputs} terms but level {cur.name} takes {cur.inputs}")


check_chain(LEVELS)


def reduce_level(terms, level: Level, width: int = 32) -> tuple[int, ...]:
    if len(terms) != level.inputs:
        raise ValueError(f"level {level.name} takes {level.inputs} terms, got {len(terms)}")

    out = []
    for x, y, z in level.groups:
        out.extend(compress(terms[x], terms[y], terms[z], width))
    out.extend(terms[i] for i in level.passthrough)
    return tuple(out)


def reduce_levels(terms, levels, width: int = 32) -> tuple[int, ...]:
    terms = tuple(terms)
    for level in levels:
        terms = reduce_level(terms, level, width)
    return terms


class ReductionTree(wiring.Component):
    """Combinational CSA tree built from a level table

    Every compressor is a CarrySaveAdder submodule named after its level
    and position, e.g. csa_A_3.
    """

    def __init__(self, levels=LEVELS, width: int = 32):
        levels = tuple(levels)
        if not levels:
            raise ValueError("reduction tree needs at least one level")
        check_chain(levels)

        self.levels = levels
        self.width = width

        super().__init__(
            {
                "terms_in": In(width).array(levels[0].inputs),
                "terms_out": Out(width).array(levels[-1].outputs),
            }
        )

    def elaborate(self, platform: Platform | None) -> Module:
        m = Module()

        terms = [self.terms_in[i] for i in range(self.levels[0].inputs)]

        for level in self.levels:
            nxt = []
            for n, (x, y, z) in enumerate(level.groups):
                csa = CarrySaveAdder(self.width)
                m.submodules[f"csa_{level.name}_{n}"] = csa

                m.d.comb += csa.a.eq(terms[x])
                m.d.comb += csa.b.eq(terms[y])
                m.d.comb += csa.c.eq(terms[z])

                nxt.append(csa.sum)
                nxt.append(csa.carry)

            nxt.extend(terms[i] for i in level.passthrough)
            terms = nxt

        for i, term in enumerate(terms):
            m.d.comb += self.terms_out[i].eq(term)

        return m
