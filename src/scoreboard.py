import logging
from collections import deque

import numpy as np

from array_multiplier import golden_product
from partial_products import OPERAND_WIDTH
from validity import LATENCY

logger = logging.getLogger(__name__)

CORNER_CASES = [
    # (multiplier, multiplicand, expected)
    (0, 12345, 0),
    (1, 54321, 54321),
    (65535, 65535, 4294836225),
    (65535, 1, 65535),
    (256, 256, 65536),
    (10, 20, 200),
]


def random_operands(count: int, seed: int = 0) -> list[tuple[int, int]]:
    """Uniform (multiplicand, multiplier) pairs over the full 16-bit range"""
    rng = np.random.default_rng(seed)
    pairs = rng.integers(0, 1 << OPERAND_WIDTH, size=(count, 2), dtype=np.int64)
    return [(int(a), int(b)) for a, b in pairs]


class Scoreboard:
    """Checks a pipelined multiplier against the delayed golden product

    Call cycle() once per clock edge with the inputs that were driven
    before the edge and the outputs observed after it.
    """

    def __init__(self, latency: int = LATENCY, strict: bool = False):
        self.latency = latency
        self.strict = strict
        self.in_flight = deque(maxlen=latency)
        self.checked = 0
        self.mismatches = 0
        self.latency_errors = 0

    def flush(self):
        self.in_flight.clear()

    def cycle(self, multiplicand: int, multiplier: int, reset: bool, product: int, valid: bool):
        if reset:
            self.flush()
            expect_valid = False
        else:
            self.in_flight.append((multiplicand, multiplier))
            expect_valid = len(self.in_flight) == self.latency

        if bool(valid) != expect_valid:
            self.latency_errors += 1
            logger.warning("valid=%d but expected %d (%d ops in flight)", valid, expect_valid, len(self.in_flight))
            if self.strict:
                raise AssertionError(f"valid={valid}, expected {expect_valid}")

        if valid and expect_valid:
            a, b = self.in_flight[0]
            expected = golden_product(a, b)
            self.checked += 1
            if product != expected:
                self.mismatches += 1
                logger.warning("%d * %d: got %d (0x%08x), expected %d", a, b, product, product, expected)
                if self.strict:
                    raise AssertionError(f"{a} * {b}: got {product}, expected {expected}")

    @property
    def errors(self) -> int:
        return self.mismatches + self.latency_errors

    def report(self) -> str:
        summary = f"{self.checked} checked, {self.mismatches} mismatches, {self.latency_errors} latency errors"
        logger.info(summary)
        return summary
