import argparse

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--vcd",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="whether to produce vcd files",
    )
    parser.addoption(
        "--seed",
        type=int,
        default=456,
        help="seed for random operand streams",
    )
    parser.addoption(
        "--vectors",
        type=int,
        default=200,
        help="length of random operand streams",
    )


@pytest.fixture
def seed(request):
    return request.config.getoption("--seed")


@pytest.fixture
def vectors(request):
    return request.config.getoption("--vectors")
