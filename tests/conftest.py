"""Pytest configuration and fixtures."""

import pytest

from exchange.devnet import Devnet
from tests.helpers import ALICE, BOB, CAROL, make_devnet, make_seeded_devnet


@pytest.fixture
def empty_devnet() -> Devnet:
    """Empty pool; ALICE and BOB funded and approved, CAROL funded only."""
    devnet = make_devnet(funded=(ALICE, BOB, CAROL), approved=(ALICE, BOB))
    return devnet


@pytest.fixture
def seeded_devnet() -> Devnet:
    """Pool bootstrapped by ALICE at reserves (1000, 1000); BOB approved, CAROL not."""
    devnet = make_seeded_devnet(1000, 1000, ALICE, BOB)
    devnet.fund(CAROL, native=1_000_000, tokens=1_000_000)
    return devnet
