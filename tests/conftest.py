"""Shared fixtures: an in-memory stand-in for the chain client."""

from collections.abc import Generator

import pytest

from fakes import DAY, ETHER, HOLDER_A, HOLDER_B, NOW, ZERO, FakeChainClient, transfer


@pytest.fixture()
def fake_chain() -> FakeChainClient:
    return FakeChainClient()


@pytest.fixture()
def populated_chain(fake_chain: FakeChainClient) -> Generator[FakeChainClient, None, None]:
    """Two holders: A has one pending and one claimable request, B one pending."""
    fake_chain.transfers = [
        transfer(ZERO, HOLDER_A),
        transfer(ZERO, HOLDER_B),
        transfer(HOLDER_A, HOLDER_B),
    ]
    fake_chain.requests = {
        HOLDER_A: [(10 * ETHER, NOW + DAY), (5 * ETHER, NOW - DAY)],
        HOLDER_B: [(15 * ETHER, NOW + DAY + 3_600)],
    }
    yield fake_chain
