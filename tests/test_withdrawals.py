"""Tests for liquidstake.services.withdrawals."""

import pytest

from liquidstake.services._helpers import MAX_TIMESTAMP
from liquidstake.services.errors import HolderScanError, MalformedRequestError, RPCError
from liquidstake.services.schemas import HolderWithdrawals, Withdrawal, WithdrawalStatus
from liquidstake.services.withdrawals import HOLDER_FETCH_ERROR, WithdrawalService
from fakes import (
    DAY,
    ETHER,
    HOLDER_A,
    HOLDER_B,
    HOLDER_C,
    NOW,
    ZERO,
    FakeChainClient,
    transfer,
)


def _svc(chain: FakeChainClient) -> WithdrawalService:
    return WithdrawalService(chain, max_workers=4, genesis_block=0)


class TestTokenHolders:
    def test_first_seen_order_without_duplicates(self, populated_chain: FakeChainClient) -> None:
        assert _svc(populated_chain).get_token_holders() == [HOLDER_A, HOLDER_B]

    def test_burns_to_zero_address_ignored(self, fake_chain: FakeChainClient) -> None:
        fake_chain.transfers = [transfer(ZERO, HOLDER_A), transfer(HOLDER_A, ZERO)]
        assert _svc(fake_chain).get_token_holders() == [HOLDER_A]

    def test_lowercase_addresses_checksummed(self, fake_chain: FakeChainClient) -> None:
        lower: str = "0xabcdef0123456789abcdef0123456789abcdef01"
        fake_chain.transfers = [transfer(ZERO, lower)]
        holders: list[str] = _svc(fake_chain).get_token_holders()
        assert holders[0].lower() == lower
        assert holders[0] != lower

    def test_no_transfers(self, fake_chain: FakeChainClient) -> None:
        assert _svc(fake_chain).get_token_holders() == []

    def test_scan_failure_raises(self, fake_chain: FakeChainClient) -> None:
        fake_chain.scan_error = RPCError("eth_getLogs failed")
        with pytest.raises(HolderScanError):
            _svc(fake_chain).get_token_holders()


class TestFetchHolderWithdrawals:
    def test_reads_every_holder(self, populated_chain: FakeChainClient) -> None:
        result: list[HolderWithdrawals] = _svc(populated_chain).fetch_holder_withdrawals()
        assert [h.address for h in result] == [HOLDER_A, HOLDER_B]
        assert [len(h.requests) for h in result] == [2, 1]
        assert all(h.error is None for h in result)

    def test_failed_holder_does_not_abort_others(self, populated_chain: FakeChainClient) -> None:
        populated_chain.transfers.append(transfer(ZERO, HOLDER_C))
        populated_chain.requests[HOLDER_C] = [(1 * ETHER, NOW + DAY)]
        populated_chain.failing_holders = {HOLDER_A}

        result = _svc(populated_chain).fetch_holder_withdrawals()
        by_addr: dict[str, HolderWithdrawals] = {h.address: h for h in result}
        assert by_addr[HOLDER_A].error == HOLDER_FETCH_ERROR
        assert by_addr[HOLDER_A].requests == []
        assert len(by_addr[HOLDER_B].requests) == 1
        assert len(by_addr[HOLDER_C].requests) == 1

    def test_no_holders(self, fake_chain: FakeChainClient) -> None:
        assert _svc(fake_chain).fetch_holder_withdrawals() == []


class TestFetchWithdrawals:
    def test_flattens_and_classifies(self, populated_chain: FakeChainClient) -> None:
        result: list[Withdrawal] = _svc(populated_chain).fetch_withdrawals(NOW)
        assert len(result) == 3
        statuses: list[tuple[str, int, WithdrawalStatus]] = [
            (w.holder_address, w.amount, w.status) for w in result
        ]
        assert (HOLDER_A, 10 * ETHER, WithdrawalStatus.PENDING) in statuses
        assert (HOLDER_A, 5 * ETHER, WithdrawalStatus.COMPLETED) in statuses
        assert (HOLDER_B, 15 * ETHER, WithdrawalStatus.PENDING) in statuses

    def test_failed_holder_excluded(self, populated_chain: FakeChainClient) -> None:
        populated_chain.failing_holders = {HOLDER_B}
        result = _svc(populated_chain).fetch_withdrawals(NOW)
        assert {w.holder_address for w in result} == {HOLDER_A}

    def test_dict_shaped_requests(self, fake_chain: FakeChainClient) -> None:
        fake_chain.transfers = [transfer(ZERO, HOLDER_A)]
        fake_chain.requests = {HOLDER_A: [{"amount": 3, "unlockTime": NOW}]}
        result = _svc(fake_chain).fetch_withdrawals(NOW)
        assert result[0].amount == 3
        assert result[0].is_claimable


def test_claimable_flags_per_index(fake_chain: FakeChainClient) -> None:
    fake_chain.claimable = {(HOLDER_A, 0): True, (HOLDER_A, 2): True}
    assert _svc(fake_chain).get_claimable_flags(HOLDER_A, 3) == [True, False, True]
    assert _svc(fake_chain).get_claimable_flags(HOLDER_A, 0) == []


class TestUnlockTimeRange:
    def test_out_of_range_marks_only_that_holder(self, populated_chain: FakeChainClient) -> None:
        populated_chain.requests[HOLDER_A] = [(ETHER, NOW + DAY), (ETHER, 2**64)]
        result = _svc(populated_chain).fetch_holder_withdrawals()
        by_addr: dict[str, HolderWithdrawals] = {h.address: h for h in result}
        assert by_addr[HOLDER_A].error == HOLDER_FETCH_ERROR
        assert by_addr[HOLDER_A].requests == []
        assert by_addr[HOLDER_B].error is None

    def test_direct_read_raises(self, populated_chain: FakeChainClient) -> None:
        populated_chain.requests[HOLDER_A] = [(ETHER, 2**64)]
        with pytest.raises(MalformedRequestError):
            _svc(populated_chain).get_withdrawal_requests(HOLDER_A)

    def test_latest_renderable_second_accepted(self, fake_chain: FakeChainClient) -> None:
        fake_chain.requests = {HOLDER_A: [(ETHER, MAX_TIMESTAMP)]}
        [req] = _svc(fake_chain).get_withdrawal_requests(HOLDER_A)
        assert req.unlock_time == MAX_TIMESTAMP
