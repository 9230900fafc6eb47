"""Withdrawal request reads across every receipt-token holder."""

from concurrent.futures import ThreadPoolExecutor
from typing import Any

import structlog
from web3 import Web3

from config import ZERO_ADDRESS, get_settings
from liquidstake.services._helpers import MAX_TIMESTAMP
from liquidstake.services.aggregation import to_withdrawals
from liquidstake.services.chain_client import LIQUID_STAKING, ST_PEAQ, ChainClient
from liquidstake.services.errors import HolderScanError, MalformedRequestError
from liquidstake.services.schemas import HolderWithdrawals, Withdrawal, WithdrawalRequest

logger = structlog.get_logger(__name__)

HOLDER_FETCH_ERROR: str = "Failed to fetch withdrawals"


def _parse_request(raw: Any) -> WithdrawalRequest:
    if isinstance(raw, dict):
        amount, unlock_time = int(raw["amount"]), int(raw["unlockTime"])
    else:
        amount, unlock_time = int(raw[0]), int(raw[1])
    if not 0 <= unlock_time <= MAX_TIMESTAMP:
        raise MalformedRequestError(f"unlockTime {unlock_time} out of range")
    return WithdrawalRequest(amount=amount, unlock_time=unlock_time)


class WithdrawalService:
    """Reads withdrawal requests for all stPEAQ holders. Read-only."""

    def __init__(
        self,
        chain: ChainClient,
        max_workers: int | None = None,
        genesis_block: int | None = None,
    ) -> None:
        settings = get_settings()
        self.chain: ChainClient = chain
        self.max_workers: int = max_workers or settings.chain.max_workers
        self.genesis_block: int = (
            settings.chain.genesis_block if genesis_block is None else genesis_block
        )

    def get_token_holders(self) -> list[str]:
        """Every address that ever received stPEAQ, in first-seen order."""
        try:
            events = self.chain.get_contract_events(
                ST_PEAQ, "Transfer", from_block=self.genesis_block
            )
        except Exception as e:
            raise HolderScanError(f"Transfer log scan failed: {e}") from e

        seen: dict[str, None] = {}
        for event in events:
            to_addr: str = event["args"]["to"]
            if to_addr.lower() == ZERO_ADDRESS:
                continue
            seen.setdefault(Web3.to_checksum_address(to_addr), None)

        logger.debug("Token holders scanned", events=len(events), holders=len(seen))
        return list(seen)

    def get_withdrawal_requests(self, address: str) -> list[WithdrawalRequest]:
        raw = self.chain.read_contract(LIQUID_STAKING, "getWithdrawalRequests", address)
        return [_parse_request(r) for r in raw]

    def _fetch_holder(self, address: str) -> HolderWithdrawals:
        try:
            return HolderWithdrawals(address=address, requests=self.get_withdrawal_requests(address))
        except Exception as e:
            logger.warning("Holder withdrawal read failed", address=address, error=str(e)[:200])
            return HolderWithdrawals(address=address, error=HOLDER_FETCH_ERROR)

    def fetch_holder_withdrawals(self) -> list[HolderWithdrawals]:
        """Requests per holder; a failed holder carries an error and no requests."""
        holders: list[str] = self.get_token_holders()
        if not holders:
            return []

        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(holders))) as pool:
            results: list[HolderWithdrawals] = list(pool.map(self._fetch_holder, holders))

        failed: int = sum(1 for r in results if r.error)
        if failed:
            logger.warning("Some holders skipped", failed=failed, total=len(results))
        return results

    def fetch_withdrawals(self, now: int) -> list[Withdrawal]:
        """Flat view models for every holder that could be read."""
        withdrawals: list[Withdrawal] = []
        for holder in self.fetch_holder_withdrawals():
            withdrawals.extend(to_withdrawals(holder.address, holder.requests, now))
        return withdrawals

    def get_claimable_flags(self, address: str, count: int) -> list[bool]:
        """Contract-side claimability for request indices 0..count-1."""
        return [
            bool(self.chain.read_contract(LIQUID_STAKING, "isWithdrawalClaimable", address, index))
            for index in range(count)
        ]
