"""Pool balance breakdown and per-account balances."""

from concurrent.futures import Future, ThreadPoolExecutor

import structlog
from web3 import Web3

from liquidstake.services.aggregation import partition_balance, pending_total
from liquidstake.services.chain_client import LIQUID_STAKING, ST_PEAQ, ChainClient
from liquidstake.services.errors import BalanceFetchError
from liquidstake.services.schemas import AccountBalances, PEAQBreakdown
from liquidstake.services.withdrawals import WithdrawalService

logger = structlog.get_logger(__name__)


class BalanceService:
    """Reads pool and account balances from the staking contracts."""

    def __init__(self, chain: ChainClient, withdrawals: WithdrawalService | None = None) -> None:
        self.chain: ChainClient = chain
        self.withdrawals: WithdrawalService = withdrawals or WithdrawalService(chain)

    def get_total_staked(self) -> int:
        return int(self.chain.read_contract(LIQUID_STAKING, "getTotalStaked"))

    def get_pool_liquid_balance(self) -> int:
        """Native PEAQ held by the staking contract itself, i.e. not with collators."""
        return self.chain.get_balance(self.chain.address_of(LIQUID_STAKING))

    def get_staking_limit(self) -> int:
        return int(self.chain.read_contract(LIQUID_STAKING, "stakingLimit"))

    def get_withdrawal_delay(self) -> int:
        return int(self.chain.read_contract(LIQUID_STAKING, "withdrawalDelay"))

    def get_breakdown(self, now: int) -> PEAQBreakdown:
        """Total staked, with collators, pending withdrawals and what is left to stake.

        The three inputs are read concurrently and joined; any failure fails the
        whole breakdown.
        """
        with ThreadPoolExecutor(max_workers=3) as pool:
            total_f: Future[int] = pool.submit(self.get_total_staked)
            liquid_f: Future[int] = pool.submit(self.get_pool_liquid_balance)
            pending_f: Future[int] = pool.submit(
                lambda: pending_total(self.withdrawals.fetch_withdrawals(now))
            )
            try:
                total_staked: int = total_f.result()
                liquid: int = liquid_f.result()
                pending: int = pending_f.result()
            except Exception as e:
                raise BalanceFetchError(f"Balance read failed: {e}") from e

        breakdown: PEAQBreakdown = partition_balance(
            total_staked=total_staked,
            with_collators=total_staked - liquid,
            pending_withdrawal=pending,
        )
        if not breakdown.is_consistent:
            logger.warning(
                "Pool breakdown is negative",
                total_staked=str(breakdown.total_staked),
                with_collators=str(breakdown.with_collators),
                pending_withdrawal=str(breakdown.pending_withdrawal),
                available_for_staking=str(breakdown.available_for_staking),
            )
        return breakdown

    def get_account_balances(self, address: str) -> AccountBalances:
        address = Web3.to_checksum_address(address)
        return AccountBalances(
            address=address,
            st_peaq=int(self.chain.read_contract(ST_PEAQ, "balanceOf", address)),
            peaq=self.chain.get_balance(address),
        )
