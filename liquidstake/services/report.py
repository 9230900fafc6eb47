"""JSON-ready withdrawal and balance views shared by the API and the CLI."""

import structlog

from liquidstake.services._helpers import iso_from_ts
from liquidstake.services._types import (
    AccountBalancesDict,
    BreakdownDict,
    DailySummaryDict,
    HolderWithdrawalsDict,
    StakingParamsDict,
    TrackingRowDict,
    UserWithdrawalDict,
    WithdrawalRequestDict,
)
from liquidstake.services.aggregation import (
    classify,
    group_by_unlock_date,
    sorted_groups,
    summarize_pending,
)
from liquidstake.services.balances import BalanceService
from liquidstake.services.chain_client import ChainClient
from liquidstake.services.schemas import (
    AccountBalances,
    HolderWithdrawals,
    PEAQBreakdown,
    WithdrawalStatus,
)
from liquidstake.services.withdrawals import WithdrawalService

logger = structlog.get_logger(__name__)


class ReportService:
    """Fetches once per call and shapes the result for display."""

    def __init__(
        self,
        chain: ChainClient,
        withdrawals: WithdrawalService | None = None,
        balances: BalanceService | None = None,
    ) -> None:
        self.withdrawals: WithdrawalService = withdrawals or WithdrawalService(chain)
        self.balances: BalanceService = balances or BalanceService(chain, self.withdrawals)

    # ------------------------------------------------------------------
    # Withdrawals
    # ------------------------------------------------------------------

    def holder_withdrawals(self, now: int) -> list[HolderWithdrawalsDict]:
        return [self._holder_dict(h, now) for h in self.withdrawals.fetch_holder_withdrawals()]

    @staticmethod
    def _holder_dict(holder: HolderWithdrawals, now: int) -> HolderWithdrawalsDict:
        out = HolderWithdrawalsDict(
            address=holder.address,
            requests=[
                WithdrawalRequestDict(
                    amount=str(req.amount),
                    unlockTime=iso_from_ts(req.unlock_time),
                    isClaimable=classify(req.unlock_time, now) is WithdrawalStatus.COMPLETED,
                )
                for req in holder.requests
            ],
        )
        if holder.error:
            out["error"] = holder.error
        return out

    def daily_summary(self, now: int) -> list[DailySummaryDict]:
        summaries = summarize_pending(self.withdrawals.fetch_withdrawals(now))
        logger.debug("Pending daily summary built", days=len(summaries))
        return [
            DailySummaryDict(
                date=s.date, totalAmount=str(s.total_amount), requestCount=s.request_count
            )
            for s in summaries
        ]

    def tracking(self, now: int) -> list[TrackingRowDict]:
        grouped = group_by_unlock_date(self.withdrawals.fetch_withdrawals(now))
        return [
            TrackingRowDict(
                date=day,
                totalAmount=str(group.total_amount),
                withdrawalCount=len(group.withdrawals),
                status="Pending" if group.has_pending else "Completed",
            )
            for day, group in sorted_groups(grouped)
        ]

    def user_withdrawals(self, address: str) -> list[UserWithdrawalDict]:
        """One holder's requests with the contract's own claimability verdict."""
        requests = self.withdrawals.get_withdrawal_requests(address)
        flags: list[bool] = self.withdrawals.get_claimable_flags(address, len(requests))
        return [
            UserWithdrawalDict(
                index=i,
                amount=str(req.amount),
                unlockTime=iso_from_ts(req.unlock_time),
                isClaimable=flag,
            )
            for i, (req, flag) in enumerate(zip(requests, flags, strict=True))
        ]

    # ------------------------------------------------------------------
    # Balances
    # ------------------------------------------------------------------

    def breakdown(self, now: int) -> BreakdownDict:
        b: PEAQBreakdown = self.balances.get_breakdown(now)
        return BreakdownDict(
            totalStaked=str(b.total_staked),
            withCollators=str(b.with_collators),
            pendingWithdrawal=str(b.pending_withdrawal),
            availableForStaking=str(b.available_for_staking),
            consistent=b.is_consistent,
        )

    def account_balances(self, address: str) -> AccountBalancesDict:
        a: AccountBalances = self.balances.get_account_balances(address)
        return AccountBalancesDict(address=a.address, stPeaq=str(a.st_peaq), peaq=str(a.peaq))

    def staking_params(self) -> StakingParamsDict:
        return StakingParamsDict(
            stakingLimit=str(self.balances.get_staking_limit()),
            withdrawalDelay=self.balances.get_withdrawal_delay(),
        )
