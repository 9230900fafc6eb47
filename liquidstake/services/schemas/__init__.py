"""Shared dataclasses for liquid-staking services."""

from liquidstake.services.schemas.balances import AccountBalances, PEAQBreakdown
from liquidstake.services.schemas.withdrawals import (
    DailySummary,
    DateGroup,
    GroupedWithdrawals,
    HolderWithdrawals,
    Withdrawal,
    WithdrawalRequest,
    WithdrawalStatus,
)

__all__ = [
    # Balance schemas
    "AccountBalances",
    "PEAQBreakdown",
    # Withdrawal schemas
    "DailySummary",
    "DateGroup",
    "GroupedWithdrawals",
    "HolderWithdrawals",
    "Withdrawal",
    "WithdrawalRequest",
    "WithdrawalStatus",
]
