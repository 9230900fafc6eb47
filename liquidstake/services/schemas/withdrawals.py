"""Withdrawal data transfer objects."""

from dataclasses import dataclass, field
from enum import Enum


class WithdrawalStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"


@dataclass(frozen=True)
class WithdrawalRequest:
    """One entry of LiquidStaking.getWithdrawalRequests, amounts in wei."""

    amount: int
    unlock_time: int


@dataclass(frozen=True)
class Withdrawal:
    amount: int
    unlock_time: int
    status: WithdrawalStatus
    holder_address: str

    @property
    def is_claimable(self) -> bool:
        return self.status is WithdrawalStatus.COMPLETED


@dataclass
class HolderWithdrawals:
    address: str
    requests: list[WithdrawalRequest] = field(default_factory=list)
    error: str | None = None


@dataclass
class DateGroup:
    total_amount: int = 0
    withdrawals: list[Withdrawal] = field(default_factory=list)

    @property
    def has_pending(self) -> bool:
        return any(w.status is WithdrawalStatus.PENDING for w in self.withdrawals)


@dataclass(frozen=True)
class DailySummary:
    date: str
    total_amount: int
    request_count: int


GroupedWithdrawals = dict[str, DateGroup]
