"""Withdrawal grouping and pool balance partitioning.

Everything here is a pure function of its arguments: callers pass the
reference time explicitly so one fetch is classified against a single "now".
"""

from collections.abc import Iterable

from liquidstake.services._helpers import utc_date
from liquidstake.services.schemas import (
    DailySummary,
    DateGroup,
    GroupedWithdrawals,
    PEAQBreakdown,
    Withdrawal,
    WithdrawalRequest,
    WithdrawalStatus,
)


def classify(unlock_time: int, now: int) -> WithdrawalStatus:
    """Pending strictly before the unlock second; claimable from it onwards."""
    if unlock_time > now:
        return WithdrawalStatus.PENDING
    return WithdrawalStatus.COMPLETED


def to_withdrawals(
    holder_address: str, requests: Iterable[WithdrawalRequest], now: int
) -> list[Withdrawal]:
    return [
        Withdrawal(
            amount=req.amount,
            unlock_time=req.unlock_time,
            status=classify(req.unlock_time, now),
            holder_address=holder_address,
        )
        for req in requests
    ]


def group_by_unlock_date(withdrawals: Iterable[Withdrawal]) -> GroupedWithdrawals:
    grouped: GroupedWithdrawals = {}
    for w in withdrawals:
        group: DateGroup = grouped.setdefault(utc_date(w.unlock_time), DateGroup())
        group.total_amount += w.amount
        group.withdrawals.append(w)
    return grouped


def sorted_groups(grouped: GroupedWithdrawals) -> list[tuple[str, DateGroup]]:
    # YYYY-MM-DD is zero padded, so string order is date order.
    return sorted(grouped.items(), key=lambda item: item[0])


def summarize_pending(withdrawals: Iterable[Withdrawal]) -> list[DailySummary]:
    totals: dict[str, list[int]] = {}
    for w in withdrawals:
        if w.status is not WithdrawalStatus.PENDING:
            continue
        bucket = totals.setdefault(utc_date(w.unlock_time), [0, 0])
        bucket[0] += w.amount
        bucket[1] += 1

    return [
        DailySummary(date=day, total_amount=amount, request_count=count)
        for day, (amount, count) in sorted(totals.items())
    ]


def pending_total(withdrawals: Iterable[Withdrawal]) -> int:
    return sum(w.amount for w in withdrawals if w.status is WithdrawalStatus.PENDING)


def partition_balance(
    total_staked: int, with_collators: int, pending_withdrawal: int
) -> PEAQBreakdown:
    """Split the pool; the remainder is not clamped, see PEAQBreakdown.is_consistent."""
    return PEAQBreakdown(
        total_staked=total_staked,
        with_collators=with_collators,
        pending_withdrawal=pending_withdrawal,
        available_for_staking=total_staked - with_collators - pending_withdrawal,
    )
