"""Typed dicts for service-layer return values.

Keeps route-facing methods explicit about their shape instead of returning bare dicts.
Amounts are wei rendered as decimal strings so they survive JSON intact.
"""

import sys

if sys.version_info >= (3, 12):
    from typing import NotRequired, TypedDict
else:
    from typing_extensions import NotRequired, TypedDict


# -- Withdrawals -----------------------------------------------------------


class WithdrawalRequestDict(TypedDict):
    amount: str
    unlockTime: str
    isClaimable: bool


class HolderWithdrawalsDict(TypedDict):
    address: str
    requests: list[WithdrawalRequestDict]
    error: NotRequired[str]


class DailySummaryDict(TypedDict):
    date: str
    totalAmount: str
    requestCount: int


class TrackingRowDict(TypedDict):
    date: str
    totalAmount: str
    withdrawalCount: int
    status: str


class UserWithdrawalDict(TypedDict):
    index: int
    amount: str
    unlockTime: str
    isClaimable: bool


# -- Balances --------------------------------------------------------------


class BreakdownDict(TypedDict):
    totalStaked: str
    withCollators: str
    pendingWithdrawal: str
    availableForStaking: str
    consistent: bool


class AccountBalancesDict(TypedDict):
    address: str
    stPeaq: str
    peaq: str


class StakingParamsDict(TypedDict):
    stakingLimit: str
    withdrawalDelay: int


# -- Health ----------------------------------------------------------------


class ChainInfoDict(TypedDict, total=False):
    rpc_url: str
    connected: bool
    chain_id: int | None
    expected_chain_id: int
    chain_id_matches: bool
    latest_block: int | None
    error: str
