"""Withdrawal response schemas."""

from app.schemas.common import CamelModel


class WithdrawalRequestResponse(CamelModel):
    amount: str
    unlock_time: str
    is_claimable: bool


class HolderWithdrawalsResponse(CamelModel):
    address: str
    requests: list[WithdrawalRequestResponse]
    error: str | None = None


class DailySummaryResponse(CamelModel):
    date: str
    total_amount: str
    request_count: int


class TrackingRowResponse(CamelModel):
    date: str
    total_amount: str
    withdrawal_count: int
    status: str


class UserWithdrawalResponse(CamelModel):
    index: int
    amount: str
    unlock_time: str
    is_claimable: bool
