"""Admin request/response schemas.

Bodies accept loose types; the routes validate them and answer 400 with
an ``error`` message rather than a pydantic 422.
"""

from pydantic import Field

from app.schemas.common import CamelModel


class StakingLimitRequest(CamelModel):
    limit: str | float | None = Field(None, description="New limit in PEAQ")


class TransferOwnershipRequest(CamelModel):
    new_owner: str | None = None


class WithdrawalDelayRequest(CamelModel):
    days: str | float | None = Field(None, description="Delay in days")


class CollatorWhitelistRequest(CamelModel):
    collator_address: str | None = None
    status: bool = True


class TransactionResponse(CamelModel):
    success: bool = True
    hash: str


class DistributeRewardsRequest(CamelModel):
    amount: str | float | None = Field(None, description="Rewards in PEAQ, sent as call value")


class WithdrawStakedRequest(CamelModel):
    amount: str | float | None = Field(None, description="Amount in PEAQ")
    collator: str | None = None
