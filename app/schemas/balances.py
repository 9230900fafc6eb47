"""Pool and account balance schemas."""

from app.schemas.common import CamelModel


class BreakdownResponse(CamelModel):
    total_staked: str
    with_collators: str
    pending_withdrawal: str
    available_for_staking: str
    consistent: bool


class AccountBalancesResponse(CamelModel):
    address: str
    st_peaq: str
    peaq: str


class StakingParamsResponse(CamelModel):
    staking_limit: str
    withdrawal_delay: int
