"""Pool balance data transfer objects."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PEAQBreakdown:
    total_staked: int
    with_collators: int
    pending_withdrawal: int
    available_for_staking: int

    @property
    def is_consistent(self) -> bool:
        # Negative availability means the reads disagree with each other.
        return self.available_for_staking >= 0


@dataclass(frozen=True)
class AccountBalances:
    address: str
    st_peaq: int
    peaq: int
