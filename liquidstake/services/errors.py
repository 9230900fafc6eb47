"""Shared exception hierarchy for liquid-staking services."""

# ── Chain ─────────────────────────────────────────────────────────────────────


class ChainClientError(Exception):
    """Base exception for chain client errors."""


class RPCError(ChainClientError):
    """RPC call failed."""


class ChainConnectionError(ChainClientError):
    """Cannot connect to RPC endpoint."""


class ContractNotConfiguredError(ChainClientError):
    """Contract address is unset or its ABI cannot be loaded."""


# ── Withdrawals ───────────────────────────────────────────────────────────────


class WithdrawalFetchError(Exception):
    """Base exception for withdrawal read errors."""


class HolderScanError(WithdrawalFetchError):
    """Transfer log scan for receipt-token holders failed."""


class MalformedRequestError(WithdrawalFetchError):
    """A withdrawal request read from the contract cannot be represented."""



# ── Balances ──────────────────────────────────────────────────────────────────


class BalanceFetchError(Exception):
    """One of the pool balance reads failed."""


# ── Transactions ──────────────────────────────────────────────────────────────


class TransactionError(Exception):
    """Base exception for admin transaction errors."""


class SigningKeyMissingError(TransactionError):
    """No server private key is configured."""


class SimulationError(TransactionError):
    """The contract call reverted during simulation."""
