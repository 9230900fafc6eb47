"""Chain RPC client for reading the staking contracts on the Peaq EVM."""

import time
from collections.abc import Callable
from typing import Any

import structlog
from web3 import Web3
from web3.contract import Contract
from web3.exceptions import ContractLogicError

from config import ZERO_ADDRESS, get_settings
from liquidstake.services.abi_manager import ABIManager
from liquidstake.services.errors import (
    ChainConnectionError,
    ContractNotConfiguredError,
    RPCError,
)

logger = structlog.get_logger(__name__)

LIQUID_STAKING: str = "LiquidStaking"
ST_PEAQ: str = "stPEAQ"

_CHUNKABLE_LOG_ERRORS: tuple[str, ...] = (
    "block range",
    "too large",
    "query returned more than",
    "response size",
    "limit exceeded",
)


def _is_chunkable_logs_error(err_msg: str) -> bool:
    msg = err_msg.lower()
    return any(s in msg for s in _CHUNKABLE_LOG_ERRORS)


class ChainClient:
    """Client for the LiquidStaking and stPEAQ contracts via JSON-RPC."""

    LOG_CHUNK_SIZE = 50_000

    def __init__(
        self,
        rpc_url: str | None = None,
        timeout: int | None = None,
        retry_attempts: int | None = None,
        retry_delay: float | None = None,
        abi_manager: ABIManager | None = None,
    ):
        settings = get_settings()
        self.rpc_url = rpc_url or settings.chain.rpc_url
        self.timeout = timeout or settings.chain.rpc_timeout
        self.retry_attempts = retry_attempts or settings.chain.retry_attempts
        self.retry_delay = retry_delay or settings.chain.retry_delay
        self.addresses: dict[str, str] = {
            LIQUID_STAKING: settings.contracts.liquid_staking_address,
            ST_PEAQ: settings.contracts.st_peaq_address,
        }
        self.abi_manager = abi_manager or ABIManager()
        self._web3: Web3 | None = None
        self._contracts: dict[str, Contract] = {}

    def connect(self) -> bool:
        """Connect to the chain. Raises ChainConnectionError on failure."""
        try:
            web3 = Web3(
                Web3.HTTPProvider(self.rpc_url, request_kwargs={"timeout": self.timeout})
            )
            if not web3.is_connected():
                raise ChainConnectionError(f"RPC endpoint {self.rpc_url} is not responding")
        except ChainConnectionError:
            raise
        except Exception as e:
            raise ChainConnectionError(f"Failed to connect to {self.rpc_url}: {e}") from e
        self._web3 = web3
        logger.info("Connected to chain", rpc_url=self.rpc_url[:50])
        return True

    def disconnect(self) -> None:
        self._web3 = None
        self._contracts.clear()

    def is_connected(self) -> bool:
        return self._web3 is not None

    @property
    def web3(self) -> Web3:
        if self._web3 is None:
            self.connect()
        return self._web3

    def _retry_call(self, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        last_error: Exception | None = None
        for attempt in range(self.retry_attempts):
            try:
                return func(*args, **kwargs)
            except ContractLogicError as e:
                # reverts are not retried
                raise RPCError(f"Contract call reverted: {e}") from e
            except Exception as e:
                if _is_chunkable_logs_error(str(e)):
                    # node rejects the range itself; callers narrow it instead
                    raise RPCError(f"Log range rejected: {e}") from e
                last_error = e
                logger.warning(
                    "RPC call failed, retrying",
                    attempt=attempt + 1,
                    error=str(e)[:100],
                )
                if attempt < self.retry_attempts - 1:
                    time.sleep(self.retry_delay * (attempt + 1))
        raise RPCError(f"RPC call failed after {self.retry_attempts} attempts: {last_error}")

    # ------------------------------------------------------------------
    # Contracts
    # ------------------------------------------------------------------

    def address_of(self, contract_name: str) -> str:
        address = self.addresses.get(contract_name)
        if not address or address.lower() == ZERO_ADDRESS:
            raise ContractNotConfiguredError(f"No address configured for {contract_name}")
        return Web3.to_checksum_address(address)

    def contract(self, contract_name: str) -> Contract:
        if contract_name not in self._contracts:
            address = self.address_of(contract_name)
            try:
                abi = self.abi_manager.load_abi(contract_name)
            except (FileNotFoundError, KeyError) as e:
                raise ContractNotConfiguredError(f"ABI for {contract_name} unavailable: {e}") from e
            self._contracts[contract_name] = self.web3.eth.contract(address=address, abi=abi)
        return self._contracts[contract_name]

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def read_contract(self, contract_name: str, function_name: str, *args: Any) -> Any:
        fn = getattr(self.contract(contract_name).functions, function_name)
        return self._retry_call(lambda: fn(*args).call())

    def get_contract_events(
        self,
        contract_name: str,
        event_name: str,
        from_block: int = 0,
        to_block: int | None = None,
    ) -> list[Any]:
        """Event logs in block order. Falls back to chunked queries when the node caps ranges."""
        event = getattr(self.contract(contract_name).events, event_name)
        end: int = self.get_latest_block() if to_block is None else to_block

        def _get(start: int, stop: int) -> list[Any]:
            return list(event.get_logs(from_block=start, to_block=stop))

        try:
            return self._retry_call(_get, from_block, end)
        except RPCError as e:
            if not _is_chunkable_logs_error(str(e)):
                raise
            logger.info("Log range too large, chunking", from_block=from_block, to_block=end)

        return self._get_events_chunked(_get, from_block, end)

    def _get_events_chunked(
        self, get: Callable[[int, int], list[Any]], start: int, end: int
    ) -> list[Any]:
        out: list[Any] = []
        for chunk_start in range(start, end + 1, self.LOG_CHUNK_SIZE):
            chunk_end = min(end, chunk_start + self.LOG_CHUNK_SIZE - 1)
            out.extend(self._get_events_bisect(get, chunk_start, chunk_end))
        return out

    def _get_events_bisect(
        self, get: Callable[[int, int], list[Any]], start: int, end: int
    ) -> list[Any]:
        try:
            return self._retry_call(get, start, end)
        except RPCError as e:
            if start == end or not _is_chunkable_logs_error(str(e)):
                raise
        mid = (start + end) // 2
        return self._get_events_bisect(get, start, mid) + self._get_events_bisect(
            get, mid + 1, end
        )

    def get_balance(self, address: str) -> int:
        checksum = Web3.to_checksum_address(address)
        return int(self._retry_call(self.web3.eth.get_balance, checksum))

    def get_latest_block(self) -> int:
        return int(self._retry_call(lambda: self.web3.eth.block_number))

    def get_chain_id(self) -> int:
        return int(self._retry_call(lambda: self.web3.eth.chain_id))
