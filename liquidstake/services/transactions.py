"""Admin transactions signed with the server-held key.

Each call is simulated first so reverts surface before anything is broadcast.
"""

from typing import Any

import structlog
from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import Web3
from web3.exceptions import ContractLogicError

from config import get_settings
from liquidstake.services.chain_client import LIQUID_STAKING, ST_PEAQ, ChainClient
from liquidstake.services.errors import SigningKeyMissingError, SimulationError

logger = structlog.get_logger(__name__)


class TransactionService:
    def __init__(
        self,
        chain: ChainClient,
        private_key: str | None = None,
        wait_for_receipt: bool = False,
    ) -> None:
        settings = get_settings()
        self.chain: ChainClient = chain
        self.private_key: str | None = private_key or settings.server_private_key
        self.chain_id: int = settings.chain.chain_id
        self.receipt_timeout: int = settings.chain.receipt_timeout
        self.wait_for_receipt: bool = wait_for_receipt

    def _account(self) -> LocalAccount:
        if not self.private_key:
            raise SigningKeyMissingError("Server private key not configured")
        return Account.from_key(self.private_key)

    def submit(
        self, contract_name: str, function_name: str, *args: Any, value: int = 0
    ) -> str:
        """Simulate, sign and broadcast one contract call. Returns the tx hash."""
        account: LocalAccount = self._account()
        web3: Web3 = self.chain.web3
        call = getattr(self.chain.contract(contract_name).functions, function_name)(*args)

        try:
            call.call({"from": account.address, "value": value})
        except ContractLogicError as e:
            raise SimulationError(f"{function_name} reverted: {e}") from e

        tx: dict[str, Any] = call.build_transaction(
            {
                "from": account.address,
                "value": value,
                "chainId": self.chain_id,
                "nonce": web3.eth.get_transaction_count(account.address, "pending"),
            }
        )
        signed = account.sign_transaction(tx)
        tx_hash: str = Web3.to_hex(web3.eth.send_raw_transaction(signed.raw_transaction))
        logger.info("Transaction submitted", function=function_name, hash=tx_hash)

        if self.wait_for_receipt:
            receipt = web3.eth.wait_for_transaction_receipt(tx_hash, timeout=self.receipt_timeout)
            logger.info("Transaction mined", hash=tx_hash, status=receipt["status"])
        return tx_hash

    def set_staking_limit(self, limit_wei: int) -> str:
        return self.submit(LIQUID_STAKING, "setStakingLimit", limit_wei)

    def set_staking_contract(self) -> str:
        """Point stPEAQ at the configured LiquidStaking contract."""
        return self.submit(ST_PEAQ, "setStakingContract", self.chain.address_of(LIQUID_STAKING))

    def transfer_ownership(self, new_owner: str) -> str:
        return self.submit(LIQUID_STAKING, "transferOwnership", Web3.to_checksum_address(new_owner))

    def set_withdrawal_delay(self, delay_seconds: int) -> str:
        return self.submit(LIQUID_STAKING, "setWithdrawalDelay", delay_seconds)

    def set_collator_whitelist(self, collator: str, status: bool) -> str:
        return self.submit(
            LIQUID_STAKING, "setCollatorWhitelist", Web3.to_checksum_address(collator), status
        )

    def distribute_rewards(self, value_wei: int) -> str:
        """Send native PEAQ into the pool as staking rewards."""
        return self.submit(LIQUID_STAKING, "distributeRewards", value=value_wei)

    def withdraw_staked(self, amount_wei: int, collator: str) -> str:
        """Pull staked PEAQ back from one collator into the pool."""
        return self.submit(
            LIQUID_STAKING, "withdrawStakedPEAQ", amount_wei, Web3.to_checksum_address(collator)
        )
