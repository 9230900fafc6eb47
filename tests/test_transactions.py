"""Tests for liquidstake.services.transactions with a mocked web3."""

from typing import Any
from unittest.mock import MagicMock

import pytest
from eth_account import Account
from web3.exceptions import ContractLogicError

from liquidstake.services.chain_client import LIQUID_STAKING, ST_PEAQ
from liquidstake.services.errors import SigningKeyMissingError, SimulationError
from liquidstake.services.transactions import TransactionService
from fakes import HOLDER_A, POOL, TOKEN

TEST_KEY: str = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
TX_HASH: bytes = b"\x12" * 32


def _mock_chain(revert: bool = False) -> MagicMock:
    chain = MagicMock()
    chain.address_of.side_effect = {LIQUID_STAKING: POOL, ST_PEAQ: TOKEN}.__getitem__
    chain.web3.eth.get_transaction_count.return_value = 7
    chain.web3.eth.send_raw_transaction.return_value = TX_HASH

    def build_transaction(params: dict[str, Any]) -> dict[str, Any]:
        return {
            **params,
            "to": POOL,
            "data": "0x",
            "gas": 100_000,
            "gasPrice": 1_000_000_000,
        }

    call = MagicMock()
    call.build_transaction.side_effect = build_transaction
    if revert:
        call.call.side_effect = ContractLogicError("execution reverted: Ownable")
    chain.contract.return_value.functions = MagicMock()
    for name in (
        "setStakingLimit",
        "setStakingContract",
        "transferOwnership",
        "setWithdrawalDelay",
        "setCollatorWhitelist",
    ):
        getattr(chain.contract.return_value.functions, name).return_value = call
    chain.call = call
    return chain


def test_missing_key_refuses() -> None:
    svc: TransactionService = TransactionService(_mock_chain())
    svc.private_key = None
    with pytest.raises(SigningKeyMissingError):
        svc.set_staking_limit(1)


def test_revert_raises_before_broadcast() -> None:
    chain: MagicMock = _mock_chain(revert=True)
    svc: TransactionService = TransactionService(chain, private_key=TEST_KEY)
    with pytest.raises(SimulationError, match="setStakingLimit"):
        svc.set_staking_limit(10**18)
    chain.web3.eth.send_raw_transaction.assert_not_called()


def test_submit_signs_and_sends() -> None:
    chain: MagicMock = _mock_chain()
    svc: TransactionService = TransactionService(chain, private_key=TEST_KEY)

    tx_hash: str = svc.set_staking_limit(5 * 10**18)

    assert tx_hash == "0x" + "12" * 32
    sender: str = Account.from_key(TEST_KEY).address
    chain.call.call.assert_called_once_with({"from": sender, "value": 0})
    params: dict[str, Any] = chain.call.build_transaction.call_args.args[0]
    assert params["nonce"] == 7
    assert params["chainId"] == svc.chain_id
    chain.web3.eth.send_raw_transaction.assert_called_once()
    chain.web3.eth.wait_for_transaction_receipt.assert_not_called()


def test_waits_for_receipt_when_asked() -> None:
    chain: MagicMock = _mock_chain()
    chain.web3.eth.wait_for_transaction_receipt.return_value = {"status": 1}
    svc: TransactionService = TransactionService(chain, private_key=TEST_KEY, wait_for_receipt=True)
    svc.set_withdrawal_delay(86_400)
    chain.web3.eth.wait_for_transaction_receipt.assert_called_once()


def test_function_arguments() -> None:
    chain: MagicMock = _mock_chain()
    functions: MagicMock = chain.contract.return_value.functions
    svc: TransactionService = TransactionService(chain, private_key=TEST_KEY)

    svc.set_staking_contract()
    functions.setStakingContract.assert_called_once_with(POOL)
    chain.contract.assert_called_with(ST_PEAQ)

    svc.transfer_ownership(HOLDER_A)
    functions.transferOwnership.assert_called_once_with(HOLDER_A)

    svc.set_collator_whitelist(HOLDER_A, False)
    functions.setCollatorWhitelist.assert_called_once_with(HOLDER_A, False)
    chain.contract.assert_called_with(LIQUID_STAKING)


def test_distribute_rewards_sends_value() -> None:
    chain: MagicMock = _mock_chain()
    chain.contract.return_value.functions.distributeRewards.return_value = chain.call
    svc: TransactionService = TransactionService(chain, private_key=TEST_KEY)

    svc.distribute_rewards(3 * 10**18)

    chain.contract.return_value.functions.distributeRewards.assert_called_once_with()
    sender: str = Account.from_key(TEST_KEY).address
    chain.call.call.assert_called_once_with({"from": sender, "value": 3 * 10**18})
    assert chain.call.build_transaction.call_args.args[0]["value"] == 3 * 10**18


def test_withdraw_staked_arguments() -> None:
    chain: MagicMock = _mock_chain()
    functions: MagicMock = chain.contract.return_value.functions
    functions.withdrawStakedPEAQ.return_value = chain.call
    svc: TransactionService = TransactionService(chain, private_key=TEST_KEY)

    svc.withdraw_staked(10**18, HOLDER_A.lower())

    functions.withdrawStakedPEAQ.assert_called_once_with(10**18, HOLDER_A)
    chain.contract.assert_called_with(LIQUID_STAKING)
