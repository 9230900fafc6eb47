"""Admin endpoints: validate the body, submit one signed contract call."""

import logging
from collections.abc import Callable
from decimal import Decimal, InvalidOperation

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from web3 import Web3

from app.dependencies import get_api_key, get_transaction_service
from app.schemas.admin import (
    CollatorWhitelistRequest,
    DistributeRewardsRequest,
    StakingLimitRequest,
    TransactionResponse,
    TransferOwnershipRequest,
    WithdrawalDelayRequest,
    WithdrawStakedRequest,
)
from app.schemas.common import ErrorResponse
from liquidstake.services._helpers import SECONDS_PER_DAY, parse_ether
from liquidstake.services.errors import SigningKeyMissingError
from liquidstake.services.transactions import TransactionService

logger: logging.Logger = logging.getLogger(__name__)

router: APIRouter = APIRouter(
    prefix="/api",
    tags=["admin"],
    dependencies=[Depends(get_api_key)],
)


def _error(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, details=details).model_dump(exclude_none=True),
    )


def _submit(action: str, send: Callable[[], str]) -> TransactionResponse | JSONResponse:
    try:
        tx_hash: str = send()
    except SigningKeyMissingError:
        return _error(500, "Server private key not configured")
    except Exception as e:
        logger.exception("Error %s: %s", action, e)
        return _error(500, f"An error occurred while {action}", str(e))

    logger.info("Transaction hash: %s", tx_hash)
    return TransactionResponse(hash=tx_hash)


@router.post("/set-staking-limit", response_model=TransactionResponse)
def set_staking_limit(
    body: StakingLimitRequest,
    svc: TransactionService = Depends(get_transaction_service),
):
    if body.limit is None or body.limit == "":
        return _error(400, "Invalid staking limit provided")
    try:
        limit_wei: int = parse_ether(body.limit)
    except ValueError:
        return _error(400, "Invalid staking limit provided")
    return _submit("setting staking limit", lambda: svc.set_staking_limit(limit_wei))


@router.post("/set-staking", response_model=TransactionResponse)
def set_staking_contract(svc: TransactionService = Depends(get_transaction_service)):
    return _submit("setting staking contract", svc.set_staking_contract)


@router.post("/transfer-ownership", response_model=TransactionResponse)
def transfer_ownership(
    body: TransferOwnershipRequest,
    svc: TransactionService = Depends(get_transaction_service),
):
    if not body.new_owner or not Web3.is_address(body.new_owner):
        return _error(400, "Invalid address provided")
    new_owner: str = body.new_owner
    return _submit("transferring ownership", lambda: svc.transfer_ownership(new_owner))


@router.post("/set-withdrawal-delay", response_model=TransactionResponse)
def set_withdrawal_delay(
    body: WithdrawalDelayRequest,
    svc: TransactionService = Depends(get_transaction_service),
):
    if body.days is None or body.days == "":
        return _error(400, "Withdrawal delay is required")
    try:
        days: Decimal = Decimal(str(body.days).strip())
    except InvalidOperation:
        return _error(400, "Withdrawal delay must be a valid number")
    if not days.is_finite() or days <= 0:
        return _error(400, "Withdrawal delay must be greater than 0")
    delay_seconds: int = int(days * SECONDS_PER_DAY)
    if delay_seconds <= 0:
        # under one second truncates to zero, which would disable the delay
        return _error(400, "Withdrawal delay must be greater than 0")
    return _submit("setting withdrawal delay", lambda: svc.set_withdrawal_delay(delay_seconds))


@router.post("/collator-whitelist", response_model=TransactionResponse)
def set_collator_whitelist(
    body: CollatorWhitelistRequest,
    svc: TransactionService = Depends(get_transaction_service),
):
    if not body.collator_address or not Web3.is_address(body.collator_address):
        return _error(400, "Please enter a valid Ethereum address")
    collator: str = body.collator_address
    return _submit(
        "updating collator whitelist",
        lambda: svc.set_collator_whitelist(collator, body.status),
    )


def _positive_wei(raw: str | float | None) -> int | None:
    """PEAQ amount to wei, or None when missing, non-numeric or not above zero."""
    if raw is None or raw == "":
        return None
    try:
        wei: int = parse_ether(raw)
    except ValueError:
        return None
    return wei if wei > 0 else None


@router.post("/distribute-rewards", response_model=TransactionResponse)
def distribute_rewards(
    body: DistributeRewardsRequest,
    svc: TransactionService = Depends(get_transaction_service),
):
    value_wei: int | None = _positive_wei(body.amount)
    if value_wei is None:
        return _error(400, "Invalid amount provided")
    return _submit("distributing rewards", lambda: svc.distribute_rewards(value_wei))


@router.post("/withdraw-staked", response_model=TransactionResponse)
def withdraw_staked(
    body: WithdrawStakedRequest,
    svc: TransactionService = Depends(get_transaction_service),
):
    amount_wei: int | None = _positive_wei(body.amount)
    if amount_wei is None:
        return _error(400, "Invalid amount provided")
    if not body.collator or not Web3.is_address(body.collator):
        return _error(400, "Invalid collator address")
    collator: str = body.collator
    return _submit("withdrawing staked PEAQ", lambda: svc.withdraw_staked(amount_wei, collator))
