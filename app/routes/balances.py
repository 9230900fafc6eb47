"""Pool and account balance endpoints."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from web3 import Web3

from app.dependencies import get_now, get_report_service
from app.schemas.balances import (
    AccountBalancesResponse,
    BreakdownResponse,
    StakingParamsResponse,
)
from app.schemas.common import ErrorResponse
from liquidstake.services.errors import BalanceFetchError, ChainClientError
from liquidstake.services.report import ReportService

logger: logging.Logger = logging.getLogger(__name__)

router: APIRouter = APIRouter(prefix="/api", tags=["balances"])


def _error(status_code: int, error: str) -> JSONResponse:
    body: ErrorResponse = ErrorResponse(error=error)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@router.get("/balances/breakdown", response_model=BreakdownResponse)
def pool_breakdown(
    now: int = Depends(get_now),
    svc: ReportService = Depends(get_report_service),
):
    try:
        return svc.breakdown(now)
    except (BalanceFetchError, ChainClientError) as e:
        logger.error("Error fetching pool breakdown: %s", e)
        return _error(502, "Failed to fetch pool balances")


@router.get("/balances/{address}", response_model=AccountBalancesResponse)
def account_balances(
    address: str,
    svc: ReportService = Depends(get_report_service),
):
    if not Web3.is_address(address):
        return _error(400, "Invalid address provided")
    try:
        return svc.account_balances(Web3.to_checksum_address(address))
    except ChainClientError as e:
        logger.error("Error fetching balances for %s: %s", address, e)
        return _error(502, "Failed to fetch balances")


@router.get("/staking/params", response_model=StakingParamsResponse)
def staking_params(svc: ReportService = Depends(get_report_service)):
    try:
        return svc.staking_params()
    except ChainClientError as e:
        logger.error("Error fetching staking data: %s", e)
        return _error(502, "Error fetching staking data")
