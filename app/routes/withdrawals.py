"""Withdrawal endpoints: thin routes, logic in services."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from web3 import Web3

from app.dependencies import get_now, get_report_service
from app.schemas.common import DataResponse, ErrorResponse, FailureResponse
from app.schemas.withdrawals import (
    DailySummaryResponse,
    HolderWithdrawalsResponse,
    TrackingRowResponse,
    UserWithdrawalResponse,
)
from liquidstake.services.errors import ChainClientError, WithdrawalFetchError
from liquidstake.services.report import ReportService

logger: logging.Logger = logging.getLogger(__name__)

router: APIRouter = APIRouter(prefix="/api", tags=["withdrawals"])

FETCH_FAILED: str = "Failed to fetch withdrawals"


def _fetch_failed() -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content=FailureResponse(error=FETCH_FAILED).model_dump(),
    )


@router.get(
    "/withdrawals",
    response_model=DataResponse[list[HolderWithdrawalsResponse]],
    response_model_exclude_none=True,
)
def list_withdrawals(
    now: int = Depends(get_now),
    svc: ReportService = Depends(get_report_service),
):
    try:
        return {"success": True, "data": svc.holder_withdrawals(now)}
    except (WithdrawalFetchError, ChainClientError) as e:
        logger.error("Error in withdrawals route: %s", e)
        return _fetch_failed()


@router.get("/withdrawals/summary", response_model=DataResponse[list[DailySummaryResponse]])
def withdrawal_summary(
    now: int = Depends(get_now),
    svc: ReportService = Depends(get_report_service),
):
    try:
        return {"success": True, "data": svc.daily_summary(now)}
    except (WithdrawalFetchError, ChainClientError) as e:
        logger.error("Error building withdrawal summary: %s", e)
        return _fetch_failed()


@router.get("/withdrawals/tracking", response_model=DataResponse[list[TrackingRowResponse]])
def withdrawal_tracking(
    now: int = Depends(get_now),
    svc: ReportService = Depends(get_report_service),
):
    try:
        return {"success": True, "data": svc.tracking(now)}
    except (WithdrawalFetchError, ChainClientError) as e:
        logger.error("Error building withdrawal tracking: %s", e)
        return _fetch_failed()


@router.get("/withdrawals/{address}", response_model=DataResponse[list[UserWithdrawalResponse]])
def user_withdrawals(
    address: str,
    svc: ReportService = Depends(get_report_service),
):
    if not Web3.is_address(address):
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(error="Invalid address provided").model_dump(exclude_none=True),
        )
    try:
        return {"success": True, "data": svc.user_withdrawals(Web3.to_checksum_address(address))}
    except (WithdrawalFetchError, ChainClientError) as e:
        logger.error("Error fetching withdrawal requests for %s: %s", address, e)
        return _fetch_failed()
