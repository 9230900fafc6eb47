"""FastAPI dependencies: chain access, services and auth."""

from functools import lru_cache

from fastapi import Depends, Header, HTTPException

from config import get_settings
from liquidstake.services._helpers import now_ts
from liquidstake.services.chain_client import ChainClient
from liquidstake.services.report import ReportService
from liquidstake.services.transactions import TransactionService


@lru_cache
def get_chain_client() -> ChainClient:
    """Process-wide client; web3 connects lazily on first use."""
    return ChainClient()


def get_report_service(chain: ChainClient = Depends(get_chain_client)) -> ReportService:
    return ReportService(chain)


def get_transaction_service(
    chain: ChainClient = Depends(get_chain_client),
) -> TransactionService:
    return TransactionService(chain)


def get_api_key(x_api_key: str = Header(default="")) -> str:
    """Validate API key on admin endpoints."""
    expected: str | None = get_settings().api_key
    if not expected:
        return ""  # auth disabled when no key configured
    if x_api_key != expected:
        raise HTTPException(status_code=401, detail="Invalid or missing API key")
    return x_api_key


def get_now() -> int:
    """Reference time for classifying withdrawals within one request."""
    return now_ts()
