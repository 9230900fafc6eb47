"""Health endpoints."""

import logging

from fastapi import APIRouter, Depends

from app.dependencies import get_chain_client
from app.schemas.common import HealthResponse
from config import get_settings
from liquidstake.services._types import ChainInfoDict
from liquidstake.services.chain_client import ChainClient

logger: logging.Logger = logging.getLogger(__name__)

router: APIRouter = APIRouter(tags=["health"])


def get_chain_info(chain: ChainClient) -> ChainInfoDict:
    """Gather RPC info. Never raises."""
    expected: int = get_settings().chain.chain_id
    try:
        chain_id: int = chain.get_chain_id()
        latest: int = chain.get_latest_block()
        return ChainInfoDict(
            rpc_url=chain.rpc_url[:50],
            connected=True,
            chain_id=chain_id,
            expected_chain_id=expected,
            chain_id_matches=chain_id == expected,
            latest_block=latest,
        )
    except Exception as e:
        logger.exception("Health chain check failed: %s", e)
        return ChainInfoDict(
            rpc_url=chain.rpc_url[:50],
            connected=False,
            chain_id=None,
            expected_chain_id=expected,
            chain_id_matches=False,
            latest_block=None,
            error=str(e),
        )


@router.get("/health", response_model=HealthResponse)
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/health/chain")
def health_chain(chain: ChainClient = Depends(get_chain_client)) -> ChainInfoDict:
    return get_chain_info(chain)
