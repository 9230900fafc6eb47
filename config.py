"""Application settings: single file, Pydantic-based.

Contract addresses and the RPC endpoint default to Peaq mainnet; override any of
them through the environment (or a .env file next to this module).
"""

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ZERO_ADDRESS: str = "0x0000000000000000000000000000000000000000"


def project_root() -> Path:
    """Directory holding config.py, app/ and liquidstake/."""
    return Path(__file__).resolve().parent


def _ensure_env_loaded() -> None:
    """Load .env from the project root (then its parent). Idempotent."""
    root: Path = project_root()
    for candidate in (root / ".env", root.parent / ".env"):
        if candidate.exists():
            load_dotenv(candidate, override=False)


_ensure_env_loaded()

_ENV_FILES: tuple[str, ...] = (str(project_root() / ".env"), ".env")


class ChainSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CHAIN_",
        env_file=_ENV_FILES,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    rpc_url: str = Field(default="https://peaq.api.onfinality.io/public")
    chain_id: int = Field(default=3338)
    native_symbol: str = Field(default="PEAQ")
    rpc_timeout: int = Field(default=30)
    retry_attempts: int = Field(default=3)
    retry_delay: float = Field(default=1.0)
    genesis_block: int = Field(default=0, description="First block scanned for Transfer logs")
    max_workers: int = Field(default=8, description="Concurrent per-holder reads")
    receipt_timeout: int = Field(default=120)


class ContractSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CONTRACT_",
        env_file=_ENV_FILES,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    liquid_staking_address: str = Field(default=ZERO_ADDRESS)
    st_peaq_address: str = Field(default=ZERO_ADDRESS)
    abi_dir: Path = Field(default=project_root() / "liquidstake" / "abis")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="STAKING_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    environment: str = Field(default="development")
    debug: bool = Field(default=False)
    api_key: str | None = Field(default=None, description="API key for admin endpoints")
    server_private_key: str | None = Field(
        default=None,
        description="Hex key used to sign admin transactions.",
        validation_alias="SERVER_PRIVATE_KEY",
    )
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://127.0.0.1:3000"]
    )
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    reload: bool = Field(default=False)

    chain: ChainSettings = Field(default_factory=ChainSettings)
    contracts: ContractSettings = Field(default_factory=ContractSettings)


@lru_cache
def get_settings() -> Settings:
    return Settings()
