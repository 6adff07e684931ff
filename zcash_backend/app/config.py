"""
Configuration for the Zcash RPC backend.
Values come from the environment (optionally via a .env file).
"""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

DEFAULT_RPC_URL = "https://zcash-mainnet.gateway.tatum.io/"


class Settings(BaseModel):
    """Runtime settings."""
    port: int = Field(3000, description="Listening port")
    host: str = Field("0.0.0.0", description="Bind address")
    node_env: str = Field("development", description="Environment label")
    rpc_url: str = Field(DEFAULT_RPC_URL, description="Zcash node gateway URL")
    rpc_api_key: str = Field("", description="Credential sent to the gateway")
    rpc_timeout: float = Field(30.0, gt=0, description="Outbound timeout in seconds")
    api_key: str = Field("", description="Key inbound requests must present")
    api_prefix: str = Field("/api/zcash", description="Prefix for the RPC routes")
    debug: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables."""
        return cls(
            port=int(os.getenv("PORT", "3000")),
            host=os.getenv("HOST", "0.0.0.0"),
            node_env=os.getenv("NODE_ENV", "development"),
            rpc_url=os.getenv("ZCASH_RPC_URL", DEFAULT_RPC_URL),
            rpc_api_key=os.getenv("ZCASH_API_KEY", ""),
            rpc_timeout=float(os.getenv("ZCASH_RPC_TIMEOUT", "30")),
            api_key=os.getenv("API_KEY", ""),
            api_prefix=os.getenv("API_PREFIX", "/api/zcash"),
            debug=bool(os.getenv("DEBUG")),
        )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def reset_settings() -> None:
    """Drop cached settings so the next lookup re-reads the environment."""
    global _settings
    _settings = None
