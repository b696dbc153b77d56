"""Service configuration for the exchange devnet."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from exchange.constants import DEFAULT_POOL_ADDRESS, DEFAULT_TOKEN_ADDRESS


def _parse_bool(raw: str) -> bool:
    return raw.lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class ServiceConfig:
    """Configuration for the HTTP service.

    Attributes:
        host: Host to bind to
        port: Port to bind to
        debug: Enable reload mode
        log_level: Minimum structlog level name
        pool_address: Account of the devnet pool
        token_address: Identity of the devnet traded token
    """

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"
    pool_address: str = DEFAULT_POOL_ADDRESS
    token_address: str = DEFAULT_TOKEN_ADDRESS

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ServiceConfig:
        """Read EXCHANGE_* environment variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        return cls(
            host=env.get("EXCHANGE_HOST", cls.host),
            port=int(env.get("EXCHANGE_PORT", str(cls.port))),
            debug=_parse_bool(env.get("EXCHANGE_DEBUG", "false")),
            log_level=env.get("EXCHANGE_LOG_LEVEL", cls.log_level).upper(),
            pool_address=env.get("EXCHANGE_POOL_ADDRESS", cls.pool_address).lower(),
            token_address=env.get("EXCHANGE_TOKEN_ADDRESS", cls.token_address).lower(),
        )
