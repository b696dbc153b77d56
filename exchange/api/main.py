"""FastAPI application for the exchange devnet.

Note: The service keeps all state in memory. Restarting it resets the pool.
"""

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from exchange import __version__
from exchange.api.endpoints import router
from exchange.config import ServiceConfig
from exchange.errors import PoolError
from exchange.logging_setup import configure_logging

CONFIG = ServiceConfig.from_env()

# Maximum request body size (1 MB)
MAX_REQUEST_SIZE = 1024 * 1024

app = FastAPI(
    title="Exchange devnet",
    description="Constant-product native/token pool with in-memory ledgers",
    version=__version__,
)


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Reject requests with body larger than MAX_REQUEST_SIZE."""
    content_length = request.headers.get("content-length")
    if content_length and int(content_length) > MAX_REQUEST_SIZE:
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


@app.exception_handler(PoolError)
async def pool_error_handler(_request: Request, exc: PoolError) -> JSONResponse:
    """Every pool failure is a client error carrying its kind and reason."""
    return JSONResponse(status_code=400, content=exc.to_dict())


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the devnet API server.

    Configuration via environment variables:
    - EXCHANGE_HOST: Host to bind to (default: 0.0.0.0)
    - EXCHANGE_PORT: Port to bind to (default: 8000)
    - EXCHANGE_DEBUG: Enable debug/reload mode (default: false)
    - EXCHANGE_LOG_LEVEL: Log level (default: INFO)
    - EXCHANGE_POOL_ADDRESS / EXCHANGE_TOKEN_ADDRESS: Devnet identities
    """
    configure_logging(CONFIG.log_level)
    uvicorn.run(
        "exchange.api.main:app",
        host=CONFIG.host,
        port=CONFIG.port,
        reload=CONFIG.debug,
    )


if __name__ == "__main__":
    run()
