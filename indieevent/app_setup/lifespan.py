"""
Lifespan FastAPI: journalise les modes effectifs et prépare le rate limiting.

Variables d'environnement:
  - DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS=1: pas de Redis (tests)
  - USE_FAKE_REDIS_FOR_TESTS=1: fakeredis à la place de Redis
  - RATE_LIMIT_REDIS_URL: URL Redis (défaut redis://127.0.0.1:6379/0)
  - LOCAL_RATE_LIMIT_FALLBACK=1: limiteur en mémoire si Redis est indisponible
"""
import logging
import os
from contextlib import asynccontextmanager

import redis.asyncio as aioredis
from fastapi import FastAPI
from fastapi_limiter import FastAPILimiter

try:
    from fakeredis.aioredis import FakeRedis  # tests only
except ImportError:
    FakeRedis = None

logger = logging.getLogger("uvicorn.error")

def _redis_for_limiter():
    if os.getenv("USE_FAKE_REDIS_FOR_TESTS") == "1":
        if FakeRedis is None:
            raise RuntimeError("USE_FAKE_REDIS_FOR_TESTS=1 but fakeredis is not installed")
        return FakeRedis(decode_responses=True)
    url = os.getenv("RATE_LIMIT_REDIS_URL", "redis://127.0.0.1:6379/0")
    return aioredis.from_url(url, encoding="utf-8", decode_responses=True)

async def _init_rate_limit(app: FastAPI) -> None:
    """Pose app.state.rate_limit_enabled; un échec Redis ne bloque jamais le démarrage."""
    if os.getenv("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS") == "1":
        app.state.rate_limit_enabled = False
        logger.info("Rate limiting: limiter init skipped (tests)")
        return
    try:
        await FastAPILimiter.init(_redis_for_limiter())
    except Exception as exc:
        local = os.getenv("LOCAL_RATE_LIMIT_FALLBACK") == "1"
        app.state.rate_limit_enabled = local
        logger.warning("Rate limiting: redis init failed (%s), local_fallback=%s", exc, local)
        return
    app.state.rate_limit_enabled = True
    logger.info("Rate limiting: redis limiter ready")

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "Checkout modes: payments=%s events=%s tickets=%s",
        getattr(app.state.payment_gateway, "mode", "?"),
        app.state.event_store.__class__.__name__,
        app.state.ticket_store.__class__.__name__,
    )
    await _init_rate_limit(app)
    yield
