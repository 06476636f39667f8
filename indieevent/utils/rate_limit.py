from typing import Dict, Any
from fastapi import Request, Response, HTTPException
import logging
import os
import time

logger = logging.getLogger(__name__)
_clock = time.time

def _client_key(req: Request) -> str:
    # Clé: IP cliente + chemin
    ip = req.client.host if req.client else "local"
    return f"ip:{ip}:{req.url.path}"

def _local_hit(request: Request, times: int, seconds: int) -> None:
    """Fenêtre glissante en mémoire, un compartiment par durée de fenêtre."""
    now = _clock()
    buckets = getattr(request.app.state, "_rl_store", None)
    if buckets is None:
        buckets = request.app.state._rl_store = {}
    store = buckets.setdefault(seconds, {})
    # Purge des clés sans hit récent (toutes IP/chemins de la même fenêtre)
    for stale in [k for k, hits in store.items() if not hits or now - hits[-1] >= seconds]:
        del store[stale]
    key = _client_key(request)
    hits = [t for t in store.get(key, []) if now - t < seconds]
    if len(hits) >= times:
        store[key] = hits
        raise HTTPException(status_code=429, detail="Too Many Requests")
    hits.append(now)
    store[key] = hits

def optional_rate_limit(times: int, seconds: int):
    """
    Dépendance FastAPI de limitation de débit.
    - LOCAL_RATE_LIMIT_FALLBACK=1: fenêtre glissante en mémoire (dev/tests).
    - Sinon fastapi-limiter (Redis) si initialisé par le lifespan; désactivé sinon.
    """
    async def _dep(request: Request, response: Response):
        if os.getenv("LOCAL_RATE_LIMIT_FALLBACK") == "1":
            _local_hit(request, times, seconds)
            return

        if getattr(request.app.state, "rate_limit_enabled", None) is not True:
            return

        from fastapi_limiter.depends import RateLimiter

        async def _identifier(req: Request) -> str:
            return _client_key(req)
        try:
            limiter = RateLimiter(times=times, seconds=seconds, identifier=_identifier)
            await limiter(request, response)
        except HTTPException:
            raise
        except Exception as e:
            # Redis indisponible: pas de 429, la requête passe
            logger.warning("Rate limiting skipped: %s", e)
    return _dep

def rate_limit_health_info(request: Request) -> Dict[str, Any]:
    enabled = getattr(request.app.state, "rate_limit_enabled", None)
    try:
        from fastapi_limiter import FastAPILimiter
        ready = getattr(FastAPILimiter, "redis", None) is not None
    except ImportError:
        ready = False
    return {
        "enabled": (bool(enabled) if enabled is not None else None),
        "ready": ready,
        "backend": "redis" if ready else None,
        "local_fallback": os.getenv("LOCAL_RATE_LIMIT_FALLBACK") == "1",
    }
