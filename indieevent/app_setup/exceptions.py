"""
Gestionnaires d'exceptions.
- CheckoutError (taxonomie métier) -> {"error": "<message>"} avec le code HTTP associé.
- Exception inattendue -> 500 {"error": "Internal server error"}, trace journalisée uniquement.
- HTTPException (ex: 429 du rate limiting) conserve le format FastAPI {"detail": ...}.
"""
import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from indieevent.errors import CheckoutError

logger = logging.getLogger(__name__)

def error_response(exc: CheckoutError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(CheckoutError)
    async def checkout_error_handler(request: Request, exc: CheckoutError):
        if exc.status_code >= 500:
            logger.warning("%s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.__class__.__name__)
        return error_response(exc)

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("Erreur inattendue sur %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})
