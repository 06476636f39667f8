import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from indieevent.app_setup.dependencies import get_event_store, get_gateway, get_ledger, request_origin
from indieevent.errors import InvalidRequest, ProviderError
from indieevent.events.repository import EventStore
from indieevent.payments.gateways import PaymentGateway
from indieevent.payments.ledger import CheckoutLedger
from indieevent.payments.service import create_checkout_session, verify_checkout_session
from indieevent.utils.rate_limit import optional_rate_limit

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/checkout", tags=["Checkout API"])

# module indieevent.payments.views
@router.post("", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
async def create_checkout(
    request: Request,
    gateway: PaymentGateway = Depends(get_gateway),
    events: EventStore = Depends(get_event_store),
    ledger: CheckoutLedger = Depends(get_ledger),
):
    """
    Crée une session de paiement pour un billet.
    - Entrée JSON: { "eventId": "<id>", "userId": "<id|guest>", "price": <number> }
    - Sécurité: rate limit (10 req / 60s)
    - Réponse: { "success": true, "sessionId": "...", "url": "..." }
    - Erreurs: 400 validation, 404 événement introuvable, 500 prestataire/stockage
    """
    try:
        body = await request.json()
    except ValueError:
        raise InvalidRequest("Invalid request body")

    try:
        result = await run_in_threadpool(
            create_checkout_session,
            body,
            origin=request_origin(request),
            gateway=gateway,
            events=events,
            ledger=ledger,
        )
    except ProviderError as e:
        # Le détail prestataire reste dans les logs
        logger.error("checkout creation failed: %s", e.message)
        raise ProviderError("Failed to create checkout session") from e
    return JSONResponse({"success": True, "sessionId": result["sessionId"], "url": result["url"]})

@router.get("/verify")
async def verify_checkout(
    session_id: Optional[str] = None,
    gateway: PaymentGateway = Depends(get_gateway),
    ledger: CheckoutLedger = Depends(get_ledger),
):
    """
    Vérifie une session de paiement (lecture seule, idempotent).
    - Paramètre: ?session_id=<id>
    - Réponse: { "success": true, "status", "eventId", "userId", "amount" } (amount en centimes)
    - Erreurs: 400 si session_id manquant, 404 si session introuvable, 500 sinon
    """
    try:
        result = await run_in_threadpool(verify_checkout_session, session_id, gateway=gateway, ledger=ledger)
    except ProviderError as e:
        logger.error("checkout verification failed session_id=%s: %s", session_id, e.message)
        raise ProviderError("Failed to verify checkout session") from e
    return JSONResponse({"success": True, **result})
