"""
Endpoints API pour Tickets: confirmation d'achat (émission du billet) et liste des billets.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from indieevent.app_setup.dependencies import get_gateway, get_ledger, get_ticket_store
from indieevent.errors import ProviderError
from indieevent.payments.gateways import PaymentGateway
from indieevent.payments.ledger import CheckoutLedger
from indieevent.utils.rate_limit import optional_rate_limit
from .repository import TicketStore
from .service import confirm_purchase, list_event_tickets, list_user_tickets

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/tickets", tags=["Tickets"])

@router.post("/confirm", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
async def confirm_ticket(
    request: Request,
    gateway: PaymentGateway = Depends(get_gateway),
    tickets: TicketStore = Depends(get_ticket_store),
    ledger: CheckoutLedger = Depends(get_ledger),
):
    """
    Confirme un achat et émet le billet.
    - session_id en query ou body JSON {"session_id": "..."}.
    - Réponse: {"success": true, "created": bool, "ticket": {...}}
    - Erreurs: 400 session_id manquant, 404 session introuvable, 409 paiement non terminé
    """
    session_id: Optional[str] = request.query_params.get("session_id")
    if not session_id:
        try:
            body = await request.json()
            session_id = (body or {}).get("session_id") if isinstance(body, dict) else None
        except ValueError:
            session_id = None

    try:
        result = await run_in_threadpool(
            confirm_purchase, session_id, gateway=gateway, tickets=tickets, ledger=ledger
        )
    except ProviderError as e:
        logger.error("ticket confirmation failed session_id=%s: %s", session_id, e.message)
        raise ProviderError("Failed to verify checkout session") from e
    return JSONResponse({"success": True, **result})

@router.get("")
async def list_tickets(
    userId: Optional[str] = None,
    eventId: Optional[str] = None,
    tickets: TicketStore = Depends(get_ticket_store),
):
    """
    Liste les billets, plus récents d'abord.
    - ?userId=<id>: billets d'un utilisateur
    - ?eventId=<id> (sans userId): billets vendus pour un événement
    """
    if eventId and not userId:
        items = await run_in_threadpool(list_event_tickets, eventId, tickets=tickets)
    else:
        items = await run_in_threadpool(list_user_tickets, userId, tickets=tickets)
    return {"tickets": items}
