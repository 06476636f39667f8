from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import logging

from indieevent.errors import InvalidRequest, PaymentNotCompleted, ProviderError
from indieevent.payments.gateways import PaymentGateway
from indieevent.payments.ledger import CheckoutLedger
from indieevent.payments.service import verify_checkout_session
from .repository import TicketStore

logger = logging.getLogger(__name__)

def confirm_purchase(
    session_id: Optional[str],
    *,
    gateway: PaymentGateway,
    tickets: TicketStore,
    ledger: Optional[CheckoutLedger] = None,
) -> Dict[str, Any]:
    """
    Vérifie la session puis émet le billet correspondant.
    - 409 si le paiement n'est pas 'complete'.
    - Un seul billet par session: une seconde confirmation renvoie le billet déjà émis.
    Retour: {"ticket": {...}, "created": bool}
    """
    verification = verify_checkout_session(session_id, gateway=gateway, ledger=ledger)
    status = verification.get("status")
    if status != "complete":
        raise PaymentNotCompleted(f"Payment not completed (status={status})")
    if not verification.get("eventId") or not verification.get("userId"):
        raise ProviderError("Session metadata incomplete")

    session_id = session_id.strip()
    existing = tickets.get_by_session(session_id)
    if existing:
        return {"ticket": existing, "created": False}

    amount = verification.get("amount") or 0
    ticket = tickets.create({
        "eventId": verification["eventId"],
        "userId": verification["userId"],
        "sessionId": session_id,
        "price": round(amount / 100, 2),
        "status": "confirmed",
        "purchasedAt": datetime.now(timezone.utc).isoformat(),
    })
    logger.info(
        "tickets.confirm issued ticket_id=%s session_id=%s event_id=%s user_id=%s",
        ticket.get("id"), session_id, ticket.get("eventId"), ticket.get("userId"),
    )
    return {"ticket": ticket, "created": True}

def list_user_tickets(user_id: Optional[str], *, tickets: TicketStore) -> List[Dict[str, Any]]:
    user_id = (user_id or "").strip()
    if not user_id:
        raise InvalidRequest("Missing userId")
    return tickets.list_by_user(user_id)

def list_event_tickets(event_id: Optional[str], *, tickets: TicketStore) -> List[Dict[str, Any]]:
    event_id = (event_id or "").strip()
    if not event_id:
        raise InvalidRequest("Missing eventId")
    return tickets.list_by_event(event_id)
