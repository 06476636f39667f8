"""
Cas d'usage 'payments': orchestre validation, lookup événement, répartition, passerelle et registre.
"""
from typing import Any, Dict, Optional
import logging

from indieevent.errors import InvalidRequest
from indieevent.events.repository import EventStore
from . import fees
from .gateways import PaymentGateway
from .ledger import CheckoutLedger
from .metadata import make_metadata, extract_metadata_from_session

logger = logging.getLogger(__name__)

def _required_id(payload: Dict[str, Any], key: str) -> str:
    value = payload.get(key)
    text = "" if value is None else str(value).strip()
    if not text:
        raise InvalidRequest(f"Missing {key}")
    return text

def validate_checkout_request(payload: Any) -> Dict[str, Any]:
    """
    Valide une demande de checkout {eventId, userId, price}.
    L'ordre des contrôles est contractuel (le premier échec l'emporte):
      1) corps JSON objet      -> "Invalid request body"
      2) eventId non vide      -> "Missing eventId"
      3) userId non vide       -> "Missing userId"
      4) price présent         -> "Missing price"
      5) price numérique >= 0  -> "Invalid price"
    Retour: {"eventId", "userId", "price"} normalisé.
    """
    if not isinstance(payload, dict):
        raise InvalidRequest("Invalid request body")
    event_id = _required_id(payload, "eventId")
    user_id = _required_id(payload, "userId")
    price = payload.get("price")
    if price is None:
        raise InvalidRequest("Missing price")
    fees.validate_price(price)
    return {"eventId": event_id, "userId": user_id, "price": price}

def create_checkout_session(
    payload: Any,
    *,
    origin: str,
    gateway: PaymentGateway,
    events: EventStore,
    ledger: Optional[CheckoutLedger] = None,
) -> Dict[str, Any]:
    """
    Crée une session de paiement pour un billet.
    - Le prix facturé est celui de l'événement en base; le prix client est seulement validé.
    - Aucun appel à la passerelle si la validation ou le lookup échoue.
    Retour: {"sessionId": str, "url": str}
    """
    request = validate_checkout_request(payload)
    event_id, user_id = request["eventId"], request["userId"]

    event = events.get_event(event_id)
    price = event.get("price")
    if price is None:
        price = request["price"]
    elif float(price) != float(request["price"]):
        logger.warning(
            "payments.checkout price mismatch event_id=%s client=%s event=%s",
            event_id, request["price"], price,
        )

    split = fees.compute_split(price)
    base = (origin or "").rstrip("/")
    session = gateway.create_session(
        event_id=event_id,
        title=event.get("title") or "",
        unit_amount=fees.to_minor_units(price),
        metadata=make_metadata(event_id, user_id, split),
        success_url=f"{base}/events/{event_id}/purchase/success?session_id={{CHECKOUT_SESSION_ID}}",
        cancel_url=f"{base}/events/{event_id}",
    )
    session_id = session["id"]
    if ledger is not None:
        ledger.record(session_id, event_id, user_id, split)
    logger.info(
        "payments.checkout created session_id=%s event_id=%s user_id=%s mode=%s",
        session_id, event_id, user_id, gateway.mode,
    )
    return {"sessionId": session_id, "url": session.get("url")}

def verify_checkout_session(
    session_id: Optional[str],
    *,
    gateway: PaymentGateway,
    ledger: Optional[CheckoutLedger] = None,
) -> Dict[str, Any]:
    """
    Relit une session auprès de la passerelle et rapporte son état.
    - Sans effet de bord: deux appels successifs renvoient le même résultat
      (hors changement d'état côté prestataire).
    - eventId/userId absents des métadonnées: complétés depuis le registre local.
    Retour: {"status", "eventId", "userId", "amount"} (amount en centimes)
    """
    session_id = (session_id or "").strip()
    if not session_id:
        raise InvalidRequest("Missing session ID")

    session = gateway.retrieve_session(session_id)
    meta = extract_metadata_from_session(session)
    event_id, user_id = meta["eventId"], meta["userId"]
    if ledger is not None and not (event_id and user_id):
        record = ledger.get(session_id) or {}
        event_id = event_id or record.get("eventId")
        user_id = user_id or record.get("userId")

    return {
        "status": session.get("status"),
        "eventId": event_id,
        "userId": user_id,
        "amount": session.get("amount_total"),
    }
