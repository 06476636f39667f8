"""
Cas d'usage 'events': création d'un événement par un organisateur.
"""
from datetime import timezone
from typing import Any, Dict
import logging

from indieevent.errors import InvalidRequest
from indieevent.payments.fees import validate_price
from .repository import EventStore, parse_date

logger = logging.getLogger(__name__)

def _required_text(payload: Dict[str, Any], key: str) -> str:
    value = payload.get(key)
    text = "" if value is None else str(value).strip()
    if not text:
        raise InvalidRequest(f"Missing {key}")
    return text

def _utc_iso(value: str) -> str:
    return parse_date(value).astimezone(timezone.utc).isoformat().replace("+00:00", "Z")

def validate_event_payload(payload: Any) -> Dict[str, Any]:
    """
    Valide une demande de création {hostId, title, startTime, endTime, price, ...}.
    Ordre des contrôles (le premier échec l'emporte):
      corps objet, hostId, title, startTime, endTime, dates ISO-8601,
      fin après début, price présent puis >= 0, maxAttendees entier > 0 si fourni.
    Les dates sont renvoyées en UTC (suffixe Z).
    """
    if not isinstance(payload, dict):
        raise InvalidRequest("Invalid request body")
    host_id = _required_text(payload, "hostId")
    title = _required_text(payload, "title")
    start_raw = _required_text(payload, "startTime")
    end_raw = _required_text(payload, "endTime")
    if parse_date(end_raw) <= parse_date(start_raw):
        raise InvalidRequest("endTime must be after startTime")

    price = payload.get("price")
    if price is None:
        raise InvalidRequest("Missing price")
    amount = validate_price(price)

    max_attendees = payload.get("maxAttendees")
    if max_attendees is not None:
        if isinstance(max_attendees, bool) or not isinstance(max_attendees, int) or max_attendees <= 0:
            raise InvalidRequest("Invalid maxAttendees")

    return {
        "hostId": host_id,
        "title": title,
        "description": str(payload.get("description") or ""),
        "startTime": _utc_iso(start_raw),
        "endTime": _utc_iso(end_raw),
        "price": float(amount),
        "maxAttendees": max_attendees,
        "industry": payload.get("industry") or None,
        "status": "upcoming",
        "featured": False,
    }

def create_event(payload: Any, *, events: EventStore) -> Dict[str, Any]:
    event = events.create_event(validate_event_payload(payload))
    logger.info("events.create id=%s host_id=%s", event.get("id"), event.get("hostId"))
    return event
