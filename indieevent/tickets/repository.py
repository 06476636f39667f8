"""
Accès aux données 'tickets'.
- get_by_session / create: émission d'un billet par session de paiement confirmée.
- list_by_user: billets d'un utilisateur, plus récents d'abord.
- list_by_event: billets vendus pour un événement (vue organisateur).
"""
from typing import Any, Dict, Iterable, List, Optional
import logging
import threading

from indieevent.errors import LookupFailed
from indieevent.events import mock_data

logger = logging.getLogger(__name__)

def _from_row(row: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": str(row.get("id") or ""),
        "eventId": row.get("event_id"),
        "userId": row.get("user_id"),
        "sessionId": row.get("session_id"),
        "price": float(row.get("price") or 0),
        "status": row.get("status") or "confirmed",
        "purchasedAt": row.get("purchased_at"),
    }


class TicketStore:
    def get_by_session(self, session_id: str) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def create(self, ticket: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError

    def list_by_user(self, user_id: str) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def list_by_event(self, event_id: str) -> List[Dict[str, Any]]:
        raise NotImplementedError


class InMemoryTicketStore(TicketStore):
    """
    Billets en mémoire (mode mock), initialisés avec les billets d'exemple.
    create() est idempotent par sessionId: renvoie le billet existant le cas échéant.
    """

    def __init__(self, tickets: Optional[Iterable[Dict[str, Any]]] = None):
        self._lock = threading.Lock()
        self._tickets = [dict(t) for t in (mock_data.MOCK_TICKETS if tickets is None else tickets)]
        self._seq = len(self._tickets)

    def get_by_session(self, session_id):
        with self._lock:
            found = next((t for t in self._tickets if session_id and t.get("sessionId") == session_id), None)
        return dict(found) if found else None

    def create(self, ticket):
        with self._lock:
            session_id = ticket.get("sessionId")
            existing = next((t for t in self._tickets if session_id and t.get("sessionId") == session_id), None)
            if existing:
                return dict(existing)
            self._seq += 1
            row = dict(ticket, id=f"ticket-{self._seq}")
            self._tickets.append(row)
        return dict(row)

    def list_by_user(self, user_id):
        with self._lock:
            rows = [dict(t) for t in self._tickets if t.get("userId") == user_id]
        return sorted(rows, key=lambda t: t.get("purchasedAt") or "", reverse=True)

    def list_by_event(self, event_id):
        with self._lock:
            rows = [dict(t) for t in self._tickets if t.get("eventId") == event_id]
        return sorted(rows, key=lambda t: t.get("purchasedAt") or "", reverse=True)


class SupabaseTicketStore(TicketStore):
    """Table 'tickets' (snake_case). Erreurs Supabase -> LookupFailed."""

    def __init__(self, client_factory=None):
        if client_factory is None:
            from indieevent.infra.supabase_client import get_supabase
            client_factory = get_supabase
        self._client_factory = client_factory

    def _execute(self, action: str, build_query) -> List[Dict[str, Any]]:
        try:
            res = build_query(self._client_factory().table("tickets")).execute()
        except Exception as exc:
            logger.exception("tickets.repository.%s failed", action)
            raise LookupFailed("Ticket storage failed") from exc
        rows = res.data or []
        return rows if isinstance(rows, list) else [rows]

    def get_by_session(self, session_id):
        rows = self._execute("get_by_session", lambda t: t.select("*").eq("session_id", session_id).limit(1))
        return _from_row(rows[0]) if rows else None

    def create(self, ticket):
        payload = {
            "event_id": ticket["eventId"],
            "user_id": ticket["userId"],
            "session_id": ticket.get("sessionId"),
            "price": ticket["price"],
            "status": ticket.get("status") or "confirmed",
            "purchased_at": ticket["purchasedAt"],
        }
        rows = self._execute("create", lambda t: t.insert(payload))
        return _from_row(rows[0]) if rows else dict(ticket)

    def list_by_user(self, user_id):
        rows = self._execute(
            "list_by_user",
            lambda t: t.select("*").eq("user_id", user_id).order("purchased_at", desc=True),
        )
        return [_from_row(r) for r in rows]

    def list_by_event(self, event_id):
        rows = self._execute(
            "list_by_event",
            lambda t: t.select("*").eq("event_id", event_id).order("purchased_at", desc=True),
        )
        return [_from_row(r) for r in rows]
