"""
Accès aux données 'events' (lecture seule côté checkout).
- EventStore: contrat commun (get_event + lectures catalogue).
- SupabaseEventStore: table 'events' (+ jointure host:users).
- InMemoryEventStore: données d'exemple (mode mock, sans Supabase).
Le choix de l'implémentation est fait une seule fois au démarrage (cf. app_setup.factory).
"""
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional
import logging
import threading
import time

from indieevent.errors import EventNotFound, InvalidRequest, LookupFailed, UserNotFound
from indieevent.events import mock_data

logger = logging.getLogger(__name__)

_EVENT_SELECT = "*, host:users(*)"

def _parse_price(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None

def _pick(row: Dict[str, Any], camel: str, snake: str, default: Any = None) -> Any:
    if camel in row and row[camel] is not None:
        return row[camel]
    return row.get(snake, default)

def normalize_event(row: Dict[str, Any]) -> Dict[str, Any]:
    """
    Normalise une ligne (Supabase snake_case ou mock camelCase) vers le schéma API:
    {id, title, description, startTime, endTime, price, hostId, host, maxAttendees,
     industry, status, featured, roomUrl}
    - price: float, None si absent ou non numérique.
    """
    return {
        "id": str(row.get("id") or ""),
        "title": row.get("title") or "",
        "description": row.get("description") or "",
        "startTime": _pick(row, "startTime", "start_time"),
        "endTime": _pick(row, "endTime", "end_time"),
        "price": _parse_price(row.get("price")),
        "hostId": _pick(row, "hostId", "host_id"),
        "host": row.get("host"),
        "maxAttendees": _pick(row, "maxAttendees", "max_attendees"),
        "industry": row.get("industry"),
        "status": row.get("status") or "upcoming",
        "featured": bool(row.get("featured")),
        "roomUrl": _pick(row, "roomUrl", "room_url"),
    }

def parse_date(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        raise InvalidRequest(f"Invalid date: {value}")
    # Les dates sans fuseau sont interprétées en UTC
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class EventStore:
    """Contrat de lecture des événements."""

    def get_event(self, event_id: str) -> Dict[str, Any]:
        raise NotImplementedError

    def list_upcoming(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def get_featured(self) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def filter_events(
        self,
        *,
        industry: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def list_by_host(self, host_id: str) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def list_by_attendee(self, user_id: str) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def get_user(self, user_id: str) -> Dict[str, Any]:
        raise NotImplementedError

    def create_event(self, event: Dict[str, Any]) -> Dict[str, Any]:
        """`event`: champs camelCase déjà validés (cf. events.service.validate_event_payload)."""
        raise NotImplementedError


class InMemoryEventStore(EventStore):
    """Store sur données d'exemple; `events` permet d'injecter un jeu de test."""

    def __init__(self, events: Optional[Iterable[Dict[str, Any]]] = None, users: Optional[Iterable[Dict[str, Any]]] = None):
        self._events = [dict(e) for e in (mock_data.MOCK_EVENTS if events is None else events)]
        self._users = {u["id"]: u for u in (mock_data.MOCK_USERS if users is None else users)}
        self._lock = threading.Lock()

    def _with_host(self, event: Dict[str, Any]) -> Dict[str, Any]:
        row = dict(event)
        row["host"] = self._users.get(row.get("hostId"))
        return normalize_event(row)

    def _sorted(self, events: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
        return sorted(events, key=lambda e: e.get("startTime") or "")

    def get_event(self, event_id: str) -> Dict[str, Any]:
        if not event_id:
            raise InvalidRequest("Missing eventId")
        for event in self._events:
            if str(event.get("id")) == event_id:
                return self._with_host(event)
        raise EventNotFound()

    def list_upcoming(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        upcoming = [self._with_host(e) for e in self._sorted(self._events) if e.get("status") == "upcoming"]
        return upcoming[:limit] if limit else upcoming

    def get_featured(self) -> Optional[Dict[str, Any]]:
        featured = next((e for e in self._events if e.get("featured")), None)
        if featured:
            return self._with_host(featured)
        upcoming = self.list_upcoming(limit=1)
        return upcoming[0] if upcoming else None

    def filter_events(self, *, industry=None, min_price=None, max_price=None, start_date=None, end_date=None):
        start = parse_date(start_date)
        end = parse_date(end_date)
        matches: List[Dict[str, Any]] = []
        for event in self._sorted(self._events):
            if event.get("status") != "upcoming":
                continue
            if industry and event.get("industry") != industry:
                continue
            price = _parse_price(event.get("price")) or 0.0
            if min_price is not None and price < min_price:
                continue
            if max_price is not None and price > max_price:
                continue
            starts_at = parse_date(event.get("startTime"))
            if start and starts_at and starts_at < start:
                continue
            if end and starts_at and starts_at > end:
                continue
            matches.append(self._with_host(event))
        return matches

    def list_by_host(self, host_id: str) -> List[Dict[str, Any]]:
        return [self._with_host(e) for e in self._sorted(self._events) if e.get("hostId") == host_id]

    def list_by_attendee(self, user_id: str) -> List[Dict[str, Any]]:
        return [self._with_host(e) for e in self._sorted(self._events) if user_id in (e.get("attendees") or [])]

    def get_user(self, user_id: str) -> Dict[str, Any]:
        user = self._users.get(user_id)
        if not user:
            raise UserNotFound()
        return dict(user)

    def create_event(self, event: Dict[str, Any]) -> Dict[str, Any]:
        now = datetime.now(timezone.utc).isoformat()
        with self._lock:
            stamp = int(time.time() * 1000)
            known = {str(e.get("id")) for e in self._events}
            while f"event-{stamp}" in known:
                stamp += 1
            row = dict(event, id=f"event-{stamp}", attendees=[], createdAt=now, updatedAt=now)
            self._events.append(row)
        return self._with_host(row)


class SupabaseEventStore(EventStore):
    """
    Store Supabase (table 'events').
    - Ligne absente: EventNotFound.
    - Erreur PostgREST/réseau/timeout: LookupFailed (erreur d'origine journalisée).
    """

    def __init__(self, client_factory=None):
        if client_factory is None:
            from indieevent.infra.supabase_client import get_supabase
            client_factory = get_supabase
        self._client_factory = client_factory

    def _table(self):
        return self._client_factory().table("events")

    def _run(self, action: str, build_query) -> List[Dict[str, Any]]:
        try:
            res = build_query().execute()
        except Exception as exc:
            logger.exception("events.repository.%s failed", action)
            raise LookupFailed() from exc
        return res.data or []

    def get_event(self, event_id: str) -> Dict[str, Any]:
        if not event_id:
            raise InvalidRequest("Missing eventId")
        rows = self._run(
            "get_event",
            lambda: self._table().select(_EVENT_SELECT).eq("id", event_id).limit(1),
        )
        if not rows:
            raise EventNotFound()
        return normalize_event(rows[0])

    def list_upcoming(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        def query():
            q = self._table().select(_EVENT_SELECT).eq("status", "upcoming").order("start_time", desc=False)
            return q.limit(limit) if limit else q
        return [normalize_event(r) for r in self._run("list_upcoming", query)]

    def get_featured(self) -> Optional[Dict[str, Any]]:
        rows = self._run(
            "get_featured",
            lambda: self._table().select(_EVENT_SELECT).eq("featured", True).limit(1),
        )
        if rows:
            return normalize_event(rows[0])
        upcoming = self.list_upcoming(limit=1)
        return upcoming[0] if upcoming else None

    def filter_events(self, *, industry=None, min_price=None, max_price=None, start_date=None, end_date=None):
        # Valide les dates avant tout appel réseau
        parse_date(start_date)
        parse_date(end_date)

        def query():
            q = self._table().select(_EVENT_SELECT).eq("status", "upcoming")
            if industry:
                q = q.eq("industry", industry)
            if min_price is not None:
                q = q.gte("price", min_price)
            if max_price is not None:
                q = q.lte("price", max_price)
            if start_date:
                q = q.gte("start_time", start_date)
            if end_date:
                q = q.lte("start_time", end_date)
            return q.order("start_time", desc=False)
        return [normalize_event(r) for r in self._run("filter_events", query)]

    def list_by_host(self, host_id: str) -> List[Dict[str, Any]]:
        rows = self._run(
            "list_by_host",
            lambda: self._table().select(_EVENT_SELECT).eq("host_id", host_id).order("start_time", desc=False),
        )
        return [normalize_event(r) for r in rows]

    def list_by_attendee(self, user_id: str) -> List[Dict[str, Any]]:
        tickets = self._run(
            "list_by_attendee",
            lambda: self._client_factory().table("tickets").select("event_id").eq("user_id", user_id),
        )
        event_ids = sorted({t["event_id"] for t in tickets if t.get("event_id")})
        if not event_ids:
            return []
        rows = self._run(
            "list_by_attendee",
            lambda: self._table().select(_EVENT_SELECT).in_("id", event_ids).order("start_time", desc=False),
        )
        return [normalize_event(r) for r in rows]

    def get_user(self, user_id: str) -> Dict[str, Any]:
        rows = self._run(
            "get_user",
            lambda: self._client_factory().table("users").select("*").eq("id", user_id).limit(1),
        )
        if not rows:
            raise UserNotFound()
        return rows[0]

    def create_event(self, event: Dict[str, Any]) -> Dict[str, Any]:
        payload = {
            "title": event["title"],
            "description": event.get("description") or "",
            "start_time": event["startTime"],
            "end_time": event["endTime"],
            "price": event["price"],
            "host_id": event["hostId"],
            "max_attendees": event.get("maxAttendees"),
            "industry": event.get("industry"),
            "status": event.get("status") or "upcoming",
        }
        rows = self._run("create_event", lambda: self._table().insert(payload))
        if not rows:
            raise LookupFailed("Event creation failed")
        return normalize_event(rows[0])
