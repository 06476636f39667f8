"""Endpoints API du catalogue d'événements.
- Listing des événements à venir, événement mis en avant, filtres (secteur, prix, dates).
- Création d'un événement, événements d'un organisateur / d'un participant, profil utilisateur.
- Gestion d'erreurs: 404 quand introuvable, 400 pour validations, 500 en cas d'échec Supabase.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from indieevent.app_setup.dependencies import get_event_store
from indieevent.errors import EventNotFound, InvalidRequest
from indieevent.utils.rate_limit import optional_rate_limit
from .repository import EventStore
from .service import create_event

router = APIRouter(prefix="/api/events", tags=["Events API"])
hosts_router = APIRouter(prefix="/api/hosts", tags=["Events API"])
users_router = APIRouter(prefix="/api/users", tags=["Events API"])

@router.get("")
async def list_events(limit: Optional[int] = None, events: EventStore = Depends(get_event_store)):
    """Événements à venir, triés par date de début."""
    items = await run_in_threadpool(events.list_upcoming, limit)
    return {"items": items}

@router.post("", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
async def post_event(request: Request, events: EventStore = Depends(get_event_store)):
    """
    Crée un événement (organisateur).
    - Entrée JSON: {"hostId", "title", "startTime", "endTime", "price", "description"?, "maxAttendees"?, "industry"?}
    - Réponse 201: {"success": true, "event": {...}}
    """
    try:
        body = await request.json()
    except ValueError:
        raise InvalidRequest("Invalid request body")
    event = await run_in_threadpool(create_event, body, events=events)
    return JSONResponse({"success": True, "event": event}, status_code=201)

@router.get("/featured")
async def featured_event(events: EventStore = Depends(get_event_store)):
    """Événement mis en avant, sinon le prochain à venir.
    - 404 si le catalogue est vide.
    """
    item = await run_in_threadpool(events.get_featured)
    if not item:
        raise EventNotFound()
    return item

@router.get("/filter")
async def filter_events(
    industry: Optional[str] = None,
    minPrice: Optional[float] = None,
    maxPrice: Optional[float] = None,
    startDate: Optional[str] = None,
    endDate: Optional[str] = None,
    events: EventStore = Depends(get_event_store),
):
    items = await run_in_threadpool(
        lambda: events.filter_events(
            industry=industry,
            min_price=minPrice,
            max_price=maxPrice,
            start_date=startDate,
            end_date=endDate,
        )
    )
    return {"items": items}

@router.get("/{event_id}")
async def get_event(event_id: str, events: EventStore = Depends(get_event_store)):
    """Récupère un événement par son identifiant (404 si introuvable)."""
    return await run_in_threadpool(events.get_event, event_id)

@hosts_router.get("/{host_id}/events")
async def host_events(host_id: str, events: EventStore = Depends(get_event_store)):
    items = await run_in_threadpool(events.list_by_host, host_id)
    return {"items": items}

@users_router.get("/{user_id}")
async def get_user(user_id: str, events: EventStore = Depends(get_event_store)):
    """Profil public d'un utilisateur (404 si inconnu)."""
    return await run_in_threadpool(events.get_user, user_id)

@users_router.get("/{user_id}/events")
async def attendee_events(user_id: str, events: EventStore = Depends(get_event_store)):
    """Événements auxquels l'utilisateur participe."""
    items = await run_in_threadpool(events.list_by_attendee, user_id)
    return {"items": items}
