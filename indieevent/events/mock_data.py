"""
Données d'exemple utilisées quand Supabase n'est pas configuré (mode mock).
Les dates des événements sont calculées relativement au chargement du module.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List

GUEST_USER_ID = "user-6"

def _iso(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")

MOCK_USERS: List[Dict[str, Any]] = [
    {"id": "user-1", "name": "Alex Johnson", "email": "alex@example.com", "industry": "Technology",
     "bio": "Startup founder with 10+ years of experience in SaaS", "isHost": True,
     "createdAt": "2023-01-15T08:00:00Z"},
    {"id": "user-2", "name": "Sarah Williams", "email": "sarah@example.com", "industry": "Marketing",
     "bio": "Digital marketing specialist focused on growth strategies", "isHost": True,
     "createdAt": "2023-02-10T10:30:00Z"},
    {"id": "user-3", "name": "Michael Chen", "email": "michael@example.com", "industry": "Finance",
     "bio": "Investment advisor helping startups secure funding", "isHost": True,
     "createdAt": "2023-03-05T14:15:00Z"},
    {"id": "user-4", "name": "Emma Davis", "email": "emma@example.com", "industry": "Design",
     "bio": "UX/UI designer with a passion for user-centered design", "isHost": True,
     "createdAt": "2023-04-20T09:45:00Z"},
    {"id": "user-5", "name": "James Wilson", "email": "james@example.com", "industry": "Business",
     "bio": "Serial entrepreneur with 3 successful exits", "isHost": True,
     "createdAt": "2023-05-12T11:20:00Z"},
    {"id": GUEST_USER_ID, "name": "Guest User", "email": "guest@example.com", "industry": "Technology",
     "isHost": False, "createdAt": "2023-06-01T00:00:00Z"},
]

_now = datetime.now(timezone.utc)
_tomorrow = _now + timedelta(days=1)
_next_week = _now + timedelta(days=7)
_two_weeks = _now + timedelta(days=14)

def _event(event_id, title, description, start, hours, price, host_id, attendees, industry, created, featured=False):
    return {
        "id": event_id,
        "title": title,
        "description": description,
        "startTime": _iso(start),
        "endTime": _iso(start + timedelta(hours=hours)),
        "price": price,
        "hostId": host_id,
        "maxAttendees": 50,
        "attendees": attendees,
        "industry": industry,
        "status": "upcoming",
        "createdAt": created,
        "updatedAt": created,
        "featured": featured,
    }

MOCK_EVENTS: List[Dict[str, Any]] = [
    _event("event-1", "Startup Pitch Practice",
           "Practice your startup pitch and get feedback from experienced founders and investors.",
           _tomorrow, 2, 25, "user-1", ["user-3", "user-4", "user-6"], "Business",
           "2023-06-15T08:00:00Z", featured=True),
    _event("event-2", "Digital Marketing Masterclass",
           "Learn the latest digital marketing strategies to grow your business.",
           _next_week, 3, 50, "user-2", ["user-1", "user-5"], "Marketing",
           "2023-06-20T10:30:00Z"),
    _event("event-3", "Fundraising Strategies for Startups",
           "Discover effective fundraising strategies for your startup.",
           _two_weeks, 2, 35, "user-3", ["user-2", "user-4"], "Finance",
           "2023-07-01T14:15:00Z"),
    _event("event-4", "UX Design Workshop",
           "Hands-on workshop on user experience design principles.",
           _two_weeks + timedelta(days=3), 4, 40, "user-4", ["user-1", "user-2"], "Design",
           "2023-07-10T09:45:00Z"),
    _event("event-5", "Business Model Innovation",
           "Explore innovative business models that can disrupt industries.",
           _two_weeks + timedelta(days=7), 2, 30, "user-5", ["user-3"], "Business",
           "2023-07-15T11:20:00Z"),
]

# (id, event_id, user_id, purchased_at, price)
_TICKET_ROWS = [
    ("ticket-1", "event-1", "user-3", "2023-06-16T09:30:00Z", 25),
    ("ticket-2", "event-1", "user-4", "2023-06-17T14:45:00Z", 25),
    ("ticket-3", "event-1", "user-6", "2023-06-18T11:15:00Z", 25),
    ("ticket-4", "event-2", "user-1", "2023-06-21T10:00:00Z", 50),
    ("ticket-5", "event-2", "user-5", "2023-06-22T16:30:00Z", 50),
    ("ticket-6", "event-3", "user-2", "2023-07-02T13:20:00Z", 35),
    ("ticket-7", "event-3", "user-4", "2023-07-03T09:10:00Z", 35),
    ("ticket-8", "event-4", "user-1", "2023-07-11T15:40:00Z", 40),
    ("ticket-9", "event-4", "user-2", "2023-07-12T11:55:00Z", 40),
    ("ticket-10", "event-5", "user-3", "2023-07-16T14:25:00Z", 30),
]

MOCK_TICKETS: List[Dict[str, Any]] = [
    {"id": tid, "eventId": eid, "userId": uid, "sessionId": None,
     "purchasedAt": purchased, "price": float(price), "status": "confirmed"}
    for tid, eid, uid, purchased, price in _TICKET_ROWS
]
