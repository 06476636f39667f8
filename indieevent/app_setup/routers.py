"""
Registre central des routers (API checkout, tickets, événements, utilisateurs, health).
"""
from fastapi import FastAPI
from indieevent.payments import views as payments_views
from indieevent.tickets import views as tickets_views
from indieevent.events import views as events_views
from indieevent.health.router import router as health_router

def register_routers(app: FastAPI) -> None:
    app.include_router(payments_views.router)
    app.include_router(tickets_views.router)
    app.include_router(events_views.router)
    app.include_router(events_views.hosts_router)
    app.include_router(events_views.users_router)
    app.include_router(health_router)
