"""
Factory d'application pour les entrypoints (indieevent.app, indieevent.asgi).
Ordonne les étapes d'initialisation de manière lisible et testable.
"""
from typing import Optional

from fastapi import FastAPI

from indieevent.events.repository import EventStore
from indieevent.payments.gateways import PaymentGateway
from indieevent.payments.ledger import CheckoutLedger
from indieevent.tickets.repository import TicketStore
from . import dependencies
from .lifespan import lifespan
from .middlewares import register_basic_middlewares, register_security_middleware
from .exceptions import register_exception_handlers
from .routers import register_routers

def create_app(
    *,
    gateway: Optional[PaymentGateway] = None,
    events: Optional[EventStore] = None,
    tickets: Optional[TicketStore] = None,
    ledger: Optional[CheckoutLedger] = None,
) -> FastAPI:
    """
    Construit l'app FastAPI et fixe les collaborateurs une fois pour toutes:
      - passerelle de paiement (Stripe si STRIPE_SECRET_KEY, sinon simulée)
      - stores événements/billets et registre de sessions (Supabase si configuré, sinon mémoire)
    Les arguments explicites priment sur la configuration (tests, scripts).
    """
    app = FastAPI(title="IndieEvent Checkout API", lifespan=lifespan)
    app.state.payment_gateway = gateway or dependencies.build_gateway()
    app.state.event_store = events or dependencies.build_event_store()
    app.state.ticket_store = tickets or dependencies.build_ticket_store()
    app.state.checkout_ledger = ledger or dependencies.build_ledger()

    register_basic_middlewares(app)
    register_security_middleware(app)
    register_exception_handlers(app)
    register_routers(app)
    return app
