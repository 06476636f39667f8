"""
Sélection des implémentations (live/mock) et dépendances FastAPI.
- build_*: appelés une seule fois par la factory, selon la configuration.
- get_*: lisent les collaborateurs posés sur app.state (surchargeables en tests
  via app.dependency_overrides).
"""
from fastapi import Request

from indieevent import config
from indieevent.events.repository import EventStore, InMemoryEventStore, SupabaseEventStore
from indieevent.payments.gateways import PaymentGateway, InMemoryGateway, StripeGateway
from indieevent.payments.ledger import CheckoutLedger, InMemoryCheckoutLedger, SupabaseCheckoutLedger
from indieevent.tickets.repository import TicketStore, InMemoryTicketStore, SupabaseTicketStore

def build_gateway() -> PaymentGateway:
    return StripeGateway() if config.payments_live() else InMemoryGateway()

def build_event_store() -> EventStore:
    return SupabaseEventStore() if config.store_live() else InMemoryEventStore()

def build_ticket_store() -> TicketStore:
    return SupabaseTicketStore() if config.store_live() else InMemoryTicketStore()

def build_ledger() -> CheckoutLedger:
    return SupabaseCheckoutLedger() if config.store_live() else InMemoryCheckoutLedger()

def get_gateway(request: Request) -> PaymentGateway:
    return request.app.state.payment_gateway

def get_event_store(request: Request) -> EventStore:
    return request.app.state.event_store

def get_ticket_store(request: Request) -> TicketStore:
    return request.app.state.ticket_store

def get_ledger(request: Request) -> CheckoutLedger:
    return request.app.state.checkout_ledger

def request_origin(request: Request) -> str:
    """Origine du client (en-tête Origin), sinon BASE_URL."""
    origin = (request.headers.get("origin") or "").strip()
    if origin and origin != "null":
        return origin.rstrip("/")
    return config.BASE_URL
