import os

# Pas de Redis en tests: l'init fastapi-limiter est court-circuitée par le lifespan
os.environ.setdefault("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS", "1")

import pytest
from typing import Generator
from fastapi.testclient import TestClient

from indieevent.app_setup.factory import create_app
from indieevent.events.repository import InMemoryEventStore
from indieevent.payments.gateways import InMemoryGateway
from indieevent.payments.ledger import InMemoryCheckoutLedger
from indieevent.tickets.repository import InMemoryTicketStore

# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)
        elif "/functional/" in nodeid:
            item.add_marker(pytest.mark.functional)


class SpyGateway(InMemoryGateway):
    """Passerelle simulée qui enregistre les appels (vérifie l'absence d'appel externe)."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.created = []
        self.retrieved = []

    def create_session(self, **kwargs):
        self.created.append(kwargs)
        return super().create_session(**kwargs)

    def retrieve_session(self, session_id):
        self.retrieved.append(session_id)
        return super().retrieve_session(session_id)


@pytest.fixture
def gateway() -> SpyGateway:
    return SpyGateway()

@pytest.fixture
def event_store() -> InMemoryEventStore:
    return InMemoryEventStore()

@pytest.fixture
def ticket_store() -> InMemoryTicketStore:
    return InMemoryTicketStore()

@pytest.fixture
def ledger() -> InMemoryCheckoutLedger:
    return InMemoryCheckoutLedger()

@pytest.fixture
def app(gateway, event_store, ticket_store, ledger):
    return create_app(gateway=gateway, events=event_store, tickets=ticket_store, ledger=ledger)

@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c
