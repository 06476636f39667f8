"""
Passerelles de paiement: une interface, deux implémentations choisies au démarrage.
- StripeGateway: Stripe Checkout hébergé (mode live, STRIPE_SECRET_KEY présent).
- InMemoryGateway: sessions simulées localement (mode mock, développement/démo).
"""
import logging
import threading
import time
from typing import Any, Dict

import stripe

from indieevent.config import CHECKOUT_CURRENCY
from indieevent.errors import ProviderError, SessionNotFound
from indieevent.events.mock_data import GUEST_USER_ID
from . import stripe_client

logger = logging.getLogger(__name__)

MOCK_SESSION_PREFIX = "mock_session_"
MOCK_EVENT_ID = "mock-event"
MOCK_AMOUNT_TOTAL = 2500


class PaymentGateway:
    """
    Contrat commun.
    create_session(...) -> {"id", "url", "status"}
    retrieve_session(session_id) -> {"id", "status", "amount_total", "metadata"}
    """

    mode = "abstract"

    def create_session(
        self,
        *,
        event_id: str,
        title: str,
        unit_amount: int,
        metadata: Dict[str, str],
        success_url: str,
        cancel_url: str,
    ) -> Dict[str, Any]:
        raise NotImplementedError

    def retrieve_session(self, session_id: str) -> Dict[str, Any]:
        raise NotImplementedError


class InMemoryGateway(PaymentGateway):
    """
    Simulation locale, sans appel externe.
    - id: mock_session_<epoch ms>, unique dans le process.
    - url: page de succès same-origin, directement (pas de page de paiement).
    - retrieve_session: toujours "complete", utilisateur invité et montant fixes.
      Le montant et l'utilisateur ne reflètent pas la session créée.
    """

    mode = "mock"

    def __init__(self, clock=None):
        self._clock = clock or time.time
        self._lock = threading.Lock()
        self._event_ids: Dict[str, str] = {}

    def _next_session_id(self) -> str:
        stamp = int(self._clock() * 1000)
        session_id = f"{MOCK_SESSION_PREFIX}{stamp}"
        while session_id in self._event_ids:
            stamp += 1
            session_id = f"{MOCK_SESSION_PREFIX}{stamp}"
        return session_id

    def create_session(self, *, event_id, title, unit_amount, metadata, success_url, cancel_url):
        with self._lock:
            session_id = self._next_session_id()
            self._event_ids[session_id] = event_id
        url = f"/events/{event_id}/purchase/success?session_id={session_id}"
        logger.info("payments.mock session created id=%s event_id=%s", session_id, event_id)
        return {"id": session_id, "url": url, "status": "complete"}

    def retrieve_session(self, session_id: str) -> Dict[str, Any]:
        with self._lock:
            event_id = self._event_ids.get(session_id, MOCK_EVENT_ID)
        return {
            "id": session_id,
            "status": "complete",
            "amount_total": MOCK_AMOUNT_TOTAL,
            "metadata": {"eventId": event_id, "userId": GUEST_USER_ID},
        }


def _provider_message(exc: Exception) -> str:
    return getattr(exc, "user_message", None) or str(exc) or exc.__class__.__name__


class StripeGateway(PaymentGateway):
    """
    Stripe Checkout (une seule ligne, quantité 1).
    - Erreurs SDK/réseau/timeout normalisées en ProviderError (message seul).
    - Session inconnue (resource_missing / 404) -> SessionNotFound.
    """

    mode = "live"

    def __init__(self, currency: str = CHECKOUT_CURRENCY):
        self.currency = currency

    def create_session(self, *, event_id, title, unit_amount, metadata, success_url, cancel_url):
        line_items = [{
            "quantity": 1,
            "price_data": {
                "currency": self.currency,
                "unit_amount": unit_amount,
                "product_data": {
                    "name": title or "Event Ticket",
                    "description": f"Ticket for {title or 'Event'}",
                },
            },
        }]
        try:
            session = stripe_client.create_session(
                line_items=line_items,
                mode="payment",
                success_url=success_url,
                cancel_url=cancel_url,
                metadata=metadata,
            )
        except (stripe.StripeError, RuntimeError) as exc:
            logger.exception("payments.stripe create_session failed event_id=%s", event_id)
            raise ProviderError(_provider_message(exc)) from exc
        logger.info("payments.stripe session created id=%s event_id=%s", session.get("id"), event_id)
        return {"id": session.get("id"), "url": session.get("url"), "status": session.get("status") or "open"}

    def retrieve_session(self, session_id: str) -> Dict[str, Any]:
        try:
            session = stripe_client.get_session(session_id)
        except stripe.InvalidRequestError as exc:
            if getattr(exc, "code", None) == "resource_missing" or getattr(exc, "http_status", None) == 404:
                raise SessionNotFound() from exc
            logger.exception("payments.stripe retrieve_session failed id=%s", session_id)
            raise ProviderError(_provider_message(exc)) from exc
        except (stripe.StripeError, RuntimeError) as exc:
            logger.exception("payments.stripe retrieve_session failed id=%s", session_id)
            raise ProviderError(_provider_message(exc)) from exc
        if not session:
            raise SessionNotFound()
        return {
            "id": session.get("id"),
            "status": session.get("status"),
            "amount_total": session.get("amount_total"),
            "metadata": dict(session.get("metadata") or {}),
        }
