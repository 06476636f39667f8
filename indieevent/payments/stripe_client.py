"""
Adaptateur Stripe: centralise les appels et la configuration Stripe.
"""
import stripe
from typing import Any, Dict, List

from indieevent.config import STRIPE_SECRET_KEY, PROVIDER_TIMEOUT_SECONDS

# module indieevent.payments.stripe_client
def require_stripe():
    """
    Prépare et retourne le module stripe prêt à l'emploi.
    - Configure stripe.api_key via STRIPE_SECRET_KEY.
    - Client HTTP avec timeout PROVIDER_TIMEOUT_SECONDS et aucune relance automatique.
    """
    if not STRIPE_SECRET_KEY:
        raise RuntimeError("STRIPE_SECRET_KEY manquant")
    stripe.api_key = STRIPE_SECRET_KEY
    stripe.max_network_retries = 0
    if not isinstance(stripe.default_http_client, stripe.RequestsClient):
        stripe.default_http_client = stripe.RequestsClient(timeout=PROVIDER_TIMEOUT_SECONDS)
    return stripe

def _as_dict(session) -> Dict[str, Any]:
    # StripeObject n'est plus un mapping: to_dict() convertit aussi les objets imbriqués (metadata)
    return session.to_dict()

def create_session(
    *,
    line_items: List[Dict[str, Any]],
    mode: str,
    success_url: str,
    cancel_url: str,
    metadata: Dict[str, Any],
) -> Dict[str, Any]:
    """
    Crée une session Stripe Checkout.
    - line_items: lignes Stripe (price_data + quantity)
    - metadata: {"eventId", "userId", "platformFee", "hostRevenue"}
    Retour: dict session (ex: {"id": "cs_test_...", "url": "https://...", "status": "open"})
    """
    require_stripe()
    session = stripe.checkout.Session.create(
        line_items=line_items,
        mode=mode,
        success_url=success_url,
        cancel_url=cancel_url,
        metadata=metadata,
        payment_method_types=["card"],
    )
    return _as_dict(session)

def get_session(session_id: str) -> Dict[str, Any]:
    """
    Récupère une session Stripe Checkout par son identifiant.
    Retour: dict session incluant "id", "status", "amount_total", "metadata", etc.
    """
    require_stripe()
    session = stripe.checkout.Session.retrieve(session_id)
    return _as_dict(session)
