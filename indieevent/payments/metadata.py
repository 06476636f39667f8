"""
Sérialisation/désérialisation des métadonnées Stripe (eventId, userId, platformFee, hostRevenue).
"""
from typing import Any, Dict

from .fees import FeeSplit

# module indieevent.payments.metadata
def make_metadata(event_id: str, user_id: str, split: FeeSplit) -> Dict[str, str]:
    """
    Construit les métadonnées attachées à la session.
    - Stripe n'accepte que des chaînes: les montants sont formatés avec 2 décimales.
    """
    return {
        "eventId": event_id,
        "userId": user_id,
        "platformFee": f"{split.platform_fee:.2f}",
        "hostRevenue": f"{split.host_revenue:.2f}",
    }

def extract_metadata_from_session(session: Dict[str, Any]) -> Dict[str, Any]:
    """
    Extrait les métadonnées d'une session Checkout (lecture directe).
    - Tolérant: retourne des valeurs None pour les clés absentes.
    - platformFee/hostRevenue sont reconvertis en float quand c'est possible.
    """
    meta = (session or {}).get("metadata") or {} if isinstance(session, dict) else {}
    result: Dict[str, Any] = {
        "eventId": meta.get("eventId"),
        "userId": meta.get("userId"),
        "platformFee": None,
        "hostRevenue": None,
    }
    for key in ("platformFee", "hostRevenue"):
        try:
            result[key] = float(meta[key]) if meta.get(key) not in (None, "") else None
        except (TypeError, ValueError):
            result[key] = None
    return result
