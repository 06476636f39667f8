"""
Registre local des sessions de paiement créées.

Conserve {sessionId, eventId, userId, platformFee, hostRevenue, createdAt} par sessionId,
pour que la vérification ne dépende pas uniquement de l'écho des métadonnées Stripe.
"""
from datetime import datetime, timezone
from typing import Any, Dict, Optional
import logging
import threading

from .fees import FeeSplit

logger = logging.getLogger(__name__)

def make_record(session_id: str, event_id: str, user_id: str, split: FeeSplit) -> Dict[str, Any]:
    return {
        "sessionId": session_id,
        "eventId": event_id,
        "userId": user_id,
        "platformFee": split.platform_fee,
        "hostRevenue": split.host_revenue,
        "createdAt": datetime.now(timezone.utc).isoformat(),
    }


class CheckoutLedger:
    def record(self, session_id: str, event_id: str, user_id: str, split: FeeSplit) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def get(self, session_id: str) -> Optional[Dict[str, Any]]:
        raise NotImplementedError


class InMemoryCheckoutLedger(CheckoutLedger):
    def __init__(self):
        self._lock = threading.Lock()
        self._records: Dict[str, Dict[str, Any]] = {}

    def record(self, session_id, event_id, user_id, split):
        row = make_record(session_id, event_id, user_id, split)
        with self._lock:
            self._records[session_id] = row
        return dict(row)

    def get(self, session_id):
        with self._lock:
            row = self._records.get(session_id)
        return dict(row) if row else None


class SupabaseCheckoutLedger(CheckoutLedger):
    """
    Table 'checkout_sessions' (snake_case).
    - Échecs journalisés, jamais propagés: la session existe déjà chez le prestataire.
    """

    def __init__(self, client_factory=None):
        if client_factory is None:
            from indieevent.infra.supabase_client import get_supabase
            client_factory = get_supabase
        self._client_factory = client_factory

    def record(self, session_id, event_id, user_id, split):
        row = make_record(session_id, event_id, user_id, split)
        try:
            (
                self._client_factory()
                .table("checkout_sessions")
                .insert({
                    "session_id": row["sessionId"],
                    "event_id": row["eventId"],
                    "user_id": row["userId"],
                    "platform_fee": row["platformFee"],
                    "host_revenue": row["hostRevenue"],
                    "created_at": row["createdAt"],
                })
                .execute()
            )
            return row
        except Exception:
            logger.exception("payments.ledger.record failed session_id=%s", session_id)
            return None

    def get(self, session_id):
        try:
            res = (
                self._client_factory()
                .table("checkout_sessions")
                .select("*")
                .eq("session_id", session_id)
                .limit(1)
                .execute()
            )
        except Exception:
            logger.exception("payments.ledger.get failed session_id=%s", session_id)
            return None
        rows = res.data or []
        if not rows:
            return None
        r = rows[0]
        return {
            "sessionId": r.get("session_id"),
            "eventId": r.get("event_id"),
            "userId": r.get("user_id"),
            "platformFee": r.get("platform_fee"),
            "hostRevenue": r.get("host_revenue"),
            "createdAt": r.get("created_at"),
        }
