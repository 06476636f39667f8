"""
Taxonomie d'erreurs du parcours de paiement.

Chaque erreur porte un code HTTP et un message court destiné au client.
Les erreurs SDK (Stripe, Supabase) sont normalisées à la frontière vers ces
classes; le message d'origine n'est jamais renvoyé tel quel au client.
"""


class CheckoutError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidRequest(CheckoutError):
    status_code = 400
    default_message = "Invalid request"


class NotFound(CheckoutError):
    status_code = 404
    default_message = "Not found"


class EventNotFound(NotFound):
    default_message = "Event not found"


class SessionNotFound(NotFound):
    default_message = "Session not found"


class UserNotFound(NotFound):
    default_message = "User not found"


class PaymentNotCompleted(CheckoutError):
    status_code = 409
    default_message = "Payment not completed"


class ProviderError(CheckoutError):
    """Échec côté prestataire de paiement (erreur API, réseau, timeout)."""
    default_message = "Payment provider error"


class LookupFailed(CheckoutError):
    """Échec du stockage (requête, réseau, timeout), distinct de NotFound."""
    default_message = "Event lookup failed"
