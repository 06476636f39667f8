"""
Répartition du prix d'un billet entre la plateforme et l'organisateur (logique pure).
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, NamedTuple

from indieevent.errors import InvalidRequest

# module indieevent.payments.fees
PLATFORM_FEE_RATE = Decimal("0.07")
HOST_REVENUE_RATE = Decimal("0.93")

_CENT = Decimal("0.01")
# Plafond Stripe: unit_amount <= 99 999 999 centimes
MAX_PRICE = Decimal("999999.99")


class FeeSplit(NamedTuple):
    platform_fee: float
    host_revenue: float


def validate_price(price: Any) -> Decimal:
    """
    Valide un prix (dollars) et le convertit en Decimal exact.
    - Refuse bool, non numérique, NaN/inf, négatif ou au-delà de MAX_PRICE: InvalidRequest("Invalid price").
    - Aucune correction silencieuse (pas de clamp à 0).
    """
    if isinstance(price, bool) or not isinstance(price, (int, float, Decimal)):
        raise InvalidRequest("Invalid price")
    # str() évite d'embarquer l'erreur binaire du float (0.1 -> 0.1000000000000000055...)
    try:
        amount = Decimal(str(price))
    except (InvalidOperation, ValueError):
        raise InvalidRequest("Invalid price")
    if not amount.is_finite() or amount < 0 or amount > MAX_PRICE:
        raise InvalidRequest("Invalid price")
    return amount


def round2(amount: Decimal) -> Decimal:
    return amount.quantize(_CENT, rounding=ROUND_HALF_UP)


def compute_split(price: Any) -> FeeSplit:
    """
    Calcule la commission plateforme (7%) et le revenu organisateur (93%).
    - Chaque part est arrondie indépendamment à 2 décimales (demi-supérieur);
      la somme peut donc s'écarter du prix d'au plus un centime.
    Exemple: compute_split(10) == FeeSplit(0.70, 9.30)
    """
    amount = validate_price(price)
    return FeeSplit(
        platform_fee=float(round2(amount * PLATFORM_FEE_RATE)),
        host_revenue=float(round2(amount * HOST_REVENUE_RATE)),
    )


def to_minor_units(price: Any) -> int:
    """Convertit un prix en dollars en centimes entiers (ex: 12.5 -> 1250)."""
    amount = validate_price(price)
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
