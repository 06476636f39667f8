"""
Module 'payments' (feature-first): point d'entrée public.
Réunit répartition des frais, métadonnées Stripe, passerelles, registre local et services.
"""

from .fees import FeeSplit, PLATFORM_FEE_RATE, HOST_REVENUE_RATE, compute_split, to_minor_units, validate_price
from .metadata import make_metadata, extract_metadata_from_session
from .gateways import PaymentGateway, InMemoryGateway, StripeGateway
from .ledger import CheckoutLedger, InMemoryCheckoutLedger, SupabaseCheckoutLedger
from .service import validate_checkout_request, create_checkout_session, verify_checkout_session

__all__ = [
    # fees
    "FeeSplit",
    "PLATFORM_FEE_RATE",
    "HOST_REVENUE_RATE",
    "compute_split",
    "to_minor_units",
    "validate_price",
    # metadata
    "make_metadata",
    "extract_metadata_from_session",
    # gateways
    "PaymentGateway",
    "InMemoryGateway",
    "StripeGateway",
    # ledger
    "CheckoutLedger",
    "InMemoryCheckoutLedger",
    "SupabaseCheckoutLedger",
    # services
    "validate_checkout_request",
    "create_checkout_session",
    "verify_checkout_session",
]
