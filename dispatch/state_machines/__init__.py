from .offer_state import (
    Offer,
    OfferStatus,
    OfferStateException,
    make_offer,
    accept_offer,
    decline_offer,
    expire_offer,
)

__all__ = [
    "Offer",
    "OfferStatus",
    "OfferStateException",
    "make_offer",
    "accept_offer",
    "decline_offer",
    "expire_offer",
]
