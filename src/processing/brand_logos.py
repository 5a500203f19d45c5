# src/processing/brand_logos.py

"""Map gift card names to high-resolution brand logo URLs.

Logos come from the favicon service (128x128 PNG) keyed by the brand's
domain.  Lookup is an exact name match first, then a case-insensitive
"table key is contained in the product name" scan.  The scan walks
``BRAND_DOMAINS`` in order and the first hit wins, so keep more
specific names above shorter ones that they contain.
"""

import logging

from src.config.settings import Settings

logger = logging.getLogger("giftcard_monitor.logos")

BRAND_DOMAINS: tuple[tuple[str, str], ...] = (
    ("AJIO India", "ajio.com"),
    ("App Store & iTunes India", "apple.com"),
    ("Bigbasket India", "bigbasket.com"),
    ("Blink it India", "blinkit.com"),
    ("BlueStone Gold Jewellery India", "bluestone.com"),
    ("BookMyShow India", "bookmyshow.com"),
    ("Cleartrip India", "cleartrip.com"),
    ("Dominos India", "dominos.co.in"),
    ("Ease My Trip India", "easemytrip.com"),
    ("Flipkart India", "flipkart.com"),
    ("Google Play India", "play.google.com"),
    ("Hindustan Petroleum India", "hindustanpetroleum.com"),
    ("MakeMyTrip India", "makemytrip.com"),
    ("Phonepe India", "phonepe.com"),
    ("PlayStation Store India", "playstation.com"),
    ("Reliance JioMart India", "jiomart.com"),
    ("Shoppers Stop India", "shoppersstop.com"),
    ("Steam India", "store.steampowered.com"),
    ("Swiggy Money India", "swiggy.com"),
    ("Tanishq Gold Coin India", "tanishq.co.in"),
    ("Tanishq Gold Jewellery India", "tanishq.co.in"),
    ("Uber Vouchers India", "uber.com"),
    ("UniPin Voucher India", "unipin.com"),
    ("Valorant India", "playvalorant.com"),
    ("Zomato India", "zomato.com"),
)

_EXACT: dict[str, str] = dict(BRAND_DOMAINS)


def logo_url(domain: str) -> str:
    """Build the fixed-size logo service URL for *domain*."""
    return Settings.LOGO_SERVICE_URL.format(
        domain=domain, size=Settings.LOGO_SIZE
    )


def resolve_domain(name: str) -> str:
    """Return the brand domain for *name*, or ``""`` if unknown."""
    exact = _EXACT.get(name)
    if exact:
        return exact

    lowered = name.lower()
    for key, domain in BRAND_DOMAINS:
        if key.lower() in lowered:
            logger.debug("Fuzzy logo match '%s' -> '%s'", name, key)
            return domain
    return ""


def get_high_res_logo(name: str) -> str:
    """Return a logo URL for *name*, or ``""`` when no brand matches.

    Callers fall back to the feed's own preview image on ``""``.
    """
    domain = resolve_domain(name)
    return logo_url(domain) if domain else ""
