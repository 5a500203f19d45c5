# src/models/errors.py

"""Error taxonomy for the fetch and processing pipeline."""


class GiftCardMonitorError(Exception):
    """Base class for all pipeline errors."""


class FatalFetchError(GiftCardMonitorError):
    """Catalog or FX fetch exhausted every strategy; the cycle aborts."""


class PartialDetailError(GiftCardMonitorError):
    """A single product's detail fetch failed; the cycle continues."""

    def __init__(self, product_id: str, message: str) -> None:
        super().__init__(message)
        self.product_id = product_id


class MissingRateError(GiftCardMonitorError):
    """The FX table lacks a usable local-currency to USD rate."""


class UnwrapError(GiftCardMonitorError):
    """A fetch strategy's response did not have the expected shape."""


class AllStrategiesFailedError(GiftCardMonitorError):
    """Raised when no strategy ran or none recorded an error."""


class UpstreamHTTPError(GiftCardMonitorError):
    """A strategy received a non-2xx response."""

    def __init__(self, status_code: int, url: str) -> None:
        super().__init__(f"HTTP {status_code} from {url}")
        self.status_code = status_code
        self.url = url
