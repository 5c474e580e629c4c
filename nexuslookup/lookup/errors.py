"""Error taxonomy for the lookup engine."""


class InternetLookupError(Exception):
    """Base class for errors raised by the lookup engine."""


class InternetDisabledError(InternetLookupError):
    """Raised when internet access is switched off in settings."""

    def __init__(self, message: str = "Internet access is disabled"):
        super().__init__(message)


class DomainRejectedError(InternetLookupError):
    """Raised when a URL fails the domain policy."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Access to this domain is not allowed: {url}")


class SourceError(InternetLookupError):
    """Raised by a source adapter when its payload cannot be used."""


class LookupCancelledError(InternetLookupError):
    """Raised when the caller cancels a lookup in flight."""

    def __init__(self, capability: str, tier: str | None = None):
        self.capability = capability
        self.tier = tier
        where = f" during {tier}" if tier else ""
        super().__init__(f"{capability} cancelled{where}")
