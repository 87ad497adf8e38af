from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional, Protocol

from ..core.exceptions import ValidationError
from .model import GeoPoint, parse_location

logger = logging.getLogger(__name__)


class LocationProvider(Protocol):
    def get_current_location(self) -> Optional[GeoPoint]:
        """Current device position, or None when it cannot be obtained."""

        raise NotImplementedError


@dataclass(frozen=True)
class ClientReportedLocation:
    """Location sent by the browser along with the check-in/out request."""

    raw: Optional[str]

    def get_current_location(self) -> Optional[GeoPoint]:
        return parse_location(self.raw)


def resolve_location(provider: LocationProvider, *, timeout: float) -> Optional[GeoPoint]:
    """Ask the provider for a position, waiting at most ``timeout`` seconds.

    Timeouts and provider failures are reported the same way as a refused or
    unsupported lookup: None. Malformed client input (ValidationError) is
    raised to the caller. Each lookup runs on its own daemon thread, so a
    provider that never returns only holds that thread.
    """

    outcome: dict = {}

    def lookup() -> None:
        try:
            outcome["point"] = provider.get_current_location()
        except Exception as e:
            outcome["error"] = e

    worker = threading.Thread(target=lookup, name="location-lookup", daemon=True)
    worker.start()
    worker.join(timeout)

    if worker.is_alive():
        logger.warning("location lookup timed out after %ss", timeout)
        return None

    error = outcome.get("error")
    if isinstance(error, ValidationError):
        raise error
    if error is not None:
        logger.warning("location lookup failed", exc_info=error)
        return None
    return outcome.get("point")
