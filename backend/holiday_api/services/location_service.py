"""Address validation against the Google Geocoding API."""
import logging
from typing import Optional

import httpx

from holiday_api.config import settings
from holiday_api.errors import LocationValidationError
from holiday_api.models.location import Location

logger = logging.getLogger(__name__)


class AddressValidator:
    """Checks that an address resolves to at least one geocoding result."""

    def __init__(
        self,
        api_key: str,
        url: str = settings.GEOCODING_URL,
        timeout: float = settings.GEOCODING_TIMEOUT,
        client: Optional[httpx.Client] = None,
    ):
        self.api_key = api_key
        self.url = url
        self.timeout = timeout
        self._client = client

    def is_address_valid(self, address: str) -> bool:
        params = {"address": address, "key": self.api_key}
        try:
            if self._client is not None:
                resp = self._client.get(self.url, params=params)
            else:
                with httpx.Client(timeout=self.timeout) as client:
                    resp = client.get(self.url, params=params)
            if resp.status_code >= 400:
                logger.warning("Geocoding error %s: %s", resp.status_code, resp.text[:200])
                return False
            payload = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise LocationValidationError("An unexpected error occurred while validating the address.") from exc

        if not isinstance(payload, dict):
            raise LocationValidationError("Unexpected response from the geocoding service.")
        return payload.get("status") == "OK" and bool(payload.get("results"))


def ensure_address_valid(validator: Optional[AddressValidator], location: Optional[Location]) -> None:
    """Raise LocationValidationError unless the validator accepts the location."""
    if validator is None or location is None:
        return
    address = location.formatted_address()
    if not validator.is_address_valid(address):
        logger.warning("Rejected address '%s'", address)
        raise LocationValidationError("The provided address is not valid.")


def get_address_validator() -> Optional[AddressValidator]:
    """FastAPI dependency; None when validation is switched off."""
    if not settings.ADDRESS_VALIDATION_ENABLED:
        return None
    return AddressValidator(api_key=settings.GOOGLE_MAPS_API_KEY)
