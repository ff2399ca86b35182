"""HTTP client for the public CNPJ registry API."""
from __future__ import annotations

import json
import logging
from typing import Optional

import requests

from .models import CompanyRecord

LOGGER = logging.getLogger(__name__)

DEFAULT_URL_TEMPLATE = "https://www.receitaws.com.br/v1/cnpj/{cnpj}"
DEFAULT_TIMEOUT_SECONDS = 60.0


class RegistryLookupError(RuntimeError):
    """Base class for failures while fetching a company record."""


class NetworkError(RegistryLookupError):
    """Raised when the request could not be completed."""


class EmptyResponseError(RegistryLookupError):
    """Raised when the registry answered without a body."""

    def __init__(self) -> None:
        super().__init__("Nenhum dado recebido.")


class MalformedResponseError(RegistryLookupError):
    """Raised when the body is not a JSON object."""

    def __init__(self) -> None:
        super().__init__("Falha ao analisar os dados.")


class RegistryClient:
    """Fetch company records, one GET per lookup and no retries."""

    name = "receitaws"

    def __init__(
        self,
        *,
        url_template: str = DEFAULT_URL_TEMPLATE,
        timeout: Optional[float] = DEFAULT_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.url_template = url_template
        self.timeout = timeout
        self._session = session or requests.Session()

    def build_url(self, number: str) -> str:
        return self.url_template.format(cnpj=number)

    def lookup(self, number: str) -> CompanyRecord:
        """Return the record for a validated 14-digit number.

        Blocks until the round-trip completes; callers run it off the UI thread.
        """

        url = self.build_url(number)
        LOGGER.info("Requesting %s", url)
        try:
            response = self._session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            LOGGER.warning("Request for %s failed: %s", number, exc)
            raise NetworkError(str(exc)) from exc

        LOGGER.debug("Registry answered %s for %s", response.status_code, number)
        return decode_payload(response.content)

    def close(self) -> None:
        self._session.close()


def decode_payload(body: Optional[bytes]) -> CompanyRecord:
    """Decode a response body into a :class:`CompanyRecord`."""

    if not body:
        raise EmptyResponseError()
    try:
        payload = json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as exc:
        raise MalformedResponseError() from exc
    if not isinstance(payload, dict):
        raise MalformedResponseError()
    return CompanyRecord.from_payload(payload)


__all__ = [
    "DEFAULT_URL_TEMPLATE",
    "DEFAULT_TIMEOUT_SECONDS",
    "RegistryClient",
    "RegistryLookupError",
    "NetworkError",
    "EmptyResponseError",
    "MalformedResponseError",
    "decode_payload",
]
