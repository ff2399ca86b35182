"""Factory helpers for constructing lookup clients from configuration."""
from __future__ import annotations

from typing import Any, Dict, Optional, Union

import requests

from .client import DEFAULT_TIMEOUT_SECONDS, DEFAULT_URL_TEMPLATE, RegistryClient
from .config import ConfigurationError, api_options
from .rate_limit import RateLimitedClient, RateLimiter


def build_client(
    config: Dict[str, Any],
    *,
    session: Optional[requests.Session] = None,
) -> Union[RegistryClient, RateLimitedClient]:
    """Instantiate the registry client described by the configuration."""

    options = api_options(config)
    url_template = options.get("url_template") or DEFAULT_URL_TEMPLATE
    if "{cnpj}" not in url_template:
        raise ConfigurationError(f"URL template '{url_template}' must contain a '{{cnpj}}' placeholder")

    timeout = options.get("timeout_seconds")
    try:
        timeout = float(timeout) if timeout is not None else DEFAULT_TIMEOUT_SECONDS
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid timeout_seconds value {timeout!r}") from exc

    client = RegistryClient(url_template=url_template, timeout=timeout, session=session)

    calls_per_minute = config.get("rate_limit_per_minute")
    if not calls_per_minute:
        return client
    return RateLimitedClient(client, rate_limiter=RateLimiter(float(calls_per_minute)))
