"""Look up Brazilian company registry numbers (CNPJ) against a public API."""

from .client import (
    EmptyResponseError,
    MalformedResponseError,
    NetworkError,
    RegistryClient,
    RegistryLookupError,
)
from .cnpj import ValidationError, WrongLengthError, format_cnpj, normalize, validate
from .models import CompanyRecord, PartnerEntry

__all__ = [
    "CompanyRecord",
    "PartnerEntry",
    "RegistryClient",
    "RegistryLookupError",
    "NetworkError",
    "EmptyResponseError",
    "MalformedResponseError",
    "ValidationError",
    "WrongLengthError",
    "format_cnpj",
    "normalize",
    "validate",
    "orchestrator",
    "ui",
]
