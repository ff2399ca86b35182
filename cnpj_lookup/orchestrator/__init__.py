"""State ownership and background lookups for the CNPJ lookup front ends."""

from .service import LookupClientProtocol, LookupOrchestrator

__all__ = ["LookupClientProtocol", "LookupOrchestrator"]
