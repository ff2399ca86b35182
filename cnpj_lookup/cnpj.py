"""Normalisation and validation helpers for CNPJ registry numbers."""
from __future__ import annotations

CNPJ_LENGTH = 14

_DIGITS = frozenset("0123456789")


class ValidationError(ValueError):
    """Raised when a registry number cannot be submitted for lookup."""


class WrongLengthError(ValidationError):
    """Raised when the number does not have exactly 14 digits."""

    def __init__(self, number: str) -> None:
        super().__init__("Por favor, insira um CNPJ válido com 14 dígitos.")
        self.number = number


def normalize(raw: str) -> str:
    """Strip everything but ASCII digits and keep at most 14 of them."""

    return "".join(char for char in raw if char in _DIGITS)[:CNPJ_LENGTH]


def validate(number: str) -> str:
    """Return ``number`` if it is ready to be looked up.

    Only the digit count is checked; the check digits are not verified.
    """

    if len(number) != CNPJ_LENGTH or not all(char in _DIGITS for char in number):
        raise WrongLengthError(number)
    return number


def format_cnpj(number: str) -> str:
    """Apply the ``NN.NNN.NNN/NNNN-NN`` mask to a complete number."""

    if len(number) != CNPJ_LENGTH or not all(char in _DIGITS for char in number):
        return number
    return f"{number[:2]}.{number[2:5]}.{number[5:8]}/{number[8:12]}-{number[12:]}"


__all__ = [
    "CNPJ_LENGTH",
    "ValidationError",
    "WrongLengthError",
    "normalize",
    "validate",
    "format_cnpj",
]
