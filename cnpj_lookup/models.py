"""Typed records decoded from registry API payloads."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Mapping, Optional, Tuple


def _clean_value(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip()
        return text or None
    if isinstance(value, (dict, list)):
        return None
    text = str(value).strip()
    return text or None


# --- Partners ---

@dataclass(frozen=True, slots=True)
class PartnerEntry:
    """A partner or shareholder listed under the company's ``qsa`` key."""

    nome: Optional[str] = None
    qual: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "PartnerEntry":
        return cls(nome=_clean_value(payload.get("nome")), qual=_clean_value(payload.get("qual")))


# --- Company ---

@dataclass(frozen=True)
class CompanyRecord:
    """Company data returned for one lookup.

    Every field is optional. Keys missing from the payload, or holding empty
    values, decode to ``None``; unknown keys are ignored but kept in
    :attr:`raw`. ``qsa`` is ``None`` unless the payload lists partners
    as an array, which may be empty.
    """

    cnpj: Optional[str] = None
    nome: Optional[str] = None
    fantasia: Optional[str] = None
    situacao: Optional[str] = None
    data_situacao: Optional[str] = None
    tipo: Optional[str] = None
    porte: Optional[str] = None
    natureza_juridica: Optional[str] = None
    abertura: Optional[str] = None
    capital_social: Optional[str] = None
    logradouro: Optional[str] = None
    numero: Optional[str] = None
    complemento: Optional[str] = None
    bairro: Optional[str] = None
    municipio: Optional[str] = None
    uf: Optional[str] = None
    cep: Optional[str] = None
    telefone: Optional[str] = None
    email: Optional[str] = None
    ultima_atualizacao: Optional[str] = None
    qsa: Optional[Tuple[PartnerEntry, ...]] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "CompanyRecord":
        values: Dict[str, Any] = {
            name: _clean_value(payload.get(name)) for name in SCALAR_FIELDS
        }
        partners = payload.get("qsa")
        if isinstance(partners, list):
            values["qsa"] = tuple(
                PartnerEntry.from_payload(entry) for entry in partners if isinstance(entry, dict)
            )
        return cls(raw=dict(payload), **values)

    def get(self, name: str) -> Optional[str]:
        """Return a scalar field by its payload key."""

        if name not in SCALAR_FIELDS:
            raise KeyError(name)
        return getattr(self, name)

    def as_row(self) -> Dict[str, str]:
        """Return a flat, serialisable representation of the record."""

        row = {name: getattr(self, name) or "" for name in SCALAR_FIELDS}
        row["socios"] = "; ".join(
            f"{partner.nome or ''} ({partner.qual or ''})" for partner in self.qsa or ()
        )
        return row


SCALAR_FIELDS: Tuple[str, ...] = tuple(
    item.name for item in fields(CompanyRecord) if item.name not in {"qsa", "raw"}
)

__all__ = ["CompanyRecord", "PartnerEntry", "SCALAR_FIELDS"]
