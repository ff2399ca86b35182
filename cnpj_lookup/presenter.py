"""Map company records and feedback state to labelled display rows."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .cnpj import format_cnpj
from .feedback import CopyFeedback
from .models import CompanyRecord

NOT_AVAILABLE = "N/A"
COPIED = "Copiado"

SECTION_FIELDS: Tuple[Tuple[str, Tuple[Tuple[str, str], ...]], ...] = (
    (
        "Informações Básicas",
        (
            ("nome", "Nome"),
            ("fantasia", "Nome Fantasia"),
            ("situacao", "Situação"),
            ("tipo", "Tipo"),
            ("abertura", "Data de Abertura"),
            ("capital_social", "Capital Social"),
        ),
    ),
    (
        "Endereço",
        (
            ("logradouro", "Logradouro"),
            ("numero", "Número"),
            ("municipio", "Cidade"),
            ("uf", "Estado"),
            ("cep", "CEP"),
        ),
    ),
    (
        "Contato",
        (
            ("telefone", "Telefone"),
            ("email", "Email"),
        ),
    ),
)

PARTNERS_TITLE = "Sócios"


@dataclass(frozen=True)
class Row:
    field_id: str
    label: str
    value: Optional[str]
    text: str


@dataclass(frozen=True)
class Section:
    title: str
    rows: List[Row] = field(default_factory=list)


def _row(field_id: str, label: str, value: Optional[str], feedback: Optional[CopyFeedback]) -> Row:
    if feedback is not None and feedback.is_acknowledged(field_id):
        text = COPIED
    else:
        text = value if value is not None else NOT_AVAILABLE
    return Row(field_id=field_id, label=label, value=value, text=text)


def build_sections(record: CompanyRecord, feedback: Optional[CopyFeedback] = None) -> List[Section]:
    """Return the display sections for ``record``.

    Missing values render as ``N/A``; a field copied within the feedback
    window renders as ``Copiado``. The partners section is present whenever
    the payload carried a ``qsa`` array, with no rows when it is empty.
    """

    sections = [
        Section(title, [_row(key, label, record.get(key), feedback) for key, label in rows])
        for title, rows in SECTION_FIELDS
    ]
    if record.qsa is not None:
        partner_rows: List[Row] = []
        for index, partner in enumerate(record.qsa):
            partner_rows.append(_row(f"qsa.{index}.nome", "Nome", partner.nome, feedback))
            partner_rows.append(_row(f"qsa.{index}.qual", "Cargo", partner.qual, feedback))
        sections.append(Section(PARTNERS_TITLE, partner_rows))
    return sections


@dataclass(frozen=True)
class DisplayState:
    """Everything the renderer needs for one frame."""

    input_text: str
    error_message: Optional[str]
    sections: List[Section]
    pending: bool = False

    @classmethod
    def from_orchestrator(cls, orchestrator) -> "DisplayState":
        # An error hides any previously fetched record.
        sections: List[Section] = []
        if orchestrator.error_message is None and orchestrator.record is not None:
            sections = build_sections(orchestrator.record, orchestrator.feedback)
        return cls(
            input_text=orchestrator.input_text,
            error_message=orchestrator.error_message,
            sections=sections,
            pending=orchestrator.pending,
        )


def render_text(record: CompanyRecord, number: Optional[str] = None) -> str:
    """Format a record as plain text for terminal output."""

    lines: List[str] = []
    if number:
        lines.append(f"CNPJ {format_cnpj(number)}")
    for section in build_sections(record):
        lines.append(f"[{section.title}]")
        width = max((len(row.label) for row in section.rows), default=0)
        for row in section.rows:
            lines.append(f"  {row.label.ljust(width)}: {row.text}")
    return "\n".join(lines)


__all__ = [
    "COPIED",
    "NOT_AVAILABLE",
    "DisplayState",
    "Row",
    "Section",
    "build_sections",
    "render_text",
]
