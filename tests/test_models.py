from __future__ import annotations

import pytest

from cnpj_lookup.models import CompanyRecord, PartnerEntry


def test_from_payload_keeps_known_fields_and_ignores_unknown() -> None:
    payload = {
        "nome": "ACME LTDA",
        "situacao": "ATIVA",
        "fantasia": "",
        "capital_social": 1000.5,
        "extra": {"nested": True},
        "qsa": [
            {"nome": "Fulano de Tal", "qual": "49-Sócio-Administrador"},
            "not a partner",
            {"nome": "Beltrano"},
        ],
    }

    record = CompanyRecord.from_payload(payload)

    assert record.nome == "ACME LTDA"
    assert record.situacao == "ATIVA"
    assert record.fantasia is None
    assert record.capital_social == "1000.5"
    assert record.email is None
    assert record.qsa == (
        PartnerEntry(nome="Fulano de Tal", qual="49-Sócio-Administrador"),
        PartnerEntry(nome="Beltrano", qual=None),
    )
    assert record.raw == payload


def test_qsa_that_is_not_a_list_is_ignored() -> None:
    record = CompanyRecord.from_payload({"qsa": "nope"})

    assert record.qsa is None
    assert record.as_row()["socios"] == ""


def test_empty_qsa_list_is_kept_distinct_from_missing() -> None:
    assert CompanyRecord.from_payload({"qsa": []}).qsa == ()
    assert CompanyRecord.from_payload({}).qsa is None


def test_get_rejects_unknown_fields() -> None:
    record = CompanyRecord(nome="ACME")

    assert record.get("nome") == "ACME"
    with pytest.raises(KeyError):
        record.get("qsa")


def test_as_row_flattens_partners() -> None:
    record = CompanyRecord(
        nome="ACME",
        qsa=(PartnerEntry(nome="Ana", qual="Sócia"), PartnerEntry(nome="Bruno")),
    )

    row = record.as_row()

    assert row["nome"] == "ACME"
    assert row["uf"] == ""
    assert row["socios"] == "Ana (Sócia); Bruno ()"
