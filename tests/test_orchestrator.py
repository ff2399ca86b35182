"""Tests for :class:`cnpj_lookup.orchestrator.LookupOrchestrator`."""
from __future__ import annotations

import threading
from typing import Dict, List, Optional

import pytest

from cnpj_lookup.client import EmptyResponseError, NetworkError
from cnpj_lookup.feedback import CopyFeedback
from cnpj_lookup.models import CompanyRecord
from cnpj_lookup.orchestrator import LookupOrchestrator
from cnpj_lookup.presenter import DisplayState

ACME = CompanyRecord.from_payload({"nome": "ACME LTDA", "situacao": "ATIVA"})
OTHER = CompanyRecord.from_payload({"nome": "OUTRA SA"})


class ScriptedClient:
    """Client returning canned results, optionally blocking until released."""

    def __init__(self, results: Dict[str, object]) -> None:
        self.results = results
        self.gates: Dict[str, threading.Event] = {}
        self.calls: List[str] = []

    def lookup(self, number: str) -> CompanyRecord:
        self.calls.append(number)
        gate = self.gates.get(number)
        if gate is not None:
            assert gate.wait(timeout=5)
        result = self.results[number]
        if isinstance(result, Exception):
            raise result
        return result  # type: ignore[return-value]


@pytest.fixture
def clipboard() -> List[str]:
    return []


def _orchestrator(client: ScriptedClient, clipboard: Optional[List[str]] = None, **kwargs) -> LookupOrchestrator:
    return LookupOrchestrator(
        client,
        clipboard=clipboard.append if clipboard is not None else None,
        max_workers=2,
        **kwargs,
    )


def _run(orchestrator: LookupOrchestrator) -> None:
    future = orchestrator.submit()
    assert future is not None
    future.result(timeout=5)
    orchestrator.process_events()


def test_formatted_input_is_looked_up_and_displayed() -> None:
    client = ScriptedClient({"11222333000181": ACME})
    orchestrator = _orchestrator(client)

    assert orchestrator.set_input("11.222.333/0001-81") == "11222333000181"
    _run(orchestrator)

    assert client.calls == ["11222333000181"]
    assert orchestrator.record == ACME
    assert orchestrator.error_message is None
    assert not orchestrator.pending

    rows = {row.label: row.text for row in DisplayState.from_orchestrator(orchestrator).sections[0].rows}
    assert rows["Nome"] == "ACME LTDA"
    assert rows["Situação"] == "ATIVA"
    assert rows["Nome Fantasia"] == "N/A"
    orchestrator.shutdown()


def test_short_number_sets_error_and_keeps_record() -> None:
    client = ScriptedClient({"11222333000181": ACME})
    orchestrator = _orchestrator(client)
    orchestrator.set_input("11222333000181")
    _run(orchestrator)

    orchestrator.set_input("123")
    assert orchestrator.submit() is None

    assert orchestrator.error_message == "Por favor, insira um CNPJ válido com 14 dígitos."
    assert orchestrator.record == ACME
    assert client.calls == ["11222333000181"]
    assert DisplayState.from_orchestrator(orchestrator).sections == []
    orchestrator.shutdown()


def test_empty_response_sets_error_and_keeps_record() -> None:
    client = ScriptedClient({"11222333000181": ACME, "99888777000166": EmptyResponseError()})
    orchestrator = _orchestrator(client)
    orchestrator.set_input("11222333000181")
    _run(orchestrator)

    orchestrator.set_input("99888777000166")
    _run(orchestrator)

    assert orchestrator.error_message == "Nenhum dado recebido."
    assert orchestrator.record == ACME
    orchestrator.shutdown()


def test_submit_clears_previous_error_eagerly() -> None:
    gate = threading.Event()
    client = ScriptedClient({"11222333000181": ACME})
    client.gates["11222333000181"] = gate
    orchestrator = _orchestrator(client)

    orchestrator.set_input("1")
    orchestrator.submit()
    assert orchestrator.error_message is not None

    orchestrator.set_input("11222333000181")
    future = orchestrator.submit()
    assert orchestrator.error_message is None
    assert orchestrator.pending

    gate.set()
    future.result(timeout=5)
    assert orchestrator.process_events()
    assert orchestrator.record == ACME
    orchestrator.shutdown()


def test_network_error_message_is_surfaced() -> None:
    client = ScriptedClient({"11222333000181": NetworkError("timed out")})
    orchestrator = _orchestrator(client)
    orchestrator.set_input("11222333000181")

    _run(orchestrator)

    assert orchestrator.error_message == "timed out"
    assert orchestrator.record is None
    orchestrator.shutdown()


def test_stale_response_does_not_overwrite_newer_one() -> None:
    slow_gate = threading.Event()
    client = ScriptedClient({"11222333000181": ACME, "99888777000166": OTHER})
    client.gates["11222333000181"] = slow_gate
    orchestrator = _orchestrator(client)

    orchestrator.set_input("11222333000181")
    slow = orchestrator.submit()
    orchestrator.set_input("99888777000166")
    fast = orchestrator.submit()

    fast.result(timeout=5)
    assert orchestrator.process_events()
    assert orchestrator.record == OTHER

    slow_gate.set()
    slow.result(timeout=5)
    assert not orchestrator.process_events()
    assert orchestrator.record == OTHER
    assert not orchestrator.pending
    orchestrator.shutdown()


def test_results_are_only_applied_by_process_events() -> None:
    client = ScriptedClient({"11222333000181": ACME})
    orchestrator = _orchestrator(client)
    orchestrator.set_input("11222333000181")

    orchestrator.submit().result(timeout=5)

    assert orchestrator.record is None
    assert orchestrator.process_events()
    assert orchestrator.record == ACME
    orchestrator.shutdown()


def test_reset_clears_state_and_drops_in_flight_results() -> None:
    gate = threading.Event()
    client = ScriptedClient({"11222333000181": ACME})
    client.gates["11222333000181"] = gate
    orchestrator = _orchestrator(client)
    orchestrator.set_input("11222333000181")
    future = orchestrator.submit()

    orchestrator.reset()
    gate.set()
    future.result(timeout=5)
    orchestrator.process_events()

    assert orchestrator.input_text == ""
    assert orchestrator.number == ""
    assert orchestrator.record is None
    assert orchestrator.error_message is None
    assert not orchestrator.pending
    orchestrator.shutdown()


def test_copy_none_is_a_no_op(clipboard: List[str]) -> None:
    orchestrator = _orchestrator(ScriptedClient({}), clipboard)

    orchestrator.copy("nome", None)

    assert clipboard == []
    assert orchestrator.feedback.active == []
    orchestrator.shutdown()


def test_copy_writes_clipboard_and_acknowledges_field(clipboard: List[str]) -> None:
    now = [0.0]
    feedback = CopyFeedback(clock=lambda: now[0])
    orchestrator = _orchestrator(ScriptedClient({}), clipboard, feedback=feedback)

    orchestrator.copy("nome", "ACME LTDA")

    assert clipboard == ["ACME LTDA"]
    assert feedback.is_acknowledged("nome")
    assert not feedback.is_acknowledged("email")
    now[0] = 1.0
    assert not feedback.is_acknowledged("nome")
    orchestrator.shutdown()


def test_invalid_submit_discards_earlier_in_flight_lookup() -> None:
    gate = threading.Event()
    client = ScriptedClient({"11222333000181": OTHER})
    client.gates["11222333000181"] = gate
    orchestrator = _orchestrator(client)
    orchestrator.set_input("11222333000181")
    future = orchestrator.submit()

    orchestrator.set_input("123")
    assert orchestrator.submit() is None
    gate.set()
    future.result(timeout=5)

    assert not orchestrator.process_events()
    assert orchestrator.error_message == "Por favor, insira um CNPJ válido com 14 dígitos."
    assert orchestrator.record is None
    assert orchestrator.input_text == "123"
    assert not orchestrator.pending
    orchestrator.shutdown()


def test_shutdown_closes_the_client() -> None:
    class ClosingClient(ScriptedClient):
        closed = False

        def close(self) -> None:
            self.closed = True

    client = ClosingClient({})
    orchestrator = _orchestrator(client)

    orchestrator.shutdown()

    assert client.closed
