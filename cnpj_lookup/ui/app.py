"""Tkinter based desktop window for CNPJ lookups."""
from __future__ import annotations

import logging
import tkinter as tk
from tkinter import messagebox, ttk
from typing import Any, Callable, Dict, Optional

import requests

from ..config import ConfigurationError, copy_feedback_seconds, load_configuration_from_env
from ..feedback import CopyFeedback
from ..factory import build_client
from ..orchestrator import LookupOrchestrator
from ..presenter import DisplayState, Row, Section


LOGGER = logging.getLogger(__name__)

POLL_INTERVAL_MS = 100


def build_orchestrator(
    config: Dict[str, Any],
    *,
    clipboard: Optional[Callable[[str], None]] = None,
    session: Optional[requests.Session] = None,
) -> LookupOrchestrator:
    client = build_client(config, session=session)
    feedback = CopyFeedback(copy_feedback_seconds(config))
    # One worker keeps requests to the public API serialised.
    return LookupOrchestrator(client, clipboard=clipboard, feedback=feedback, max_workers=1)


def poll_once(orchestrator: LookupOrchestrator) -> bool:
    """Apply finished lookups and expired copy flags; True if a redraw is due."""

    changed = orchestrator.process_events()
    expired = orchestrator.feedback.expire()
    return changed or bool(expired)


class LookupApp:
    """Main application window."""

    def __init__(self, root: tk.Tk, orchestrator: Optional[LookupOrchestrator] = None) -> None:
        self.root = root
        self.root.title("Consulta CNPJ")
        self.root.geometry("360x520")
        self.root.minsize(300, 450)

        self.orchestrator = orchestrator or self._build_orchestrator()
        self._was_pending = False

        self.input_var = tk.StringVar()
        self.error_var = tk.StringVar()
        self.status_var = tk.StringVar()
        self.input_var.trace_add("write", lambda *_: self.on_input_changed())

        self._build_layout()
        self.root.protocol("WM_DELETE_WINDOW", self.on_close)
        self.root.after(POLL_INTERVAL_MS, self._poll_queue)

    # ------------------------------------------------------------------
    def _build_layout(self) -> None:
        container = ttk.Frame(self.root, padding=12)
        container.pack(fill="both", expand=True)
        container.columnconfigure(0, weight=1)
        container.rowconfigure(5, weight=1)

        ttk.Label(container, text="Consulta CNPJ", font=("TkDefaultFont", 16, "bold")).grid(row=0, column=0, pady=(0, 8))

        entry = ttk.Entry(container, textvariable=self.input_var)
        entry.grid(row=1, column=0, sticky="ew")
        entry.bind("<Return>", lambda _event: self.search())
        entry.focus_set()

        buttons = ttk.Frame(container)
        buttons.grid(row=2, column=0, sticky="ew", pady=8)
        buttons.columnconfigure(0, weight=1)
        ttk.Button(buttons, text="Buscar empresa", command=self.search).grid(row=0, column=0, sticky="ew")
        ttk.Button(buttons, text="Limpar", command=self.reset).grid(row=0, column=1, padx=(8, 0))

        ttk.Label(container, textvariable=self.error_var, foreground="red", wraplength=320).grid(row=3, column=0, sticky="w")
        ttk.Label(container, textvariable=self.status_var).grid(row=4, column=0, sticky="w")

        frame = ttk.Frame(container)
        frame.grid(row=5, column=0, sticky="nsew", pady=(8, 0))
        frame.columnconfigure(0, weight=1)
        frame.rowconfigure(0, weight=1)

        self.canvas = tk.Canvas(frame, highlightthickness=0)
        self.canvas.grid(row=0, column=0, sticky="nsew")
        scroll = ttk.Scrollbar(frame, orient="vertical", command=self.canvas.yview)
        scroll.grid(row=0, column=1, sticky="ns")
        self.canvas.configure(yscrollcommand=scroll.set)

        self.results_frame = ttk.Frame(self.canvas)
        self.results_frame.columnconfigure(1, weight=1)
        self.results_frame.bind(
            "<Configure>", lambda _event: self.canvas.configure(scrollregion=self.canvas.bbox("all"))
        )
        self.canvas.create_window((0, 0), window=self.results_frame, anchor="nw")

    # ------------------------------------------------------------------
    def on_input_changed(self) -> None:
        raw = self.input_var.get()
        normalized = self.orchestrator.set_input(raw)
        if normalized != raw:
            self.input_var.set(normalized)

    # ------------------------------------------------------------------
    def search(self) -> None:
        self.orchestrator.submit()
        self.refresh()

    # ------------------------------------------------------------------
    def reset(self) -> None:
        self.orchestrator.reset()
        self.orchestrator.feedback.clear()
        self.input_var.set("")
        self.refresh()

    # ------------------------------------------------------------------
    def copy_row(self, row: Row) -> None:
        self.orchestrator.copy(row.field_id, row.value)
        self.refresh()

    def _write_clipboard(self, value: str) -> None:
        self.root.clipboard_clear()
        self.root.clipboard_append(value)

    # ------------------------------------------------------------------
    def _poll_queue(self) -> None:
        try:
            pending = self.orchestrator.pending
            if poll_once(self.orchestrator) or pending != self._was_pending:
                self.refresh()
            self._was_pending = pending
        finally:
            self.root.after(POLL_INTERVAL_MS, self._poll_queue)

    # ------------------------------------------------------------------
    def refresh(self) -> None:
        state = DisplayState.from_orchestrator(self.orchestrator)
        self.error_var.set(state.error_message or "")
        self.status_var.set("Buscando..." if state.pending else "")

        for child in self.results_frame.winfo_children():
            child.destroy()

        grid_row = 0
        for section in state.sections:
            grid_row = self._render_section(section, grid_row)

    def _render_section(self, section: Section, grid_row: int) -> int:
        ttk.Label(self.results_frame, text=section.title, font=("TkDefaultFont", 11, "bold")).grid(
            row=grid_row, column=0, columnspan=2, sticky="w", pady=(8, 2)
        )
        grid_row += 1
        for row in section.rows:
            ttk.Label(self.results_frame, text=f"{row.label}:", font=("TkDefaultFont", 9, "bold")).grid(
                row=grid_row, column=0, sticky="w", padx=(0, 8)
            )
            value_label = ttk.Label(self.results_frame, text=row.text, anchor="e", cursor="hand2")
            value_label.grid(row=grid_row, column=1, sticky="e")
            value_label.bind("<Button-1>", lambda _event, row=row: self.copy_row(row))
            grid_row += 1
        return grid_row

    # ------------------------------------------------------------------
    def on_close(self) -> None:
        self.orchestrator.shutdown()
        self.root.destroy()

    # ------------------------------------------------------------------
    def _build_orchestrator(self) -> LookupOrchestrator:
        try:
            config = load_configuration_from_env()
            return build_orchestrator(config, clipboard=self._write_clipboard)
        except ConfigurationError as exc:
            messagebox.showwarning("Configuration error", f"Failed to load configuration: {exc}")
            LOGGER.warning("Falling back to the default configuration: %s", exc)
        return build_orchestrator({}, clipboard=self._write_clipboard)


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    root = tk.Tk()
    LookupApp(root)
    root.mainloop()


if __name__ == "__main__":  # pragma: no cover - manual launch
    main()
