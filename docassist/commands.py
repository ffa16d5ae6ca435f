"""Menu and command layer.

Each text command is one read-transform-write sequence: read the selection,
build a prompt, ask the completion endpoint, insert the reply (or the inline
error) into the document.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Protocol, Union

from docassist.docs import Document, InsertPosition, NoSelectionError, insert_text, read_selection
from docassist.llm import CompletionClient, enhance_prompt, fix_grammar_prompt, label_summary, summarize_prompt
from docassist.llm.client import render_inline
from docassist.settings import Settings, SettingsStore, SettingsValidationError

logger = logging.getLogger(__name__)

MENU_TITLE = "GPT Assistant"
SIDEBAR_TITLE = "GPT Assistant"
SIDEBAR_WIDTH = 300
SETTINGS_TITLE = "Settings"
SETTINGS_WIDTH = 400
SETTINGS_HEIGHT = 450


class Ui(Protocol):
    def alert(self, message: str) -> None: ...

    def show_sidebar(self, title: str, width: int, body: str) -> None: ...

    def show_modal_dialog(self, title: str, width: int, height: int, body: str) -> None: ...


class ConsoleUi:
    """Ui that renders to the terminal."""

    def __init__(self, write: Callable[[str], None] = print) -> None:
        self._write = write

    def alert(self, message: str) -> None:
        self._write(f"! {message}")

    def _panel(self, title: str, width: int, body: str) -> None:
        # terminal columns, roughly width/8 px
        cols = max(len(title) + 4, width // 8)
        self._write("+" + "-" * (cols - 2) + "+")
        self._write(f"| {title}")
        self._write("+" + "-" * (cols - 2) + "+")
        for line in body.splitlines():
            self._write(f"| {line}")
        self._write("+" + "-" * (cols - 2) + "+")

    def show_sidebar(self, title: str, width: int, body: str) -> None:
        self._panel(title, width, body)

    def show_modal_dialog(self, title: str, width: int, height: int, body: str) -> None:
        self._panel(title, width, body)


@dataclass
class MenuItem:
    label: str
    command: str


@dataclass
class Menu:
    title: str
    items: List[Union[MenuItem, "Menu", None]] = field(default_factory=list)

    def add_item(self, label: str, command: str) -> "Menu":
        self.items.append(MenuItem(label, command))
        return self

    def add_separator(self) -> "Menu":
        self.items.append(None)
        return self

    def add_sub_menu(self, menu: "Menu") -> "Menu":
        self.items.append(menu)
        return self

    def iter_items(self) -> List[MenuItem]:
        out: List[MenuItem] = []
        for item in self.items:
            if isinstance(item, Menu):
                out.extend(item.iter_items())
            elif item is not None:
                out.append(item)
        return out


def build_menu() -> Menu:
    return (
        Menu(MENU_TITLE)
        .add_item("Show assistant panel", "show_sidebar")
        .add_separator()
        .add_sub_menu(
            Menu("Text operations")
            .add_item("Enhance text", "enhance")
            .add_item("Summarize text", "summarize")
            .add_item("Fix grammar", "fix_grammar")
        )
        .add_separator()
        .add_item("Settings", "show_settings")
    )


def describe_settings(settings: Settings) -> str:
    return "\n".join([
        f"API URL:     {settings.base_url}",
        f"Model:       {settings.model}",
        f"Temperature: {settings.temperature}",
        f"Max tokens:  {settings.max_tokens}",
    ])


class Assistant:
    def __init__(
        self,
        document: Document,
        ui: Ui,
        settings_store: SettingsStore,
        client: CompletionClient,
    ) -> None:
        self.document = document
        self.ui = ui
        self.settings_store = settings_store
        self.client = client
        self.menu = build_menu()

    def commands(self) -> Dict[str, Callable[[], object]]:
        return {
            "show_sidebar": self.show_sidebar,
            "enhance": self.enhance_selected_text,
            "summarize": self.summarize_selected_text,
            "fix_grammar": self.fix_grammar,
            "show_settings": self.show_settings,
        }

    def run(self, command: str):
        try:
            handler = self.commands()[command]
        except KeyError:
            raise ValueError(f"Unknown command: {command}") from None
        logger.info("Running command %s", command)
        return handler()

    def _selected_text(self) -> str:
        try:
            return read_selection(self.document)
        except NoSelectionError as exc:
            self.ui.alert(str(exc))
            return ""

    def _transform(self, build_prompt: Callable[[str], str], label: Optional[Callable[[str], str]] = None) -> Optional[InsertPosition]:
        selected = self._selected_text()
        if not selected:
            return None
        text = render_inline(self.client.request(build_prompt(selected)))
        if label is not None:
            text = label(text)
        return insert_text(self.document, text)

    def enhance_selected_text(self) -> Optional[InsertPosition]:
        return self._transform(enhance_prompt)

    def summarize_selected_text(self) -> Optional[InsertPosition]:
        return self._transform(summarize_prompt, label=label_summary)

    def fix_grammar(self) -> Optional[InsertPosition]:
        return self._transform(fix_grammar_prompt)

    def show_sidebar(self) -> None:
        lines = [item.label for item in self.menu.iter_items()]
        body = "Commands:\n" + "\n".join(f"  - {label}" for label in lines)
        body += "\n\n" + describe_settings(self.settings_store.load())
        self.ui.show_sidebar(SIDEBAR_TITLE, SIDEBAR_WIDTH, body)

    def show_settings(self) -> None:
        self.ui.show_modal_dialog(SETTINGS_TITLE, SETTINGS_WIDTH, SETTINGS_HEIGHT, describe_settings(self.settings_store.load()))

    def save_settings(self, settings: Settings) -> bool:
        """Persist settings from the dialog; on a validation error show it and keep the old ones."""
        try:
            self.settings_store.save(settings)
        except SettingsValidationError as exc:
            self.ui.alert(str(exc))
            return False
        return True
