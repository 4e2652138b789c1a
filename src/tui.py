"""Textual front end: package list, detail pane and the filter popup."""

from __future__ import annotations

import logging
from typing import Any, List

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.events import Key
from textual.screen import ModalScreen
from textual.widget import Widget
from textual.widgets import Input, Static

from models import (
    ByClassification,
    Classification,
    DetailRecord,
    PackageListModel,
    PackageRecord,
    TextSearch,
)
from providers import DetailFetchError, PackageProvider, placeholder_details
from screens import Browser, Screen
from settings import Theme

log = logging.getLogger(__name__)

HELP_TEXT = (
    "[b]j/k[/b] move  [b]g/G[/b] top/bottom  "
    "[b]a[/b] all  [b]e[/b] explicit  [b]o[/b] orphans  [b]f[/b] foreign  "
    "[b]s[/b] search  [b]q[/b] quit"
)


def _predicate_label(predicate: Any) -> str:
    if isinstance(predicate, ByClassification):
        return predicate.kind.value
    if isinstance(predicate, TextSearch):
        return f'"{predicate.text}"'
    return "All"


def _join(values: List[str]) -> str:
    return ", ".join(values) if values else "None"


def format_details(details: DetailRecord) -> Text:
    """Render a detail record as labelled lines."""
    rows = [
        ("Version", details.version),
        ("Description", details.description),
        ("URL", details.url),
        ("Depends On", _join(details.depends_on)),
        ("Optional Deps", _join(details.optional_dependencies)),
        ("Required By", _join(details.required_by)),
        ("Optional For", _join(details.optional_for)),
        ("Installed Size", details.installed_size),
        ("Install Reason", details.install_reason),
    ]
    text = Text()
    text.append(f"{details.name} Details\n\n", style="bold")
    for label, value in rows:
        text.append(f"{label}: ", style="bold")
        text.append(f"{value}\n")
    return text


class PackageListView(Widget):
    """Scrolling window over the filtered view that keeps the cursor visible."""

    def __init__(self, packages: PackageListModel, theme: Theme, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.packages = packages
        self.theme_styles = theme

    def _row_style(self, record: PackageRecord, selected: bool):
        if selected:
            return self.theme_styles.selected
        if record.classification is Classification.DEPENDENCY:
            return self.theme_styles.orphan
        if record.classification is Classification.FOREIGN:
            return self.theme_styles.foreign
        return self.theme_styles.base

    def render(self) -> Text:
        count = self.packages.filtered_count()
        if not count:
            return Text("No packages match the current filter.", style="dim")

        height = max(self.size.height, 1)
        sel = self.packages.selected_index or 0
        start = min(max(sel - height // 2, 0), max(count - height, 0))
        end = min(start + height, count)

        text = Text(no_wrap=True, overflow="ellipsis")
        for row in range(start, end):
            record = self.packages.item_at(row)
            text.append(record.name, style=self._row_style(record, row == sel))
            if row < end - 1:
                text.append("\n")
        return text


class FilterScreen(ModalScreen[str | None]):
    """Popup asking for the name filter. Enter applies, Escape cancels."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=True),
    ]

    DEFAULT_CSS = """
    FilterScreen {
        align: center middle;
    }
    FilterScreen #filter_box {
        width: 60;
        height: auto;
        border: round $accent;
        padding: 1 2;
    }
    FilterScreen #filter_hint {
        padding-top: 1;
    }
    """

    def compose(self) -> ComposeResult:
        with Vertical(id="filter_box"):
            yield Static("[bold]Filter by name[/]", markup=True)
            yield Input(placeholder="substring of the package name", id="filter_input")
            yield Static("[dim]Enter[/] = Apply  ·  [dim]Escape[/] = Cancel", id="filter_hint", markup=True)

    def on_mount(self) -> None:
        self.query_one("#filter_input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id != "filter_input":
            return
        self.dismiss(event.value)

    def action_cancel(self) -> None:
        self.dismiss(None)


class PackagesApp(App[None]):
    """Terminal browser for installed packages."""

    TITLE = "pacbrowse"

    DEFAULT_CSS = """
    #menu {
        height: 3;
        border: round $primary;
        padding: 0 1;
    }
    #body {
        height: 1fr;
    }
    #package_list {
        width: 1fr;
        border: round $primary;
        border-title-align: left;
    }
    #details {
        width: 2fr;
        border: round $primary;
        padding: 0 1;
    }
    #footer {
        height: 3;
        border: round $primary;
        padding: 0 1;
    }
    """

    def __init__(self, packages: PackageListModel, provider: PackageProvider, theme: Theme, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.browser = Browser(packages)
        self.provider = provider
        self.theme_styles = theme
        # detail pane only reloads when the selected record changes
        self._shown_record: PackageRecord | None = None
        self._detail_loaded = False

    @property
    def packages(self) -> PackageListModel:
        return self.browser.packages

    def compose(self) -> ComposeResult:
        yield Static("", id="menu")
        with Horizontal(id="body"):
            yield PackageListView(self.packages, self.theme_styles, id="package_list")
            yield Static("", id="details")
        yield Static(HELP_TEXT, id="footer", markup=True)

    def on_mount(self) -> None:
        self._refresh_views()

    def on_key(self, event: Key) -> None:
        if self.browser.screen is not Screen.LISTING:
            return
        key = event.character if event.character and len(event.character) == 1 and event.character.isprintable() else event.key
        action = self.browser.handle_key(key)
        event.stop()
        if action == "quit":
            self.exit()
        elif action == "open_filter":
            self.push_screen(FilterScreen(), self._on_filter_done)
        self._refresh_views()

    def _on_filter_done(self, text: str | None) -> None:
        if text is None:
            self.browser.cancel_filter()
        else:
            self.browser.confirm_filter(text)
        self._refresh_views()

    def _selected_details(self) -> DetailRecord | None:
        try:
            return self.packages.details_for_selected(self.provider.fetch_details)
        except DetailFetchError as exc:
            log.warning("%s", exc)
            return placeholder_details(self.packages.selected(), str(exc))

    def _refresh_views(self) -> None:
        packages = self.packages
        menu = self.query_one("#menu", Static)
        menu.update(
            f"[b]Packages[/b]  {packages.filtered_count()} of {packages.total_count()}"
            f"  |  filter: {_predicate_label(packages.predicate)}"
        )

        list_view = self.query_one("#package_list", PackageListView)
        list_view.border_title = "Packages"
        list_view.refresh()

        record = packages.selected()
        if self._detail_loaded and record is self._shown_record:
            return
        self._shown_record = record
        self._detail_loaded = True

        details = self.query_one("#details", Static)
        shown = self._selected_details()
        if shown is None:
            details.update(Text("Nothing selected.", style="dim"))
        else:
            details.update(format_details(shown))
