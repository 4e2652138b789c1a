"""Screen state machine and key dispatch for the browser.

Kept free of any rendering so the key handling can be driven directly.
"""

from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from models import All, ByClassification, Classification, PackageListModel, TextSearch


class Screen(Enum):
    LISTING = "listing"
    FILTER_ENTRY = "filter_entry"


class InvalidTransition(Exception):
    pass


TRANSITIONS: Dict[Tuple[Screen, str], Screen] = {
    (Screen.LISTING, "open_filter"): Screen.FILTER_ENTRY,
    (Screen.FILTER_ENTRY, "confirm"): Screen.LISTING,
    (Screen.FILTER_ENTRY, "cancel"): Screen.LISTING,
}


QUICK_FILTERS = {
    "a": All(),
    "e": ByClassification(Classification.EXPLICIT),
    "o": ByClassification(Classification.DEPENDENCY),
    "f": ByClassification(Classification.FOREIGN),
}

# key -> PackageListModel method
NAVIGATION_KEYS: Dict[str, Callable[[PackageListModel], None]] = {
    "up": PackageListModel.move_previous,
    "k": PackageListModel.move_previous,
    "down": PackageListModel.move_next,
    "j": PackageListModel.move_next,
    "g": PackageListModel.go_top,
    "G": PackageListModel.go_bottom,
}

FILTER_KEYS = ("s", "slash", "/")
QUIT_KEYS = ("q",)


class Browser:
    """Owns the current screen and routes keys to the package list."""

    def __init__(self, packages: PackageListModel):
        self.packages = packages
        self.screen = Screen.LISTING

    def _transition(self, event: str):
        target = TRANSITIONS.get((self.screen, event))
        if target is None:
            raise InvalidTransition(f"{event!r} is not allowed on {self.screen.value}")
        self.screen = target

    def open_filter(self):
        self._transition("open_filter")

    def confirm_filter(self, text: str):
        self._transition("confirm")
        self.packages.set_predicate(TextSearch(text))

    def cancel_filter(self):
        self._transition("cancel")

    def handle_key(self, key: str) -> Optional[str]:
        """Apply a key pressed on the listing screen.

        Returns "quit" or "open_filter" when the caller has to act, otherwise
        None. Keys are ignored while filter text is being entered.
        """
        if self.screen is not Screen.LISTING:
            return None
        if key in QUIT_KEYS:
            return "quit"
        if key in FILTER_KEYS:
            self.open_filter()
            return "open_filter"
        if key in QUICK_FILTERS:
            self.packages.set_predicate(QUICK_FILTERS[key])
        elif key in NAVIGATION_KEYS:
            NAVIGATION_KEYS[key](self.packages)
        return None
