from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Union


class Classification(Enum):
    EXPLICIT = "Explicit"
    DEPENDENCY = "Orphan"
    FOREIGN = "Foreign"


@dataclass
class DetailRecord:
    name: str = ""
    version: str = ""
    description: str = ""
    url: str = ""
    depends_on: List[str] = field(default_factory=list)
    optional_dependencies: List[str] = field(default_factory=list)
    required_by: List[str] = field(default_factory=list)
    optional_for: List[str] = field(default_factory=list)
    installed_size: str = ""
    install_reason: str = ""


@dataclass(eq=False)
class PackageRecord:
    name: str          # identity key within a catalog
    version: str
    classification: Classification
    details: Optional[DetailRecord] = field(default=None, repr=False)

    def __eq__(self, other):
        if not isinstance(other, PackageRecord):
            return NotImplemented
        return self.name == other.name

    def __hash__(self):
        return hash(self.name)

    def get_details(self, fetch: Callable[[str], DetailRecord]) -> DetailRecord:
        """Return the cached detail record, fetching it on first use.

        Errors raised by *fetch* propagate and leave the slot empty, so a later
        call tries again.
        """
        if self.details is None:
            self.details = fetch(self.name)
        return self.details


# ---------------------------------------------------------------------------
# filter predicates
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class All:
    def matches(self, record: PackageRecord) -> bool:
        return True


@dataclass(frozen=True)
class ByClassification:
    kind: Classification

    def matches(self, record: PackageRecord) -> bool:
        return record.classification == self.kind


@dataclass(frozen=True)
class TextSearch:
    text: str

    def matches(self, record: PackageRecord) -> bool:
        return self.text in record.name


FilterPredicate = Union[All, ByClassification, TextSearch]


class PackageListModel:
    """Catalog plus the filtered view and cursor the browser works on.

    While the view is non-empty ``selected_index`` always points into it;
    an empty view has no selection.
    """

    def __init__(self, items: List[PackageRecord] | None = None):
        self._all: List[PackageRecord] = list(items or [])
        self._predicate: FilterPredicate = All()
        self._filtered: List[PackageRecord] = list(self._all)
        self.selected_index: Optional[int] = 0 if self._filtered else None
        self.last_known_index: Optional[int] = None

    @property
    def predicate(self) -> FilterPredicate:
        return self._predicate

    def set_predicate(self, predicate: FilterPredicate):
        self._predicate = predicate
        self._filtered = [it for it in self._all if predicate.matches(it)]
        if self.selected_index is not None:
            self.last_known_index = self.selected_index
        self.go_top()

    # ---- navigation ----

    def _resume_index(self) -> int:
        if self.last_known_index is None:
            return 0
        return min(self.last_known_index, len(self._filtered) - 1)

    def move_next(self):
        if not self._filtered:
            return
        i = self.selected_index
        if i is None:
            i = self._resume_index()
        elif i >= len(self._filtered) - 1:
            i = 0
        else:
            i += 1
        self.selected_index = i

    def move_previous(self):
        if not self._filtered:
            return
        i = self.selected_index
        if i is None:
            i = self._resume_index()
        elif i == 0:
            i = len(self._filtered) - 1
        else:
            i -= 1
        self.selected_index = i

    def go_top(self):
        self.selected_index = 0 if self._filtered else None

    def go_bottom(self):
        if not self._filtered:
            self.selected_index = None
            return
        self.selected_index = len(self._filtered) - 1

    # ---- read access ----

    def selected(self) -> Optional[PackageRecord]:
        if self.selected_index is None or not self._filtered:
            return None
        return self._filtered[self.selected_index]

    def details_for_selected(self, fetch: Callable[[str], DetailRecord]) -> Optional[DetailRecord]:
        record = self.selected()
        if record is None:
            return None
        return record.get_details(fetch)

    def total_count(self) -> int:
        return len(self._all)

    def filtered_count(self) -> int:
        return len(self._filtered)

    def visible_items(self) -> List[PackageRecord]:
        return list(self._filtered)

    def item_at(self, row: int) -> PackageRecord:
        return self._filtered[row]
