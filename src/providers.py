import logging
from typing import Dict, List, Optional

from models import Classification, DetailRecord, PackageRecord
from parsers import parse_detail_block, parse_package_list
from runner import CommandError, CommandRunner
from settings import settings

log = logging.getLogger(__name__)


class CatalogBuildError(Exception):
    """One of the catalog queries failed; there is no partial catalog."""


class DetailFetchError(Exception):
    """Details for a single package could not be retrieved."""


def merge_catalog(
    explicit: List[PackageRecord],
    orphans: List[PackageRecord],
    foreign: List[PackageRecord],
) -> List[PackageRecord]:
    """Combine the three query results into one sorted catalog.

    Explicit packages that also show up as foreign are tagged foreign. The
    explicit and orphan groups are then merged by name; if a name is in both,
    the orphan entry (merged last) wins.
    """

    foreign_names = {p.name for p in foreign}
    for p in explicit:
        if p.name in foreign_names:
            p.classification = Classification.FOREIGN

    merged: Dict[str, PackageRecord] = {}
    for p in explicit + orphans:
        if p.name in merged:
            log.warning(
                "%s reported as both %s and %s, keeping %s",
                p.name,
                merged[p.name].classification.value,
                p.classification.value,
                p.classification.value,
            )
        merged[p.name] = p

    return sorted(merged.values(), key=lambda p: p.name)


class PackageProvider:
    """Queries the package manager for the catalog and per-package details."""

    def __init__(
        self,
        package_manager: Optional[str] = None,
        runner: Optional[CommandRunner] = None,
        dependency_query: Optional[str] = None,
    ):
        self.package_manager = package_manager or settings.get("package_manager", "pacman")
        self.runner = runner or CommandRunner(timeout=settings.get_timeout())
        self.dependency_query = dependency_query or settings.get("dependency_query", "-Qdt")

    def _query(self, flag: str, classification: Classification) -> List[PackageRecord]:
        out = self.runner.run(self.package_manager, [flag])
        items = parse_package_list(out, classification)
        log.debug("%s %s: %d packages", self.package_manager, flag, len(items))
        return items

    def list_explicit(self) -> List[PackageRecord]:
        """Explicitly installed packages (pacman -Qe), foreign ones included."""
        return self._query("-Qe", Classification.EXPLICIT)

    def list_orphans(self) -> List[PackageRecord]:
        """Packages installed as dependencies (pacman -Qdt by default)."""
        return self._query(self.dependency_query, Classification.DEPENDENCY)

    def list_foreign(self) -> List[PackageRecord]:
        """Packages not found in any sync database (pacman -Qm)."""
        return self._query("-Qm", Classification.FOREIGN)

    def build_catalog(self) -> List[PackageRecord]:
        try:
            explicit = self.list_explicit()
            orphans = self.list_orphans()
            foreign = self.list_foreign()
        except CommandError as exc:
            raise CatalogBuildError(f"Could not list installed packages: {exc}") from exc

        catalog = merge_catalog(explicit, orphans, foreign)
        log.info("Loaded %d packages", len(catalog))
        return catalog

    def fetch_details(self, name: str) -> DetailRecord:
        try:
            out = self.runner.run(self.package_manager, ["-Qi", name])
        except CommandError as exc:
            raise DetailFetchError(f"Could not load details for {name}: {exc}") from exc

        details = parse_detail_block(out)
        if not details.name:
            raise DetailFetchError(f"No details available for {name}")
        return details


def placeholder_details(record: PackageRecord, reason: str = "") -> DetailRecord:
    """Detail record shown when the real one could not be fetched."""
    return DetailRecord(
        name=record.name,
        version=record.version,
        description=reason or "Details unavailable",
    )
