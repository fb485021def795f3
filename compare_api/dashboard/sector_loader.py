"""Two-phase sector loading for the dashboard.

Selecting a sector first fetches a quick view (screener fields only) so
something can be shown right away, then the full view with per-company
financials. A sector whose full view is stored is served from memory.

Every selection advances a generation token. A quick view that completes
after the user selected something else is dropped. A full view that completes
late is still stored, so returning to that sector costs no calls, but it is
not published.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from compare_api.core.fmp.models import CompanyRecord
from compare_api.dashboard.client import DashboardClient
from compare_api.dashboard.generation import ViewGeneration
from compare_api.dashboard.sectors import SectorConfig

logger = logging.getLogger(__name__)


class LoadPhase(str, Enum):
    QUICK = "quick"
    FULL = "full"


@dataclass(frozen=True)
class SectorView:
    """Companies of one sector as last loaded."""

    sector_key: str
    companies: tuple[CompanyRecord, ...]
    phase: LoadPhase

    @property
    def is_fully_loaded(self) -> bool:
        return self.phase == LoadPhase.FULL


class SectorLoader:
    """Loads sectors through the Compare API and keeps their views."""

    def __init__(
        self,
        client: DashboardClient,
        on_update: Callable[[SectorView], None] | None = None,
    ):
        """Initialize the loader.

        Args:
            client: Compare API client
            on_update: Called with each view as it becomes current
        """
        self.client = client
        self.on_update = on_update
        self.generation = ViewGeneration()
        self._views: dict[str, SectorView] = {}
        self._lock = threading.Lock()

    def get_view(self, sector_key: str) -> SectorView | None:
        """Return the stored view of a sector (quick or full), if any."""
        with self._lock:
            return self._views.get(sector_key)

    def _publish(self, view: SectorView) -> None:
        if self.on_update is not None:
            self.on_update(view)

    def _accept(self, token: int, view: SectorView) -> bool:
        """Store and publish a phase result if its selection is still current.

        A full view is stored even when stale.
        """
        with self._lock:
            current = self.generation.is_current(token)
            if current or view.is_fully_loaded:
                self._views[view.sector_key] = view
        if not current:
            logger.info(f"Stale {view.phase.value} view for {view.sector_key} not published")
            return False
        self._publish(view)
        return True

    def load_sector(self, sector_key: str, config: SectorConfig) -> SectorView | None:
        """Select a sector and load it in two phases.

        Args:
            sector_key: Sector identifier (key in SECTORS)
            config: Industries and size to load

        Returns:
            The full view, or None if another selection superseded this one.
            A superseded full view is still stored for the next selection.

        Raises:
            RateLimitError / UpstreamError: if either phase fails. A phase-2
            failure keeps the quick view stored.
        """
        token = self.generation.advance()

        stored = self.get_view(sector_key)
        if stored is not None and stored.is_fully_loaded:
            logger.info(f"Sector {sector_key} already loaded")
            self._publish(stored)
            return stored

        industries = config.industry_list

        quick = self.client.get_top_companies(config.limit, industries, quick=True)
        quick_view = SectorView(sector_key, tuple(quick), LoadPhase.QUICK)
        if not self._accept(token, quick_view):
            return None
        logger.info(f"Sector {sector_key}: quick view with {len(quick)} companies")

        try:
            full = self.client.get_top_companies(config.limit, industries, quick=False)
        except Exception as e:
            logger.error(f"Full load failed for sector {sector_key}, keeping quick view: {e}")
            raise

        full_view = SectorView(sector_key, tuple(full), LoadPhase.FULL)
        if not self._accept(token, full_view):
            return None
        logger.info(f"Sector {sector_key}: full view with {len(full)} companies")
        return full_view
