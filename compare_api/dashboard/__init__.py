"""Dashboard-side state: chart cache, sector loading, comparison charts."""

from compare_api.dashboard.chart import ChartMetric, ChartPoint, build_chart
from compare_api.dashboard.chart_cache import ChartDataCache, ChartEntry
from compare_api.dashboard.client import DashboardClient
from compare_api.dashboard.comparison import ChartView, ComparisonView
from compare_api.dashboard.generation import ViewGeneration
from compare_api.dashboard.sector_loader import LoadPhase, SectorLoader, SectorView
from compare_api.dashboard.sectors import SECTORS, SectorConfig, get_sector

__all__ = [
    "SECTORS",
    "ChartDataCache",
    "ChartEntry",
    "ChartMetric",
    "ChartPoint",
    "ChartView",
    "ComparisonView",
    "DashboardClient",
    "LoadPhase",
    "SectorConfig",
    "SectorLoader",
    "SectorView",
    "ViewGeneration",
    "build_chart",
    "get_sector",
]
