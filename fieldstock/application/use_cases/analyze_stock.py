"""Stock analysis use cases — dashboard alerts and per-model overview."""

from dataclasses import dataclass

from fieldstock.application.dto.requests import AnalyzeStockRequest, StockOverviewRequest
from fieldstock.application.dto.responses import StockAlertsResponse, StockLevelResponse
from fieldstock.config import get_logger
from fieldstock.core.entities.stock import RestockDraft, StockAlerts, StockOverviewRow
from fieldstock.core.interfaces.inventory_source import IInventorySource
from fieldstock.core.services.catalog import StockCatalog
from fieldstock.core.services.ledger import StockLedger
from fieldstock.core.services.stock_analyzer import StockAnalyzer

logger = get_logger(__name__)


@dataclass
class AnalyzeStockResult:
    """Result of stock alert analysis."""

    alerts: StockAlerts
    restock_draft: RestockDraft | None = None


class AnalyzeStockUseCase:
    """Classify models into critical and low stock buckets."""

    def __init__(self, inventory_source: IInventorySource):
        self._source = inventory_source

    async def execute(self, request: AnalyzeStockRequest) -> AnalyzeStockResult:
        """Execute analyze stock use case."""
        logger.info("analyze_stock_started", default_threshold=request.default_threshold)

        units = await self._source.list_units()
        thresholds = await self._source.get_thresholds()

        analyzer = StockAnalyzer(default_threshold=request.default_threshold)
        alerts = analyzer.analyze(units, thresholds)

        draft = None
        if request.build_restock_draft:
            draft = analyzer.build_restock_draft(alerts.critical + alerts.low)

        logger.info(
            "analyze_stock_complete",
            critical=alerts.total_critical,
            low=alerts.total_low,
        )
        return AnalyzeStockResult(alerts=alerts, restock_draft=draft)

    def to_response(self, result: AnalyzeStockResult) -> StockAlertsResponse:
        """Convert result to response DTO."""

        def level(item) -> StockLevelResponse:
            return StockLevelResponse(
                name=item.name,
                brand=item.brand,
                category=item.category,
                count=item.count,
                threshold=item.threshold,
            )

        return StockAlertsResponse(
            critical=[level(item) for item in result.alerts.critical],
            low=[level(item) for item in result.alerts.low],
            total_critical=result.alerts.total_critical,
            total_low=result.alerts.total_low,
        )


@dataclass
class StockOverviewResult:
    """Result of the per-model overview."""

    rows: list[StockOverviewRow]

    @property
    def total_value_in_storage(self) -> float:
        return sum(row.value_in_storage for row in self.rows)


class StockOverviewUseCase:
    """Aggregate storage, in-use and damaged stock per model."""

    def __init__(self, inventory_source: IInventorySource):
        self._source = inventory_source

    async def execute(self, request: StockOverviewRequest) -> StockOverviewResult:
        """Execute stock overview use case."""
        logger.info("stock_overview_started", include_usage=request.include_usage)

        units = await self._source.list_units()
        catalog = StockCatalog(await self._source.list_asset_types())
        installations = []
        maintenances = []
        if request.include_usage:
            installations = await self._source.list_installations()
            maintenances = await self._source.list_maintenances()

        rows = StockLedger(catalog).overview(units, installations, maintenances)

        logger.info("stock_overview_complete", models=len(rows))
        return StockOverviewResult(rows=rows)
