"""Aggregated read models: dashboard counters and financial valuation."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from src.core.entities.material import MaterialWithCategory, StockStatus


class DashboardMetrics(BaseModel):
    """Counters shown on the tenant dashboard."""

    total_materials: int = 0
    entries_today: int = 0
    exits_today: int = 0
    critical_items: int = 0
    day_start: datetime | None = None
    day_end: datetime | None = None


class StockValuation(BaseModel):
    """One row of the financial report."""

    material: MaterialWithCategory
    total_value: Decimal
    status: StockStatus


class FinancialReport(BaseModel):
    """Valuation of the current stock of a tenant."""

    total_stock_value: Decimal = Decimal("0")
    total_items: int = 0
    high_value_items: int = 0
    high_value_threshold: Decimal = Decimal("1000")
    stock_items: list[StockValuation] = Field(default_factory=list)
