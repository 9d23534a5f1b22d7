"""Core business services."""

from stockbook.core.services.costing import CostPreview, cost_per_unit, preview_cost
from stockbook.core.services.invoice_reconciler import (
    InvoiceReconciler,
    ReconciliationOutcome,
    ReconciliationStatus,
    checkout_amount,
)
from stockbook.core.services.monthly import parse_monthly_profit
from stockbook.core.services.profit import (
    ProfitOutcome,
    ProfitSummary,
    calculate_profit,
    summarize_sale,
)
from stockbook.core.services.response_normalizer import (
    INVENTORY_LIST,
    INVOICE_LIST,
    ORDER_LIST,
    ListShape,
    NormalizedList,
    PayloadSource,
    extract_records,
    normalize_list,
    normalize_object,
)
from stockbook.core.services.sequencer import ResponseSequencer

__all__ = [
    "cost_per_unit",
    "preview_cost",
    "CostPreview",
    "calculate_profit",
    "summarize_sale",
    "ProfitSummary",
    "ProfitOutcome",
    "parse_monthly_profit",
    "InvoiceReconciler",
    "ReconciliationOutcome",
    "ReconciliationStatus",
    "checkout_amount",
    "normalize_list",
    "normalize_object",
    "extract_records",
    "ListShape",
    "NormalizedList",
    "PayloadSource",
    "INVENTORY_LIST",
    "ORDER_LIST",
    "INVOICE_LIST",
    "ResponseSequencer",
]
