"""Entity to view-model conversion shared by the use cases."""

from stockbook.application.dto.responses import (
    NO_DATA_MESSAGE,
    InventoryItemResponse,
    InvoiceLineItemResponse,
    InvoiceResponse,
    MonthlyProfitResponse,
    OrderResponse,
    ProfitSummaryResponse,
)
from stockbook.config import get_settings
from stockbook.core.entities import InventoryItem, Invoice, MonthlyProfit, Order
from stockbook.core.money import as_float, format_currency, round_money
from stockbook.core.services import ProfitSummary


def _money(value) -> float:
    return float(round_money(value))


def _display(value) -> str:
    return format_currency(value, get_settings().display.currency_symbol)


def inventory_view(item: InventoryItem) -> InventoryItemResponse:
    return InventoryItemResponse(
        id=item.id,
        name=item.name,
        quantity=float(item.quantity),
        unit=item.unit.value,
        unit_label=item.unit.label,
        total_amount=_money(item.total_amount),
        shipping_fee=_money(item.shipping_fee),
        cost_per_unit=_money(item.cost_per_unit),
        cost_per_unit_display=_display(item.cost_per_unit),
        created_at=item.created_at,
    )


def order_view(order: Order) -> OrderResponse:
    embedded = order.inventory_item
    return OrderResponse(
        id=order.id,
        inventory_item_id=order.inventory_item_id,
        item_name=embedded.name if embedded else "",
        unit=embedded.unit if embedded else "",
        quantity_sold=float(order.quantity_sold),
        selling_price_per_unit=_money(order.selling_price_per_unit),
        total_selling_amount=as_float(
            round_money(order.total_selling_amount)
            if order.total_selling_amount is not None
            else None
        ),
        profit_per_unit=as_float(
            round_money(order.profit_per_unit) if order.profit_per_unit is not None else None
        ),
        total_profit=as_float(
            round_money(order.total_profit) if order.total_profit is not None else None
        ),
        total_profit_display=_display(order.total_profit),
        is_loss=order.is_loss,
        created_at=order.created_at,
    )


def invoice_view(invoice: Invoice) -> InvoiceResponse:
    return InvoiceResponse(
        invoice_number=invoice.invoice_number,
        id=invoice.id,
        order_id=invoice.order_id,
        client_name=invoice.client.name,
        client_email=invoice.client.email,
        status=invoice.status.value,
        status_badge=invoice.status.badge,
        is_paid=invoice.is_paid,
        issued_date=invoice.issued_date,
        due_date=invoice.due_date,
        total_amount=_money(invoice.total_amount),
        total_display=_display(invoice.total_amount),
        subtotal=_money(invoice.effective_subtotal),
        shipping_cost=_money(invoice.effective_shipping_cost),
        items=[
            InvoiceLineItemResponse(
                name=line.name,
                quantity=float(line.quantity),
                unit_price=_money(line.unit_price),
                total=_money(line.total),
            )
            for line in invoice.items
        ],
        payment_link=invoice.payment_link,
    )


def profit_summary_view(summary: ProfitSummary) -> ProfitSummaryResponse:
    return ProfitSummaryResponse(
        cost_per_unit=_money(summary.cost_per_unit),
        quantity_sold=float(summary.quantity_sold),
        selling_price_per_unit=_money(summary.selling_price_per_unit),
        total_cost=_money(summary.total_cost),
        total_selling_amount=_money(summary.total_selling_amount),
        profit_per_unit=_money(summary.profit_per_unit),
        total_profit=_money(summary.total_profit),
        outcome=summary.outcome.value,
        severity=summary.outcome.severity,
        display=summary.display(),
    )


def monthly_view(profit: MonthlyProfit | None) -> MonthlyProfitResponse:
    if profit is None:
        return MonthlyProfitResponse(available=False, message=NO_DATA_MESSAGE)

    return MonthlyProfitResponse(
        available=True,
        period=profit.period_label,
        total_revenue=_money(profit.total_revenue),
        total_cost=_money(profit.total_cost),
        total_profit=_money(profit.total_profit),
        total_revenue_display=_display(profit.total_revenue),
        total_cost_display=_display(profit.total_cost),
        total_profit_display=_display(profit.total_profit),
        is_loss=profit.is_loss,
    )
