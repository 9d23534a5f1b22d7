"""Invoice use cases: generate, list page by page, download the document."""

import math
import re
from dataclasses import dataclass

from stockbook.application.dto.requests import GenerateInvoiceRequest
from stockbook.application.dto.responses import GenerateInvoiceResponse, InvoicePageResponse
from stockbook.application.services import get_backend
from stockbook.application.use_cases.views import invoice_view
from stockbook.config import get_logger, get_settings
from stockbook.core.entities import ClientInfo, Invoice, Session
from stockbook.core.exceptions import ValidationError
from stockbook.core.interfaces import DocumentDownload, IBackendClient
from stockbook.core.services import INVOICE_LIST, normalize_list, normalize_object

logger = get_logger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MAX_PAGE_SIZE = 100


def build_client(request: GenerateInvoiceRequest) -> ClientInfo:
    """Validate the recipient; raises ValidationError before any network call."""
    name = request.client_name.strip()
    email = request.client_email.strip()
    if not name:
        raise ValidationError("client_name", "Client name is required")
    if not email:
        raise ValidationError("client_email", "Client email is required")
    if not EMAIL_PATTERN.match(email):
        raise ValidationError("client_email", "Please enter a valid email address", email)
    return ClientInfo(name=name, email=email)


@dataclass
class GenerateInvoiceResult:
    order_id: str
    invoice: Invoice | None = None


class GenerateInvoiceUseCase:
    """Ask the backend to issue an invoice for a recorded order."""

    def __init__(self, backend: IBackendClient | None = None):
        self._backend = backend

    async def execute(
        self, session: Session, request: GenerateInvoiceRequest
    ) -> GenerateInvoiceResult:
        client = build_client(request)
        order_id = request.order_id.strip()
        logger.info("generate_invoice_started", order_id=order_id)

        payload = await get_backend(self._backend).generate_invoice(session, order_id, client)
        invoice = normalize_object(payload, Invoice, ("invoice", "data"))

        logger.info(
            "generate_invoice_complete",
            order_id=order_id,
            invoice_number=invoice.invoice_number if invoice else None,
        )
        return GenerateInvoiceResult(order_id=order_id, invoice=invoice)

    def to_response(self, result: GenerateInvoiceResult) -> GenerateInvoiceResponse:
        return GenerateInvoiceResponse(
            invoice=invoice_view(result.invoice) if result.invoice else None
        )


@dataclass
class InvoicePage:
    """One page of invoices plus the totals the pager needs."""

    invoices: list[Invoice]
    page: int
    page_size: int
    total: int
    malformed: bool = False

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(self.total / self.page_size))

    @property
    def has_more(self) -> bool:
        return self.page < self.total_pages


class ListInvoicesUseCase:
    """Invoice table, paginated in the order the backend returned them."""

    def __init__(self, backend: IBackendClient | None = None):
        self._backend = backend

    async def execute(
        self, session: Session, page: int = 1, page_size: int | None = None
    ) -> InvoicePage:
        page_size = page_size or get_settings().display.invoices_page_size
        if page < 1:
            raise ValidationError("page", "must be at least 1", page)
        if not 1 <= page_size <= MAX_PAGE_SIZE:
            raise ValidationError(
                "page_size", f"must be between 1 and {MAX_PAGE_SIZE}", page_size
            )

        payload = await get_backend(self._backend).list_invoices(session)
        result = normalize_list(payload, INVOICE_LIST)

        start = (page - 1) * page_size
        return InvoicePage(
            invoices=result.items[start : start + page_size],
            page=page,
            page_size=page_size,
            total=len(result.items),
            malformed=result.malformed,
        )

    def to_response(self, result: InvoicePage) -> InvoicePageResponse:
        return InvoicePageResponse(
            invoices=[invoice_view(invoice) for invoice in result.invoices],
            page=result.page,
            page_size=result.page_size,
            total=result.total,
            total_pages=result.total_pages,
            has_more=result.has_more,
            malformed=result.malformed,
        )


@dataclass
class InvoiceDocument:
    document: DocumentDownload
    filename: str


class DownloadInvoiceUseCase:
    """Pass the backend's invoice document through unchanged."""

    def __init__(self, backend: IBackendClient | None = None):
        self._backend = backend

    async def execute(
        self, session: Session, invoice_id: str, invoice_number: str | None = None
    ) -> InvoiceDocument:
        document = await get_backend(self._backend).download_invoice(session, invoice_id)
        label = (invoice_number or "").strip() or invoice_id
        logger.info(
            "invoice_downloaded",
            invoice_id=invoice_id,
            size=len(document.content),
        )
        return InvoiceDocument(document=document, filename=f"invoice-{label}.pdf")
