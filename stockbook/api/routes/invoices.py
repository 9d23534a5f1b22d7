"""Invoice endpoints."""

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response

from stockbook.api.dependencies import (
    get_download_invoice_use_case,
    get_generate_invoice_use_case,
    get_list_invoices_use_case,
    get_session,
)
from stockbook.application.dto.requests import GenerateInvoiceRequest
from stockbook.application.dto.responses import (
    ErrorResponse,
    GenerateInvoiceResponse,
    InvoicePageResponse,
)
from stockbook.application.use_cases import (
    DownloadInvoiceUseCase,
    GenerateInvoiceUseCase,
    ListInvoicesUseCase,
)
from stockbook.core.entities import Session

router = APIRouter(prefix="/api/invoices", tags=["invoices"])


@router.get(
    "",
    response_model=InvoicePageResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def list_invoices(
    page: int = Query(default=1, description="1-based page number"),
    page_size: int | None = Query(default=None, description="Invoices per page"),
    session: Session = Depends(get_session),
    use_case: ListInvoicesUseCase = Depends(get_list_invoices_use_case),
) -> InvoicePageResponse:
    result = await use_case.execute(session, page=page, page_size=page_size)
    return use_case.to_response(result)


@router.post(
    "",
    response_model=GenerateInvoiceResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def generate_invoice(
    request: GenerateInvoiceRequest,
    session: Session = Depends(get_session),
    use_case: GenerateInvoiceUseCase = Depends(get_generate_invoice_use_case),
) -> GenerateInvoiceResponse:
    """Issue an invoice for a recorded order."""
    result = await use_case.execute(session, request)
    return use_case.to_response(result)


@router.get(
    "/{invoice_id}/download",
    response_class=Response,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def download_invoice(
    invoice_id: str,
    invoice_number: str | None = Query(default=None, description="Used in the filename"),
    session: Session = Depends(get_session),
    use_case: DownloadInvoiceUseCase = Depends(get_download_invoice_use_case),
) -> Response:
    """Invoice document as produced by the backend."""
    result = await use_case.execute(session, invoice_id, invoice_number)
    return Response(
        content=result.document.content,
        media_type=result.document.media_type,
        headers={"Content-Disposition": f'attachment; filename="{result.filename}"'},
    )
