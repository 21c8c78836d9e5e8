"""Upload endpoints: spreadsheet upload, sample data and template download.

Ingestion is all-or-nothing: a rejected upload leaves the session's
previously stored records in place. Rejections surface as 400 responses
carrying the user-facing message (see the handlers in ``finarrow.main``).
"""

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import Response

from finarrow.dependencies import get_facade, get_session_store, get_writable_session_store
from finarrow.engines.template_builder import TEMPLATE_FILENAME
from finarrow.facade import DashboardFacade
from finarrow.logging_config import get_logger
from finarrow.schemas.api import UploadErrorResponse, UploadResponse
from finarrow.services.session_store import SessionStore

logger = get_logger(__name__)
router = APIRouter()

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.post(
    "",
    response_model=UploadResponse,
    responses={400: {"model": UploadErrorResponse}},
)
def upload_file(
    file: UploadFile = File(...),
    facade: DashboardFacade = Depends(get_facade),
    store: SessionStore = Depends(get_writable_session_store),
) -> UploadResponse:
    """Parse an .xlsx or .csv upload and make it the session's data.

    Args:
        file: Multipart file field.

    Returns:
        Record count and the period range covered.
    """
    filename = file.filename or ""
    if file.size is not None:
        facade.check_upload(filename, file.size)
    data = file.file.read(facade.settings.max_upload_bytes + 1)
    logger.info("upload_received", filename=file.filename, size=len(data))
    return facade.upload(filename, data, store)


@router.post("/sample", response_model=UploadResponse)
def load_sample(
    facade: DashboardFacade = Depends(get_facade),
    store: SessionStore = Depends(get_writable_session_store),
) -> UploadResponse:
    return facade.load_sample(store)


@router.get("/template")
def download_template(facade: DashboardFacade = Depends(get_facade)) -> Response:
    """Blank spreadsheet with the canonical headers and three example rows."""
    return Response(
        content=facade.template(),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{TEMPLATE_FILENAME}"'},
    )


@router.delete("", status_code=204)
def clear_upload(
    facade: DashboardFacade = Depends(get_facade),
    store: SessionStore = Depends(get_session_store),
) -> None:
    facade.clear(store)
