import logging
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends
from fastapi.responses import JSONResponse

from schemas.transaction import Transaction
from schemas.upload import MessageResponse, StoredUpload, UploadResponse
from services.content_store import ContentStore
from services.extraction_service import handle_upload
from services.intake_service import get_store, intake_archive
from services.transaction_service import discard_upload, get_mock_transactions

logger = logging.getLogger(__name__)

router = APIRouter()

NO_FILE = {"message": "No file uploaded"}


@router.get("/health")
def health():
    return {"status": "ok"}


@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={400: {"model": MessageResponse}, 500: {"model": MessageResponse}},
)
async def upload(
    stored: Optional[StoredUpload] = Depends(intake_archive),
    store: ContentStore = Depends(get_store),
):
    if stored is None:
        logger.info("No file uploaded")
        return JSONResponse(status_code=400, content=NO_FILE)
    return await handle_upload(stored, store)


@router.post(
    "/get_transaction",
    response_model=List[Transaction],
    responses={400: {"model": MessageResponse}},
)
async def get_transaction(
    background_tasks: BackgroundTasks,
    stored: Optional[StoredUpload] = Depends(intake_archive),
    store: ContentStore = Depends(get_store),
):
    if stored is None:
        logger.info("No file uploaded")
        return JSONResponse(status_code=400, content=NO_FILE)

    background_tasks.add_task(discard_upload, store, stored.path)
    return get_mock_transactions()
