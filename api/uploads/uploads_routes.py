from fastapi import APIRouter
from fastapi.responses import FileResponse

from config.database import UPLOAD_DIR
from api.uploads.uploads_service import resolve_upload
from helpers.errors import NotFound

router = APIRouter(
    prefix="/uploads",
    tags=["uploads"]
)


@router.get("/{filename}", summary="Serve a stored report image")
def get_upload_file(filename: str):
    path = resolve_upload(UPLOAD_DIR, filename)
    if path is None:
        raise NotFound("Image not found")
    return FileResponse(path)
