# showlog/api/v1/endpoints/uploads.py
from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from sqlalchemy.orm import Session

from showlog.api import deps
from showlog.core.limiter import limiter
from showlog.core.storage import get_storage
from showlog.db.session import get_db
from showlog.schemas.token import TokenPayload
from showlog.schemas.upload import MessageResponse, UploadDeleteRequest, UploadResponse
from showlog.services.media import delete_concert_media, save_concert_media

router = APIRouter(tags=["Uploads"])


@router.post("/upload", response_model=UploadResponse)
@limiter.limit("60/minute")
def upload_media(
    request: Request,
    concertId: int = Form(...),
    isMainImage: bool = Form(False),
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    storage=Depends(get_storage),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Store an image or video for a concert. The file is named after the
    show date, the artist and how many media files the concert already has.
    """
    url = save_concert_media(
        db,
        storage,
        concert_id=concertId,
        filename=file.filename,
        content_type=file.content_type,
        fileobj=file.file,
        is_main_image=isMainImage,
    )
    return UploadResponse(url=url)


@router.post("/upload/delete", response_model=MessageResponse)
def delete_upload(
    delete_req: UploadDeleteRequest,
    db: Session = Depends(get_db),
    storage=Depends(get_storage),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Delete an uploaded file and detach it from its concert, if given.
    """
    removed = delete_concert_media(
        db, storage, file_url=delete_req.file_url, concert_id=delete_req.concert_id
    )
    return MessageResponse(message="File deleted" if removed else "File not found in storage")
