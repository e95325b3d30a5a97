# showlog/api/v1/endpoints/transfer.py
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from showlog.api import deps
from showlog.db.session import get_db
from showlog.schemas.token import TokenPayload
from showlog.schemas.transfer import ExportDocument, ImportResult
from showlog.services.transfer import export_document, import_document

router = APIRouter(tags=["Import / Export"])


@router.post("/import", response_model=ImportResult)
def import_data(
    document: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Bulk-import venues and concerts. Data is transactional: if one entry
    fails, the entire import is rolled back.
    """
    return import_document(db, document)


@router.get("/export", response_model=ExportDocument)
def export_data(db: Session = Depends(get_db)):
    """
    Every venue and concert in the import format, ready to re-import.
    """
    return export_document(db)
