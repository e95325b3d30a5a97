# showlog/api/v1/endpoints/stats.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from showlog import crud
from showlog.db.session import get_db
from showlog.schemas.stats import Stats

router = APIRouter(tags=["Stats"])


@router.get("/stats", response_model=Stats)
def get_stats(db: Session = Depends(get_db)):
    """
    Totals, first and latest show, top artists and venues, and show counts
    per year and per city. Always computed from the current data.
    """
    return crud.concert.get_stats(db)
