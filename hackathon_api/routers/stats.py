from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hackathon_api.database import get_db
from hackathon_api.services.stats_service import compute_stats
from hackathon_api.utils.response import create_response, handle_exception

router = APIRouter(prefix="/api/stats", tags=["Stats"])


@router.get("")
def get_stats(db: Session = Depends(get_db)):
    try:
        return create_response(data=compute_stats(db))
    except Exception as exc:
        return handle_exception(exc)
