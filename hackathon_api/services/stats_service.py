import logging
from collections import Counter
from datetime import datetime, timedelta

from sqlalchemy import func
from sqlalchemy.orm import Session

from hackathon_api.config import settings
from hackathon_api.models.participant import Participant, ParticipantTechTag

logger = logging.getLogger(__name__)


def _ranked(rows) -> dict[str, int]:
    ordered = sorted(((key, int(count)) for key, count in rows), key=lambda item: (-item[1], item[0]))
    return dict(ordered)


def _tech_stack_counts(db: Session) -> dict[str, int]:
    # One count per tag row, so a participant with three tags lands in three buckets.
    rows = (
        db.query(ParticipantTechTag.tag, func.count(ParticipantTechTag.id))
        .group_by(ParticipantTechTag.tag)
        .all()
    )
    return _ranked(rows)


def _degree_counts(db: Session) -> dict[str, int]:
    rows = db.query(Participant.degree, func.count(Participant.id)).group_by(Participant.degree).all()
    return _ranked(rows)


def _year_counts(db: Session) -> dict[str, int]:
    rows = (
        db.query(Participant.year_of_study, func.count(Participant.id))
        .group_by(Participant.year_of_study)
        .order_by(Participant.year_of_study.asc())
        .all()
    )
    return {year: int(count) for year, count in rows}


def _daily_registrations(db: Session, now: datetime, days: int) -> list[dict]:
    since = now - timedelta(days=days)
    created = db.query(Participant.created_at).filter(Participant.created_at > since).all()
    buckets = Counter(row[0].date().isoformat() for row in created)
    return [{"date": day, "count": buckets[day]} for day in sorted(buckets)]


# Recomputed from the full table on every call, no cache.
def compute_stats(db: Session, now: datetime | None = None, days: int | None = None) -> dict:
    now = now or datetime.now()
    days = days or settings.STATS_WINDOW_DAYS
    logger.info("Computing registration stats window_days=%s", days)

    stats = {
        "total": db.query(func.count(Participant.id)).scalar() or 0,
        "byTechStack": _tech_stack_counts(db),
        "byDegree": _degree_counts(db),
        "byYear": _year_counts(db),
        "dailyRegistrations": _daily_registrations(db, now, days),
    }
    logger.debug("Stats ready total=%s", stats["total"])
    return stats
