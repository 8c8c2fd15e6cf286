import math
from collections.abc import Mapping
from dataclasses import dataclass, field

from hackathon_api.config import settings

# Offsets go to the database as signed 64-bit integers.
MAX_OFFSET = 2**63 - 1


@dataclass
class ParticipantFilter:
    tech_stack: list[str] = field(default_factory=list)
    degree: str | None = None
    year_of_study: str | None = None


@dataclass
class ParticipantQuery:
    filters: ParticipantFilter
    page: int
    limit: int

    @property
    def start_index(self) -> int:
        return (self.page - 1) * self.limit


def _positive_int(value, default: int) -> int:
    # Query params are advisory: anything unusable falls back to the default.
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


def _clean(value) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def compose(
    params: Mapping,
    default_limit: int | None = None,
    max_limit: int | None = None,
) -> ParticipantQuery:
    default_limit = default_limit or settings.DEFAULT_PAGE_LIMIT
    max_limit = max_limit or settings.MAX_PAGE_LIMIT

    page = _positive_int(params.get("page"), 1)
    limit = min(_positive_int(params.get("limit"), default_limit), max_limit)
    page = min(page, MAX_OFFSET // limit)

    tech_stack = []
    raw_tags = _clean(params.get("tech_stack"))
    if raw_tags:
        tech_stack = [tag.strip() for tag in raw_tags.split(",") if tag.strip()]

    filters = ParticipantFilter(
        tech_stack=tech_stack,
        degree=_clean(params.get("degree")),
        year_of_study=_clean(params.get("year_of_study")),
    )
    return ParticipantQuery(filters=filters, page=page, limit=limit)


def paginate(query: ParticipantQuery, returned_count: int, total: int) -> dict:
    pagination = {
        "current": query.page,
        "total": math.ceil(total / query.limit),
        "count": total,
    }
    if query.start_index + returned_count < total:
        pagination["next"] = {"page": query.page + 1, "limit": query.limit}
    if query.start_index > 0:
        pagination["prev"] = {"page": query.page - 1, "limit": query.limit}
    return pagination
