import math
from sqlalchemy.orm import Query

DEFAULT_LIMIT = 10
MAX_LIMIT = 100


def paginate(query: Query, page: int, limit: int):
    """Return one page of ``query`` together with the total row count."""
    total = query.order_by(None).count()
    items = query.offset((page - 1) * limit).limit(limit).all()
    return items, total


def pagination_meta(total: int, page: int, limit: int) -> dict:
    return {
        "total": total,
        "page": page,
        "limit": limit,
        "pages": math.ceil(total / limit) if limit else 0,
    }
