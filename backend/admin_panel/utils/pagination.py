"""Page/limit pagination for list endpoints"""
import math
from typing import Any, Dict, List, Tuple

from sqlalchemy.orm import Query


def paginate(query: Query, page: int, limit: int) -> Tuple[List[Any], Dict[str, int]]:
    """Return one page of ``query`` and the pagination block sent to the dashboard."""
    total = query.order_by(None).count()
    items = query.offset((page - 1) * limit).limit(limit).all()
    return items, {
        "current": page,
        "total": math.ceil(total / limit) if limit else 0,
        "pageSize": limit,
        "totalItems": total,
    }
