import math
from typing import Any, Dict, Optional

from .database import ProductStore
from .exceptions import InvalidQueryError
from .models import ProductQuery

# Read-side logic for the product routes: listing and statistics.

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


def _positive_int(name: str, raw: Optional[str], default: int) -> int:
    if raw is None:
        return default
    try:
        value = int(str(raw).strip(), 10)
    except ValueError:
        raise InvalidQueryError(name, raw) from None
    if value < 1:
        raise InvalidQueryError(name, raw)
    return value


def parse_product_query(
    category: Optional[str] = None,
    search: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> ProductQuery:
    """Build a ProductQuery from raw query-string values. Empty filters mean no filter."""
    return ProductQuery(
        category=category or None,
        search=search or None,
        page=_positive_int("page", page, DEFAULT_PAGE),
        limit=_positive_int("limit", limit, DEFAULT_LIMIT),
    )


def list_products_logic(store: ProductStore, query: ProductQuery) -> Dict[str, Any]:
    """
    Filter by category, then search by name, then paginate.

    `total` counts the filtered records before slicing; a page past the end
    is simply empty.
    """
    result = store.snapshot()

    if query.category:
        result = [p for p in result if p.category == query.category]

    if query.search:
        term = query.search.lower()
        result = [p for p in result if term in p.name.lower()]

    total = len(result)
    start = (query.page - 1) * query.limit
    end = query.page * query.limit
    page = result[start:end]

    return {
        "data": [p.to_response() for p in page],
        "pagination": {
            "total": total,
            "page": query.page,
            "totalPages": math.ceil(total / query.limit),
        },
    }


def product_stats_logic(store: ProductStore) -> Dict[str, Any]:
    total_products = 0
    category_count: Dict[str, int] = {}
    total_value = 0

    for p in store.snapshot():
        total_products += 1
        category_count[p.category] = category_count.get(p.category, 0) + 1
        total_value += p.price

    if total_products > 0:
        average_price = total_value / total_products
    else:
        average_price = 0

    return {
        "totalProducts": total_products,
        "categoryCount": category_count,
        "totalValue": total_value,
        "averagePrice": average_price,
    }
