"""
Paginator
Builds a PaginatedResultSet from a TortoiseQuery
"""
from math import ceil
from typing import Optional

from larabake.datasource.tortoise_query import TortoiseQuery
from larabake.defaults import DEFAULT_PAGINATION_PER_PAGE, MAX_PAGINATION_PER_PAGE
from larabake.logging import getLogger
from larabake.paging.paginated_result_set import PaginatedResultSet

logger = getLogger(__name__)


async def paginate(
    query: TortoiseQuery,
    page: int = 1,
    per_page: Optional[int] = None
) -> PaginatedResultSet:
    """
    Paginate a query

    The page is clamped to at least 1 and per_page to 1..100. A page
    beyond the last one yields an empty result set. The query's
    map-reduce stages and formatters apply to the page's rows.

    Args:
        query: The query to paginate
        page: Page number (1-indexed)
        per_page: Items per page

    Returns:
        PaginatedResultSet
    """
    if per_page is None:
        per_page = DEFAULT_PAGINATION_PER_PAGE

    page = max(1, page)
    per_page = min(max(1, per_page), MAX_PAGINATION_PER_PAGE)

    total_items = await query.count()
    total_pages = ceil(total_items / per_page) if total_items > 0 else 1

    if page > total_pages:
        items = []
    else:
        items = await query.clone().offset((page - 1) * per_page).limit(per_page).all()

    logger.debug("Paginated page %d of %d (%d items total)", page, total_pages, total_items)

    return PaginatedResultSet(items, {
        'totalCount': total_items,
        'perPage': per_page,
        'pageCount': total_pages,
        'currentPage': page,
        'hasPrevPage': page > 1,
        'hasNextPage': page < total_pages,
    })
