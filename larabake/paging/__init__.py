"""
Paging Package
"""
from larabake.paging.paginated_result_set import PaginatedResultSet
from larabake.paging.paginator import paginate

__all__ = [
    'PaginatedResultSet',
    'paginate',
]
