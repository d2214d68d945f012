"""
Paginated Result Set
Results of one page together with the paging parameters
"""
from typing import Any, Dict, Iterable, Iterator, Optional

from larabake.datasource.result_set import ResultSetDecorator


class PaginatedResultSet:
    """
    Decorates a page of results with its paging parameters

    Params keys: totalCount, perPage, pageCount, currentPage, hasPrevPage,
    hasNextPage (plus any extra key, readable with paging_param()).

    Example:
        page = await paginate(TortoiseQuery.for_model(Article), page=2, per_page=10)
        for article in page:
            ...
        page.has_next_page()   # True
        page.to_dict()['pagination']['current_page']  # 2
    """

    def __init__(self, results: Iterable[Any], params: Dict[str, Any]):
        if not isinstance(results, ResultSetDecorator):
            results = ResultSetDecorator(results)
        self._results = results
        self.params = dict(params)

    def count(self) -> int:
        """Number of items on this page"""
        return self._results.count()

    def items(self) -> ResultSetDecorator:
        return self._results

    def total_count(self) -> Optional[int]:
        return self.params['totalCount']

    def per_page(self) -> int:
        return self.params['perPage']

    def page_count(self) -> Optional[int]:
        return self.params['pageCount']

    def current_page(self) -> int:
        return self.params['currentPage']

    def has_prev_page(self) -> bool:
        return self.params['hasPrevPage']

    def has_next_page(self) -> bool:
        return self.params['hasNextPage']

    def paging_param(self, name: str) -> Any:
        return self.params.get(name)

    def paging_params(self) -> Dict[str, Any]:
        return self.params

    def __iter__(self) -> Iterator[Any]:
        return iter(self._results)

    def __len__(self) -> int:
        return self.count()

    def to_dict(self, item_converter=None, items_key: str = 'items') -> Dict[str, Any]:
        """
        Convert to dictionary for JSON serialization

        Args:
            item_converter: Optional function to convert items to dict
            items_key: Key name for items in the result (default: 'items')
        """
        if item_converter:
            items_data = [item_converter(item) for item in self]
        else:
            items_data = []
            for item in self:
                if isinstance(item, dict):
                    items_data.append(item)
                elif hasattr(item, 'to_dict'):
                    items_data.append(item.to_dict())
                else:
                    items_data.append(str(item))

        total = self.total_count() or 0
        start = (self.current_page() - 1) * self.per_page()

        return {
            items_key: items_data,
            'pagination': {
                'total_items': self.total_count(),
                'total_pages': self.page_count(),
                'current_page': self.current_page(),
                'per_page': self.per_page(),
                'has_next': self.has_next_page(),
                'has_prev': self.has_prev_page(),
                'start_index': start + 1 if total > 0 and self.count() else 0,
                'end_index': start + self.count(),
            }
        }
