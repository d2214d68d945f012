"""
Result Set Decorator
Uniform, re-iterable wrapper around decorated query results
"""
from typing import Any, Iterable, Iterator, List, Optional


class ResultSetDecorator:
    """
    Wraps any iterable so it can be iterated repeatedly and counted

    The wrapped iterable is materialized on first use.
    """

    def __init__(self, results: Iterable[Any]):
        self._source = results
        self._items: Optional[List[Any]] = None

    def to_list(self) -> List[Any]:
        if self._items is None:
            self._items = list(self._source)
            self._source = None
        return list(self._items)

    def first(self) -> Any:
        items = self.to_list()
        return items[0] if items else None

    def count(self) -> int:
        return len(self.to_list())

    def __iter__(self) -> Iterator[Any]:
        return iter(self.to_list())

    def __len__(self) -> int:
        return self.count()

    def __repr__(self):
        return f'ResultSetDecorator({self.to_list()!r})'
