"""
Map Reduce
Two-stage transformation of an iterable of results
"""
from typing import Any, Callable, Dict, Hashable, Iterable, Iterator, List, Optional, Tuple


class MapReduce:
    """
    Runs a mapper over every item, then a reducer over every bucket

    The mapper is called as mapper(value, key, mr) and groups values with
    mr.emit_intermediate(value, bucket). The reducer is called as
    reducer(values, bucket, mr) and produces output with mr.emit(value, key).
    A mapper may also call mr.emit() directly when no reducer is needed.

    Execution happens once, on first iteration.

    Example:
        def mapper(article, key, mr):
            mr.emit_intermediate(article['id'], article['status'])

        def reducer(ids, status, mr):
            mr.emit(len(ids), status)

        counts = dict(MapReduce(articles, mapper, reducer).items())
        # {'published': 3, 'draft': 1}
    """

    def __init__(self, data: Iterable[Any], mapper: Callable, reducer: Optional[Callable] = None):
        self._data = data
        self._mapper = mapper
        self._reducer = reducer
        self._intermediate: Dict[Hashable, List[Any]] = {}
        self._result: Dict[Hashable, Any] = {}
        self._counter = 0
        self._executed = False

    def emit_intermediate(self, value: Any, bucket: Hashable):
        self._intermediate.setdefault(bucket, []).append(value)

    def emit(self, value: Any, key: Optional[Hashable] = None):
        """Add a final value; without a key the next integer index is used"""
        if key is None:
            while self._counter in self._result:
                self._counter += 1
            key = self._counter
        self._result[key] = value

    def _execute(self):
        for key, value in self._keyed(self._data):
            self._mapper(value, key, self)
        self._data = None

        if self._intermediate and self._reducer is None:
            raise ValueError('No reducer function was provided')

        for bucket, values in self._intermediate.items():
            self._reducer(values, bucket, self)

        self._intermediate = {}
        self._executed = True

    @staticmethod
    def _keyed(data: Iterable[Any]) -> Iterator[Tuple[Hashable, Any]]:
        if isinstance(data, dict):
            return iter(data.items())
        if isinstance(data, MapReduce):
            return data.items()
        return enumerate(data)

    def items(self) -> Iterator[Tuple[Hashable, Any]]:
        if not self._executed:
            self._execute()
        return iter(list(self._result.items()))

    def __iter__(self) -> Iterator[Any]:
        return (value for _, value in self.items())
