"""
Query Mixin
Result post-processing shared by every query implementation
"""
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Union

from larabake.defaults import DEFAULT_QUERY_CACHE_CONFIG
from larabake.datasource.map_reduce import MapReduce
from larabake.datasource.query_cacher import QueryCacher
from larabake.datasource.repository import Repository
from larabake.datasource.result_set import ResultSetDecorator
from larabake.events import Event
from larabake.logging import getLogger

logger = getLogger(__name__)


class QueryMixin(ABC):
    """
    Lazy, cacheable results with map-reduce stages and formatters

    Concrete queries implement `_execute()`. Everything else (pre-set
    results, the `Model.beforeFind` event, caching and decoration) is
    handled here. Results are decorated by the map-reduce stages first,
    in the order they were added, then by the formatters in order.

    Example:
        query = ArticlesQuery(repository)
        query.map_reduce(mapper, reducer).format_results(lambda results, q: ...)
        query.cache('recent_articles')
        articles = await query.to_list()
    """

    APPEND = 'append'
    PREPEND = 'prepend'
    OVERWRITE = 'overwrite'

    _repository: Optional[Repository] = None
    _results: Any = None
    _cache: Optional[QueryCacher] = None
    _dirty = False

    def _query_state(self):
        # Lazily created so subclasses need not call a mixin constructor
        if '_map_reduce' not in self.__dict__:
            self._map_reduce: List[Dict[str, Optional[Callable]]] = []
            self._formatters: List[Callable] = []
            self._options: Dict[str, Any] = {}

    def repository(self, *table: Repository):
        """Get the repository, or set it when one is given"""
        if not table:
            return self._repository
        self._repository = table[0]
        return self

    def set_result(self, results: Any):
        """Pre-set the results; execution is skipped entirely"""
        self._results = results
        return self

    def options(self, *options: Dict[str, Any]):
        """Free-form options passed along with Model.beforeFind"""
        self._query_state()
        if not options:
            return self._options
        self._options.update(options[0])
        return self

    def cache(self, key: Union[str, Callable, bool], config: Any = DEFAULT_QUERY_CACHE_CONFIG):
        """
        Cache the results of this query

        Args:
            key: Cache key, a callable of the query returning one, or False to disable
            config: Cache configuration name or store instance
        """
        if key is False:
            self._cache = None
            return self
        self._cache = QueryCacher(key, config)
        return self

    async def all(self) -> Any:
        """
        Fetch, decorate and remember the results

        Returns the pre-set results when there are any. Otherwise dispatches
        `Model.beforeFind` (a listener may pre-set results), then reads the
        cache, then executes.
        """
        self._query_state()
        if self._results is not None:
            return self._results

        table = self.repository()
        if table is not None:
            event = Event('Model.beforeFind', table, [self, self._options, True])
            await table.get_event_manager().dispatch(event)
            if self._results is not None:
                return self._results

        results = None
        if self._cache is not None:
            results = await self._cache.fetch(self)
            if results is not None:
                results = ResultSetDecorator(results)

        if results is None:
            results = self._decorate_results(await self._execute())
            if self._cache is not None:
                await self._cache.store(self, results)

        self._results = results
        self._dirty = False
        return self._results

    async def to_list(self) -> List[Any]:
        results = await self.all()
        if hasattr(results, 'to_list'):
            return results.to_list()
        return list(results)

    async def first(self) -> Any:
        """First result; a query not yet executed is limited to one row"""
        if self._dirty and hasattr(self, 'limit'):
            self.limit(1)
        results = await self.all()
        if hasattr(results, 'first'):
            return results.first()
        return next(iter(results), None)

    def map_reduce(self, mapper: Optional[Callable] = None, reducer: Optional[Callable] = None, overwrite: bool = False):
        """
        Add a map-reduce stage

        With overwrite the existing stages are dropped first. Without a
        mapper the current stages are returned.
        """
        self._query_state()
        if overwrite:
            self._map_reduce = []
        if mapper is None:
            return self._map_reduce
        self._map_reduce.append({'mapper': mapper, 'reducer': reducer})
        return self

    def format_results(self, formatter: Optional[Callable] = None, mode: str = APPEND):
        """
        Add a formatter called as formatter(results, query)

        mode is APPEND, PREPEND or OVERWRITE (clears existing formatters).
        Without a formatter the current formatters are returned.
        """
        self._query_state()
        if mode == self.OVERWRITE:
            self._formatters = []
        if formatter is None:
            return self._formatters

        if mode == self.PREPEND:
            self._formatters.insert(0, formatter)
        else:
            self._formatters.append(formatter)
        return self

    @abstractmethod
    async def _execute(self) -> Any:
        """Run the query and return the raw results"""

    def _decorate_results(self, result: Any) -> Any:
        self._query_state()
        for stage in self._map_reduce:
            result = MapReduce(result, stage['mapper'], stage['reducer'])

        if self._map_reduce:
            result = ResultSetDecorator(result)

        for formatter in self._formatters:
            result = formatter(result, self)

        if self._formatters and not isinstance(result, ResultSetDecorator):
            result = ResultSetDecorator(result)

        if self._map_reduce or self._formatters:
            logger.debug(
                "Decorated results with %d map-reduce stage(s) and %d formatter(s)",
                len(self._map_reduce), len(self._formatters)
            )
        return result
