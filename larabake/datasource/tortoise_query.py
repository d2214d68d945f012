"""
Tortoise Query
QueryMixin over a Tortoise ORM QuerySet
"""
from typing import Any, List, Optional, Type

from tortoise.models import Model
from tortoise.queryset import QuerySet

from larabake.datasource.query import QueryMixin
from larabake.datasource.repository import Repository


class TortoiseQuery(QueryMixin):
    """
    Executes a Tortoise QuerySet and post-processes its rows

    Builder calls return the query and reset previously fetched results.

    Example:
        query = TortoiseQuery(Article.filter(published=True))
        query.order_by('-created_at').limit(10).cache('latest_articles')
        latest = await query.to_list()

        titles = await TortoiseQuery.for_model(Article).format_results(
            lambda rows, q: [row.title for row in rows]
        ).to_list()
    """

    def __init__(self, queryset: QuerySet, repository: Optional[Repository] = None):
        self.queryset = queryset
        self._dirty = True
        if repository is not None:
            self.repository(repository)

    @classmethod
    def for_model(cls, model: Type[Model], repository: Optional[Repository] = None) -> 'TortoiseQuery':
        return cls(model.all(), repository)

    def _modified(self, queryset: QuerySet) -> 'TortoiseQuery':
        self.queryset = queryset
        self._results = None
        self._dirty = True
        return self

    def filter(self, *args: Any, **kwargs: Any) -> 'TortoiseQuery':
        return self._modified(self.queryset.filter(*args, **kwargs))

    def order_by(self, *orderings: str) -> 'TortoiseQuery':
        return self._modified(self.queryset.order_by(*orderings))

    def limit(self, limit: int) -> 'TortoiseQuery':
        return self._modified(self.queryset.limit(limit))

    def offset(self, offset: int) -> 'TortoiseQuery':
        return self._modified(self.queryset.offset(offset))

    async def count(self) -> int:
        """Row count of the underlying queryset (ignores pre-set results)"""
        return await self.queryset.count()

    def clone(self) -> 'TortoiseQuery':
        """New query over the same queryset, with the same decoration"""
        query = type(self)(self.queryset, self.repository())
        for stage in self.map_reduce():
            query.map_reduce(stage['mapper'], stage['reducer'])
        for formatter in self.format_results():
            query.format_results(formatter)
        return query

    async def _execute(self) -> List[Any]:
        return await self.queryset
