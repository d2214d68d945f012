"""
Datasource Package
Query result post-processing (map-reduce, formatters, caching)
"""
from larabake.datasource.query import QueryMixin
from larabake.datasource.map_reduce import MapReduce
from larabake.datasource.result_set import ResultSetDecorator
from larabake.datasource.query_cacher import QueryCacher
from larabake.datasource.repository import Repository
from larabake.datasource.tortoise_query import TortoiseQuery

__all__ = [
    'QueryMixin',
    'MapReduce',
    'ResultSetDecorator',
    'QueryCacher',
    'Repository',
    'TortoiseQuery',
]
