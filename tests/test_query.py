"""QueryMixin: pre-set results, beforeFind, caching, map-reduce and formatters."""

import pytest

from larabake.cache import ArrayStore
from larabake.datasource import MapReduce, QueryMixin, Repository, ResultSetDecorator

ARTICLES = [
    {"id": 1, "status": "published"},
    {"id": 2, "status": "draft"},
    {"id": 3, "status": "published"},
]


class ListQuery(QueryMixin):
    """Query over an in-memory list."""

    def __init__(self, rows, repository=None):
        self.rows = rows
        self.executions = 0
        if repository is not None:
            self.repository(repository)

    async def _execute(self):
        self.executions += 1
        return list(self.rows)


def count_by_status(article, key, mr):
    mr.emit_intermediate(article["id"], article["status"])


def total_per_status(ids, status, mr):
    mr.emit(len(ids), status)


async def test_undecorated_results_are_returned_as_executed():
    query = ListQuery(ARTICLES)

    assert await query.all() == ARTICLES
    assert await query.to_list() == ARTICLES
    assert query.executions == 1


async def test_set_result_skips_execution():
    query = ListQuery(ARTICLES).set_result(["preset"])

    assert await query.all() == ["preset"]
    assert query.executions == 0


async def test_before_find_listener_can_short_circuit():
    repository = Repository("Articles")
    seen = []

    def listener(event):
        query, options, primary = event.data
        seen.append((event.subject, options, primary))
        query.set_result(["from listener"])

    repository.get_event_manager().on("Model.beforeFind", listener)
    query = ListQuery(ARTICLES, repository).options({"contain": "Authors"})

    assert await query.all() == ["from listener"]
    assert query.executions == 0
    assert seen == [(repository, {"contain": "Authors"}, True)]


async def test_map_reduce_stage():
    query = ListQuery(ARTICLES).map_reduce(count_by_status, total_per_status)
    results = await query.all()

    assert isinstance(results, ResultSetDecorator)
    assert results.to_list() == [2, 1]


async def test_map_reduce_stages_chain():
    def keep_published(article, key, mr):
        if article["status"] == "published":
            mr.emit(article)

    query = ListQuery(ARTICLES)
    query.map_reduce(keep_published).map_reduce(count_by_status, total_per_status)

    assert await query.to_list() == [2]


def test_map_reduce_getter_and_overwrite():
    query = ListQuery(ARTICLES)
    query.map_reduce(count_by_status, total_per_status)

    assert query.map_reduce() == [{"mapper": count_by_status, "reducer": total_per_status}]
    assert query.map_reduce(overwrite=True) == []


async def test_formatters_run_after_map_reduce_in_order():
    query = ListQuery(ARTICLES).map_reduce(count_by_status, total_per_status)
    query.format_results(lambda results, q: [value * 10 for value in results])
    query.format_results(lambda results, q: [value + 1 for value in results])

    assert await query.to_list() == [21, 11]


async def test_prepend_formatter_runs_first():
    query = ListQuery([1, 2])
    query.format_results(lambda results, q: [value * 10 for value in results])
    query.format_results(lambda results, q: [value + 1 for value in results], QueryMixin.PREPEND)

    assert await query.to_list() == [20, 30]


def test_overwrite_formatters():
    query = ListQuery([1])
    query.format_results(lambda results, q: results)
    only = lambda results, q: results  # noqa: E731

    query.format_results(only, QueryMixin.OVERWRITE)

    assert query.format_results() == [only]


async def test_formatter_receives_query():
    query = ListQuery([1])
    received = []
    query.format_results(lambda results, q: received.append(q) or results)

    await query.all()

    assert received == [query]


async def test_cached_results_skip_execution():
    store = ArrayStore()

    first = ListQuery(ARTICLES).cache("articles", store)
    assert await first.to_list() == ARTICLES
    assert await store.get("articles") == ARTICLES

    second = ListQuery(ARTICLES).cache("articles", store)
    assert await second.to_list() == ARTICLES
    assert second.executions == 0


async def test_cache_key_callable_receives_query():
    store = ArrayStore()
    query = ListQuery(ARTICLES).cache(lambda q: f"articles_{len(q.rows)}", store)

    await query.all()

    assert await store.get("articles_3") == ARTICLES


async def test_cache_key_callable_must_return_string():
    query = ListQuery(ARTICLES).cache(lambda q: 3, ArrayStore())
    with pytest.raises(TypeError):
        await query.all()


def test_cache_key_must_be_string_or_callable():
    with pytest.raises(TypeError):
        ListQuery(ARTICLES).cache(42)


async def test_cache_false_disables_caching():
    store = ArrayStore()
    query = ListQuery(ARTICLES).cache("articles", store).cache(False)

    await query.all()

    assert await store.get("articles") is None


async def test_first():
    assert await ListQuery(ARTICLES).first() == ARTICLES[0]
    assert await ListQuery([]).first() is None
    assert await ListQuery(ARTICLES).format_results(lambda r, q: reversed(list(r))).first() == ARTICLES[2]


def test_map_reduce_without_reducer_for_intermediate_values_raises():
    with pytest.raises(ValueError):
        list(MapReduce(ARTICLES, count_by_status))


def test_map_reduce_keyed_emit():
    def by_id(article, key, mr):
        mr.emit(article["status"], article["id"])

    assert dict(MapReduce(ARTICLES, by_id).items()) == {1: "published", 2: "draft", 3: "published"}
