"""TortoiseQuery and pagination over an in-memory SQLite database."""

import pytest
from tortoise import Tortoise, fields
from tortoise.models import Model

from larabake.datasource import Repository, TortoiseQuery
from larabake.paging import PaginatedResultSet, paginate


class Article(Model):
    id = fields.IntField(pk=True)
    title = fields.CharField(max_length=100)
    published = fields.BooleanField(default=True)

    class Meta:
        table = "articles"


@pytest.fixture
async def db():
    await Tortoise.init(db_url="sqlite://:memory:", modules={"models": [__name__]})
    await Tortoise.generate_schemas()
    for number in range(1, 26):
        await Article.create(title=f"Article {number}", published=number % 5 != 0)
    yield
    await Tortoise._drop_databases()


async def test_tortoise_query_executes_queryset(db):
    query = TortoiseQuery(Article.filter(published=False)).order_by("id")

    titles = [article.title for article in await query.to_list()]

    assert titles == ["Article 5", "Article 10", "Article 15", "Article 20", "Article 25"]


async def test_tortoise_query_formatters(db):
    query = TortoiseQuery.for_model(Article).order_by("-id").limit(2)
    query.format_results(lambda rows, q: [row.title for row in rows])

    assert await query.to_list() == ["Article 25", "Article 24"]


async def test_first_limits_query(db):
    query = TortoiseQuery.for_model(Article).order_by("id")

    first = await query.first()

    assert first.title == "Article 1"


async def test_builder_calls_reset_fetched_results(db):
    query = TortoiseQuery.for_model(Article).order_by("id")
    assert len(await query.to_list()) == 25

    query.filter(published=False)

    assert len(await query.to_list()) == 5


async def test_before_find_event_from_repository(db):
    repository = Repository("Articles", Article)
    repository.get_event_manager().on("Model.beforeFind", lambda event: event.data[0].set_result([]))

    assert await TortoiseQuery.for_model(Article, repository).to_list() == []


async def test_paginate(db):
    page = await paginate(TortoiseQuery.for_model(Article).order_by("id"), page=2, per_page=10)

    assert isinstance(page, PaginatedResultSet)
    assert page.count() == 10
    assert len(page) == 10
    assert page.total_count() == 25
    assert page.per_page() == 10
    assert page.page_count() == 3
    assert page.current_page() == 2
    assert page.has_prev_page()
    assert page.has_next_page()
    assert [article.title for article in page][0] == "Article 11"


async def test_paginate_last_page(db):
    page = await paginate(TortoiseQuery.for_model(Article).order_by("id"), page=3, per_page=10)

    assert page.count() == 5
    assert not page.has_next_page()


async def test_paginate_beyond_last_page_is_empty(db):
    page = await paginate(TortoiseQuery.for_model(Article), page=9, per_page=10)

    assert page.count() == 0
    assert page.current_page() == 9


async def test_paginate_clamps_arguments(db):
    page = await paginate(TortoiseQuery.for_model(Article), page=0, per_page=1000)

    assert page.current_page() == 1
    assert page.per_page() == 100
    assert page.page_count() == 1


async def test_paginate_applies_formatters(db):
    query = TortoiseQuery.for_model(Article).order_by("id")
    query.format_results(lambda rows, q: [row.id for row in rows])

    page = await paginate(query, page=1, per_page=3)

    assert page.items().to_list() == [1, 2, 3]


def test_paginated_result_set_params():
    page = PaginatedResultSet(["a", "b"], {
        "totalCount": 12,
        "perPage": 2,
        "pageCount": 6,
        "currentPage": 3,
        "hasPrevPage": True,
        "hasNextPage": True,
        "scope": "articles",
    })

    assert list(page) == ["a", "b"]
    assert page.paging_param("scope") == "articles"
    assert page.paging_param("missing") is None
    assert page.paging_params()["totalCount"] == 12

    data = page.to_dict()
    assert data["items"] == ["a", "b"]
    assert data["pagination"]["start_index"] == 5
    assert data["pagination"]["end_index"] == 6
    assert data["pagination"]["has_prev"] is True


def test_paginated_result_set_to_dict_with_converter():
    page = PaginatedResultSet([1, 2], {
        "totalCount": 2,
        "perPage": 10,
        "pageCount": 1,
        "currentPage": 1,
        "hasPrevPage": False,
        "hasNextPage": False,
    })

    data = page.to_dict(item_converter=lambda value: {"value": value}, items_key="rows")

    assert data["rows"] == [{"value": 1}, {"value": 2}]
