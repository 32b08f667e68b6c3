"""
Context Synchronization Integration Tests

🔄 End-to-end flow:
Repository + MemoryDataProvider + Context. Mutating a context's query
state fetches through the provider and writes data and the server page
window back into the context.
"""

import pytest
import pytest_asyncio

from querysync import ContextStatus, MemoryDataProvider, QueryBuilder, Repository, SortState

from tests.helpers import settle


@pytest_asyncio.fixture
async def users():
    provider = MemoryDataProvider()
    repository = Repository({"name": "users", "data_provider": provider})
    await repository.save_all([
        {"id": index, "name": name, "age": age, "role": role}
        for index, (name, age, role) in enumerate([
            ("Ann", 31, "admin"),
            ("Bob", 25, "user"),
            ("Cid", 25, "user"),
            ("Dee", 40, "admin"),
            ("Eve", 19, "user"),
        ], start=1)
    ])
    return repository


class TestRepositoryQueries:

    @pytest.mark.asyncio
    async def test_find_by(self, users):
        admins = await users.find_by("role", "admin")

        assert [user["name"] for user in admins] == ["Ann", "Dee"]

    @pytest.mark.asyncio
    async def test_find_by_with_operator(self, users):
        young = await users.find_by("age", QueryBuilder.LTE, 25)

        assert {user["name"] for user in young} == {"Bob", "Cid", "Eve"}

    @pytest.mark.asyncio
    async def test_find_all_with_builder(self, users):
        query = users.where("role", "user").sort("age", SortState.DESC).limit(2)

        result = await users.find_all(query)

        assert [user["name"] for user in result["data"]] == ["Bob", "Cid"]
        assert result["meta"] == {"count": 3, "itemsPerPage": 2, "currentPage": 1}

    @pytest.mark.asyncio
    async def test_crud_round(self, users):
        await users.save({"id": 6, "name": "Fay", "age": 50, "role": "user"})
        assert (await users.find(6))["name"] == "Fay"

        assert await users.remove(6) is True
        assert await users.remove_all([1, 2]) is True
        assert (await users.find_all(users.create_query()))["meta"]["count"] == 3


class TestContextSync:

    @pytest.mark.asyncio
    async def test_initialize_loads_first_page(self, users):
        context = users.create_context("table", items_per_page=2)

        context.initialize()
        await settle()

        assert [user["id"] for user in context.data] == [1, 2]
        assert context.pagination.count == 5
        assert context.pagination.page_count == 3
        assert context.status is ContextStatus.IDLE

    @pytest.mark.asyncio
    async def test_state_mutations_refetch(self, users):
        context = users.create_context("table", items_per_page=2)
        changes = []
        context.subscribe("change", lambda ctx: changes.append(ctx.loading))

        context.filters.where("role", "user")
        await settle()
        assert [user["name"] for user in context.data] == ["Bob", "Cid"]

        context.sorting.sort("age")
        await settle()
        assert [user["name"] for user in context.data] == ["Eve", "Bob"]

        context.pagination.next_page()
        await settle()
        assert [user["name"] for user in context.data] == ["Cid"]
        assert context.pagination.to_json() == {"currentPage": 2, "itemsPerPage": 2, "count": 3}

        assert changes == [True, False] * 3

    @pytest.mark.asyncio
    async def test_rapid_mutations_end_on_latest_query(self, users):
        context = users.create_context("table")

        context.filters.where("role", "admin")
        context.filters.where("role", "user")
        context.sorting.sort("name", SortState.DESC)
        await settle(10)

        assert [user["name"] for user in context.data] == ["Eve", "Cid", "Bob"]
        assert context.error is None

    @pytest.mark.asyncio
    async def test_contexts_are_independent(self, users):
        admins = users.create_context("admins")
        everyone = users.create_context("everyone")

        admins.filters.where("role", "admin")
        everyone.initialize()
        await settle()

        assert len(admins.data) == 2
        assert len(everyone.data) == 5

    @pytest.mark.asyncio
    async def test_removed_context_stops_syncing(self, users):
        context = users.create_context("table")
        context.initialize()
        await settle()

        users.remove_context("table")
        context.filters.where("role", "admin")
        await settle()

        assert len(context.data) == 5
