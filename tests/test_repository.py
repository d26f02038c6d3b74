"""
Tests for the generic Repository: reads, tracking, staging and the unit of work.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.orm.exc import StaleDataError

from accommodation_api.models import Airport, City, Gift, Restaurant
from accommodation_api.repositories import (
    ExpressionSpecification,
    Repository,
    match_all,
    match_id,
    root_cause_message,
)
from accommodation_shared.config.constants import Messages


@pytest.fixture
def restaurant_repo(db_session):
    return Repository(Restaurant, db_session)


def _mock_session(**overrides):
    session = MagicMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    for name, value in overrides.items():
        setattr(session, name, value)
    return session


class TestRootCauseMessage:
    def test_plain_exception(self):
        assert root_cause_message(ValueError("bad value")) == "bad value"

    def test_follows_explicit_cause(self):
        try:
            try:
                raise ConnectionError("socket closed")
            except ConnectionError as inner:
                raise RuntimeError("query failed") from inner
        except RuntimeError as outer:
            assert root_cause_message(outer) == "socket closed"

    def test_empty_message_falls_back_to_class_name(self):
        assert root_cause_message(TimeoutError()) == "TimeoutError"


class TestRepositoryReads:
    @pytest.mark.asyncio
    async def test_find_all_on_empty_table(self, restaurant_repo):
        result = await restaurant_repo.find_all(match_all(Restaurant))

        assert result.succeeded
        assert result.data == []

    @pytest.mark.asyncio
    async def test_first_or_default_missing_is_not_a_failure(self, restaurant_repo):
        result = await restaurant_repo.first_or_default(match_id(Restaurant, "missing"))

        assert result.succeeded
        assert result.data is None
        assert result.messages == []

    @pytest.mark.asyncio
    async def test_find_by_id_with_includes(self, db_session, seed_city):
        db_session.add(Airport(id="a1", name="Cape Town International", code="CPT", city_id=seed_city.id))
        await db_session.commit()
        repo = Repository(Airport, db_session)

        result = await repo.find_by_id("a1", includes=[(Airport.city, City.country)])

        assert result.succeeded
        assert result.data.city.name == "Cape Town"
        assert result.data.city.country.code == "ZA"

    @pytest.mark.asyncio
    async def test_count_and_exists(self, db_session):
        db_session.add_all([Gift(id="g1", name="Wine"), Gift(id="g2", name="Flowers")])
        await db_session.commit()
        repo = Repository(Gift, db_session)

        total = await repo.count()
        wines = await repo.count(ExpressionSpecification(Gift, lambda g: g.name == "Wine"))
        present = await repo.exists("g1")
        absent = await repo.exists("nope")

        assert total.data == 2
        assert wines.data == 1
        assert present.data is True
        assert absent.data is False

    @pytest.mark.asyncio
    async def test_query_error_becomes_failed_result(self):
        session = _mock_session(scalars=AsyncMock(side_effect=RuntimeError("connection lost")))
        repo = Repository(Restaurant, session)

        result = await repo.find_all(match_all(Restaurant))

        assert not result.succeeded
        assert result.messages == ["connection lost"]
        assert result.data is None


class TestTracking:
    @pytest.mark.asyncio
    async def test_untracked_reads_are_detached(self, db_session, restaurant_repo, seed_restaurant):
        result = await restaurant_repo.find_all(match_all(Restaurant))

        assert len(result.data) == 1
        assert result.data[0] not in db_session

    @pytest.mark.asyncio
    async def test_tracked_reads_stay_attached(self, db_session, restaurant_repo, seed_restaurant):
        result = await restaurant_repo.first_or_default(
            match_id(Restaurant, seed_restaurant.id), track_changes=True
        )

        assert result.data in db_session

    @pytest.mark.asyncio
    async def test_untracked_read_detaches_loaded_relations(self, db_session, seed_city):
        db_session.add(Airport(id="a1", name="Cape Town International", code="CPT", city_id=seed_city.id))
        await db_session.commit()
        repo = Repository(Airport, db_session)

        result = await repo.find_by_id("a1", includes=[(Airport.city, City.country)])

        assert result.data not in db_session
        assert result.data.city not in db_session
        assert result.data.city.country not in db_session
        assert result.data.city.country.name == "South Africa"

    @pytest.mark.asyncio
    async def test_tracked_read_keeps_loaded_relations_attached(self, db_session, seed_city):
        db_session.add(Airport(id="a1", name="Cape Town International", code="CPT", city_id=seed_city.id))
        await db_session.commit()
        repo = Repository(Airport, db_session)

        result = await repo.find_by_id("a1", track_changes=True, includes=[(Airport.city,)])

        assert result.data in db_session
        assert result.data.city in db_session

    @pytest.mark.asyncio
    async def test_tracked_mutation_is_written_on_save(self, restaurant_repo, seed_restaurant, session_factory):
        found = await restaurant_repo.first_or_default(
            match_id(Restaurant, seed_restaurant.id), track_changes=True
        )
        found.data.name = "Harbour Grill & Bar"

        assert restaurant_repo.update(found.data).succeeded
        assert (await restaurant_repo.save()).succeeded

        async with session_factory() as other:
            reread = await Repository(Restaurant, other).first_or_default(
                match_id(Restaurant, seed_restaurant.id)
            )
        assert reread.data.name == "Harbour Grill & Bar"

    @pytest.mark.asyncio
    async def test_untracked_read_reflects_database_not_identity_map(
        self, restaurant_repo, seed_restaurant, session_factory
    ):
        async with session_factory() as other:
            row = await other.get(Restaurant, seed_restaurant.id)
            row.name = "Renamed elsewhere"
            await other.commit()

        result = await restaurant_repo.first_or_default(match_id(Restaurant, seed_restaurant.id))

        assert result.data.name == "Renamed elsewhere"

    @pytest.mark.asyncio
    async def test_update_reattaches_detached_entity(self, db_session, restaurant_repo, seed_restaurant):
        detached = (await restaurant_repo.first_or_default(match_id(Restaurant, seed_restaurant.id))).data
        assert detached not in db_session

        result = restaurant_repo.update(detached)

        assert result.succeeded
        assert detached in db_session


class TestStagingAndSave:
    @pytest.mark.asyncio
    async def test_create_is_not_persisted_until_save(self, restaurant_repo, session_factory):
        await restaurant_repo.create(Restaurant(id="r1", name="Cafe"))

        async with session_factory() as other:
            before = await Repository(Restaurant, other).exists("r1")

        await restaurant_repo.save()

        async with session_factory() as other:
            after = await Repository(Restaurant, other).exists("r1")

        assert before.data is False
        assert after.data is True

    @pytest.mark.asyncio
    async def test_create_range(self, restaurant_repo):
        staged = await restaurant_repo.create_range([
            Restaurant(id="r1", name="Cafe"),
            Restaurant(id="r2", name="Bistro"),
        ])
        saved = await restaurant_repo.save()
        count = await restaurant_repo.count()

        assert staged.succeeded
        assert saved.succeeded
        assert count.data == 2

    @pytest.mark.asyncio
    async def test_update_range(self, restaurant_repo):
        await restaurant_repo.create_range([
            Restaurant(id="r1", name="Cafe"),
            Restaurant(id="r2", name="Bistro"),
        ])
        await restaurant_repo.save()
        tracked = (await restaurant_repo.find_all(match_all(Restaurant), track_changes=True)).data
        for restaurant in tracked:
            restaurant.comments = "Closed on Mondays"

        assert restaurant_repo.update_range(tracked).succeeded
        assert (await restaurant_repo.save()).succeeded

        reread = await restaurant_repo.find_all(match_all(Restaurant))
        assert {r.comments for r in reread.data} == {"Closed on Mondays"}

    @pytest.mark.asyncio
    async def test_delete_missing_key_fails(self, restaurant_repo):
        result = await restaurant_repo.delete("missing")

        assert not result.succeeded
        assert result.messages == [
            Messages.KEY_NOT_FOUND.format(entity="Restaurant", entity_id="missing")
        ]

    @pytest.mark.asyncio
    async def test_delete_is_staged_until_save(self, restaurant_repo, seed_restaurant, session_factory):
        result = await restaurant_repo.delete(seed_restaurant.id)

        async with session_factory() as other:
            still_there = await Repository(Restaurant, other).exists(seed_restaurant.id)

        await restaurant_repo.save()
        gone = await restaurant_repo.exists(seed_restaurant.id)

        assert result.succeeded
        assert still_there.data is True
        assert gone.data is False

    @pytest.mark.asyncio
    async def test_remove_range(self, restaurant_repo):
        await restaurant_repo.create_range([
            Restaurant(id="r1", name="Cafe"),
            Restaurant(id="r2", name="Bistro"),
        ])
        await restaurant_repo.save()
        tracked = (await restaurant_repo.find_all(match_all(Restaurant), track_changes=True)).data

        removed = await restaurant_repo.remove_range(tracked)
        await restaurant_repo.save()

        assert removed.succeeded
        assert (await restaurant_repo.count()).data == 0

    @pytest.mark.asyncio
    async def test_failed_save_rolls_back_whole_unit_of_work(self, seed_restaurant, session_factory):
        async with session_factory() as session:
            repo = Repository(Restaurant, session)
            await repo.create(Restaurant(id="r-new", name="Bistro"))
            await repo.create(Restaurant(id=seed_restaurant.id, name="Duplicate"))

            result = await repo.save()

        assert not result.succeeded
        assert len(result.messages) == 1
        assert "UNIQUE constraint failed" in result.messages[0]

        async with session_factory() as other:
            assert (await Repository(Restaurant, other).exists("r-new")).data is False

    @pytest.mark.asyncio
    async def test_session_usable_after_failed_save(self, seed_restaurant, session_factory):
        async with session_factory() as session:
            repo = Repository(Restaurant, session)
            await repo.create(Restaurant(id=seed_restaurant.id, name="Duplicate"))
            assert not (await repo.save()).succeeded

            await repo.create(Restaurant(id="r-after", name="Bistro"))
            retried = await repo.save()

        assert retried.succeeded

    @pytest.mark.asyncio
    async def test_stale_data_maps_to_concurrency_message(self):
        session = _mock_session(commit=AsyncMock(side_effect=StaleDataError("0 rows matched")))
        repo = Repository(Gift, session)

        result = await repo.save()

        assert not result.succeeded
        assert result.messages == [Messages.CONCURRENCY_CONFLICT]
        session.rollback.assert_awaited_once()


class TestCancellation:
    @pytest.mark.asyncio
    async def test_cancelled_commit_propagates_and_rolls_back(self):
        session = _mock_session(commit=AsyncMock(side_effect=asyncio.CancelledError()))
        repo = Repository(Gift, session)

        with pytest.raises(asyncio.CancelledError):
            await repo.save()

        session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_cancelled_query_is_not_a_failed_result(self):
        session = _mock_session(scalars=AsyncMock(side_effect=asyncio.CancelledError()))
        repo = Repository(Gift, session)

        with pytest.raises(asyncio.CancelledError):
            await repo.find_all(match_all(Gift))

    @pytest.mark.asyncio
    async def test_cancelling_the_task_stops_the_operation(self):
        started = asyncio.Event()

        async def slow_commit():
            started.set()
            await asyncio.sleep(10)

        session = _mock_session(commit=AsyncMock(side_effect=slow_commit))
        repo = Repository(Gift, session)

        task = asyncio.create_task(repo.save())
        await started.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        session.rollback.assert_awaited_once()
