"""Tests for concurrent store operations on file and in-memory stores."""

import asyncio

import pytest

from rental_store.core.exceptions import DuplicateKeyError
from rental_store.modules.accounts import AccountRole
from rental_store.modules.rental_requests import RequestStatus, submit_request
from tests.factories import make_account, make_listing

OWNER = make_account("u1", "owner@x.com", role=AccountRole.OWNER)
TENANT = make_account("u2", "tenant@x.com")


def split_results(results):
    successes = [r for r in results if not isinstance(r, BaseException)]
    failures = [r for r in results if isinstance(r, BaseException)]
    return successes, failures


class TestConcurrentWrites:

    @pytest.mark.asyncio
    async def test_same_id_added_twice(self, any_store):
        results = await asyncio.gather(
            any_store.accounts.add(make_account("u9", "first@x.com")),
            any_store.accounts.add(make_account("u9", "second@x.com")),
            return_exceptions=True,
        )

        successes, failures = split_results(results)
        assert len(successes) == 1
        assert len(failures) == 1
        assert isinstance(failures[0], DuplicateKeyError)
        assert failures[0].key == "u9"
        stored = await any_store.accounts.get("u9")
        assert stored.email == successes[0].email
        assert await any_store.accounts.count() == 1

    @pytest.mark.asyncio
    async def test_failed_write_keeps_other_collection_writes(self, any_store):
        await any_store.accounts.add(OWNER)
        duplicate = make_account("dup", "owner@x.com")

        for i in range(20):
            results = await asyncio.gather(
                any_store.accounts.add(duplicate.model_copy(update={"id": f"dup{i}"})),
                any_store.listings.add(make_listing(f"h{i}", "u1")),
                return_exceptions=True,
            )
            assert isinstance(results[0], DuplicateKeyError)
            assert results[1].id == f"h{i}"

        for i in range(20):
            assert await any_store.listings.get(f"h{i}") is not None
        assert await any_store.listings.count() == 20
        assert await any_store.accounts.count() == 1

    @pytest.mark.asyncio
    async def test_reads_alongside_writes(self, any_store):
        await any_store.accounts.add(OWNER)

        results = await asyncio.gather(
            *(any_store.listings.add(make_listing(f"h{i}", "u1")) for i in range(10)),
            *(any_store.accounts.get("u1") for _ in range(10)),
        )

        assert all(r is not None for r in results)
        assert len(await any_store.listings.get_by_owner("u1")) == 10


class TestConcurrentRequestSubmission:

    @pytest.mark.asyncio
    async def test_one_pending_request_per_tenant_and_listing(self, any_store):
        await any_store.accounts.add(OWNER)
        await any_store.accounts.add(TENANT)
        await any_store.listings.add(make_listing("h1", "u1"))

        results = await asyncio.gather(
            submit_request(any_store, TENANT, "h1"),
            submit_request(any_store, TENANT, "h1"),
            return_exceptions=True,
        )

        successes, failures = split_results(results)
        assert len(successes) == 1
        assert len(failures) == 1
        assert isinstance(failures[0], DuplicateKeyError)
        stored = await any_store.requests.get_by_house("h1")
        assert [r.id for r in stored] == [successes[0].id]
        assert stored[0].status == RequestStatus.PENDING
