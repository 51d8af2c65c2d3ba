import asyncio

import pytest

from common.db.context import (
    get_current_session,
    in_transaction,
    is_readonly_forced,
    readonly,
    reset_current_session,
    set_current_session,
)


def test_no_session_outside_transaction():
    assert not is_readonly_forced()
    assert get_current_session() is None
    assert not in_transaction(readonly=True)


async def test_concurrent_verifications_see_their_own_session(test_db):
    """Two verify calls in flight must not write through each other's session."""
    seen = {}

    async def verify(name: str, session, delay: float):
        token = set_current_session(session)
        try:
            await asyncio.sleep(delay)
            seen[name] = get_current_session()
        finally:
            reset_current_session(token)

    other_session = object()
    await asyncio.gather(
        verify("first", test_db, 0.01),
        verify("second", other_session, 0.001),
    )

    assert seen == {"first": test_db, "second": other_session}
    assert get_current_session() is None


async def test_readonly_routes_lookups_to_read_session(test_db):
    token = set_current_session(test_db, readonly=True)

    @readonly
    async def get_status():
        return get_current_session(), is_readonly_forced()

    try:
        assert await get_status() == (test_db, True)
    finally:
        reset_current_session(token, readonly=True)
    assert not is_readonly_forced()


async def test_readonly_flag_does_not_leak_between_tasks():
    @readonly
    async def status_lookup():
        await asyncio.sleep(0.01)
        return is_readonly_forced()

    async def verification():
        await asyncio.sleep(0.005)
        return is_readonly_forced()

    assert await asyncio.gather(status_lookup(), verification()) == [True, False]


async def test_readonly_resets_after_error():
    @readonly
    async def broken_lookup(user_id: int):
        raise LookupError(user_id)

    with pytest.raises(LookupError):
        await broken_lookup(7)

    assert not is_readonly_forced()
