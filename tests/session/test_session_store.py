import time

from chefmaster.enum import LanguageType
from chefmaster.session.schema import SheetState
from chefmaster.session.store import InMemorySessionStore


def test_get_or_create_issues_new_id_and_reuses_existing():
    store = InMemorySessionStore()

    created = store.get_or_create(None)

    assert created.session_id
    assert created.state is SheetState.IDLE
    assert store.get_or_create(created.session_id) is created


def test_expired_idle_sessions_are_collected():
    """TTL이 지난 세션은 새 세션으로 대체되어야 한다."""
    # Given
    store = InMemorySessionStore(ttl_seconds=60)
    old = store.get_or_create("s-1")
    old.updated_at = time.time() - 120

    # When
    fresh = store.get_or_create("s-1")

    # Then
    assert fresh is not old


def test_loading_sessions_are_not_collected():
    store = InMemorySessionStore(ttl_seconds=60)
    session = store.get_or_create("s-1")
    session.begin("Ceviche", LanguageType.ES)
    session.updated_at = time.time() - 120

    assert store.get_or_create("s-1") is session
