from datetime import timedelta

import pytest

from api.admin.admin_service import hash_password, verify_password
from api.sessions.sessions_service import AdminSession, InMemorySessionStore
from helpers.errors import InvalidCredentials
from conftest import ADMIN_EMAIL, ADMIN_PASSWORD


def test_login_returns_token_that_authenticates(registry, admin_store, seeded_admin):
    token, admin = registry.login(admin_store, ADMIN_EMAIL, ADMIN_PASSWORD)

    assert token
    assert admin.id == seeded_admin.id
    assert registry.authenticate(token) is True


def test_session_expires_after_24_hours(registry, admin_store, seeded_admin, clock):
    token, _ = registry.login(admin_store, ADMIN_EMAIL, ADMIN_PASSWORD)

    clock.advance(hours=23, minutes=59)
    assert registry.authenticate(token) is True

    clock.advance(minutes=2)
    assert registry.authenticate(token) is False


def test_expired_session_is_evicted_on_check(registry, admin_store, seeded_admin, clock):
    token, _ = registry.login(admin_store, ADMIN_EMAIL, ADMIN_PASSWORD)
    clock.advance(hours=25)

    assert registry.store.get(token) is not None
    assert registry.authenticate(token) is False
    assert registry.store.get(token) is None


def test_use_does_not_extend_session(registry, admin_store, seeded_admin, clock):
    token, _ = registry.login(admin_store, ADMIN_EMAIL, ADMIN_PASSWORD)
    for _ in range(4):
        clock.advance(hours=6)
        registry.authenticate(token)
    # 24h after login, however often it was used
    assert registry.authenticate(token) is False


def test_wrong_password_and_unknown_email_fail_identically(registry, admin_store, seeded_admin):
    with pytest.raises(InvalidCredentials) as wrong_password:
        registry.login(admin_store, ADMIN_EMAIL, "not-the-password")
    with pytest.raises(InvalidCredentials) as unknown_email:
        registry.login(admin_store, "nobody@example.com", ADMIN_PASSWORD)

    assert wrong_password.value.message == unknown_email.value.message
    assert wrong_password.value.code == unknown_email.value.code
    assert wrong_password.value.status_code == 401


def test_email_match_is_case_sensitive(registry, admin_store, seeded_admin):
    assert admin_store.get_admin_by_email(ADMIN_EMAIL.upper()) is None
    with pytest.raises(InvalidCredentials):
        registry.login(admin_store, ADMIN_EMAIL.upper(), ADMIN_PASSWORD)


def test_each_login_mints_distinct_token(registry, admin_store, seeded_admin):
    first, _ = registry.login(admin_store, ADMIN_EMAIL, ADMIN_PASSWORD)
    second, _ = registry.login(admin_store, ADMIN_EMAIL, ADMIN_PASSWORD)

    assert first != second
    # concurrent sessions for the same admin are both live
    assert registry.authenticate(first)
    assert registry.authenticate(second)


def test_logout_removes_only_that_session(registry, admin_store, seeded_admin):
    first, _ = registry.login(admin_store, ADMIN_EMAIL, ADMIN_PASSWORD)
    second, _ = registry.login(admin_store, ADMIN_EMAIL, ADMIN_PASSWORD)

    registry.logout(first)
    assert registry.authenticate(first) is False
    assert registry.authenticate(second) is True


@pytest.mark.parametrize("token", ["never-issued", "", None])
def test_logout_unknown_token_is_noop(registry, token):
    registry.logout(token)
    registry.logout(token)


def test_authenticate_without_token(registry):
    assert registry.authenticate(None) is False
    assert registry.authenticate("") is False
    assert registry.authenticate("made-up") is False


def test_custom_ttl(admin_store, seeded_admin, clock):
    from api.sessions.sessions_service import SessionRegistry

    short = SessionRegistry(ttl=timedelta(hours=1), clock=clock)
    token, _ = short.login(admin_store, ADMIN_EMAIL, ADMIN_PASSWORD)
    clock.advance(minutes=61)
    assert short.authenticate(token) is False


def test_sweep_expired(clock):
    store = InMemorySessionStore()
    now = clock.now
    store.set("old", AdminSession(admin_id="a", expires_at=now - timedelta(seconds=1)))
    store.set("live", AdminSession(admin_id="a", expires_at=now + timedelta(hours=1)))

    assert store.sweep_expired(now) == 1
    assert store.get("old") is None
    assert store.get("live") is not None
    assert len(store) == 1


def test_passwords_are_stored_hashed(admin_store, seeded_admin):
    assert seeded_admin.password != ADMIN_PASSWORD
    assert verify_password(ADMIN_PASSWORD, seeded_admin.password)
    assert not verify_password("admin1234", seeded_admin.password)


def test_verify_password_rejects_non_hash():
    assert verify_password("admin123", "admin123") is False
    assert verify_password("secret", hash_password("secret")) is True


def test_seed_default_admin_is_idempotent(admin_store):
    from api.admin.admin_service import seed_default_admin

    first = seed_default_admin(admin_store, ADMIN_EMAIL, ADMIN_PASSWORD)
    second = seed_default_admin(admin_store, ADMIN_EMAIL, "different")

    assert first.id == second.id
    assert verify_password(ADMIN_PASSWORD, second.password)
