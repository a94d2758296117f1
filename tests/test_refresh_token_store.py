"""Unit tests for RefreshTokenStore on an in-memory database."""
from datetime import datetime, timedelta, timezone
import uuid

import pytest

from models.base_model import as_utc
from models.refresh_token import RefreshToken
from models.refresh_token_store import RefreshTokenStore
from utils.exceptions import PersistenceError, TokenExpiredError, TokenNotFoundError, TokenRevokedError


class FakeClock:
    def __init__(self):
        self.now = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(db, clock):
    return RefreshTokenStore(db, clock=clock)


class TestIssue:
    def test_issue_persists_row(self, store, user, db, clock):
        row = store.issue(user.id)

        assert len(row.token) == 64
        int(row.token, 16)  # hex
        assert row.user_id == user.id
        assert row.revoked_at is None
        assert row.expires_at == clock.now + timedelta(days=60)
        assert db.count(RefreshToken) == 1

    def test_tokens_are_unique_per_issue(self, store, user):
        tokens = {store.issue(user.id).token for _ in range(5)}
        assert len(tokens) == 5

    def test_issue_for_unknown_user_is_fatal(self, store):
        with pytest.raises(PersistenceError) as excinfo:
            store.issue(uuid.uuid4())
        assert excinfo.value.retryable is False

    def test_duplicate_token_value_is_fatal(self, store, user, monkeypatch):
        monkeypatch.setattr("models.refresh_token_store.generate_refresh_token", lambda: "f" * 64)
        store.issue(user.id)

        with pytest.raises(PersistenceError) as excinfo:
            store.issue(user.id)
        assert excinfo.value.retryable is False


class TestResolve:
    def test_resolves_to_owner(self, store, user):
        token = store.issue(user.id).token
        assert store.resolve(token) == uuid.UUID(user.id)

    def test_unknown_token(self, store):
        with pytest.raises(TokenNotFoundError):
            store.resolve("never-issued")

    def test_prefix_of_real_token_is_not_found(self, store, user):
        token = store.issue(user.id).token
        with pytest.raises(TokenNotFoundError):
            store.resolve(token[:-1])

    def test_valid_just_before_expiry(self, store, user, clock):
        token = store.issue(user.id).token
        clock.advance(days=60, seconds=-1)
        assert store.resolve(token) == uuid.UUID(user.id)

    def test_expired_at_expiry(self, store, user, clock):
        token = store.issue(user.id).token
        clock.advance(days=60)
        with pytest.raises(TokenExpiredError):
            store.resolve(token)


class TestRevoke:
    def test_revoked_token_cannot_be_resolved(self, store, user):
        token = store.issue(user.id).token
        store.revoke(token)

        with pytest.raises(TokenRevokedError):
            store.resolve(token)

    def test_revoke_unknown_token(self, store):
        with pytest.raises(TokenNotFoundError):
            store.revoke("never-issued")

    def test_second_revoke_keeps_first_timestamp(self, store, user, clock, db):
        token = store.issue(user.id).token
        store.revoke(token)
        first = db.get_session().query(RefreshToken).filter_by(token=token).one().revoked_at

        clock.advance(minutes=5)
        store.revoke(token)
        again = db.get_session().query(RefreshToken).filter_by(token=token).populate_existing().one().revoked_at

        assert as_utc(again) == as_utc(first)

    def test_new_token_does_not_unrevoke_old_one(self, store, user):
        old = store.issue(user.id).token
        store.revoke(old)
        new = store.issue(user.id).token

        assert store.resolve(new) == uuid.UUID(user.id)
        with pytest.raises(TokenRevokedError):
            store.resolve(old)

    def test_revoke_only_touches_one_token(self, store, user):
        first = store.issue(user.id).token
        second = store.issue(user.id).token
        store.revoke(first)

        assert store.resolve(second) == uuid.UUID(user.id)


class TestPurgeAll:
    def test_purge_removes_everything(self, store, user, db):
        tokens = [store.issue(user.id).token for _ in range(3)]

        assert store.purge_all() == 3
        assert db.count(RefreshToken) == 0
        for token in tokens:
            with pytest.raises(TokenNotFoundError):
                store.resolve(token)
