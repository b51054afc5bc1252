"""Tests for TokenStore."""

import pytest
from conftest import START_MILLIS, FakeClock

from authsession.application.services import TokenStore
from authsession.application.services.token_store import (
    KEY_ACCESS_TOKEN,
    KEY_IS_LOGGED_IN,
    KEY_LOGIN_TIME,
)
from authsession.domain.exceptions import InitializationError
from authsession.infrastructure.persistence import InMemoryKeyValueStorage

ONE_HOUR_MILLIS = 3600 * 1000


class TestTokenStoreInit:
    """Test TokenStore construction."""

    def test_missing_storage_raises(self) -> None:
        with pytest.raises(InitializationError):
            TokenStore(None)

    def test_fresh_store_is_logged_out(self, token_store: TokenStore) -> None:
        assert token_store.is_logged_in() is False
        assert token_store.is_expired() is True
        assert token_store.remaining_minutes() == 0
        assert token_store.get_access_token() is None
        assert token_store.get_refresh_token() is None
        assert token_store.get_token_type() == "Bearer"
        assert token_store.get_authorization_header_value() is None
        assert token_store.snapshot() is None


class TestTokenStoreSave:
    """Test saving and reading back token material."""

    def test_save_round_trip(self, token_store: TokenStore) -> None:
        """Saved tokens read back unchanged and build the header."""
        token_store.save("a", "r", "Bearer", 3600)

        assert token_store.get_access_token() == "a"
        assert token_store.get_refresh_token() == "r"
        assert token_store.get_token_type() == "Bearer"
        assert token_store.get_authorization_header_value() == "Bearer a"
        assert token_store.is_logged_in() is True

    def test_save_stamps_login_time_from_clock(
        self, token_store: TokenStore, storage: InMemoryKeyValueStorage
    ) -> None:
        token_store.save("a", "r", "Bearer", 3600)

        assert storage.get(KEY_LOGIN_TIME) == START_MILLIS
        assert storage.get(KEY_IS_LOGGED_IN) is True

    def test_custom_token_type_in_header(self, token_store: TokenStore) -> None:
        token_store.save("a", "r", "MAC", 60)

        assert token_store.get_authorization_header_value() == "MAC a"

    def test_second_save_overwrites_first(self, token_store: TokenStore) -> None:
        token_store.save("first", "r1", "Bearer", 60)
        token_store.save("second", "r2", "Bearer", 120)

        assert token_store.get_access_token() == "second"
        assert token_store.get_refresh_token() == "r2"

    def test_snapshot_reflects_saved_record(
        self, token_store: TokenStore, clock: FakeClock
    ) -> None:
        token_store.save("a", "r", "Bearer", 3600)

        record = token_store.snapshot()

        assert record is not None
        assert record.access_token == "a"
        assert record.expires_in_seconds == 3600
        assert record.issued_at_epoch_millis == START_MILLIS
        assert record.expires_at_epoch_millis == START_MILLIS + ONE_HOUR_MILLIS
        assert record.logged_in is True

    def test_snapshot_repr_hides_tokens(self, token_store: TokenStore) -> None:
        token_store.save("secret-access", "secret-refresh", "Bearer", 3600)

        text = repr(token_store.snapshot())

        assert "secret-access" not in text
        assert "secret-refresh" not in text


class TestTokenStoreExpiry:
    """Test expiry boundaries with a pinned clock."""

    def test_not_expired_right_after_save(
        self, token_store: TokenStore, clock: FakeClock
    ) -> None:
        token_store.save("a", "r", "Bearer", 3600)

        assert token_store.is_expired() is False
        assert token_store.remaining_minutes() == 60

    def test_not_expired_at_exact_boundary(
        self, token_store: TokenStore, clock: FakeClock
    ) -> None:
        """elapsed == lifetime still counts as valid."""
        token_store.save("a", "r", "Bearer", 3600)
        clock.advance(ONE_HOUR_MILLIS)

        assert token_store.is_expired() is False
        assert token_store.remaining_minutes() == 0

    def test_expired_one_millisecond_after_boundary(
        self, token_store: TokenStore, clock: FakeClock
    ) -> None:
        token_store.save("a", "r", "Bearer", 3600)
        clock.advance(ONE_HOUR_MILLIS + 1)

        assert token_store.is_expired() is True
        assert token_store.remaining_minutes() == 0

    def test_remaining_minutes_floors(
        self, token_store: TokenStore, clock: FakeClock
    ) -> None:
        token_store.save("a", "r", "Bearer", 3600)
        clock.advance(30 * 60 * 1000 + 1)

        assert token_store.remaining_minutes() == 29

    def test_zero_lifetime_is_valid_only_at_issue_instant(
        self, token_store: TokenStore, clock: FakeClock
    ) -> None:
        token_store.save("a", "r", "Bearer", 0)

        assert token_store.is_expired() is False
        clock.advance(1)
        assert token_store.is_expired() is True

    def test_expiry_does_not_change_logged_in_flag(
        self, token_store: TokenStore, clock: FakeClock
    ) -> None:
        token_store.save("a", "r", "Bearer", 60)
        clock.advance(61 * 1000)

        assert token_store.is_expired() is True
        assert token_store.is_logged_in() is True


class TestTokenStoreUpdatePartial:
    """Test the refresh write path."""

    def test_update_partial_keeps_refresh_token(
        self, token_store: TokenStore, clock: FakeClock
    ) -> None:
        token_store.save("old", "r", "Bearer", 60)
        clock.advance(120 * 1000)
        assert token_store.is_expired() is True

        token_store.update_partial("new", 3600)

        assert token_store.get_access_token() == "new"
        assert token_store.get_refresh_token() == "r"
        assert token_store.is_expired() is False
        assert token_store.remaining_minutes() == 60


class TestTokenStoreClear:
    """Test logout path."""

    def test_clear_erases_everything(self, token_store: TokenStore) -> None:
        token_store.save("a", "r", "Bearer", 3600)

        token_store.clear()

        assert token_store.is_logged_in() is False
        assert token_store.is_expired() is True
        assert token_store.get_access_token() is None
        assert token_store.get_refresh_token() is None
        assert token_store.get_authorization_header_value() is None
        assert token_store.snapshot() is None

    def test_clear_on_empty_store_is_noop(self, token_store: TokenStore) -> None:
        token_store.clear()
        token_store.clear()

        assert token_store.is_logged_in() is False

    def test_flag_without_token_reads_as_logged_out(
        self, token_store: TokenStore, storage: InMemoryKeyValueStorage
    ) -> None:
        token_store.save("a", "r", "Bearer", 3600)
        storage.set_many({KEY_ACCESS_TOKEN: None})

        assert token_store.is_logged_in() is False
