"""Tests for batch user operations against an in-memory directory."""

import asyncio

import pytest

from brandpy.core.exceptions import UserNotFoundError
from brandpy.models.user import UserFields
from brandpy.operations.batch_runner import ItemState
from brandpy.operations.user_ops import (
    create_user,
    delete_users,
    disable_users,
    enable_users,
    get_users,
    revoke_users,
    update_user,
)
from brandpy.utils.i18n import Translator


class TestDisableEnable:
    """Test disabling and enabling users."""

    def test_mixed_batch(self, directory, translate, capsys):
        """An unknown opaque ID fails at the action, not at resolution."""
        result = asyncio.run(
            disable_users(directory, ["a@x.com", "bad-id", "b@x.com"], translate)
        )

        assert result.states == [
            ItemState.DONE,
            ItemState.ACTION_FAILED,
            ItemState.DONE,
        ]
        assert directory.users["auth0|a"].disabled is True
        assert directory.users["auth0|b"].disabled is True

        output = capsys.readouterr().out
        assert "Disabled user Alice." in output
        assert "Disabled user Bob." in output
        assert "Couldn't disable user bad-id" in output

    def test_unknown_email_fails_resolution(self, directory, translate, capsys):
        result = asyncio.run(disable_users(directory, ["nobody@x.com"], translate))

        assert result.states == [ItemState.RESOLUTION_FAILED]
        assert "Couldn't fetch UID for ID nobody@x.com" in capsys.readouterr().out
        assert not any(call[0] == "set_disabled" for call in directory.calls)

    def test_disable_twice_is_idempotent(self, directory, translate):
        asyncio.run(disable_users(directory, ["auth0|a"], translate))
        result = asyncio.run(disable_users(directory, ["auth0|a"], translate))

        assert result.states == [ItemState.DONE]
        assert directory.users["auth0|a"].disabled is True

    def test_enable_restores_sign_in(self, directory, translate, capsys):
        asyncio.run(disable_users(directory, ["a@x.com"], translate))
        result = asyncio.run(enable_users(directory, ["a@x.com"], translate))

        assert result.states == [ItemState.DONE]
        assert directory.users["auth0|a"].disabled is False
        assert "Enabled user Alice." in capsys.readouterr().out

    def test_phone_number_resolution(self, directory, translate):
        result = asyncio.run(disable_users(directory, ["+46701234567"], translate))

        assert result.outcomes[0].user_id == "sms|c"
        assert directory.users["sms|c"].disabled is True

    def test_swedish_messages(self, directory, capsys):
        asyncio.run(disable_users(directory, ["a@x.com"], Translator("sv")))
        assert "Inaktiverade användaren Alice." in capsys.readouterr().out


class TestDeleteRevoke:
    """Test deleting users and revoking sessions."""

    def test_delete_users(self, directory, translate, capsys):
        result = asyncio.run(delete_users(directory, ["a@x.com", "auth0|b"], translate))

        assert result.states == [ItemState.DONE, ItemState.DONE]
        assert "auth0|a" not in directory.users
        assert "auth0|b" not in directory.users
        output = capsys.readouterr().out
        assert "Deleted user auth0|a." in output
        assert "Deleted user auth0|b." in output

    def test_delete_missing_user(self, directory, translate, capsys):
        result = asyncio.run(delete_users(directory, ["auth0|gone"], translate))

        assert result.states == [ItemState.ACTION_FAILED]
        assert isinstance(result.outcomes[0].error, UserNotFoundError)
        assert "Couldn't delete user auth0|gone" in capsys.readouterr().out

    def test_revoke_users(self, directory, translate, capsys):
        directory.fail_actions_for.add("auth0|b")
        result = asyncio.run(revoke_users(directory, ["a@x.com", "b@x.com"], translate))

        assert result.states == [ItemState.DONE, ItemState.ACTION_FAILED]
        output = capsys.readouterr().out
        assert "Revoked refresh tokens for user auth0|a." in output
        assert "Couldn't revoke refresh tokens for user auth0|b" in output


class TestGetUsers:
    """Test fetching users."""

    def test_get_users_returns_found_records(self, directory, translate):
        result = asyncio.run(
            get_users(directory, ["a@x.com", "auth0|missing", "sms|c"], translate)
        )

        assert result.states == [
            ItemState.DONE,
            ItemState.ACTION_FAILED,
            ItemState.DONE,
        ]
        assert [user.user_id for user in result.values] == ["auth0|a", "sms|c"]

    def test_get_reports_failures(self, directory, translate, capsys):
        asyncio.run(get_users(directory, ["auth0|missing"], translate))
        assert "Couldn't fetch user for ID auth0|missing" in capsys.readouterr().out

    def test_no_table_when_nothing_found(self, directory, translate, capsys):
        asyncio.run(get_users(directory, ["auth0|missing"], translate))
        output = capsys.readouterr().out
        assert "uid" not in output
        assert "No users found." in output

    def test_nothing_found_in_swedish(self, directory, capsys):
        asyncio.run(get_users(directory, ["auth0|missing"], Translator("sv")))
        assert "Inga användare hittades." in capsys.readouterr().out

    def test_found_users_print_no_empty_notice(self, directory, translate, capsys):
        asyncio.run(get_users(directory, ["a@x.com"], translate))
        assert "No users found." not in capsys.readouterr().out

    def test_bracketed_names_are_printed_verbatim(self, directory, translate, capsys):
        """Display names that look like console markup do not break the table."""
        directory.users["auth0|a"].display_name = "[/b] Eve"

        result = asyncio.run(get_users(directory, ["a@x.com"], translate))

        assert result.states == [ItemState.DONE]
        assert "[/b] Eve" in capsys.readouterr().out


class TestSingleRecordOperations:
    """Test create and update."""

    def test_create_then_get(self, directory, translate):
        created = asyncio.run(
            create_user(
                directory,
                UserFields(email="new@x.com", display_name="New", password="pw"),
            )
        )
        result = asyncio.run(get_users(directory, ["new@x.com"], translate))

        assert result.values == [created]
        assert created.email == "new@x.com"
        assert created.disabled is False

    def test_create_duplicate_raises(self, directory):
        with pytest.raises(Exception, match="already exists"):
            asyncio.run(create_user(directory, UserFields(email="a@x.com")))

    def test_update_keeps_blank_fields(self, directory):
        user = directory.users["auth0|a"]
        updated = asyncio.run(
            update_user(
                directory,
                user,
                UserFields(display_name="Alicia", email="", disabled=False),
            )
        )

        assert updated.display_name == "Alicia"
        assert updated.email == "a@x.com"
        assert updated.disabled is False

    def test_update_missing_user_raises(self, directory):
        from brandpy.models.user import UserRecord

        with pytest.raises(UserNotFoundError):
            asyncio.run(
                update_user(
                    directory, UserRecord(user_id="auth0|gone"), UserFields(email="x@x.com")
                )
            )
