"""Tests for synthetic user generation."""

import asyncio

import pytest
from faker import Faker

from brandpy.core.exceptions import ValidationError
from brandpy.operations.batch_runner import ItemState
from brandpy.operations.fake_ops import (
    MAX_FAKE_USERS,
    create_fake_users,
    generate_fake_user,
)


class TestGenerateFakeUser:
    """Test generated field values."""

    def test_fields(self):
        fake = Faker("en_US")
        fake.seed_instance(1234)
        fields = generate_fake_user(fake)

        assert "@" in fields.email
        assert fields.email_verified is False
        assert fields.disabled is False
        assert len(fields.password) == 16
        assert " " in fields.display_name
        assert fields.photo_url.startswith("http")
        assert fields.uid is None

    def test_emails_are_unique(self):
        fake = Faker("en_US")
        emails = {generate_fake_user(fake).email for _ in range(50)}
        assert len(emails) == 50

    def test_payload_sends_false_booleans(self):
        payload = generate_fake_user(Faker()).to_payload()
        assert payload["email_verified"] is False
        assert payload["blocked"] is False


class TestCreateFakeUsers:
    """Test batch creation of synthetic users."""

    def test_creates_requested_count(self, directory, translate, capsys):
        result = asyncio.run(create_fake_users(directory, 3, translate, seed=42))

        assert len(result) == 3
        assert result.states == [ItemState.DONE] * 3
        assert len(directory.users) == 6
        assert capsys.readouterr().out.count("Created user") == 3

    def test_failure_is_isolated(self, directory, translate, capsys):
        calls = []
        original = directory.create_user

        async def flaky_create(fields):
            calls.append(fields)
            if len(calls) == 2:
                raise RuntimeError("quota exceeded")
            return await original(fields)

        directory.create_user = flaky_create
        result = asyncio.run(create_fake_users(directory, 3, translate, seed=7))

        assert result.get_summary()["done"] == 2
        assert result.get_summary()["action_failed"] == 1
        assert "Couldn't create fake user" in capsys.readouterr().out

    def test_swedish_locale(self, directory, translate):
        result = asyncio.run(
            create_fake_users(directory, 1, translate, faker_locale="sv_SE", seed=3)
        )
        assert result.states == [ItemState.DONE]

    @pytest.mark.parametrize("count", [0, -1, MAX_FAKE_USERS + 1])
    def test_count_out_of_range(self, directory, translate, count):
        with pytest.raises(ValidationError):
            asyncio.run(create_fake_users(directory, count, translate))
