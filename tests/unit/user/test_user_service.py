"""Tests for UserService registration and credential checks."""

import pytest

from chatroom.core.modules.user.password import verify_password
from chatroom.errors import AuthenticationError, ConflictError, ValidationError


class TestCreateUser:
    async def test_creates_unverified_user(self, core):
        user = await core.services.user.create_user("a@x.com", "longpassword")
        assert user.id.startswith("user_")
        assert user.email == "a@x.com"
        assert user.verified is False
        assert user.created_at > 0
        assert verify_password(user.password_hash, "longpassword")

        stored = await core.services.user.find_user(user.id)
        assert stored == user

    async def test_duplicate_email_conflicts_regardless_of_password(self, core):
        await core.services.user.create_user("a@x.com", "longpassword")
        with pytest.raises(ConflictError, match="Email already registered"):
            await core.services.user.create_user("a@x.com", "anotherpassword")

    async def test_email_case_is_ignored(self, core):
        await core.services.user.create_user("a@x.com", "longpassword")
        with pytest.raises(ConflictError):
            await core.services.user.create_user("A@X.COM", "longpassword")

    async def test_unique_index_race_reported_as_conflict(self, core, database):
        """Test that a duplicate caught only by the unique index is still a ConflictError."""
        await core.services.user.create_user("a@x.com", "longpassword")

        async def no_user(_email):
            return None

        core.services.user.find_user_by_email = no_user
        with pytest.raises(ConflictError):
            await core.services.user.create_user("a@x.com", "longpassword")
        assert len(database.collections["users"].docs) == 1

    async def test_short_password_rejected(self, core, database):
        with pytest.raises(ValidationError):
            await core.services.user.create_user("a@x.com", "short")
        assert database.get_collection("users").docs == {}


class TestAuthenticate:
    async def test_success(self, core, verified_user_factory):
        user_id = await verified_user_factory(core, "a@x.com", "longpassword")
        user = await core.services.user.authenticate("a@x.com", "longpassword")
        assert user.id == user_id

    async def test_unknown_email_and_wrong_password_look_the_same(self, core, verified_user_factory):
        await verified_user_factory(core, "a@x.com", "longpassword")
        with pytest.raises(AuthenticationError) as unknown:
            await core.services.user.authenticate("b@x.com", "longpassword")
        with pytest.raises(AuthenticationError) as wrong:
            await core.services.user.authenticate("a@x.com", "wrongpassword")
        assert str(unknown.value) == str(wrong.value) == "Invalid email or password"

    async def test_unverified_user_gets_distinct_message(self, core):
        await core.services.user.create_user("a@x.com", "longpassword")
        with pytest.raises(AuthenticationError, match="Please verify your email first"):
            await core.services.user.authenticate("a@x.com", "longpassword")

    async def test_missing_fields(self, core):
        with pytest.raises(ValidationError):
            await core.services.user.authenticate("a@x.com", None)


async def test_get_users_skips_missing(core, verified_user_factory):
    user_id = await verified_user_factory(core)
    users = await core.services.user.get_users([user_id, user_id, "user_missing"])
    assert list(users) == [user_id]


class TestMarkVerified:
    async def test_marks_existing_user(self, core):
        user = await core.services.user.create_user("a@x.com", "longpassword")
        assert await core.services.user.mark_verified(user.id) is True
        assert (await core.services.user.find_user(user.id)).verified is True

    async def test_missing_user(self, core):
        assert await core.services.user.mark_verified("user_gone") is False
