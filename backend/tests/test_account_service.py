"""
BlogNest Backend — Account Service Tests
==========================================

What we test:
    ✅ Registration stores a bcrypt hash and returns a secret-free user
    ✅ Duplicate email is a ConflictError and creates no second user
    ✅ Missing/blank fields are ValidationErrors
    ✅ Login succeeds with the right password, AuthError otherwise
"""

import pytest

from blognest.exceptions import AuthError, ConflictError, ValidationError


class TestRegister:

    @pytest.mark.asyncio
    async def test_register_returns_public_user(self, account_service):
        user = await account_service.register("alice", "a@x.com", "pw123")

        assert user.username == "alice"
        assert user.email == "a@x.com"
        assert user.blogs == []
        assert "password" not in user.model_dump()
        assert "password" not in user.model_dump(by_alias=True)

    @pytest.mark.asyncio
    async def test_register_stores_hash_not_plaintext(self, account_service, credential_store, hasher):
        user = await account_service.register("alice", "a@x.com", "pw123")

        stored = await credential_store.get_by_id(user.id)
        assert stored.password != "pw123"
        assert stored.password.startswith("$2b$04$")
        assert hasher.verify("pw123", stored.password)

    @pytest.mark.asyncio
    async def test_register_duplicate_email_conflicts(self, account_service, credential_store, alice):
        with pytest.raises(ConflictError):
            await account_service.register("alice2", "a@x.com", "other")

        assert await credential_store.count() == 1

    @pytest.mark.asyncio
    async def test_register_duplicate_email_is_case_insensitive(self, account_service, alice):
        with pytest.raises(ConflictError):
            await account_service.register("alice2", "  A@X.com ", "other")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "username,email,password,missing",
        [
            ("", "a@x.com", "pw", ["username"]),
            ("alice", "   ", "pw", ["email"]),
            ("alice", "a@x.com", "", ["password"]),
            ("", "", "", ["username", "email", "password"]),
        ],
    )
    async def test_register_requires_all_fields(
        self, account_service, credential_store, username, email, password, missing
    ):
        with pytest.raises(ValidationError) as exc_info:
            await account_service.register(username, email, password)

        assert exc_info.value.fields == missing
        assert await credential_store.count() == 0

    @pytest.mark.asyncio
    async def test_register_rejects_oversized_password(self, account_service, credential_store):
        with pytest.raises(ValidationError) as exc_info:
            await account_service.register("alice", "a@x.com", "p" * 5000)

        assert exc_info.value.fields == ["password"]
        assert await credential_store.count() == 0


class TestLogin:

    @pytest.mark.asyncio
    async def test_login_with_correct_password(self, account_service, alice):
        user = await account_service.login("a@x.com", "pw123")
        assert user.id == alice.id
        assert user.username == "alice"

    @pytest.mark.asyncio
    async def test_login_normalizes_email(self, account_service, alice):
        user = await account_service.login(" A@X.COM", "pw123")
        assert user.id == alice.id

    @pytest.mark.asyncio
    async def test_login_with_wrong_password(self, account_service, alice):
        with pytest.raises(AuthError):
            await account_service.login("a@x.com", "wrong")

    @pytest.mark.asyncio
    async def test_login_unknown_email_uses_same_error(self, account_service, alice):
        with pytest.raises(AuthError) as unknown:
            await account_service.login("nobody@x.com", "pw123")
        with pytest.raises(AuthError) as wrong:
            await account_service.login("a@x.com", "nope")

        assert unknown.value.message == wrong.value.message

    @pytest.mark.asyncio
    async def test_login_requires_both_fields(self, account_service):
        with pytest.raises(ValidationError) as exc_info:
            await account_service.login("a@x.com", "")
        assert exc_info.value.fields == ["password"]


class TestListAll:

    @pytest.mark.asyncio
    async def test_list_all_returns_every_user(self, account_service, alice):
        await account_service.register("bob", "b@x.com", "pw")

        users = await account_service.list_all()

        assert [u.username for u in users] == ["alice", "bob"]
        assert all("password" not in u.model_dump() for u in users)
