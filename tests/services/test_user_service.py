"""Unit tests for UserService"""
from datetime import datetime, timedelta, timezone

import pytest
from unittest.mock import AsyncMock
from bson import ObjectId

from app.core.errors import ErrorResponse
from app.core.security import decode_token, hash_password, verify_password
from app.models.user import User
from app.repositories.user import UserRepository
from app.schemas.user import AdminUserUpdate, ProfileUpdate, UserRegister
from app.services.user import UserService


@pytest.fixture
def mock_repository():
    repo = AsyncMock(spec=UserRepository)
    repo.save.side_effect = lambda user: user

    async def insert(user):
        user.id = str(ObjectId())
        return user

    repo.insert.side_effect = insert
    return repo


@pytest.fixture
def service(mock_repository):
    return UserService(mock_repository)


@pytest.fixture
def stored_user():
    return User(
        id="507f1f77bcf86cd799439011",
        name="Alice",
        email="alice@mail.com",
        password=hash_password("correct-horse"),
    )


class TestRegister:

    @pytest.mark.asyncio
    async def test_register_hashes_password_and_issues_token(self, service, mock_repository):
        mock_repository.find_by_email.return_value = None

        payload = await service.register(UserRegister(name="Bob", email="bob@mail.com", password="pw123"))

        stored = mock_repository.insert.call_args.args[0]
        assert stored.password != "pw123"
        assert verify_password("pw123", stored.password)
        assert payload["isAdmin"] is False
        assert decode_token(payload["token"])["id"] == payload["_id"]

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected(self, service, mock_repository, stored_user):
        mock_repository.find_by_email.return_value = stored_user

        with pytest.raises(ErrorResponse) as exc_info:
            await service.register(UserRegister(name="A", email="alice@mail.com", password="x"))

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "User already exists"


class TestLogin:

    @pytest.mark.asyncio
    async def test_success(self, service, mock_repository, stored_user):
        mock_repository.find_by_email.return_value = stored_user

        payload = await service.login("alice@mail.com", "correct-horse")

        assert payload["_id"] == stored_user.id
        assert payload["createdAt"] == stored_user.created_at
        assert "password" not in payload

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_email_fail_identically(self, service, mock_repository, stored_user):
        mock_repository.find_by_email.return_value = stored_user
        with pytest.raises(ErrorResponse) as wrong_password:
            await service.login("alice@mail.com", "nope")

        mock_repository.find_by_email.return_value = None
        with pytest.raises(ErrorResponse) as unknown_email:
            await service.login("ghost@mail.com", "nope")

        assert wrong_password.value.status_code == unknown_email.value.status_code == 401
        assert wrong_password.value.message == unknown_email.value.message == "Invalid email or password"


class TestProfileUpdate:

    @pytest.mark.asyncio
    async def test_partial_update_keeps_password(self, service, mock_repository, stored_user):
        old_hash = stored_user.password
        mock_repository.get_by_id.return_value = stored_user

        payload = await service.update_profile(stored_user.id, ProfileUpdate(name="Alicia"))

        assert payload["name"] == "Alicia"
        assert stored_user.password == old_hash
        assert "token" in payload

    @pytest.mark.asyncio
    async def test_new_password_is_rehashed(self, service, mock_repository, stored_user):
        mock_repository.get_by_id.return_value = stored_user

        await service.update_profile(stored_user.id, ProfileUpdate(password="new-pass"))

        assert verify_password("new-pass", stored_user.password)

    @pytest.mark.asyncio
    async def test_email_taken_by_other_user_rejected(self, service, mock_repository, stored_user):
        mock_repository.get_by_id.return_value = stored_user
        mock_repository.email_taken.return_value = True

        with pytest.raises(ErrorResponse) as exc_info:
            await service.update_profile(stored_user.id, ProfileUpdate(email="bob@mail.com"))

        assert exc_info.value.message == "Email already in use"
        mock_repository.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_admin_can_grant_admin(self, service, mock_repository, stored_user):
        mock_repository.get_by_id.return_value = stored_user

        user = await service.update_user(stored_user.id, AdminUserUpdate(is_admin=True))

        assert user.is_admin is True


class TestAdminAccounts:

    @pytest.mark.asyncio
    async def test_delete_missing_user(self, service, mock_repository):
        mock_repository.get_by_id.return_value = None

        with pytest.raises(ErrorResponse) as exc_info:
            await service.delete_user("507f1f77bcf86cd799439099")

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "User not found"


class TestPasswordReset:

    @pytest.mark.asyncio
    async def test_request_stores_token(self, service, mock_repository, stored_user):
        mock_repository.find_by_email.return_value = stored_user

        token = await service.request_password_reset("alice@mail.com")

        assert stored_user.password_reset_token == token
        assert stored_user.password_reset_expires > datetime.now(timezone.utc)

    @pytest.mark.asyncio
    async def test_request_for_unknown_email(self, service, mock_repository):
        mock_repository.find_by_email.return_value = None

        with pytest.raises(ErrorResponse) as exc_info:
            await service.request_password_reset("ghost@mail.com")

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_reset_sets_password_and_clears_token(self, service, mock_repository, stored_user):
        stored_user.password_reset_token = "tok"
        stored_user.password_reset_expires = datetime.now(timezone.utc) + timedelta(minutes=5)
        mock_repository.find_by_password_reset_token.return_value = stored_user

        await service.reset_password("tok", "brand-new")

        assert verify_password("brand-new", stored_user.password)
        assert stored_user.password_reset_token is None
        assert stored_user.password_reset_expires is None

    @pytest.mark.asyncio
    async def test_expired_token_rejected(self, service, mock_repository, stored_user):
        stored_user.password_reset_token = "tok"
        # naive datetimes come back from MongoDB and are treated as UTC
        stored_user.password_reset_expires = datetime.utcnow() - timedelta(seconds=1)
        mock_repository.find_by_password_reset_token.return_value = stored_user

        with pytest.raises(ErrorResponse) as exc_info:
            await service.reset_password("tok", "brand-new")

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Invalid or expired token"

    @pytest.mark.asyncio
    async def test_unknown_token_rejected(self, service, mock_repository):
        mock_repository.find_by_password_reset_token.return_value = None

        with pytest.raises(ErrorResponse):
            await service.reset_password("nope", "brand-new")


class TestEmailReset:

    @pytest.mark.asyncio
    async def test_reset_email(self, service, mock_repository, stored_user):
        mock_repository.get_by_id.return_value = stored_user
        token = await service.request_email_reset(stored_user.id)
        mock_repository.find_by_email_reset_token.return_value = stored_user
        mock_repository.email_taken.return_value = False

        await service.reset_email(token, "alice@newmail.com")

        assert stored_user.email == "alice@newmail.com"
        assert stored_user.email_reset_token is None

    @pytest.mark.asyncio
    async def test_address_in_use_rejected(self, service, mock_repository, stored_user):
        stored_user.email_reset_token = "tok"
        stored_user.email_reset_expires = datetime.now(timezone.utc) + timedelta(minutes=5)
        mock_repository.find_by_email_reset_token.return_value = stored_user
        mock_repository.email_taken.return_value = True

        with pytest.raises(ErrorResponse) as exc_info:
            await service.reset_email("tok", "bob@mail.com")

        assert exc_info.value.message == "Email already in use"
