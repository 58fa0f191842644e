"""Tests for login, registration, logout and session checks."""

from cinefind.core.core import Core
from cinefind.core.modules.session.models import AUTH_STORAGE_KEY
from cinefind.core.modules.session.service import GENERIC_FAILURE_MESSAGE, INVALID_CREDENTIALS_MESSAGE
from cinefind.errors import StorageError


async def register_alice(core: Core):
    return await core.services.session.register("alice@example.com", "Alice", "secret")


class TestRegister:
    """Tests for account registration."""

    async def test_register_signs_in(self, core):
        """Test that registration creates the account and logs it in."""
        result = await register_alice(core)

        assert result.success
        assert result.session is not None
        assert result.session.user.email == "alice@example.com"
        assert result.session.user.display_name == "Alice"
        assert core.services.session.check_auth()
        assert core.services.account.has_email("alice@example.com")

    async def test_duplicate_email_case_insensitive(self, core):
        """Test that a second registration with a differently cased email fails."""
        await register_alice(core)
        await core.services.session.logout()

        result = await core.services.session.register("ALICE@Example.com", "Impostor", "other-password")

        assert not result.success
        assert result.message == "An account with this email already exists"
        assert result.session is None
        assert not core.services.session.check_auth()

    async def test_duplicate_does_not_change_password(self, core):
        """Test that the existing password still works after a rejected duplicate."""
        await register_alice(core)
        await core.services.session.register("alice@example.com", "Impostor", "other-password")
        await core.services.session.logout()

        assert (await core.services.session.login("alice@example.com", "secret")).success
        await core.services.session.logout()
        assert not (await core.services.session.login("alice@example.com", "other-password")).success

    async def test_invalid_input_is_structured_failure(self, core):
        """Test that validation problems come back as results, not exceptions."""
        result = await core.services.session.register("not-an-email", "Bob", "secret")
        assert not result.success
        assert result.message == "Please enter a valid email address"

        result = await core.services.session.register("bob@example.com", "Bob", "a")
        assert not result.success
        assert result.message == "Password must be at least 2 characters long"

    async def test_overlong_password_is_validation_failure(self, core):
        """Test that a password bcrypt cannot hash is rejected with a validation message."""
        result = await core.services.session.register("bob@example.com", "Bob", "y" * 80)

        assert not result.success
        assert result.message == "Password must be at most 72 bytes long"
        assert not core.services.account.has_email("bob@example.com")


class TestLogin:
    """Tests for login."""

    async def test_login_with_correct_password(self, core):
        """Test that a registered account can sign in and is authenticated right after."""
        await register_alice(core)
        await core.services.session.logout()

        result = await core.services.session.login("alice@example.com", "secret")

        assert result.success
        assert result.session is not None
        assert core.services.session.check_auth()

    async def test_login_email_is_case_insensitive(self, core):
        await register_alice(core)
        await core.services.session.logout()

        result = await core.services.session.login("  Alice@EXAMPLE.com ", "secret")

        assert result.success

    async def test_wrong_password_and_unknown_email_look_the_same(self, core):
        """Test that failures never reveal whether the account exists."""
        await register_alice(core)
        await core.services.session.logout()

        wrong_password = await core.services.session.login("alice@example.com", "wrong")
        unknown_email = await core.services.session.login("nobody@example.com", "secret")

        assert not wrong_password.success
        assert not unknown_email.success
        assert wrong_password.message == unknown_email.message == INVALID_CREDENTIALS_MESSAGE
        assert not core.services.session.check_auth()

    async def test_unexpected_error_becomes_generic_failure(self, core, monkeypatch):
        """Test that storage failures during login are reported, not raised."""
        await register_alice(core)
        await core.services.session.logout()

        async def broken_write(key, value):
            raise StorageError("disk full")

        monkeypatch.setattr(core.storage, "write", broken_write)
        result = await core.services.session.login("alice@example.com", "secret")

        assert not result.success
        assert result.message == GENERIC_FAILURE_MESSAGE
        assert not core.services.session.check_auth()

    async def test_overlong_password_looks_like_unknown_email(self, core):
        """Test that an overlong password fails the same way for known and unknown emails."""
        await register_alice(core)
        await core.services.session.logout()

        known = await core.services.session.login("alice@example.com", "x" * 80)
        unknown = await core.services.session.login("ghost@example.com", "x" * 80)

        assert not known.success
        assert known.message == unknown.message == INVALID_CREDENTIALS_MESSAGE


class TestLogout:
    """Tests for logout."""

    async def test_logout_clears_session(self, core, storage):
        await register_alice(core)

        await core.services.session.logout()

        assert not core.services.session.check_auth()
        assert core.services.session.current_session is None
        assert await storage.read(AUTH_STORAGE_KEY) is None

    async def test_logout_is_idempotent(self, core):
        await core.services.session.logout()
        await core.services.session.logout()

        assert not core.services.session.check_auth()


class TestCheckAuth:
    """Tests for local session validation."""

    async def test_logged_out_by_default(self, core):
        assert not core.services.session.check_auth()

    async def test_expiry_logs_out(self, core, clock, config):
        """Test that an expired token is detected and the session dropped."""
        await register_alice(core)
        assert core.services.session.check_auth()

        clock.advance(seconds=config.token_ttl_seconds - 1)
        assert core.services.session.check_auth()

        clock.advance(seconds=1)
        assert not core.services.session.check_auth()
        assert core.services.session.current_session is None
