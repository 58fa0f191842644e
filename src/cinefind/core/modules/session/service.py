import asyncio

import structlog

from cinefind.core.core import Service
from cinefind.core.modules.account.models import Account
from cinefind.core.modules.session.models import (
    AUTH_STORAGE_KEY,
    AuthResult,
    PersistedSession,
    Session,
    SessionState,
    SessionUser,
)
from cinefind.core.modules.session.tokens import decode_token, is_token_expired, mint_token
from cinefind.core.storage import Storage
from cinefind.errors import AuthenticationError, StorageError, UserError

logger = structlog.get_logger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"
GENERIC_FAILURE_MESSAGE = "Something went wrong. Please try again."


class SessionService(Service):
    """Holds the current session: LoggedOut until login/registration, back to LoggedOut on logout or expiry."""

    def __init__(self, storage: Storage) -> None:
        super().__init__(storage)
        self._session: Session | None = None

    async def on_start(self) -> None:
        """Rehydrate the persisted session, discarding it unless the token still validates."""
        try:
            data = await self.storage.read(AUTH_STORAGE_KEY)
        except StorageError:
            logger.warning("session_rehydrate_failed", exc_info=True)
            return
        if data is None:
            return

        try:
            persisted = PersistedSession.model_validate(data)
        except ValueError:
            logger.warning("session_envelope_invalid")
            persisted = PersistedSession()

        session = self._session_from_token(persisted.state.token)
        if session is None:
            logger.info("session_discarded_on_rehydrate")
            try:
                await self.storage.delete(AUTH_STORAGE_KEY)
            except StorageError:
                logger.warning("stale_session_delete_failed", exc_info=True)
            return

        self._session = session
        logger.debug("session_rehydrated", user_id=session.user.user_id)

    @property
    def current_session(self) -> Session | None:
        return self._session

    async def login(self, email: str, password: str) -> AuthResult:
        try:
            await self._simulate_round_trip()
            account = self.core.services.account.verify_credentials(email, password)
            if account is None:
                logger.info("login_failed")
                return AuthResult.failure(INVALID_CREDENTIALS_MESSAGE)
            session = await self._start_session(account)
        except Exception:
            logger.exception("login_error")
            return AuthResult.failure(GENERIC_FAILURE_MESSAGE)

        logger.info("login_succeeded", user_id=session.user.user_id)
        return AuthResult.ok(session)

    async def register(self, email: str, display_name: str, password: str) -> AuthResult:
        """Create an account and sign it in."""
        try:
            await self._simulate_round_trip()
            account = await self.core.services.account.create_account(email, display_name, password)
            session = await self._start_session(account)
        except UserError as e:
            logger.info("registration_rejected", reason=str(e))
            return AuthResult.failure(str(e))
        except Exception:
            logger.exception("registration_error")
            return AuthResult.failure(GENERIC_FAILURE_MESSAGE)

        return AuthResult.ok(session, message="Account created")

    async def logout(self) -> None:
        """Clear the session. Safe to call when already logged out."""
        if self._session is not None:
            logger.info("logout", user_id=self._session.user.user_id)
        self._session = None
        await self.storage.delete(AUTH_STORAGE_KEY)

    def check_auth(self) -> bool:
        """Local decision: is the held token well formed, signed by us and unexpired?"""
        if self._session is None:
            return False
        claims = decode_token(self._session.token, self.core.config.token_secret)
        if claims is None or is_token_expired(claims):
            logger.info("session_expired", user_id=self._session.user.user_id)
            self._session = None
            return False
        return True

    def get_current_user(self) -> SessionUser:
        """Get the signed-in user or raise AuthenticationError."""
        if not self.check_auth() or self._session is None:
            raise AuthenticationError
        return self._session.user

    async def _simulate_round_trip(self) -> None:
        delay = self.core.config.auth_delay_seconds
        if delay > 0:
            await asyncio.sleep(delay)

    async def _start_session(self, account: Account) -> Session:
        config = self.core.config
        token = mint_token(config.token_secret, account.id, account.email, account.display_name, config.token_ttl_seconds)
        session = self._session_from_token(token)
        if session is None:
            raise RuntimeError("Freshly minted token does not validate")

        state = SessionState(user=session.user, is_authenticated=True, token=token)
        await self.storage.write(AUTH_STORAGE_KEY, PersistedSession(state=state).model_dump(mode="json"))
        self._session = session
        return session

    def _session_from_token(self, token: str | None) -> Session | None:
        if token is None:
            return None
        claims = decode_token(token, self.core.config.token_secret)
        if claims is None or is_token_expired(claims):
            return None
        user = SessionUser(user_id=claims.user_id, email=claims.email, display_name=claims.display_name)
        return Session(user=user, token=token, issued_at=claims.issued_at, expires_at=claims.expires_at)
