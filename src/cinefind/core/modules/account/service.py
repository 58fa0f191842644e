import bcrypt
import structlog

from cinefind.core.core import Service
from cinefind.core.modules.account.models import Account
from cinefind.core.modules.account.validators import (
    MAX_PASSWORD_BYTES,
    validate_display_name,
    validate_email,
    validate_password,
)
from cinefind.core.storage import Storage
from cinefind.errors import NotFoundError, ValidationError
from cinefind.utils import normalize_email

logger = structlog.get_logger(__name__)

ACCOUNTS_KEY = "accounts"


class AccountService(Service):
    """Manages accounts with an in-memory cache backed by storage."""

    def __init__(self, storage: Storage) -> None:
        super().__init__(storage)
        self._accounts: dict[str, Account] = {}

    async def on_start(self) -> None:
        """Load accounts from storage."""
        data = await self.storage.read(ACCOUNTS_KEY) or {}
        self._accounts = {email: Account.model_validate(item) for email, item in data.items()}
        logger.debug("account_service_started", account_count=len(self._accounts))

    def get_account_by_email(self, email: str) -> Account:
        """Get account by case-insensitive email."""
        account = self._accounts.get(normalize_email(email))
        if account is None:
            raise NotFoundError("Account not found")
        return account

    def has_email(self, email: str) -> bool:
        """Check if an account exists for the case-insensitive email."""
        return normalize_email(email) in self._accounts

    async def create_account(self, email: str, display_name: str, password: str) -> Account:
        """Create account with hashed password."""
        email = normalize_email(email)
        validate_email(email)
        if self.has_email(email):
            raise ValidationError("An account with this email already exists")
        validate_display_name(display_name)
        validate_password(password)

        salt = bcrypt.gensalt(rounds=self.core.config.bcrypt_rounds)
        password_hash = bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")
        account = Account(email=email, display_name=display_name.strip(), password_hash=password_hash)

        accounts = {**self._accounts, email: account}
        await self._save(accounts)
        self._accounts = accounts
        logger.info("account_created", user_id=account.id)
        return account

    def verify_credentials(self, email: str, password: str) -> Account | None:
        """Return the account when the password matches, None otherwise."""
        try:
            account = self.get_account_by_email(email)
        except NotFoundError:
            return None

        password_bytes = password.encode("utf-8")
        # Such a password can never have been stored; bcrypt would raise instead of returning False
        if len(password_bytes) > MAX_PASSWORD_BYTES:
            return None
        if not bcrypt.checkpw(password_bytes, account.password_hash.encode("utf-8")):
            return None
        return account

    async def _save(self, accounts: dict[str, Account]) -> None:
        await self.storage.write(ACCOUNTS_KEY, {email: a.model_dump(mode="json") for email, a in accounts.items()})
