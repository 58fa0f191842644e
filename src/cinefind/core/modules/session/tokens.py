"""Session token minting and validation.

Tokens are HS256 JWTs: three base64url segments (header, payload, signature)
joined by dots. The payload carries the user identity plus ``iat`` and ``exp``
as Unix seconds. Validation never raises; anything that does not decode,
verify, or carry a usable ``exp`` is simply invalid.
"""

from datetime import UTC, datetime

from jose import jwt
from jose.exceptions import JOSEError
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from cinefind.utils import now

ALGORITHM = "HS256"


class TokenClaims(BaseModel):
    user_id: str
    email: str
    display_name: str
    iat: int
    exp: int

    @property
    def issued_at(self) -> datetime:
        return datetime.fromtimestamp(self.iat, UTC)

    @property
    def expires_at(self) -> datetime:
        return datetime.fromtimestamp(self.exp, UTC)


def mint_token(
    secret: str, user_id: str, email: str, display_name: str, ttl_seconds: int, issued_at: datetime | None = None
) -> str:
    """Create a signed token that expires ttl_seconds after issued_at."""
    iat = int((issued_at or now()).timestamp())
    claims = TokenClaims(user_id=user_id, email=email, display_name=display_name, iat=iat, exp=iat + ttl_seconds)
    return jwt.encode(claims.model_dump(), secret, algorithm=ALGORITHM)


def decode_token(token: str, secret: str) -> TokenClaims | None:
    """Verify the signature and return the claims, ignoring expiry."""
    if token.count(".") != 2:
        return None
    try:
        payload = jwt.decode(token, secret, algorithms=[ALGORITHM], options={"verify_exp": False})
        return TokenClaims.model_validate(payload)
    except (JOSEError, PydanticValidationError):
        return None


def is_token_expired(claims: TokenClaims, at: datetime | None = None) -> bool:
    now_millis = int((at or now()).timestamp() * 1000)
    return claims.exp * 1000 <= now_millis


def is_token_valid(token: str, secret: str, at: datetime | None = None) -> bool:
    """Well-formed, correctly signed, and unexpired at the given moment."""
    claims = decode_token(token, secret)
    return claims is not None and not is_token_expired(claims, at)
