from uuid import UUID

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from budgetbook.core.config import Settings
from budgetbook.exceptions.http import AuthenticationError
from budgetbook.models.definitions import User
from budgetbook.schemas.user import TokenResponse


class TokenService:
    """
    Issues and verifies signed, time-limited bearer tokens.

    The token only carries the user id; whether that user may still act
    (exists, active) is decided by the AccessGuard on every request.
    """

    _SALT = "access-token"

    def __init__(self, secret_key: str, max_age_seconds: int = 3600):
        self._serializer = URLSafeTimedSerializer(secret_key, salt=self._SALT)
        self._max_age = max_age_seconds

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(settings.secret_key, settings.token_max_age_seconds)

    def issue(self, user: User) -> TokenResponse:
        token = self._serializer.dumps({"sub": str(user.id)})
        return TokenResponse(access_token=token, expires_in=self._max_age)

    def resolve_subject(self, token: str) -> UUID:
        try:
            data = self._serializer.loads(token, max_age=self._max_age)
            return UUID(data["sub"])
        except SignatureExpired as exc:
            raise AuthenticationError("Token has expired.") from exc
        except (BadSignature, KeyError, TypeError, ValueError) as exc:
            raise AuthenticationError("Invalid token.") from exc
