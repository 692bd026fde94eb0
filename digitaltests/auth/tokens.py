"""
Signed, time-limited tokens for sessions, activation, password reset and quiz sharing.

Each purpose has its own secret and salt, so a token minted for one purpose
never verifies for another.
"""
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from digitaltests.config import config


class TokenExpired(Exception):
    pass


class TokenInvalid(Exception):
    pass


def _serializer(secret: str, salt: str) -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(secret, salt=salt)


def _load(serializer: URLSafeTimedSerializer, token: str, max_age: int) -> dict:
    try:
        payload = serializer.loads(token, max_age=max_age)
    except SignatureExpired as exc:
        raise TokenExpired(str(exc)) from exc
    except BadSignature as exc:
        raise TokenInvalid(str(exc)) from exc
    if not isinstance(payload, dict):
        raise TokenInvalid("Unexpected token payload")
    return payload


def access_token_max_age() -> int:
    return config.ACCESS_TOKEN_MAX_AGE_DAYS * 24 * 60 * 60


def create_access_token(user_id: int) -> str:
    return _serializer(config.JWT_USER_ACCESS_KEY, "access").dumps({"user_id": user_id})


def verify_access_token(token: str) -> int:
    payload = _load(_serializer(config.JWT_USER_ACCESS_KEY, "access"), token, access_token_max_age())
    return int(payload["user_id"])


def create_activation_token(user_id: int) -> str:
    return _serializer(config.JWT_USER_ACTIVATION_KEY, "activation").dumps({"user_id": user_id})


def verify_activation_token(token: str) -> int:
    payload = _load(
        _serializer(config.JWT_USER_ACTIVATION_KEY, "activation"),
        token,
        config.ACTIVATION_TOKEN_MINUTES * 60,
    )
    return int(payload["user_id"])


def create_reset_token(email: str) -> str:
    return _serializer(config.JWT_RESET_PASSWORD_KEY, "reset-password").dumps({"email": email})


def verify_reset_token(token: str) -> str:
    payload = _load(
        _serializer(config.JWT_RESET_PASSWORD_KEY, "reset-password"),
        token,
        config.RESET_TOKEN_MINUTES * 60,
    )
    return payload["email"]


def create_share_token(quiz_id: int, shared_by_user_id: int) -> str:
    return _serializer(config.JWT_QUIZ_SECRET_KEY, "share-quiz").dumps(
        {"quiz_id": quiz_id, "shared_by_user_id": shared_by_user_id}
    )


def verify_share_token(token: str) -> dict:
    """Returns ``{"quiz_id", "shared_by_user_id"}``."""
    payload = _load(
        _serializer(config.JWT_QUIZ_SECRET_KEY, "share-quiz"),
        token,
        config.SHARE_TOKEN_DAYS * 24 * 60 * 60,
    )
    if "quiz_id" not in payload:
        raise TokenInvalid("Share token carries no quiz")
    return payload
