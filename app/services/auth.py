import secrets
from datetime import datetime, timezone
from typing import Any

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from app.config import settings

serializer = URLSafeTimedSerializer(settings.secret_key, salt="admin-token")

TOKEN_EXPIRES_IN = f"{settings.token_max_age_days}d"


def validate_password(password: str) -> bool:
    return secrets.compare_digest(password.encode(), settings.admin_password.encode())


def create_admin_token() -> str:
    return serializer.dumps({"admin": True, "created": datetime.now(timezone.utc).isoformat()})


def decode_admin_token(token: str) -> dict[str, Any] | None:
    try:
        data = serializer.loads(token, max_age=settings.token_max_age)
    except (BadSignature, SignatureExpired):
        return None

    if not isinstance(data, dict) or not data.get("admin"):
        return None
    return data
