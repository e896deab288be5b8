# travelcrm/infra/jwt/flask_jwt_token_provider.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, cast

from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from travelcrm.services._shared.errors import InvalidTokenError
from travelcrm.services._shared.ports import TokenProvider

# Claims copied into and out of every token
PRINCIPAL_CLAIMS = ("id", "username", "email", "role")


@dataclass(slots=True)
class JWTTokenProvider(TokenProvider):
    """
    Adapter for Flask-JWT-Extended.

    Tokens are signed with ``JWT_SECRET_KEY`` and expire after
    ``JWT_ACCESS_TOKEN_EXPIRES``; the subject is the staff id as a string.

    .. note::
       Requires an active Flask app context with proper JWT settings.
    """

    def issue(self, claims: dict[str, Any]) -> str:
        extra = {key: claims[key] for key in PRINCIPAL_CLAIMS if key in claims}
        return cast(str, create_access_token(identity=str(claims["id"]), additional_claims=extra))

    def verify(self, token: str) -> dict[str, Any]:
        """
        Decode ``token`` and return the principal claims.

        :raises InvalidTokenError: Malformed, wrongly signed or expired token.
        """
        try:
            payload = cast(dict[str, Any], decode_token(token))
        except (PyJWTError, JWTExtendedException) as exc:
            raise InvalidTokenError() from exc
        return {key: payload.get(key) for key in PRINCIPAL_CLAIMS}
