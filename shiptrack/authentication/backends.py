"""
Bearer token authentication for the API.
"""

import logging

from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken
from rest_framework_simplejwt.settings import api_settings

from shiptrack.exceptions import UserNotFound

logger = logging.getLogger(__name__)


class BearerJWTAuthentication(JWTAuthentication):
    """
    JWT authentication that resolves the token subject to a ``User``.

    A token whose signature or expiry does not verify raises ``InvalidToken``
    (reported as a generic 401); a valid token whose user has since been
    deleted raises ``UserNotFound`` (404).
    """

    def get_validated_token(self, raw_token):
        try:
            return super().get_validated_token(raw_token)
        except InvalidToken as exc:
            logger.warning(f"Rejected bearer token: {exc}")
            raise

    def get_user(self, validated_token):
        try:
            user_id = validated_token[api_settings.USER_ID_CLAIM]
        except KeyError:
            raise InvalidToken("Token contained no recognizable user identification")

        try:
            user = self.user_model.objects.get(**{api_settings.USER_ID_FIELD: user_id})
        except self.user_model.DoesNotExist:
            logger.warning(f"Bearer token references missing user {user_id}")
            raise UserNotFound()

        if not user.is_active:
            raise InvalidToken("User is inactive")

        return user
