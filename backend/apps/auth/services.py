from __future__ import annotations

from typing import Any, Dict, Optional

from django.db import IntegrityError, transaction
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings as jwt_settings
from rest_framework_simplejwt.tokens import RefreshToken

from apps.api.principal import Principal
from apps.common import get_logger
from apps.users.dtos import UserDTO, user_to_dto
from apps.users.protocols import UserRepositoryProtocol

logger = get_logger(__name__).bind(component="auth", layer="service")


class RegistrationConflictError(Exception):
    """Raised when the username or email is already taken."""

    def __init__(self, field: str, value: str):
        super().__init__(f"{field.capitalize()} already exists")
        self.field = field
        self.value = value


class InvalidRefreshTokenError(Exception):
    """Raised when a refresh token cannot be blacklisted for the caller."""


class RegistrationService:
    def __init__(self, users: UserRepositoryProtocol):
        self.users = users
        self.logger = logger.bind(service="RegistrationService")

    def _check_uniqueness(self, username: str, email: str) -> None:
        if self.users.username_exists(username):
            self.logger.info(
                "Registration rejected: username already exists", username=username
            )
            raise RegistrationConflictError("username", username)
        if self.users.email_exists(email):
            self.logger.info("Registration rejected: email already exists", email=email)
            raise RegistrationConflictError("email", email)

    def register(self, data: Dict[str, Any]) -> UserDTO:
        """Create the user record on first sign-in."""
        username = data["username"].strip()
        email = data["email"].strip().lower()
        name = (data.get("name") or "").strip()
        self.logger.debug("Received registration request", username=username, email=email)
        self._check_uniqueness(username, email)
        try:
            with transaction.atomic():
                user = self.users.create_user(
                    password=data["password"], username=username, email=email, name=name
                )
        except IntegrityError:
            # Lost a race with a concurrent registration of the same identity.
            if self.users.email_exists(email):
                self.logger.info("Registration conflict on insert", field="email", email=email)
                raise RegistrationConflictError("email", email)
            self.logger.info("Registration conflict on insert", field="username", username=username)
            raise RegistrationConflictError("username", username)
        self.logger.info("User registered", user_id=user.id, username=user.username)
        return user_to_dto(user)


class SessionService:
    def __init__(self, users: UserRepositoryProtocol):
        self.users = users
        self.logger = logger.bind(service="SessionService")

    def current_user(self, principal: Principal) -> Optional[UserDTO]:
        user = self.users.get(id=principal.user_id)
        if user is None:
            self.logger.warning("Session principal has no user", user_id=principal.user_id)
            return None
        return user_to_dto(user)

    def logout(self, refresh_token: str, principal: Principal) -> None:
        try:
            token = RefreshToken(refresh_token)
        except TokenError as exc:
            self.logger.warning(
                "Logout rejected: token error", user_id=principal.user_id, error=str(exc)
            )
            raise InvalidRefreshTokenError(str(exc)) from exc
        owner = token.payload.get(jwt_settings.USER_ID_CLAIM)
        if str(owner) != str(principal.user_id):
            self.logger.warning(
                "Logout rejected: token belongs to another user",
                user_id=principal.user_id,
            )
            raise InvalidRefreshTokenError("Token does not belong to the current session")
        token.blacklist()
        self.logger.info("User logged out", user_id=principal.user_id)
