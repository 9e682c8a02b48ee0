"""Manager for users and sessions.

Successful sign-in, sign-up (when the server opens a session), grant and
verification calls install the returned session on the shared fetcher and
persist session and user to local storage, if one is configured. Signing
out of the current session clears both.
"""

from typing import Any

from pydantic import ValidationError

from altogic_sdk._internal.fetcher import Fetcher
from altogic_sdk.exceptions import ClientError
from altogic_sdk.local_storage import ClientStorage
from altogic_sdk.managers.base import APIBase, compact, require, to_model
from altogic_sdk.models.auth import Session, User, UserSession
from altogic_sdk.models.response import APIError, APIResponse, ResolveType

AUTH_PATH = "/_api/rest/v1/auth"

SESSION_KEY = "session"
USER_KEY = "user"


class AuthManager(APIBase):
    """Sign users up and in, manage their sessions, passwords and contact info."""

    def __init__(self, fetcher: Fetcher, local_storage: ClientStorage | None = None) -> None:
        super().__init__(fetcher)
        self._storage = local_storage

    # =========================================================================
    # Local session state
    # =========================================================================

    def get_session(self) -> Session | None:
        """The persisted session, or the fetcher's session without storage.

        A stored value that no longer parses is discarded.
        """
        if self._storage is None:
            return self._fetcher.get_session()
        raw = self._storage.get_item(SESSION_KEY)
        if raw is None:
            return None
        try:
            return Session.model_validate_json(raw)
        except ValidationError:
            self._storage.remove_item(SESSION_KEY)
            return None

    def set_session(self, session: Session) -> None:
        """Install ``session`` on the client and persist it."""
        self._fetcher.set_session(session)
        if self._storage is not None:
            self._storage.set_item(SESSION_KEY, session.model_dump_json(by_alias=True, exclude_none=True))

    def get_user(self) -> User | None:
        """The persisted user of the current session, if any."""
        if self._storage is None:
            return None
        raw = self._storage.get_item(USER_KEY)
        if raw is None:
            return None
        try:
            return User.model_validate_json(raw)
        except ValidationError:
            self._storage.remove_item(USER_KEY)
            return None

    def set_user(self, user: User) -> None:
        if self._storage is not None:
            self._storage.set_item(USER_KEY, user.model_dump_json(by_alias=True, exclude_none=True))

    def clear_local_data(self) -> None:
        """Drop the session from the client and from local storage."""
        self._fetcher.clear_session()
        if self._storage is not None:
            self._storage.remove_item(SESSION_KEY)
            self._storage.remove_item(USER_KEY)

    def _install(self, response: APIResponse[Any]) -> APIResponse[UserSession]:
        result = to_model(response, UserSession)
        if result.errors is None and result.data is not None and result.data.session is not None:
            self.set_session(result.data.session)
            if result.data.user is not None:
                self.set_user(result.data.user)
        return result

    async def _ack(self, path: str, **kwargs: Any) -> APIError | None:
        response = await self._fetcher.post(path, resolve_type=ResolveType.NONE, **kwargs)
        return response.errors

    # =========================================================================
    # Sign up and sign in
    # =========================================================================

    async def sign_up_with_email(
        self,
        email: str,
        password: str,
        name: str | None = None,
    ) -> APIResponse[UserSession]:
        """Create a user with email and password.

        If email confirmation is enabled, ``data.session`` is absent until the
        user verifies the address.
        """
        response = await self._fetcher.post(
            f"{AUTH_PATH}/signup-email",
            body=compact({
                "email": require(email, "email"),
                "password": require(password, "password"),
                "name": name,
            }),
        )
        return self._install(response)

    async def sign_up_with_phone(
        self,
        phone: str,
        password: str,
        name: str | None = None,
    ) -> APIResponse[UserSession]:
        """Create a user with phone number and password.

        If phone confirmation is enabled, ``data.session`` is absent until the
        user verifies the code sent by SMS.
        """
        response = await self._fetcher.post(
            f"{AUTH_PATH}/signup-phone",
            body=compact({
                "phone": require(phone, "phone"),
                "password": require(password, "password"),
                "name": name,
            }),
        )
        return self._install(response)

    async def sign_in_with_email(self, email: str, password: str) -> APIResponse[UserSession]:
        response = await self._fetcher.post(
            f"{AUTH_PATH}/signin-email",
            body={"email": require(email, "email"), "password": require(password, "password")},
        )
        return self._install(response)

    async def sign_in_with_phone(self, phone: str, password: str) -> APIResponse[UserSession]:
        response = await self._fetcher.post(
            f"{AUTH_PATH}/signin-phone",
            body={"phone": require(phone, "phone"), "password": require(password, "password")},
        )
        return self._install(response)

    async def sign_in_with_code(
        self,
        code: str,
        *,
        email: str | None = None,
        phone: str | None = None,
    ) -> APIResponse[UserSession]:
        """Sign in with a one-time code sent to an email address or phone."""
        if (email is None) == (phone is None):
            raise ClientError("invalid_value", "exactly one of email or phone is required")
        response = await self._fetcher.post(
            f"{AUTH_PATH}/signin-code",
            body=compact({"code": require(code, "code"), "email": email, "phone": phone}),
        )
        return self._install(response)

    async def get_auth_grant(self, access_token: str) -> APIResponse[UserSession]:
        """Exchange an access token (OAuth redirect, magic link) for a session.

        Also the way to refresh: the new session replaces the current one.
        """
        response = await self._fetcher.get(
            f"{AUTH_PATH}/grant",
            query={"key": require(access_token, "access_token")},
        )
        return self._install(response)

    async def verify_user(self, code: str, phone: str) -> APIResponse[UserSession]:
        """Verify a phone number with the SMS code and open a session."""
        response = await self._fetcher.post(
            f"{AUTH_PATH}/verify-phone",
            query={"code": require(code, "code"), "phone": require(phone, "phone")},
        )
        return self._install(response)

    # =========================================================================
    # Sign out and sessions
    # =========================================================================

    async def sign_out(self, session_token: str | None = None) -> APIError | None:
        """Sign out of ``session_token``, or of the current session.

        Local data is cleared only when the current session was the target.
        """
        current = self._fetcher.get_session()
        token = session_token or (current.token if current is not None else None)
        if token is None:
            raise ClientError("missing_required_value", "no session to sign out of")
        errors = await self._ack(f"{AUTH_PATH}/signout", body={"token": token})
        if errors is None and current is not None and current.token == token:
            self.clear_local_data()
        return errors

    async def sign_out_all(self) -> APIError | None:
        """Sign out of every session of the user, the current one included."""
        errors = await self._ack(f"{AUTH_PATH}/signout-all")
        if errors is None:
            self.clear_local_data()
        return errors

    async def sign_out_all_except_current(self) -> APIError | None:
        return await self._ack(f"{AUTH_PATH}/signout-all-except")

    async def get_all_sessions(self) -> APIResponse[list[Session]]:
        response = await self._fetcher.get(f"{AUTH_PATH}/sessions")
        return to_model(response, Session, many=True)

    async def get_user_from_db(self) -> APIResponse[User]:
        """Fetch the current user from the database and refresh the stored copy."""
        result = to_model(await self._fetcher.get(f"{AUTH_PATH}/user"), User)
        if result.errors is None and result.data is not None:
            self.set_user(result.data)
        return result

    # =========================================================================
    # Passwords, verification and contact details
    # =========================================================================

    async def change_password(self, new_password: str, old_password: str) -> APIError | None:
        return await self._ack(
            f"{AUTH_PATH}/change-pwd",
            body={
                "newPassword": require(new_password, "new_password"),
                "oldPassword": require(old_password, "old_password"),
            },
        )

    async def resend_verification_email(self, email: str) -> APIError | None:
        return await self._ack(f"{AUTH_PATH}/resend", query={"email": require(email, "email")})

    async def resend_verification_code(self, phone: str) -> APIError | None:
        return await self._ack(f"{AUTH_PATH}/resend-code", query={"phone": require(phone, "phone")})

    async def send_magic_link_email(self, email: str) -> APIError | None:
        return await self._ack(f"{AUTH_PATH}/send-magic-link", query={"email": require(email, "email")})

    async def send_magic_code_to_email(self, email: str) -> APIError | None:
        return await self._ack(f"{AUTH_PATH}/send-code", query={"email": require(email, "email")})

    async def send_magic_code_to_phone(self, phone: str) -> APIError | None:
        return await self._ack(f"{AUTH_PATH}/send-code", query={"phone": require(phone, "phone")})

    async def send_reset_pwd_email(self, email: str) -> APIError | None:
        return await self._ack(f"{AUTH_PATH}/send-reset", query={"email": require(email, "email")})

    async def reset_pwd_with_token(self, access_token: str, new_password: str) -> APIError | None:
        return await self._ack(
            f"{AUTH_PATH}/reset-pwd",
            query={"key": require(access_token, "access_token")},
            body={"newPassword": require(new_password, "new_password")},
        )

    async def send_reset_pwd_code(self, phone: str) -> APIError | None:
        return await self._ack(f"{AUTH_PATH}/send-reset-code", query={"phone": require(phone, "phone")})

    async def reset_pwd_with_code(self, phone: str, code: str, new_password: str) -> APIError | None:
        return await self._ack(
            f"{AUTH_PATH}/reset-pwd-code",
            query={"phone": require(phone, "phone"), "code": require(code, "code")},
            body={"newPassword": require(new_password, "new_password")},
        )

    async def change_email(self, current_password: str, new_email: str) -> APIResponse[User]:
        """Change the email address. Data is the updated user."""
        response = await self._fetcher.post(
            f"{AUTH_PATH}/change-email",
            body={
                "currentPassword": require(current_password, "current_password"),
                "newEmail": require(new_email, "new_email"),
            },
        )
        result = to_model(response, User)
        if result.errors is None and result.data is not None:
            self.set_user(result.data)
        return result

    async def change_phone(self, current_password: str, new_phone: str) -> APIResponse[User]:
        """Change the phone number. Data is the updated user."""
        response = await self._fetcher.post(
            f"{AUTH_PATH}/change-phone",
            body={
                "currentPassword": require(current_password, "current_password"),
                "newPhone": require(new_phone, "new_phone"),
            },
        )
        result = to_model(response, User)
        if result.errors is None and result.data is not None:
            self.set_user(result.data)
        return result
