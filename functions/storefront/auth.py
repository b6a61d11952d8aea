"""
Authentication on top of the managed auth provider.

`AuthProvider` is the slice of the provider's auth API the storefront uses.
`SupabaseAuthProvider` talks to the hosted GoTrue endpoints; the in-memory
provider backs tests and local runs. `AuthManager` maps provider users onto
storefront `User`s and announces sign-in/sign-out on the event bus.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
import secrets
from dataclasses import dataclass, field
from typing import Optional, Protocol

import requests

from shared.types import ProviderUser, Role, User
from shared.utils import get_unique_id, utc_now_iso
from storefront.events import AUTH_STATE_CHANGED, Event, EventBus

logger = logging.getLogger(__name__)

MIN_NAME_LENGTH = 2
MIN_PASSWORD_LENGTH = 6


class AuthError(Exception):
    """Raised when the auth provider rejects a request."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@dataclass
class AuthSession:
    user: ProviderUser
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None


@dataclass
class AuthResult:
    success: bool
    error: Optional[str] = None
    user: Optional[User] = None
    access_token: Optional[str] = None


class AuthProvider(Protocol):
    def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        ...

    def sign_up(self, email: str, password: str, metadata: dict) -> AuthSession:
        ...

    def get_user(self, access_token: str) -> Optional[ProviderUser]:
        ...

    def sign_out(self, access_token: str) -> None:
        ...

    def admin_list_users(self) -> list[ProviderUser]:
        ...

    def admin_get_user_by_id(self, user_id: str) -> Optional[ProviderUser]:
        ...

    def admin_create_user(
        self,
        email: str,
        password: str,
        *,
        email_confirm: bool = True,
        user_metadata: dict | None = None,
    ) -> ProviderUser:
        ...

    def admin_update_user_metadata(
        self, user_id: str, user_metadata: dict
    ) -> ProviderUser:
        ...


def _hash_password(password: str, salt: bytes) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, 100_000)


@dataclass
class _StoredUser:
    user: ProviderUser
    salt: bytes
    password_hash: bytes


@dataclass
class InMemoryAuthProvider:
    """Local stand-in for the hosted auth service."""

    users: dict = field(default_factory=dict)
    tokens: dict = field(default_factory=dict)

    def reset(self) -> None:
        self.users.clear()
        self.tokens.clear()

    def _find_by_email(self, email: str) -> Optional[_StoredUser]:
        needle = (email or "").strip().lower()
        for stored in self.users.values():
            if (stored.user.email or "").lower() == needle:
                return stored
        return None

    def _create(self, email: str, password: str, metadata: dict) -> ProviderUser:
        if not email or "@" not in email:
            raise AuthError("Unable to validate email address: invalid format", 400)
        if self._find_by_email(email):
            raise AuthError("User already registered", 422)
        salt = secrets.token_bytes(16)
        user = ProviderUser(
            id=get_unique_id(),
            email=email.strip().lower(),
            user_metadata=dict(metadata),
            created_at=utc_now_iso(),
        )
        self.users[user.id] = _StoredUser(user, salt, _hash_password(password, salt))
        return user

    def _issue_session(self, user: ProviderUser) -> AuthSession:
        token = secrets.token_urlsafe(32)
        self.tokens[token] = user.id
        user.last_sign_in_at = utc_now_iso()
        return AuthSession(user=user, access_token=token)

    def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        stored = self._find_by_email(email)
        if stored is None or not hmac.compare_digest(
            stored.password_hash, _hash_password(password, stored.salt)
        ):
            raise AuthError("Invalid login credentials", 400)
        return self._issue_session(stored.user)

    def sign_up(self, email: str, password: str, metadata: dict) -> AuthSession:
        user = self._create(email, password, metadata)
        return self._issue_session(user)

    def get_user(self, access_token: str) -> Optional[ProviderUser]:
        user_id = self.tokens.get(access_token)
        if user_id is None:
            return None
        stored = self.users.get(user_id)
        return stored.user if stored else None

    def sign_out(self, access_token: str) -> None:
        self.tokens.pop(access_token, None)

    def admin_list_users(self) -> list[ProviderUser]:
        return [stored.user for stored in self.users.values()]

    def admin_get_user_by_id(self, user_id: str) -> Optional[ProviderUser]:
        stored = self.users.get(user_id)
        return stored.user if stored else None

    def admin_create_user(
        self,
        email: str,
        password: str,
        *,
        email_confirm: bool = True,
        user_metadata: dict | None = None,
    ) -> ProviderUser:
        return self._create(email, password, user_metadata or {})

    def admin_update_user_metadata(
        self, user_id: str, user_metadata: dict
    ) -> ProviderUser:
        stored = self.users.get(user_id)
        if stored is None:
            raise AuthError("User not found", 404)
        stored.user.user_metadata.update(user_metadata)
        return stored.user


def _provider_user(payload: dict) -> ProviderUser:
    return ProviderUser(
        id=payload["id"],
        email=payload.get("email"),
        user_metadata=payload.get("user_metadata") or {},
        created_at=payload.get("created_at"),
        last_sign_in_at=payload.get("last_sign_in_at"),
    )


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        for key in ("msg", "error_description", "message", "error"):
            if body.get(key):
                return str(body[key])
    return f"HTTP {response.status_code}"


@dataclass
class SupabaseAuthProvider:
    """Client for the hosted GoTrue REST API."""

    url: str
    anon_key: str
    service_role_key: str = ""
    timeout: float = 10.0

    def __post_init__(self):
        self.base_url = f"{self.url.rstrip('/')}/auth/v1"
        self._session = requests.Session()

    def _headers(self, token: str | None = None, *, admin: bool = False) -> dict:
        key = self.service_role_key if admin else self.anon_key
        return {
            "apikey": key,
            "Authorization": f"Bearer {token or key}",
            "Content-Type": "application/json",
        }

    def _request(
        self,
        method: str,
        path: str,
        *,
        token: str | None = None,
        admin: bool = False,
        **kwargs,
    ) -> requests.Response:
        response = self._session.request(
            method,
            f"{self.base_url}{path}",
            headers=self._headers(token, admin=admin),
            timeout=self.timeout,
            **kwargs,
        )
        if not response.ok:
            raise AuthError(_error_message(response), response.status_code)
        return response

    def _session_from(self, body: dict) -> AuthSession:
        # Sign-up returns a bare user when email confirmation is pending.
        user_payload = body.get("user") or body
        return AuthSession(
            user=_provider_user(user_payload),
            access_token=body.get("access_token"),
            refresh_token=body.get("refresh_token"),
        )

    def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        response = self._request(
            "POST",
            "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        return self._session_from(response.json())

    def sign_up(self, email: str, password: str, metadata: dict) -> AuthSession:
        response = self._request(
            "POST",
            "/signup",
            json={"email": email, "password": password, "data": metadata},
        )
        return self._session_from(response.json())

    def get_user(self, access_token: str) -> Optional[ProviderUser]:
        try:
            response = self._request("GET", "/user", token=access_token)
        except AuthError as exc:
            if exc.status_code in (401, 403, 404):
                return None
            raise
        return _provider_user(response.json())

    def sign_out(self, access_token: str) -> None:
        self._request("POST", "/logout", token=access_token)

    def admin_list_users(self) -> list[ProviderUser]:
        response = self._request(
            "GET", "/admin/users", admin=True, params={"page": 1, "per_page": 1000}
        )
        body = response.json()
        return [_provider_user(item) for item in body.get("users", [])]

    def admin_get_user_by_id(self, user_id: str) -> Optional[ProviderUser]:
        try:
            response = self._request("GET", f"/admin/users/{user_id}", admin=True)
        except AuthError as exc:
            if exc.status_code == 404:
                return None
            raise
        return _provider_user(response.json())

    def admin_create_user(
        self,
        email: str,
        password: str,
        *,
        email_confirm: bool = True,
        user_metadata: dict | None = None,
    ) -> ProviderUser:
        response = self._request(
            "POST",
            "/admin/users",
            admin=True,
            json={
                "email": email,
                "password": password,
                "email_confirm": email_confirm,
                "user_metadata": user_metadata or {},
            },
        )
        return _provider_user(response.json())

    def admin_update_user_metadata(
        self, user_id: str, user_metadata: dict
    ) -> ProviderUser:
        response = self._request(
            "PUT",
            f"/admin/users/{user_id}",
            admin=True,
            json={"user_metadata": user_metadata},
        )
        return _provider_user(response.json())


def role_from_metadata(metadata: dict | None) -> Role:
    try:
        return Role((metadata or {}).get("role") or Role.USER)
    except ValueError:
        return Role.USER


class AuthManager:
    """Storefront-facing auth operations."""

    def __init__(self, provider: AuthProvider, events: Optional[EventBus] = None):
        self.provider = provider
        self.events = events

    @staticmethod
    def to_user(provider_user: ProviderUser) -> User:
        metadata = provider_user.user_metadata or {}
        email = provider_user.email or ""
        name = metadata.get("name") or (email.split("@")[0] if email else "") or "User"
        return User(
            id=provider_user.id,
            name=name,
            email=email,
            mobile=metadata.get("mobile"),
            role=role_from_metadata(metadata),
        )

    def get_user(self, access_token: str | None) -> Optional[User]:
        if not access_token:
            return None
        try:
            provider_user = self.provider.get_user(access_token)
        except (AuthError, requests.RequestException) as exc:
            logger.warning("Could not resolve session: %s", exc)
            return None
        return self.to_user(provider_user) if provider_user else None

    def is_admin(self, access_token: str | None) -> bool:
        user = self.get_user(access_token)
        return bool(user and user.is_admin)

    def sign_in(self, email: str, password: str) -> AuthResult:
        try:
            session = self.provider.sign_in_with_password(email, password)
        except (AuthError, requests.RequestException) as exc:
            return AuthResult(success=False, error=str(exc) or "An error occurred")
        if session.user is None:
            return AuthResult(success=False, error="Login failed")
        user = self.to_user(session.user)
        self._announce(user)
        return AuthResult(success=True, user=user, access_token=session.access_token)

    def sign_up(
        self, name: str, email: str, password: str, mobile: str | None = None
    ) -> AuthResult:
        name = (name or "").strip()
        if len(name) < MIN_NAME_LENGTH:
            return AuthResult(
                success=False, error="Name must be at least 2 characters long"
            )
        if len(password or "") < MIN_PASSWORD_LENGTH:
            return AuthResult(
                success=False, error="Password must be at least 6 characters long"
            )
        try:
            session = self.provider.sign_up(
                email,
                password,
                {"name": name, "mobile": mobile, "role": Role.USER.value},
            )
        except (AuthError, requests.RequestException) as exc:
            return AuthResult(success=False, error=str(exc) or "An error occurred")
        if session.user is None:
            return AuthResult(success=False, error="Signup failed")
        user = User(
            id=session.user.id,
            name=name,
            email=session.user.email or "",
            mobile=mobile,
            role=Role.USER,
        )
        self._announce(user)
        return AuthResult(success=True, user=user, access_token=session.access_token)

    def sign_up_seller(
        self, email: str, password: str, confirm_password: str, business_name: str
    ) -> AuthResult:
        if password != confirm_password:
            return AuthResult(success=False, error="Passwords do not match")
        if len(password or "") < MIN_PASSWORD_LENGTH:
            return AuthResult(
                success=False, error="Password must be at least 6 characters"
            )
        try:
            session = self.provider.sign_up(
                email,
                password,
                {"role": Role.SELLER.value, "business_name": business_name},
            )
        except (AuthError, requests.RequestException) as exc:
            return AuthResult(success=False, error=str(exc) or "An error occurred")
        if session.user is None:
            return AuthResult(success=False, error="Signup failed")
        user = self.to_user(session.user)
        self._announce(user)
        return AuthResult(success=True, user=user, access_token=session.access_token)

    def sign_out(self, access_token: str | None) -> None:
        if access_token:
            try:
                self.provider.sign_out(access_token)
            except (AuthError, requests.RequestException) as exc:
                logger.warning("Provider sign-out failed: %s", exc)
        self._announce(None)

    def _announce(self, user: Optional[User]) -> None:
        if self.events is not None:
            self.events.dispatch_event(Event(AUTH_STATE_CHANGED, detail=user))
