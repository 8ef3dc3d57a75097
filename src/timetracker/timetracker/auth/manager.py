from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from ..core.exceptions import AuthBackendError

logger = logging.getLogger(__name__)

PROFILES_TABLE = "profiles"


def _first_row(data: Any) -> Optional[Dict[str, Any]]:
    if isinstance(data, list):
        return data[0] if data else None
    return data or None


class AuthManager:
    """Pass-through over the Supabase SDK for sign-in, sessions and profiles.

    Mutating calls log and raise `AuthBackendError` on failure. Lookups
    (profile, session, user) log and return None instead, so callers can
    treat "not signed in" and "backend hiccup" the same way.
    """

    def __init__(self, client: Any, *, site_url: str = ""):
        self._client = client
        self._site_url = site_url.rstrip("/")
        self.current_user: Any = None
        self.current_session: Any = None

    @property
    def callback_url(self) -> str:
        return f"{self._site_url}/auth/callback"

    @property
    def reset_password_url(self) -> str:
        return f"{self._site_url}/auth/reset-password"

    # -- email / password ------------------------------------------------------

    def sign_up(self, email: str, password: str, user_data: Optional[Dict[str, Any]] = None) -> Any:
        user_data = user_data or {}
        try:
            return self._client.auth.sign_up(
                {
                    "email": email,
                    "password": password,
                    "options": {
                        "email_redirect_to": self.callback_url,
                        "data": {
                            "name": user_data.get("name", ""),
                            "department": user_data.get("department", ""),
                            "role": user_data.get("role", "Employee"),
                        },
                    },
                }
            )
        except Exception as exc:
            logger.error("Sign up error: %s", exc)
            raise AuthBackendError(str(exc)) from exc

    def sign_in(self, email: str, password: str) -> Any:
        try:
            res = self._client.auth.sign_in_with_password({"email": email, "password": password})
        except Exception as exc:
            logger.error("Sign in error: %s", exc)
            raise AuthBackendError(str(exc)) from exc

        self.current_user = res.user
        self.current_session = res.session
        return res

    def sign_out(self) -> None:
        try:
            self._client.auth.sign_out()
        except Exception as exc:
            logger.error("Sign out error: %s", exc)
            raise AuthBackendError(str(exc)) from exc

        self.current_user = None
        self.current_session = None

    def reset_password(self, email: str) -> None:
        try:
            self._client.auth.reset_password_for_email(email, {"redirect_to": self.reset_password_url})
        except Exception as exc:
            logger.error("Password reset error: %s", exc)
            raise AuthBackendError(str(exc)) from exc

    def update_password(self, new_password: str) -> None:
        try:
            self._client.auth.update_user({"password": new_password})
        except Exception as exc:
            logger.error("Password update error: %s", exc)
            raise AuthBackendError(str(exc)) from exc

    def sign_in_with_github(self) -> Any:
        try:
            return self._client.auth.sign_in_with_oauth(
                {"provider": "github", "options": {"redirect_to": self.callback_url}}
            )
        except Exception as exc:
            logger.error("GitHub OAuth error: %s", exc)
            raise AuthBackendError(str(exc)) from exc

    # -- profiles ------------------------------------------------------------------

    def get_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        try:
            res = self._client.table(PROFILES_TABLE).select("*").eq("id", user_id).single().execute()
        except Exception as exc:
            logger.error("Get profile error: %s", exc)
            return None
        return _first_row(res.data)

    def update_profile(self, user_id: str, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        try:
            res = self._client.table(PROFILES_TABLE).update(updates).eq("id", user_id).execute()
        except Exception as exc:
            logger.error("Update profile error: %s", exc)
            raise AuthBackendError(str(exc)) from exc
        return _first_row(res.data)

    def create_profile(self, user_id: str, profile_data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        try:
            res = self._client.table(PROFILES_TABLE).insert({"id": user_id, **profile_data}).execute()
        except Exception as exc:
            logger.error("Create profile error: %s", exc)
            raise AuthBackendError(str(exc)) from exc
        return _first_row(res.data)

    def ensure_profile(self, user: Any) -> None:
        """Create a profile row for `user` unless one exists already."""
        if self.get_profile(user.id):
            return

        meta = getattr(user, "user_metadata", None) or {}
        email = user.email or ""
        self.create_profile(
            user.id,
            {
                "email": email,
                "name": meta.get("name") or email.split("@")[0],
                "department": meta.get("department") or "General",
                "role": meta.get("role") or "Employee",
                "status": "active",
                "is_first_login": True,
                "created_at": datetime.now(timezone.utc).isoformat(),
            },
        )

    # -- sessions --------------------------------------------------------------------

    def get_current_session(self) -> Any:
        try:
            session = self._client.auth.get_session()
        except Exception as exc:
            logger.error("Get session error: %s", exc)
            return None

        self.current_session = session
        self.current_user = getattr(session, "user", None) if session else None
        return session

    def get_current_user(self) -> Any:
        try:
            res = self._client.auth.get_user()
        except Exception as exc:
            logger.error("Get user error: %s", exc)
            return None

        self.current_user = res.user if res else None
        return self.current_user

    def setup_auth_listener(self, callback: Callable[[str, Any], None]) -> Any:
        def _on_change(event: Any, session: Any) -> None:
            name = getattr(event, "value", event)
            user = getattr(session, "user", None) if session else None
            logger.info("Auth event: %s %s", name, getattr(user, "email", None))

            self.current_session = session
            self.current_user = user
            if name == "SIGNED_IN" and user is not None:
                self.ensure_profile(user)
            callback(name, session)

        return self._client.auth.on_auth_state_change(_on_change)

    # -- helpers -------------------------------------------------------------------------

    def is_authenticated(self) -> bool:
        return bool(self.current_session is not None and getattr(self.current_session, "user", None))

    def get_user_id(self) -> Optional[str]:
        return getattr(self.current_user, "id", None)

    def get_user_email(self) -> Optional[str]:
        return getattr(self.current_user, "email", None)
