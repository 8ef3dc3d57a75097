from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, request, session

from ..common.web import fail, handle_errors, login_required
from ..container import Container
from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.enums import Role
from ..core.exceptions import ValidationError
from .model import User


def _user_payload(user: User) -> dict:
    return {
        "user_id": user.user_id,
        "name": user.name,
        "email": user.email,
        "role": user.role.value,
        "department": user.department,
        "initials": user.initials,
        "is_first_login": user.is_first_login,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    @handle_errors("signing in")
    def login():
        data = request.get_json(silent=True) or request.form
        email = data.get("email", "")
        password = data.get("password", "")

        user = container.auth_service.authenticate(email, password)

        session.clear()
        session.permanent = bool(data.get("remember_me"))
        app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)
        session["user_id"] = user.user_id

        user_session = container.sessions.open(user)
        user_session.dashboard.show_toast("Login successful!")
        # First sign-in hands over to the onboarding overlay.
        user_session.onboarding.check_first_time_login()

        return jsonify({"success": True, "user": _user_payload(user)})

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        user_id = session.get("user_id")
        if user_id is not None:
            container.sessions.close(int(user_id))
        session.clear()
        return jsonify({"success": True, "message": "Logged out successfully"})

    @app.route("/api/me", endpoint="me")
    @login_required
    def me():
        user = container.user_service.get(int(session["user_id"]))
        if not user:
            session.clear()
            return fail("Please sign in to continue", 401)
        return jsonify({"success": True, "user": _user_payload(user)})

    @app.route("/api/users", methods=["POST"], endpoint="create_user")
    @login_required
    @handle_errors("creating the account")
    def create_user():
        current = container.user_service.get(int(session["user_id"]))
        if not current:
            session.clear()
            return fail("Please sign in to continue", 401)

        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        try:
            role = Role.parse(str(data.get("role") or "Employee"))
        except ValueError:
            raise ValidationError("Unknown role")
        user_id = container.user_service.create_account(
            current_role=current.role,
            name=data.get("name", ""),
            email=data.get("email", ""),
            password=data.get("password", ""),
            role=role,
            department=data.get("department", ""),
        )
        return jsonify({"success": True, "user": _user_payload(container.user_service.get(user_id))}), 201

    # Hosted (Supabase) auth, available when configured.

    def _auth_manager():
        if container.auth_manager is None:
            raise ValidationError("Hosted authentication is not configured")
        return container.auth_manager

    @app.route("/api/auth/signup", methods=["POST"], endpoint="auth_signup")
    @handle_errors("signing up")
    def auth_signup():
        data = request.get_json(silent=True) or {}
        try:
            role = Role.parse(data.get("role") or "Employee").value
        except ValueError:
            raise ValidationError("Unknown role")
        _auth_manager().sign_up(
            data.get("email", ""),
            data.get("password", ""),
            {"name": data.get("name", ""), "department": data.get("department", ""), "role": role},
        )
        return jsonify({"success": True, "message": "Check your email to confirm your account"})

    @app.route("/api/auth/reset-password", methods=["POST"], endpoint="auth_reset_password")
    @handle_errors("requesting a password reset")
    def auth_reset_password():
        data = request.get_json(silent=True) or {}
        _auth_manager().reset_password(data.get("email", ""))
        return jsonify({"success": True, "message": "Password reset email sent"})

    @app.route("/api/auth/github", methods=["POST"], endpoint="auth_github")
    @handle_errors("starting GitHub sign-in")
    def auth_github():
        res = _auth_manager().sign_in_with_github()
        return jsonify({"success": True, "url": getattr(res, "url", None)})
