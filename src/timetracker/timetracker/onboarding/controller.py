from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.serialization import to_jsonable
from ..common.web import fail, handle_errors, login_required
from ..container import Container
from ..core.exceptions import ValidationError
from .model import Rect, Viewport
from .orchestrator import OnboardingOrchestrator
from .shortcuts import KeyEvent


def _payload() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def _preferences(data: dict) -> dict:
    prefs = data.get("preferences") or {}
    if not isinstance(prefs, dict):
        raise ValidationError("Preferences must be an object")
    return prefs


# action name -> handler(orchestrator, request payload) -> bool (whether anything changed)
ACTIONS = {
    "start": lambda o, d: o.start(),
    "skip": lambda o, d: o.skip(),
    "wizard-next": lambda o, d: o.wizard_next(),
    "wizard-prev": lambda o, d: o.wizard_prev(),
    "details": lambda o, d: o.update_details(name=d.get("name", ""), department=d.get("department", "")),
    "role": lambda o, d: o.select_role(d.get("role", "")),
    "preferences": lambda o, d: o.set_preferences(**_preferences(d)),
    "complete-setup": lambda o, d: o.complete_setup(),
    "tour-next": lambda o, d: o.tour_next(),
    "tour-prev": lambda o, d: o.tour_prev(),
    "tour-try": lambda o, d: o.try_feature(),
    "tour-skip": lambda o, d: o.skip_tour(),
    "help": lambda o, d: o.show_help_center(),
    "shortcuts": lambda o, d: o.toggle_shortcuts(),
    "complete": lambda o, d: o.complete(),
    "escape": lambda o, d: o.escape(),
    "dismiss-achievement": lambda o, d: o.dismiss_achievement(),
}


def _apply_layout(user_session, data: dict) -> None:
    anchors = data.get("anchors")
    if anchors is not None:
        try:
            rects = {str(k): Rect.from_dict(v) for k, v in dict(anchors).items()}
        except (KeyError, TypeError, ValueError):
            raise ValidationError("Invalid anchor layout")
        user_session.locator.update(rects, replace=not data.get("merge", False))

    viewport = data.get("viewport")
    if viewport is not None:
        try:
            user_session.onboarding.set_viewport(Viewport(float(viewport["width"]), float(viewport["height"])))
        except (KeyError, TypeError, ValueError):
            raise ValidationError("Invalid viewport")


def _view(onboarding: OnboardingOrchestrator, *, changed: bool = True):
    onboarding.tick()
    return jsonify({"success": True, "changed": bool(changed), "onboarding": to_jsonable(onboarding.view())})


def register(app: Flask, container: Container) -> None:
    def current():
        return container.sessions.get_or_open(int(session["user_id"]))

    @app.route("/api/onboarding", endpoint="onboarding_state")
    @login_required
    def onboarding_state():
        user_session = current()
        if user_session is None:
            return fail("Please sign in to continue", 401)
        return _view(user_session.onboarding, changed=False)

    @app.route("/api/onboarding/layout", methods=["POST"], endpoint="onboarding_layout")
    @login_required
    @handle_errors("updating the layout")
    def onboarding_layout():
        user_session = current()
        if user_session is None:
            return fail("Please sign in to continue", 401)
        _apply_layout(user_session, _payload())
        return _view(user_session.onboarding)

    @app.route("/api/onboarding/keys", methods=["POST"], endpoint="onboarding_keys")
    @login_required
    @handle_errors("handling the shortcut")
    def onboarding_keys():
        user_session = current()
        if user_session is None:
            return fail("Please sign in to continue", 401)
        handled = user_session.onboarding.handle_key(KeyEvent.from_dict(_payload()))
        return _view(user_session.onboarding, changed=handled)

    @app.route("/api/onboarding/<action>", methods=["POST"], endpoint="onboarding_action")
    @login_required
    @handle_errors("updating onboarding")
    def onboarding_action(action: str):
        handler = ACTIONS.get(action)
        if handler is None:
            return fail("Unknown onboarding action", 404)
        user_session = current()
        if user_session is None:
            return fail("Please sign in to continue", 401)

        data = _payload()
        # Run due timers before acting so the action sees the current stop.
        user_session.onboarding.tick()
        # Layout may ride along with any action (the tour needs fresh anchors).
        _apply_layout(user_session, data)
        changed = handler(user_session.onboarding, data)
        return _view(user_session.onboarding, changed=changed)
