from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import format_short_date
from ..common.serialization import to_jsonable
from ..common.web import fail, handle_errors, login_required
from ..container import Container
from ..core.enums import Section
from ..core.exceptions import ValidationError
from .service import status_class


def register(app: Flask, container: Container) -> None:
    def current():
        return container.sessions.get_or_open(int(session["user_id"]))

    def respond(user_session, **payload):
        # Let due onboarding timers (achievement auto-dismiss) settle first.
        user_session.onboarding.tick()
        dash = user_session.dashboard
        body = {
            "success": True,
            "clocked_in": dash.clocked_in,
            "clock": dash.clock_display(),
            "today_hours": dash.today_hours(),
            "section": dash.current_section.value,
            "theme": dash.theme.value,
            "search": dash.search_text,
            "achievement": to_jsonable(user_session.onboarding.tracker.notification),
            "toasts": to_jsonable(dash.drain_toasts()),
        }
        body.update(to_jsonable(payload))
        return jsonify(body)

    @app.route("/api/dashboard", endpoint="dashboard")
    @login_required
    def dashboard():
        user_session = current()
        if user_session is None:
            return fail("Please sign in to continue", 401)
        return respond(user_session)

    @app.route("/api/clock/toggle", methods=["POST"], endpoint="toggle_clock")
    @login_required
    @handle_errors("clocking in/out")
    def toggle_clock():
        user_session = current()
        if user_session is None:
            return fail("Please sign in to continue", 401)
        user_session.dashboard.toggle_clock()
        return respond(user_session)

    @app.route("/api/navigate", methods=["POST"], endpoint="navigate")
    @login_required
    @handle_errors("navigating")
    def navigate():
        user_session = current()
        if user_session is None:
            return fail("Please sign in to continue", 401)
        data = request.get_json(silent=True) or {}
        try:
            section = Section(str(data.get("section", "")).lower())
        except ValueError:
            raise ValidationError("Unknown section")
        user_session.dashboard.navigate_to(section)
        return respond(user_session)

    @app.route("/api/theme/toggle", methods=["POST"], endpoint="toggle_theme")
    @login_required
    @handle_errors("switching theme")
    def toggle_theme():
        user_session = current()
        if user_session is None:
            return fail("Please sign in to continue", 401)
        user_session.dashboard.toggle_theme()
        return respond(user_session)

    @app.route("/api/search", methods=["POST"], endpoint="search")
    @login_required
    @handle_errors("searching")
    def search():
        user_session = current()
        if user_session is None:
            return fail("Please sign in to continue", 401)
        data = request.get_json(silent=True) or {}
        found = user_session.dashboard.perform_search(data.get("query", ""))
        return respond(user_session, searched=found)

    @app.route("/api/timesheet", endpoint="timesheet")
    @login_required
    def timesheet():
        rows = [
            dict(to_jsonable(row), status_class=status_class(row.status))
            for row in container.dashboard_service.list_timesheet()
        ]
        return jsonify({"success": True, "rows": rows})

    @app.route("/api/team", endpoint="team")
    @login_required
    def team():
        members = [
            dict(to_jsonable(m), status_class=status_class(m.status))
            for m in container.dashboard_service.list_team()
        ]
        return jsonify({"success": True, "members": members})

    @app.route("/api/leave", methods=["GET", "POST"], endpoint="leave_requests")
    @login_required
    @handle_errors("submitting the leave request")
    def leave_requests():
        user_session = current()
        if user_session is None:
            return fail("Please sign in to continue", 401)

        created = None
        if request.method == "POST":
            data = request.get_json(silent=True) or request.form
            created = container.dashboard_service.submit_leave_request(
                user_session.dashboard,
                leave_type=data.get("leave_type", ""),
                start_date=data.get("start_date", ""),
                end_date=data.get("end_date", ""),
                reason=data.get("reason"),
            )

        requests_ = [
            dict(
                to_jsonable(r),
                status_class=status_class(r.status.value),
                period=f"{format_short_date(r.start_date)} - {format_short_date(r.end_date)}",
            )
            for r in user_session.dashboard.leave_requests
        ]
        return respond(user_session, created=created, requests=requests_)

    @app.route("/api/reports", methods=["POST"], endpoint="generate_report")
    @login_required
    @handle_errors("generating the report")
    def generate_report():
        user_session = current()
        if user_session is None:
            return fail("Please sign in to continue", 401)
        data = request.get_json(silent=True) or request.form
        report = container.dashboard_service.generate_report(
            user_session.dashboard,
            kind=data.get("kind", "attendance"),
            start_date=data.get("start_date", ""),
            end_date=data.get("end_date", ""),
        )
        return respond(user_session, report=report)
