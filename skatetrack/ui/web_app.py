"""
Web application module for the SkateTrack dashboard.

This module contains the Flask server that provides the JSON API used by the
dashboard pages: sessions, analytics, reports, inventory, branding and the
live display.
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from flask import Flask, Response, jsonify, request
from werkzeug.exceptions import HTTPException

from ..models import Session, SessionBook
from ..models.seed import seed_daily_visitors, seed_monthly_visitors, seed_revenue_records
from ..services import (
    BrandingValidationError, NoValidParticipants, ServiceFactory,
    SessionAlreadyCompleted, SessionNotFound, SessionService, render_export, export_filename
)
from ..services.export_service import CSV_MIMETYPE, XLSX_MIMETYPE
from ..services.inventory_service import EXPORT_HEADERS as INVENTORY_HEADERS
from ..services.persistence_service import KeyValueStore
from ..services.session_service import EXPORT_HEADERS as SESSION_HEADERS
from ..utils import (
    APP_TITLE, CLOCK_INTERVAL_SECONDS, DEFAULT_SESSION_TYPE, SESSION_TYPE_DURATIONS,
    SHOE_SIZES, InvalidDurationFormat, InvalidTimeFormat, now_dt
)

logger = logging.getLogger(__name__)

# Request keys accepted in camelCase from the browser
_PATCH_KEYS = {
    "isGroup": "is_group",
    "startTime": "start_time",
    "endTime": "end_time",
    "createdBy": "created_by",
}


class WebAppState:
    """
    State holder for one running dashboard.

    Built once per app from explicit dependencies: the branding store and,
    optionally, an existing session book.
    """

    def __init__(
        self,
        branding_store: Optional[KeyValueStore] = None,
        session_book: Optional[SessionBook] = None,
    ):
        self.service_factory = ServiceFactory(branding_store)
        self.last_sweep: List[Session] = []

        services = self.service_factory.create_complete_service_suite(
            session_book, sweep_listener=self._on_sweep
        )
        self.session_service = services["sessions"]
        self.report_service = services["reports"]
        self.inventory_service = services["inventory"]
        self.branding_service = services["branding"]
        self.display_service = services["display"]
        self.timer_service = services["timers"]

        self.current_time: datetime = now_dt()
        self.timer_service.register("clock", CLOCK_INTERVAL_SECONDS, self._on_clock)

        self.revenue_records = seed_revenue_records()
        self.daily_visitors = seed_daily_visitors()
        self.monthly_visitors = seed_monthly_visitors()

    def _on_sweep(self, completed: List[Session]) -> None:
        self.last_sweep = completed

    def _on_clock(self, now: datetime) -> None:
        self.current_time = now


def _error(message: str, status: int, **extra: Any):
    body: Dict[str, Any] = {"success": False, "error": message}
    body.update(extra)
    return jsonify(body), status


def _download(blob: bytes, filename: str, export_format: str) -> Response:
    mimetype = CSV_MIMETYPE if export_format == "csv" else XLSX_MIMETYPE
    return Response(
        blob,
        mimetype=mimetype,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


def _session_json(session: Session, now: datetime) -> dict:
    data = session.to_json()
    data["displayStatus"] = SessionService.display_status(session, now)
    return data


def create_app(
    branding_store: Optional[KeyValueStore] = None,
    session_book: Optional[SessionBook] = None,
) -> Flask:
    """
    Create and configure the Flask application with API endpoints.

    Args:
        branding_store: Where branding preferences are read and written
        session_book: Starting sessions (defaults to the seed sessions)

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    state = WebAppState(branding_store, session_book)
    app.extensions["skatetrack"] = state

    def _request_json() -> dict:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}

    def _export_format() -> str:
        export_format = (request.args.get("format") or "csv").lower()
        if export_format not in ("csv", "xlsx"):
            raise ValueError(f"Unsupported export format: {export_format}")
        return export_format

    def _analytics_range():
        range_kind = request.args.get("range", "week")
        custom_range = None
        if range_kind == "custom":
            custom_range = {"from": request.args.get("from"), "to": request.args.get("to")}
        return range_kind, custom_range

    @app.route("/api/health", methods=["GET"])
    def health():
        return jsonify({"success": True, "app": state.branding_service.settings.brand_name or APP_TITLE})

    # ==================== Sessions ==================== #

    @app.route("/api/sessions", methods=["GET"])
    def list_sessions():
        """List sessions, optionally filtered by the search box."""
        now = now_dt()
        sessions = state.session_service.search_sessions(request.args.get("q", ""))
        return jsonify({
            "success": True,
            "sessions": [_session_json(s, now) for s in sessions],
            "canUndo": state.session_service.can_undo(),
            "sessionTypes": SESSION_TYPE_DURATIONS,
            "shoeSizes": SHOE_SIZES,
        })

    @app.route("/api/sessions", methods=["POST"])
    def create_session():
        data = _request_json()
        try:
            session = state.session_service.create_session(
                name=data.get("name", ""),
                participants=data.get("participants", []),
                session_type=data.get("sessionType", DEFAULT_SESSION_TYPE),
                notes=data.get("notes", ""),
                is_group=data.get("isGroup", False),
            )
        except NoValidParticipants as e:
            return _error(str(e), 400)
        except ValueError as e:
            logger.warning("Rejected new session: %s", e)
            return _error(str(e), 400)
        return jsonify({"success": True, "session": _session_json(session, now_dt())}), 201

    @app.route("/api/sessions/<int:session_id>", methods=["PUT"])
    def edit_session(session_id: int):
        data = _request_json()
        patch = {_PATCH_KEYS.get(key, key): value for key, value in data.items()}
        try:
            session = state.session_service.edit_session(session_id, patch)
        except SessionNotFound as e:
            return _error(str(e), 404)
        except (NoValidParticipants, InvalidDurationFormat, InvalidTimeFormat) as e:
            return _error(str(e), 400)
        except ValueError as e:
            logger.warning("Rejected edit of session %s: %s", session_id, e)
            return _error(str(e), 400)
        return jsonify({
            "success": True,
            "message": "The session details have been updated successfully.",
            "session": _session_json(session, now_dt()),
        })

    @app.route("/api/sessions/<int:session_id>/end", methods=["POST"])
    def end_session(session_id: int):
        try:
            session = state.session_service.end_session(session_id)
        except SessionNotFound as e:
            return _error(str(e), 404)
        except SessionAlreadyCompleted as e:
            return _error(str(e), 400)
        return jsonify({
            "success": True,
            "message": f"{session.name}'s session has been marked as completed.",
            "session": _session_json(session, now_dt()),
            "canUndo": True,
        })

    @app.route("/api/sessions/undo", methods=["POST"])
    def undo_end_session():
        session_id = _request_json().get("id")
        if session_id is not None:
            try:
                session_id = int(session_id)
            except (TypeError, ValueError):
                return _error(f"Invalid session id: {session_id!r}", 400)
        restored = state.session_service.undo_last_end(session_id)
        if restored is None:
            return jsonify({"success": False, "message": "Nothing to undo"}), 400
        return jsonify({
            "success": True,
            "message": f"The session has been restored to {restored.status.value} status.",
            "session": _session_json(restored, now_dt()),
        })

    @app.route("/api/sessions/sweep", methods=["POST"])
    def sweep_sessions():
        completed = state.session_service.sweep_expired(now_dt())
        return jsonify({
            "success": True,
            "completed": [s.id for s in completed],
            "message": (
                f"{len(completed)} session(s) have been automatically marked as completed."
                if completed else ""
            ),
        })

    @app.route("/api/sessions/export", methods=["GET"])
    def export_sessions():
        try:
            export_format = _export_format()
        except ValueError as e:
            return _error(str(e), 400)
        sessions = state.session_service.search_sessions(request.args.get("q", ""))
        rows = [SESSION_HEADERS, *state.session_service.export_rows(sessions)]
        blob = render_export(export_format, {"Sessions": rows})
        return _download(blob, export_filename("sessions", export_format), export_format)

    # ==================== Analytics ==================== #

    @app.route("/api/analytics", methods=["GET"])
    def get_analytics():
        range_kind, custom_range = _analytics_range()
        reports = state.report_service
        try:
            records = reports.filter_by_range(state.revenue_records, range_kind, custom_range)
            days = reports.date_range_days(range_kind, custom_range)
        except ValueError as e:
            return _error(str(e), 400)
        return jsonify({
            "success": True,
            "range": range_kind,
            "days": days,
            "summary": [s.to_json() for s in reports.combined_daily_summary(records)],
            "totals": reports.period_totals(records).to_json(),
            "sessions": [
                {
                    "id": r.id, "date": r.date, "name": r.name, "type": r.type,
                    "participants": r.participants, "startTime": r.start_time,
                    "endTime": r.end_time, "duration": r.duration,
                    "shoeSizes": r.shoe_sizes, "revenue": r.revenue,
                }
                for r in records
            ],
        })

    @app.route("/api/analytics/export", methods=["GET"])
    def export_analytics():
        range_kind, custom_range = _analytics_range()
        reports = state.report_service
        try:
            export_format = _export_format()
            records = reports.filter_by_range(state.revenue_records, range_kind, custom_range)
        except ValueError as e:
            return _error(str(e), 400)
        blob = render_export(
            export_format,
            reports.analytics_workbook_sheets(records),
            text_rows=reports.analytics_export_rows(range_kind, records),
        )
        filename = export_filename("analytics_report", export_format, range_kind)
        return _download(blob, filename, export_format)

    # ==================== Reports ==================== #

    def _visitor_points(time_range: str):
        return state.monthly_visitors if time_range == "month" else state.daily_visitors

    @app.route("/api/reports", methods=["GET"])
    def get_reports():
        time_range = request.args.get("range", "week")
        points = _visitor_points(time_range)
        return jsonify({
            "success": True,
            "range": time_range,
            "data": [{"name": p.name, "visitors": p.visitors, "revenue": p.revenue} for p in points],
            "shoeSizes": state.report_service.shoe_size_distribution(
                state.session_service.list_sessions()
            ),
        })

    @app.route("/api/reports/export", methods=["GET"])
    def export_report():
        time_range = request.args.get("range", "week")
        try:
            export_format = _export_format()
        except ValueError as e:
            return _error(str(e), 400)
        rows = state.report_service.revenue_report_rows(time_range, _visitor_points(time_range))
        blob = render_export(export_format, {"Report": rows})
        filename = export_filename("skatepark_report", export_format, time_range)
        return _download(blob, filename, export_format)

    # ==================== Dashboard ==================== #

    def _dashboard_rows():
        today = state.report_service.period_totals(
            state.report_service.filter_by_range(state.revenue_records, "today")
        )
        stock = state.inventory_service.totals()
        return state.report_service.dashboard_report_rows(
            active_sessions=state.session_service.count_active(),
            todays_visitors=today.total_skaters,
            todays_revenue=today.total_revenue,
            available_shoes=stock["available_shoes"],
            total_shoes=stock["total_shoes"],
        ), today, stock

    @app.route("/api/dashboard", methods=["GET"])
    def get_dashboard():
        _, today, stock = _dashboard_rows()
        return jsonify({
            "success": True,
            "activeSessions": state.session_service.count_active(),
            "todaysVisitors": today.total_skaters,
            "todaysRevenue": today.total_revenue,
            "availableShoes": stock["available_shoes"],
            "totalShoes": stock["total_shoes"],
        })

    @app.route("/api/dashboard/export", methods=["GET"])
    def export_dashboard():
        try:
            export_format = _export_format()
        except ValueError as e:
            return _error(str(e), 400)
        rows, _, _ = _dashboard_rows()
        blob = render_export(export_format, {"Dashboard Report": rows})
        return _download(blob, export_filename("dashboard_report", export_format), export_format)

    # ==================== Inventory ==================== #

    @app.route("/api/inventory", methods=["GET"])
    def get_inventory():
        items = state.inventory_service.search(request.args.get("q", ""))
        stock = state.inventory_service.totals()
        return jsonify({
            "success": True,
            "items": [item.to_json() for item in items],
            "totalShoes": stock["total_shoes"],
            "availableShoes": stock["available_shoes"],
            "availabilityPercentage": stock["availability_percentage"],
        })

    @app.route("/api/inventory/restock", methods=["POST"])
    def restock_inventory():
        data = _request_json()
        try:
            item = state.inventory_service.plan_restock(data.get("size", ""), data.get("quantity", 1))
        except LookupError as e:
            return _error(str(e), 404)
        except (TypeError, ValueError) as e:
            return _error(str(e), 400)
        return jsonify({"success": True, "item": item.to_json()})

    @app.route("/api/inventory/export", methods=["GET"])
    def export_inventory():
        try:
            export_format = _export_format()
        except ValueError as e:
            return _error(str(e), 400)
        items = state.inventory_service.search(request.args.get("q", ""))
        rows = [INVENTORY_HEADERS, *state.inventory_service.export_rows(items)]
        blob = render_export(export_format, {"Inventory": rows})
        return _download(blob, export_filename("inventory", export_format), export_format)

    # ==================== Branding ==================== #

    @app.route("/api/branding", methods=["GET"])
    def get_branding():
        return jsonify({"success": True, "branding": state.branding_service.settings.to_json()})

    @app.route("/api/branding", methods=["PUT"])
    def update_branding():
        data = _request_json()
        try:
            settings = state.branding_service.update(
                brand_name=data.get("brandName"),
                brand_color=data.get("brandColor"),
                logo_url=data.get("logoUrl"),
            )
        except BrandingValidationError as e:
            return _error(str(e), 400)
        except OSError as e:
            logger.error("Could not save branding: %s", e, exc_info=True)
            return _error("Could not save branding settings", 500)
        return jsonify({"success": True, "branding": settings.to_json()})

    @app.route("/api/branding/reset", methods=["POST"])
    def reset_branding():
        settings = state.branding_service.reset()
        return jsonify({"success": True, "branding": settings.to_json()})

    # ==================== Live display & timers ==================== #

    @app.route("/api/tv-display", methods=["GET"])
    def tv_display():
        snapshot = state.display_service.snapshot(now_dt())
        snapshot["brandName"] = state.branding_service.settings.brand_name
        return jsonify({"success": True, **snapshot})

    @app.route("/api/tick", methods=["POST"])
    def tick():
        """Advance the dashboard timers; the page calls this on its own interval."""
        state.last_sweep = []
        ran = state.timer_service.tick(now_dt())
        completed = state.last_sweep
        return jsonify({
            "success": True,
            "ran": ran,
            "currentTime": state.current_time.isoformat(timespec="seconds"),
            "completed": [s.id for s in completed],
            "message": (
                f"{len(completed)} session(s) have been automatically marked as completed."
                if completed else ""
            ),
        })

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        if isinstance(error, HTTPException):
            return _error(error.description, error.code)
        logger.error("Unhandled error on %s: %s", request.path, error, exc_info=True)
        return _error(f"Unexpected error: {error}", 500)

    return app


def run_web_app(
    host: str = "127.0.0.1",
    port: int = 7122,
    branding_store: Optional[KeyValueStore] = None,
) -> None:
    """
    Run the web application.

    Args:
        host: Host address to bind to (default: localhost only)
        port: Port number to listen on
        branding_store: Where branding preferences persist between runs
    """
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app(branding_store=branding_store)
    app.run(host=host, port=port, debug=False)
