from __future__ import annotations

import logging
import time

from flask import Flask, g, jsonify, request

from cerviscreen.config import PortalConfig
from cerviscreen.errors import (
    ConsentNotGiven,
    EligibilityNotMet,
    PortalError,
    RequiredAnswerMissing,
)
from cerviscreen.imaging.quality import QualityAssessor
from cerviscreen.store import open_store
from cerviscreen.store.base import TableStore
from cerviscreen.store.repositories import PatientRepository, PhysicianRepository
from cerviscreen.workflow.intake import PatientIntake
from cerviscreen.workflow.notifications import Inbox
from cerviscreen.workflow.review import ClinicalReview

logger = logging.getLogger(__name__)


def create_app(
    store: TableStore | None = None,
    config: dict | None = None,
    assessor: QualityAssessor | None = None,
) -> Flask:
    """Create and configure the Flask app.

    Without a store, an in-memory SQLite database is opened and migrated.
    """
    app = Flask(__name__)
    app.config.update(config or {})

    if store is None:
        store = open_store(PortalConfig(db_path=":memory:"))

    # Services shared by the blueprints
    app.extensions["store"] = store
    app.extensions["patient_repo"] = PatientRepository(store)
    app.extensions["physician_repo"] = PhysicianRepository(store)
    app.extensions["intake"] = PatientIntake(store, assessor=assessor)
    app.extensions["review"] = ClinicalReview(store)
    app.extensions["inbox"] = Inbox(store)

    _register_error_handlers(app)
    _register_request_hooks(app)

    # Register blueprints
    from cerviscreen.web.routes.consent import consent_bp
    from cerviscreen.web.routes.images import images_bp
    from cerviscreen.web.routes.notifications import notifications_bp
    from cerviscreen.web.routes.profiles import profiles_bp
    from cerviscreen.web.routes.questionnaire import questionnaire_bp
    from cerviscreen.web.routes.submissions import submissions_bp

    app.register_blueprint(profiles_bp, url_prefix="/api")
    app.register_blueprint(consent_bp, url_prefix="/api")
    app.register_blueprint(questionnaire_bp, url_prefix="/api")
    app.register_blueprint(images_bp, url_prefix="/api")
    app.register_blueprint(submissions_bp, url_prefix="/api")
    app.register_blueprint(notifications_bp, url_prefix="/api")

    return app


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(PortalError)
    def handle_portal_error(exc: PortalError):
        """Report domain and backend errors as JSON."""
        body: dict = {"error": str(exc), "code": exc.code}
        if isinstance(exc, RequiredAnswerMissing):
            body["question_id"] = exc.question_id
        elif isinstance(exc, EligibilityNotMet):
            body["unmet"] = list(exc.unmet)
        elif isinstance(exc, ConsentNotGiven):
            body["missing"] = list(exc.missing)
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.path, exc)
        return jsonify(body), exc.status_code


def _register_request_hooks(app: Flask) -> None:
    @app.before_request
    def start_timer():
        g.request_started = time.monotonic()

    @app.after_request
    def finish_request(response):
        """Log the request and allow cross-origin calls to the API."""
        if request.path.startswith("/api"):
            response.headers["Access-Control-Allow-Origin"] = "*"
            response.headers["Access-Control-Allow-Headers"] = "Content-Type"
            response.headers["Access-Control-Allow-Methods"] = "GET, POST, PUT, DELETE, OPTIONS"
        started = g.get("request_started")
        elapsed_ms = (time.monotonic() - started) * 1000 if started else 0.0
        logger.info(
            "%s %s -> %d (%.1fms)",
            request.method,
            request.path,
            response.status_code,
            elapsed_ms,
        )
        return response
