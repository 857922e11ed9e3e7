# app.py
"""
Diabetes care portal (Flask).
Features:
 - Registration and login by phone number (no credentials)
 - Health data entry from the dashboard, persisted in Supabase
 - Rule-based medication suggestions rendered as a report
 - Health endpoint for uptime monitoring

Run locally with `flask --app app run` or `python app.py`; SUPABASE_URL and
SUPABASE_KEY must be set (a .env file is picked up by config.py).
"""

import time
from datetime import datetime

from flask import (
    Blueprint, Flask, Response, current_app, flash, jsonify,
    redirect, render_template, request, url_for
)
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from config import Config
from exceptions import HealthDataError, RecordNotFoundError, StoreError
from logging_config import get_logger, setup_logging
from models.health_record_model import parse_health_form
from recommendation import derive_recommendation
from store import create_store

logger = get_logger(__name__)

STORE_EXTENSION = "record_store"

bp = Blueprint("portal", __name__)


def get_store():
    return current_app.extensions[STORE_EXTENSION]


def plain_text(message, status=200):
    return Response(message, status=status, mimetype="text/plain")


def format_reading(value):
    """Show a reading as entered: 140.0 becomes 140, 98.123456 keeps every digit."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return str(value)


# ============================================================
# Routes
# ============================================================
@bp.route("/")
def index():
    return redirect(url_for("portal.login"))


@bp.route("/auth/register", methods=["GET", "POST"])
def register():
    if request.method == "POST":
        name = request.form.get("name", "")
        phone = request.form.get("phone", "")
        store = get_store()

        try:
            if store.find_person_by_phone(phone):
                return plain_text("User already exists. Please login.")
            person = store.create_person(name, phone)
        except StoreError:
            logger.exception("Registration failed for phone %s", phone)
            return plain_text("Server Error", 500)

        logger.info("Registered person %s", person.id)
        return redirect(url_for("portal.login"))

    return render_template("register.html")


@bp.route("/auth/login", methods=["GET", "POST"])
def login():
    if request.method == "POST":
        phone = request.form.get("phone", "")

        try:
            person = get_store().find_person_by_phone(phone)
        except StoreError:
            logger.exception("Login lookup failed for phone %s", phone)
            return plain_text("Server Error", 500)

        if person is None:
            flash("No account found for that phone number. Please register.", "warning")
            return redirect(url_for("portal.register"))

        logger.info("Person %s logged in", person.id)
        return redirect(url_for("portal.dashboard", userId=person.id))

    return render_template("login.html")


@bp.route("/dashboard", methods=["GET", "POST"])
def dashboard():
    # userId travels as a query parameter; there is no session
    user_id = request.args.get("userId")

    if request.method == "POST":
        try:
            record = parse_health_form(request.form, user_id)
        except HealthDataError as e:
            logger.warning("Rejected health data: %s", e.to_dict())
            return plain_text("Invalid health data", 400)

        try:
            saved = get_store().create_health_record(record)
        except StoreError:
            logger.exception("Saving health data failed for user %s", user_id)
            return plain_text("Error submitting data", 500)

        logger.info("Stored health record %s for user %s", saved.id, user_id)
        return redirect(url_for("portal.report", record_id=saved.id))

    return render_template("dashboard.html", user_id=user_id)


@bp.route("/report/<record_id>")
def report(record_id):
    store = get_store()
    try:
        record = store.get_health_record(record_id)
        if record is None:
            raise RecordNotFoundError(f"No health record with id {record_id}", record_id=record_id)
    except (StoreError, RecordNotFoundError):
        logger.exception("Report generation failed for record %s", record_id)
        return plain_text("Error generating report", 500)

    person = None
    if record.person_id:
        try:
            person = store.get_person(record.person_id)
        except StoreError as e:
            logger.warning("Could not load owner of record %s: %s", record_id, e.message)

    return render_template(
        "report.html",
        report=derive_recommendation(record),
        person=person,
    )


@bp.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "ok", "time": time.time()}), 200


# ============================================================
# App factory
# ============================================================
def create_app(config_object=Config, store=None):
    """Build the Flask app; pass `store` to use a record store other than Supabase."""
    app = Flask(__name__, static_folder="static", template_folder="templates")
    app.config.from_object(config_object)

    setup_logging(app.config.get("LOG_LEVEL", "INFO"), app.config.get("LOG_FILE"))

    CORS(app, resources={r"/health": {"origins": "*"}})
    Limiter(get_remote_address, app=app)

    if store is None:
        store = create_store(app.config.get("SUPABASE_URL"), app.config.get("SUPABASE_KEY"))
    app.extensions[STORE_EXTENSION] = store

    app.add_template_filter(format_reading, "reading")

    @app.context_processor
    def inject_now():
        return {"current_year": datetime.now().year}

    app.register_blueprint(bp)
    return app


# ============================================================
# Run
# ============================================================
if __name__ == "__main__":
    # For production use gunicorn: gunicorn "app:create_app()"
    app = create_app()
    logger.info("Server running on port %s", app.config["PORT"])
    app.run(host="0.0.0.0", port=app.config["PORT"], debug=app.config["DEBUG"])
