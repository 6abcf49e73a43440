import os

from dotenv import load_dotenv
from flask import Flask, Response, jsonify, request
from flask_caching import Cache
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_sqlalchemy import SQLAlchemy
from flask_wtf import CSRFProtect
from flask_wtf.csrf import CSRFError

load_dotenv()
db = SQLAlchemy()
cache = Cache()
csrf = CSRFProtect()
storage_uri = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
limiter = Limiter(key_func=get_remote_address, storage_uri=storage_uri)

INVOICES_PATH = "/dashboard/invoices"


def _get_bool_env(var_name: str, default: bool = False) -> bool:
    """Return a boolean environment variable value."""

    value = os.getenv(var_name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_database_uri(base_dir: str) -> str:
    """Resolve the SQLAlchemy URL from ``DATABASE_URL`` or ``DATABASE_PATH``."""

    database_url = os.getenv("DATABASE_URL", "").strip()
    if database_url:
        return database_url
    # A directory value stores the SQLite file inside it, which suits
    # container deployments with a mounted volume.
    default_db_path = os.path.join(base_dir, "invoices.db")
    db_path = os.getenv("DATABASE_PATH", default_db_path)
    if os.path.isdir(db_path):
        db_path = os.path.join(db_path, "invoices.db")
    os.makedirs(os.path.dirname(os.path.abspath(db_path)), exist_ok=True)
    return f"sqlite:///{os.path.abspath(db_path)}"


def create_app(args: list):
    """Application factory used by Flask."""
    app = Flask(__name__)
    app.config["SECRET_KEY"] = os.getenv("SECRET_KEY")
    app.config["SQLALCHEMY_DATABASE_URI"] = _get_database_uri(os.getcwd())
    app.config["CACHE_TYPE"] = os.getenv("CACHE_TYPE", "SimpleCache")
    app.config["CACHE_DEFAULT_TIMEOUT"] = int(
        os.getenv("CACHE_DEFAULT_TIMEOUT", "300")
    )
    app.config["MUTATION_RATE_LIMIT"] = os.getenv(
        "MUTATION_RATE_LIMIT", "60 per minute"
    )
    app.config["SQLALCHEMY_ECHO"] = "--echo-sql" in args
    app.config["RATELIMIT_ENABLED"] = _get_bool_env(
        "RATELIMIT_ENABLED", default=True
    )

    app.logger.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())

    db.init_app(app)
    cache.init_app(app)
    limiter.init_app(app)
    csrf.init_app(app)

    @app.after_request
    def apply_security_headers(response):
        """Attach standard security headers to every response."""
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        return response

    @app.before_request
    def block_http_options():
        """Return a 405 for HTTP OPTIONS requests to reduce information leakage."""
        if request.method == "OPTIONS":
            return Response(status=405)

    @app.errorhandler(CSRFError)
    def handle_csrf_error(error):
        """Report a failed CSRF check as a JSON payload."""
        return jsonify({"message": error.description}), 400

    with app.app_context():
        # Tables are created on start-up so a fresh database works without
        # a separate provisioning step.
        from . import models  # noqa: F401

        db.create_all()

        from app.routes.invoice_routes import invoice

        app.register_blueprint(invoice)

    app.logger.info("Invoice application started")
    return app
