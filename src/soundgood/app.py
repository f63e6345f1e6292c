from flask import Flask, jsonify

from soundgood.errors import RuleRejection, StoreFailure, ValidationRejection
from soundgood.logging_setup import configure_logging


def create_app() -> Flask:
    """Application factory."""
    configure_logging()
    app = Flask(__name__)

    # Register blueprints
    from soundgood.routes.instruments import bp as instruments_bp
    from soundgood.routes.leases import bp as leases_bp
    from soundgood.routes.students import bp as students_bp

    app.register_blueprint(instruments_bp, url_prefix="/api/instruments")
    app.register_blueprint(leases_bp, url_prefix="/api/leases")
    app.register_blueprint(students_bp, url_prefix="/api/students")

    @app.errorhandler(ValidationRejection)
    def handle_validation(e):
        return jsonify({"error": e.message}), 400

    @app.errorhandler(RuleRejection)
    def handle_rule(e):
        return jsonify({"error": e.message}), 409

    @app.errorhandler(StoreFailure)
    def handle_store_failure(e):
        return jsonify({"error": e.message}), 503

    @app.route("/api/health")
    def health():
        return {"status": "ok"}

    return app
