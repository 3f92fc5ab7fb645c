from flask import Flask, jsonify
from flask_cors import CORS
from config import Config
from models import db
from manage_users import register_commands
from utils.log_config import configure_logging
from utils.responses import register_error_handlers

# Import Blueprints
from auth.routes import auth_bp
from leave import leave_bp
from overtime import overtime_bp
from bonus import bonus_bp
from announcements import announcements_bp
from feedback import feedback_bp


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)
    configure_logging(app)

    # Initialize Extensions
    CORS(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}}, supports_credentials=True)
    db.init_app(app)

    # Register Blueprints
    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(leave_bp, url_prefix="/api/leaves")
    app.register_blueprint(overtime_bp, url_prefix="/api/overtime")
    app.register_blueprint(bonus_bp, url_prefix="/api/bonuses")
    app.register_blueprint(announcements_bp, url_prefix="/api/announcements")
    app.register_blueprint(feedback_bp, url_prefix="/api/feedback")

    register_error_handlers(app)
    register_commands(app)

    @app.after_request
    def security_headers(response):
        response.headers.pop("X-Frame-Options", None)
        response.headers["Content-Security-Policy"] = f"frame-ancestors {app.config['FRAME_ANCESTORS']}"
        response.headers["Permissions-Policy"] = "geolocation=(self)"
        return response

    @app.route("/api/health")
    def health():
        return jsonify({"ok": True})

    return app


if __name__ == "__main__":
    app = create_app()
    with app.app_context():
        db.create_all()
    app.logger.info("API listening on port %s", app.config["PORT"])
    app.run(port=app.config["PORT"])
