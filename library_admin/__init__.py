# library_admin/__init__.py
from flask import Flask, redirect, url_for
from config import Config
from .extensions import db, migrate, login, limiter, csrf
from library_admin.models import User
# Import logging configuration
from .logging_config import setup_logging
# Import security utilities
from .security import add_security_headers


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Setup logging (do this early, after config is loaded)
    setup_logging(app)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login.init_app(app)
    limiter.init_app(app)
    csrf.init_app(app)

    # Register blueprints here
    from library_admin.admins import bp as admins_bp
    app.register_blueprint(admins_bp)

    @app.route('/')
    def home():
        return redirect(url_for('admins.index'))

    # Register CLI commands
    from library_admin.cli import register_cli_commands
    register_cli_commands(app)

    # Register error handlers
    from library_admin.error_handlers import register_error_handlers
    register_error_handlers(app)

    # User loader callback
    @login.user_loader
    def load_user(user_id):
        # Ensure user_id is valid before querying
        try:
            uid = int(user_id)
        except (ValueError, TypeError):
            return None
        return db.session.get(User, uid)

    # Add security headers to all responses
    @app.after_request
    def set_security_headers(response):
        return add_security_headers(response)

    return app
