from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_login import LoginManager
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_wtf.csrf import CSRFProtect

db = SQLAlchemy()
migrate = Migrate()
login = LoginManager()
login.login_message = 'Please log in to access this page.'

@login.unauthorized_handler
def unauthorized_callback():
    """Handle unauthorized access - JSON for AJAX, 401 error page otherwise."""
    from flask import request, jsonify, abort

    if request.headers.get('X-Requested-With') == 'XMLHttpRequest' or request.is_json:
        return jsonify({'error': 'unauthorized', 'message': login.login_message}), 401

    abort(401)

# No default limits: only routes with an explicit limit are throttled
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri="memory://",
)

csrf = CSRFProtect()
