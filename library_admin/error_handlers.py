"""
Error Handlers Module

Provides centralized error handling for the Flask application.
Handles HTTP errors, database errors, and unexpected exceptions with:
- A shared error page for HTML clients
- JSON error responses for API/XHR requests
- Production-safe error messages
"""

from flask import render_template, request, jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError

from library_admin.extensions import db
from library_admin.views import wants_json_response


def log_error_event(error_code, error_message, exception=None):
    """
    Log an HTTP error event.

    4xx errors are logged at warning level (404s at info), 5xx at error level.
    """
    description = f"HTTP {error_code}: {error_message} | {request.method} {request.path} | IP:{request.remote_addr}"

    if error_code == 404:
        current_app.logger.info(description)
    elif error_code < 500:
        current_app.logger.warning(description)
    else:
        current_app.logger.error(description, exc_info=exception)


def create_error_response(error_code, title, message, description=None):
    """
    Create an error response (HTML or JSON based on request).

    Args:
        error_code: HTTP status code
        title: Error title
        message: Short error message
        description: Optional detailed description

    Returns:
        Flask response object
    """
    if wants_json_response() or request.path.startswith('/api/'):
        response = {
            'error': {
                'code': error_code,
                'title': title,
                'message': message,
            }
        }
        if description:
            response['error']['description'] = description

        return jsonify(response), error_code

    try:
        return render_template(
            'errors/error.html',
            error_code=error_code,
            title=title,
            message=message,
            description=description
        ), error_code
    except Exception as e:
        # Fallback if template rendering fails
        current_app.logger.error(f"Error rendering error template: {e}", exc_info=True)
        return f"<h1>{error_code} {title}</h1><p>{message}</p>", error_code


# ==================== HTTP Error Handlers ====================

def handle_400(e):
    """Handle 400 Bad Request errors (including CSRF failures)."""
    log_error_event(400, "Bad Request", e)
    return create_error_response(
        400,
        "Bad Request",
        "The request could not be understood by the server.",
        "Please check your input and try again."
    )


def handle_401(e):
    """Handle 401 Unauthorized errors."""
    log_error_event(401, "Unauthorized", e)
    return create_error_response(
        401,
        "Authentication Required",
        "You need to be logged in to access this page."
    )


def handle_403(e):
    """Handle 403 Forbidden errors."""
    log_error_event(403, "Forbidden", e)
    return create_error_response(
        403,
        "Access Forbidden",
        "You don't have permission to access this resource.",
        "This page is restricted to library administrators."
    )


def handle_404(e):
    """Handle 404 Not Found errors."""
    log_error_event(404, "Not Found", e)
    return create_error_response(
        404,
        "Page Not Found",
        "The page you are looking for does not exist."
    )


def handle_405(e):
    """Handle 405 Method Not Allowed errors."""
    log_error_event(405, "Method Not Allowed", e)
    return create_error_response(
        405,
        "Method Not Allowed",
        "This action is not supported for the requested page."
    )


def handle_429(e):
    """Handle 429 Too Many Requests errors (rate limiting)."""
    log_error_event(429, "Rate Limit Exceeded", e)

    description = "Please wait a moment before trying again."
    if getattr(e, 'description', None):
        description = e.description

    return create_error_response(
        429,
        "Too Many Requests",
        "You've made too many requests in a short period of time.",
        description
    )


def handle_500(e):
    """Handle 500 Internal Server Error."""
    log_error_event(500, "Internal Server Error", e)

    if current_app.debug:
        message = str(e)
    else:
        message = "An unexpected error occurred on our end."

    return create_error_response(500, "Internal Server Error", message)


def handle_503(e):
    """Handle 503 Service Unavailable errors."""
    log_error_event(503, "Service Unavailable", e)
    return create_error_response(
        503,
        "Service Unavailable",
        "The service is temporarily unavailable.",
        "Please try again in a few moments."
    )


# ==================== Database Error Handlers ====================

def handle_database_error(e):
    """Handle SQLAlchemy errors that escaped the service layer."""
    db.session.rollback()
    current_app.logger.error(f"Database error: {e}", exc_info=True)

    if current_app.debug:
        message = f"Database error: {e}"
    else:
        message = "A database error occurred. Please try again."

    return create_error_response(
        500,
        "Database Error",
        message,
        "If this problem persists, please contact support."
    )


# ==================== Generic Exception Handler ====================

def handle_generic_exception(e):
    """Catch-all handler for unexpected errors."""
    current_app.logger.error(
        f"Unhandled exception: {type(e).__name__}: {e}",
        exc_info=True
    )

    return create_error_response(
        500,
        "Internal Server Error",
        "An unexpected error occurred.",
        "Please try again or contact support."
    )


# ==================== Registration Function ====================

def register_error_handlers(app):
    """Register all error handlers with the Flask application."""
    app.register_error_handler(400, handle_400)
    app.register_error_handler(401, handle_401)
    app.register_error_handler(403, handle_403)
    app.register_error_handler(404, handle_404)
    app.register_error_handler(405, handle_405)
    app.register_error_handler(429, handle_429)
    app.register_error_handler(500, handle_500)
    app.register_error_handler(503, handle_503)

    app.register_error_handler(SQLAlchemyError, handle_database_error)

    # Only register catch-all outside debug mode to keep the debugger available
    if not app.debug:
        app.register_error_handler(Exception, handle_generic_exception)

    app.logger.info("Error handlers registered successfully")
