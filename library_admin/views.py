"""
Server-driven view rendering and failure responses.

render_view() renders a page component either as an HTML template or, for
XHR/JSON clients, as a JSON page object ({component, props, url}).
respond_to_failure() is the single place where a failed OperationResult is
turned into a log entry, a flashed notice and a redirect.
"""

import logging

from flask import flash, get_flashed_messages, jsonify, redirect, render_template, request, session

from library_admin.logging_config import log_error_with_context, scrub_context
from library_admin.security import is_safe_redirect_url
from library_admin.services.results import FailureKind

OLD_INPUT_KEY = '_old_input'


def wants_json_response():
    """True if the client prefers a JSON response over HTML."""
    if request.headers.get('X-Requested-With') == 'XMLHttpRequest':
        return True
    return (
        request.accept_mimetypes['application/json'] >
        request.accept_mimetypes['text/html']
    )


def template_for(component):
    """Map a component name like 'admins/Index' to 'admins/index.html'."""
    return f'{component.lower()}.html'


def render_view(component, status=200, template_context=None, **props):
    """
    Render a page component.

    `props` must be JSON-serializable; `template_context` holds extra
    objects (forms, parsed parameters) that only the HTML template needs.
    Flashed notices are consumed by this render either way.
    """
    if wants_json_response():
        props['flash'] = [
            {'category': category, 'message': message}
            for category, message in get_flashed_messages(with_categories=True)
        ]
        return jsonify({
            'component': component,
            'props': props,
            'url': request.full_path.rstrip('?'),
        }), status

    context = dict(props)
    context.update(template_context or {})
    return render_template(template_for(component), **context), status


def redirect_back(fallback, code=302):
    """Redirect to the referring page when it is local, otherwise to `fallback`."""
    target = request.referrer
    if target and target.startswith(request.host_url):
        target = '/' + target[len(request.host_url):]
    if not is_safe_redirect_url(target):
        target = fallback
    return redirect(target, code=code)


def remember_input(data):
    """Keep submitted values (without credentials) for the next form render."""
    session[OLD_INPUT_KEY] = scrub_context(data)


def pop_old_input():
    return session.pop(OLD_INPUT_KEY, None)


def respond_to_failure(result, fallback, action, keep_input=None):
    """
    Log a failed OperationResult and redirect back with its notice.

    Validation failures never reach this function; routes re-render the form
    for those.
    """
    context = dict(result.context)
    context['endpoint'] = request.endpoint

    if result.kind == FailureKind.NOT_FOUND:
        log_error_with_context(f"Error {action}", context, result.exception, level=logging.WARNING)
    else:
        log_error_with_context(f"Error {action}", context, result.exception)

    if keep_input is not None:
        remember_input(keep_input)

    flash(result.message, 'error')
    return redirect_back(fallback)
