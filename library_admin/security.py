"""Security utilities: response headers and redirect checks."""

from flask import current_app


def is_safe_redirect_url(url):
    """Prevents open redirect vulnerabilities."""
    if not url:
        return False

    if url.startswith('/') and not url.startswith('//') and not url.startswith('/\\'):
        return True

    return False


def add_security_headers(response):
    """Add security headers including CSP to all responses."""
    headers = current_app.config.get('SECURITY_HEADERS', {})
    for header, value in headers.items():
        response.headers[header] = value

    csp_config = current_app.config.get('CONTENT_SECURITY_POLICY', {})
    if csp_config:
        response.headers['Content-Security-Policy'] = build_csp_header(csp_config)

    return response


def build_csp_header(csp_config):
    """Build CSP header string from config dictionary."""
    directives = []

    for directive, sources in csp_config.items():
        if not sources:
            directives.append(directive)
        else:
            sources_str = ' '.join(sources)
            directives.append(f"{directive} {sources_str}")

    return '; '.join(directives)
