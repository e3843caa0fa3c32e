"""
Security headers middleware.

The API only serves JSON, so the policy is locked down: no framing, no
script/style sources, no referrer leakage.

Usage:
    from bountyhub.middleware.security_headers import init_security_headers
    init_security_headers(app)
"""


def init_security_headers(app):
    """Register after_request handler that injects security headers."""

    @app.after_request
    def _add_security_headers(response):
        response.headers.setdefault("Content-Security-Policy", "default-src 'none'; frame-ancestors 'none'")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")

        # Ignored over plain HTTP
        response.headers.setdefault(
            "Strict-Transport-Security", "max-age=31536000; includeSubDomains"
        )
        response.headers.setdefault("Referrer-Policy", "no-referrer")

        # Session-bearing responses must not be cached by intermediaries
        response.headers.setdefault("Cache-Control", "no-store")

        response.headers.pop("Server", None)
        return response
