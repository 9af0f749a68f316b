"""
Security Middleware — Rate Limiting + Admin Basic Auth
======================================================
Single-operator hardening for the admin panel and the contact endpoint.

Rate Limiting:
- In-memory fixed window per client address and tier, stale windows swept
  once a minute from check()
- "admin" tier in front of the auth check, "contact" tier on /api/contact
- 429 response when exceeded

Admin Auth:
- HTTP Basic credentials checked against ADMIN_USER / ADMIN_PASS
- Both sides zero-padded to equal width, compared with compare_digest,
  length checked separately; user and password always both compared
- Missing ADMIN_PASS is a server misconfiguration: 500 for every admin request
"""

import base64
import binascii
import logging
import secrets
import threading
import time
import functools
from collections import defaultdict

from flask import current_app, jsonify, request, Response

log = logging.getLogger("portfolio.security")

# ═══════════════════════════════════════════════════════════════════════════════
# Rate Limiting
# ═══════════════════════════════════════════════════════════════════════════════

class RateLimiter:
    """In-memory fixed-window counter keyed by client + tier."""

    def __init__(self, cleanup_interval: float = 60, max_age: float = 3600):
        self._windows = defaultdict(lambda: {"start": 0.0, "count": 0})
        self._lock = threading.Lock()
        self.cleanup_interval = cleanup_interval
        self.max_age = max_age
        self._last_cleanup = 0.0

    def check(self, key: str, limit: int, window: float, now: float = None) -> bool:
        """Count one hit for key. Returns True if allowed, False once limit is reached."""
        now = time.time() if now is None else now
        with self._lock:
            if now - self._last_cleanup >= self.cleanup_interval:
                self._purge(now, self.max_age)
            bucket = self._windows[key]
            if now - bucket["start"] >= window:
                bucket["start"] = now
                bucket["count"] = 0
            bucket["count"] += 1
            return bucket["count"] <= limit

    def cleanup(self, max_age: float = None, now: float = None):
        """Drop windows that started more than max_age seconds ago."""
        now = time.time() if now is None else now
        with self._lock:
            self._purge(now, self.max_age if max_age is None else max_age)

    def _purge(self, now: float, max_age: float):
        # caller holds self._lock
        stale = [k for k, v in self._windows.items() if now - v["start"] > max_age]
        for k in stale:
            del self._windows[k]
        self._last_cleanup = now
        if stale:
            log.debug("Rate limiter dropped %d stale windows", len(stale))

    def __len__(self):
        with self._lock:
            return len(self._windows)

    def reset(self):
        with self._lock:
            self._windows.clear()


# Global rate limiter instance
_limiter = RateLimiter()


# Rate limit tiers; "limit" is overridden from app.config at request time
RATE_LIMITS = {
    "admin":   {"limit": 100, "window": 60,
                "message": "Too many requests, please try again later."},
    "contact": {"limit": 5,   "window": 30,
                "message": "Too many messages, please try again later."},
}


def _tier_limits(tier: str) -> dict:
    limits = dict(RATE_LIMITS[tier])
    override = current_app.config.get(f"{tier.upper()}_RATE_LIMIT")
    if override is not None:
        limits["limit"] = int(override)
    return limits


def is_rate_limited(tier: str) -> bool:
    """Count this request against tier; True when the client is over its limit."""
    if not current_app.config.get("RATE_LIMIT_ENABLED", True):
        return False
    ip = request.remote_addr or "unknown"
    limits = _tier_limits(tier)
    if _limiter.check(f"{ip}:{tier}", limits["limit"], limits["window"]):
        return False
    log.warning("Rate limit exceeded: %s tier=%s", ip, tier)
    return True


def rate_limit_message(tier: str) -> str:
    return RATE_LIMITS[tier]["message"]


def rate_limit(tier: str = "contact"):
    """Decorator for JSON endpoints: 429 {"success": false, "error": ...} when exceeded."""
    def decorator(f):
        @functools.wraps(f)
        def wrapper(*args, **kwargs):
            if is_rate_limited(tier):
                return jsonify({"success": False, "error": rate_limit_message(tier)}), 429
            return f(*args, **kwargs)
        return wrapper
    return decorator


# ═══════════════════════════════════════════════════════════════════════════════
# Admin Basic Auth
# ═══════════════════════════════════════════════════════════════════════════════

AUTH_REALM = 'Basic realm="Admin"'


def timing_safe_equals(candidate: str, expected: str) -> bool:
    """Compare without leaking where the strings differ.

    Both values are zero-padded to the same width so compare_digest always sees
    equal-length inputs; the length check is folded in with a non-short-circuit
    AND.
    """
    a = (candidate or "").encode("utf-8")
    b = (expected or "").encode("utf-8")
    width = max(len(a), len(b))
    same_bytes = secrets.compare_digest(a.ljust(width, b"\0"), b.ljust(width, b"\0"))
    same_length = len(a) == len(b)
    return bool(same_bytes & same_length)


def parse_basic_auth(header: str):
    """(user, password) from an Authorization header, or None when malformed."""
    if not header or not header.startswith("Basic "):
        return None
    try:
        decoded = base64.b64decode(header[6:].strip(), validate=True).decode("utf-8")
    except (binascii.Error, ValueError):
        return None
    user, sep, password = decoded.partition(":")
    if not sep:
        return None
    return user, password


def check_credentials(user: str, password: str, expected_user: str, expected_pass: str) -> bool:
    user_ok = timing_safe_equals(user, expected_user)
    pass_ok = timing_safe_equals(password, expected_pass)
    return bool(user_ok & pass_ok)


def _challenge(body: str) -> Response:
    return Response(body, 401, {"WWW-Authenticate": AUTH_REALM})


def admin_gate():
    """before_request hook for the admin Blueprint: rate limit, then Basic auth.

    Returns a response to short-circuit the request, or None to let it through.
    """
    if is_rate_limited("admin"):
        return Response(rate_limit_message("admin"), 429)

    expected_pass = current_app.config.get("ADMIN_PASS")
    if not expected_pass:
        log.error("ADMIN_PASS environment variable not set")
        return Response("Server configuration error", 500)

    creds = parse_basic_auth(request.headers.get("Authorization", ""))
    if creds is None:
        return _challenge("Authentication required")

    if not check_credentials(creds[0], creds[1],
                             current_app.config.get("ADMIN_USER", "admin"), expected_pass):
        log.warning("Admin auth failed from %s", request.remote_addr)
        return _challenge("Invalid credentials")
    return None


# ═══════════════════════════════════════════════════════════════════════════════
# Security Headers Middleware
# ═══════════════════════════════════════════════════════════════════════════════

def add_security_headers(response):
    """Add security headers to every response."""
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "SAMEORIGIN"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    if request.path.startswith("/admin") and not response.headers.get("Cache-Control"):
        response.headers["Cache-Control"] = "no-store"
    return response


def init_security(app):
    """Initialize security middleware on the Flask app."""
    app.after_request(add_security_headers)
    log.info("Security middleware initialized: rate limiting, admin auth, security headers")
