"""
Security utilities - never log or return secrets.
"""

import re
from typing import Optional


def sanitize_string_for_logging(text: str, secret: Optional[str] = None) -> str:
    """
    Remove potential secrets from string (Shopify access tokens, etc.).

    Args:
        text: String that may contain secrets.
        secret: Known secret value to mask as well.

    Returns:
        Sanitized string.
    """
    if not text:
        return text

    result = text
    if secret:
        result = result.replace(secret, '***')

    # Shopify admin/custom/private app tokens
    patterns = [
        (r'shpat_[a-fA-F0-9]{16,}', 'shpat_***'),
        (r'shpca_[a-fA-F0-9]{16,}', 'shpca_***'),
        (r'shppa_[a-fA-F0-9]{16,}', 'shppa_***'),
    ]
    for pattern, replacement in patterns:
        result = re.sub(pattern, replacement, result)

    return result


def describe_secret(value: Optional[str]) -> str:
    """Report whether a secret is set without revealing it."""
    return "set" if value else "NOT SET"


# Hardening headers added to every response
SECURITY_HEADERS = {
    "Content-Security-Policy": "default-src 'self'; frame-ancestors 'self'; object-src 'none'",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}


def apply_security_headers(headers) -> None:
    """Set the security headers on a response, keeping any the route already set."""
    for name, value in SECURITY_HEADERS.items():
        headers.setdefault(name, value)
