def redact_email(email: str | None) -> str:
    """Mask the local part of an address for log output.

    >>> redact_email("reader@example.com")
    'r***@example.com'
    """
    if not email or "@" not in email:
        return "***"
    local, _, domain = email.partition("@")
    return f"{local[:1]}***@{domain}"
