import re


def redact_pii(message: str) -> str:
    """Redact personally identifiable information from log messages.

    Sanitizes emails, IPs, JWT tokens, API keys, passwords, phone numbers and
    CUIT/CUIL identifiers to comply with Argentina's Ley 25.326 (Personal Data
    Protection). Volunteer and institution contact data flows through the
    registration endpoints, so it must never reach the log files verbatim.
    """
    if not isinstance(message, str):
        return str(message)

    # API key in query strings: ...:generateContent?key=AIza... -> key=[REDACTED]
    message = re.sub(r"([?&]key=)[^&\s'\"]+", r"\1[REDACTED]", message)

    # Emails: user@example.com -> u***@example.com
    message = re.sub(
        r"[\w.-]+@[\w.-]+\.\w+",
        lambda m: m.group()[0] + "***@" + m.group().split("@")[1],
        message,
    )

    # IPs (IPv4): 192.168.1.100 -> 192.168.1.***
    message = re.sub(
        r"\b(\d{1,3}\.\d{1,3}\.\d{1,3}\.)\d{1,3}\b", r"\1***", message
    )

    # JWT tokens: eyJ... -> [JWT_REDACTED]
    message = re.sub(
        r"eyJ[A-Za-z0-9_-]+\.eyJ[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+",
        "[JWT_REDACTED]",
        message,
    )

    # API Keys: long hex strings (32+ chars)
    message = re.sub(r"\b[a-fA-F0-9]{32,}\b", "[API_KEY_REDACTED]", message)

    # CUIT / CUIL: 20-12345678-9, 27-3456789-0
    message = re.sub(r"\b\d{2}-\d{7,8}-\d\b", "[CUIT_REDACTED]", message)

    # Argentine phone numbers: +54 11 4567-8901, +541145678901, 54-11-45678901
    message = re.sub(
        r"\+?\b54[\s-]?9?[\s-]?\d{2,4}[\s-]?\d{3,4}[\s-]?\d{4}\b",
        "[PHONE_REDACTED]",
        message,
    )

    # Password values in common patterns
    message = re.sub(
        r'(password|passwd|pwd|secret)["\']?\s*[:=]\s*["\']?[^"\'&\s]+',
        r"\1=[REDACTED]",
        message,
        flags=re.IGNORECASE,
    )

    return message
