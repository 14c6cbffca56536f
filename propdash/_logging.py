import hashlib
import logging

# Create the library logger
logger = logging.getLogger("propdash")

# Add NullHandler to prevent "No handlers could be found" warnings
# if the application doesn't configure logging.
logger.addHandler(logging.NullHandler())


def redact_term(term: str | None) -> str:
    """
    Redacts a free-text search term for logging.
    Search terms usually carry guest names, emails or phone numbers, so only a
    short hash is logged. The hash still lets identical searches be correlated.
    """
    if not term:
        return ""
    try:
        return hashlib.sha256(term.encode("utf-8")).hexdigest()[:8]
    except Exception:
        return "<redaction_failed>"
