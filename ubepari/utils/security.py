"""Security helpers: PII masking for log lines."""
import re

_PHONE_RE = re.compile(r"(\+?\d[\d\s-]{6,}\d)")


def mask_pii(text: str) -> str:
    """Replace all but the last 3 digits of phone-like numbers."""
    if not text:
        return text

    def _mask(match):
        digits = re.sub(r"\D", "", match.group(1))
        return "*" * (len(digits) - 3) + digits[-3:]

    return _PHONE_RE.sub(_mask, text)
