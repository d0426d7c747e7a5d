"""
Lottie template errors.
"""

from typing import Any, Optional


class ColorizeError(Exception):
    """Base class for template colorizing errors. Never retriable."""


class MalformedTemplate(ColorizeError):
    """Raised when a template document has no layers sequence."""

    def __init__(self, reason: str = "template has no 'layers' list"):
        self.reason = reason
        super().__init__(f"Malformed template: {reason}")


class InvalidColorFormat(ColorizeError):
    """Raised when a color parameter is not a 6-digit hex string."""

    def __init__(self, value: Any, field: Optional[str] = None):
        self.value = value
        self.field = field
        where = f" for '{field}'" if field else ""
        super().__init__(f"Invalid color{where}: {value!r} (expected #RRGGBB)")


class TemplateNotFound(Exception):
    """Raised when a template name does not resolve to a readable file."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Template not found: {name}")
