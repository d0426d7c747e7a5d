"""
Lottie Template Service
=======================
Recolors Lottie vector-animation templates from request parameters.
"""

from .colorizer import colorize
from .colors import hex_to_normalized_rgba, normalized_rgba_to_hex, lighten
from .errors import ColorizeError, MalformedTemplate, InvalidColorFormat, TemplateNotFound
from .models import ColorParameters, ShapeKind, TemplateInfo
from .template_loader import TemplateLoader

__all__ = [
    "colorize",
    "hex_to_normalized_rgba",
    "normalized_rgba_to_hex",
    "lighten",
    "ColorizeError",
    "MalformedTemplate",
    "InvalidColorFormat",
    "TemplateNotFound",
    "ColorParameters",
    "ShapeKind",
    "TemplateInfo",
    "TemplateLoader",
]
