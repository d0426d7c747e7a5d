"""
Template Colorizer
==================
Rewrites the colors of a Lottie template from request parameters.

Walks layers -> shape groups (`shapes`) -> shape items (`it`) and replaces:
    - fills (`fl`)           with the primary color
    - strokes (`st`)         with the secondary color
    - gradient fills (`gf`)  with a 2-stop gradient built from the background color

The input document is never modified. A new tree is built for every call,
so a cached template can be colorized from several threads at once.
"""

from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from loguru import logger

from .colors import hex_to_normalized_rgba, lighten
from .errors import InvalidColorFormat, MalformedTemplate
from .models import ColorParameters, ShapeKind

ItemRewriter = Callable[[Mapping[str, Any]], Dict[str, Any]]

FILL_COLOR_INDEX = 4
STROKE_COLOR_INDEX = 3
GRADIENT_INDEX = 9


def colorize(
    document: Mapping[str, Any],
    params: Union[ColorParameters, Mapping[str, Any], None] = None,
) -> Dict[str, Any]:
    """
    Build a recolored copy of a Lottie document.

    Args:
        document: Parsed Lottie JSON. Must carry a `layers` list (may be empty).
        params: ColorParameters, or a raw request mapping (only its color keys are read).
            Absent colors leave the matching shape kind unchanged.

    Returns:
        New document with the same layer / group / item counts and order.

    Raises:
        MalformedTemplate: If `layers` is missing or not a list
        InvalidColorFormat: If a supplied color is not #RRGGBB
    """
    if not isinstance(document, Mapping):
        raise MalformedTemplate("document is not a JSON object")

    layers = document.get("layers")
    if not isinstance(layers, list):
        raise MalformedTemplate()

    params = _coerce_params(params)
    # Colors are parsed up front so a bad value fails even if no item uses it
    rewriters = _build_rewriters(params)

    result = {
        key: ([_colorize_layer(layer, rewriters) for layer in layers] if key == "layers" else _copy_json(value))
        for key, value in document.items()
    }

    logger.debug(
        f"Colorized template '{document.get('nm', '?')}': "
        f"{len(layers)} layers, {len(rewriters)} shape kinds rewritten"
    )
    return result


def _coerce_params(params: Union[ColorParameters, Mapping[str, Any], None]) -> ColorParameters:
    if params is None:
        return ColorParameters()
    if isinstance(params, ColorParameters):
        return params
    if not isinstance(params, Mapping):
        raise InvalidColorFormat(params)
    return ColorParameters.colors_from(params)


def _build_rewriters(params: ColorParameters) -> Dict[ShapeKind, ItemRewriter]:
    """Map each shape kind that has a parameter to its rewrite function."""
    rewriters: Dict[ShapeKind, ItemRewriter] = {}

    if params.primary_color is not None:
        fill_rgba = hex_to_normalized_rgba(params.primary_color, field="primary_color")
        rewriters[ShapeKind.FILL] = lambda item: _with_static_color(item, fill_rgba, FILL_COLOR_INDEX)

    if params.secondary_color is not None:
        stroke_rgba = hex_to_normalized_rgba(params.secondary_color, field="secondary_color")
        rewriters[ShapeKind.STROKE] = lambda item: _with_static_color(item, stroke_rgba, STROKE_COLOR_INDEX)

    if params.background_color is not None:
        base_rgba = hex_to_normalized_rgba(params.background_color, field="background_color")
        rewriters[ShapeKind.GRADIENT_FILL] = lambda item: _with_two_stop_gradient(item, base_rgba[:3])

    return rewriters


def _colorize_layer(layer: Any, rewriters: Dict[ShapeKind, ItemRewriter]) -> Any:
    if not isinstance(layer, Mapping) or not isinstance(layer.get("shapes"), list):
        return _copy_json(layer)

    return {
        key: ([_colorize_group(group, rewriters) for group in value] if key == "shapes" else _copy_json(value))
        for key, value in layer.items()
    }


def _colorize_group(group: Any, rewriters: Dict[ShapeKind, ItemRewriter]) -> Any:
    if not isinstance(group, Mapping) or not isinstance(group.get("it"), list):
        return _copy_json(group)

    return {
        key: ([_colorize_item(item, rewriters) for item in value] if key == "it" else _copy_json(value))
        for key, value in group.items()
    }


def _colorize_item(item: Any, rewriters: Dict[ShapeKind, ItemRewriter]) -> Any:
    rewrite = rewriters.get(ShapeKind.of(item))
    if rewrite is None:
        return _copy_json(item)
    return rewrite(item)


def _with_static_color(item: Mapping[str, Any], rgba: List[float], default_index: int) -> Dict[str, Any]:
    new_item = _copy_json(item)
    new_item["c"] = {"a": 0, "k": list(rgba), "ix": _property_index(item.get("c"), default_index)}
    return new_item


def _with_two_stop_gradient(item: Mapping[str, Any], rgb: List[float]) -> Dict[str, Any]:
    light = lighten(rgb)
    old_gradient = item.get("g")
    old_stops = old_gradient.get("k") if isinstance(old_gradient, Mapping) else None

    new_item = _copy_json(item)
    new_item["g"] = {
        "p": 2,  # Always replaced, never merged with the template's stops
        "k": {
            "a": 0,
            "k": [0.0, *rgb, 1.0, *light],
            "ix": _property_index(old_stops, GRADIENT_INDEX),
        },
    }
    return new_item


def _property_index(prop: Optional[Any], default: int) -> Any:
    if isinstance(prop, Mapping) and "ix" in prop:
        return prop["ix"]
    return default


def _copy_json(value: Any) -> Any:
    """Rebuild a JSON value so the result shares no containers with the input."""
    if isinstance(value, Mapping):
        return {key: _copy_json(child) for key, child in value.items()}
    if isinstance(value, list):
        return [_copy_json(child) for child in value]
    if isinstance(value, tuple):
        return tuple(_copy_json(child) for child in value)
    return value
