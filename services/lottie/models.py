"""
Lottie Service Models
=====================
Request parameters and shape-kind tags for template colorizing.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator

from .errors import InvalidColorFormat


class ShapeKind(str, Enum):
    """Lottie shape item kinds the colorizer understands."""
    FILL = "fl"
    STROKE = "st"
    GRADIENT_FILL = "gf"
    OTHER = "other"  # Anything else, passed through untouched

    @classmethod
    def of(cls, item: Any) -> "ShapeKind":
        """Classify a shape item by its `ty` tag."""
        tag = item.get("ty") if isinstance(item, Mapping) else None
        if tag == cls.OTHER.value:
            return cls.OTHER
        try:
            return cls(tag)
        except ValueError:
            return cls.OTHER


COLOR_FIELDS = ("primary_color", "secondary_color", "background_color")


class ColorParameters(BaseModel):
    """
    User-supplied parameters for a generated video.

    Accepts snake_case, camelCase and the original Portuguese request keys
    (cor_primaria, cor_secundaria, cor_fundo, texto_principal, duracao).
    Hex format is checked by the colorizer, not here.
    """

    primary_color: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("primary_color", "primaryColor", "cor_primaria"),
        description="Fill color, #RRGGBB",
    )
    secondary_color: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("secondary_color", "secondaryColor", "cor_secundaria"),
        description="Stroke color, #RRGGBB",
    )
    background_color: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("background_color", "backgroundColor", "cor_fundo"),
        description="Gradient base color, #RRGGBB",
    )
    text: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("text", "texto_principal", "texto"),
        description="Main overlay text",
    )
    duration: Optional[float] = Field(
        None,
        validation_alias=AliasChoices("duration", "duracao"),
        description="Video duration in seconds",
    )
    logo_url: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("logo_url", "logoUrl", "logo_empresa"),
    )
    background_video_url: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("background_video_url", "backgroundVideoUrl", "video_fundo"),
    )

    class Config:
        extra = "ignore"
        frozen = True
        json_schema_extra = {
            "example": {
                "texto_principal": "Meu vídeo personalizado!",
                "cor_primaria": "#FF6B6B",
                "cor_secundaria": "#4ECDC4",
                "cor_fundo": "#1E90FF",
                "duracao": 6,
            }
        }

    @field_validator("primary_color", "secondary_color", "background_color", "text", mode="before")
    @classmethod
    def _blank_is_absent(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @classmethod
    def colors_from(cls, data: Mapping[str, Any]) -> "ColorParameters":
        """
        Build parameters from the color keys of a raw request mapping.

        Text, duration and URLs are left out, so a bad value there never
        fails a colorize. Aliases are tried in the same order pydantic uses.

        Raises:
            InvalidColorFormat: If a supplied color is not a string
        """
        colors = {}
        for name in COLOR_FIELDS:
            aliases = cls.model_fields[name].validation_alias.choices
            value = next((data[alias] for alias in aliases if alias in data), None)
            if value is None:
                continue
            if not isinstance(value, str):
                raise InvalidColorFormat(value, name)
            colors[name] = value
        return cls(**colors)

    def has_colors(self) -> bool:
        """True if any color channel is set."""
        return any(getattr(self, name) is not None for name in COLOR_FIELDS)

    def to_composition_props(self) -> Dict[str, Any]:
        """Props in the shape the Remotion VideoComposition expects."""
        props = {
            "texto_principal": self.text,
            "cor_primaria": self.primary_color,
            "cor_secundaria": self.secondary_color,
            "cor_fundo": self.background_color,
            "duracao": self.duration,
            "logo_empresa": self.logo_url,
            "video_fundo": self.background_video_url,
        }
        return {key: value for key, value in props.items() if value is not None}


@dataclass
class TemplateInfo:
    """Metadata of a loaded Lottie template."""
    name: str
    version: Optional[str]
    frame_rate: float
    in_point: float
    out_point: float
    width: int
    height: int
    layer_count: int

    @property
    def duration_seconds(self) -> float:
        if not self.frame_rate:
            return 0.0
        return (self.out_point - self.in_point) / self.frame_rate

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["duration_seconds"] = round(self.duration_seconds, 3)
        return data
