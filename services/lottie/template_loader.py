"""
Template Loader
===============
Loads Lottie templates from disk and keeps them cached for reuse.

Cached documents are shared between requests and must be treated as
read-only; `colorize()` always builds a new tree.
"""

import json
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Union

from loguru import logger

from .errors import MalformedTemplate, TemplateNotFound
from .models import TemplateInfo


class TemplateLoader:
    """
    Reads Lottie JSON templates from a directory.

    Usage:
        loader = TemplateLoader("templates")
        document = loader.load("default.json")
    """

    def __init__(self, template_dir: Union[str, Path]):
        self.template_dir = Path(template_dir)
        self._cache: Dict[Path, Dict[str, Any]] = {}
        self._lock = threading.Lock()

    def resolve(self, name: str) -> Path:
        """Resolve a template name inside the template directory."""
        if not isinstance(name, str) or not name:
            raise TemplateNotFound(str(name))

        base = self.template_dir.resolve()
        path = (base / name).resolve()
        if base != path and base not in path.parents:
            raise TemplateNotFound(name)
        if not path.is_file():
            raise TemplateNotFound(name)
        return path

    def load(self, name: str) -> Dict[str, Any]:
        """
        Load (or return the cached) template document.

        Raises:
            TemplateNotFound: If the name escapes the directory or the file is missing
            MalformedTemplate: If the file is not JSON or has no `layers` list
        """
        path = self.resolve(name)

        with self._lock:
            cached = self._cache.get(path)
            if cached is not None:
                return cached

            document = self._read(path)
            self._cache[path] = document

        logger.info(
            f"📄 Loaded template {path.name}: {len(document['layers'])} layers, "
            f"{document.get('w')}x{document.get('h')} @ {document.get('fr')} fps"
        )
        return document

    def describe(self, name: str) -> TemplateInfo:
        """Return template metadata (frame rate, range, size, layer count)."""
        document = self.load(name)
        return TemplateInfo(
            name=document.get("nm") or name,
            version=document.get("v"),
            frame_rate=float(document.get("fr") or 0),
            in_point=float(document.get("ip") or 0),
            out_point=float(document.get("op") or 0),
            width=int(document.get("w") or 0),
            height=int(document.get("h") or 0),
            layer_count=len(document["layers"]),
        )

    def invalidate(self, name: Optional[str] = None) -> None:
        """Drop one template (or all of them) from the cache."""
        with self._lock:
            if name is None:
                self._cache.clear()
                return
            self._cache.pop((self.template_dir / name).resolve(), None)

    @staticmethod
    def _read(path: Path) -> Dict[str, Any]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Template {path} is not valid JSON: {e}")
            raise MalformedTemplate(f"{path.name} is not valid JSON: {e}") from e

        if not isinstance(document, dict) or not isinstance(document.get("layers"), list):
            raise MalformedTemplate(f"{path.name} has no 'layers' list")
        return document
