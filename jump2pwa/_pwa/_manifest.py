"""Web App Manifest rendering.

Defines app metadata for installation on home screens.
"""

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..config import ManifestConfig

MANIFEST_FILENAME = "manifest.json"


def manifest_dict(config: "ManifestConfig") -> dict:
    """Return the manifest as a dict in the order it is serialized."""
    return {
        "name": config.name,
        "short_name": config.short_name,
        "start_url": config.start_url,
        "display": config.display,
        "orientation": config.orientation,
        "background_color": config.background_color,
        "theme_color": config.theme_color,
        "icons": [icon.to_dict() for icon in config.icons],
    }


def render_manifest(config: "ManifestConfig") -> str:
    """Render manifest.json content.

    Output is indented with two spaces and ends with a newline. Identical
    input always produces identical bytes.
    """
    return json.dumps(manifest_dict(config), indent=2, ensure_ascii=False) + "\n"
