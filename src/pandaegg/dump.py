"""YAML rendering of a bound scene graph."""

from __future__ import annotations

from io import StringIO

from ruamel.yaml import YAML

from pandaegg.models import EggScene


def scene_to_data(scene: EggScene, exclude_none: bool = False) -> dict:
    """Convert a scene into plain dicts/lists ready for serialization."""
    return scene.model_dump(mode="json", exclude_none=exclude_none)


def render_scene_yaml(scene: EggScene, exclude_none: bool = False) -> str:
    """Render a scene graph as block-style YAML."""
    data = scene_to_data(scene, exclude_none=exclude_none)

    yml = YAML(typ="rt")
    yml.allow_unicode = True
    yml.default_flow_style = False
    stream = StringIO()
    yml.dump(data, stream)
    return stream.getvalue()
