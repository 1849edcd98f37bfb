"""Scene summaries for the ``inspect`` command."""

from __future__ import annotations

from collections import Counter
from typing import Iterator, Sequence

from pandaegg.models import (
    Bundle,
    EggScene,
    EntityGroup,
    GroupBase,
    Joint,
    Table,
    TextureGroup,
    VertexPool,
    XfmAnimation,
    XfmAnimationS,
)

INSPECT_SCHEMA_VERSION = 1


def walk(groups: Sequence[GroupBase], depth: int = 0) -> Iterator[tuple[int, GroupBase]]:
    """Yield ``(depth, group)`` for every group in the subtree, depth first."""
    for group in groups:
        yield depth, group
        yield from walk(_children(group), depth + 1)


def _children(group: GroupBase) -> list[GroupBase]:
    if isinstance(group, EntityGroup):
        return list(group.members)
    if isinstance(group, TextureGroup):
        return list(group.scalars)
    if isinstance(group, VertexPool):
        return list(group.references)
    if isinstance(group, Table):
        return [*group.tables, *group.bundles, *group.animations]
    if isinstance(group, Bundle):
        return list(group.tables)
    if isinstance(group, XfmAnimationS):
        return list(group.animations)
    if isinstance(group, Joint):
        return list(group.joints)
    return []


def inspect_scene(scene: EggScene) -> dict[str, object]:
    """Build a JSON-serializable summary of a scene."""
    kinds: Counter[str] = Counter()
    textures: list[dict[str, object]] = []
    pools: list[dict[str, object]] = []
    joints: list[dict[str, object]] = []
    animations: list[dict[str, object]] = []

    for depth, group in walk(scene.data):
        kinds[group.kind] += 1
        if isinstance(group, TextureGroup):
            textures.append({"name": group.name, "filepath": group.filepath})
        elif isinstance(group, VertexPool):
            pools.append({"name": group.name, "vertex_count": len(group.references)})
        elif isinstance(group, Joint):
            joints.append(
                {
                    "name": group.name,
                    "depth": depth,
                    "has_transform": group.transform is not None,
                    "has_default_pose": group.default_pose is not None,
                }
            )
        elif isinstance(group, (XfmAnimationS, XfmAnimation)):
            entry: dict[str, object] = {"name": group.name, "kind": group.kind, "fps": group.fps}
            if isinstance(group, XfmAnimation):
                entry["frame_count"] = len(group.frames)
            else:
                entry["channels"] = "".join(anim.variable for anim in group.animations)
            animations.append(entry)

    return {
        "inspect_schema_version": INSPECT_SCHEMA_VERSION,
        "summary": {
            "coordinate_system": scene.coordinate_system,
            "comment": scene.comment,
            "top_level_count": len(scene.data),
            "kinds": dict(sorted(kinds.items())),
        },
        "textures": textures,
        "vertex_pools": pools,
        "joints": joints,
        "animations": animations,
    }


def render_text(payload: dict[str, object]) -> str:
    """Render human-readable text output for inspect diagnostics."""
    lines: list[str] = []

    isv = payload.get("inspect_schema_version")
    if isv is not None:
        lines.append(f"inspect_schema_version: {isv}")

    summary = payload["summary"]
    lines.append("summary:")
    lines.append(f"  coordinate_system: {summary['coordinate_system']}")
    if summary["comment"] is not None:
        lines.append(f"  comment: {summary['comment']}")
    lines.append(f"  top_level_count: {summary['top_level_count']}")
    lines.append("  kinds:")
    for kind, count in summary["kinds"].items():
        lines.append(f"    {kind}: {count}")

    lines.append("textures:")
    textures = payload.get("textures", [])
    if textures:
        for texture in textures:
            lines.append(f"  - name: {texture['name']}")
            lines.append(f"    filepath: {texture['filepath']}")
    else:
        lines.append("  []")

    lines.append("vertex_pools:")
    pools = payload.get("vertex_pools", [])
    if pools:
        for pool in pools:
            lines.append(f"  - name: {pool['name']} vertex_count: {pool['vertex_count']}")
    else:
        lines.append("  []")

    lines.append("joints:")
    joints = payload.get("joints", [])
    if joints:
        for joint in joints:
            lines.append(f"  {'  ' * joint['depth']}- {joint['name']}")
    else:
        lines.append("  []")

    lines.append("animations:")
    animations = payload.get("animations", [])
    if animations:
        for anim in animations:
            lines.append(f"  - name: {anim['name']} kind: {anim['kind']} fps: {anim['fps']}")
    else:
        lines.append("  []")

    return "\n".join(lines) + "\n"
