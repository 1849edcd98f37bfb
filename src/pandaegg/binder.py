"""Binding of generic entries onto the typed scene-graph models."""

from __future__ import annotations

import logging
import re
from typing import Callable, Iterable, Sequence

import numpy as np

from pandaegg.entries import Entry
from pandaegg.errors import ConversionError
from pandaegg.models import (
    DEFAULT_CONTENTS,
    DEFAULT_FPS,
    DEFAULT_ORDER,
    Bundle,
    EggScene,
    EntityGroup,
    GenericGroup,
    Group,
    Joint,
    Polygon,
    SAnimation,
    Table,
    TextureGroup,
    Transform,
    Vertex,
    VertexNormal,
    VertexPool,
    VertexReference,
    VertexRGBA,
    VertexUV,
    XfmAnimation,
    XfmAnimationS,
)
from pandaegg.warning_policy import WarningPolicy, emit_warning

logger = logging.getLogger(__name__)

ANIMATION_TYPES: tuple[str, ...] = ("Xfm$Anim_S$", "S$Anim", "Xfm$Anim")


# Plain decimal notation only: no digit separators, nan or infinity.
_FLOAT_PATTERN = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


def _to_float(raw: str, what: str) -> float:
    if not _FLOAT_PATTERN.fullmatch(raw):
        raise ConversionError(f"{what}: cannot parse {raw!r} as a number")
    return float(raw)


def _to_int(raw: str, what: str) -> int:
    if not _INT_PATTERN.fullmatch(raw):
        raise ConversionError(f"{what}: cannot parse {raw!r} as an integer")
    return int(raw)


def _floats(entry: Entry, count: int | None = None) -> list[float]:
    """Parse the first ``count`` values (all values when None) of an entry."""
    what = f"<{entry.type_name}> {entry.name}".rstrip()
    values = entry.values if count is None else entry.values[:count]
    if count is not None and len(values) < count:
        raise ConversionError(f"{what}: expected {count} values, got {len(entry.values)}")
    return [_to_float(raw, what) for raw in values]


def _scalar(entry: Entry, name: str) -> str | None:
    """First value of the ``<Scalar> name`` child, or None when absent."""
    child = entry.find("Scalar", name)
    if child is None:
        return None
    return child.first_value(f"<Scalar> {name}")


def _fps(entry: Entry) -> int:
    raw = _scalar(entry, "fps")
    return DEFAULT_FPS if raw is None else _to_int(raw, "<Scalar> fps")


def _matrix_transform(
    entry: Entry | None, policy: WarningPolicy | None
) -> Transform | None:
    """Build a Transform from the ``<Matrix4>`` nested in ``entry``."""
    if entry is None:
        return None
    matrix4 = entry.find("Matrix4")
    if matrix4 is None:
        return None
    if len(matrix4.values) != 16:
        emit_warning(
            "W02",
            f"<Matrix4> in <{entry.type_name}> has {len(matrix4.values)} values, "
            "expected 16; transform left as zeros",
            policy=policy,
        )
        return Transform()
    matrix = np.asarray(_floats(matrix4), dtype=float).reshape(4, 4)
    return Transform(matrix=matrix.tolist())


class Binder:
    """Dispatches entries to their per-type binding rule."""

    def __init__(self, warning_policy: WarningPolicy | None = None) -> None:
        self.warning_policy = warning_policy
        self._rules: dict[str, Callable[[Entry], Group]] = {
            "Group": self._bind_entity,
            "Texture": self._bind_texture,
            "VertexPool": self._bind_vertex_pool,
            "Vertex": self._bind_vertex,
            "Polygon": self._bind_polygon,
            "Table": self._bind_table,
            "Bundle": self._bind_bundle,
            "S$Anim": self._bind_s_anim,
            "Xfm$Anim_S$": self._bind_xfm_anim_s,
            "Xfm$Anim": self._bind_xfm_anim,
            "Joint": self._bind_joint,
        }

    @property
    def recognized_types(self) -> frozenset[str]:
        return frozenset(self._rules)

    def bind(self, entry: Entry) -> Group:
        rule = self._rules.get(entry.type_name)
        if rule is None:
            return GenericGroup(
                name=entry.name,
                value=entry.values[0] if entry.values else "",
                type_name=entry.type_name,
            )
        return rule(entry)

    def bind_many(self, entries: Iterable[Entry]) -> list[Group]:
        return [self.bind(entry) for entry in entries]

    def _bind_entity(self, entry: Entry) -> EntityGroup:
        group = EntityGroup(name=entry.name)

        dart = entry.find("Dart")
        if dart is not None:
            group.dart = dart.first_value("<Dart>")
        object_type = entry.find("ObjectType")
        if object_type is not None:
            group.object_type = object_type.first_value("<ObjectType>")
        collide = entry.find("Collide")
        if collide is not None:
            group.is_collision = True
            group.collision_type = collide.first_value("<Collide>")

        members = [c for c in entry.children if c.type_name not in ("Dart", "ObjectType")]
        group.members = self.bind_many(members)
        return group

    def _bind_texture(self, entry: Entry) -> TextureGroup:
        return TextureGroup(
            name=entry.name,
            filepath=entry.filepath,
            scalars=self.bind_many(entry.children),
        )

    def _bind_vertex_pool(self, entry: Entry) -> VertexPool:
        return VertexPool(
            name=entry.name,
            references=[self._bind_vertex(child) for child in entry.find_all("Vertex")],
        )

    def _bind_vertex(self, entry: Entry) -> Vertex:
        x, y, z = _floats(entry, 3)
        vertex = Vertex(
            name=entry.name,
            index=_to_int(entry.name, "<Vertex> index"),
            x=x,
            y=y,
            z=z,
        )
        if len(entry.values) > 3:
            vertex.w = _to_float(entry.values[3], f"<Vertex> {entry.name}")

        rgba = entry.find("RGBA")
        if rgba is not None:
            r, g, b, a = _floats(rgba, 4)
            vertex.rgba = VertexRGBA(r=r, g=g, b=b, a=a)

        uv = entry.find("UV")
        if uv is not None:
            u, v = _floats(uv, 2)
            vertex.uv = VertexUV(u=u, v=v)
            if len(uv.values) > 2:
                vertex.uv.w = _to_float(uv.values[2], "<UV>")

        normal = entry.find("Normal")
        if normal is not None:
            nx, ny, nz = _floats(normal, 3)
            vertex.normal = VertexNormal(x=nx, y=ny, z=nz)
        return vertex

    def _bind_polygon(self, entry: Entry) -> Polygon:
        polygon = Polygon(name=entry.name)

        tref = entry.find("TRef")
        if tref is not None:
            polygon.texture_ref = tref.first_value("<TRef>")

        vertex_ref = entry.find("VertexRef")
        if vertex_ref is not None:
            if not vertex_ref.children:
                raise ConversionError("<VertexRef> has no nested pool reference")
            polygon.vertex_ref = VertexReference(
                indices=[_to_int(raw, "<VertexRef>") for raw in vertex_ref.values],
                pool=vertex_ref.children[0].first_value("<VertexRef> pool"),
            )
        return polygon

    def _bind_table(self, entry: Entry) -> Table:
        return Table(
            name=entry.name,
            tables=[self._bind_table(child) for child in entry.find_all("Table")],
            bundles=[self._bind_bundle(child) for child in entry.find_all("Bundle")],
            animations=self.bind_many(entry.find_all(*ANIMATION_TYPES)),
        )

    def _bind_bundle(self, entry: Entry) -> Bundle:
        return Bundle(
            name=entry.name,
            tables=[self._bind_table(child) for child in entry.find_all("Table")],
        )

    def _bind_s_anim(self, entry: Entry) -> SAnimation:
        if not entry.name:
            raise ConversionError("<S$Anim> has no variable name")
        values = entry.find("V")
        return SAnimation(
            name=entry.name,
            variable=entry.name[0],
            values=_floats(values) if values is not None else [],
        )

    def _bind_xfm_anim_s(self, entry: Entry) -> XfmAnimationS:
        return XfmAnimationS(
            name=entry.name,
            fps=_fps(entry),
            animations=[self._bind_s_anim(child) for child in entry.find_all("S$Anim")],
        )

    def _bind_xfm_anim(self, entry: Entry) -> XfmAnimation:
        emit_warning(
            "W01",
            f"<Xfm$Anim> {entry.name} uses the per-frame table format, "
            "which is only partially supported",
            policy=self.warning_policy,
        )
        order = _scalar(entry, "order")
        contents = _scalar(entry, "contents")
        animation = XfmAnimation(
            name=entry.name,
            fps=_fps(entry),
            order=list(order) if order is not None else list(DEFAULT_ORDER),
            contents=list(contents) if contents is not None else list(DEFAULT_CONTENTS),
        )
        animation.frames = self._frames(entry, len(animation.order))
        return animation

    def _frames(self, entry: Entry, columns: int) -> list[list[float]]:
        source = entry
        if not entry.values:
            source = entry.find("V") or entry
        count = len(source.values)
        rows = count // columns
        if rows * columns != count:
            emit_warning(
                "W03",
                f"<Xfm$Anim> {entry.name} has {count} values, not a multiple of "
                f"{columns}; {count - rows * columns} trailing values dropped",
                policy=self.warning_policy,
            )
        values = _floats(source)[: rows * columns]
        return np.asarray(values, dtype=float).reshape(rows, columns).tolist()

    def _bind_joint(self, entry: Entry) -> Joint:
        return Joint(
            name=entry.name,
            joints=[self._bind_joint(child) for child in entry.find_all("Joint")],
            transform=_matrix_transform(entry.find("Transform"), self.warning_policy),
            default_pose=_matrix_transform(entry.find("DefaultPose"), self.warning_policy),
        )


def bind(entry: Entry, *, warning_policy: WarningPolicy | None = None) -> Group:
    """Bind one entry (and its subtree) to its scene-graph variant.

    Raises:
        ConversionError: When a numeric value cannot be parsed or a required
            child value is missing.
    """
    return Binder(warning_policy).bind(entry)


def bind_all(
    entries: Sequence[Entry], *, warning_policy: WarningPolicy | None = None
) -> EggScene:
    """Bind a document's top-level entries into an EggScene.

    ``<CoordinateSystem>`` and ``<Comment>`` fill the scene's own fields;
    every other entry becomes one element of ``data``.
    """
    binder = Binder(warning_policy)
    scene = EggScene()
    data: list[Group] = []
    for entry in entries:
        if entry.type_name == "CoordinateSystem":
            scene.coordinate_system = entry.first_value("<CoordinateSystem>")
        elif entry.type_name == "Comment":
            scene.comment = entry.filepath or " ".join(entry.values)
        else:
            data.append(binder.bind(entry))
    scene.data = data

    logger.debug("Bound %d groups (coordinate system %s)", len(data), scene.coordinate_system)
    return scene
