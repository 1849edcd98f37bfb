"""Pydantic v2 models for the typed EGG scene graph."""

from __future__ import annotations

from typing import Annotated, Literal, Union

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_FPS = 24
DEFAULT_ORDER: tuple[str, ...] = ("s", "p", "r", "h", "t")
DEFAULT_CONTENTS: tuple[str, ...] = ("i", "j", "k", "p", "r", "h", "x", "y", "z")


def _zero_matrix() -> list[list[float]]:
    return [[0.0] * 4 for _ in range(4)]


# --- value types ---


class VertexUV(BaseModel):
    model_config = ConfigDict(extra="forbid")

    u: float
    v: float
    w: float = 0.0


class VertexRGBA(BaseModel):
    model_config = ConfigDict(extra="forbid")

    r: float = 1.0
    g: float = 1.0
    b: float = 1.0
    a: float = 1.0


class VertexNormal(BaseModel):
    model_config = ConfigDict(extra="forbid")

    x: float
    y: float
    z: float


class VertexReference(BaseModel):
    """Indices into the vertex pool named by ``pool``; never resolved here."""

    model_config = ConfigDict(extra="forbid")

    indices: list[int]
    pool: str


class Transform(BaseModel):
    """A 4x4 row-major matrix; all zeros unless built from exactly 16 values."""

    model_config = ConfigDict(extra="forbid")

    matrix: list[list[float]] = Field(default_factory=_zero_matrix)

    def as_array(self) -> np.ndarray:
        return np.asarray(self.matrix, dtype=float)

    @property
    def is_zero(self) -> bool:
        return not np.any(self.as_array())


# --- groups ---


class GroupBase(BaseModel):
    model_config = ConfigDict(extra="forbid")

    value: str = ""
    name: str = ""


class GenericGroup(GroupBase):
    """Any entry type the binder does not model."""

    kind: Literal["generic"] = "generic"
    type_name: str = ""


class EntityGroup(GroupBase):
    kind: Literal["entity"] = "entity"
    dart: str = "structured"
    object_type: str = ""
    is_collision: bool = False
    collision_type: str = ""
    members: list[Group] = []


class TextureGroup(GroupBase):
    kind: Literal["texture"] = "texture"
    filepath: str = ""
    scalars: list[Group] = []


class Vertex(GroupBase):
    kind: Literal["vertex"] = "vertex"
    index: int
    x: float
    y: float
    z: float
    w: float = 0.0
    uv: VertexUV | None = None
    rgba: VertexRGBA | None = None
    normal: VertexNormal | None = None


class VertexPool(GroupBase):
    kind: Literal["vertex_pool"] = "vertex_pool"
    references: list[Vertex] = []


class Polygon(GroupBase):
    kind: Literal["polygon"] = "polygon"
    # Name of a TextureGroup, looked up by consumers.
    texture_ref: str | None = None
    vertex_ref: VertexReference | None = None


class SAnimation(GroupBase):
    """One animated component (``x``, ``h``, ``i``...) with a value per frame."""

    kind: Literal["s_anim"] = "s_anim"
    variable: str = Field(min_length=1, max_length=1)
    values: list[float] = []


class XfmAnimationS(GroupBase):
    kind: Literal["xfm_anim_s"] = "xfm_anim_s"
    fps: int = DEFAULT_FPS
    animations: list[SAnimation] = []


class XfmAnimation(GroupBase):
    """Per-frame transform table; each row of ``frames`` is one frame."""

    kind: Literal["xfm_anim"] = "xfm_anim"
    fps: int = DEFAULT_FPS
    order: list[str] = Field(default_factory=lambda: list(DEFAULT_ORDER))
    contents: list[str] = Field(default_factory=lambda: list(DEFAULT_CONTENTS))
    frames: list[list[float]] = []

    def as_array(self) -> np.ndarray:
        return np.asarray(self.frames, dtype=float).reshape(len(self.frames), len(self.order))


Animation = Annotated[
    Union[XfmAnimationS, SAnimation, XfmAnimation],
    Field(discriminator="kind"),
]


class Table(GroupBase):
    kind: Literal["table"] = "table"
    tables: list[Table] = []
    bundles: list[Bundle] = []
    animations: list[Animation] = []


class Bundle(GroupBase):
    kind: Literal["bundle"] = "bundle"
    tables: list[Table] = []


class Joint(GroupBase):
    kind: Literal["joint"] = "joint"
    joints: list[Joint] = []
    transform: Transform | None = None
    default_pose: Transform | None = None


Group = Annotated[
    Union[
        GenericGroup,
        EntityGroup,
        TextureGroup,
        VertexPool,
        Vertex,
        Polygon,
        Table,
        Bundle,
        SAnimation,
        XfmAnimationS,
        XfmAnimation,
        Joint,
    ],
    Field(discriminator="kind"),
]


class EggScene(BaseModel):
    """Root of a parsed EGG document."""

    model_config = ConfigDict(extra="forbid")

    coordinate_system: str = "Z-Up"
    comment: str | None = None
    data: list[Group] = []


for _model in (EntityGroup, TextureGroup, Table, Bundle, Joint, EggScene):
    _model.model_rebuild()
