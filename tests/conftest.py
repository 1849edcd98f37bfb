"""Shared EGG documents for tests."""

import pytest

MODEL_EGG = """\
<CoordinateSystem> { Z-Up }
<Comment> {
  "egg-trans -o box.egg box-src.egg"
}

<Texture> wood {
  "maps/wood.png"
  <Scalar> format { rgba }
  <Scalar> wrapu { repeat }
}

<VertexPool> box.verts {
  <Vertex> 0 {
    0.0 0.0 0.0
    <UV> { 0.0 0.0 }
    <Normal> { 0 0 1 }
  }
  <Vertex> 1 {
    1.0 0.0 0.0
    <UV> { 1.0 0.0 }
  }
  <Vertex> 2 {
    1.0 1.0 0.0
    <RGBA> { 1 0 0 1 }
  }
}

// collision geometry for the box
<Group> box {
  <Dart> { 1 }
  <ObjectType> { barrier }
  <Collide> box { Polyset keep descend }
  <Polygon> {
    <TRef> { wood }
    <VertexRef> { 0 1 2 <Ref> { box.verts } }
  }
}
"""

ACTOR_EGG = """\
<CoordinateSystem> { Z-Up }
<Group> character {
  <Dart> { 1 }
  <Joint> root {
    <Transform> {
      <Matrix4> {
        1 0 0 0
        0 1 0 0
        0 0 1 0
        0 0 0 1
      }
    }
    <DefaultPose> {
      <Matrix4> { 1 0 0 0 0 1 0 0 0 0 1 0 0 0 2 1 }
    }
    <Joint> spine {
      <Transform> { <Matrix4> { 1 0 0 0 0 1 0 0 0 0 1 0 0 0 1 1 } }
    }
  }
}
"""

ANIM_EGG = """\
<Table> {
  <Bundle> character {
    <Table> skeleton {
      <Table> root {
        <Xfm$Anim_S$> xform {
          <Scalar> fps { 30 }
          <S$Anim> x { <V> { 0 0.5 1 } }
          <S$Anim> h { <V> { 90 } }
        }
        <Table> spine {
          <Xfm$Anim_S$> xform {
            <S$Anim> z { <V> { 1 1 } }
          }
        }
      }
    }
  }
}
"""


@pytest.fixture
def model_egg():
    return MODEL_EGG


@pytest.fixture
def actor_egg():
    return ACTOR_EGG


@pytest.fixture
def anim_egg():
    return ANIM_EGG
