"""Topological entities assembled by :class:`brepkit.builder.BrepBuilder`.

Hierarchy:
- Vertex: a point, compared by identity
- Edge: the undirected edge shared by a twin pair; owns the carrier curve
- HalfEdge: a directed use of an edge, paired with its twin
- Loop: a cyclic sequence of half-edges bounding a face
- Face: one outer loop, any number of inner (hole) loops, a carrier surface
- Shell: an ordered collection of faces

Half-edges live in an arena owned by the edge registry.  A half-edge knows
its own arena ``index`` and the index of its twin; :meth:`HalfEdge.twin`
resolves the latter through the arena.
"""

from __future__ import annotations

from typing import Callable, Iterator, List, Optional

from brepkit.curves import reverse_curve, sample_curve
from brepkit.geom import point


# -----------------------------------------------------------------------------
# Vertex
# -----------------------------------------------------------------------------

class Vertex:
    """A topological vertex.

    Vertices hash by identity: two vertices at the same location are
    different vertices unless they are the same object.
    """

    __slots__ = ('point',)

    def __init__(self, location):
        self.point = point(location)

    def __repr__(self):
        return "Vertex({:g}, {:g}, {:g})".format(*self.point[:3])


# -----------------------------------------------------------------------------
# Edge
# -----------------------------------------------------------------------------

class Edge:
    """Undirected edge shared by the two half-edges of a twin pair.

    The carrier curve may be given directly or as a zero-argument factory.
    A factory is evaluated on the first access of :attr:`curve` and its
    result is cached.
    """

    def __init__(self, a: Vertex, b: Vertex, *, curve=None,
                 curve_factory: Optional[Callable[[], list]] = None, tag=None):
        self.a = a
        self.b = b
        self.tag = tag
        self._curve = curve
        self._curve_factory = curve_factory

    @property
    def curve(self):
        if self._curve_factory is not None:
            factory = self._curve_factory
            self._curve_factory = None
            self._curve = factory()
        return self._curve

    @property
    def curve_pending(self) -> bool:
        """True while a deferred curve factory has not been evaluated."""
        return self._curve_factory is not None


# -----------------------------------------------------------------------------
# HalfEdge
# -----------------------------------------------------------------------------

class HalfEdge:
    """A directed arc from ``start`` to ``end``.

    Attributes
    ----------
    index : int
        Position of this half-edge in its registry arena.
    edge : Edge
        The undirected edge this half-edge is one side of.
    inverted : bool
        True if the edge curve runs from ``end`` to ``start``.
    loop : Loop or None
        The loop this half-edge was linked into.
    next, prev : HalfEdge or None
        Neighbours within ``loop``, set by :meth:`Loop.link`.
    """

    def __init__(self, arena: List["HalfEdge"], edge: Edge, start: Vertex, end: Vertex,
                 inverted: bool = False):
        self._arena = arena
        self.index = len(arena)
        arena.append(self)
        self._twin_index = None
        self.edge = edge
        self.start = start
        self.end = end
        self.inverted = bool(inverted)
        self.loop = None
        self.next = None
        self.prev = None

    def __repr__(self):
        return "HalfEdge(#{}, {!r} -> {!r})".format(self.index, self.start, self.end)

    def twin(self) -> "HalfEdge":
        if self._twin_index is None:
            return None
        return self._arena[self._twin_index]

    def set_twin(self, other: "HalfEdge") -> None:
        """Pair this half-edge with ``other``; a pairing is made exactly once."""
        if self._twin_index is not None or other._twin_index is not None:
            raise ValueError('half-edge already has a twin')
        if other._arena is not self._arena:
            raise ValueError('twins must share an arena')
        self._twin_index = other.index
        other._twin_index = self.index

    @property
    def curve(self):
        return self.edge.curve

    @property
    def tag(self):
        return self.edge.tag

    @property
    def face(self):
        return self.loop.face if self.loop is not None else None

    def traversal_curve(self):
        """The edge curve oriented from ``start`` to ``end``, or None."""
        curve = self.curve
        if curve is None:
            return None
        return reverse_curve(curve) if self.inverted else curve

    def tess(self, samples: int = 16) -> List[list]:
        """Points along the half-edge from ``start`` up to (excluding) ``end``."""
        curve = self.traversal_curve()
        if curve is None:
            return [point(self.start.point)]
        return sample_curve(curve, samples)[:-1]


# -----------------------------------------------------------------------------
# Loop
# -----------------------------------------------------------------------------

class Loop:
    """A cyclic sequence of half-edges."""

    def __init__(self, face: Optional["Face"] = None):
        self.face = face
        self.half_edges: List[HalfEdge] = []

    def __repr__(self):
        return "Loop({} half-edges)".format(len(self.half_edges))

    def __len__(self):
        return len(self.half_edges)

    def __iter__(self) -> Iterator[HalfEdge]:
        return iter(self.half_edges)

    def link(self) -> None:
        """Set ``loop``, ``next`` and ``prev`` on every member half-edge.

        Linking is idempotent.
        """
        n = len(self.half_edges)
        for i, he in enumerate(self.half_edges):
            he.loop = self
            he.next = self.half_edges[(i + 1) % n]
            he.prev = self.half_edges[(i - 1) % n]

    def is_linked(self) -> bool:
        n = len(self.half_edges)
        return all(he.loop is self
                   and he.next is self.half_edges[(i + 1) % n]
                   and he.prev is self.half_edges[(i - 1) % n]
                   for i, he in enumerate(self.half_edges))

    def is_chained(self) -> bool:
        """True if each half-edge ends where the next one starts."""
        n = len(self.half_edges)
        return all(he.end is self.half_edges[(i + 1) % n].start
                   for i, he in enumerate(self.half_edges))

    def vertices(self) -> List[Vertex]:
        return [he.start for he in self.half_edges]

    def tess(self, samples: int = 16) -> List[list]:
        """Ordered boundary points of the linked loop.

        Walks ``next`` pointers from the first half-edge, so the loop must
        have been linked.
        """
        if not self.half_edges:
            return []
        if not self.is_linked():
            raise ValueError('loop must be linked before tessellation')
        points = []
        first = self.half_edges[0]
        he = first
        while True:
            points.extend(he.tess(samples))
            he = he.next
            if he is first:
                break
        return points


# -----------------------------------------------------------------------------
# Face
# -----------------------------------------------------------------------------

class Face:
    """A face bounded by an outer loop and optional inner loops.

    ``surface`` is the carrier (a ``brep_surface``) or None until one is
    supplied or synthesized.  ``is_null`` marks capping faces created while
    closing a shell.
    """

    def __init__(self, surface=None, *, is_null: bool = False):
        self.surface = surface
        self.outer_loop = Loop(self)
        self.inner_loops: List[Loop] = []
        self.is_null = is_null

    def __repr__(self):
        return "Face(loops={}, null={})".format(len(self.loops), self.is_null)

    @property
    def loops(self) -> List[Loop]:
        return [self.outer_loop] + self.inner_loops

    @property
    def edges(self) -> Iterator[HalfEdge]:
        for loop in self.loops:
            yield from loop.half_edges


# -----------------------------------------------------------------------------
# Shell
# -----------------------------------------------------------------------------

class Shell:
    """Ordered collection of faces."""

    def __init__(self):
        self.faces: List[Face] = []

    def __repr__(self):
        return "Shell({} faces)".format(len(self.faces))

    def half_edges(self) -> Iterator[HalfEdge]:
        for face in self.faces:
            yield from face.edges

    def vertices(self) -> List[Vertex]:
        seen = set()
        result = []
        for he in self.half_edges():
            for v in (he.start, he.end):
                if id(v) not in seen:
                    seen.add(id(v))
                    result.append(v)
        return result


__all__ = ['Vertex', 'Edge', 'HalfEdge', 'Loop', 'Face', 'Shell']
