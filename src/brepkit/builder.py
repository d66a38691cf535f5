"""Imperative shell construction.

:class:`BrepBuilder` assembles a :class:`~brepkit.topology.Shell` from a
sequence of declaration calls::

    b = BrepBuilder()
    v0, v1, v2 = b.vertex(0, 0, 0), b.vertex(1, 0, 0), b.vertex(0, 1, 0)
    shell = b.face().loop([v0, v1, v2]).build()

``face`` opens a face, ``loop`` opens its outer loop and then any inner
loops, and ``edge`` appends half-edges to the open loop.  Edges are
resolved through an :class:`~brepkit.edge_index.EdgeIndex`, so the same
vertex pair used by two faces yields a pair of twins.

:meth:`BrepBuilder.build` finishes the shell in three passes: it links
every loop, gives each face without a carrier a synthesized bounding
surface, and caps every half-edge whose twin is not in any loop with a
single-edge null face.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from brepkit.bounding_surface import create_bounding_surface
from brepkit.config import BuilderConfig, get_default_config
from brepkit.curves import curve_param, split_curve_by_param
from brepkit.edge_index import EdgeIndex
from brepkit.errors import SequencingError
from brepkit.geom import point
from brepkit.topology import Face, HalfEdge, Loop, Shell, Vertex

logger = logging.getLogger(__name__)


def trim_curve(curve, a: Vertex, b: Vertex):
    """Return the part of ``curve`` running from vertex ``a`` to vertex ``b``.

    The curve is split at the parameter of ``a`` keeping the latter part,
    then that part is split at the parameter of ``b`` keeping the former.
    """
    trimmed = split_curve_by_param(curve, curve_param(curve, a.point))[1]
    if trimmed is None:
        raise ValueError('trim start lies at the end of the curve')
    trimmed = split_curve_by_param(trimmed, curve_param(trimmed, b.point))[0]
    if trimmed is None:
        raise ValueError('trim end does not lie after trim start on the curve')
    return trimmed


class BrepBuilder:
    """Chainable builder for a single shell.

    Parameters
    ----------
    config : BuilderConfig, optional
        Tessellation and surface-synthesis settings.  Defaults to
        :func:`brepkit.config.get_default_config`.
    """

    def __init__(self, config: Optional[BuilderConfig] = None):
        self.config = config if config is not None else get_default_config()
        self.edge_index = EdgeIndex()
        self._shell = Shell()
        self._face = None
        self._loop = None

    @property
    def shell(self) -> Shell:
        return self._shell

    @property
    def current_face(self) -> Optional[Face]:
        return self._face

    @property
    def current_loop(self) -> Optional[Loop]:
        return self._loop

    @property
    def last_half_edge(self) -> HalfEdge:
        """The half-edge most recently appended to the open loop."""
        if self._loop is None:
            raise SequencingError('no loop is open')
        if not self._loop.half_edges:
            raise SequencingError('the open loop has no half-edges')
        return self._loop.half_edges[-1]

    def face(self, surface=None) -> "BrepBuilder":
        """Start a new face, optionally with a carrier surface."""
        self._face = Face(surface)
        self._shell.faces.append(self._face)
        self._loop = None
        return self

    def loop(self, vertices: Optional[Sequence[Vertex]] = None) -> "BrepBuilder":
        """Open the face's outer loop, or a new inner loop if one is open.

        With ``vertices``, also add the edges joining consecutive vertices,
        closing back to the first.
        """
        if self._face is None:
            raise SequencingError('loop() called before face()')
        if self._loop is None:
            self._loop = self._face.outer_loop
        else:
            self._loop = Loop()
            self._face.inner_loops.append(self._loop)
        self._loop.face = self._face
        if vertices:
            n = len(vertices)
            for i in range(n):
                self.edge(vertices[i], vertices[(i + 1) % n])
        return self

    def edge(self, a: Vertex, b: Vertex,
             curve_factory: Optional[Callable[[], list]] = None,
             inverted: bool = False, tag=None) -> "BrepBuilder":
        """Append the half-edge ``a -> b`` to the open loop."""
        if self._loop is None:
            if self._face is None:
                raise SequencingError('edge() called before face()')
            raise SequencingError('edge() called before loop()')
        he = self.edge_index.resolve(a, b, curve_factory, inverted, tag)
        self._loop.half_edges.append(he)
        return self

    def edge_trim(self, a: Vertex, b: Vertex, curve) -> "BrepBuilder":
        """Append ``a -> b`` carried by the part of ``curve`` between them.

        The trim is deferred until the edge curve is first needed.
        """
        return self.edge(a, b, lambda: trim_curve(curve, a, b))

    def vertex(self, x: float, y: float, z: float) -> Vertex:
        """Create a new vertex; equal coordinates do not share vertices."""
        return Vertex(point(x, y, z))

    def build(self) -> Shell:
        """Link loops, synthesize missing carriers, and close the shell."""
        faces = list(self._shell.faces)

        for face in faces:
            for loop in face.loops:
                loop.link()

        cfg = self.config
        for face in faces:
            if face.surface is None:
                face.surface = create_bounding_surface(
                    face.outer_loop.tess(cfg.curve_samples),
                    tolerance=cfg.tolerance,
                    min_width=cfg.min_width,
                    min_height=cfg.min_height,
                    offset=cfg.offset)

        capped = 0
        for face in faces:
            for he in face.edges:
                twin = he.twin()
                if twin.loop is None:
                    null_face = Face(face.surface, is_null=True)
                    null_face.outer_loop.half_edges.append(twin)
                    null_face.outer_loop.link()
                    self._shell.faces.append(null_face)
                    capped += 1

        logger.debug('built shell: %d declared faces, %d capping faces, %d half-edges',
                     len(faces), capped, len(self.edge_index))
        return self._shell


__all__ = ['BrepBuilder', 'trim_curve']
