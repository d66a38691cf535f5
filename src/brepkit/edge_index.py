"""Directed-edge registry.

The registry maps an ordered vertex pair ``(a, b)`` to the half-edge that
runs from ``a`` to ``b``.  The first request for an undirected pair creates
both half-edges at once and pairs them as twins, so later requests in
either direction find the existing objects.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from brepkit.errors import RegistryConsistencyError
from brepkit.topology import Edge, HalfEdge, Vertex

logger = logging.getLogger(__name__)


class EdgeIndex:
    """Registry of half-edges keyed by directed vertex pair.

    Half-edges are stored in :attr:`arena` in creation order; their twin
    links are indices into it.
    """

    def __init__(self):
        self.arena: List[HalfEdge] = []
        self._halfs: Dict[Tuple[Vertex, Vertex], HalfEdge] = {}

    def __len__(self):
        return len(self.arena)

    def __iter__(self) -> Iterator[HalfEdge]:
        return iter(self.arena)

    def __contains__(self, pair) -> bool:
        return tuple(pair) in self._halfs

    def half_edge(self, index: int) -> HalfEdge:
        return self.arena[index]

    def find(self, a: Vertex, b: Vertex) -> Optional[HalfEdge]:
        """Return the half-edge ``a -> b`` if it exists, else None."""
        return self._halfs.get((a, b))

    def resolve(self, a: Vertex, b: Vertex,
                curve_factory: Optional[Callable[[], list]] = None,
                inverted: bool = False, tag=None) -> HalfEdge:
        """Return the half-edge from ``a`` to ``b``, creating the twin pair
        on first request.

        Parameters
        ----------
        a, b : Vertex
            Start and end vertex.  Identity, not location, selects the edge.
        curve_factory : callable, optional
            Zero-argument callable producing the edge curve.  Stored
            unevaluated, and ignored if the edge already exists.
        inverted : bool, optional
            True if the curve runs from ``b`` to ``a``.
        tag : object, optional
            Opaque client data stored on the edge.

        Raises
        ------
        RegistryConsistencyError
            If ``a`` is ``b``, or the registry holds the pair in only one
            direction, or a stored half-edge does not join ``a`` and ``b``.
        """
        if a is b:
            raise RegistryConsistencyError(
                'topologically degenerate edge: start and end are the same vertex',
                {'vertex': a})

        he = self._halfs.get((a, b))
        reverse = self._halfs.get((b, a))

        if he is not None or reverse is not None:
            if he is None or reverse is None:
                raise RegistryConsistencyError(
                    'vertex pair registered in only one direction',
                    {'start': a, 'end': b, 'found': he or reverse})
            if he.start is not a or he.end is not b or he.twin() is not reverse:
                raise RegistryConsistencyError(
                    'registered half-edge does not match its key',
                    {'start': a, 'end': b, 'found': he})
            return he

        edge = Edge(a, b, curve_factory=curve_factory, tag=tag)
        he = HalfEdge(self.arena, edge, a, b, inverted)
        twin = HalfEdge(self.arena, edge, b, a, not inverted)
        he.set_twin(twin)
        self._halfs[(a, b)] = he
        self._halfs[(b, a)] = twin
        logger.debug('created half-edge pair #%d/#%d %r -> %r',
                     he.index, twin.index, a, b)
        return he

    get_half_edge_or_create = resolve
