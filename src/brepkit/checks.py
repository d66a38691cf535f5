"""Validation helpers for finished shells."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Dict, List

from brepkit.errors import ShellClosureError
from brepkit.topology import Shell


@dataclass
class CheckResult:
    ok: bool
    warnings: List[str]

    def __bool__(self) -> bool:
        return self.ok


def check_shell(shell: Shell) -> CheckResult:
    """Check the closure invariant of a built shell.

    Every half-edge must have a twin that points back at it and runs the
    other way, must be linked into the loop that holds it, must not appear
    in more than one loop, and its twin must be in a loop too.  Every face
    must have a carrier surface and every loop must chain end to start.
    """
    warnings: List[str] = []
    uses = Counter()
    unlinked = []
    orphan_twins = []
    asymmetric = []

    for face in shell.faces:
        for loop in face.loops:
            for he in loop.half_edges:
                uses[he.index] += 1
                if he.loop is not loop:
                    unlinked.append(he.index)
                twin = he.twin()
                if twin is None or twin.twin() is not he \
                        or twin.start is not he.end or twin.end is not he.start:
                    asymmetric.append(he.index)
                elif twin.loop is None:
                    orphan_twins.append(he.index)

    shared = sorted(i for i, count in uses.items() if count > 1)
    if unlinked:
        warnings.append(f'half-edges not linked into their loop: {sorted(unlinked)}')
    if orphan_twins:
        warnings.append(f'half-edges whose twin has no loop: {sorted(orphan_twins)}')
    if asymmetric:
        warnings.append(f'half-edges with a broken twin pairing: {sorted(asymmetric)}')
    if shared:
        warnings.append(f'half-edges used by more than one loop: {shared}')

    no_surface = [i for i, face in enumerate(shell.faces) if face.surface is None]
    if no_surface:
        warnings.append(f'faces without a carrier surface: {no_surface}')

    # null faces hold a single open half-edge and never chain
    unchained = [i for i, face in enumerate(shell.faces)
                 if not face.is_null and any(loop.half_edges and not loop.is_chained() for loop in face.loops)]
    if unchained:
        warnings.append(f'faces with loops that do not chain: {unchained}')

    return CheckResult(not warnings, warnings)


def validate_shell(shell: Shell) -> None:
    """Raise :class:`ShellClosureError` unless :func:`check_shell` passes."""
    result = check_shell(shell)
    if not result:
        raise ShellClosureError('shell is not closed: ' + '; '.join(result.warnings),
                                {'warnings': result.warnings})


def shell_summary(shell: Shell) -> Dict[str, int]:
    """Return entity counts for ``shell``."""
    half_edges = list(shell.half_edges())
    return {
        'faces': len(shell.faces),
        'null_faces': sum(1 for f in shell.faces if f.is_null),
        'loops': sum(len(f.loops) for f in shell.faces),
        'half_edges': len(half_edges),
        'vertices': len(shell.vertices()),
    }


__all__ = ['CheckResult', 'check_shell', 'validate_shell', 'shell_summary']
