"""Tests for shell validation helpers."""

import pytest

from brepkit.builder import BrepBuilder
from brepkit.checks import check_shell, shell_summary, validate_shell
from brepkit.config import BuilderConfig
from brepkit.errors import ShellClosureError
from brepkit.topology import Loop


def _square_builder():
    b = BrepBuilder(BuilderConfig())
    v = [b.vertex(0, 0, 0), b.vertex(1, 0, 0), b.vertex(1, 1, 0), b.vertex(0, 1, 0)]
    b.face().loop(v)
    return b


class TestCheckShell:
    """Test shell closure checks."""

    def test_unbuilt_shell_fails(self):
        """Test warnings for a shell that was never built."""
        result = check_shell(_square_builder().shell)
        assert not result
        assert any('not linked' in w for w in result.warnings)
        assert any('twin has no loop' in w for w in result.warnings)
        assert any('without a carrier' in w for w in result.warnings)

    def test_built_shell_passes(self):
        """Test that a built shell passes."""
        result = check_shell(_square_builder().build())
        assert result.ok
        assert result.warnings == []

    def test_shared_half_edge_reported(self):
        """Test detection of a half-edge in two loops."""
        b = _square_builder()
        shell = b.build()
        sheet = shell.faces[0]
        he = sheet.outer_loop.half_edges[0]
        sheet.inner_loops.append(Loop(sheet))
        sheet.inner_loops[0].half_edges.append(he)
        result = check_shell(shell)
        assert not result
        assert any('more than one loop' in w for w in result.warnings)

    def test_unchained_loop_reported(self):
        """Test detection of a loop with a gap."""
        b = BrepBuilder(BuilderConfig())
        v = [b.vertex(0, 0, 0), b.vertex(1, 0, 0), b.vertex(1, 1, 0), b.vertex(0, 1, 0)]
        b.face().loop().edge(v[0], v[1]).edge(v[2], v[3]).edge(v[3], v[0])
        result = check_shell(b.build())
        assert any('do not chain' in w for w in result.warnings)


class TestValidateShell:
    """Test raising validation."""

    def test_raises_with_details(self):
        """Test the validation error and its details."""
        with pytest.raises(ShellClosureError) as excinfo:
            validate_shell(_square_builder().shell)
        assert excinfo.value.details['warnings']

    def test_closed_shell_ok(self):
        """Test that validation accepts a built shell."""
        validate_shell(_square_builder().build())


class TestSummary:
    """Test shell entity counts."""

    def test_open_square_counts(self):
        """Test entity counts of a capped square sheet."""
        summary = shell_summary(_square_builder().build())
        assert summary == {
            'faces': 5,
            'null_faces': 4,
            'loops': 5,
            'half_edges': 8,
            'vertices': 4,
        }
