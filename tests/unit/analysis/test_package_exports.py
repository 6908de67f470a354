"""Unit tests for the force_feedback.analysis package namespace."""

from unittest.mock import patch

import pytest

import force_feedback.analysis as analysis


class TestLazyProvider:
    """Tests for the lazily resolved tree-sitter provider."""

    def test_provider_is_imported_on_access(self):
        """Without the provider module the rest of the package still works."""
        with patch.dict(
            "sys.modules",
            {"force_feedback.analysis.tree_sitter_provider": None},
        ):
            assert analysis.resolve_tier(3, []) is None
            with pytest.raises(ImportError):
                analysis.TreeSitterSyntaxProvider  # noqa: B018

    def test_provider_resolves_on_access(self):
        pytest.importorskip("tree_sitter_c_sharp")
        from force_feedback.analysis.tree_sitter_provider import (
            TreeSitterSyntaxProvider,
        )

        assert analysis.TreeSitterSyntaxProvider is TreeSitterSyntaxProvider

    def test_unknown_attribute(self):
        with pytest.raises(AttributeError):
            analysis.NoSuchProvider  # noqa: B018
