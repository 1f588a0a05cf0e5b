"""Module export tests."""

from __future__ import annotations

import skill_dispatch


class TestModuleExports:
    """Test the public package surface."""

    def test_all_names_resolve(self):
        """Test every name in __all__ is importable from the package."""
        for name in skill_dispatch.__all__:
            assert hasattr(skill_dispatch, name), name

    def test_version(self):
        """Test version() returns the package version string."""
        assert skill_dispatch.version() == skill_dispatch.__version__
        assert isinstance(skill_dispatch.__version__, str)

    def test_subpackages_export_mapper_types(self):
        """Test the mapper types are the same objects from every path."""
        from skill_dispatch.mapper import RequestHandlerChain, RequestMapper

        assert RequestMapper is skill_dispatch.RequestMapper
        assert RequestHandlerChain is skill_dispatch.RequestHandlerChain
