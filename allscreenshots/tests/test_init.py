"""Tests for allscreenshots.__init__ module."""

from __future__ import annotations


class TestPackageInit:
    def test_version_available(self):
        import allscreenshots
        from allscreenshots.shared.requests import USER_AGENT

        assert isinstance(allscreenshots.__version__, str)
        assert allscreenshots.__version__ != "unknown"
        assert USER_AGENT.endswith(allscreenshots.__version__)

    def test_all_exports_available(self):
        import allscreenshots

        for name in allscreenshots.__all__:
            assert hasattr(allscreenshots, name), f"Missing export: {name}"

    def test_error_hierarchy_exported(self):
        import allscreenshots

        for name in allscreenshots.__all__:
            if name.startswith("Allscreenshots") and name.endswith("Error"):
                assert issubclass(getattr(allscreenshots, name), allscreenshots.AllscreenshotsError)
