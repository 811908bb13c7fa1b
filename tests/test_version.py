"""
Tests for installed version lookup.
"""

from importlib import metadata

from lq import version


class TestToolVersion:

    def test_installed_distribution(self, monkeypatch):
        seen = []

        def fake_version(name):
            seen.append(name)
            if name == "lq-templates":
                return "1.2.3"
            raise metadata.PackageNotFoundError(name)

        monkeypatch.setattr(version.metadata, "version", fake_version)
        assert version.tool_version() == "1.2.3"
        assert seen == ["lq-templates"]

    def test_source_checkout_fallback(self, monkeypatch):
        def missing(name):
            raise metadata.PackageNotFoundError(name)

        monkeypatch.setattr(version.metadata, "version", missing)
        assert version.tool_version() == "0.0.0"
