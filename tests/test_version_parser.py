"""Tests for NuGet version parsing and CSV splitting."""

import pytest

from versioning.parser import parse_nuget_version, sort_versions_desc, split_csv


class TestSplitCsv:
    """Test comma-separated CLI values."""

    def test_trims_and_drops_empty(self):
        assert split_csv(" a, b ,,c ,") == ["a", "b", "c"]

    def test_removes_duplicates_keeping_order(self):
        assert split_csv("b,a,b") == ["b", "a"]

    @pytest.mark.parametrize("value", [None, "", " , ,"])
    def test_empty(self, value):
        assert split_csv(value) == []


class TestParseNuGetVersion:
    """Test version parsing."""

    def test_pads_release_parts(self):
        ver = parse_nuget_version("1.2")
        assert ver.release == (1, 2, 0, 0)
        assert ver.normalized == "1.2.0"

    def test_keeps_non_zero_revision(self):
        assert parse_nuget_version("1.2.3.4").normalized == "1.2.3.4"
        assert parse_nuget_version("1.2.3.0").normalized == "1.2.3"

    def test_prerelease_is_case_insensitive(self):
        upper = parse_nuget_version("1.0.0-BETA")
        lower = parse_nuget_version("1.0.0-beta")
        assert upper.sort_key == lower.sort_key
        assert upper.precedence.prerelease == ("beta",)

    def test_build_metadata_ignored_for_ordering(self):
        assert parse_nuget_version("1.0.0+abc").sort_key == parse_nuget_version("1.0.0").sort_key

    @pytest.mark.parametrize("text", ["", "abc", "1.2.3.4.5", "1.0.0-", "v1.0.0"])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            parse_nuget_version(text)


class TestSortVersionsDesc:
    """Test ordering."""

    def test_semver_ordering(self):
        ordered = sort_versions_desc(["1.0.0-alpha", "1.0.0", "1.0.0-alpha.1", "1.0.0-beta", "0.9.9"])
        assert [str(v) for v in ordered] == ["1.0.0", "1.0.0-beta", "1.0.0-alpha.1", "1.0.0-alpha", "0.9.9"]

    def test_revision_orders_after_patch(self):
        ordered = sort_versions_desc(["1.0.0", "1.0.0.1", "1.0.1"])
        assert [str(v) for v in ordered] == ["1.0.1", "1.0.0.1", "1.0.0"]

    def test_skips_invalid_with_warning(self, caplog):
        ordered = sort_versions_desc(["1.0.0", "not-a-version"], "TestPackage")
        assert [str(v) for v in ordered] == ["1.0.0"]
        assert "not-a-version" in caplog.text
