"""Tests for gocross.targets (parse_target, parse_targets, resolve, unmatched)."""

import io

import pytest

from gocross.errors import InvalidTargetError
from gocross.log import make_logger
from gocross.models import DistInfo, TargetFilter
from gocross.targets import parse_target, parse_targets, resolve, unmatched


class TestParseTarget:
    def test_os_and_arch(self) -> None:
        assert parse_target("windows/x86") == TargetFilter(os="windows", arch="x86")

    def test_case_folded(self) -> None:
        assert parse_target("WINDOWS/X86") == TargetFilter(os="windows", arch="x86")
        assert parse_target("WINDOWS/x86") == TargetFilter(os="windows", arch="x86")

    def test_os_only(self) -> None:
        assert parse_target("windows") == TargetFilter(os="windows", arch="")

    def test_empty_raises(self) -> None:
        with pytest.raises(InvalidTargetError, match="invalid target specification"):
            parse_target("")

    def test_two_separators_raises(self) -> None:
        with pytest.raises(InvalidTargetError, match="invalid target specification"):
            parse_target("a/b/c")

    def test_empty_sides_pass_through(self) -> None:
        assert parse_target("/amd64") == TargetFilter(os="", arch="amd64")
        assert parse_target("linux/") == TargetFilter(os="linux", arch="")

    def test_invalid_target_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_target("")

    def test_str_round_trips_display(self) -> None:
        assert str(TargetFilter("linux")) == "linux"
        assert str(TargetFilter("linux", "arm64")) == "linux/arm64"


class TestParseTargets:
    def test_drops_invalid_with_warning(self) -> None:
        stream = io.StringIO()
        logger = make_logger(stream=stream)
        filters, accepted = parse_targets(["Linux", "", "a/b/c", "darwin/ARM64"], logger)
        assert filters == [TargetFilter("linux"), TargetFilter("darwin", "arm64")]
        assert accepted == ["Linux", "darwin/ARM64"]
        out = stream.getvalue()
        assert "'a/b/c'" in out
        assert "''" in out

    def test_no_input(self) -> None:
        assert parse_targets([]) == ([], [])


class TestResolve:
    def test_empty_filters_is_identity(self, catalog: list[DistInfo]) -> None:
        assert resolve([], catalog) == catalog

    def test_os_only_filter(self, catalog: list[DistInfo]) -> None:
        res = resolve([TargetFilter("linux")], catalog)
        assert res == [DistInfo("linux", "x86", True, True), DistInfo("linux", "arm64", True, True)]

    def test_windows_only(self, catalog: list[DistInfo]) -> None:
        assert resolve([TargetFilter("windows")], catalog) == [catalog[0]]

    def test_os_and_arch_filter(self, catalog: list[DistInfo]) -> None:
        assert resolve([TargetFilter("linux", "x86")], catalog) == [catalog[2]]

    def test_filter_order_outer_catalog_order_inner(self, catalog: list[DistInfo]) -> None:
        res = resolve([TargetFilter("bsd"), TargetFilter("linux")], catalog)
        assert [str(d) for d in res] == ["bsd/arm64", "linux/x86", "linux/arm64"]

    def test_overlapping_filters_keep_duplicates(self, catalog: list[DistInfo]) -> None:
        res = resolve([TargetFilter("linux"), TargetFilter("linux", "arm64")], catalog)
        assert [str(d) for d in res] == ["linux/x86", "linux/arm64", "linux/arm64"]

    def test_no_match_is_empty_not_error(self, catalog: list[DistInfo]) -> None:
        assert resolve([TargetFilter("plan9")], catalog) == []
        assert resolve([TargetFilter("", "arm64")], catalog) == []

    def test_does_not_mutate_catalog(self, catalog: list[DistInfo]) -> None:
        before = list(catalog)
        resolve([TargetFilter("linux")], catalog)
        assert catalog == before

    def test_arch_must_match_exactly(self, catalog: list[DistInfo]) -> None:
        assert resolve([TargetFilter("darwin", "x86")], catalog) == []


class TestUnmatched:
    def test_lists_filters_without_match(self, catalog: list[DistInfo]) -> None:
        filters = [TargetFilter("linux"), TargetFilter("plan9"), TargetFilter("darwin", "x86")]
        assert unmatched(filters, catalog) == [TargetFilter("plan9"), TargetFilter("darwin", "x86")]
