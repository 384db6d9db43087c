"""Tests for the submit-resolve-partition protocol."""

import pytest

from bundle_provisioner.errors import ScannerError
from bundle_provisioner.scanners.obr.resolution import ResolutionAdapter
from bundle_provisioner.scanners.obr.resolution import ResolutionResult


class TestSelect:
    def test_first_match_wins(self, make_resource, make_catalog):
        old = make_resource("foo", "1.0.0")
        new = make_resource("foo", "2.0.0")
        adapter = ResolutionAdapter(make_catalog([old, new]))

        assert adapter.select("foo", "(symbolicname=foo)") is old

    def test_no_match_names_token(self, make_catalog):
        adapter = ResolutionAdapter(make_catalog([]))
        with pytest.raises(ScannerError, match=r"\[foo/1.0\]") as exc_info:
            adapter.select("foo/1.0", "(&(symbolicname=foo)(version=1.0))")
        assert exc_info.value.token == "foo/1.0"


class TestResolve:
    def test_adds_candidates_and_resolves_once(self, make_resource, make_catalog):
        a, b = make_resource("a"), make_resource("b")
        catalog = make_catalog([a, b])

        ResolutionAdapter(catalog).resolve([a, b])

        assert len(catalog.resolvers) == 1
        assert catalog.resolvers[0].added == [a, b]
        assert catalog.resolvers[0].resolve_calls == 1

    def test_zero_candidates_still_resolves(self, make_catalog):
        catalog = make_catalog([])
        result = ResolutionAdapter(catalog).resolve([])
        assert catalog.resolvers[0].resolve_calls == 1
        assert result.required == [] and result.optional == []

    def test_required_and_optional_read_separately(self, make_resource, make_catalog):
        a, c, d = make_resource("a"), make_resource("c"), make_resource("d")
        catalog = make_catalog([a], required={"a": [c]}, optional={"a": [d]})

        result = ResolutionAdapter(catalog).resolve([a])

        assert result.required == [c]
        assert result.optional == [d]

    def test_failed_resolution(self, make_resource, make_catalog):
        catalog = make_catalog([])
        catalog.succeed = False
        with pytest.raises(ScannerError, match=r"package=org\.missing"):
            ResolutionAdapter(catalog).resolve([make_resource("a")])

    def test_resolver_exception_is_chained(self, make_resource, make_catalog):
        catalog = make_catalog([])
        catalog.error = RuntimeError("solver crashed")
        with pytest.raises(ScannerError, match="solver crashed") as exc_info:
            ResolutionAdapter(catalog).resolve([make_resource("a")])
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_requires_catalog(self):
        with pytest.raises(ValueError):
            ResolutionAdapter(None)


class TestOrdered:
    def test_explicit_then_required_then_optional(self, make_resource):
        a, b, c, d = (make_resource(name) for name in "abcd")
        result = ResolutionResult(required=[c], optional=[d])
        assert result.ordered([a, b]) == [a, b, c, d]

    def test_deduplicates_by_url(self, make_resource):
        a, b, c = (make_resource(name) for name in "abc")
        result = ResolutionResult(required=[a, c, c], optional=[c, b])
        assert result.ordered([a, b]) == [a, b, c]
