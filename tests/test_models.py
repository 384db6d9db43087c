"""Tests for specification parsing and result types."""

from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from bundle_provisioner.errors import MalformedSpecificationError
from bundle_provisioner.models import BundleReference
from bundle_provisioner.models import InstallableBundle
from bundle_provisioner.models import InstallableBundles
from bundle_provisioner.models import Specification


class TestSpecification:
    def test_splits_on_first_separator(self):
        spec = Specification.parse("scan-obr:file:/etc/web.obr")
        assert spec.scheme == "scan-obr"
        assert spec.path == "file:/etc/web.obr"

    def test_empty_path_is_allowed(self):
        spec = Specification.parse("scan-file:")
        assert spec.scheme == "scan-file"
        assert spec.path == ""

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank_spec_is_malformed(self, value):
        with pytest.raises(MalformedSpecificationError):
            Specification.parse(value)

    def test_missing_separator_is_malformed(self):
        with pytest.raises(MalformedSpecificationError, match="noseparator"):
            Specification.parse("noseparator")

    def test_empty_scheme_is_malformed(self):
        with pytest.raises(MalformedSpecificationError):
            Specification.parse(":file:/x")

    def test_str_round_trips(self):
        assert str(Specification.parse("scan-dir:/opt")) == "scan-dir:/opt"


class TestBundleReference:
    def test_defaults_are_unset(self):
        reference = BundleReference(location="file:/a.jar")
        assert reference.start_level is None
        assert reference.start is None
        assert reference.update is None

    def test_is_immutable(self):
        reference = BundleReference(location="file:/a.jar")
        with pytest.raises(ValidationError):
            reference.start = True

    def test_rejects_non_positive_start_level(self):
        with pytest.raises(ValidationError):
            BundleReference(location="file:/a.jar", start_level=0)

    def test_with_defaults_only_fills_unset(self):
        reference = BundleReference(location="file:/a.jar", start=False)
        filled = reference.with_defaults(start_level=4, start=True, update=True)
        assert filled.start_level == 4
        assert filled.start is False
        assert filled.update is True
        assert reference.start_level is None

    def test_str_renders_directives(self):
        reference = BundleReference(location="file:/a.jar", start_level=3, start=False, update=True)
        assert str(reference) == "file:/a.jar@3@nostart@update"


class TestInstallableBundle:
    def test_assign_start_level_uses_binding(self):
        binding = MagicMock()
        installable = InstallableBundle(BundleReference(location="file:/a.jar", start_level=5), binding)

        assert installable.assign_start_level("bundle-handle") is True
        binding.set_bundle_start_level.assert_called_once_with("bundle-handle", 5)

    def test_assign_start_level_without_level(self):
        binding = MagicMock()
        installable = InstallableBundle(BundleReference(location="file:/a.jar"), binding)

        assert installable.assign_start_level("bundle-handle") is False
        binding.set_bundle_start_level.assert_not_called()

    def test_assign_start_level_without_binding(self):
        installable = InstallableBundle(BundleReference(location="file:/a.jar", start_level=5))
        assert installable.assign_start_level("bundle-handle") is False

    def test_collection_keeps_order(self):
        references = [BundleReference(location=f"file:/{name}.jar") for name in "abc"]
        bundles = InstallableBundles([InstallableBundle(reference) for reference in references])

        assert len(bundles) == 3
        assert bundles.references == references
        assert bundles[1].location == "file:/b.jar"
        assert [bundle.location for bundle in bundles] == ["file:/a.jar", "file:/b.jar", "file:/c.jar"]

    def test_empty_collection(self):
        assert len(InstallableBundles()) == 0
        assert InstallableBundles().references == []
