"""Tests for catalog filter building and validation."""

from unittest.mock import MagicMock

import pytest

from bundle_provisioner.errors import InvalidSymbolicNameError
from bundle_provisioner.errors import InvalidVersionError
from bundle_provisioner.errors import MalformedSpecificationError
from bundle_provisioner.scanners.obr.filters import FilterBuilder
from bundle_provisioner.scanners.obr.filters import LdapFilterValidator


@pytest.fixture
def builder() -> FilterBuilder:
    return FilterBuilder(LdapFilterValidator())


class TestFilterBuilder:
    def test_name_only(self, builder):
        assert builder.build("foo") == "(symbolicname=foo)"

    def test_name_and_version(self, builder):
        assert builder.build("foo/1.0") == "(&(symbolicname=foo)(version=1.0))"

    def test_too_many_separators(self, builder):
        with pytest.raises(MalformedSpecificationError, match="at most one version separator"):
            builder.build("a/b/c")

    @pytest.mark.parametrize("token", ["", "   ", None])
    def test_empty(self, builder, token):
        with pytest.raises(MalformedSpecificationError):
            builder.build(token)

    def test_invalid_name(self, builder):
        with pytest.raises(InvalidSymbolicNameError) as exc_info:
            builder.build("foo(bar")
        assert exc_info.value.token == "foo(bar"

    def test_invalid_version(self, builder):
        with pytest.raises(InvalidVersionError):
            builder.build("foo/1.0)")

    def test_name_error_is_distinct_from_version_error(self, builder):
        with pytest.raises(InvalidSymbolicNameError):
            builder.build("foo)/1.0")

    def test_validator_consulted_for_each_segment(self):
        validator = MagicMock()
        validator.validate.return_value = True

        FilterBuilder(validator).build("foo/2.0")

        assert [call.args[0] for call in validator.validate.call_args_list] == [
            "(symbolicname=foo)",
            "(&(symbolicname=foo)(version=2.0))",
        ]

    def test_version_rejected_by_validator(self):
        validator = MagicMock()
        validator.validate.side_effect = [True, False]
        with pytest.raises(InvalidVersionError):
            FilterBuilder(validator).build("foo/bad")


class TestLdapFilterValidator:
    @pytest.mark.parametrize(
        "expression",
        [
            "(symbolicname=foo)",
            "(&(symbolicname=foo)(version=1.0))",
            "(|(a=1)(b=2))",
            "(!(a=1))",
            "(version>=1.0)",
            "(version<=2.0)",
            "(name~=foo)",
            "(name=foo*)",
            r"(name=a\(b\))",
            "( & (a=1) (b=2) )",
        ],
    )
    def test_valid(self, expression):
        assert LdapFilterValidator().validate(expression) is True

    @pytest.mark.parametrize(
        "expression",
        [
            "",
            "symbolicname=foo",
            "(symbolicname=foo",
            "(symbolicname=foo))",
            "(symbolicname=fo(o)",
            "(=foo)",
            "(symbolic name=foo)",
            "(&)",
            "(a>1)",
            "(a=1\\",
        ],
    )
    def test_invalid(self, expression):
        assert LdapFilterValidator().validate(expression) is False
