# *******************************************************************************
# Copyright (c) 2025 Contributors to the Eclipse Foundation
#
# See the NOTICE file(s) distributed with this work for additional
# information regarding copyright ownership.
#
# This program and the accompanying materials are made available under the
# terms of the Apache License Version 2.0 which is available at
# https://www.apache.org/licenses/LICENSE-2.0
#
# SPDX-License-Identifier: Apache-2.0
# *******************************************************************************

from unittest.mock import patch

import pytest

from version_constraints.errors import ParseError
from version_constraints.stability import VERSION_MASTER
from version_constraints.version import SemanticVersion, compare_versions


@pytest.mark.parametrize(
    "expected, version",
    [
        (VERSION_MASTER, "master"),
        (VERSION_MASTER, "trunk"),
        (VERSION_MASTER, "default"),
        (VERSION_MASTER, "dev-master"),
        (VERSION_MASTER, "dev-trunk"),
        (VERSION_MASTER, "dev-default"),
        (VERSION_MASTER, "dev-master as 1.0.0"),
        ("1.0.0.0", "1.0.0"),
        ("1.2.3.4", "1.2.3.4"),
        ("0.0.0.0", "0"),
        ("1.0.0.0", "v1.0.0.0"),
        ("1.0.0.0", "  1.0.0  "),
        ("1.0.0.0-RC1-dev", "1.0.0RC1dev"),
        ("1.0.0.0-RC15-dev", "1.0.0-rC15-dev"),
        ("1.0.0.0-RC15-dev", "1.0.0.RC.15-dev"),
        ("1.0.0.0-RC1", "1.0.0-rc1"),
        ("1.0.0.0-patch3-dev", "1.0.0-pl3-dev"),
        ("1.0.0.0-dev", "1.0-dev"),
        ("10.4.13.0-beta", "10.4.13-beta"),
        ("10.4.13.0-beta2", "10.4.13beta2"),
        ("10.4.13.0-beta2", "10.4.13beta.2"),
        ("10.4.13.0-beta", "10.4.13-b"),
        ("10.4.13.0-beta5", "10.4.13-b5"),
        ("1.2.3.0", "1.2.3-stable"),
    ],
)
def test_normalize_classic(parser, expected, version):
    assert parser.normalize(version) == expected


@pytest.mark.parametrize(
    "expected, version",
    [
        ("2010.01.0.0", "2010.01"),
        ("2010.01.02.0", "2010.01.02"),
        ("2010.1.555.0", "2010.1.555"),
        ("2010.10.200.0", "2010.10.200"),
        ("20100102", "v20100102"),
        ("2010.01.02.0", "2010-01-02"),
        ("2010.01.0.0", "2010-01"),
        ("2010.01.02.10.20.30", "2010-01-02-10-20-30"),
        ("2010.01.02.5", "2010-01-02.5"),
        ("20100102.203040", "20100102-203040"),
        ("20100102203040.10", "20100102203040-10"),
        ("20100102.203040-patch1", "20100102-203040-p1"),
        ("201903.0", "201903.0"),
        ("201903.0-patch2", "201903.0-p2"),
    ],
)
def test_normalize_calendar(parser, expected, version):
    assert parser.normalize(version) == expected
    # canonical output always reads back as a version
    SemanticVersion.parse(expected)


@pytest.mark.parametrize(
    "expected, version",
    [
        ("1.9999999.9999999.9999999-dev", "1.x-dev"),
        ("20100102.9999999.9999999.9999999-dev", "20100102.x-dev"),
        ("20100102.203040.9999999.9999999-dev", "20100102.203040.x-dev"),
        ("201903.9999999.9999999.9999999-dev", "201903.x-dev"),
        ("dev-feature-foo", "dev-feature-foo"),
        ("dev-FOOBAR", "DEV-FOOBAR"),
        ("dev-feature/foo", "dev-feature/foo"),
        ("dev-feature+issue-1", "dev-feature+issue-1"),
    ],
)
def test_normalize_branch_like(parser, expected, version):
    assert parser.normalize(version) == expected


@pytest.mark.parametrize(
    "expected, version",
    [
        ("1.0.0.0-beta5", "1.0.0-beta.5+foo"),
        ("1.0.0.0", "1.0.0.0+foo"),
        ("1.0.0.0-alpha3.1", "1.0.0.0-alpha3.1+foo"),
        ("1.0.0.0-alpha2.1", "1.0.0.0-a2.1+foo"),
        ("1.0.0.0-alpha2.1-3", "1.0.0.0-alpha2.1-3+foo"),
        ("1.0.0.0", "1.0.0.0+foo as 2.0"),
    ],
)
def test_normalize_drops_build_metadata(parser, expected, version):
    assert parser.normalize(version) == expected


@pytest.mark.parametrize(
    "version",
    [
        "1.0.0.0",
        "1.2.3.4-beta2",
        "1.0.0.0-RC1-dev",
        VERSION_MASTER,
        "dev-foo",
        "2010.01.02.0",
        "2010.01.02.10.20.30",
        "20100102",
        "20100102.203040-patch1",
        "201903.0",
    ],
)
def test_normalize_is_idempotent(parser, version):
    assert parser.normalize(parser.normalize(version)) == version


def test_normalized_stabilities_order(parser):
    ordered = [parser.normalize(t) for t in ["1.0.0-alpha", "1.0.0-beta", "1.0.0-RC", "1.0.0"]]
    for lower, higher in zip(ordered, ordered[1:]):
        assert compare_versions(lower, higher) == -1


def test_normalize_logs_stripped_alias(parser, mock_logger):
    with patch("version_constraints.parser.log", mock_logger):
        parser.normalize("dev-master as 1.0.0")
    assert mock_logger.debug_messages == ["Ignoring alias in 'dev-master as 1.0.0'"]


class TestNormalizeFailures:
    @pytest.mark.parametrize(
        "version",
        ["", "1.0.0-meh", "1.0#abcd123", "foo bar", "a", "1.0.0.0.0"],
    )
    def test_invalid(self, parser, version):
        with pytest.raises(ParseError) as exc_info:
            parser.normalize(version)
        assert exc_info.value.fragment == version
        assert exc_info.value.hint is None

    def test_alias_source_must_be_exact(self, parser):
        with pytest.raises(ParseError) as exc_info:
            parser.normalize("feature as 1.0")
        assert exc_info.value.fragment == "feature"
        assert "prefix it with dev-" in exc_info.value.hint
        assert 'in "feature as 1.0"' in str(exc_info.value)

    def test_alias_target_must_be_exact(self, parser):
        with pytest.raises(ParseError) as exc_info:
            parser.normalize("feature", full_version="1.0 as feature")
        assert exc_info.value.hint == "the alias must be an exact version"


@pytest.mark.parametrize(
    "expected, branch",
    [
        ("1.9999999.9999999.9999999-dev", "v1.x"),
        ("1.9999999.9999999.9999999-dev", "v1.*"),
        ("1.0.9999999.9999999-dev", "v1.0"),
        ("2.0.9999999.9999999-dev", "v2.0"),
        ("1.0.9999999.9999999-dev", "v1.0.X"),
        ("1.0.3.9999999-dev", "v1.0.3.*"),
        ("2.4.0.9999999-dev", "v2.4.0"),
        ("2.4.4.9999999-dev", "v2.4.4"),
        (VERSION_MASTER, "master"),
        (VERSION_MASTER, "trunk"),
        (VERSION_MASTER, "default"),
        ("dev-feature-a", "feature-a"),
        ("dev-feature-a", "dev-feature-a"),
        ("dev-FOOBAR", "FOOBAR"),
        ("dev-feature+issue-1", "feature+issue-1"),
        ("dev-feature+issue-1", "-feature+issue-1"),
        ("dev-rpi", "rpi"),
        ("dev-fooo", "fooo"),
    ],
)
def test_normalize_branch(parser, expected, branch):
    assert parser.normalize_branch(branch) == expected
