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

import functools
from collections.abc import Iterable

from .constraint import Operator, VersionConstraint
from .errors import ParseError
from .gh_logging import Logger
from .parser import VersionParser
from .version import compare_versions

log = Logger(__name__)

_default_parser = VersionParser()


def get_parser() -> VersionParser:
    return _default_parser


def set_parser(parser: VersionParser) -> None:
    """Replace the parser used when none is passed explicitly.

    This is a configuration step: call it once, before versions are
    matched from several threads.
    """
    global _default_parser
    log.debug(f"Replacing default version parser with {type(parser).__name__}")
    _default_parser = parser


def satisfies(
    version: str, constraints: str, parser: VersionParser | None = None
) -> bool:
    """Check whether `version` satisfies the constraint expression.

    Raises ParseError if either the version or the expression is invalid.
    """
    parser = parser or _default_parser
    provider = VersionConstraint(Operator.EQ, parser.normalize(version))
    return parser.parse_constraints(constraints).matches(provider)


def satisfies_by(
    versions: Iterable[str],
    constraints: str,
    parser: VersionParser | None = None,
    skip_invalid: bool = False,
) -> list[str]:
    """Return the versions satisfying the expression, in input order.

    With `skip_invalid`, versions that cannot be normalized are reported as
    warnings and left out instead of aborting the whole call.
    """
    parser = parser or _default_parser
    constraint = parser.parse_constraints(constraints)

    result: list[str] = []
    for version in versions:
        try:
            normalized = parser.normalize(version)
        except ParseError as e:
            if not skip_invalid:
                raise
            log.warning(f"Skipping invalid version {version!r}: {e}")
            continue

        if constraint.matches(VersionConstraint(Operator.EQ, normalized)):
            result.append(version)
    return result


def sort(
    versions: Iterable[str],
    descending: bool = False,
    parser: VersionParser | None = None,
) -> list[str]:
    """Sort the versions by their normalized form, returning the input strings.

    The sort is stable; branches order below numeric versions.
    """
    parser = parser or _default_parser
    keyed = [(parser.normalize(version), version) for version in versions]

    def compare(left: tuple[str, str], right: tuple[str, str]) -> int:
        if left[0] == right[0]:
            return 0
        return compare_versions(left[0], right[0], compare_branches=True) or 0

    keyed.sort(key=functools.cmp_to_key(compare), reverse=descending)
    return [version for _, version in keyed]


def rsort(versions: Iterable[str], parser: VersionParser | None = None) -> list[str]:
    return sort(versions, descending=True, parser=parser)
