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

import re

from .constraint import (
    AnyConstraint,
    EmptyConstraint,
    MultiConstraint,
    Operator,
    VersionConstraint,
)
from .errors import ParseError
from .gh_logging import Logger
from .stability import (
    MASTER_BRANCHES,
    STABILITY_FLAGS,
    VERSION_MASTER,
    VERSION_MAX,
    Stability,
    normalize_stability,
)
from .version import is_branch

log = Logger(__name__)

# Only stabilities known here may precede a numeric identifier;
# purely numeric prerelease identifiers are not supported.
_PRE_RELEASE = (
    r"[._-]?"
    r"(?P<pre>(?P<stability>stable|beta|b|RC|alpha|a|patch|pl|p)"
    r"(?P<identifier>(?:[.-]?\d+)+)?)?"
    r"(?:[.-]?(?P<is_branch>dev))?"
)
_BUILD = r"(?:\+(?P<build>[0-9A-Za-z.-]+))?"

_VERSION_NUMBER = (
    r"(?P<major>\d+)"
    r"(?:\.(?P<minor>\d+))?"
    r"(?:\.(?P<patch>\d+))?"
    r"(?:\.(?P<revision>\d+))?"
)
_VERSION = r"v?" + _VERSION_NUMBER + _PRE_RELEASE + _BUILD

# 1.2, v1.2.3.4-beta2, 1.0.0RC1dev
_CLASSIC_RE = re.compile(
    r"v?(?P<major>\d{1,5})"
    r"(?P<minor>\.\d+)?"
    r"(?P<patch>\.\d+)?"
    r"(?P<revision>\.\d+)?" + _PRE_RELEASE + _BUILD,
    re.IGNORECASE,
)
# 2010-01-02, 20100102-203040-p1
_CALVER_RE = re.compile(
    r"v?(?P<calver>(?P<year>\d{4})"
    r"(?P<time>(?:[.:-]?\d{2}){1,6})"
    r"(?P<micro>[.:-]?\d{1,3})?)" + _PRE_RELEASE + _BUILD,
    re.IGNORECASE,
)
_SUFFIX_RE = re.compile(_PRE_RELEASE + _BUILD + r"$", re.IGNORECASE)
_ALIAS_RE = re.compile(r"([^,\s]+)? as ([^,\s]+)", re.IGNORECASE)
_MASTER_RE = re.compile(
    r"(?:dev-)?(?:" + "|".join(MASTER_BRANCHES) + r")", re.IGNORECASE
)
_BUILD_METADATA_RE = re.compile(r"([^,\s+]+)\+\S+")
_DEV_SUFFIX_RE = re.compile(r"(.*?)[.-]?dev", re.IGNORECASE)
_BRANCH_WILDCARD_RE = re.compile(
    r"v?(\d+|[xX*])"
    r"(\.(?:\d+|[xX*]))?"
    r"(\.(?:\d+|[xX*]))?"
    r"(\.(?:\d+|[xX*]))?",
    re.IGNORECASE,
)

_FLAGS = "|".join(STABILITY_FLAGS)
_EXPRESSION_FLAG_RE = re.compile(r"([^,\s]*?)@(" + _FLAGS + r")", re.IGNORECASE)
_TERM_FLAG_RE = re.compile(r"([^,\s]+?)@(" + _FLAGS + r")", re.IGNORECASE)
_VCS_REFERENCE_RE = re.compile(
    r"(dev-[^,\s@]+?|[^,\s@]+?\.[xX*]-dev)#.+", re.IGNORECASE
)
_OR_SPLIT_RE = re.compile(r"\s*\|\|?\s*")
# Split on spaces/commas, but not next to an operator, a hyphen range,
# a doubled comma or an `as` alias.
_AND_SPLIT_RE = re.compile(r"(?<!^)(?<!as)(?<![=>< ,]) *(?<!-)[, ](?!-) *(?!,|as|$)")

_WILDCARD_RE = re.compile(r"v?[xX*](?:\.[xX*])*", re.IGNORECASE)
_TILDE_RE = re.compile(r"~" + _VERSION, re.IGNORECASE)
_CARET_RE = re.compile(r"\^" + _VERSION, re.IGNORECASE)
_X_RANGE_RE = re.compile(
    r"v?(?P<major>\d+)"
    r"(?:\.(?P<minor>\d+))?"
    r"(?:\.(?P<patch>\d+))?"
    r"(?:\.[xX*])+",
    re.IGNORECASE,
)
_HYPHEN_RANGE_RE = re.compile(_VERSION, re.IGNORECASE)
_HYPHEN_SPLIT_RE = re.compile(r" +- +")
_BASIC_RE = re.compile(
    r"(?P<operator><>|!=|>=?|<=?|==?)?\s*(?P<version>.*)", re.IGNORECASE | re.DOTALL
)

_PARTS = ("major", "minor", "patch", "revision")
_WILDCARDS = ("x", "X", "*")


def _manipulate_version(
    parts: dict[str, str | None], position: int, increment: int = 0, pad: int = 0
) -> str:
    """Build a four-field version from matched parts.

    Fields after `position` are set to `pad`, the field at `position` is
    raised by `increment`; missing fields count as 0.
    """
    position = max(0, position)
    fields: list[int] = []
    for index, name in enumerate(_PARTS):
        value = int(parts.get(name) or 0)
        if index > position:
            fields.append(pad)
        elif index == position and increment > 0:
            fields.append(value + increment)
        else:
            fields.append(value)
    return ".".join(str(f) for f in fields)


def _has_stability_suffix(version: str) -> bool:
    m = _SUFFIX_RE.search(version)
    return bool(m and (m.group("stability") or m.group("is_branch")))


def _collapse_contiguous(groups: list[AnyConstraint]) -> MultiConstraint | None:
    """Merge `[>= a < b] || [>= b < c]` into `[>= a < c]`.

    Only applies to exactly two plain ranges; anything carrying extra
    constraints is left alone.
    """
    if len(groups) != 2:
        return None

    bounds: list[VersionConstraint] = []
    for group in groups:
        if (
            not isinstance(group, MultiConstraint)
            or not group.conjunctive
            or len(group.constraints) != 2
        ):
            return None
        low, high = group.constraints
        if not (
            isinstance(low, VersionConstraint)
            and isinstance(high, VersionConstraint)
            and low.operator is Operator.GE
            and high.operator is Operator.LT
        ):
            return None
        bounds.extend((low, high))

    low, mid_high, mid_low, high = bounds
    if mid_high.version != mid_low.version:
        return None

    log.debug(f"Collapsing contiguous ranges {groups[0]} and {groups[1]}")
    return MultiConstraint(
        (
            VersionConstraint(Operator.GE, low.version),
            VersionConstraint(Operator.LT, high.version),
        )
    )


class VersionParser:
    """Normalizes version strings and parses constraint expressions."""

    @staticmethod
    def parse_stability(version: str) -> Stability:
        """Return the stability of a version string."""
        version = re.sub(r"#.+$", "", version).lower()
        if not version or version.startswith("dev-") or version.endswith("-dev"):
            return Stability.DEV

        m = _SUFFIX_RE.search(version)
        if not m:
            return Stability.STABLE
        if m.group("is_branch"):
            return Stability.DEV
        return Stability.parse(m.group("stability"))

    def normalize(self, version: str, full_version: str | None = None) -> str:
        """Normalize a version string so that it can be compared.

        `full_version` is the complete input the version was taken from; it
        is only used to explain alias errors.
        """
        version = version.strip()
        if full_version is None:
            full_version = version

        # dev-master as 1.0.0 -> dev-master
        if (m := _ALIAS_RE.fullmatch(version)) and m.group(1):
            log.debug(f"Ignoring alias in {version!r}")
            version = m.group(1)

        if _MASTER_RE.fullmatch(version):
            return VERSION_MASTER

        # branch names are kept as they are
        if version[:4].lower() == "dev-":
            return "dev-" + version[4:]

        # 1.0.0-beta.5+foo -> 1.0.0-beta.5
        if m := _BUILD_METADATA_RE.fullmatch(version):
            version = m.group(1)

        if m := _CLASSIC_RE.fullmatch(version):
            normalized = (
                m.group("major")
                + (m.group("minor") or ".0")
                + (m.group("patch") or ".0")
                + (m.group("revision") or ".0")
            )
        elif m := _CALVER_RE.fullmatch(version):
            normalized = re.sub(r"\D", ".", m.group("calver"))
            # 2010.01 reads as a classic version next time, give it its four fields
            groups = normalized.split(".")
            if len(groups[0]) <= 5 and len(groups) < 4:
                normalized += ".0" * (4 - len(groups))

        if m:
            if m.group("stability"):
                stability = normalize_stability(m.group("stability"))
                if stability == "stable":
                    return normalized
                identifier = (m.group("identifier") or "").lstrip(".-")
                normalized += f"-{stability}{identifier}"
            if m.group("is_branch"):
                normalized += "-dev"
            return normalized

        if m := _DEV_SUFFIX_RE.fullmatch(version):
            return self.normalize_branch(m.group(1))

        hint = None
        if re.search(" as " + re.escape(version) + "$", full_version, re.IGNORECASE):
            hint = "the alias must be an exact version"
        elif re.match(re.escape(version) + " as ", full_version, re.IGNORECASE):
            hint = (
                "the alias source must be an exact version, "
                "if it is a branch name you should prefix it with dev-"
            )

        message = f'Invalid version string "{version}"'
        if hint:
            message += f' in "{full_version}", {hint}'
        raise ParseError(message, fragment=version, hint=hint)

    def normalize_branch(self, branch: str) -> str:
        """Normalize a branch name so that it can be compared.

        Numeric branches (1.x, 2.4) become upper-bound dev versions,
        anything else becomes a `dev-` branch.
        """
        branch = branch.strip()
        if branch in MASTER_BRANCHES:
            return self.normalize(branch)

        if m := _BRANCH_WILDCARD_RE.fullmatch(branch):
            version = "".join(m.group(i) or ".*" for i in range(1, 5))
            version = re.sub(r"[xX]", "*", version)
            return version.replace("*", VERSION_MAX) + "-dev"

        if branch.startswith("dev-"):
            return branch
        return "dev-" + branch.lstrip("-")

    def parse_constraints(self, constraints: str) -> AnyConstraint:
        """Parse a constraint expression into a constraint tree.

        The original expression is kept as the pretty string of the result.
        Raises ParseError if any term cannot be parsed.
        """
        constraints = constraints or ""
        pretty = constraints

        # a trailing stability flag alone, ex: @dev, 1.0@beta
        if m := _EXPRESSION_FLAG_RE.fullmatch(constraints):
            constraints = m.group(1) or "*"

        # references on dev versions are irrelevant, ex: 1.0.x-dev#abcd123
        if m := _VCS_REFERENCE_RE.fullmatch(constraints):
            log.debug(f"Ignoring VCS reference in {constraints!r}")
            constraints = m.group(1)

        or_groups: list[AnyConstraint] = []
        for or_constraint in _OR_SPLIT_RE.split(constraints.strip()):
            parsed = [
                constraint
                for term in _AND_SPLIT_RE.split(or_constraint)
                for constraint in self._parse_constraint(term)
            ]
            if len(parsed) == 1:
                or_groups.append(parsed[0])
            else:
                or_groups.append(MultiConstraint(tuple(parsed)))

        if len(or_groups) == 1:
            result = or_groups[0]
        else:
            result = _collapse_contiguous(or_groups) or MultiConstraint(
                tuple(or_groups), conjunctive=False
            )

        return result.with_pretty(pretty)

    def _parse_constraint(self, constraint: str) -> list[AnyConstraint]:
        if not constraint:
            raise ParseError(
                f'Could not parse version constraint "{constraint}"',
                fragment=constraint,
            )

        # a stability flag only applies to basic comparators, record it now
        stability_modifier = None
        if m := _TERM_FLAG_RE.fullmatch(constraint):
            constraint = m.group(1)
            if m.group(2).lower() != "stable":
                stability_modifier = m.group(2)

        if _WILDCARD_RE.fullmatch(constraint):
            return [EmptyConstraint()]

        if constraint.startswith("~") and (m := _TILDE_RE.fullmatch(constraint)):
            return self._tilde_range(m, constraint[1:])

        if constraint.startswith("^") and (m := _CARET_RE.fullmatch(constraint)):
            return self._caret_range(m, constraint[1:])

        if constraint.endswith(_WILDCARDS) and (
            m := _X_RANGE_RE.fullmatch(constraint)
        ):
            return self._x_range(m)

        if " - " in constraint:
            segments = _HYPHEN_SPLIT_RE.split(constraint)
            if len(segments) == 2:
                left = _HYPHEN_RANGE_RE.fullmatch(segments[0])
                right = _HYPHEN_RANGE_RE.fullmatch(segments[1])
                if left and right:
                    return self._hyphen_range(left, right)

        return self._basic_comparator(constraint, stability_modifier)

    def _lower_bound(self, m: re.Match[str], version: str) -> VersionConstraint:
        # unsuffixed lower bounds include the prereleases of that version
        suffix = ""
        if not m.group("stability") and not m.group("is_branch"):
            suffix = "-dev"
        return VersionConstraint(Operator.GE, self.normalize(version + suffix))

    def _tilde_range(self, m: re.Match[str], version: str) -> list[AnyConstraint]:
        """~1.2 -> >=1.2 <2.0, ~1.2.3 -> >=1.2.3 <1.3"""
        if m.group("revision"):
            position = 3
        elif m.group("patch"):
            position = 2
        elif m.group("minor"):
            position = 1
        else:
            position = 0

        high = _manipulate_version(m.groupdict(), position - 1, 1) + "-dev"
        return [self._lower_bound(m, version), VersionConstraint(Operator.LT, high)]

    def _caret_range(self, m: re.Match[str], version: str) -> list[AnyConstraint]:
        """Allows changes that keep the left-most non-zero field: ^0.2.3 -> >=0.2.3 <0.3"""
        if not m.group("minor") or int(m.group("major")) != 0:
            position = 0
        elif not m.group("patch") or int(m.group("minor")) != 0:
            position = 1
        else:
            position = 2

        high = _manipulate_version(m.groupdict(), position, 1) + "-dev"
        return [self._lower_bound(m, version), VersionConstraint(Operator.LT, high)]

    def _x_range(self, m: re.Match[str]) -> list[AnyConstraint]:
        if m.group("patch"):
            position = 2
        elif m.group("minor"):
            position = 1
        else:
            position = 0

        low = _manipulate_version(m.groupdict(), position) + "-dev"
        high = _manipulate_version(m.groupdict(), position, 1) + "-dev"
        if low == "0.0.0.0-dev":
            return [VersionConstraint(Operator.LT, high)]
        return [VersionConstraint(Operator.GE, low), VersionConstraint(Operator.LT, high)]

    def _hyphen_range(
        self, left: re.Match[str], right: re.Match[str]
    ) -> list[AnyConstraint]:
        """Inclusive range; a partial upper version accepts everything it prefixes."""
        lower = self._lower_bound(left, left.group(0))

        if (
            (right.group("minor") and right.group("patch"))
            or right.group("stability")
            or right.group("is_branch")
        ):
            upper = VersionConstraint(Operator.LE, self.normalize(right.group(0)))
        else:
            parts = {"major": right.group("major"), "minor": right.group("minor")}
            position = 1 if right.group("minor") else 0
            high = _manipulate_version(parts, position, 1) + "-dev"
            upper = VersionConstraint(Operator.LT, high)

        return [lower, upper]

    def _basic_comparator(
        self, constraint: str, stability_modifier: str | None
    ) -> list[AnyConstraint]:
        """<>, !=, >=, <=, ==, =, >, < or a bare version."""
        m = _BASIC_RE.fullmatch(constraint)
        if not m:
            raise ParseError(
                f'Could not parse version constraint "{constraint}"',
                fragment=constraint,
            )

        operator = m.group("operator") or "="
        version = m.group("version")
        try:
            normalized = self.normalize(version)
        except ParseError as e:
            hint = str(e)
            if m.group("operator") and _X_RANGE_RE.fullmatch(version):
                hint = (
                    "wildcard versions cannot be combined with an operator, "
                    f"use {version} or {m.group('operator')}{version.rstrip('.xX*')} "
                    "instead"
                )
            raise ParseError(
                f'Could not parse version constraint "{constraint}": {hint}',
                fragment=constraint,
                hint=hint,
            ) from e

        if stability_modifier and self.parse_stability(normalized) is Stability.STABLE:
            normalized += f"-{Stability.parse(stability_modifier).label}"
        elif (
            operator in ("<", ">=")
            and not is_branch(normalized)
            and normalized != VERSION_MASTER
            and not _has_stability_suffix(version)
        ):
            # "< 1.2.3" must also exclude 1.2.3-alpha and friends
            normalized += "-dev"

        return [VersionConstraint(operator, normalized)]
