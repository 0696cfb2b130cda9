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
import re
from dataclasses import dataclass, replace

import semver

from .errors import ParseError
from .stability import STABILITY_WEIGHTS

_VERSION_RE = re.compile(
    r"(?P<major>[0-9]+)"
    r"(?:\.(?P<minor>[0-9]+))?"
    r"(?:\.(?P<patch>[0-9]+))?"
    r"(?:\.(?P<revision>[0-9]+))?"
    r"(?P<extra>(?:\.[0-9]+)*)"
    r"(?:-(?P<prerelease>[0-9A-Za-z.-]+))?"
    r"(?:\+(?P<build>[0-9A-Za-z.-]+))?"
)
_NUMERIC_RE = re.compile(r"[0-9]+")


def _cmp(a: object, b: object) -> int:
    return (a > b) - (a < b)  # type: ignore[operator]


def _split_component(component: str) -> list[str]:
    """Split a prerelease/build string into segments, isolating digit runs.

    "RC1-dev" -> ["RC", "1", "-dev"]
    """
    component = re.sub(r"([0-9]+)", r".\1.", component)
    component = re.sub(r"\.{2,}", ".", component).strip(".")
    return [part for part in component.split(".") if part]


def _compare_stability(a: str, b: str) -> int | None:
    """Order two segments by stability weight.

    Returns None when neither segment is a stability keyword.
    """
    a_weight = STABILITY_WEIGHTS.get(a.lower())
    b_weight = STABILITY_WEIGHTS.get(b.lower())
    if a_weight is None and b_weight is None:
        return None
    if b_weight is None:
        return -1
    if a_weight is None:
        return 1
    # heavier (less mature) sorts first
    return _cmp(b_weight, a_weight)


def _compare_component(a: str, b: str, empty_is_greater: bool) -> int:
    if not a and not b:
        return 0
    if not a:
        return 1 if empty_is_greater else -1
    if not b:
        return -1 if empty_is_greater else 1

    a_parts = _split_component(a)
    b_parts = _split_component(b)
    for a_part, b_part in zip(a_parts, b_parts):
        result = _compare_stability(a_part, b_part)
        if result is None:
            a_numeric = _NUMERIC_RE.fullmatch(a_part) is not None
            b_numeric = _NUMERIC_RE.fullmatch(b_part) is not None
            if a_numeric and b_numeric:
                result = _cmp(int(a_part), int(b_part))
            elif a_numeric:
                result = -1
            elif b_numeric:
                result = 1
            else:
                result = _cmp(a_part, b_part)
        if result:
            return result

    return _cmp(len(a_parts), len(b_parts))


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class SemanticVersion:
    """A parsed canonical version: four numeric fields plus prerelease/build.

    Calendar versions may carry more numeric groups than four, those are
    kept in `extra`.

    Ordering compares the numeric fields, then the prerelease (a missing
    prerelease is the most mature), then the build metadata.
    """

    major: int
    minor: int = 0
    patch: int = 0
    revision: int = 0
    prerelease: str = ""
    build: str = ""
    extra: tuple[int, ...] = ()

    @property
    def release(self) -> tuple[int, ...]:
        """The numeric groups without trailing zero groups past the revision."""
        extra = list(self.extra)
        while extra and extra[-1] == 0:
            extra.pop()
        return (self.major, self.minor, self.patch, self.revision, *extra)

    @classmethod
    def parse(cls, text: str) -> "SemanticVersion":
        if not isinstance(text, str):
            raise TypeError("Version must be a string")
        return _parse(text)

    @classmethod
    def from_semver(cls, version: semver.Version) -> "SemanticVersion":
        return cls(
            major=version.major,
            minor=version.minor,
            patch=version.patch,
            prerelease=version.prerelease or "",
            build=version.build or "",
        )

    @classmethod
    def coerce(
        cls, value: "str | SemanticVersion | semver.Version"
    ) -> "SemanticVersion":
        if isinstance(value, SemanticVersion):
            return value
        if isinstance(value, semver.Version):
            return cls.from_semver(value)
        return cls.parse(value)

    def to_semver(self) -> semver.Version:
        """Convert to a python-semver Version.

        Raises ValueError if a revision or any further group is set, semver
        has no fourth field.
        """
        if self.revision or any(self.extra):
            raise ValueError(f"{self} has more than three numeric fields")
        return semver.Version(
            self.major,
            self.minor,
            self.patch,
            self.prerelease or None,
            self.build or None,
        )

    def change(self, **changes: int | str) -> "SemanticVersion":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)  # type: ignore[arg-type]

    def compare_by_precedence(self, other: "SemanticVersion") -> int:
        result = _cmp(self.release, other.release)
        if result:
            return result
        return _compare_component(self.prerelease, other.prerelease, True)

    def precedence_matches(self, other: "SemanticVersion") -> bool:
        return self.compare_by_precedence(other) == 0

    def compare(self, other: "SemanticVersion") -> int:
        result = self.compare_by_precedence(other)
        if result:
            return result
        return _compare_component(self.build, other.build, False)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: "SemanticVersion") -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self.compare(other) < 0

    def __hash__(self) -> int:
        # Prerelease/build compare loosely (case, leading zeros), keep them out.
        return hash(self.release)

    def __str__(self) -> str:
        version = f"{self.major}.{self.minor}.{self.patch}"
        if self.revision > 0 or self.extra:
            version += f".{self.revision}"
        version += "".join(f".{group}" for group in self.extra)
        if self.prerelease:
            version += f"-{self.prerelease}"
        if self.build:
            version += f"+{self.build}"
        return version


@functools.lru_cache(maxsize=4096)
def _parse(text: str) -> SemanticVersion:
    m = _VERSION_RE.fullmatch(text)
    if not m:
        raise ParseError(f"Invalid version {text!r}", fragment=text)
    return SemanticVersion(
        major=int(m.group("major")),
        minor=int(m.group("minor") or 0),
        patch=int(m.group("patch") or 0),
        revision=int(m.group("revision") or 0),
        prerelease=m.group("prerelease") or "",
        build=m.group("build") or "",
        extra=tuple(int(group) for group in m.group("extra").split(".")[1:]),
    )


def is_branch(version: str) -> bool:
    """Branch versions are the ones carrying a `dev-` prefix."""
    return version.startswith("dev-")


def compare_versions(left: str, right: str, compare_branches: bool = False) -> int | None:
    """Compare two canonical version strings.

    Returns None when a branch is involved and branches are not comparable.
    With `compare_branches`, branches order case-insensitively among
    themselves and below every numeric version.
    """
    left_is_branch = is_branch(left)
    right_is_branch = is_branch(right)
    if left_is_branch or right_is_branch:
        if not compare_branches:
            return None
        if left_is_branch and right_is_branch:
            return _cmp(left.casefold(), right.casefold())
        return -1 if left_is_branch else 1

    return SemanticVersion.parse(left).compare(SemanticVersion.parse(right))
