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

"""Constraint model: a leaf comparison, a conjunctive/disjunctive group of
constraints, and the empty constraint that allows everything.

Matching is symmetric in intent: `require.matches(provide)` is true when the
two constraints leave at least one version that satisfies both. A concrete
version is provided as `VersionConstraint("==", normalized_version)`.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Union

from .errors import InvalidOperatorError
from .version import compare_versions, is_branch


class Operator(Enum):
    EQ = "="
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="
    NE = "!="

    @classmethod
    def parse(cls, token: "str | Operator") -> "Operator":
        if isinstance(token, Operator):
            return token
        try:
            return _OPERATOR_TOKENS[token]
        except KeyError:
            raise InvalidOperatorError(token, _OPERATOR_TOKENS) from None

    @property
    def direction(self) -> str:
        """The operator without its "or equal" part ("<=" -> "<")."""
        return self.value.replace("=", "")

    @property
    def has_equal(self) -> bool:
        """True for "=", "<=", ">=" and "!=", the spellings holding an equal sign."""
        return "=" in self.value

    def check(self, result: int) -> bool:
        """Evaluate the operator against a three-way comparison result."""
        if self is Operator.EQ:
            return result == 0
        if self is Operator.NE:
            return result != 0
        if self is Operator.LT:
            return result < 0
        if self is Operator.LE:
            return result <= 0
        if self is Operator.GT:
            return result > 0
        return result >= 0


_OPERATOR_TOKENS = MappingProxyType(
    {
        "=": Operator.EQ,
        "==": Operator.EQ,
        "<": Operator.LT,
        "<=": Operator.LE,
        ">": Operator.GT,
        ">=": Operator.GE,
        "!=": Operator.NE,
        "<>": Operator.NE,
    }
)


def version_compare(
    left: str, right: str, operator: "str | Operator", compare_branches: bool = False
) -> bool:
    """Evaluate `left <operator> right` on canonical version strings."""
    op = Operator.parse(operator)
    if is_branch(left) and is_branch(right) and not compare_branches:
        return op is Operator.EQ and left == right

    result = compare_versions(left, right, compare_branches)
    if result is None:
        # branches never match numeric versions
        return False
    return op.check(result)


@dataclass(frozen=True)
class VersionConstraint:
    """A single `<operator> <version>` constraint on a canonical version."""

    operator: Operator
    version: str
    pretty: str | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "operator", Operator.parse(self.operator))

    def matches(self, provider: "AnyConstraint | None") -> bool:
        return matches(self, provider)

    def match_specific(
        self, provider: "VersionConstraint", compare_branches: bool = False
    ) -> bool:
        """Check whether this constraint and `provider` overlap.

        `compare_branches` lets branches order below numeric versions instead
        of never matching them; it is meant for diagnostics only.
        """
        op = self.operator
        provider_op = provider.operator

        # "!=" leaves room for a solution unless the other side pins the point
        if op is Operator.NE or provider_op is Operator.NE:
            if op is not Operator.EQ and provider_op is not Operator.EQ:
                return True
            return version_compare(
                provider.version, self.version, Operator.NE, compare_branches
            )

        # e.g. "<= 2.0" and "< 1.0": open in the same direction
        if op is not Operator.EQ and op.direction == provider_op.direction:
            return True

        if not version_compare(provider.version, self.version, op, compare_branches):
            return False

        # ">= 1.0" against "< 1.0": the shared boundary is excluded by provider
        if (
            provider.version == self.version
            and not provider_op.has_equal
            and op.has_equal
        ):
            return False
        return True

    def with_pretty(self, pretty: str | None) -> "VersionConstraint":
        return replace(self, pretty=pretty)

    @property
    def pretty_string(self) -> str:
        return self.pretty or str(self)

    def __str__(self) -> str:
        return f"{self.operator.value} {self.version}"


@dataclass(frozen=True)
class MultiConstraint:
    """A group of constraints that must all (conjunctive) or any
    (disjunctive) match."""

    constraints: tuple["AnyConstraint", ...]
    conjunctive: bool = True
    pretty: str | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "constraints", tuple(self.constraints))

    @property
    def disjunctive(self) -> bool:
        return not self.conjunctive

    def matches(self, provider: "AnyConstraint | None") -> bool:
        return matches(self, provider)

    def with_pretty(self, pretty: str | None) -> "MultiConstraint":
        return replace(self, pretty=pretty)

    @property
    def pretty_string(self) -> str:
        return self.pretty or str(self)

    def __str__(self) -> str:
        glue = " " if self.conjunctive else " || "
        return "[" + glue.join(str(c) for c in self.constraints) + "]"


@dataclass(frozen=True)
class EmptyConstraint:
    """No constraint at all; matches everything."""

    pretty: str | None = field(default=None, compare=False, repr=False)

    def matches(self, provider: "AnyConstraint | None") -> bool:
        return True

    def with_pretty(self, pretty: str | None) -> "EmptyConstraint":
        return replace(self, pretty=pretty)

    @property
    def pretty_string(self) -> str:
        return self.pretty or str(self)

    def __str__(self) -> str:
        return "[]"


AnyConstraint = Union[VersionConstraint, MultiConstraint, EmptyConstraint]


def matches(constraint: AnyConstraint, provider: AnyConstraint | None) -> bool:
    """Decide whether `constraint` and `provider` have a common solution."""
    if isinstance(constraint, EmptyConstraint):
        return True

    if isinstance(constraint, MultiConstraint):
        if constraint.conjunctive:
            return all(c.matches(provider) for c in constraint.constraints)
        return any(c.matches(provider) for c in constraint.constraints)

    if isinstance(constraint, VersionConstraint):
        if provider is None:
            return True
        if isinstance(provider, VersionConstraint):
            return constraint.match_specific(provider)
        # let the group (or empty) side drive the comparison
        return matches(provider, constraint)

    raise TypeError(f"Unsupported constraint type: {type(constraint).__name__}")
