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

"""Shortcuts for comparing two canonical version strings.

These go through the regular constraint matching, so a branch never orders
against a numeric version: `greater_than("dev-foo", "1.0")` is False, and
so is `less_than("dev-foo", "1.0")`.
"""

from .constraint import Operator, VersionConstraint


def compare(a: str, operator: "str | Operator", b: str) -> bool:
    """Evaluate `a <operator> b`; raises InvalidOperatorError on unknown operators."""
    return VersionConstraint(operator, b).matches(VersionConstraint(Operator.EQ, a))


def greater_than(a: str, b: str) -> bool:
    return compare(a, Operator.GT, b)


def greater_than_or_equal(a: str, b: str) -> bool:
    return compare(a, Operator.GE, b)


def less_than(a: str, b: str) -> bool:
    return compare(a, Operator.LT, b)


def less_than_or_equal(a: str, b: str) -> bool:
    return compare(a, Operator.LE, b)


def equal(a: str, b: str) -> bool:
    return compare(a, Operator.EQ, b)


def not_equal(a: str, b: str) -> bool:
    return compare(a, Operator.NE, b)
