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

from collections.abc import Iterable


class ConstraintError(ValueError):
    """Base class for all errors raised by this package."""


class InvalidOperatorError(ConstraintError):
    """A constraint was built with an operator token that is not supported."""

    def __init__(self, operator: str, supported: Iterable[str]):
        self.operator = operator
        super().__init__(
            f"Invalid operator {operator!r} given, "
            f"expected one of: {', '.join(supported)}"
        )


class ParseError(ConstraintError):
    """A version or constraint string could not be parsed.

    `fragment` is the offending substring, `hint` an optional explanation
    (alias misuse, or the error of the version nested in a constraint term).
    """

    def __init__(
        self, message: str, fragment: str | None = None, hint: str | None = None
    ):
        self.fragment = fragment
        self.hint = hint
        super().__init__(message)
