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

from .api import get_parser, rsort, satisfies, satisfies_by, set_parser, sort
from .constraint import (
    AnyConstraint,
    EmptyConstraint,
    MultiConstraint,
    Operator,
    VersionConstraint,
)
from .errors import ConstraintError, InvalidOperatorError, ParseError
from .parser import VersionParser
from .stability import VERSION_MASTER, VERSION_MAX, Stability
from .version import SemanticVersion

__all__ = [
    "AnyConstraint",
    "ConstraintError",
    "EmptyConstraint",
    "InvalidOperatorError",
    "MultiConstraint",
    "Operator",
    "ParseError",
    "SemanticVersion",
    "Stability",
    "VERSION_MASTER",
    "VERSION_MAX",
    "VersionConstraint",
    "VersionParser",
    "get_parser",
    "rsort",
    "satisfies",
    "satisfies_by",
    "set_parser",
    "sort",
]
