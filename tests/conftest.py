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

import pytest

from version_constraints import api
from version_constraints.constraint import MultiConstraint, VersionConstraint
from version_constraints.gh_logging import Logger
from version_constraints.parser import VersionParser


class MockLogger(Logger):
    """Logger that captures messages for testing."""

    def __init__(self):
        super().__init__("test")
        self.debug_messages: list[str] = []
        self.info_messages: list[str] = []
        self.warning_messages: list[str] = []

    def _print(self, prefix: str, msg: str) -> None:
        if prefix == "debug":
            self.debug_messages.append(msg)
        elif prefix == "info":
            self.info_messages.append(msg)
        elif prefix == "warning":
            self.warning_messages.append(msg)


@pytest.fixture
def mock_logger() -> MockLogger:
    """Create a mock logger for testing."""
    return MockLogger()


@pytest.fixture
def parser() -> VersionParser:
    return VersionParser()


@pytest.fixture
def restore_default_parser():
    """Put the module default parser back after a test replaced it."""
    original = api.get_parser()
    yield
    api.set_parser(original)


def leaf(operator: str, version: str) -> VersionConstraint:
    return VersionConstraint(operator, version)


def range_of(*constraints: VersionConstraint) -> MultiConstraint:
    """Conjunctive group, e.g. range_of(leaf(">=", "1.0"), leaf("<", "2.0"))."""
    return MultiConstraint(constraints)


def any_of(*constraints) -> MultiConstraint:
    return MultiConstraint(constraints, conjunctive=False)
