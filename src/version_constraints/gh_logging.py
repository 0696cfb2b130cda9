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

import os

LOG_LEVEL_ENV = "VERSION_CONSTRAINTS_LOG_LEVEL"

_LEVELS = {"debug": 10, "info": 20, "warning": 30, "error": 40}
_DEFAULT_LEVEL = "warning"

_GITHUB_PREFIX = {
    "debug": "debug",
    "info": "notice",
    "warning": "warning",
    "error": "error",
}


def is_running_in_github_actions() -> bool:
    return "GITHUB_ACTIONS" in os.environ


def configured_level() -> int:
    """Threshold from $VERSION_CONSTRAINTS_LOG_LEVEL; unknown values fall back to warning."""
    name = os.environ.get(LOG_LEVEL_ENV, _DEFAULT_LEVEL).strip().lower()
    return _LEVELS.get(name, _LEVELS[_DEFAULT_LEVEL])


class Logger:
    """Minimal logger that prints locally and emits annotations on GitHub Actions.

    Messages below the configured level are dropped, so importing the
    library stays silent unless asked otherwise.
    """

    def __init__(self, name: str):
        self.name = name
        self.warnings: list[str] = []

    def _print(self, prefix: str, msg: str) -> None:
        if _LEVELS[prefix] < configured_level():
            return

        if is_running_in_github_actions():
            print(f"::{_GITHUB_PREFIX[prefix]}::{self.name} {msg}")
            return

        print(f"{prefix.upper()}: {self.name} {msg}")

    def debug(self, msg: str) -> None:
        self._print("debug", msg)

    def info(self, msg: str) -> None:
        self._print("info", msg)

    def warning(self, msg: str) -> None:
        self.warnings.append(msg)
        self._print("warning", msg)
