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

from enum import IntEnum
from types import MappingProxyType

# Largest value a wildcard segment can stand for.
VERSION_MAX = "9999999"

# Canonical form of master-like branches.
VERSION_MASTER = f"{VERSION_MAX}-dev"

MASTER_BRANCHES = ("master", "trunk", "default")

# Accepted `@<flag>` suffixes on constraint expressions.
STABILITY_FLAGS = ("stable", "RC", "beta", "alpha", "dev")


class Stability(IntEnum):
    """Maturity of a version; a higher value means less stable."""

    STABLE = 0
    RC = 5
    BETA = 10
    ALPHA = 15
    DEV = 20

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def parse(cls, label: str | None) -> "Stability":
        """Expand any stability spelling (``b``, ``pl``, ``rc`` ...).

        Unknown or empty labels resolve to STABLE.
        """
        if not label:
            return cls.STABLE
        long_form = NORMALIZED_STABILITIES.get(label.lower())
        if long_form is None:
            return cls.STABLE
        return _BY_LABEL.get(long_form.lower(), cls.STABLE)


_LABELS = {
    Stability.STABLE: "stable",
    Stability.RC: "RC",
    Stability.BETA: "beta",
    Stability.ALPHA: "alpha",
    Stability.DEV: "dev",
}

_BY_LABEL = {
    "stable": Stability.STABLE,
    "patch": Stability.STABLE,
    "rc": Stability.RC,
    "beta": Stability.BETA,
    "alpha": Stability.ALPHA,
    "dev": Stability.DEV,
}

# Short and legacy spellings mapped to the long form used in canonical versions.
NORMALIZED_STABILITIES = MappingProxyType(
    {
        "stable": "stable",
        "patch": "patch",
        "pl": "patch",
        "p": "patch",
        "beta": "beta",
        "b": "beta",
        "rc": "RC",
        "alpha": "alpha",
        "a": "alpha",
        "dev": "dev",
    }
)

# Weights used when ordering prerelease segments; heavier sorts earlier.
STABILITY_WEIGHTS = MappingProxyType(
    {
        "dev": 20,
        "alpha": 15,
        "a": 15,
        "beta": 10,
        "b": 10,
        "rc": 5,
        "#": 4,
        "pl": 3,
        "p": 3,
        "stable": 0,
    }
)


def normalize_stability(stability: str) -> str:
    """Return the long form of a stability keyword, or the input unchanged."""
    if stability:
        return NORMALIZED_STABILITIES.get(stability.lower(), stability)
    return stability
