"""Typed sidecar payload structure."""

from __future__ import annotations

from typing import TypedDict

# Keys keep the camelCase spelling of the on-disk format.
SidecarPayload = TypedDict(
    "SidecarPayload",
    {
        "assetList": dict[str, int],
        "assetChildren": dict[str, list[str]],
    },
)
