"""Product lifecycle states."""

from __future__ import annotations

from enum import Enum


class ProductStatus(Enum):
    CREATED = "CREATED"
    ACTIVE = "ACTIVE"
    ABORTED = "ABORTED"
    TERMINATED = "TERMINATED"
    PENDINGTERMINATE = "PENDINGTERMINATE"
