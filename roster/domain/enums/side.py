from __future__ import annotations
from enum import StrEnum


class Side(StrEnum):
    left = "left"
    right = "right"
