"""Permission types and the mutable user the test authorizers read from."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Clearance(Enum):
    NON = 0
    SECRET = 1
    TOP_SECRET = 2


@dataclass
class User:
    roles: set[str] = field(default_factory=set)
    clearance: Clearance = Clearance.NON
