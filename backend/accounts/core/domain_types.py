"""Domain Types: rich types that replace bare primitives across the codebase.

Invariants:
    - UserId wraps a UUID; never use a bare UUID in domain logic
    - All valid lifecycle states encoded as Enums, no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and log records without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class ServerState(str, Enum):
    """HTTP server lifecycle. CRASHED is terminal, STOPPED is the clean exit."""
    STARTING = "starting"
    LISTENING = "listening"
    SHUTTING_DOWN = "shutting_down"
    STOPPED = "stopped"
    CRASHED = "crashed"
