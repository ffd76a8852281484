from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from energy_proposals.utils.serialization import to_wire


class SlideStatus(str, Enum):
    PENDING = "pending"
    GENERATING = "generating"
    COMPLETE = "complete"
    ERROR = "error"


class GenerationStatus(str, Enum):
    IDLE = "idle"
    CALCULATING = "calculating"
    GENERATING = "generating"
    COMPLETE = "complete"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        return self in (GenerationStatus.COMPLETE, GenerationStatus.ERROR)


# ------------------------------------------------------------
# Per-slide progress
# ------------------------------------------------------------
@dataclass
class SlideProgress:
    slide_index: int
    slide_type: str
    title: str
    status: SlideStatus = SlideStatus.PENDING
    html: Optional[str] = None
    error: Optional[str] = None


# ------------------------------------------------------------
# Whole-proposal progress (timestamps are epoch milliseconds)
# ------------------------------------------------------------
@dataclass
class GenerationProgress:
    proposal_id: int
    status: GenerationStatus
    total_slides: int
    started_at: int
    completed_slides: int = 0
    current_slide_index: int = 0
    slides: List[SlideProgress] = field(default_factory=list)
    completed_at: Optional[int] = None
    error: Optional[str] = None

    def to_payload(self) -> dict:
        """Polling payload; optional keys are left out when unset."""
        payload = to_wire(self)
        for key in ("completedAt", "error"):
            if payload[key] is None:
                del payload[key]
        for slide in payload["slides"]:
            for key in ("html", "error"):
                if slide[key] is None:
                    del slide[key]
        return payload
