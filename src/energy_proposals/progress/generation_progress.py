# src/energy_proposals/progress/generation_progress.py
"""
Generation progress tracker.

Rules:
- At most one record per proposal id; init replaces any previous record
- Slide updates touch only their own slide
- completed_slides always equals the number of slides marked complete
- A terminal status (complete / error) is sticky and stamps completed_at
- Records live until clear_progress is called; nothing expires them
- Clearing a record does not stop generation that is already running
"""

from __future__ import annotations

import copy
import threading
import time
from typing import Callable, Dict, Iterable, Optional, Protocol, Tuple

from energy_proposals.progress.progress_models import (
    GenerationProgress,
    GenerationStatus,
    SlideProgress,
    SlideStatus,
)
from energy_proposals.utils.logger import get_logger

logger = get_logger(__name__)

Clock = Callable[[], int]


def epoch_millis() -> int:
    return int(time.time() * 1000)


# ------------------------------------------------------------
# Store abstraction
# ------------------------------------------------------------
class ProgressStore(Protocol):
    def put(self, progress: GenerationProgress) -> None: ...

    def get(self, proposal_id: int) -> Optional[GenerationProgress]: ...

    def update(
        self,
        proposal_id: int,
        mutate: Callable[[GenerationProgress], bool],
    ) -> bool: ...

    def delete(self, proposal_id: int) -> bool: ...


class InMemoryProgressStore:
    """Thread-safe single-process store. get() hands out copies."""

    def __init__(self):
        self._records: Dict[int, GenerationProgress] = {}
        self._lock = threading.Lock()

    def put(self, progress: GenerationProgress) -> None:
        with self._lock:
            self._records[progress.proposal_id] = copy.deepcopy(progress)

    def get(self, proposal_id: int) -> Optional[GenerationProgress]:
        with self._lock:
            record = self._records.get(proposal_id)
            return copy.deepcopy(record) if record is not None else None

    def update(self, proposal_id: int, mutate: Callable[[GenerationProgress], bool]) -> bool:
        with self._lock:
            record = self._records.get(proposal_id)
            if record is None:
                return False
            return mutate(record)

    def delete(self, proposal_id: int) -> bool:
        with self._lock:
            return self._records.pop(proposal_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


# ------------------------------------------------------------
# Tracker
# ------------------------------------------------------------
class GenerationProgressTracker:

    def __init__(self, store: ProgressStore, clock: Clock = epoch_millis):
        self.store = store
        self.clock = clock

    def init_progress(
        self,
        proposal_id: int,
        slides: Iterable[Tuple[str, str]],
    ) -> GenerationProgress:
        """Start (or restart) tracking; slides are (slide_type, title) pairs in render order."""
        slide_rows = [
            SlideProgress(slide_index=i, slide_type=slide_type, title=title)
            for i, (slide_type, title) in enumerate(slides)
        ]

        if self.store.get(proposal_id) is not None:
            logger.warning("Replacing existing progress record | proposal=%s", proposal_id)

        progress = GenerationProgress(
            proposal_id=proposal_id,
            status=GenerationStatus.GENERATING,
            total_slides=len(slide_rows),
            started_at=self.clock(),
            slides=slide_rows,
        )
        self.store.put(progress)
        logger.info("Progress started | proposal=%s slides=%s", proposal_id, len(slide_rows))
        return copy.deepcopy(progress)

    def update_slide(
        self,
        proposal_id: int,
        slide_index: int,
        status: Optional[SlideStatus] = None,
        html: Optional[str] = None,
        error: Optional[str] = None,
    ) -> bool:
        """Returns False when the proposal or slide index is unknown."""

        def mutate(progress: GenerationProgress) -> bool:
            if not 0 <= slide_index < len(progress.slides):
                return False

            slide = progress.slides[slide_index]
            if status is not None:
                slide.status = status
            if html is not None:
                slide.html = html
            if error is not None:
                slide.error = error

            progress.completed_slides = sum(
                1 for s in progress.slides if s.status == SlideStatus.COMPLETE
            )

            next_open = next(
                (
                    s.slide_index
                    for s in progress.slides
                    if s.status in (SlideStatus.PENDING, SlideStatus.GENERATING)
                ),
                None,
            )
            if next_open is not None:
                progress.current_slide_index = next_open
            return True

        updated = self.store.update(proposal_id, mutate)
        if not updated:
            logger.warning(
                "Ignored slide update | proposal=%s slide=%s", proposal_id, slide_index
            )
        return updated

    def set_status(
        self,
        proposal_id: int,
        status: GenerationStatus,
        error: Optional[str] = None,
    ) -> bool:
        """Returns False when the proposal is unknown or already finished."""
        now = self.clock()

        def mutate(progress: GenerationProgress) -> bool:
            if progress.status.is_terminal:
                return False
            progress.status = status
            if error:
                progress.error = error
            if status.is_terminal:
                progress.completed_at = now
            return True

        updated = self.store.update(proposal_id, mutate)
        if updated:
            logger.info("Progress status | proposal=%s status=%s", proposal_id, status.value)
        else:
            logger.warning(
                "Ignored status change | proposal=%s status=%s", proposal_id, status.value
            )
        return updated

    def get_progress(self, proposal_id: int) -> Optional[GenerationProgress]:
        return self.store.get(proposal_id)

    def clear_progress(self, proposal_id: int) -> bool:
        removed = self.store.delete(proposal_id)
        if removed:
            logger.info("Progress cleared | proposal=%s", proposal_id)
        return removed
