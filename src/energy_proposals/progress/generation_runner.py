from __future__ import annotations

from typing import Callable, Optional, Sequence

from energy_proposals.progress.generation_progress import GenerationProgressTracker
from energy_proposals.progress.progress_models import (
    GenerationProgress,
    GenerationStatus,
    SlideStatus,
)
from energy_proposals.reports.models.slides import Slide
from energy_proposals.utils.logger import get_logger

logger = get_logger(__name__)

SlideRenderer = Callable[[Slide], str]


class SlideGenerationRunner:
    """
    Walks included slides through the tracker one by one.

    Rendering is supplied by the caller. A slide whose renderer raises is
    marked as failed and the run carries on with the next slide; the run
    ends in ERROR if any slide failed.
    """

    def __init__(self, tracker: GenerationProgressTracker):
        self.tracker = tracker

    def run(
        self,
        proposal_id: int,
        slides: Sequence[Slide],
        render: SlideRenderer,
    ) -> Optional[GenerationProgress]:
        included = [s for s in slides if s.is_included]
        self.tracker.init_progress(
            proposal_id, [(s.slide_type.value, s.title) for s in included]
        )

        failed = 0
        for index, slide in enumerate(included):
            self.tracker.update_slide(proposal_id, index, status=SlideStatus.GENERATING)
            try:
                html = render(slide)
            except Exception as e:
                failed += 1
                logger.error(
                    "Slide render failed | proposal=%s slide=%s type=%s: %s",
                    proposal_id, index, slide.slide_type.value, e,
                )
                self.tracker.update_slide(
                    proposal_id, index, status=SlideStatus.ERROR, error=str(e)
                )
                continue
            self.tracker.update_slide(
                proposal_id, index, status=SlideStatus.COMPLETE, html=html
            )

        if failed:
            self.tracker.set_status(
                proposal_id,
                GenerationStatus.ERROR,
                error=f"{failed} of {len(included)} slides failed to render",
            )
        else:
            self.tracker.set_status(proposal_id, GenerationStatus.COMPLETE)

        return self.tracker.get_progress(proposal_id)
