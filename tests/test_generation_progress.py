import itertools

import pytest

from energy_proposals.progress.generation_progress import (
    GenerationProgressTracker,
    InMemoryProgressStore,
)
from energy_proposals.progress.generation_runner import SlideGenerationRunner
from energy_proposals.progress.progress_models import GenerationStatus, SlideStatus
from energy_proposals.reports.adapters.slide_assembler import build_proposal_slides

SLIDES = [("cover", "Cover Page"), ("executive_summary", "Executive Summary"), ("contact", "Contact")]


@pytest.fixture
def store():
    return InMemoryProgressStore()


@pytest.fixture
def tracker(store):
    ticks = itertools.count(1000, 100)
    return GenerationProgressTracker(store, clock=lambda: next(ticks))


# ============================================================================
# TRACKER
# ============================================================================

def test_init_creates_pending_slides(tracker):
    progress = tracker.init_progress(7, SLIDES)

    assert progress.status is GenerationStatus.GENERATING
    assert progress.total_slides == 3
    assert progress.completed_slides == 0
    assert progress.started_at == 1000
    assert [s.slide_index for s in progress.slides] == [0, 1, 2]
    assert all(s.status is SlideStatus.PENDING for s in progress.slides)


def test_init_replaces_existing_record(tracker, store):
    tracker.init_progress(7, SLIDES)
    tracker.update_slide(7, 0, status=SlideStatus.COMPLETE)

    progress = tracker.init_progress(7, SLIDES[:1])

    assert len(store) == 1
    assert progress.total_slides == 1
    assert tracker.get_progress(7).completed_slides == 0


def test_completed_count_and_current_index(tracker):
    tracker.init_progress(7, SLIDES)

    tracker.update_slide(7, 0, status=SlideStatus.COMPLETE, html="<section/>")
    progress = tracker.get_progress(7)
    assert progress.completed_slides == 1
    assert progress.current_slide_index == 1
    assert progress.slides[0].html == "<section/>"

    tracker.update_slide(7, 1, status=SlideStatus.ERROR, error="boom")
    tracker.update_slide(7, 0, status=SlideStatus.COMPLETE)  # repeated update is not double counted
    progress = tracker.get_progress(7)
    assert progress.completed_slides == 1
    assert progress.current_slide_index == 2
    assert progress.slides[1].error == "boom"


def test_update_touches_only_its_slide(tracker):
    tracker.init_progress(7, SLIDES)
    tracker.update_slide(7, 2, status=SlideStatus.GENERATING)

    statuses = [s.status for s in tracker.get_progress(7).slides]
    assert statuses == [SlideStatus.PENDING, SlideStatus.PENDING, SlideStatus.GENERATING]


def test_unknown_ids_are_ignored(tracker):
    assert tracker.update_slide(99, 0, status=SlideStatus.COMPLETE) is False
    assert tracker.set_status(99, GenerationStatus.COMPLETE) is False
    assert tracker.get_progress(99) is None
    assert tracker.clear_progress(99) is False

    tracker.init_progress(7, SLIDES)
    assert tracker.update_slide(7, 3, status=SlideStatus.COMPLETE) is False
    assert tracker.update_slide(7, -1, status=SlideStatus.COMPLETE) is False


def test_terminal_status_is_sticky(tracker):
    tracker.init_progress(7, SLIDES)

    assert tracker.set_status(7, GenerationStatus.COMPLETE) is True
    completed_at = tracker.get_progress(7).completed_at
    assert completed_at is not None

    assert tracker.set_status(7, GenerationStatus.GENERATING) is False
    assert tracker.set_status(7, GenerationStatus.ERROR, error="late") is False

    progress = tracker.get_progress(7)
    assert progress.status is GenerationStatus.COMPLETE
    assert progress.completed_at == completed_at
    assert progress.error is None


def test_error_status_keeps_message(tracker):
    tracker.init_progress(7, SLIDES)
    tracker.set_status(7, GenerationStatus.ERROR, error="renderer unavailable")

    progress = tracker.get_progress(7)
    assert progress.status is GenerationStatus.ERROR
    assert progress.error == "renderer unavailable"
    assert progress.completed_at is not None


def test_clear_removes_record(tracker, store):
    tracker.init_progress(7, SLIDES)
    assert tracker.clear_progress(7) is True
    assert tracker.get_progress(7) is None
    assert len(store) == 0


def test_store_hands_out_copies(tracker):
    tracker.init_progress(7, SLIDES)
    snapshot = tracker.get_progress(7)
    snapshot.slides[0].status = SlideStatus.COMPLETE

    assert tracker.get_progress(7).slides[0].status is SlideStatus.PENDING


def test_payload_leaves_out_unset_keys(tracker):
    tracker.init_progress(7, SLIDES)
    tracker.update_slide(7, 0, status=SlideStatus.COMPLETE, html="<p>hi</p>")
    payload = tracker.get_progress(7).to_payload()

    assert payload["proposalId"] == 7
    assert payload["status"] == "generating"
    assert "completedAt" not in payload
    assert "error" not in payload
    assert payload["slides"][0]["html"] == "<p>hi</p>"
    assert "html" not in payload["slides"][1]
    assert "error" not in payload["slides"][1]


# ============================================================================
# RUNNER
# ============================================================================

def test_runner_completes_included_slides(tracker, gas_customer, gas_calculations, contact):
    slides = build_proposal_slides(gas_customer, gas_calculations, contact=contact)
    included = [s for s in slides if s.is_included]

    progress = SlideGenerationRunner(tracker).run(1, slides, lambda s: f"<h1>{s.title}</h1>")

    assert progress.status is GenerationStatus.COMPLETE
    assert progress.total_slides == len(included)
    assert progress.completed_slides == len(included)
    assert progress.slides[0].html == "<h1>Cover Page</h1>"


def test_runner_carries_on_after_a_failed_slide(tracker, plain_customer, plain_calculations, contact):
    slides = build_proposal_slides(plain_customer, plain_calculations, contact=contact)
    included = [s for s in slides if s.is_included]

    def render(slide):
        if slide.slide_type.value == "executive_summary":
            raise ValueError("template missing")
        return "<section/>"

    progress = SlideGenerationRunner(tracker).run(2, slides, render)

    assert progress.status is GenerationStatus.ERROR
    assert progress.error == f"1 of {len(included)} slides failed to render"
    assert progress.completed_slides == len(included) - 1
    assert progress.slides[1].status is SlideStatus.ERROR
    assert progress.slides[1].error == "template missing"
    assert progress.slides[2].status is SlideStatus.COMPLETE
