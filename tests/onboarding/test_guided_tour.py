from __future__ import annotations

import pytest

from src.timetracker.timetracker.core.enums import TooltipPosition
from src.timetracker.timetracker.onboarding.achievements import AchievementTracker
from src.timetracker.timetracker.onboarding.catalog import ACHIEVEMENTS, TOUR_STOPS
from src.timetracker.timetracker.onboarding.host import LayoutAnchorLocator
from src.timetracker.timetracker.onboarding.model import OnboardingState, Rect, Viewport
from src.timetracker.timetracker.onboarding.timers import TimerScheduler
from src.timetracker.timetracker.onboarding.tour import GuidedTour, compute_placement


class FakeClock:
    def __init__(self):
        self.now = 0

    def __call__(self) -> int:
        return self.now


class FakeHost:
    def __init__(self):
        self.calls = []
        self.search_text = ""

    def toggle_clock(self):
        self.calls.append("toggle_clock")

    def navigate_to(self, section):
        self.calls.append(("navigate", section))

    def focus_search(self, text):
        self.calls.append(("focus_search", text))
        self.search_text = text

    def clear_search(self):
        self.calls.append("clear_search")
        self.search_text = ""

    def toggle_theme(self):
        self.calls.append("toggle_theme")

    def show_toast(self, message, level=None):
        self.calls.append(("toast", message))


def all_anchors():
    return {stop.target: Rect(100 + 10 * i, 100, 40, 40) for i, stop in enumerate(TOUR_STOPS)}


class Harness:
    def __init__(self, anchors=None):
        self.clock = FakeClock()
        self.scheduler = TimerScheduler(self.clock)
        self.state = OnboardingState()
        self.host = FakeHost()
        self.locator = LayoutAnchorLocator(all_anchors() if anchors is None else anchors)
        self.tracker = AchievementTracker(ACHIEVEMENTS, self.scheduler, state=self.state)
        self.completed = 0
        self.tour = GuidedTour(
            TOUR_STOPS,
            self.state,
            locator=self.locator,
            host=self.host,
            tracker=self.tracker,
            scheduler=self.scheduler,
            viewport=lambda: Viewport(1280, 800),
            on_complete=self._done,
        )

    def _done(self):
        self.completed += 1

    def advance(self, ms):
        self.clock.now += ms
        self.scheduler.run_due()


def index_of(target):
    return [s.target for s in TOUR_STOPS].index(target)


# -- placement -------------------------------------------------------------


def test_right_placement_puts_tooltip_after_anchor():
    rect = Rect.from_dict({"left": 500, "top": 100, "right": 540, "height": 40})

    placement = compute_placement(rect, TooltipPosition.RIGHT, Viewport(1024, 768))

    assert placement.tooltip_left == 560
    assert placement.tooltip_top == 100


def test_spotlight_is_anchor_plus_margin():
    placement = compute_placement(Rect(500, 100, 40, 40), TooltipPosition.BOTTOM, Viewport(1024, 768))

    assert placement.spotlight == Rect(495, 95, 50, 50)
    assert placement.tooltip_left == 500
    assert placement.tooltip_top == 160


def test_top_placement_clamped_to_padding():
    placement = compute_placement(Rect(500, 100, 40, 40), TooltipPosition.TOP, Viewport(1024, 768))

    assert placement.tooltip_top == 20


def test_left_placement_and_right_edge_clamp():
    left = compute_placement(Rect(900, 100, 40, 40), TooltipPosition.LEFT, Viewport(1024, 768))
    assert left.tooltip_left == 560

    near_edge = compute_placement(Rect(900, 700, 40, 40), TooltipPosition.BOTTOM, Viewport(1024, 768))
    assert near_edge.tooltip_left == 1024 - 340
    assert near_edge.tooltip_top == 768 - 200


def test_tiny_viewport_padding_wins():
    placement = compute_placement(Rect(500, 100, 40, 40), TooltipPosition.RIGHT, Viewport(300, 150))

    assert placement.tooltip_left == 20
    assert placement.tooltip_top == 20


# -- navigation -------------------------------------------------------------


def test_start_highlights_first_stop():
    h = Harness()
    h.tour.start()

    view = h.tour.view()
    assert view.index == 0
    assert view.counter == "1 of 8"
    assert view.target == "dashboard"
    assert view.prev_visible is False
    assert view.next_visible is True
    assert view.try_visible is False


def test_next_and_prev_move_one_stop():
    h = Harness()
    h.tour.start()

    assert h.tour.next() is True
    assert h.tour.index == 1
    assert h.tour.view().try_visible is True
    assert h.tour.view().next_visible is False

    assert h.tour.prev() is True
    assert h.tour.index == 0
    assert h.tour.prev() is False


def test_missing_anchor_is_skipped_forward():
    anchors = all_anchors()
    del anchors["global-search"]
    h = Harness(anchors)
    h.tour.start()
    h.tour.show(index_of("clock-toggle"))

    h.tour.next()

    assert h.tour.current_stop.target == "theme-toggle"


def test_next_past_last_stop_completes_once():
    h = Harness()
    h.tour.start()
    h.tour.show(len(TOUR_STOPS) - 1)

    assert h.tour.next() is False
    assert h.completed == 1
    assert h.tour.running is False
    assert h.tour.next() is False
    assert h.completed == 1


def test_no_anchors_at_all_completes_immediately():
    h = Harness(anchors={})
    h.tour.start()

    assert h.completed == 1
    assert h.tour.running is False


def test_skip_completes_and_clears_highlight():
    h = Harness()
    h.tour.start()
    h.tour.skip()

    assert h.completed == 1
    assert h.tour.highlighted_target is None


def test_stop_abandons_without_completing():
    h = Harness()
    h.tour.start()
    h.tour.stop()

    assert h.completed == 0
    assert h.tour.running is False


def test_empty_script_rejected():
    with pytest.raises(ValueError):
        GuidedTour(
            (),
            OnboardingState(),
            locator=LayoutAnchorLocator(),
            host=FakeHost(),
            tracker=None,
            scheduler=TimerScheduler(FakeClock()),
            viewport=lambda: Viewport(1280, 800),
            on_complete=lambda: None,
        )


# -- try it ----------------------------------------------------------------------


def test_clock_demo_toggles_unlocks_and_advances():
    h = Harness()
    h.tour.start()
    h.tour.show(index_of("clock-toggle"))

    assert h.tour.try_feature() is True
    assert h.host.calls == ["toggle_clock"]
    assert h.tracker.is_unlocked("first-clock-in")

    h.advance(1499)
    assert h.tour.current_stop.target == "clock-toggle"
    h.advance(1)
    assert h.tour.current_stop.target == "global-search"


def test_search_demo_types_then_clears():
    h = Harness()
    h.tour.start()
    h.tour.show(index_of("global-search"))

    h.tour.try_feature()
    assert h.host.search_text == "Search demo"
    assert not h.tracker.is_unlocked("first-search")

    h.advance(1000)
    assert h.host.search_text == ""
    assert h.tracker.is_unlocked("first-search")

    h.advance(500)
    assert h.tour.current_stop.target == "theme-toggle"


def test_try_twice_is_a_noop():
    h = Harness()
    h.tour.start()
    h.tour.show(index_of("theme-toggle"))

    assert h.tour.try_feature() is True
    assert h.tour.try_feature() is False
    assert h.host.calls.count("toggle_theme") == 1

    h.advance(1500)
    assert h.tour.current_stop.target == "nav-time-tracking"


def test_try_on_plain_stop_does_nothing():
    h = Harness()
    h.tour.start()

    assert h.tour.try_feature() is False
    assert h.scheduler.pending() == []


def test_manual_next_cancels_pending_auto_advance():
    h = Harness()
    h.tour.start()
    h.tour.show(index_of("theme-toggle"))
    h.tour.try_feature()

    h.tour.next()
    h.advance(1500)

    assert h.tour.current_stop.target == "nav-time-tracking"


def test_stop_during_search_demo_restores_search_field():
    h = Harness()
    h.tour.start()
    h.tour.show(index_of("global-search"))
    h.tour.try_feature()

    h.tour.stop()
    h.advance(2000)

    assert h.host.search_text == ""
    assert not h.tracker.is_unlocked("first-search")
    assert h.scheduler.pending("tour") == []


def test_revisited_search_stop_gets_its_own_full_demo():
    h = Harness()
    h.tour.start()
    h.tour.show(index_of("global-search"))

    h.tour.try_feature()
    h.advance(200)
    h.tour.prev()
    # leaving mid-demo puts the field back and awards nothing
    assert h.host.search_text == ""
    assert not h.tracker.is_unlocked("first-search")

    h.advance(100)
    h.tour.next()
    h.advance(100)
    assert h.tour.try_feature() is True

    h.advance(999)
    assert h.host.search_text == "Search demo"
    assert h.host.calls.count("clear_search") == 1

    h.advance(1)
    assert h.host.search_text == ""
    assert h.tracker.is_unlocked("first-search")
    assert h.host.calls.count("clear_search") == 2

    h.advance(500)
    assert h.tour.current_stop.target == "theme-toggle"
    assert h.scheduler.pending("tour") == []


def test_prev_skips_back_over_missing_anchors():
    anchors = all_anchors()
    del anchors["clock-toggle"]
    del anchors["global-search"]
    h = Harness(anchors)
    h.tour.start()
    h.tour.show(index_of("theme-toggle"))

    assert h.tour.view().prev_visible is True
    assert h.tour.prev() is True
    assert h.tour.current_stop.target == "dashboard"


def test_prev_hidden_when_no_earlier_stop_is_on_screen():
    anchors = all_anchors()
    for target in ("dashboard", "clock-toggle"):
        del anchors[target]
    h = Harness(anchors)
    h.tour.start()

    assert h.tour.current_stop.target == "global-search"
    assert h.tour.view().prev_visible is False
    assert h.tour.prev() is False
    assert h.tour.current_stop.target == "global-search"
