from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from ..core import constants as C
from ..core.enums import TooltipPosition
from .achievements import AchievementTracker
from .host import AnchorLocator, HostActions
from .model import (
    ClockDemo,
    OnboardingState,
    Placement,
    Rect,
    SearchDemo,
    ThemeDemo,
    TourStop,
    TourView,
    Viewport,
)
from .timers import TimerHandle, TimerScheduler

logger = logging.getLogger(__name__)

TOUR_SCOPE = "tour"


def compute_placement(rect: Rect, position: TooltipPosition, viewport: Viewport) -> Placement:
    """Spotlight and tooltip coordinates for an anchor.

    The tooltip card is assumed to be about 320x180, hence the fixed offsets.
    Clamping applies the upper bound first, so on a viewport too small to fit
    the card the 20px padding wins.
    """
    left = rect.left
    top = rect.bottom + C.TOOLTIP_GAP

    if position == TooltipPosition.TOP:
        top = rect.top - C.TOOLTIP_ABOVE_OFFSET
    elif position == TooltipPosition.RIGHT:
        left = rect.right + C.TOOLTIP_GAP
        top = rect.top
    elif position == TooltipPosition.LEFT:
        left = rect.left - C.TOOLTIP_LEFT_OFFSET
        top = rect.top

    left = min(left, viewport.width - C.TOOLTIP_MAX_LEFT_INSET)
    top = min(top, viewport.height - C.TOOLTIP_MAX_TOP_INSET)
    left = max(left, C.VIEWPORT_PADDING)
    top = max(top, C.VIEWPORT_PADDING)

    return Placement(spotlight=rect.expanded(C.SPOTLIGHT_MARGIN), tooltip_left=left, tooltip_top=top)


class GuidedTour:
    """Walks the tour script, one highlighted anchor at a time.

    Stops whose anchor is not on screen are skipped forward. Moving past the
    last stop, or skipping, calls `on_complete` exactly once per run.
    """

    def __init__(
        self,
        stops: Sequence[TourStop],
        state: OnboardingState,
        *,
        locator: AnchorLocator,
        host: HostActions,
        tracker: AchievementTracker,
        scheduler: TimerScheduler,
        viewport: Callable[[], Viewport],
        on_complete: Callable[[], None],
    ):
        if not stops:
            raise ValueError("Tour needs at least one stop")
        self._stops = tuple(stops)
        self._state = state
        self._locator = locator
        self._host = host
        self._tracker = tracker
        self._scheduler = scheduler
        self._viewport = viewport
        self._on_complete = on_complete

        self._running = False
        self._placement: Optional[Placement] = None
        self._highlighted: Optional[str] = None
        self._tried = False
        self._search_clear: Optional[TimerHandle] = None
        self._advance: Optional[TimerHandle] = None

    @property
    def index(self) -> int:
        return self._state.current_tour_index

    @property
    def stops(self) -> tuple[TourStop, ...]:
        return self._stops

    @property
    def current_stop(self) -> TourStop:
        return self._stops[self.index]

    @property
    def running(self) -> bool:
        return self._running

    @property
    def highlighted_target(self) -> Optional[str]:
        return self._highlighted

    def start(self) -> None:
        self._running = True
        self._state.current_tour_index = 0
        self.show(0)

    def show(self, index: int) -> bool:
        """Show the stop at `index`, skipping forward over missing anchors.

        Returns False if the tour ran out of stops and completed instead.
        """
        if not self._running:
            return False
        self._clear_highlight()
        self._cancel_stop_timers()

        while index < len(self._stops):
            stop = self._stops[index]
            self._state.current_tour_index = index
            rect = self._locator.locate(stop.target)
            if rect is None:
                logger.info("Tour stop %d (%s) has no anchor on screen, skipping", index, stop.target)
                index += 1
                continue

            self._placement = compute_placement(rect, stop.position, self._viewport())
            self._highlighted = stop.target
            self._tried = False
            logger.debug("Tour -> stop %d (%s)", index, stop.target)
            return True

        self._finish()
        return False

    def next(self) -> bool:
        if not self._running:
            return False
        self._clear_highlight()
        if self.index < len(self._stops) - 1:
            return self.show(self.index + 1)
        self._finish()
        return False

    def prev(self) -> bool:
        if not self._running:
            return False
        target = self._previous_locatable()
        if target is None:
            return False
        self._clear_highlight()
        return self.show(target)

    def skip(self) -> None:
        if self._running:
            self._finish()

    def try_feature(self) -> bool:
        """Play the current stop's demo, then move on after a short pause.

        A second call during the same stop visit does nothing.
        """
        if not self._running or self._tried:
            return False
        stop = self.current_stop
        demo = stop.demo
        if demo is None or self._locator.locate(stop.target) is None:
            return False

        self._tried = True
        if isinstance(demo, ClockDemo):
            self._host.toggle_clock()
            self._tracker.unlock(demo.achievement_key)
        elif isinstance(demo, SearchDemo):
            self._host.focus_search(demo.text)
            self._search_clear = self._scheduler.schedule(
                C.SEARCH_DEMO_CLEAR_MS,
                lambda: self._finish_search_demo(demo),
                scope=TOUR_SCOPE,
            )
        elif isinstance(demo, ThemeDemo):
            self._host.toggle_theme()
            self._tracker.unlock(demo.achievement_key)

        self._advance = self._scheduler.schedule(C.TRY_FEATURE_ADVANCE_MS, self.next, scope=TOUR_SCOPE)
        return True

    def stop(self) -> None:
        """Abandon the tour without completing it."""
        if self._running:
            self._teardown()

    def view(self) -> TourView:
        stop = self.current_stop
        total = len(self._stops)
        placement = self._placement if self._highlighted else None
        return TourView(
            index=self.index,
            total=total,
            counter=f"{self.index + 1} of {total}",
            progress_percent=(self.index + 1) / total * 100,
            title=stop.title,
            description=stop.description,
            position=stop.position.value,
            target=self._highlighted,
            spotlight=placement.spotlight if placement else None,
            tooltip_left=placement.tooltip_left if placement else None,
            tooltip_top=placement.tooltip_top if placement else None,
            prev_visible=self._previous_locatable() is not None,
            next_visible=not stop.is_interactive,
            try_visible=stop.is_interactive,
        )

    def _finish_search_demo(self, demo: SearchDemo) -> None:
        self._search_clear = None
        self._host.clear_search()
        self._tracker.unlock(demo.achievement_key)

    def _clear_highlight(self) -> None:
        self._highlighted = None
        self._placement = None

    def _previous_locatable(self) -> Optional[int]:
        for index in range(self.index - 1, -1, -1):
            if self._locator.locate(self._stops[index].target) is not None:
                return index
        return None

    def _cancel_stop_timers(self) -> None:
        """Drop the timers started during the current stop visit."""
        if self._advance is not None:
            self._advance.cancel()
            self._advance = None
        if self._search_clear is not None:
            if self._search_clear.cancel():
                # Demo text is still in the field; leave it as the user had it.
                self._host.clear_search()
            self._search_clear = None

    def _teardown(self) -> None:
        self._cancel_stop_timers()
        self._scheduler.cancel_scope(TOUR_SCOPE)
        self._clear_highlight()
        self._running = False

    def _finish(self) -> None:
        self._teardown()
        logger.debug("Tour complete")
        self._on_complete()
