from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from ..core.constants import SETUP_WIZARD_STEPS
from ..core.enums import Screen, TooltipPosition


@dataclass(frozen=True)
class Rect:
    """On-screen bounding box of an anchor, in CSS pixels."""

    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def expanded(self, margin: float) -> "Rect":
        return Rect(
            left=self.left - margin,
            top=self.top - margin,
            width=self.width + 2 * margin,
            height=self.height + 2 * margin,
        )

    @classmethod
    def from_dict(cls, data: dict) -> "Rect":
        left = float(data["left"])
        top = float(data["top"])
        if "width" in data:
            width = float(data["width"])
        else:
            width = float(data["right"]) - left
        if "height" in data:
            height = float(data["height"])
        else:
            height = float(data["bottom"]) - top
        return cls(left=left, top=top, width=width, height=height)

    def to_dict(self) -> dict:
        return {"left": self.left, "top": self.top, "width": self.width, "height": self.height}


@dataclass(frozen=True)
class Viewport:
    width: float
    height: float


@dataclass(frozen=True)
class Placement:
    spotlight: Rect
    tooltip_left: float
    tooltip_top: float


# Demo actions run by the tour's "try it" button. Each carries the
# achievement it unlocks once the demo has played.


@dataclass(frozen=True)
class ClockDemo:
    achievement_key: str = "first-clock-in"


@dataclass(frozen=True)
class SearchDemo:
    text: str
    achievement_key: str = "first-search"


@dataclass(frozen=True)
class ThemeDemo:
    achievement_key: str = "theme-switcher"


DemoAction = Union[ClockDemo, SearchDemo, ThemeDemo]


@dataclass(frozen=True)
class TourStop:
    target: str
    title: str
    description: str
    position: TooltipPosition = TooltipPosition.BOTTOM
    demo: Optional[DemoAction] = None

    @property
    def is_interactive(self) -> bool:
        return self.demo is not None


@dataclass(frozen=True)
class AchievementDefinition:
    key: str
    title: str
    description: str
    icon: str


@dataclass(frozen=True)
class AchievementNotice:
    key: str
    title: str
    description: str
    icon: str

    @classmethod
    def of(cls, definition: AchievementDefinition) -> "AchievementNotice":
        return cls(
            key=definition.key,
            title=definition.title,
            description=definition.description,
            icon=definition.icon,
        )


@dataclass
class OnboardingState:
    """Per-session onboarding state. Discarded on logout."""

    current_wizard_step: int = 1
    current_tour_index: int = 0
    unlocked_achievements: set[str] = field(default_factory=set)
    is_active: bool = False
    screen: Screen = Screen.DORMANT
    shortcuts_visible: bool = False
    total_steps: int = SETUP_WIZARD_STEPS


@dataclass(frozen=True)
class WizardView:
    step: int
    total_steps: int
    counter: str
    progress_percent: float
    prev_visible: bool
    next_visible: bool
    complete_visible: bool
    selected_role: Optional[str]
    name: str
    department: str
    preferences: dict


@dataclass(frozen=True)
class TourView:
    index: int
    total: int
    counter: str
    progress_percent: float
    title: str
    description: str
    position: str
    target: Optional[str]
    spotlight: Optional[Rect]
    tooltip_left: Optional[float]
    tooltip_top: Optional[float]
    prev_visible: bool
    next_visible: bool
    try_visible: bool


@dataclass(frozen=True)
class OnboardingView:
    screen: Screen
    overlay_visible: bool
    welcome_message: str
    wizard: Optional[WizardView]
    tour: Optional[TourView]
    shortcuts_visible: bool
    notification: Optional[AchievementNotice]
    unlocked_achievements: tuple[str, ...]
    shortcuts: tuple[dict, ...] = ()
