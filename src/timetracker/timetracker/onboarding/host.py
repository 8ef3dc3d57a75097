"""Interfaces the onboarding flow needs from the host application."""

from __future__ import annotations

from typing import Mapping, Optional, Protocol

from ..core.enums import Role, Section, ToastLevel
from .model import Rect


class HostActions(Protocol):
    """Dashboard hooks used by tour demos and keyboard shortcuts."""

    def toggle_clock(self) -> None:
        raise NotImplementedError

    def navigate_to(self, section: Section) -> None:
        raise NotImplementedError

    def focus_search(self, text: str) -> None:
        raise NotImplementedError

    def clear_search(self) -> None:
        raise NotImplementedError

    def toggle_theme(self) -> None:
        raise NotImplementedError

    def show_toast(self, message: str, level: ToastLevel = ToastLevel.INFO) -> None:
        raise NotImplementedError


class UserDirectory(Protocol):
    """Profile writes the onboarding flow delegates to the user store."""

    def clear_first_login(self, user_id: int) -> None:
        raise NotImplementedError

    def update_role(self, user_id: int, role: Role) -> None:
        raise NotImplementedError


class AnchorLocator(Protocol):
    def locate(self, target: str) -> Optional[Rect]:
        """Bounding box of the anchor, or None if it is not on screen."""
        raise NotImplementedError


class LayoutAnchorLocator(AnchorLocator):
    """Anchor geometry last reported by the client."""

    def __init__(self, anchors: Optional[Mapping[str, Rect]] = None):
        self._anchors: dict[str, Rect] = dict(anchors or {})

    def update(self, anchors: Mapping[str, Rect], *, replace: bool = True) -> None:
        if replace:
            self._anchors = dict(anchors)
        else:
            self._anchors.update(anchors)

    def locate(self, target: str) -> Optional[Rect]:
        return self._anchors.get(target)
