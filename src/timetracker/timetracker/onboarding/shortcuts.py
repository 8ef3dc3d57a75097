from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .catalog import KEYBOARD_SHORTCUTS, ShortcutDef

TEXT_ENTRY_TAGS = frozenset({"input", "textarea", "select"})


@dataclass(frozen=True)
class KeyEvent:
    """A keydown as reported by the client.

    `key` follows KeyboardEvent.key ("d", "?", " ", "Escape"); `target_tag` is
    the tag name of the focused element, if any.
    """

    key: str
    ctrl: bool = False
    target_tag: Optional[str] = None

    @property
    def in_text_field(self) -> bool:
        return (self.target_tag or "").lower() in TEXT_ENTRY_TAGS

    @classmethod
    def from_dict(cls, data: dict) -> "KeyEvent":
        key = data.get("key")
        key = key if isinstance(key, str) else ""
        if not key and data.get("code") == "Space":
            key = " "
        tag = data.get("target_tag") or data.get("targetTag")
        return cls(
            key=key,
            ctrl=bool(data.get("ctrl") or data.get("ctrlKey")),
            target_tag=tag if isinstance(tag, str) else None,
        )


def match_shortcut(event: KeyEvent, shortcuts: Sequence[ShortcutDef] = KEYBOARD_SHORTCUTS) -> Optional[ShortcutDef]:
    """The shortcut bound to `event`, or None.

    Only global shortcuts (Escape) fire while a text field has focus.
    """
    key = event.key.lower() if event.ctrl else event.key
    for shortcut in shortcuts:
        if shortcut.ctrl != event.ctrl:
            continue
        bound = shortcut.key.lower() if shortcut.ctrl else shortcut.key
        if bound != key:
            continue
        if event.in_text_field and not shortcut.is_global:
            return None
        return shortcut
    return None
