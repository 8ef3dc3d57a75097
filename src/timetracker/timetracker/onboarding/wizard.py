from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence

from ..common.validators import require_non_empty
from ..core.enums import Role, Section, Theme
from ..core.exceptions import ValidationError
from ..users.model import User
from .catalog import ROLE_CHOICES
from .model import OnboardingState, WizardView

logger = logging.getLogger(__name__)

_PREFERENCE_KEYS = ("theme", "notifications", "default_section")


class SetupWizard:
    """Linear setup form: details, role, preferences, review.

    Step changes are bounds-checked; a rejected move returns False and leaves
    the state untouched. Completing the wizard is the orchestrator's call and
    only makes sense on the last step (`can_complete`).
    """

    def __init__(self, state: OnboardingState, *, roles: Sequence[Role] = ROLE_CHOICES):
        self._state = state
        self._roles = tuple(roles)
        self._selected_role: Optional[Role] = None
        self._name = ""
        self._department = ""
        self._preferences: Dict[str, Any] = {}

    @property
    def step(self) -> int:
        return self._state.current_wizard_step

    @property
    def total_steps(self) -> int:
        return self._state.total_steps

    @property
    def selected_role(self) -> Optional[Role]:
        return self._selected_role

    @property
    def can_complete(self) -> bool:
        return self.step == self.total_steps

    def start(self, user: Optional[User]) -> None:
        self._state.current_wizard_step = 1
        self._selected_role = None
        self._preferences = {}
        # No user context: leave the form blank rather than failing.
        self._name = user.name if user else ""
        self._department = user.department if user else ""

    def next(self) -> bool:
        if self.step >= self.total_steps:
            return False
        self._state.current_wizard_step += 1
        logger.debug("Setup wizard -> step %d", self.step)
        return True

    def prev(self) -> bool:
        if self.step <= 1:
            return False
        self._state.current_wizard_step -= 1
        logger.debug("Setup wizard -> step %d", self.step)
        return True

    def update_details(self, *, name: str, department: str) -> None:
        self._name = require_non_empty(name, "Name")
        self._department = require_non_empty(department, "Department")

    def select_role(self, role: str | Role) -> Role:
        try:
            parsed = role if isinstance(role, Role) else Role.parse(role)
        except ValueError:
            raise ValidationError("Unknown role")
        if parsed not in self._roles:
            raise ValidationError("Unknown role")
        self._selected_role = parsed
        return parsed

    def set_preferences(self, **prefs: Any) -> None:
        unknown = set(prefs) - set(_PREFERENCE_KEYS)
        if unknown:
            raise ValidationError(f"Unknown preference: {sorted(unknown)[0]}")

        if "theme" in prefs:
            try:
                prefs["theme"] = Theme(str(prefs["theme"]).lower())
            except ValueError:
                raise ValidationError("Theme must be light or dark")
        if "default_section" in prefs:
            try:
                prefs["default_section"] = Section(str(prefs["default_section"]).lower())
            except ValueError:
                raise ValidationError("Unknown section")
        if "notifications" in prefs:
            prefs["notifications"] = bool(prefs["notifications"])

        self._preferences.update(prefs)

    def view(self) -> WizardView:
        step, total = self.step, self.total_steps
        return WizardView(
            step=step,
            total_steps=total,
            counter=f"Step {step} of {total}",
            progress_percent=step / total * 100,
            prev_visible=step > 1,
            next_visible=step < total,
            complete_visible=step == total,
            selected_role=self._selected_role.value if self._selected_role else None,
            name=self._name,
            department=self._department,
            preferences={k: getattr(v, "value", v) for k, v in self._preferences.items()},
        )
