"""Example: drive the onboarding flow without Flask.

The controllers only hold flow state; here a console stands in for the
browser and reports where the anchors are.
"""

from src.timetracker.timetracker.dashboard.session import DashboardSession
from src.timetracker.timetracker.onboarding.host import LayoutAnchorLocator
from src.timetracker.timetracker.onboarding.model import Rect
from src.timetracker.timetracker.onboarding.orchestrator import OnboardingContext, OnboardingOrchestrator
from src.timetracker.timetracker.users.memory_user_repository import InMemoryUserRepository
from src.timetracker.timetracker.users.service import UserService


def main():
    users = InMemoryUserRepository.with_demo_users()
    dashboard = DashboardSession()
    locator = LayoutAnchorLocator(
        {
            "dashboard": Rect(240, 80, 900, 400),
            "clock-toggle": Rect(500, 300, 120, 40),
            "theme-toggle": Rect(1100, 16, 32, 32),
        }
    )
    onboarding = OnboardingOrchestrator(
        OnboardingContext(user=users.get_by_id(3), host=dashboard, users=UserService(users), locator=locator)
    )
    dashboard.on_achievement = onboarding.check_achievement

    onboarding.check_first_time_login()
    print(onboarding.view().welcome_message)

    onboarding.start()
    for _ in range(3):
        onboarding.wizard_next()
    onboarding.complete_setup()
    while onboarding.tour.running:
        tour = onboarding.view().tour
        print(f"[{tour.counter}] {tour.title} tooltip=({tour.tooltip_left}, {tour.tooltip_top})")
        onboarding.tour_next()

    print("screen:", onboarding.screen.value)
    onboarding.complete()
    print("first login:", users.get_by_id(3).is_first_login)


if __name__ == "__main__":
    main()
