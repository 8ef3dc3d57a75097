"""TimeTracker Pro package.

Organized by feature modules (users, dashboard, onboarding, auth) with a thin
Flask controller layer over service/repository layers. The onboarding package
holds the first-login flow (welcome, setup wizard, guided tour, help center)
and is usable without Flask.
"""
