"""First-login onboarding: welcome screen, setup wizard, guided tour, help center.

The controllers here hold flow state only and expose immutable view states;
rendering is left to the caller (the Flask layer serves them as JSON).
"""

from .orchestrator import OnboardingContext, OnboardingOrchestrator

__all__ = ["OnboardingContext", "OnboardingOrchestrator"]
