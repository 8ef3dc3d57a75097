"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7

SETUP_WIZARD_STEPS = 4

# Achievement toast stays up at most this long unless dismissed.
ACHIEVEMENT_AUTO_DISMISS_MS = 3000
# Search demo: text stays in the field this long before it is cleared.
SEARCH_DEMO_CLEAR_MS = 1000
SEARCH_DEMO_TEXT = "Search demo"
# Pause after a "try it" demo so the user sees the effect before the tour moves on.
TRY_FEATURE_ADVANCE_MS = 1500

# Tour geometry (tooltip card is roughly 320x180).
SPOTLIGHT_MARGIN = 5
TOOLTIP_GAP = 20
TOOLTIP_ABOVE_OFFSET = 200
TOOLTIP_LEFT_OFFSET = 340
VIEWPORT_PADDING = 20
TOOLTIP_MAX_LEFT_INSET = 340
TOOLTIP_MAX_TOP_INSET = 200

DEFAULT_VIEWPORT_WIDTH = 1280
DEFAULT_VIEWPORT_HEIGHT = 800
