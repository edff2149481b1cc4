"""Global constants for the application."""

# Canonical template width; every footer measurement is derived from it
CANONICAL_WIDTH = 800

# Proportionality constants (relative to the resized template width)
PHOTO_RATIO = 0.18  # Photo diameter / width
FONT_RATIO = 0.14  # Font size / photo diameter
TEXT_RATIO = 0.38  # Text block width / width
LOGO_RATIO = 0.13  # Logo side / width

# Fixed spacing in pixels at the canonical width
LEFT_MARGIN = 40  # Photo offset from the left edge (mirrored on the right)
LAYER_GAP = 20  # Gap between photo, text, divider and logo
DIVIDER_WIDTH = 2  # Thickness of the vertical rule
LINE_GAP = 6  # Extra space between text baselines
FOOTER_PADDING = 20  # Added to the tallest layer to get footer height
TEXT_LINE_COUNT = 4  # Name, designation, phone, credential caption

# Colors
FOOTER_BACKGROUND = (240, 247, 255)
CANVAS_BACKGROUND = (255, 255, 255)
DIVIDER_COLOR = (37, 42, 120)
TEXT_GRADIENT = ((27, 117, 187), (37, 42, 120))  # Left-to-right text fill

# Branding
BRAND_NAME = "Wealth Plus"
CREDENTIAL_CAPTION = "AMFI Registered Mutual Fund Distributor"
FONT_FAMILY = "Arial, Helvetica, sans-serif"

# Designations offered at registration
HEALTH_DESIGNATION = "Health insurance advisor"
WEALTH_DESIGNATION = "Wealth Manager"
DESIGNATIONS = (HEALTH_DESIGNATION, WEALTH_DESIGNATION)

# Output
DEFAULT_OUTPUT_FORMAT = "jpeg"
DEFAULT_QUALITY = 90
DEFAULT_MAX_WORKERS = 4  # Posters decoded at the same time during a batch
