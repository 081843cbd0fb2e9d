"""Default configuration constants for the Unit Design Planner."""

import os

# Visual key format: unit-<blockLabel>-<floorNumber>-<variant>
VISUAL_KEY_PREFIX = "unit"
VISUAL_KEY_SEPARATOR = "-"
# Variant for units with neither number nor code: id<unitId>
UNIT_ID_VARIANT_PREFIX = "id"
MIN_STRUCTURED_SEGMENTS = 4

# Separators used when scanning a token for numeric segments
TOKEN_SEGMENT_SEPARATORS = "-_:"

# Canonical suffix: how many trailing characters to keep for non-numeric labels
SUFFIX_MAX_LENGTH = 4

# Click debounce interval for the unit grid (seconds)
CLICK_DEBOUNCE_SECONDS = 0.35

# Backing store
API_BASE_URL = os.environ.get("UNIT_PLANNER_API_URL", "https://localhost:50938/api")
API_TOKEN = os.environ.get("UNIT_PLANNER_API_TOKEN", "")
API_LANGUAGE = "en"
API_TIMEOUT_SECONDS = 15.0
API_VERIFY_TLS = os.environ.get("UNIT_PLANNER_API_VERIFY_TLS", "1") != "0"

# Block label field precedence (first present wins)
BLOCK_LABEL_FIELDS = ["blockCode", "blockArabicName", "blockEnglishName", "blockNumber"]

# Logging
LOG_LEVEL = os.environ.get("UNIT_PLANNER_LOG_LEVEL", "INFO")
LOG_JSON = os.environ.get("UNIT_PLANNER_LOG_JSON", "0") == "1"

# Unit grid colours
COLOR_UNASSIGNED = "#4A90D9"
COLOR_ASSIGNED = "#9BC53D"
COLOR_SELECTED = "#E8734A"
