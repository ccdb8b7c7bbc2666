"""
Constants and configuration values for Packshot Studio.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the editor.
"""

# Background detection
DEFAULT_BOUNDS_TOLERANCE = 5
ALPHA_BACKGROUND_THRESHOLD = 128
BACKGROUND_COLOR = (255, 255, 255, 255)

# Frame encoding
MIME_PNG = "image/png"
MIME_JPEG = "image/jpeg"
DEFAULT_OUTPUT_FORMAT = "PNG"
DOWNLOAD_FILENAME_PATTERN = "Packshot_{width}x{height}_{counter}.{ext}"

# Resize presets: (canvas size, margin)
RESIZE_PRESETS = ((500, 25), (200, 10))

# Blur
DEFAULT_BLUR_INTENSITY = 5
MIN_BLUR_INTENSITY = 1
MAX_BLUR_INTENSITY = 50
MIN_LASSO_POINTS = 3

# Crop selection
HANDLE_HIT_RADIUS = 12
MIN_CROP_SIZE = 10
PRIMARY_BUTTON = 0

# AI quota
INITIAL_DAILY_CREDITS = 250
MINUTE_CREDIT_LIMIT = 10
DAILY_WINDOW_SECONDS = 24 * 60 * 60
MINUTE_WINDOW_SECONDS = 60
QUOTA_TIMER_INTERVAL = 1.0

# Persistence keys
CREDITS_STORAGE_KEY = "ai-packshot-credits"
ACTION_COUNTER_KEY = "packshot-action-counter"
DEFAULT_STATE_FILE = "packshot_state.json"

# Persisted field names
FIELD_COUNT = "count"
FIELD_RESET_AT = "resetAt"
FIELD_DATE = "date"

# Status notifications
STATUS_DURATION_SECONDS = 3.0
STATUS_SUCCESS = "success"
STATUS_ERROR = "error"

# Workflow steps
STEP_PREPARATION = 1
STEP_AI_PROCESSING = 2
STEP_FINALIZATION = 3

# Image classification
IMAGE_KIND_LOGO = "logo"
IMAGE_KIND_PACKSHOT = "packshot"

# History labels
LABEL_ORIGINAL = "Original"
LABEL_RESIZE = "Resize & Margins"
LABEL_ADD_MARGINS = "Margins +{margin}"
LABEL_ROTATE = "Rotate 90°"
LABEL_REMOVE_BACKGROUND = "BG Removal"
LABEL_REMOVE_LOGO_BACKGROUND = "Logo BG Removed"
LABEL_COLOR_CORRECTION = "Color Correction"
LABEL_CROP = "Crop"
LABEL_AUTO_CROP = "Auto Crop"
LABEL_SQUARE_FIT = "Square Fit"
LABEL_BLUR = "Blur Area"

# Status texts
STATUS_MESSAGES = {
    "uploadError": "Failed to upload file.",
    "resetSuccess": "Image reset to original.",
    "undoSuccess": "Undone.",
    "redoSuccess": "Redone.",
    "newImageReady": "Ready for new image.",
    "historyRestored": "Restored: \"{action}\"",
    "resizeSuccess": "Resized to {size}px (Auto Margin).",
    "resizeError": "Error resizing image.",
    "addMarginsSuccess": "Margins added.",
    "addMarginsError": "Error adding margins.",
    "rotateSuccess": "Rotated 90°.",
    "rotateError": "Error rotating image.",
    "removeBackgroundSuccess": "Background removed.",
    "colorCorrectionSuccess": "Color adjusted.",
    "colorCorrectionError": "Error adjusting color.",
    "cropSuccess": "Cropped.",
    "cropError": "Error cropping.",
    "autoCropSuccess": "Auto-cropped.",
    "autoCropError": "Error auto-cropping.",
    "objectNotFound": "Object not found.",
    "saveSuccess": "Saved.",
    "makeSquareSuccess": "Squared.",
    "blurSuccess": "Blurred.",
    "blurError": "Error blurring.",
    "counterReset": "Counter reset.",
}

ERROR_MESSAGES = {
    "quotaExceeded": "AI limit exceeded.",
    "aiProcessingError": "AI error.",
    "noImageData": "No image data.",
    "noImageDataBalance": "No balance data.",
    "default": "Error.",
}
