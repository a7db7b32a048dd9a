"""Global constants for the application."""

# Render settings
DEFAULT_FRAME = 0  # Frame rendered when none is requested
DEFAULT_RENDERER = "svg"  # Only renderer mode that produces static markup
CONTAINER_TAG = "div"  # Element the animation is mounted into

# Engine lifecycle events
EVENT_DOM_LOADED = "DOMLoaded"  # Render tree built, safe to seek
EVENT_DATA_FAILED = "data_failed"
EVENT_ERROR = "error"
EVENT_CONFIG_READY = "config_ready"  # Advisory only
EVENT_DATA_READY = "data_ready"  # Advisory only

# Rasterizing engine defaults
SVG_NAMESPACE = "http://www.w3.org/2000/svg"
DEFAULT_IMAGE_FORMAT = "png"
SUPPORTED_IMAGE_FORMATS = ("png", "webp")
DEFAULT_PRESERVE_ASPECT_RATIO = "xMidYMid meet"

# Environment
TIMEOUT_ENV_VAR = "LOTTIE_FRAME_TIMEOUT"  # Seconds, read by the CLI and web app

# Output
INJECT_MARKER = "<!-- lottie-frame -->"  # Line replaced by --inject-into
