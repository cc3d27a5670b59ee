"""Internal constants shared across the library."""

BASE_URL = "http://localhost:3001/api"
USER_AGENT = "campusdesk/1"
DEFAULT_REQUEST_TIMEOUT: float = 30.0

# Server envelope keys: {"data": ..., "message": ..., "success": ...}
ENVELOPE_DATA_KEY = "data"
ENVELOPE_MESSAGE_KEY = "message"
ENVELOPE_SUCCESS_KEY = "success"

NOT_AVAILABLE = "N/A"
