"""
Application-wide constants for StuddyBuddy.

Network defaults, API routes and HTTP status codes shared by the client,
the auth service and the CLI.
"""

# Network and connection constants
DEFAULT_BASE_URL = "http://localhost:5000"
DEFAULT_TIMEOUT_SECONDS = 30
MAX_TIMEOUT_SECONDS = 300
DEFAULT_MAX_RETRIES = 0
MAX_TRANSPORT_RETRIES = 10
DEFAULT_BACKOFF_FACTOR = 0.3

# Headers
AUTHORIZATION_HEADER = "Authorization"
BEARER_PREFIX = "Bearer "
DEFAULT_HEADERS = {"Content-Type": "application/json"}

# API routes
SIGNUP_ENDPOINT = "/api/user/sign-up"
LOGIN_ENDPOINT = "/api/user/login"
GOOGLE_LOGIN_ENDPOINT = "/auth/google-login"
ADD_USER_TO_PROJECT_ENDPOINT = "/projects/addUserToProject"

# Where an expired session sends the user
DEFAULT_LOGIN_PATH = "/login"

# Session storage
DEFAULT_SESSION_KEY = "currentUser"
SESSION_FILE_MODE = 0o600

# Login type for email/password; anything else is a refresh-token login
LOGIN_TYPE_EMAIL = "email"

# HTTP status codes
HTTP_STATUS_UNAUTHORIZED = 401

# Log file defaults
DEFAULT_LOG_FILE_SIZE_BYTES = 10 * 1024 * 1024
MIN_LOG_FILE_SIZE_BYTES = 1024
DEFAULT_LOG_BACKUP_COUNT = 5
