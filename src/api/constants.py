"""API-related constants."""

# HTTP Headers
CORRELATION_ID_HEADER = "X-Correlation-ID"
REQUEST_ID_HEADER = "X-Request-ID"

# Request handling
FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")
PASSWORD_FIELD = "password"

# Responses
GENERIC_INTERNAL_ERROR_MESSAGE = "Internal Server Error"
MAX_USER_AGENT_LENGTH = 200

# Static HTML forms served from the static directory
ADD_PRICE_PAGE = "add-price.html"
EDIT_PRICE_PAGE = "edit-price.html"
