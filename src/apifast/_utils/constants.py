APIFAST_VERSION = "0.1.0"

# Environment variables
ENV_TIMEOUT = "APIFAST_TIMEOUT"
ENV_VERIFY_SSL = "APIFAST_VERIFY_SSL"
ENV_FOLLOW_REDIRECTS = "APIFAST_FOLLOW_REDIRECTS"
ENV_USER_AGENT = "APIFAST_USER_AGENT"
ENV_USE_SYSTEM_CERTS = "APIFAST_USE_SYSTEM_CERTS"
ENV_DEBUG = "APIFAST_DEBUG"

# Headers
HEADER_AUTHORIZATION = "Authorization"
HEADER_USER_AGENT = "User-Agent"

# Methods
METHOD_GET = "GET"
METHOD_POST = "POST"
METHOD_PATCH = "PATCH"
METHOD_DELETE = "DELETE"

DEFAULT_USER_AGENT = f"apifast/{APIFAST_VERSION}"
MASKED_VALUE = "***"
