"""
Read-only value domains that scenarios draw from.

Tuples only: these tables are shared by every concurrent scenario invocation.
"""

USERS = tuple(f"user_{i}" for i in range(1, 51))

PAGES = (
    "/dashboard",
    "/profile",
    "/settings",
    "/products",
    "/orders",
    "/checkout",
    "/admin",
    "/reports",
    "/analytics",
    "/support",
)

HTTP_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH")
STATUS_CODES = (200, 201, 204, 301, 400, 401, 403, 404, 500, 502, 503)
API_RESOURCES = ("users", "orders", "products", "payments", "notifications")

DB_OPERATIONS = ("find", "findOne", "insert", "update", "delete", "aggregate")
COLLECTIONS = ("users", "orders", "products", "sessions", "payments", "notifications")

SERVICES = (
    "auth-service",
    "payment-service",
    "order-service",
    "notification-service",
    "user-service",
    "inventory-service",
)
EXTERNAL_SERVICES = ("stripe-api", "sendgrid", "aws-s3", "redis", "elasticsearch", "twilio")
REGIONS = ("us-east-1", "us-west-2", "eu-west-1", "ap-southeast-1")

ERROR_MESSAGES = (
    "Connection refused",
    "Timeout exceeded",
    "Out of memory",
    "Disk full",
    "DNS resolution failed",
    "TLS handshake error",
    "Connection reset by peer",
    "Too many open files",
    "Permission denied",
    "Resource temporarily unavailable",
)

# user activity
LOGIN_METHODS = ("password", "oauth_google", "oauth_github", "sso")
REFERRERS = ("google", "direct", "internal", "email_campaign")
BROWSERS = ("Chrome", "Firefox", "Safari", "Edge")
CLICK_ELEMENTS = ("button_buy", "link_product", "nav_menu", "search_bar", "filter_category")

# security
RATE_LIMITED_ENDPOINTS = ("login", "register", "reset-password", "verify")
THREAT_SEVERITIES = ("low", "medium", "high", "critical")
THREAT_PATTERNS = ("brute_force", "sql_injection_attempt", "xss_attempt", "path_traversal", "port_scan")
TOKEN_TYPES = ("access", "refresh")
TOKEN_LIFETIMES_S = (900, 3600, 86400)
AUTH_FAILURE_REASONS = ("invalid_password", "account_locked", "token_expired", "invalid_token")
GEO_CITIES = ("New York", "Los Angeles", "Chicago", "Houston")

# performance / infrastructure
CACHE_EVENTS = ("cache_hit", "cache_miss", "cache_set", "cache_evict")
CACHE_KEY_PREFIXES = ("user", "product", "order", "session", "config")
CACHE_TTLS_S = (60, 300, 600, 1800, 3600)
BREAKER_STATES = ("open", "half-open")

# business
CURRENCIES = ("USD", "EUR", "GBP")
PAYMENT_METHODS = ("credit_card", "paypal", "stripe", "bank_transfer")
PAYMENT_STATUSES = ("completed", "failed", "refunded", "pending")
PAYMENT_GATEWAYS = ("stripe", "paypal", "square")
PAYMENT_FAILURE_REASONS = ("insufficient_funds", "card_declined", "timeout", "fraud_detected")
WAREHOUSES = ("warehouse-a", "warehouse-b", "warehouse-c")

# worker
JOB_TYPES = (
    "email_send",
    "report_generate",
    "data_cleanup",
    "sync_external",
    "image_resize",
    "invoice_generate",
)
QUEUES = ("high", "default", "low")

# notification
CHANNELS = ("email", "sms", "push", "webhook", "slack")
TEMPLATES = ("welcome", "order_confirm", "password_reset", "promo", "alert")

# config / audit
CONFIG_SOURCES = ("env", "file", "remote")
AUDIT_EVENTS = (
    "user_created",
    "user_deleted",
    "role_changed",
    "permission_granted",
    "settings_updated",
    "data_exported",
)
AUDIT_FIELDS = ("role", "email", "name", "status")

BURST_SEVERITIES = ("high", "critical")
