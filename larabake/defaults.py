"""
Framework Default Values
All hardcoded values should be defined here and accessed via Config.get()
This file contains sensible defaults that can be overridden in config/ modules
"""

# ============================================================================
# VIEW DEFAULTS
# ============================================================================

# Canonical template extension, always tried after the configured one
DEFAULT_TEMPLATE_EXTENSION = '.tpl'
DEFAULT_LAYOUT = 'default'
DEFAULT_TEMPLATES_DIR = 'templates'

# Directory names below every template root
VIEW_LAYOUT_DIR = 'Layout'
VIEW_ELEMENT_DIR = 'Element'
VIEW_PLUGIN_DIR = 'Plugin'
VIEW_THEME_DIR = 'Themed'
VIEW_EMAIL_DIR = 'Email'

# Separator used in Plugin.name notation
PLUGIN_SEPARATOR = '.'

# ============================================================================
# ELEMENT CACHE DEFAULTS
# ============================================================================

DEFAULT_ELEMENT_CACHE_CONFIG = 'default'
ELEMENT_CACHE_PREFIX = 'element_'

# ============================================================================
# REDIS DEFAULTS
# ============================================================================

DEFAULT_REDIS_URL = 'redis://localhost:6379/0'

# ============================================================================
# CACHE DEFAULTS
# ============================================================================

DEFAULT_CACHE_TTL = 3600  # seconds (1 hour)
DEFAULT_CACHE_STORE = 'array'
DEFAULT_QUERY_CACHE_CONFIG = 'default'

# ============================================================================
# PAGINATION DEFAULTS
# ============================================================================

DEFAULT_PAGINATION_PER_PAGE = 20
MAX_PAGINATION_PER_PAGE = 100

# ============================================================================
# MAIL DEFAULTS
# ============================================================================

DEFAULT_MAIL_TRANSPORT = 'debug'
DEFAULT_MAIL_FORMAT = 'text'
DEFAULT_MAIL_CHARSET = 'utf-8'
DEFAULT_MAIL_LAYOUT = 'default'
DEFAULT_SMTP_HOST = 'localhost'
DEFAULT_SMTP_PORT = 25
DEFAULT_SMTP_TIMEOUT = 30  # seconds
DEFAULT_MAIL_DOMAIN = 'localhost'

# ============================================================================
# LOGGING DEFAULTS
# ============================================================================

DEFAULT_LOG_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_LOG_BACKUP_COUNT = 5
