# utils/constants.py

# --- Environment Variables ---
# Both are required; the config may be the JSON literal `null` (no configuration)

CONFIG_ENV_VAR = "APP_CONFIG"                  # Configuration document (JSON text)
SCHEMA_ENV_VAR = "APP_CONFIG_SCHEMA"           # JSON Schema document (JSON text)

# --- Schema Engine ---
# Used when the schema does not declare its own "$schema"

DEFAULT_SCHEMA_DRAFT = "https://json-schema.org/draft/2020-12/schema"

# --- Logging ---

LOGGER_NAME = "config_loader"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_DIR = "logs"
DEFAULT_LOG_FILE = "app_config.log"

CONSOLE_LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
FILE_LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] [%(funcName)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024          # 10 MiB per file
LOG_FILE_BACKUP_COUNT = 5
