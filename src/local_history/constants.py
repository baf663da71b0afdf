"""Constants for local-history."""

# Workspace configuration file, relative to the workspace root
CONFIG_FILE = ".lhist.toml"

# Name of the shadow directory holding revisions
HISTORY_DIR = ".history"

# Defaults for the [history] config table
DEFAULT_DAYS_LIMIT = 30
DEFAULT_MAX_DISPLAY = 10
DEFAULT_EXCLUDE = "{.history,.vscode,**/node_modules,typings,out}"

# Revision suffix: "_" followed by YYYYMMDDHHMMSS
TIMESTAMP_DIGITS = 14
TIMESTAMP_SEPARATOR = "_"

# Watcher timings (seconds)
WATCH_POLL_INTERVAL = 1.0
WATCH_STOP_TIMEOUT = 5.0
