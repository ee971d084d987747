"""Constants for the Daily Active Energy integration."""

DOMAIN = "daily_active_energy"

# Config flow steps
CONF_ENERGY_SENSOR = "energy_sensor"
CONF_GOAL_SENSOR = "goal_sensor"

# Settings (daily goal is also exposed as a number entity)
CONF_WINDOW_DAYS = "window_days"
CONF_DAILY_GOAL = "daily_goal"
CONF_INTERPOLATE_AVERAGE = "interpolate_average"

# Defaults
DEFAULT_NAME = "Daily Active Energy"
DEFAULT_WINDOW_DAYS = 7
DEFAULT_DAILY_GOAL = 0.0
DEFAULT_INTERPOLATE_AVERAGE = False
DEFAULT_UNIT = "kcal"

MIN_WINDOW_DAYS = 1
MAX_WINDOW_DAYS = 60

# Coordinator
UPDATE_INTERVAL_SECONDS = 300

# Seconds after each hour boundary to force a refresh (lets the recorder
# compile the closing 5-minute statistic first)
HOUR_ROLLOVER_DELAY_SECONDS = 30

# Snapshot store
SNAPSHOT_SAVE_DELAY_SECONDS = 10

# Platforms
PLATFORMS = ["sensor", "number"]
