"""AD2 bridge protocol constants."""

# Connection defaults
DEFAULT_HOST = "alarmdecoder"
DEFAULT_PORT = 10000
RECONNECT_DELAY_SECONDS = 5.0
CONNECT_TIMEOUT_SECONDS = 10.0
READ_CHUNK_SIZE = 4096

# Framing
LINE_TERMINATOR = "\n"
MAX_LINE_LENGTH = 4096

# Inbound messages
EXPANDER_PREFIX = "!EXP"
EXPANDER_SEPARATOR = ":"
KEYPAD_PREFIX = "["
FIELD_DELIMITER = ","
ZONE_RESTORED = "00"
QUOTE = '"'

# Outbound
ENTER_CODE_PREFIX = "#"
