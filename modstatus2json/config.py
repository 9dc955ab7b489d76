import os

# ─────────────────────────── Config ────────────────────────────
# Kept as strings; the CLI validates them like the matching flags
MODSTATUS_URL = os.getenv('MODSTATUS_URL', 'http://localhost/server-status')
MODSTATUS_TIMEOUT = os.getenv('MODSTATUS_TIMEOUT', '10')
MODSTATUS_RETRIES = os.getenv('MODSTATUS_RETRIES', '3')
MODSTATUS_LOG_LEVEL = os.getenv('MODSTATUS_LOG_LEVEL', 'WARNING')

USER_AGENT = 'modstatus2json'

# ─────────────────────────── Exit codes ────────────────────────────
EXIT_OK = 0
EXIT_PARSE_ERROR = 1
EXIT_FETCH_ERROR = 3
