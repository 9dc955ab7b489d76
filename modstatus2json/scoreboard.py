"""
Worker records as they appear in the mod_status scoreboard table.

Each record mirrors Apache's `worker_score` struct (include/scoreboard.h).
Time and size fields carry a unit suffix because mod_status converts them
from microseconds and bytes before printing.
"""

import re

from .exceptions import (
    AccessCountsError,
    CellValueError,
    InvalidStatusCodeError,
    SrvFormatError,
    StatusCodeLengthError,
)


# ─────────────────────────── Columns ────────────────────────────
TIMES_COLUMN = 'CPU'
CPU_INDEX = 4

COLUMNS = (
    'Srv',
    'PID',
    'Acc',
    'M',
    TIMES_COLUMN,  # only with HAS_TIMES
    'SS',
    'Req',
    'Dur',
    'Conn',
    'Child',
    'Slot',
    'Client',
    'Protocol',
    'VHost',
    'Request',
)

COLUMNS_WITHOUT_TIMES = tuple(c for c in COLUMNS if c != TIMES_COLUMN)


# number shapes mod_status prints
INT_RE = re.compile(r'-?\d+')
FLOAT_RE = re.compile(r'-?\d*\.?\d+')

# "M" column, mode of operation. Same order as SERVER_* in scoreboard.h
WORKER_STATES = {
    '.': 'dead',
    'S': 'starting',
    '_': 'ready',
    'R': 'busy_read',
    'W': 'busy_write',
    'K': 'busy_keepalive',
    'L': 'busy_log',
    'D': 'busy_dns',
    'C': 'closing',
    'G': 'graceful',
    'I': 'idle_kill',
}


# ────────────────────────── Cell parsers ────────────────────────────
def parse_srv(s):
    """
    Parse the "Srv" column, "<child server number>-<generation>".

    Returns a tuple of (child_server_number, generation).
    """
    parts = s.split('-')
    if len(parts) != 2:
        raise SrvFormatError(s)

    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        raise SrvFormatError(s) from None


def parse_pid(s):
    # "-" means the process is dead
    if s == '-':
        return None
    return parse_int('PID', s)


def parse_acc(s):
    """
    Parse the "Acc" column, "<connection>/<child>/<slot>" access counts.

    scoreboard.h and mod_status.c name these differently: `conn_count` is
    `conn_lres`, `my_lres` is `my_access_count` and `lres` is `access_count`.
    """
    parts = s.split('/')
    if len(parts) != 3:
        raise AccessCountsError(s)

    connection, child, slot = (parse_int('Acc', p) for p in parts)
    return dict(connection=connection, child=child, slot=slot)


def parse_worker_status(s):
    if len(s) != 1:
        raise StatusCodeLengthError(s)

    try:
        return WORKER_STATES[s]
    except KeyError:
        raise InvalidStatusCodeError(s) from None


def parse_int(column, s):
    if not INT_RE.fullmatch(s):
        raise CellValueError(column, s)
    return int(s)


def parse_float(column, s):
    # mod_status prints ".25" for values below one
    if not FLOAT_RE.fullmatch(s):
        raise CellValueError(column, s)
    return float(s)


# ─────────────────────────── Records ────────────────────────────
def build_worker(cols):
    """
    Map the 15 cell strings of one row to a worker record.

    `cols[CPU_INDEX]` may be None when the page was generated without
    HAS_TIMES; the record then carries `cpu: None`.
    """
    server_number, generation = parse_srv(cols[0])
    cpu = cols[CPU_INDEX]

    return dict(
        server_number=server_number,
        generation=generation,
        pid=parse_pid(cols[1]),
        access_counts=parse_acc(cols[2]),
        status=parse_worker_status(cols[3]),
        cpu=None if cpu is None else parse_float('CPU', cpu),
        seconds_since_s=parse_int('SS', cols[5]),
        request_time_ms=parse_int('Req', cols[6]),
        duration_ms=parse_int('Dur', cols[7]),
        conn_kib=parse_float('Conn', cols[8]),
        child_mib=parse_float('Child', cols[9]),
        slot_mib=parse_float('Slot', cols[10]),
        client=cols[11],
        protocol=cols[12],
        vhost=cols[13],
        request=cols[14],
    )
