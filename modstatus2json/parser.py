import logging

from bs4 import BeautifulSoup

from .exceptions import (
    InvalidCellCountError,
    InvalidHeadersError,
    StatusPageError,
    WorkerScoreParseError,
)
from .scoreboard import COLUMNS, COLUMNS_WITHOUT_TIMES, CPU_INDEX, build_worker

logger = logging.getLogger(__name__)


def make_soup(markup):
    if isinstance(markup, BeautifulSoup):
        return markup
    return BeautifulSoup(markup, 'html.parser')


def _cells(tr):
    return tr.find_all(['th', 'td'], recursive=False)


def _cell_text(cell):
    return cell.get_text().strip()


def find_worker_table(soup):
    """Return the first borderless table whose header row starts with "Srv"."""
    for table in soup.find_all('table', attrs={'border': '0'}):
        tr = table.find('tr')
        if tr is None:
            continue
        headers = [_cell_text(c) for c in _cells(tr)]
        if headers and headers[0] == COLUMNS[0]:
            return table
    return None


def validate_headers(row, has_times=True):
    expected = COLUMNS if has_times else COLUMNS_WITHOUT_TIMES
    found = [_cell_text(c) for c in _cells(row)]
    logger.debug('Parsed table headings: %r', found)

    if tuple(found) != expected:
        raise InvalidHeadersError(expected, found)


def parse_row(row, has_times=True):
    """Parse one data row of the scoreboard table into a worker record."""
    cols = [_cell_text(c) for c in _cells(row)]

    if len(cols) == len(COLUMNS) and has_times:
        pass
    elif len(cols) == len(COLUMNS_WITHOUT_TIMES) and not has_times:
        # no CPU column without HAS_TIMES
        cols.insert(CPU_INDEX, None)
    else:
        raise InvalidCellCountError(len(cols), str(row))

    return build_worker(cols)


def parse_worker_scores(html, has_times=True):
    """
    Find the table with worker scores and convert it to a list of worker
    records, in page order.

    The page must come from mod_status with `ExtendedStatus On`. By default
    the CPU column (Apache built with HAS_TIMES) is assumed to be present
    and a page without it is rejected by the header check; pass
    `has_times=False` to accept the 14 column layout instead, in which case
    every record has `cpu` set to None.

    `html` is the page text or a BeautifulSoup of it.

    Raises:
    - StatusPageError: no worker table on the page.
    - InvalidHeadersError: the header row is not the expected one.
    - InvalidCellCountError, WorkerScoreParseError: a data row could not be
      parsed. The conversion stops at the first bad row.
    """
    soup = make_soup(html)
    table = find_worker_table(soup)
    if table is None:
        raise StatusPageError(
            'no worker table found; is ExtendedStatus enabled?')

    rows = table.find_all('tr')
    validate_headers(rows[0], has_times=has_times)

    workers = []
    for i, row in enumerate(rows[1:], start=1):
        try:
            workers.append(parse_row(row, has_times=has_times))
        except (InvalidCellCountError, WorkerScoreParseError) as e:
            logger.debug('Row %d: %s', i, row)
            e.row = i
            e.args = (f'row {i}: {e}',)
            raise

    logger.debug('Parsed %d worker rows', len(workers))
    return workers
