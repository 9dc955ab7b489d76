import sys
import json
import logging
import argparse

from bs4 import BeautifulSoup

from . import __version__
from .config import (
    EXIT_FETCH_ERROR,
    EXIT_OK,
    EXIT_PARSE_ERROR,
    MODSTATUS_LOG_LEVEL,
    MODSTATUS_RETRIES,
    MODSTATUS_TIMEOUT,
    MODSTATUS_URL,
)
from .exceptions import FetchError, StatusPageError
from .fetch import fetch_status_page
from .parser import parse_worker_scores
from .server_info import parse_server_info

logger = logging.getLogger('modstatus2json')


def _positive_int(x):
    try:
        v = int(x)
    except ValueError:
        raise argparse.ArgumentTypeError(f'not an integer: {x!r}') from None
    if v < 1:
        raise argparse.ArgumentTypeError(f'must be at least 1, got {x}')
    return v


def _positive_float(x):
    try:
        v = float(x)
    except ValueError:
        raise argparse.ArgumentTypeError(f'not a number: {x!r}') from None
    if not v > 0 or v == float('inf'):
        raise argparse.ArgumentTypeError(f'must be a positive number, got {x}')
    return v


def _log_level(x):
    level = logging.getLevelName(x.upper())
    if not isinstance(level, int):
        raise argparse.ArgumentTypeError(f'unknown log level: {x!r}')
    return level


def parse_arguments(argv=None):
    # string defaults from the environment go through the same type checks
    parser = argparse.ArgumentParser(
        prog='modstatus2json',
        description='Convert an Apache mod_status (ExtendedStatus On) page read '
                    'from stdin into JSON describing the worker scoreboard.')
    parser.add_argument('--url', nargs='?', const=MODSTATUS_URL, default=None,
                        help='fetch the status page from URL instead of reading stdin '
                             f'(default URL: {MODSTATUS_URL})')
    parser.add_argument('--no-times', dest='has_times', action='store_false',
                        help='the page has no CPU column (Apache built without HAS_TIMES); '
                             'workers get "cpu": null')
    parser.add_argument('--server-info', action='store_true',
                        help='add a "server" object parsed from the page header')
    parser.add_argument('--compact', action='store_true',
                        help='print the JSON on a single line')
    parser.add_argument('--retries', type=_positive_int, default=MODSTATUS_RETRIES,
                        help='HTTP attempts with --url (default: %(default)s)')
    parser.add_argument('--timeout', type=_positive_float, default=MODSTATUS_TIMEOUT,
                        help='HTTP timeout in seconds with --url (default: %(default)s)')
    parser.add_argument('--log-level', type=_log_level, default=MODSTATUS_LOG_LEVEL,
                        help='log level on stderr (default: %(default)s)')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='log debug messages to stderr')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser.parse_args(argv)


def read_stdin():
    # invalid bytes become U+FFFD
    return sys.stdin.buffer.read().decode('utf-8', 'replace')


def convert(html, has_times=True, server_info=False):
    """Build the output document for one status page."""
    soup = BeautifulSoup(html, 'html.parser')
    doc = {'workers': parse_worker_scores(soup, has_times=has_times)}
    if server_info:
        doc['server'] = parse_server_info(soup)
    return doc


def main(argv=None):
    args = parse_arguments(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else args.log_level,
        format='%(levelname)s %(name)s: %(message)s',
        stream=sys.stderr)

    try:
        if args.url:
            html = fetch_status_page(args.url, retries=args.retries, timeout=args.timeout)
        else:
            html = read_stdin()

        doc = convert(html, has_times=args.has_times, server_info=args.server_info)
    except FetchError as e:
        logger.error('Error: %s', e)
        return EXIT_FETCH_ERROR
    except StatusPageError as e:
        logger.error('Error: %s', e)
        return EXIT_PARSE_ERROR

    try:
        if args.compact:
            out = json.dumps(doc, ensure_ascii=False, allow_nan=False, separators=(',', ':'))
        else:
            out = json.dumps(doc, ensure_ascii=False, allow_nan=False, indent=2)
    except ValueError as e:
        # out of range floats have no JSON form
        logger.error('Error: %s', e)
        return EXIT_PARSE_ERROR

    sys.stdout.buffer.write((out + '\n').encode('utf-8'))
    sys.stdout.buffer.flush()
    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
