import re

import html2text
from dateutil import parser, tz

from .parser import make_soup


TIME_KEYS = ('current_time', 'restart_time', 'server_built')

_MD_ESCAPE = re.compile(r'\\(.)')
_NUMBER = re.compile(r'-?\d*\.?\d+%?')


def _date_str_to_isoformat(date_str):
    date_obj = parser.parse(date_str)
    if date_obj.tzinfo is None:
        # "Server Built" has no zone; read it as UTC, not the local zone
        date_obj = date_obj.replace(tzinfo=tz.UTC)
    iso_format_date = date_obj.astimezone(tz.UTC).isoformat()
    return iso_format_date


def _try_parse(x):
    if not _NUMBER.fullmatch(x):
        return x

    try:
        v = float(x.rstrip('%'))
        i = int(v)

        if v == i and '.' not in x:
            return i
        return v
    except OverflowError:
        pass

    return x


def _slug(key):
    key = key.strip().lower().replace('/', ' per ')
    key = re.sub(r'[^a-z0-9]+', '_', key)
    return key.strip('_')


def _header_lines(soup):
    text_maker = html2text.HTML2Text()
    text_maker.ignore_links = True
    text_maker.body_width = 0

    html = ''.join(str(dl) for dl in soup.find_all('dl'))
    txt = text_maker.handle(html)

    lines = [_MD_ESCAPE.sub(r'\1', l).strip(' *') for l in txt.split('\n')]
    return [l for l in lines if l]


def parse_server_info(html):
    """
    Parses the header section of the Apache HTTP Server status page, the
    `<dl>` blocks above the worker scoreboard, into a flat dictionary.

    The header is rendered to text with html2text and read line by line.
    Lines come in two shapes, which can be joined on one line by " - ":
    "Key: value" pairs ("Server Version: Apache/2.4.29 (Ubuntu)") and
    "value key" pairs (".175 requests/sec", "31 requests currently being
    processed, 44 idle workers"). Keys are turned into snake_case, numbers
    are parsed into ints or floats and the Current Time, Restart Time and
    Server Built stamps into ISO 8601 (UTC). Stamps without a zone, like
    Server Built, are taken to be UTC.

    The raw scoreboard string from the `<pre>` block is added as
    `scoreboard` when the page has one.

    `html` is the page text or a BeautifulSoup of it.

    Example:
    >>> from pprint import pprint
    >>> pprint(parse_server_info(html))
    {'cpu_load': 0.096,
     'cpu_usage': 'u25 s12.48 cu0 cs0',
     'current_time': '2024-04-30T16:42:59+00:00',
     'idle_workers': 44,
     'kb_per_request': 26.3,
     'parent_server_config_generation': 3,
     'parent_server_mpm_generation': 2,
     'requests_currently_being_processed': 31,
     'requests_per_sec': 0.175,
     'restart_time': '2024-04-30T05:52:06+00:00',
     'scoreboard': '_W___K....',
     'server_mpm': 'event',
     'server_uptime': '10 hours 50 minutes 53 seconds',
     'server_version': 'Apache/2.4.29 (Ubuntu) OpenSSL/1.1.1',
     'total_accesses': 6844,
     'total_traffic': '175.7 MB'}
    """
    soup = make_soup(html)

    stats = {}
    for line in _header_lines(soup):
        for item in line.split(' - '):
            if ': ' in item:
                k, v = item.split(': ', 1)
                stats[_slug(k)] = v.strip()
                continue

            for vk in item.split(', '):
                vk = vk.split()
                if len(vk) > 1 and isinstance(_try_parse(vk[0]), (int, float)):
                    stats[_slug(' '.join(vk[1:]))] = vk[0]

    info = {}
    for k, v in stats.items():
        if k in TIME_KEYS:
            try:
                info[k] = _date_str_to_isoformat(v)
            except (ValueError, OverflowError):
                info[k] = v
        else:
            info[k] = _try_parse(v)

    pre = soup.find('pre')
    if pre is not None:
        info['scoreboard'] = ''.join(pre.get_text().split())

    return info
