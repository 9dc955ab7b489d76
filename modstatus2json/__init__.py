from .exceptions import ModStatusError, StatusPageError
from .parser import parse_worker_scores
from .server_info import parse_server_info

__version__ = '0.2.0'

__all__ = [
    'ModStatusError',
    'StatusPageError',
    'parse_server_info',
    'parse_worker_scores',
]
