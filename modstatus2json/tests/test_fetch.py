from unittest import mock

import pytest
import requests

from modstatus2json.exceptions import FetchError
from modstatus2json.fetch import fetch_status_page


def _response(text='<html></html>', status_code=200):
    response = requests.models.Response()
    response.status_code = status_code
    response._content = text.encode('utf-8')
    response.encoding = 'utf-8'
    return response


def test_fetch_returns_text():
    with mock.patch('modstatus2json.fetch.requests.get', return_value=_response('ok')) as get:
        assert fetch_status_page('http://localhost/server-status', retries=3, timeout=5) == 'ok'

    get.assert_called_once()
    args, kwargs = get.call_args
    assert args == ('http://localhost/server-status',)
    assert kwargs['timeout'] == 5
    assert kwargs['headers']['User-Agent'] == 'modstatus2json'


def test_fetch_retries_then_succeeds():
    side_effect = [requests.exceptions.ConnectionError('refused'), _response('ok')]
    with mock.patch('modstatus2json.fetch.requests.get', side_effect=side_effect) as get:
        assert fetch_status_page('http://localhost/server-status', retries=3) == 'ok'
    assert get.call_count == 2


def test_fetch_http_error_counts_as_failure(caplog):
    with mock.patch('modstatus2json.fetch.requests.get', return_value=_response('nope', 403)) as get:
        with pytest.raises(FetchError, match='after 2 attempts'):
            fetch_status_page('http://localhost/server-status', retries=2)
    assert get.call_count == 2
    assert caplog.text.count('Attempt') == 2


def test_fetch_needs_an_attempt():
    with mock.patch('modstatus2json.fetch.requests.get') as get:
        with pytest.raises(ValueError):
            fetch_status_page('http://localhost/server-status', retries=0)
    get.assert_not_called()
