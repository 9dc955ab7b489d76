from pathlib import Path

import pytest

DATA_DIR = Path(__file__).parent / 'data'


def read_fixture(name):
    return (DATA_DIR / name).read_text(encoding='utf-8')


@pytest.fixture
def status_html():
    return read_fixture('server_status.html')


@pytest.fixture
def no_times_html():
    return read_fixture('server_status_no_times.html')


@pytest.fixture
def empty_html():
    return read_fixture('server_status_empty.html')


@pytest.fixture
def basic_html():
    return read_fixture('server_status_basic.html')
