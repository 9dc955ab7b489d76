class ModStatusError(Exception):
    """Base class for everything modstatus2json raises on purpose."""


class FetchError(ModStatusError):
    pass


class StatusPageError(ModStatusError):
    """The status page could not be converted."""


class InvalidHeadersError(StatusPageError):
    def __init__(self, expected, found):
        self.expected = list(expected)
        self.found = list(found)
        super().__init__(
            f"invalid headers: expected {' '.join(self.expected)!r}, "
            f"found {' '.join(self.found)!r}")


class InvalidCellCountError(StatusPageError):
    def __init__(self, count, row_html):
        self.count = count
        self.row_html = row_html
        super().__init__(f"invalid cell count {count}: {row_html}")


class WorkerScoreParseError(StatusPageError):
    pass


class SrvFormatError(WorkerScoreParseError):
    def __init__(self, value):
        super().__init__(f'the "Srv" column is not in format `x-x`: `{value}`')


class AccessCountsError(WorkerScoreParseError):
    def __init__(self, value):
        super().__init__(f"invalid field count when parsing `{value}`, expected `1/2/3`")


class StatusCodeLengthError(WorkerScoreParseError):
    def __init__(self, value):
        super().__init__(f"status code must be exactly one character long: `{value}`")


class InvalidStatusCodeError(WorkerScoreParseError):
    def __init__(self, code):
        self.code = code
        super().__init__(f"invalid status code `{code}`")


class CellValueError(WorkerScoreParseError):
    def __init__(self, column, value):
        self.column = column
        self.value = value
        super().__init__(f"cannot parse {column} value `{value}`")
