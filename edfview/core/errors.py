from typing import Optional


class EDFError(Exception):
    """Base class for EDF/BDF reader errors."""

    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class HeaderFormatError(EDFError):
    """Raised when the header cannot be parsed into a record layout."""

    def __init__(
        self, message: str, field: Optional[str] = None, signal_index: Optional[int] = None
    ):
        self.field = field
        self.signal_index = signal_index
        super().__init__(f"Invalid EDF/BDF header: {message}", status_code=422)


class FileTooShortError(HeaderFormatError):
    """Raised when the buffer cannot hold the header it declares."""

    def __init__(self, size: int, required: int):
        self.size = size
        self.required = required
        super().__init__(
            f"file is too short ({size} bytes, header needs {required})",
            field="header_bytes",
        )


class InvalidChannelCountError(HeaderFormatError):
    """Raised when the declared number of signals is not positive."""

    def __init__(self, value: int):
        super().__init__(f"invalid number of signals: {value}", field="num_signals")


class InvalidChannelError(EDFError):
    """Raised when a window is requested for an unknown channel id."""

    def __init__(self, channel_id: int):
        self.channel_id = channel_id
        super().__init__(f"Invalid channel ID: {channel_id}", status_code=404)


class TruncatedDataError(EDFError):
    """Raised when a data record extends past the end of the buffer."""

    def __init__(self, record_index: int):
        self.record_index = record_index
        super().__init__(
            f"Read error: unexpected end of file in data record {record_index}",
            status_code=422,
        )
