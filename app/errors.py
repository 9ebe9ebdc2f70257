"""Boundary errors raised by the geolocation and venue transport layers.

Only these two kinds cross into callers. Hours parsing and scoring never raise;
they degrade to ``unknown`` verdicts instead.
"""
from enum import Enum


class PositionErrorKind(str, Enum):
    """Why the user position could not be obtained."""
    DENIED = "denied"
    UNAVAILABLE = "unavailable"
    TIMEOUT = "timeout"
    OTHER = "other"


class TransportErrorKind(str, Enum):
    """Categorized venue search transport failure."""
    QUOTA_EXCEEDED = "quota_exceeded"
    INVALID_REQUEST = "invalid_request"
    DENIED = "denied"
    UNAVAILABLE = "unavailable"


POSITION_ERROR_MESSAGES: dict[PositionErrorKind, str] = {
    PositionErrorKind.DENIED: (
        "位置情報の使用が許可されていません。ブラウザの設定から位置情報を許可してください。"
    ),
    PositionErrorKind.UNAVAILABLE: "位置情報を取得できませんでした。",
    PositionErrorKind.TIMEOUT: "位置情報の取得がタイムアウトしました。",
    PositionErrorKind.OTHER: "位置情報の取得中にエラーが発生しました。",
}

TRANSPORT_ERROR_MESSAGES: dict[TransportErrorKind, str] = {
    TransportErrorKind.QUOTA_EXCEEDED: "API使用制限を超えました。しばらく待ってからお試しください。",
    TransportErrorKind.INVALID_REQUEST: "リクエストが無効です。ページを再読み込みしてください。",
    TransportErrorKind.DENIED: (
        "APIキーが無効、または「Places API」が有効化されていません。"
        "Google Cloud Consoleで「Places API」を有効にしてください。"
    ),
    TransportErrorKind.UNAVAILABLE: "お店の検索に失敗しました。",
}


class PositionError(Exception):
    """Raised when the user position cannot be determined."""

    def __init__(self, kind: PositionErrorKind, detail: str = ""):
        self.kind = kind
        self.detail = detail
        super().__init__(self.message)

    @property
    def message(self) -> str:
        """User-facing message for this error kind."""
        return POSITION_ERROR_MESSAGES[self.kind]


class TransportError(Exception):
    """Raised when the venue search transport reports a hard failure."""

    def __init__(self, kind: TransportErrorKind, status: str = ""):
        self.kind = kind
        self.status = status
        super().__init__(self.message)

    @property
    def message(self) -> str:
        """User-facing message for this error kind."""
        return TRANSPORT_ERROR_MESSAGES[self.kind]
