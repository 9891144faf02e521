from typing import Any, Dict, Optional


class HandlerError(Exception):
    """リクエスト境界でJSONエラーレスポンスに変換される例外の基底クラス"""

    status_code: int = 500

    def __init__(self, error: str, details: Optional[str] = None):
        super().__init__(error)
        self.error = error
        self.details = details

    def to_content(self) -> Dict[str, Any]:
        content: Dict[str, Any] = {"error": self.error}
        if self.details is not None:
            content["details"] = self.details
        return content


class ConfigurationError(HandlerError):
    status_code = 500


class ValidationError(HandlerError):
    status_code = 400


class UpstreamError(HandlerError):
    status_code = 500

    def __init__(self, error: str, upstream_status: Optional[int], details: Optional[str] = None):
        super().__init__(error, details)
        self.upstream_status = upstream_status


class InternalError(HandlerError):
    status_code = 500

    def __init__(self, details: Optional[str] = None):
        super().__init__("Internal server error", details)
