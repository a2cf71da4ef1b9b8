from __future__ import annotations

from enum import Enum

from starlette.status import HTTP_400_BAD_REQUEST, HTTP_500_INTERNAL_SERVER_ERROR, HTTP_502_BAD_GATEWAY


class AppExceptionCode(Enum):
    """Defines custom App Exception codes for the pipeline, associated with HTTP Status codes."""
    BAD_REQUEST_ERROR = (HTTP_400_BAD_REQUEST, "Bad Request", "E_001")
    INTERNAL_SERVER_ERROR = (HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error", "E_003")
    CONFIGURATION_VALIDATION_ERROR = (HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error", "E_009")
    RESPONSE_DECODE_ERROR = (HTTP_502_BAD_GATEWAY, "Bad Gateway", "E_010")

    def __init__(self, response_code:int, message:str, error_code:str):
        self._response_code = response_code
        self._message = message
        self._error_code = error_code

    @property
    def response_code(self):
        return self._response_code

    @property
    def message(self):
        return self._message

    @property
    def error_code(self):
        return self._error_code

    def __str__(self):
        return f"response_code={self.response_code}, message={self.message}, error_code={self.error_code}"



class AppException(Exception):
    """Base exception for the pipeline"""
    def __init__(self, detail_message:str, app_exception_code:AppExceptionCode = AppExceptionCode.INTERNAL_SERVER_ERROR):
        self._detail_message = detail_message
        self._app_exception_code = app_exception_code
        super().__init__(detail_message)

    @property
    def detail_message(self):
        return self._detail_message

    @property
    def response_code(self):
        return self._app_exception_code.response_code

    @property
    def message(self):
        return self._app_exception_code.message

    @property
    def error_code(self):
        return self._app_exception_code.error_code

    def __str__(self):
        return f"response_code={self.response_code}, message={self.message}, detail_message={self.detail_message}, error_code={self.error_code}"



class InvalidContentException(AppException):
    """Raised when a request body is not a string"""
    def __init__(self, detail_message:str):
        super().__init__(detail_message, AppExceptionCode.BAD_REQUEST_ERROR)

    def __str__(self):
        return super().__str__()

class ResponseDecodeException(AppException):
    """Raised when a response body cannot be decoded"""
    def __init__(self, detail_message:str):
        super().__init__(detail_message, AppExceptionCode.RESPONSE_DECODE_ERROR)

    def __str__(self):
        return super().__str__()

class ConfigurationValidationException(AppException):
    """Raised when logging or settings configuration is invalid"""
    def __init__(self, detail_message:str):
        super().__init__(detail_message, AppExceptionCode.CONFIGURATION_VALIDATION_ERROR)

    def __str__(self):
        return super().__str__()
