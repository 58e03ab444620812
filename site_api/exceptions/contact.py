from fastapi import status

from .api_exception import APIException


class MethodNotAllowedError(APIException):
    status_code = status.HTTP_405_METHOD_NOT_ALLOWED
    detail = "Method not allowed"
    description = "Only POST (and the OPTIONS preflight) are accepted."


class UnsupportedContentTypeError(APIException):
    status_code = status.HTTP_415_UNSUPPORTED_MEDIA_TYPE
    detail = "Unsupported content type"
    description = "The body must be form-encoded or JSON."


class MalformedBodyError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Bad body"
    description = "The body could not be parsed for its declared content type."


class MissingFieldError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Missing fields"
    description = "Name, email and message are required."


class InvalidEmailError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Invalid email"
    description = "This email is invalid."


class CaptchaMissingError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Captcha missing"
    description = "A Turnstile response is required."


class CaptchaFailedError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Captcha failed"
    description = "The Turnstile response is invalid."


class MailTransportError(APIException):
    status_code = status.HTTP_502_BAD_GATEWAY
    detail = "Mail error"
    description = "The message could not be sent."
