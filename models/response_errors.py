# models/response_errors.py
from typing import Optional


class CRMResponseError(ValueError):
    """Base class for everything the response parser raises"""


class MalformedDocumentError(CRMResponseError):
    """The response body is not well-formed XML"""


class UnrecognizedShapeError(CRMResponseError):
    """
    Well-formed response that matches none of the known shapes.
    Usually means the service started sending a new wire format.
    """

    def __init__(self, root_tag: str, module_name: str, operation_name: str):
        self.root_tag = root_tag
        self.module_name = module_name
        self.operation_name = operation_name
        super().__init__(
            f"Unknown CRM response format (root <{root_tag}>, "
            f"module {module_name}, method {operation_name})"
        )


class ApiError(CRMResponseError):
    """
    Error reported by the service itself inside the response body.
    uri, code and message are kept exactly as the service sent them.
    """

    def __init__(self, uri: Optional[str], code: Optional[str], message: Optional[str]):
        self.uri = uri
        self.code = code
        self.message = message
        super().__init__(f"{uri or ''} {message or ''}".strip())
