from wat.models.messages import Message, Role
from wat.models.completions import (
    Choice, CompletionsRequest, CompletionsResponse, ResponseFormat, ResponseFormatType,
)

__all__ = [
    "Message", "Role",
    "Choice", "CompletionsRequest", "CompletionsResponse",
    "ResponseFormat", "ResponseFormatType",
]
