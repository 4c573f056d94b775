"""Client-side submittable forms with status flags, error bags and named routes."""

from formclient.domain import (
    FileBlob,
    FileList,
    Form,
    FormConfigError,
    FormContext,
    FormErrors,
    Response,
    RouteTable,
    TransportPort,
)

__all__ = [
    "FileBlob",
    "FileList",
    "Form",
    "FormConfigError",
    "FormContext",
    "FormErrors",
    "Response",
    "RouteTable",
    "TransportPort",
]
