"""Domain package exports for the form entity and its value objects."""

from .context import DEFAULT_IGNORE, FormContext
from .errors import FormErrors
from .fields import FieldValue, FileBlob, FileList, is_file_value
from .form import Form
from .multipart import MultipartBody, has_file, to_form_data
from .ports import FormConfigError, HTTP_METHODS, Response, TransportPort
from .routes import RouteTable, resolve_route

__all__ = [
    "DEFAULT_IGNORE",
    "FieldValue",
    "FileBlob",
    "FileList",
    "Form",
    "FormConfigError",
    "FormContext",
    "FormErrors",
    "HTTP_METHODS",
    "MultipartBody",
    "Response",
    "RouteTable",
    "TransportPort",
    "has_file",
    "is_file_value",
    "resolve_route",
    "to_form_data",
]
