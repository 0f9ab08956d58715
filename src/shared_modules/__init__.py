from .config import Config
from .exceptions import InvalidDateRange, ReportError, RequestDecodeError, TemplateStructureError
