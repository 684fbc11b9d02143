"""Exception hierarchy for GraphML decoding and configuration.

Every decode failure is fatal to the call that raised it: a malformed document
cannot be partially trusted, so no partial Document is ever returned.
"""

from typing import List, Optional


class GraphMLError(Exception):
    """Base exception for all codec failures.

    Attributes:
        element: Local name of the element being processed, if known
        identifier: Offending identifier (key or element id), if any
    """

    def __init__(
        self,
        message: str,
        element: Optional[str] = None,
        identifier: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.element = element
        self.identifier = identifier


class PrematureEndError(GraphMLError):
    """Raised when the stream ends before the current element is closed."""


class UnexpectedElementError(GraphMLError):
    """Raised when a child element is not permitted under its parent."""


class UnexpectedTokenError(GraphMLError):
    """Raised for stray text, instructions or mismatched closing tags."""


class UnknownAttributeError(GraphMLError):
    """Raised when a data element references an undeclared key."""


class DuplicateKeyError(GraphMLError):
    """Raised when a key id is declared twice for the same scope."""


class DuplicateIDError(GraphMLError):
    """Raised when two elements share an id anywhere in the document."""


class MalformedRootError(GraphMLError):
    """Raised when the graphml root element is missing or misnamed."""


class TokenStreamError(GraphMLError):
    """Raised when the underlying XML stream is not well-formed."""


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []
