"""Custom exceptions for adoc2dita."""


class Adoc2ditaError(Exception):
    """Base exception for adoc2dita operations."""


class LoadError(Adoc2ditaError):
    """Error while loading an input document tree."""


class ConversionError(Adoc2ditaError):
    """Error during tree to DITA conversion."""


class UnsupportedNodeKind(ConversionError):
    """No rendering rule exists for a node kind or sub-kind."""

    def __init__(self, kind: str) -> None:
        super().__init__(f"Unsupported node kind: {kind}")
        self.kind = kind


class MissingRequiredAttribute(ConversionError):
    """A node lacks an attribute its rendering rule needs."""

    def __init__(self, kind: str, attribute: str) -> None:
        super().__init__(f"{kind} node is missing required attribute '{attribute}'")
        self.kind = kind
        self.attribute = attribute


class DocumentConversionError(Adoc2ditaError):
    """A document of a batch failed to convert."""

    def __init__(self, name: str, pass_number: int, cause: Exception) -> None:
        super().__init__(f"Failed to convert '{name}' (pass {pass_number}): {cause}")
        self.name = name
        self.pass_number = pass_number
        self.cause = cause


class BundleError(Adoc2ditaError):
    """Error while archiving the generated output."""
