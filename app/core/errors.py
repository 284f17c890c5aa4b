"""Error taxonomy for the document generation core.

- ConfigurationError: missing credentials. Fatal for primary stores and the LLM,
  degraded to empty results by the memory service.
- NotFoundError: a business, listing or document record that must exist does not.
- ValidationError: generated output cannot be mapped onto the document schema.
- TransientCallError: a network call failed or timed out (after retry).
"""


class DocumentEngineError(Exception):
    """Base class for document engine failures."""


class ConfigurationError(DocumentEngineError):
    """Required credentials or settings are missing."""


class NotFoundError(DocumentEngineError):
    """A required record does not exist."""

    def __init__(self, entity: str, key: str):
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} not found: {key}")


class ValidationError(DocumentEngineError):
    """Generated content cannot be written to the document schema."""


class TransientCallError(DocumentEngineError):
    """An external call failed or timed out."""


class ContextAggregationError(DocumentEngineError):
    """Section context could not be assembled."""


class TemplateStoreError(DocumentEngineError):
    """The template catalog is unavailable."""


class SchemaIntrospectionError(DocumentEngineError):
    """The destination document table could not be introspected."""
