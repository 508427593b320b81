"""Request DTOs for API endpoints."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class GraphQLRequest(BaseModel):
    """Standard GraphQL-over-HTTP request body.

    The handler will convert this to a RequestDescriptor for the cache layer.
    """

    model_config = ConfigDict(populate_by_name=True)

    query: str | None = Field(None, description="The GraphQL document")
    operation_name: str | None = Field(
        None,
        alias="operationName",
        description="Operation to run when the document holds several",
    )
    variables: dict[str, Any] | None = Field(None, description="Operation variables")
    extensions: dict[str, Any] | None = Field(None, description="Protocol extensions")
