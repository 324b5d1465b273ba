"""Pydantic models describing the GraphQL-over-HTTP response envelope."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from rowsync.domain.ports import GraphQLErrorDetail, GraphQLResult


class GraphQLBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ErrorLocation(GraphQLBaseModel):
    line: int
    column: int


class ErrorPayload(GraphQLBaseModel):
    message: str
    locations: list[ErrorLocation] | None = None
    path: list[str | int] | None = None
    extensions: dict[str, Any] | None = None

    def to_detail(self) -> GraphQLErrorDetail:
        return GraphQLErrorDetail(
            message=self.message,
            path=tuple(self.path) if self.path is not None else None,
            extensions=self.extensions,
        )


class GraphQLResponse(GraphQLBaseModel):
    data: dict[str, Any] | None = None
    errors: list[ErrorPayload] = Field(default_factory=list["ErrorPayload"])

    def to_result(self) -> GraphQLResult:
        return GraphQLResult(
            data=self.data,
            errors=tuple(error.to_detail() for error in self.errors),
        )
