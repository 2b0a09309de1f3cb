"""Pydantic models describing ``kubectl get -o json`` list payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class KubectlBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ObjectMetadata(KubectlBaseModel):
    name: str = ""
    namespace: str | None = None
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)
    creation_timestamp: str = Field(default="", alias="creationTimestamp")

    @field_validator("labels", "annotations", mode="before")
    @classmethod
    def _none_to_empty_mapping(cls, value: object) -> object:
        return {} if value is None else value

    @field_validator("name", "creation_timestamp", mode="before")
    @classmethod
    def _none_to_blank(cls, value: object) -> object:
        return "" if value is None else value


class ObjectItem(KubectlBaseModel):
    metadata: ObjectMetadata = Field(default_factory=ObjectMetadata)

    @field_validator("metadata", mode="before")
    @classmethod
    def _none_to_default(cls, value: object) -> object:
        return {} if value is None else value


class ObjectList(KubectlBaseModel):
    """A ``*List`` wrapper; its own kind/apiVersion are deliberately ignored."""

    items: list[ObjectItem] = Field(default_factory=list)

    @field_validator("items", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return [] if value is None else value
