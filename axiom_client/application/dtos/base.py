"""Shared pydantic configuration for Axiom request and response payloads."""

from typing import Any, Dict, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from axiom_client.domain.entities.errors import (
    InvalidRequestError,
    ServiceResponseError,
)

PayloadT = TypeVar("PayloadT", bound=BaseModel)
RequestT = TypeVar("RequestT", bound="RequestDTO")


class RequestDTO(BaseModel):
    """Immutable request body serialised with the service's camelCase names."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    def to_body(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ResponseDTO(BaseModel):
    """Response payload; unknown fields are ignored."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def parse_payload(dto_cls: Type[PayloadT], payload: Any, endpoint: str) -> PayloadT:
    """Validate ``payload`` into ``dto_cls``.

    Raises:
        ServiceResponseError: If the payload does not have the expected shape.
    """
    try:
        return dto_cls.model_validate(payload)
    except ValidationError as exc:
        raise ServiceResponseError(
            f"Unexpected response from {endpoint}",
            {"endpoint": endpoint, "errors": exc.errors(include_url=False)},
        ) from exc


def build_request(dto_cls: Type[RequestT], endpoint: str, **fields: Any) -> RequestT:
    """Build a request DTO from caller arguments.

    Raises:
        InvalidRequestError: If the arguments do not form a valid request.
    """
    try:
        return dto_cls(**fields)
    except ValidationError as exc:
        errors = exc.errors(include_url=False, include_input=False)
        raise InvalidRequestError(
            f"Invalid arguments for {endpoint}",
            {"endpoint": endpoint, "errors": errors},
        ) from exc
