"""
Session DTOs - Application Layer

Bodies and responses of the user token and live data token endpoints.
"""

from typing import Any, List, Optional

from pydantic import Field

from axiom_client.application.dtos.base import RequestDTO, ResponseDTO
from axiom_client.shared.consts import DEFAULT_LIVE_MODE


class UserTokenRequestDTO(RequestDTO):
    """Body of ``getUserToken``."""

    application: str = Field(description="Client application name")
    time_zone: str = Field(description="Time zone used for relative times")
    username: str
    password: str = Field(repr=False)


class UserTokenResponseDTO(ResponseDTO):
    user_token: str = Field(min_length=1)


class LiveDataTokenRequestDTO(RequestDTO):
    """Body of ``getLiveDataToken`` without the session token."""

    tags: List[str]
    mode: str = DEFAULT_LIVE_MODE
    include_quality: bool = True


class LiveDataTokenResponseDTO(ResponseDTO):
    live_data_token: str = Field(min_length=1)


class LiveDataPollRequestDTO(RequestDTO):
    live_data_token: str
    continuation: Optional[Any] = None

    def to_body(self):
        # The service expects an explicit null on the first poll.
        body = super().to_body()
        body.setdefault("continuation", None)
        return body
