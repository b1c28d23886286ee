"""Response envelopes and shared field types."""
from typing import Annotated, Any, Generic, TypeVar

from pydantic import BaseModel, Field, StringConstraints

DataT = TypeVar("DataT")

# Trimmed before validation, so whitespace-only input fails min_length
NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class ApiResponse(BaseModel, Generic[DataT]):
    status_code: int = 200
    data: DataT
    message: str = "Success"
    success: bool = True


class ErrorResponse(BaseModel):
    status_code: int
    message: str
    success: bool = False
    errors: list[Any] = Field(default_factory=list)


def api_response(data: Any, message: str, status_code: int = 200) -> dict[str, Any]:
    return {
        "status_code": status_code,
        "data": data,
        "message": message,
        "success": status_code < 400,
    }


class PageMeta(BaseModel):
    limit: int
    page: int
    total_pages: int
    paging_counter: int
    has_prev_page: bool
    has_next_page: bool
    prev_page: int | None = None
    next_page: int | None = None


class ToggleLikeResponse(BaseModel):
    is_liked: bool


class ToggleSubscriptionResponse(BaseModel):
    is_subscribed: bool
