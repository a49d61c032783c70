from typing import Any, Callable, TypeVar

from fastapi import HTTPException, Request
from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def read_body(request: Request) -> dict[str, Any]:
    """Decode a JSON or form-encoded body into a dict. Empty bodies give {}."""
    content_type = request.headers.get("content-type", "").lower()
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        return {key: value for key, value in form.items() if isinstance(value, str)}

    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        data = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Request body must be JSON or form-encoded.")
    if not isinstance(data, dict):
        raise HTTPException(status_code=400, detail="Request body must be a JSON object.")
    return data


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err["loc"]) or "body"
        parts.append(f"{field}: {err['msg']}")
    return "Invalid request body: " + "; ".join(parts)


def parsed_body(model: type[ModelT]) -> Callable[[Request], Any]:
    """Build a dependency that parses the request body into `model`."""

    async def dependency(request: Request) -> ModelT:
        data = await read_body(request)
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            raise HTTPException(status_code=400, detail=_describe(exc))

    return dependency
