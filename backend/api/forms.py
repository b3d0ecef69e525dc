"""api/forms.py — Helpers for the multipart endpoints (universities, results).

Multipart fields arrive as plain strings; parse_form() drops blank ones and
runs the rest through the pydantic request schema so form and JSON endpoints
fail validation the same way.
"""

from __future__ import annotations

from typing import Any, Optional, TypeVar

from fastapi import UploadFile
from pydantic import BaseModel, ValidationError

from core.errors import ValidationFailure
from core.images import ImageStore

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_form(schema: type[ModelT], fields: dict[str, Any]) -> ModelT:
    data = {key: value for key, value in fields.items() if value not in (None, "")}
    try:
        return schema.model_validate(data)
    except ValidationError as exc:
        raise ValidationFailure(
            "Invalid form data",
            details=exc.errors(include_url=False, include_context=False, include_input=False),
        ) from exc


def upload_image(images: ImageStore, image: Optional[UploadFile]) -> Optional[str]:
    """Upload the attached image, if any, and return its URL."""
    if image is None or not image.filename:
        return None
    return images.upload(image.file, image.filename)
