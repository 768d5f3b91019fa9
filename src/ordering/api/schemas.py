"""Pydantic request schemas for the Ordering API.

Placement bodies are read as raw JSON so that item shapes are checked by the
workflow itself, with its own messages, instead of being coerced.
"""

from pydantic import BaseModel


class UpdateStatusRequest(BaseModel):
    status: str | None = None

    model_config = {"json_schema_extra": {"examples": [{"status": "Shipped"}]}}
