"""
Schemas for n8n payloads.

Node, connection and settings contents are passed through untouched; the
model only checks the outer shape of a workflow definition.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, JsonValue


class Workflow(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    name: str
    active: Optional[bool] = None
    nodes: List[JsonValue]
    connections: Optional[Dict[str, JsonValue]] = None
    settings: Optional[Dict[str, JsonValue]] = None


def validate_workflow(payload: Any) -> Workflow:
    """Raise pydantic.ValidationError if payload is not a workflow definition."""
    return Workflow.model_validate(payload)
