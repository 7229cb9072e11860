"""
MCP tool catalog and dispatcher for n8n.

TOOL_SPECS is the canonical source for both the list_tools catalog and the
call_tool routing table.

Tools exposed:
 - list_workflows
 - get_workflow
 - create_workflow
 - update_workflow
 - delete_workflow
 - activate_workflow
 - deactivate_workflow
 - execute_workflow
 - get_executions
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Tuple

import mcp.types as types

from n8n_workflow_builder.client import N8NClient
from n8n_workflow_builder.exceptions import ToolArgumentError, UnknownToolError
from n8n_workflow_builder.logging_config import get_logger
from n8n_workflow_builder.schemas import validate_workflow

logger = get_logger("tools")

Arguments = Mapping[str, Any]
Handler = Callable[[N8NClient, Arguments], Awaitable[str]]


class ToolName(str, Enum):
    LIST_WORKFLOWS = "list_workflows"
    GET_WORKFLOW = "get_workflow"
    CREATE_WORKFLOW = "create_workflow"
    UPDATE_WORKFLOW = "update_workflow"
    DELETE_WORKFLOW = "delete_workflow"
    ACTIVATE_WORKFLOW = "activate_workflow"
    DEACTIVATE_WORKFLOW = "deactivate_workflow"
    EXECUTE_WORKFLOW = "execute_workflow"
    GET_EXECUTIONS = "get_executions"


@dataclass(frozen=True)
class ToolSpec:
    name: ToolName
    description: str
    handler: Handler
    properties: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    required: Tuple[str, ...] = ()

    def input_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {"type": "object", "properties": dict(self.properties)}
        if self.required:
            schema["required"] = list(self.required)
        return schema

    def descriptor(self) -> types.Tool:
        return types.Tool(
            name=self.name.value,
            description=self.description,
            inputSchema=self.input_schema(),
        )


def pretty_json(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


# -----------------------------
# Handlers
# -----------------------------


async def _list_workflows(client: N8NClient, args: Arguments) -> str:
    return pretty_json(await client.list_workflows())


async def _get_workflow(client: N8NClient, args: Arguments) -> str:
    return pretty_json(await client.get_workflow(args["id"]))


async def _create_workflow(client: N8NClient, args: Arguments) -> str:
    created = await client.create_workflow(args["workflow"])
    return f"Workflow created successfully: {pretty_json(created)}"


async def _update_workflow(client: N8NClient, args: Arguments) -> str:
    updated = await client.update_workflow(args["id"], args["workflow"])
    return f"Workflow updated successfully: {pretty_json(updated)}"


async def _delete_workflow(client: N8NClient, args: Arguments) -> str:
    await client.delete_workflow(args["id"])
    return f"Workflow {args['id']} deleted successfully"


async def _activate_workflow(client: N8NClient, args: Arguments) -> str:
    activated = await client.activate_workflow(args["id"])
    return f"Workflow {args['id']} activated successfully: {pretty_json(activated)}"


async def _deactivate_workflow(client: N8NClient, args: Arguments) -> str:
    deactivated = await client.deactivate_workflow(args["id"])
    return f"Workflow {args['id']} deactivated successfully: {pretty_json(deactivated)}"


async def _execute_workflow(client: N8NClient, args: Arguments) -> str:
    execution = await client.execute_workflow(args["id"], args.get("data"))
    return f"Workflow executed: {pretty_json(execution)}"


async def _get_executions(client: N8NClient, args: Arguments) -> str:
    return pretty_json(await client.get_executions(args.get("workflowId")))


# -----------------------------
# Catalog
# -----------------------------

_WORKFLOW_ID = {"type": "string", "description": "Workflow ID"}

TOOL_SPECS: Dict[ToolName, ToolSpec] = {
    spec.name: spec
    for spec in (
        ToolSpec(
            name=ToolName.LIST_WORKFLOWS,
            description="List all workflows from n8n instance",
            handler=_list_workflows,
        ),
        ToolSpec(
            name=ToolName.GET_WORKFLOW,
            description="Get detailed information about a specific workflow",
            handler=_get_workflow,
            properties={"id": _WORKFLOW_ID},
            required=("id",),
        ),
        ToolSpec(
            name=ToolName.CREATE_WORKFLOW,
            description="Create a new workflow",
            handler=_create_workflow,
            properties={
                "workflow": {
                    "type": "object",
                    "description": "Workflow definition with name, nodes, and connections",
                },
            },
            required=("workflow",),
        ),
        ToolSpec(
            name=ToolName.UPDATE_WORKFLOW,
            description="Update an existing workflow",
            handler=_update_workflow,
            properties={
                "id": _WORKFLOW_ID,
                "workflow": {"type": "object", "description": "Updated workflow data"},
            },
            required=("id", "workflow"),
        ),
        ToolSpec(
            name=ToolName.DELETE_WORKFLOW,
            description="Delete a workflow",
            handler=_delete_workflow,
            properties={"id": _WORKFLOW_ID},
            required=("id",),
        ),
        ToolSpec(
            name=ToolName.ACTIVATE_WORKFLOW,
            description="Activate a workflow",
            handler=_activate_workflow,
            properties={"id": _WORKFLOW_ID},
            required=("id",),
        ),
        ToolSpec(
            name=ToolName.DEACTIVATE_WORKFLOW,
            description="Deactivate a workflow",
            handler=_deactivate_workflow,
            properties={"id": _WORKFLOW_ID},
            required=("id",),
        ),
        ToolSpec(
            name=ToolName.EXECUTE_WORKFLOW,
            description="Execute a workflow manually",
            handler=_execute_workflow,
            properties={
                "id": _WORKFLOW_ID,
                "data": {"type": "object", "description": "Input data for execution"},
            },
            required=("id",),
        ),
        ToolSpec(
            name=ToolName.GET_EXECUTIONS,
            description="Get workflow execution history",
            handler=_get_executions,
            properties={
                "workflowId": {
                    "type": "string",
                    "description": "Filter by workflow ID (optional)",
                },
            },
        ),
    )
}

_missing_specs = set(ToolName) - set(TOOL_SPECS)
if _missing_specs:
    raise RuntimeError(f"Tools without a spec: {sorted(n.value for n in _missing_specs)}")


def text_result(text: str, is_error: bool = False) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=text)],
        isError=is_error,
    )


class ToolDispatcher:
    """
    Routes MCP tool calls to the n8n client.

    Every failure inside call_tool, an unknown tool name included, comes back
    as an error-flagged result; nothing propagates to the protocol layer.
    """

    def __init__(self, client: N8NClient, validate_workflows: bool = False):
        self.client = client
        self.validate_workflows = validate_workflows
        self._tools: List[types.Tool] = [spec.descriptor() for spec in TOOL_SPECS.values()]

    def list_tools(self) -> List[types.Tool]:
        return list(self._tools)

    def _lookup(self, name: str) -> ToolSpec:
        try:
            return TOOL_SPECS[ToolName(name)]
        except ValueError:
            raise UnknownToolError(name) from None

    def _check_arguments(self, spec: ToolSpec, args: Arguments) -> None:
        missing = [key for key in spec.required if args.get(key) is None]
        if missing:
            raise ToolArgumentError(spec.name.value, missing)
        if self.validate_workflows and "workflow" in spec.required:
            validate_workflow(args["workflow"])

    async def call_tool(
        self, name: str, arguments: Optional[Arguments] = None
    ) -> types.CallToolResult:
        args = arguments or {}
        try:
            spec = self._lookup(name)
            self._check_arguments(spec, args)
            logger.info("Calling tool %s arg_keys=%s", name, list(args.keys()))
            text = await spec.handler(self.client, args)
        except Exception as e:
            logger.warning("Tool %s failed: %s", name, e)
            return text_result(f"Error: {e}", is_error=True)

        return text_result(text)
