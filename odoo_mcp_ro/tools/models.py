"""
Model tools - list_models, get_model_fields
"""

from mcp.types import CallToolResult

from ..odoo_client import OdooClient
from .results import text_result, to_json
from .schemas import GetModelFieldsArgs, ListModelsArgs


def handle_list_models(client: OdooClient, params: ListModelsArgs) -> CallToolResult:
    """List installed models as a bullet list sorted by technical name."""
    models = client.get_model_list()
    if not params.transient:
        models = [m for m in models if not m.get("transient")]
    models = sorted(models, key=lambda m: m["model"])

    lines = [f"Found {len(models)} available Odoo models"]
    lines.extend(f"- **{m['model']}**: {m['name']}" for m in models)
    return text_result("\n".join(lines))


def handle_get_model_fields(client: OdooClient, params: GetModelFieldsArgs) -> CallToolResult:
    """Describe the fields of a model."""
    fields = client.fields_get(params.model, fields=params.fields)
    return text_result(
        f"Model '{params.model}' has {len(fields)} fields\n{to_json(fields)}"
    )
