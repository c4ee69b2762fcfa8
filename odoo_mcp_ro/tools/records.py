"""
Record tools - search_records, get_record
"""

import logging
from typing import Optional

from mcp.types import CallToolResult

from ..exceptions import OdooError, OdooRemoteError
from ..odoo_client import OdooClient
from .results import error_result, text_result, to_json
from .schemas import GetRecordArgs, SearchRecordsArgs

logger = logging.getLogger(__name__)


def find_invalid_fields(client: OdooClient, model: str, fields: list[str]) -> Optional[list[str]]:
    """
    Return the requested fields that don't exist on ``model``.

    Returns None when the field list could not be fetched.
    """
    try:
        available = client.fields_get(model)
    except OdooError as e:
        logger.debug("fields_get on %s failed while checking fields: %s", model, e.message)
        return None
    return [f for f in fields if f not in available]


def _invalid_fields_result(
    client: OdooClient,
    model: str,
    fields: Optional[list[str]],
    error: OdooRemoteError
) -> Optional[CallToolResult]:
    """Explain a remote error caused by unknown field names, if that's what it was."""
    if not fields or "field" not in error.message.lower():
        return None
    invalid = find_invalid_fields(client, model, fields)
    if not invalid:
        return None
    return error_result(
        f"Invalid field(s) for model '{model}': {', '.join(invalid)}"
    )


def handle_search_records(client: OdooClient, params: SearchRecordsArgs) -> CallToolResult:
    """Search records with a domain filter and return them as JSON."""
    try:
        records = client.search_read(
            params.model,
            list(params.domain),
            fields=params.fields,
            limit=params.limit,
            offset=params.offset,
            order=params.order
        )
    except OdooRemoteError as e:
        result = _invalid_fields_result(client, params.model, params.fields, e)
        if result is None:
            raise
        return result

    if not records:
        return text_result(
            f"Found 0 records in model '{params.model}' (no records match the criteria)"
        )
    return text_result(
        f"Found {len(records)} records in model '{params.model}'\n{to_json(records)}"
    )


def handle_get_record(client: OdooClient, params: GetRecordArgs) -> CallToolResult:
    """Read records by ID. One ID yields one record object, several yield a list."""
    ids = list(params.ids)
    try:
        result = client.read(params.model, ids, fields=params.fields)
    except OdooRemoteError as e:
        invalid = _invalid_fields_result(client, params.model, params.fields, e)
        if invalid is None:
            raise
        return invalid

    if len(ids) == 1:
        if result is None:
            return text_result(
                f"No record found with id {ids[0]} in model '{params.model}'"
            )
        return text_result(
            f"Retrieved 1 record from model '{params.model}'\n{to_json(result)}"
        )
    return text_result(
        f"Retrieved {len(result)} records from model '{params.model}'\n{to_json(result)}"
    )
