# output/response_builder.py
from typing import Dict, List
import json

import pandas as pd

from models.crm_response import NormalizedResult


def build_response_output(result: NormalizedResult) -> Dict:
    """
    Returns the flat response dict callers of the old client expect:
    module, method, message, code, uri, recordId, records, xmlstr,
    plus the advisory success flag
    """
    return {
        "module": result.module_name,
        "method": result.operation_name,
        "message": result.status_message,
        "code": result.status_code,
        "uri": result.resource_uri,
        "recordId": result.primary_record_id,
        "records": result.records.model_dump(),
        "xmlstr": result.raw_document,
        "success": result.looks_successful(),
    }


def _cell(value):
    # Compound fields don't fit in one cell
    if isinstance(value, (dict, list)):
        return json.dumps(value, sort_keys=True)
    return value


def _record_rows(result: NormalizedResult) -> List[Dict]:
    records = result.records
    kind = records.kind

    if kind == "rows":
        return [
            {"row": position, **{name: _cell(value) for name, value in fields.items()}}
            for position, fields in records.rows.items()
        ]
    if kind == "field_maps":
        return [dict(fields) for fields in records.records]
    if kind == "outcomes":
        rows = []
        for position, outcome in records.outcomes.items():
            row = {"row": position, "status": outcome.status, "code": outcome.code}
            if outcome.status == "success":
                row.update(outcome.fields)
            else:
                row["message"] = outcome.message
            rows.append(row)
        return rows
    if kind == "users":
        return [{"id": user_id, **attributes} for user_id, attributes in records.users.items()]
    if kind == "ids":
        return [{"record_id": entry.record_id} for entry in records.ids]
    if kind == "flat":
        return [dict(records.fields)]
    if kind == "field_metadata":
        rows = []
        for section, fields in records.sections.items():
            for descriptor in fields.values():
                row = {"section": section, **descriptor.model_dump()}
                row["enumerated_values"] = _cell(row["enumerated_values"])
                rows.append(row)
        return rows
    return []


def build_records_frame(result: NormalizedResult) -> pd.DataFrame:
    """One DataFrame row per record, whatever the record set shape"""
    return pd.DataFrame(_record_rows(result))
