# ingest/status_parser.py
from typing import Dict, List
from xml.etree.ElementTree import Element
import json
import logging
import re

from ingest.xml_utils import find_text, node_text
from models.crm_response import EmptyRecordSet, FlatFieldMap, IdList, RecordIdEntry
from models.response_errors import ApiError, MalformedDocumentError

logger = logging.getLogger(__name__)

# Record ids are 19 digits on most data centers, shorter on some (EU)
DELETED_ID = re.compile(r"[0-9]{16,}")

ID_LIST_FIELDS = ("updated-ids", "added-ids")


def raise_api_error(root: Element, module_name: str, operation_name: str) -> Dict:
    """<response uri="..."><error><code>..</code><message>..</message></error></response>"""
    error = ApiError(
        uri=root.get("uri"),
        code=find_text(root, "error/code"),
        message=find_text(root, "error/message"),
    )
    logger.debug(f"CRM reported error {error.code} for {operation_name} on {module_name}")
    raise error


def parse_no_data(root: Element, module_name: str, operation_name: str) -> Dict:
    return {
        "records": EmptyRecordSet(),
        "status_message": find_text(root, "nodata/message"),
        "status_code": find_text(root, "nodata/code"),
    }


def decode_id_list(payload: str, field: str) -> List[RecordIdEntry]:
    try:
        ids = json.loads(payload)
    except json.JSONDecodeError as e:
        raise MalformedDocumentError(f"{field} is not valid JSON: {e}") from e
    if not isinstance(ids, list):
        raise MalformedDocumentError(f"{field} should hold a JSON array, got {type(ids).__name__}")
    return [RecordIdEntry(record_id=str(record_id)) for record_id in ids]


def parse_relationship_update(root: Element, module_name: str, operation_name: str) -> Dict:
    """
    updateRelatedRecords: status 200 plus a success or error block, with the
    touched ids as a JSON array in <updated-ids> or <added-ids>
    """
    parsed = {"records": IdList()}

    error_code = find_text(root, "result/error/code")
    if error_code is not None:
        parsed["status_code"] = error_code

    message = find_text(root, "result/message")
    if message is not None:
        parsed["status_message"] = message

    # updated-ids wins over added-ids, never both
    for field in ID_LIST_FIELDS:
        payload = find_text(root, f"result/{field}")
        if payload is None:
            continue
        ids = decode_id_list(payload, field)
        parsed["records"] = IdList(ids=ids)
        if len(ids) == 1:
            parsed["primary_record_id"] = ids[0].record_id
        break

    return parsed


def parse_entity_conversion(root: Element, module_name: str, operation_name: str) -> Dict:
    """convertLead: <success><Contact>..</Contact><Account>..</Account></success>"""
    return {"records": FlatFieldMap(fields={child.tag: node_text(child) for child in root})}


def parse_deletion(root: Element, module_name: str, operation_name: str) -> Dict:
    """
    deleteRecords: the deleted ids only appear inside the message text,
    so every long digit run in it is taken as one
    """
    message = find_text(root, "result/message")
    return {
        "records": EmptyRecordSet(),
        "status_message": message,
        "status_code": find_text(root, "result/code"),
        "primary_record_id": ";".join(DELETED_ID.findall(message)),
    }
