# ingest/record_parser.py
from typing import Dict, Optional
from xml.etree.ElementTree import Element
import logging

from ingest.shape_classifier import module_node
from ingest.xml_utils import has_children, node_text
from models.crm_response import RecordValue, RowRecordSet

logger = logging.getLogger(__name__)


def record_id_field(module_name: str) -> str:
    """
    Default id field of a module: singular, upper-cased, plus "ID"
    ("Leads" -> "LEADID"). Irregular plurals are not handled.
    """
    return f"{module_name[:-1].upper()}ID"


def parse_compound_field(field: Element) -> Dict[str, Dict[str, str]]:
    """Multi-valued field: sub-row no -> sub-field val -> text"""
    value: Dict[str, Dict[str, str]] = {}
    for item in field:
        sub_row = value.setdefault(item.get("no", ""), {})
        for sub_field in item:
            sub_row[sub_field.get("val", "")] = node_text(sub_field)
    return value


def parse_row(row: Element) -> Dict[str, RecordValue]:
    record: Dict[str, RecordValue] = {}
    for field in row:
        if has_children(field):
            record[field.get("val", "")] = parse_compound_field(field)
        else:
            record[field.get("val", "")] = node_text(field)
    return record


def parse_records(root: Element, module_name: str, operation_name: str) -> Dict:
    """
    getRecords, getRelatedRecords, getSearchRecords, getRecordById, getCVRecords:
    <result><Module><row no="N"><FL val="...">...</FL></row></Module></result>
    Rows keep the number the service gave them.
    """
    rows: Dict[str, Dict[str, RecordValue]] = {}
    for row in module_node(root, module_name):
        rows.setdefault(row.get("no", ""), {}).update(parse_row(row))

    parsed = {"records": RowRecordSet(rows=rows)}

    if operation_name == "getRecordById":
        parsed["primary_record_id"] = find_record_id(rows, module_name)

    return parsed


def find_record_id(rows: Dict[str, Dict[str, RecordValue]], module_name: str) -> Optional[str]:
    id_field = record_id_field(module_name)
    value = rows.get("1", {}).get(id_field)
    if not isinstance(value, str):
        logger.warning(f"getRecordById response for {module_name} has no {id_field} in row 1")
        return None
    return value
