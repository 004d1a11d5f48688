# ingest/post_parser.py
from typing import Dict, List, Union
from xml.etree.ElementTree import Element
import logging

from ingest.xml_utils import find_text, node_text
from models.crm_response import FailureOutcome, FieldMapList, OutcomeSet, SuccessOutcome

logger = logging.getLogger(__name__)


def parse_field_map(node: Element) -> Dict[str, str]:
    return {field.get("val", ""): node_text(field) for field in node}


def parse_post_records(root: Element, module_name: str, operation_name: str) -> Dict:
    """
    insertRecords / updateRecords, version 1 and 2:
    <result><message>...</message><recorddetail><FL val="Id">...</FL></recorddetail></result>
    """
    records: List[Dict[str, str]] = [
        parse_field_map(detail) for detail in root.findall("result/recorddetail")
    ]

    parsed = {
        "records": FieldMapList(records=records),
        "status_message": find_text(root, "result/message"),
    }
    if len(records) == 1:
        parsed["primary_record_id"] = records[0].get("Id")
    return parsed


def parse_row_outcome(row: Element) -> Union[SuccessOutcome, FailureOutcome, None]:
    success = row.find("success")
    if success is not None:
        details = success.find("details")
        return SuccessOutcome(
            code=find_text(success, "code") or "",
            fields=parse_field_map(details) if details is not None else {},
        )

    error = row.find("error")
    if error is not None:
        return FailureOutcome(
            code=find_text(error, "code") or "",
            message=find_text(error, "details") or "",
        )
    return None


def parse_post_records_bulk(root: Element, module_name: str, operation_name: str) -> Dict:
    """
    insertRecords / updateRecords, version 4: one <row no="N"> per submitted
    record holding either <success> or <error>
    """
    outcomes = {}
    for row in root.findall("result/row"):
        position = row.get("no", "")
        outcome = parse_row_outcome(row)
        if outcome is None:
            logger.warning(f"Row {position} of {operation_name} response has neither success nor error, skipping")
            continue
        outcomes[position] = outcome

    # OutcomeSet orders rows by number
    return {"records": OutcomeSet(outcomes=outcomes)}
