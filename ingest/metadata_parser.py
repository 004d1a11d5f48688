# ingest/metadata_parser.py
from typing import Dict, Optional
from xml.etree.ElementTree import Element
import logging
import re

from ingest.xml_utils import has_children, node_text
from models.crm_response import FieldDescriptor, FieldMetadataSet, UserSet

logger = logging.getLogger(__name__)

LEADING_INTEGER = re.compile(r"\s*([+-]?\d+)")


def flag(value: Optional[str]) -> bool:
    """Only the exact string "true" counts as set"""
    return value == "true"


def leading_int(value: Optional[str]) -> int:
    """
    maxlength arrives as text; keep its leading integer ("255" -> 255,
    "12px" -> 12) and fall back to 0 for anything else
    """
    if value is None:
        return 0
    match = LEADING_INTEGER.match(value)
    return int(match.group(1)) if match else 0


def parse_field(field: Element) -> FieldDescriptor:
    enumerated_values = None
    if has_children(field):
        enumerated_values = [node_text(value) for value in field]

    return FieldDescriptor(
        required=flag(field.get("req")),
        type=field.get("type", ""),
        read_only=flag(field.get("isreadonly")),
        max_length=leading_int(field.get("maxlength")),
        label=field.get("label", ""),
        display_value=field.get("dv", ""),
        is_custom_field=flag(field.get("customfield")),
        enumerated_values=enumerated_values,
    )


def parse_field_metadata(root: Element, module_name: str, operation_name: str) -> Dict:
    """
    getFields: <section name="..."> blocks of <FL label="..."> fields.
    Returns section name -> field label -> descriptor.
    """
    sections: Dict[str, Dict[str, FieldDescriptor]] = {}
    for section in root.findall("section"):
        fields = sections.setdefault(section.get("name", ""), {})
        for field in section:
            fields[field.get("label", "")] = parse_field(field)

    logger.debug(f"Parsed {sum(len(f) for f in sections.values())} field definitions for {module_name}")
    return {"records": FieldMetadataSet(sections=sections)}


def parse_users(root: Element, module_name: str, operation_name: str) -> Dict:
    """
    getUsers: one child per user, attributes copied as-is and the node text
    stored as "name" (overriding any attribute of the same name)
    """
    users: Dict[str, Dict[str, str]] = {}
    for user in root:
        attributes = users.setdefault(user.get("id", ""), {})
        attributes.update(user.attrib)
        attributes["name"] = node_text(user)

    return {"records": UserSet(users=users)}
