# ingest/shape_classifier.py
from enum import Enum
from typing import Callable, List, Optional, Tuple
from xml.etree.ElementTree import Element
import logging

from ingest.xml_utils import find_text, has_node
from models.response_errors import UnrecognizedShapeError

logger = logging.getLogger(__name__)


class ShapeTag(str, Enum):
    API_ERROR = "api_error"
    NO_DATA = "no_data"
    FIELD_METADATA = "field_metadata"
    USER_LISTING = "user_listing"
    RECORD_LISTING = "record_listing"
    POST_RECORDS_LEGACY = "post_records_legacy"
    POST_RECORDS_BULK = "post_records_bulk"
    RELATIONSHIP_UPDATE = "relationship_update"
    ENTITY_CONVERSION = "entity_conversion"
    DELETION = "deletion"


ShapePredicate = Callable[[Element, str, str], bool]


def module_node(root: Element, module_name: str) -> Optional[Element]:
    """
    The <result>/<module_name> node. Module names are matched as plain tag
    names rather than spliced into a path expression.
    """
    result = root.find("result")
    if result is None:
        return None
    for child in result:
        if child.tag == module_name:
            return child
    return None


def is_api_error(root, module_name, operation_name):
    return has_node(root, "error")


def is_no_data(root, module_name, operation_name):
    return has_node(root, "nodata")


def is_field_metadata(root, module_name, operation_name):
    return operation_name == "getFields"


def is_user_listing(root, module_name, operation_name):
    return operation_name == "getUsers"


def is_record_listing(root, module_name, operation_name):
    return module_node(root, module_name) is not None


def is_post_records_legacy(root, module_name, operation_name):
    return has_node(root, "result/message") and has_node(root, "result/recorddetail")


def is_post_records_bulk(root, module_name, operation_name):
    return any(
        row.find("success") is not None or row.find("error") is not None
        for row in root.findall("result/row")
    )


def is_relationship_update(root, module_name, operation_name):
    status_code = find_text(root, "result/status/code")
    if status_code is None or status_code.strip() != "200":
        return False
    return any(
        has_node(root, path)
        for path in ("result/success/code", "result/error/code", "result/updated-ids", "result/added-ids")
    )


def is_entity_conversion(root, module_name, operation_name):
    return root.tag == "success"


def is_deletion(root, module_name, operation_name):
    return has_node(root, "result/message") and has_node(root, "result/code")


# Order matters: shapes overlap structurally, the first match wins
SHAPE_CASCADE: List[Tuple[ShapeTag, ShapePredicate]] = [
    (ShapeTag.API_ERROR, is_api_error),
    (ShapeTag.NO_DATA, is_no_data),
    (ShapeTag.FIELD_METADATA, is_field_metadata),
    (ShapeTag.USER_LISTING, is_user_listing),
    (ShapeTag.RECORD_LISTING, is_record_listing),
    (ShapeTag.POST_RECORDS_LEGACY, is_post_records_legacy),
    (ShapeTag.POST_RECORDS_BULK, is_post_records_bulk),
    (ShapeTag.RELATIONSHIP_UPDATE, is_relationship_update),
    (ShapeTag.ENTITY_CONVERSION, is_entity_conversion),
    (ShapeTag.DELETION, is_deletion),
]


def classify(root: Element, module_name: str, operation_name: str) -> ShapeTag:
    """Walk the cascade and return the first shape whose predicate holds"""
    for tag, predicate in SHAPE_CASCADE:
        if predicate(root, module_name, operation_name):
            logger.debug(f"Classified {operation_name} response for {module_name} as {tag.value}")
            return tag
    raise UnrecognizedShapeError(root.tag, module_name, operation_name)
