# normalize/transformer.py
from typing import Callable, Dict
from xml.etree.ElementTree import Element
import logging

from ingest.document_loader import load
from ingest.metadata_parser import parse_field_metadata, parse_users
from ingest.post_parser import parse_post_records, parse_post_records_bulk
from ingest.record_parser import parse_records
from ingest.shape_classifier import ShapeTag, classify
from ingest.status_parser import (
    parse_deletion,
    parse_entity_conversion,
    parse_no_data,
    parse_relationship_update,
    raise_api_error,
)
from models.crm_response import NormalizedResult

logger = logging.getLogger(__name__)

Extractor = Callable[[Element, str, str], Dict]

SHAPE_EXTRACTORS: Dict[ShapeTag, Extractor] = {
    ShapeTag.API_ERROR: raise_api_error,
    ShapeTag.NO_DATA: parse_no_data,
    ShapeTag.FIELD_METADATA: parse_field_metadata,
    ShapeTag.USER_LISTING: parse_users,
    ShapeTag.RECORD_LISTING: parse_records,
    ShapeTag.POST_RECORDS_LEGACY: parse_post_records,
    ShapeTag.POST_RECORDS_BULK: parse_post_records_bulk,
    ShapeTag.RELATIONSHIP_UPDATE: parse_relationship_update,
    ShapeTag.ENTITY_CONVERSION: parse_entity_conversion,
    ShapeTag.DELETION: parse_deletion,
}


def parse_response(raw_document: str, module_name: str, operation_name: str) -> NormalizedResult:
    """
    Convert a raw CRM response into a NormalizedResult.

    Raises MalformedDocumentError for broken XML, ApiError when the service
    reports an error, UnrecognizedShapeError for any response shape not known here.
    """
    root = load(raw_document)
    shape = classify(root, module_name, operation_name)
    extracted = SHAPE_EXTRACTORS[shape](root, module_name, operation_name)

    result = NormalizedResult(
        module_name=module_name,
        operation_name=operation_name,
        raw_document=raw_document,
        resource_uri=root.get("uri", ""),
        **extracted,
    )
    logger.info(
        f"Parsed {operation_name} response for {module_name} as {shape.value}: "
        f"{len(result.records)} record(s)"
    )
    return result


parse = parse_response


def looks_successful(result: NormalizedResult) -> bool:
    """Advisory only: true when the status message mentions "success" """
    return result.looks_successful()
