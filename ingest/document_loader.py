# ingest/document_loader.py
from html.entities import name2codepoint
from xml.etree.ElementTree import Element, ParseError
import xml.etree.ElementTree as ET
import logging
import re

from models.response_errors import MalformedDocumentError

logger = logging.getLogger(__name__)

XML_ENTITIES = {"amp", "lt", "gt", "quot", "apos"}

CDATA_SECTION = re.compile(r"(<!\[CDATA\[.*?\]\]>)", re.DOTALL)
AMPERSAND = re.compile(r"&(#[0-9]+;|#x[0-9A-Fa-f]+;|[A-Za-z][A-Za-z0-9]*;)?")


def _repair_ampersand(match: re.Match) -> str:
    reference = match.group(1)
    if reference is None:
        # Bare ampersand, e.g. "AT&T" outside CDATA
        return "&amp;"
    name = reference[:-1]
    if reference.startswith("#") or name in XML_ENTITIES:
        return match.group(0)
    if name in name2codepoint:
        return chr(name2codepoint[name])
    return f"&amp;{reference}"


def repair_entities(text: str) -> str:
    """
    Fix entity problems outside CDATA sections: HTML named entities are
    replaced by their characters, stray and unknown ones are escaped.
    """
    segments = CDATA_SECTION.split(text)
    # Odd indexes are the captured CDATA sections
    return "".join(
        segment if i % 2 else AMPERSAND.sub(_repair_ampersand, segment)
        for i, segment in enumerate(segments)
    )


def load(text: str) -> Element:
    """
    Parse a CRM response body into an element tree.
    Minor entity issues are repaired; anything structurally broken raises
    MalformedDocumentError.
    """
    if not isinstance(text, str):
        raise MalformedDocumentError(f"Response body must be text, got {type(text).__name__}")
    if not text.strip():
        raise MalformedDocumentError("CRM response is empty")

    content = text.strip()
    try:
        return ET.fromstring(content)
    except ParseError as e:
        first_error = e

    repaired = repair_entities(content)
    if repaired != content:
        try:
            root = ET.fromstring(repaired)
            logger.debug(f"Repaired entities in CRM response after: {first_error}")
            return root
        except ParseError:
            pass

    raise MalformedDocumentError(f"CRM response could not be parsed as XML: {first_error}") from first_error
