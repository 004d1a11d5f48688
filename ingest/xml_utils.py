# ingest/xml_utils.py
from typing import Optional
from xml.etree.ElementTree import Element


def node_text(node: Element) -> str:
    """
    Character data directly inside a node (its text plus the tails of its children).
    Text nested inside child elements is not included.
    """
    parts = [node.text or ""]
    parts.extend(child.tail or "" for child in node)
    return "".join(parts)


def find_text(node: Element, path: str) -> Optional[str]:
    """Text of the first node matching path, or None when there is no such node"""
    found = node.find(path)
    if found is None:
        return None
    return node_text(found)


def has_node(node: Element, path: str) -> bool:
    return node.find(path) is not None


def has_children(node: Element) -> bool:
    return len(node) > 0
