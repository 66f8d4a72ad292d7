"""
Attribute-pair extraction for Doku@WEB XML responses

The REST endpoints answer with flat XML in which every record is a
self-closing element carrying its data as attributes:

    <tickets>
      <ticket ticketid="55" subject="Heizung defekt" state="open" />
    </tickets>

This is a narrow regex extractor, not an XML parser. Limitations:
- only self-closing elements (`<ticket ... />`) are matched
- nested elements and CDATA sections are ignored
- entities such as `&amp;` are returned as written, not decoded
- attribute values may contain any character except a double quote
"""
import re
from typing import Dict, List, Optional

from dokuweb_gateway.exceptions import ElementNotFoundError


_ATTRIBUTE_RE = re.compile(r'(\w+)="([^"]*)"')

# Attribute values are consumed as whole quoted strings so that a `>` or `/`
# inside a value does not end the element early.
_ELEMENT_TEMPLATE = r'<{tag}\s((?:[^>"]|"[^"]*")+?)/>'


def _element_re(tag: str) -> "re.Pattern[str]":
    return re.compile(_ELEMENT_TEMPLATE.format(tag=re.escape(tag)))


def parse_attributes(attr_string: str) -> Dict[str, str]:
    """
    Parse `key="value"` pairs from the inside of an element tag

    Args:
        attr_string: Text between the tag name and `/>`

    Returns:
        Mapping of attribute name to literal value
    """
    return {name: value for name, value in _ATTRIBUTE_RE.findall(attr_string)}


def extract_elements(xml: Optional[str], tag: str = "ticket") -> List[Dict[str, str]]:
    """
    Extract every self-closing `<tag .../>` element in document order

    Args:
        xml: Raw response body
        tag: Element name to match

    Returns:
        One attribute mapping per element; empty list if none match
    """
    if not xml:
        return []
    return [parse_attributes(m.group(1)) for m in _element_re(tag).finditer(xml)]


def extract_element(xml: Optional[str], tag: str = "ticket") -> Dict[str, str]:
    """
    Extract the first self-closing `<tag .../>` element

    Raises:
        ElementNotFoundError: If the body holds no such element
    """
    match = _element_re(tag).search(xml or "")
    if not match:
        raise ElementNotFoundError(f"No <{tag}> element found in response.")
    return parse_attributes(match.group(1))
