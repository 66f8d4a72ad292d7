"""
Utility functions
"""
from dokuweb_gateway.utils.logger import setup_logger, get_logger
from dokuweb_gateway.utils.xml_attributes import (
    extract_element,
    extract_elements,
    parse_attributes
)

__all__ = [
    "setup_logger",
    "get_logger",
    "extract_element",
    "extract_elements",
    "parse_attributes",
]
