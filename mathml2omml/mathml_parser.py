# mathml2omml/mathml_parser.py
from typing import Dict, List, Optional

from lxml import etree

from .errors import MathMLParseError
from .logger import logger
from .nodes import ElementNode, GenericNode, TextNode, children_of, find_first, first_tagged


def _local_name(name: str) -> str:
    return etree.QName(name).localname


def _attributes(element: etree._Element) -> Dict[str, str]:
    return {_local_name(key): value for key, value in element.attrib.items()}


def _to_node(element: etree._Element) -> ElementNode:
    """Convert one lxml element (and its subtree) into the generic tree."""
    children: List[GenericNode] = []
    elements = [child for child in element if isinstance(child.tag, str)]
    # Whitespace-only text survives only when it is the whole content, e.g. <mtext> </mtext>.
    if element.text and (element.text.strip() or not elements):
        children.append(TextNode(value=element.text))
    for child in element:
        if isinstance(child.tag, str):
            children.append(_to_node(child))
        # Comments and processing instructions are dropped, their tail text is not.
        if child.tail and child.tail.strip():
            children.append(TextNode(value=child.tail))
    return ElementNode(tag=_local_name(element.tag), attributes=_attributes(element), children=tuple(children))


def parse_mathml(mathml: str, recover: bool = True) -> List[GenericNode]:
    """
    Parses a MathML string into an ordered forest of generic nodes.

    With `recover` enabled, lxml salvages what it can from malformed markup and an
    unusable document yields an empty forest. Without it, malformed markup raises
    `MathMLParseError`.
    """
    if not mathml or not mathml.strip():
        return []
    parser = etree.XMLParser(recover=recover, resolve_entities=False, no_network=True,
                             remove_comments=True, remove_pis=True)
    try:
        root = etree.fromstring(mathml.strip().encode('utf-8'), parser)
    except etree.XMLSyntaxError as e:
        if not recover:
            raise MathMLParseError(f"Malformed MathML: {e}") from e
        logger.warning("Discarding unparseable MathML: %s", e)
        return []
    if root is None:
        logger.warning("Discarding unparseable MathML: no root element recovered.")
        return []
    if recover and parser.error_log:
        logger.warning("Recovered from malformed MathML: %s", parser.error_log.last_error)
    return [_to_node(root)]


def locate_root(forest: List[GenericNode]) -> Optional[ElementNode]:
    """
    Finds the subtree to convert: the presentation <mrow> under <semantics> when
    present, otherwise the first <mrow> under <math>, otherwise <math> itself.
    Returns None when the forest has no <math> element.
    """
    math_node = find_first(forest, 'math')
    if math_node is None:
        return None
    semantics = first_tagged(children_of(math_node), 'semantics')
    if semantics is not None:
        return first_tagged(children_of(semantics), 'mrow') or semantics
    return first_tagged(children_of(math_node), 'mrow') or math_node
