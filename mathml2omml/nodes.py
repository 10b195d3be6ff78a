# mathml2omml/nodes.py
from typing import Annotated, Dict, Iterable, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


# ==============================================================================
# SECTION 1: GENERIC TREE PRODUCED BY THE PARSER ADAPTER
# ==============================================================================
class _Node(BaseModel):
    model_config = ConfigDict(frozen=True)


class TextNode(_Node):
    type: Literal['text'] = 'text'
    value: str


class ElementNode(_Node):
    type: Literal['element'] = 'element'
    tag: str
    attributes: Dict[str, str] = Field(default_factory=dict)
    children: Tuple['GenericNode', ...] = ()


GenericNode = Annotated[Union[TextNode, ElementNode], Field(discriminator='type')]
ElementNode.model_rebuild()


# ==============================================================================
# SECTION 2: TREE HELPERS
# ==============================================================================
def tag_name(node: Optional[GenericNode]) -> Optional[str]:
    """Tag of an element node; None for text nodes and missing nodes."""
    if isinstance(node, ElementNode):
        return node.tag
    return None


def children_of(node: Optional[GenericNode]) -> Tuple[GenericNode, ...]:
    if isinstance(node, ElementNode):
        return node.children
    return ()


def direct_text(nodes: Iterable[GenericNode]) -> str:
    """Concatenate the text children in `nodes`, ignoring nested elements."""
    return "".join(n.value for n in nodes if isinstance(n, TextNode))


def deep_text(node: GenericNode) -> str:
    if isinstance(node, TextNode):
        return node.value
    return "".join(deep_text(child) for child in node.children)


def find_first(nodes: Iterable[GenericNode], tag: str) -> Optional[ElementNode]:
    """Depth-first, pre-order search for the first element tagged `tag`."""
    for node in nodes:
        if tag_name(node) == tag:
            return node
        inner = find_first(children_of(node), tag)
        if inner is not None:
            return inner
    return None


def first_tagged(nodes: Iterable[GenericNode], tag: str) -> Optional[ElementNode]:
    """First node in `nodes` tagged `tag`, without descending."""
    return next((n for n in nodes if tag_name(n) == tag), None)


def elements_tagged(nodes: Iterable[GenericNode], tag: str) -> List[ElementNode]:
    """Direct children of `nodes` tagged `tag`, in order."""
    return [n for n in nodes if tag_name(n) == tag]
