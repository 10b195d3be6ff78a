# mathml2omml/converter.py
from typing import List, Optional, Sequence, Tuple

from .components import (MathAccent, MathComponent, MathFraction, MathMatrix, MathRadical, MathRun, MathSubScript,
                         MathSubSuperScript, MathSuperScript, NARY_TYPES)
from .config import ConversionOptions
from .errors import MathMLNestingError
from .logger import init_logging, logger
from .mathml_parser import locate_root, parse_mathml
from .nodes import (ElementNode, GenericNode, TextNode, children_of, deep_text, direct_text, elements_tagged,
                    tag_name)

# --- 1. Tag sets ---
TOKEN_TAGS = {'mi', 'mn', 'mo'}
UNDER_OVER_TAGS = {'munder', 'mover', 'munderover'}
# Alternate encodings of the expression (TeX source, content MathML); never rendered.
ANNOTATION_TAGS = {'annotation', 'annotation-xml'}

# (lower limit index, upper limit index) within an operator-carrying element.
LIMIT_POSITIONS = {
    'munder': (1, None),
    'mover': (None, 1),
    'munderover': (1, 2),
    'msubsup': (1, 2),
}

MATRIX_OPEN, MATRIX_CLOSE = '[', ']'
CELL_SEPARATOR, ROW_SEPARATOR = ', ', '; '


# --- 2. Helpers ---
def _child(kids: Sequence[GenericNode], index: Optional[int], options: ConversionOptions,
           depth: int) -> List[MathComponent]:
    """Converts kids[index]; a missing child converts to nothing."""
    if index is None or index >= len(kids):
        return []
    return convert_node(kids[index], options, depth)


def _nary_char(node: Optional[GenericNode]) -> Optional[str]:
    """The big-operator glyph carried by an <mo>, if it is one we model as n-ary."""
    if tag_name(node) != 'mo':
        return None
    text = direct_text(children_of(node))
    for char in NARY_TYPES:
        if char in text:
            return char
    return None


def _create_nary(char: str, lower: List[MathComponent], upper: List[MathComponent],
                 body: List[MathComponent], options: ConversionOptions) -> List[MathComponent]:
    if options.libreoffice_compat:
        glyph = MathSubSuperScript(children=(MathRun(text=char),), sub_script=lower, super_script=upper)
        return [glyph, *body]
    return [NARY_TYPES[char](children=body, sub_script=lower, super_script=upper)]


def _convert_matrix(node: ElementNode, options: ConversionOptions, depth: int) -> List[MathComponent]:
    rows = [[convert_siblings(children_of(cell), options, depth + 1)
             for cell in elements_tagged(children_of(row), 'mtd')]
            for row in elements_tagged(node.children, 'mtr')]
    if not options.libreoffice_compat:
        return [MathMatrix(rows=rows)]

    # Bracketed text approximation: [a, b; c, d]
    parts: List[MathComponent] = [MathRun(text=MATRIX_OPEN)]
    for ri, row in enumerate(rows):
        if ri > 0:
            parts.append(MathRun(text=ROW_SEPARATOR))
        for ci, cell in enumerate(row):
            if ci > 0:
                parts.append(MathRun(text=CELL_SEPARATOR))
            parts.extend(cell)
    parts.append(MathRun(text=MATRIX_CLOSE))
    return parts


def _convert_under_over(node: ElementNode, options: ConversionOptions, depth: int) -> List[MathComponent]:
    kids = node.children
    base = _child(kids, 0, options, depth)

    if node.tag == 'mover':
        mark = kids[1] if len(kids) > 1 else None
        accent = direct_text(children_of(mark)) if tag_name(mark) == 'mo' else ''
        if accent:
            return [MathAccent(children=base, accent=accent)]
        logger.debug("<mover> without an accent mark, appending the over-script after its base.")
        return base + _child(kids, 1, options, depth)

    if node.tag == 'munder':
        return base + _child(kids, 1, options, depth)

    return base + _child(kids, 1, options, depth) + _child(kids, 2, options, depth)


# --- 3. Sibling-level dispatch ---
def scan_sibling(nodes: Sequence[GenericNode], index: int, options: ConversionOptions,
                 depth: int = 0) -> Tuple[List[MathComponent], int]:
    """
    Converts the sibling at `index` and reports how many siblings it consumed.

    A big operator (sum or integral) carried by munder/mover/munderover/msubsup takes
    every following sibling as its body, so it consumes the rest of the row. Any other
    node consumes only itself.
    """
    node = nodes[index]
    tag = tag_name(node)
    if tag in LIMIT_POSITIONS:
        kids = children_of(node)
        char = _nary_char(kids[0] if kids else None)
        if char:
            if depth > options.max_depth:
                raise MathMLNestingError(options.max_depth)
            lower_index, upper_index = LIMIT_POSITIONS[tag]
            lower = _child(kids, lower_index, options, depth + 1)
            upper = _child(kids, upper_index, options, depth + 1)
            body = convert_siblings(nodes[index + 1:], options, depth + 1)
            logger.debug("Recognised n-ary operator %r in <%s> with a body of %d component(s).",
                         char, tag, len(body))
            return _create_nary(char, lower, upper, body, options), len(nodes) - index
    return convert_node(node, options, depth), 1


def convert_siblings(nodes: Sequence[GenericNode], options: ConversionOptions,
                     depth: int = 0) -> List[MathComponent]:
    """Converts an ordered run of sibling nodes, applying the grouping rules."""
    out: List[MathComponent] = []
    index = 0
    while index < len(nodes):
        components, consumed = scan_sibling(nodes, index, options, depth)
        out.extend(components)
        index += consumed
    return out


# --- 4. Single-node dispatch ---
def convert_node(node: GenericNode, options: ConversionOptions, depth: int = 0) -> List[MathComponent]:
    """Converts one node and its subtree without looking at its siblings."""
    if depth > options.max_depth:
        raise MathMLNestingError(options.max_depth)
    if isinstance(node, TextNode):
        return [MathRun(text=node.value)] if node.value else []

    tag, kids, inner = node.tag, node.children, depth + 1

    if tag == 'mrow':
        return convert_siblings(kids, options, inner)
    elif tag in TOKEN_TAGS:
        text = "".join(deep_text(kid) for kid in kids)
        return [MathRun(text=text)] if text else []
    elif tag == 'msup':
        return [MathSuperScript(children=_child(kids, 0, options, inner),
                                super_script=_child(kids, 1, options, inner))]
    elif tag == 'msub':
        return [MathSubScript(children=_child(kids, 0, options, inner),
                              sub_script=_child(kids, 1, options, inner))]
    elif tag == 'msubsup':
        return [MathSubSuperScript(children=_child(kids, 0, options, inner),
                                   sub_script=_child(kids, 1, options, inner),
                                   super_script=_child(kids, 2, options, inner))]
    elif tag == 'mfrac':
        return [MathFraction(numerator=_child(kids, 0, options, inner),
                             denominator=_child(kids, 1, options, inner))]
    elif tag == 'msqrt':
        # <msqrt> takes an inferred row, so every child belongs under the radical.
        return [MathRadical(children=convert_siblings(kids, options, inner))]
    elif tag == 'mroot':
        return [MathRadical(children=_child(kids, 0, options, inner),
                            degree=_child(kids, 1, options, inner))]
    elif tag == 'mtable':
        return _convert_matrix(node, options, inner)
    elif tag in UNDER_OVER_TAGS:
        return _convert_under_over(node, options, inner)
    elif tag in ANNOTATION_TAGS:
        return []

    logger.debug("Flattening unrecognised <%s> into its children.", tag)
    return convert_siblings(kids, options, inner)


# --- 5. Entry point ---
def mathml_to_components(mathml: str, libreoffice_compat: Optional[bool] = None,
                         options: Optional[ConversionOptions] = None) -> List[MathComponent]:
    """
    Converts a MathML string into an ordered list of math components.

    Args:
        mathml (str): MathML markup, typically a KaTeX or latex2mathml rendering.
        libreoffice_compat (Optional[bool]): overrides `options.libreoffice_compat` for this call.
        options (Optional[ConversionOptions]): conversion settings; defaults apply when omitted.
            An explicitly set `log_level` is applied to the package logger.

    Returns:
        List[MathComponent]: the converted components; empty when there is no <math> element.

    Raises:
        MathMLParseError: the markup is malformed and `options.recover` is off.
        MathMLNestingError: the expression nests deeper than `options.max_depth`.
    """
    options = options or ConversionOptions()
    if libreoffice_compat is not None:
        options = options.with_compat(libreoffice_compat)
    if 'log_level' in options.model_fields_set:
        init_logging(options.log_level)

    root = locate_root(parse_mathml(mathml, recover=options.recover))
    if root is None:
        logger.debug("No <math> element found, nothing to convert.")
        return []
    return convert_siblings(root.children, options)
