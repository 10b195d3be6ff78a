"""Tests for the parser adapter, the generic tree helpers and the tree locator."""
from __future__ import annotations

import pytest

from mathml2omml import MathMLParseError, locate_root, parse_mathml
from mathml2omml.nodes import (ElementNode, TextNode, children_of, deep_text, direct_text, elements_tagged, find_first,
                               first_tagged, tag_name)


def test_parse_strips_namespaces_and_keeps_attributes() -> None:
    forest = parse_mathml('<math xmlns="http://www.w3.org/1998/Math/MathML" display="block"><mi>x</mi></math>')
    assert len(forest) == 1
    math = forest[0]
    assert isinstance(math, ElementNode)
    assert math.tag == 'math'
    assert math.attributes == {'display': 'block'}
    assert children_of(math) == (ElementNode(tag='mi', children=(TextNode(value='x'),)),)


def test_parse_preserves_child_order_and_tail_text() -> None:
    (root,) = parse_mathml('<mrow>a<mi>b</mi>c<mn>1</mn></mrow>')
    kinds = [tag_name(n) or n.value for n in children_of(root)]
    assert kinds == ['a', 'mi', 'c', 'mn']


def test_parse_drops_formatting_whitespace_but_keeps_space_tokens() -> None:
    (root,) = parse_mathml("""
        <mrow>
            <mi>x</mi>
            <mtext> </mtext>
        </mrow>
    """)
    assert [tag_name(n) for n in children_of(root)] == ['mi', 'mtext']
    assert direct_text(children_of(root.children[1])) == ' '


def test_parse_drops_comments() -> None:
    (root,) = parse_mathml('<mrow><!-- note --><mi>x</mi></mrow>')
    assert [tag_name(n) for n in children_of(root)] == ['mi']


def test_parse_empty_input_yields_empty_forest() -> None:
    assert parse_mathml('') == []
    assert parse_mathml('   \n') == []


def test_strict_parse_raises_on_malformed_markup() -> None:
    with pytest.raises(MathMLParseError):
        parse_mathml('<math><mi>x</mi>', recover=False)


def test_lenient_parse_never_raises_on_garbage() -> None:
    forest = parse_mathml('<<< definitely not xml', recover=True)
    assert locate_root(forest) is None


def test_find_first_is_depth_first_pre_order() -> None:
    (root,) = parse_mathml('<a><b><mrow><mi>deep</mi></mrow></b><mrow><mi>shallow</mi></mrow></a>')
    assert deep_text(find_first([root], 'mrow')) == 'deep'
    assert deep_text(first_tagged(children_of(root), 'mrow')) == 'shallow'
    assert find_first([root], 'mtable') is None


def test_elements_tagged_filters_direct_children() -> None:
    (table,) = parse_mathml('<mtable><mtr/><mi>x</mi><mtr/></mtable>')
    assert len(elements_tagged(table.children, 'mtr')) == 2


def test_locator_prefers_semantics_mrow(katex) -> None:
    root = locate_root(parse_mathml(katex('<mi>x</mi>', tex='x')))
    assert root.tag == 'mrow'
    assert deep_text(root) == 'x'


def test_locator_falls_back_to_semantics_without_mrow() -> None:
    root = locate_root(parse_mathml(
        '<math><semantics><mi>x</mi><annotation encoding="application/x-tex">x</annotation></semantics></math>'))
    assert root.tag == 'semantics'


def test_locator_uses_mrow_under_math_without_semantics() -> None:
    root = locate_root(parse_mathml('<math><mrow><mi>y</mi></mrow></math>'))
    assert root.tag == 'mrow'


def test_locator_falls_back_to_math() -> None:
    root = locate_root(parse_mathml('<math><mi>z</mi></math>'))
    assert root.tag == 'math'


def test_locator_without_math_returns_none() -> None:
    assert locate_root(parse_mathml('<div><p>no math here</p></div>')) is None
