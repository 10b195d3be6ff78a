"""Pytest configuration and shared MathML fixtures."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import pytest

# Make the package importable without installing it.
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from mathml2omml import ConversionOptions  # noqa: E402

KATEX_TEMPLATE = (
    '<span class="katex"><math xmlns="http://www.w3.org/1998/Math/MathML">'
    '<semantics><mrow>{body}</mrow>'
    '<annotation encoding="application/x-tex">{tex}</annotation>'
    '</semantics></math></span>'
)


@pytest.fixture
def katex() -> Callable[..., str]:
    """Wrap presentation MathML the way KaTeX's `output: 'mathml'` mode does."""
    def wrap(body: str, tex: str = "") -> str:
        return KATEX_TEMPLATE.format(body=body, tex=tex)
    return wrap


@pytest.fixture
def compat_options() -> ConversionOptions:
    return ConversionOptions(libreoffice_compat=True)


# \sum_{i=1}^{n} i in display style.
SUM_MUNDEROVER = (
    '<munderover><mo>∑</mo><mrow><mi>i</mi><mo>=</mo><mn>1</mn></mrow><mi>n</mi></munderover>'
    '<mi>i</mi>'
)
# \int_0^1 x\,dx in inline style.
INTEGRAL_MSUBSUP = (
    '<msubsup><mo>∫</mo><mn>0</mn><mn>1</mn></msubsup>'
    '<mi>x</mi><mspace width="0.1667em"/><mi>d</mi><mi>x</mi>'
)
# \begin{pmatrix} a & b \\ c & d \end{pmatrix}
PMATRIX = (
    '<mrow><mo fence="true">(</mo>'
    '<mtable rowspacing="0.16em" columnalign="center center" columnspacing="1em">'
    '<mtr><mtd><mstyle scriptlevel="0" displaystyle="false"><mi>a</mi></mstyle></mtd>'
    '<mtd><mstyle scriptlevel="0" displaystyle="false"><mi>b</mi></mstyle></mtd></mtr>'
    '<mtr><mtd><mstyle scriptlevel="0" displaystyle="false"><mi>c</mi></mstyle></mtd>'
    '<mtd><mstyle scriptlevel="0" displaystyle="false"><mi>d</mi></mstyle></mtd></mtr>'
    '</mtable><mo fence="true">)</mo></mrow>'
)
