# mathml2omml/docx_math.py
from typing import Optional

from docx.shared import RGBColor
from docx.text.paragraph import Paragraph
from lxml import etree

from .config import ConversionOptions
from .converter import mathml_to_components
from .errors import MathMLError
from .logger import logger
from .omml_builder import build_omath, build_omath_para

FAILURE_TEXT = "[Formula rendering failed: {source}]"


def mathml_to_omml(mathml: str, display: bool = False, libreoffice_compat: Optional[bool] = None,
                   options: Optional[ConversionOptions] = None,
                   alignment: str = 'center') -> Optional[etree._Element]:
    """
    Converts MathML into a ready-to-embed OMML element.

    Args:
        mathml (str): MathML markup.
        display (bool): build a centred <m:oMathPara> block instead of an inline <m:oMath>.
        libreoffice_compat (Optional[bool]): per-call override of the compatibility mode.
        options (Optional[ConversionOptions]): conversion settings.
        alignment (str): justification of the display block.

    Returns:
        Optional[etree._Element]: the OMML element, or None when nothing could be converted.
    """
    try:
        components = mathml_to_components(mathml, libreoffice_compat=libreoffice_compat, options=options)
    except MathMLError as e:
        logger.error("MathML conversion failed: %s", e)
        return None
    if not components:
        return None
    if display:
        return build_omath_para(components, alignment=alignment)
    return build_omath(components)


def add_math_to_paragraph(paragraph: Paragraph, mathml: str, display: bool = False,
                          libreoffice_compat: Optional[bool] = None,
                          options: Optional[ConversionOptions] = None) -> bool:
    """
    Appends the converted formula to a python-docx paragraph.

    When the conversion fails, a red placeholder run is written instead and False is returned.
    """
    omml_element = mathml_to_omml(mathml, display=display, libreoffice_compat=libreoffice_compat,
                                  options=options)
    if omml_element is None:
        logger.error("Writing placeholder for unconvertible MathML: %.80s", mathml)
        run = paragraph.add_run(FAILURE_TEXT.format(source=mathml))
        run.font.color.rgb = RGBColor(255, 0, 0)
        return False
    paragraph._p.append(omml_element)
    return True
