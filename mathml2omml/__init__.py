from .components import (COMPONENT_TYPES, MathAccent, MathComponent, MathFraction, MathIntegral, MathMatrix,
                         MathRadical, MathRun, MathSubScript, MathSubSuperScript, MathSum, MathSuperScript, extract_text)
from .config import ConversionOptions, load_options
from .converter import convert_node, convert_siblings, mathml_to_components, scan_sibling
from .docx_math import add_math_to_paragraph, mathml_to_omml
from .errors import MathMLError, MathMLNestingError, MathMLParseError
from .logger import init_logging
from .mathml_parser import locate_root, parse_mathml
from .omml_builder import build_omath, build_omath_para, to_omml

__all__ = [
    'COMPONENT_TYPES', 'MathAccent', 'MathComponent', 'MathFraction', 'MathIntegral', 'MathMatrix', 'MathRadical', 'MathRun',
    'MathSubScript', 'MathSubSuperScript', 'MathSum', 'MathSuperScript', 'extract_text',
    'ConversionOptions', 'load_options',
    'convert_node', 'convert_siblings', 'mathml_to_components', 'scan_sibling',
    'add_math_to_paragraph', 'mathml_to_omml',
    'MathMLError', 'MathMLNestingError', 'MathMLParseError',
    'init_logging',
    'locate_root', 'parse_mathml',
    'build_omath', 'build_omath_para', 'to_omml',
]
