# mathml2omml/omml_builder.py
from typing import Iterable, Sequence

from lxml import etree

from .components import (MathAccent, MathComponent, MathFraction, MathMatrix, MathRadical, MathRun, MathSubScript,
                         MathSubSuperScript, MathSuperScript, _NAry)

# --- 1. OMML namespaces and constants ---
M_NAMESPACE = "http://schemas.openxmlformats.org/officeDocument/2006/math"
W_NAMESPACE = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
M_PREFIX = "{%s}" % M_NAMESPACE
NSMAP = {'m': M_NAMESPACE, 'w': W_NAMESPACE}


def _m_tag(tag_name: str) -> str: return M_PREFIX + tag_name


def _append_all(parent: etree._Element, components: Iterable[MathComponent]) -> etree._Element:
    for component in components:
        parent.append(to_omml(component))
    return parent


def _set_val(parent: etree._Element, tag_name: str, value: str) -> etree._Element:
    el = etree.SubElement(parent, _m_tag(tag_name))
    el.set(_m_tag('val'), value)
    return el


# --- 2. Element builders ---
def _create_run_omml(text: str) -> etree._Element:
    mr = etree.Element(_m_tag('r'), nsmap=NSMAP)
    mt = etree.SubElement(mr, _m_tag('t'))
    if text.startswith(' ') or text.endswith(' '): mt.set('{http://www.w3.org/XML/1998/namespace}space', 'preserve')
    mt.text = text
    return mr


def _create_fraction_omml(component: MathFraction) -> etree._Element:
    mf = etree.Element(_m_tag('f'), nsmap=NSMAP)
    _append_all(etree.SubElement(mf, _m_tag('num')), component.numerator)
    _append_all(etree.SubElement(mf, _m_tag('den')), component.denominator)
    return mf


def _create_radical_omml(component: MathRadical) -> etree._Element:
    mrad = etree.Element(_m_tag('rad'), nsmap=NSMAP)
    mdeg = etree.Element(_m_tag('deg'))
    if component.degree:
        _append_all(mdeg, component.degree)
    else:
        _set_val(etree.SubElement(mrad, _m_tag('radPr')), 'degHide', '1')
    mrad.append(mdeg)
    _append_all(etree.SubElement(mrad, _m_tag('e')), component.children)
    return mrad


def _create_superscript_omml(component: MathSuperScript) -> etree._Element:
    msSup = etree.Element(_m_tag('sSup'), nsmap=NSMAP)
    _append_all(etree.SubElement(msSup, _m_tag('e')), component.children)
    _append_all(etree.SubElement(msSup, _m_tag('sup')), component.super_script)
    return msSup


def _create_subscript_omml(component: MathSubScript) -> etree._Element:
    msSub = etree.Element(_m_tag('sSub'), nsmap=NSMAP)
    _append_all(etree.SubElement(msSub, _m_tag('e')), component.children)
    _append_all(etree.SubElement(msSub, _m_tag('sub')), component.sub_script)
    return msSub


def _create_subsup_omml(component: MathSubSuperScript) -> etree._Element:
    msSubSup = etree.Element(_m_tag('sSubSup'), nsmap=NSMAP)
    _append_all(etree.SubElement(msSubSup, _m_tag('e')), component.children)
    _append_all(etree.SubElement(msSubSup, _m_tag('sub')), component.sub_script)
    _append_all(etree.SubElement(msSubSup, _m_tag('sup')), component.super_script)
    return msSubSup


def _create_nary_omml(component: _NAry) -> etree._Element:
    mnary = etree.Element(_m_tag('nary'), nsmap=NSMAP)
    mnaryPr = etree.SubElement(mnary, _m_tag('naryPr'))
    _set_val(mnaryPr, 'chr', component.char)
    _set_val(mnaryPr, 'limLoc', component.limit_location)
    if not component.sub_script: _set_val(mnaryPr, 'subHide', '1')
    if not component.super_script: _set_val(mnaryPr, 'supHide', '1')
    _append_all(etree.SubElement(mnary, _m_tag('sub')), component.sub_script)
    _append_all(etree.SubElement(mnary, _m_tag('sup')), component.super_script)
    _append_all(etree.SubElement(mnary, _m_tag('e')), component.children)
    return mnary


def _create_matrix_omml(component: MathMatrix) -> etree._Element:
    mm = etree.Element(_m_tag('m'), nsmap=NSMAP)
    columns = max((len(row) for row in component.rows), default=0)
    if columns:
        mmcs = etree.SubElement(etree.SubElement(mm, _m_tag('mPr')), _m_tag('mcs'))
        mcPr = etree.SubElement(etree.SubElement(mmcs, _m_tag('mc')), _m_tag('mcPr'))
        _set_val(mcPr, 'count', str(columns))
        _set_val(mcPr, 'mcJc', 'center')
    for row in component.rows:
        mmr = etree.SubElement(mm, _m_tag('mr'))
        for cell in row:
            _append_all(etree.SubElement(mmr, _m_tag('e')), cell)
    return mm


def _create_accent_omml(component: MathAccent) -> etree._Element:
    macc = etree.Element(_m_tag('acc'), nsmap=NSMAP)
    _set_val(etree.SubElement(macc, _m_tag('accPr')), 'chr', component.accent)
    _append_all(etree.SubElement(macc, _m_tag('e')), component.children)
    return macc


# --- 3. Public API ---
def to_omml(component: MathComponent) -> etree._Element:
    """Builds the OMML element for a single math component."""
    if isinstance(component, MathRun): return _create_run_omml(component.text)
    if isinstance(component, MathFraction): return _create_fraction_omml(component)
    if isinstance(component, MathRadical): return _create_radical_omml(component)
    if isinstance(component, MathSubSuperScript): return _create_subsup_omml(component)
    if isinstance(component, MathSuperScript): return _create_superscript_omml(component)
    if isinstance(component, MathSubScript): return _create_subscript_omml(component)
    if isinstance(component, _NAry): return _create_nary_omml(component)
    if isinstance(component, MathMatrix): return _create_matrix_omml(component)
    if isinstance(component, MathAccent): return _create_accent_omml(component)
    raise TypeError(f"Unsupported math component: {type(component).__name__}")


def build_omath(components: Sequence[MathComponent]) -> etree._Element:
    """Wraps components in an inline <m:oMath> region."""
    return _append_all(etree.Element(_m_tag('oMath'), nsmap=NSMAP), components)


def build_omath_para(components: Sequence[MathComponent], alignment: str = 'center') -> etree._Element:
    """Wraps components in a display <m:oMathPara> with the given justification."""
    omml_para = etree.Element(_m_tag('oMathPara'), nsmap=NSMAP)
    omml_para_pr = etree.SubElement(omml_para, _m_tag('oMathParaPr'))
    _set_val(omml_para_pr, 'jc', alignment)
    omml_para.append(build_omath(components))
    return omml_para
