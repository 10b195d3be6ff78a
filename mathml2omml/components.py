# mathml2omml/components.py
from typing import Annotated, ClassVar, Iterable, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


# ==============================================================================
# SECTION 1: MATH COMPONENTS (one per OMML construct)
# ==============================================================================
class _Component(BaseModel):
    model_config = ConfigDict(frozen=True)


class MathRun(_Component):
    kind: Literal['run'] = 'run'
    text: str


class MathFraction(_Component):
    kind: Literal['fraction'] = 'fraction'
    numerator: Tuple['MathComponent', ...] = ()
    denominator: Tuple['MathComponent', ...] = ()


class MathRadical(_Component):
    """Square root when `degree` is None, n-th root otherwise."""
    kind: Literal['radical'] = 'radical'
    children: Tuple['MathComponent', ...] = ()
    degree: Optional[Tuple['MathComponent', ...]] = None


class MathSuperScript(_Component):
    kind: Literal['superscript'] = 'superscript'
    children: Tuple['MathComponent', ...] = ()
    super_script: Tuple['MathComponent', ...] = ()


class MathSubScript(_Component):
    kind: Literal['subscript'] = 'subscript'
    children: Tuple['MathComponent', ...] = ()
    sub_script: Tuple['MathComponent', ...] = ()


class MathSubSuperScript(_Component):
    kind: Literal['subsuperscript'] = 'subsuperscript'
    children: Tuple['MathComponent', ...] = ()
    sub_script: Tuple['MathComponent', ...] = ()
    super_script: Tuple['MathComponent', ...] = ()


class _NAry(_Component):
    """Big operator with optional limits; `children` is the operator's body."""
    char: ClassVar[str]
    limit_location: ClassVar[str]

    children: Tuple['MathComponent', ...] = ()
    sub_script: Tuple['MathComponent', ...] = ()
    super_script: Tuple['MathComponent', ...] = ()


class MathSum(_NAry):
    char: ClassVar[str] = '∑'
    limit_location: ClassVar[str] = 'undOvr'
    kind: Literal['sum'] = 'sum'


class MathIntegral(_NAry):
    char: ClassVar[str] = '∫'
    limit_location: ClassVar[str] = 'subSup'
    kind: Literal['integral'] = 'integral'


class MathMatrix(_Component):
    """`rows[r][c]` is the content of one cell."""
    kind: Literal['matrix'] = 'matrix'
    rows: Tuple[Tuple[Tuple['MathComponent', ...], ...], ...] = ()


class MathAccent(_Component):
    kind: Literal['accent'] = 'accent'
    children: Tuple['MathComponent', ...] = ()
    accent: str


MathComponent = Annotated[
    Union[MathRun, MathFraction, MathRadical, MathSuperScript, MathSubScript, MathSubSuperScript,
          MathSum, MathIntegral, MathMatrix, MathAccent],
    Field(discriminator='kind')]

COMPONENT_TYPES = (MathRun, MathFraction, MathRadical, MathSuperScript, MathSubScript, MathSubSuperScript,
                   MathSum, MathIntegral, MathMatrix, MathAccent)
NARY_TYPES = {cls.char: cls for cls in (MathSum, MathIntegral)}

for _model in COMPONENT_TYPES:
    _model.model_rebuild()


# ==============================================================================
# SECTION 2: HELPERS
# ==============================================================================
def _parts(component: BaseModel) -> Iterable[Tuple['MathComponent', ...]]:
    """Child sequences of a component, in reading order."""
    if isinstance(component, MathFraction):
        yield component.numerator
        yield component.denominator
    elif isinstance(component, MathRadical):
        if component.degree:
            yield component.degree
        yield component.children
    elif isinstance(component, _NAry):
        yield component.sub_script
        yield component.super_script
        yield component.children
    elif isinstance(component, MathMatrix):
        for row in component.rows:
            yield from row
    elif isinstance(component, MathSubSuperScript):
        yield component.children
        yield component.sub_script
        yield component.super_script
    elif isinstance(component, MathSuperScript):
        yield component.children
        yield component.super_script
    elif isinstance(component, MathSubScript):
        yield component.children
        yield component.sub_script
    elif isinstance(component, MathAccent):
        yield component.children


def extract_text(components: Iterable['MathComponent']) -> str:
    """Recursively collects the text of every run, in reading order."""
    text_parts = []
    for component in components:
        if isinstance(component, MathRun):
            text_parts.append(component.text)
        elif isinstance(component, _NAry):
            text_parts.append(component.char)
        for part in _parts(component):
            text_parts.append(extract_text(part))
    return "".join(text_parts)
