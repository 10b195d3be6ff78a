# mathml2omml/errors.py


class MathMLError(ValueError):
    """Base class for every failure raised while converting MathML."""


class MathMLParseError(MathMLError):
    """The input is not well-formed XML and the parser runs in strict mode."""


class MathMLNestingError(MathMLError):
    """The expression nests deeper than the configured ``max_depth``."""

    def __init__(self, max_depth: int):
        super().__init__(f"MathML nesting exceeds max_depth={max_depth}")
        self.max_depth = max_depth
