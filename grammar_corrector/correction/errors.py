class GrammarCorrectorError(Exception):
    """Base class for errors raised by grammar_corrector."""


class UnknownCorrectionError(GrammarCorrectorError, KeyError):
    """The correction id is not pending in this session (already applied or replaced)."""


class SpanMismatchError(GrammarCorrectorError, RuntimeError):
    """A pending span no longer covers the token it was located on.

    This means span bookkeeping went wrong upstream; applying the correction anyway
    would corrupt the buffer.
    """

    def __init__(self, correction_id: str, expected: str, actual: str):
        self.correction_id = correction_id
        self.expected = expected
        self.actual = actual
        super().__init__(f"Correction {correction_id} expected '{expected}' at its span but found '{actual}'")


class ProviderConfigurationError(GrammarCorrectorError, ValueError):
    """A language model provider is missing required configuration."""
