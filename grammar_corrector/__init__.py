from grammar_corrector.core.config import CheckerConfig, ReviewConfig
from grammar_corrector.correction.boundary import BoundaryPolicy
from grammar_corrector.correction.checker import GrammarChecker
from grammar_corrector.correction.errors import GrammarCorrectorError, SpanMismatchError, UnknownCorrectionError
from grammar_corrector.correction.session import CorrectionSession
from grammar_corrector.types import ApplyResult, ErrorRecord, PendingCorrection
from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("grammar-corrector")
except PackageNotFoundError:
    __version__ = "unknown"

__all__ = [
    "GrammarChecker",
    "CorrectionSession",
    "CheckerConfig",
    "ReviewConfig",
    "BoundaryPolicy",
    "ErrorRecord",
    "PendingCorrection",
    "ApplyResult",
    "GrammarCorrectorError",
    "SpanMismatchError",
    "UnknownCorrectionError",
]
