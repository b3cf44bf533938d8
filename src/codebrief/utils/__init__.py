"""codebrief utility modules.

- logging: Standardized logging with human/verbose/JSON modes
- preflight: Dependency and credential checks run before analysis
"""

from codebrief.utils.logging import configure_from_cli, get_logger, setup_logging
from codebrief.utils.preflight import PreflightChecker, PreflightResult

__all__ = [
    "configure_from_cli",
    "get_logger",
    "setup_logging",
    "PreflightChecker",
    "PreflightResult",
]
