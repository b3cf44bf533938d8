"""Preflight validation.

Checks that the analysis can run before any archive is downloaded: the LLM
package is importable, the provider has credentials, the tier list is usable,
and the GitHub API answers. Missing required pieces cause an immediate exit
with a clear message.
"""

import importlib.util
import json
import urllib.error
import urllib.request
from dataclasses import dataclass, field
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as dist_version
from typing import Any

from codebrief.config import LLM_KEY_ENV, CodebriefConfig, GitHubConfig
from codebrief.models.llm_config import LLMConfig


@dataclass
class ToolCheck:
    """Result of checking a single dependency.

    Attributes:
        name: Dependency name
        available: Whether it is usable
        version: Version if known
        required: Whether it is required for this run
        message: Status message (human-readable context)
    """

    name: str
    available: bool
    version: str | None = None
    required: bool = True
    message: str = ""


@dataclass
class PreflightResult:
    """Result of preflight validation.

    Attributes:
        success: Whether all required checks passed
        checks: Individual check results
        errors: Messages for failed required checks
        warnings: Messages for failed optional checks
    """

    success: bool = True
    checks: list[ToolCheck] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_check(self, check: ToolCheck) -> None:
        """Add a check result."""
        self.checks.append(check)

        if not check.available:
            if check.required:
                self.success = False
                self.errors.append(f"{check.name}: {check.message}")
            else:
                self.warnings.append(f"{check.name}: {check.message}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "success": self.success,
            "checks": [
                {
                    "name": c.name,
                    "available": c.available,
                    "version": c.version,
                    "required": c.required,
                    "message": c.message,
                }
                for c in self.checks
            ],
            "errors": self.errors,
            "warnings": self.warnings,
        }


class PreflightChecker:
    """Validates dependencies before analysis.

    Usage:
        checker = PreflightChecker()
        result = checker.check_all(config)
        if not result.success:
            sys.exit(1)
    """

    def __init__(self, timeout: int = 10) -> None:
        """Initialize preflight checker.

        Args:
            timeout: Timeout in seconds for network checks
        """
        self.timeout = timeout

    def check_litellm(self, required: bool = True) -> ToolCheck:
        """Check if the LiteLLM package is importable."""
        if importlib.util.find_spec("litellm") is None:
            return ToolCheck(
                name="litellm",
                available=False,
                required=required,
                message="Install with: pip install litellm",
            )

        version = None
        try:
            version = dist_version("litellm")
        except PackageNotFoundError:
            pass

        return ToolCheck(
            name="litellm",
            available=True,
            version=version,
            required=required,
            message="Unified LLM interface (Python package)",
        )

    def check_llm_credentials(self, llm: LLMConfig) -> ToolCheck:
        """Check that the configured provider has credentials."""
        if llm.has_credentials:
            return ToolCheck(
                name=llm.provider,
                available=True,
                message=f"Tiers: {', '.join(llm.tiers)}",
            )
        env_hint = LLM_KEY_ENV.get(llm.provider, "the provider API key")
        return ToolCheck(
            name=llm.provider,
            available=False,
            message=f"API key required. Set llm.api_key or {env_hint} env var",
        )

    def check_github_api(self, github: GitHubConfig, required: bool = False) -> ToolCheck:
        """Query the GitHub rate-limit endpoint.

        Reports the remaining core quota; a quota of 0 fails the check.
        """
        url = f"https://{github.api_host}/rate_limit"
        headers = {"Accept": "application/vnd.github+json", "User-Agent": "codebrief"}
        if github.token:
            headers["Authorization"] = f"Bearer {github.token}"

        try:
            req = urllib.request.Request(url, headers=headers, method="GET")
            with urllib.request.urlopen(req, timeout=self.timeout) as response:
                data = json.loads(response.read().decode())
        except (urllib.error.URLError, TimeoutError, ValueError) as e:
            return ToolCheck(
                name="github",
                available=False,
                required=required,
                message=f"GitHub API not reachable at {github.api_host}: {e}",
            )

        remaining = data.get("resources", {}).get("core", {}).get("remaining")
        if remaining == 0:
            return ToolCheck(
                name="github",
                available=False,
                required=required,
                message="GitHub API rate limit exhausted. Set GITHUB_TOKEN to raise it",
            )
        return ToolCheck(
            name="github",
            available=True,
            required=required,
            message=f"{remaining} requests remaining",
        )

    def check_github_token(self, github: GitHubConfig) -> ToolCheck:
        """Warn when downloads will be anonymous."""
        if github.token:
            return ToolCheck(name="github-token", available=True, required=False)
        return ToolCheck(
            name="github-token",
            available=False,
            required=False,
            message="No GITHUB_TOKEN set; anonymous downloads are heavily rate limited",
        )

    def check_all(self, config: CodebriefConfig, offline: bool = False) -> PreflightResult:
        """Run all preflight checks.

        Args:
            config: Loaded configuration
            offline: Skip checks that need the network

        Returns:
            PreflightResult with all check results
        """
        result = PreflightResult()

        result.add_check(self.check_litellm(required=True))
        result.add_check(self.check_llm_credentials(config.llm))
        result.add_check(self.check_github_token(config.github))

        if not offline:
            result.add_check(self.check_github_api(config.github))

        result.warnings.extend(f"llm: {warning}" for warning in config.llm.validate())

        return result
