"""Configuration constants.

Values here are not user-configurable. For configurable values, see models.py.
"""

CONFIG_FILENAME = ".changecov.yaml"
"""Repo-level YAML config file, looked up at the repository root."""

ENV_PREFIX = "CHANGECOV__"
"""Prefix for structured env overrides (CHANGECOV__SECTION__KEY)."""

CONVENTIONAL_ENV_VARS: dict[str, tuple[str, str]] = {
    "BASE_REF": ("diff", "base_ref"),
    "GITHUB_TOKEN": ("github", "token"),
    "PR_NUMBER": ("github", "pr_number"),
    "GITHUB_REPOSITORY": ("github", "repository"),
}
"""CI-provided env vars mapped onto (section, key). Empty values are ignored."""

DEFAULT_THRESHOLD = 70.0
"""Minimum overall percentage of covered changed lines."""

DEFAULT_REPORT_PATH = "coverage/lcov.info"

DEFAULT_BASE_REF = "main"

GITHUB_API_URL = "https://api.github.com"
