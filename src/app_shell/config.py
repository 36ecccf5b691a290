import logging
import os

from src.rules.models import Rules

logger = logging.getLogger(__name__)


def missing_required_env(rules: Rules) -> list[str]:
    return [name for name in rules.ops.required_env if name not in os.environ]


def validate_ops_rules(rules: Rules) -> None:
    """
    Validate operational requirements before startup.

    Raises RuntimeError listing every required environment variable that is
    not set.
    """
    missing = missing_required_env(rules)
    if missing:
        raise RuntimeError(f"Missing required environment variables: {', '.join(missing)}")
    logger.info("Configuration validated (rules version %s)", rules.project.rules_version)
