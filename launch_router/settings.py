from pathlib import Path
from dataclasses import dataclass, fields
import logging
import yaml

PROJECT_ROOT = Path(__file__).resolve().parents[1]

log = logging.getLogger(__name__)


@dataclass
class ResolverConfig:
    """
    Central configuration for the launch resolver.

    Values can be overridden via resolver_config.yaml at the project root.
    The endpoint is a deploy-time constant, it is never read from the environment.
    """

    # Configuration endpoint
    endpoint_url: str = "https://url-server-quit-track-production.up.railway.app"
    accept_header: str = "application/json"
    fetch_timeout_s: float = 10.0

    # Destination reachability check
    validation_timeout_s: float = 10.0

    # User-facing text
    rate_limited_message: str = "Service temporarily unavailable. Please try again later."

    log_level: str = "INFO"

    @property
    def level(self) -> int:
        """Numeric logging level, INFO when log_level is not a known name."""
        value = logging.getLevelName(str(self.log_level).upper())
        return value if isinstance(value, int) else logging.INFO


def load_resolver_config(path: str | Path | None = None) -> ResolverConfig:
    """
    Load ResolverConfig from YAML if present; otherwise use defaults.

    By default, looks for `resolver_config.yaml` at the project root.
    """

    if path is None:
        # launch_router/settings.py → parent → project root
        path = PROJECT_ROOT / "resolver_config.yaml"

    path = Path(path)

    if not path.exists():
        log.debug("YAML not found at %s, using defaults", path)
        return ResolverConfig()

    raw = path.read_text(encoding="utf-8")
    data = yaml.safe_load(raw) or {}

    if not isinstance(data, dict):
        log.warning("Expected mapping in %s, got %s, using defaults", path, type(data).__name__)
        return ResolverConfig()

    allowed_keys = {f.name for f in fields(ResolverConfig)}
    filtered = {k: v for k, v in data.items() if k in allowed_keys}
    ignored = sorted(set(data) - allowed_keys, key=str)
    if ignored:
        log.warning("Ignoring unknown keys in %s: %s", path, ", ".join(map(str, ignored)))

    return ResolverConfig(**filtered)

DEFAULT_RESOLVER_CONFIG = load_resolver_config()
