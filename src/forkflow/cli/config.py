import tomllib
from dataclasses import dataclass, replace
from pathlib import Path

DEFAULT_HOST = "github.com"
DEFAULT_API_URL = "https://api.github.com"
DEFAULT_PRIMARY_BRANCH = "master"
DEFAULT_POST_CLONE_SCRIPT = "scripts/post-clone-setup.sh"


def default_config_path() -> Path:
    return Path.home() / ".forkflow" / "config.toml"


@dataclass(frozen=True)
class LoadedConfig:
    """In-memory representation of `~/.forkflow/config.toml` plus CLI overrides.

    Example config.toml:
      upstream_owner = "example-org"
      host = "github.com"
      api_url = "https://api.github.com"
      primary_branch = "master"
      post_clone_script = "scripts/post-clone-setup.sh"
    """

    upstream_owner: str | None
    host: str
    api_url: str
    primary_branch: str
    post_clone_script: str

    @staticmethod
    def defaults() -> "LoadedConfig":
        return LoadedConfig(
            upstream_owner=None,
            host=DEFAULT_HOST,
            api_url=DEFAULT_API_URL,
            primary_branch=DEFAULT_PRIMARY_BRANCH,
            post_clone_script=DEFAULT_POST_CLONE_SCRIPT,
        )

    def with_overrides(
        self, *, upstream_owner: str | None, primary_branch: str | None
    ) -> "LoadedConfig":
        """Apply command-line values, which win over the file."""
        config = self
        if upstream_owner is not None:
            config = replace(config, upstream_owner=upstream_owner)
        if primary_branch is not None:
            config = replace(config, primary_branch=primary_branch)
        return config


class ConfigError(Exception):
    """The config file exists but cannot be used."""


def load_config(cfg_path: Path) -> LoadedConfig:
    """Load config.toml from the given path if present; otherwise return defaults.

    Raises:
        ConfigError: If the file is not valid TOML or a value is not a string
    """
    defaults = LoadedConfig.defaults()
    if not cfg_path.exists():
        return defaults

    try:
        data = tomllib.loads(cfg_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {cfg_path}: {e}") from e

    def _get(key: str, default: str | None) -> str | None:
        value = data.get(key, default)
        if value is not None and not isinstance(value, str):
            raise ConfigError(f"{cfg_path}: '{key}' must be a string")
        return value

    upstream_owner = _get("upstream_owner", None)
    return LoadedConfig(
        upstream_owner=upstream_owner or None,
        host=_get("host", defaults.host) or defaults.host,
        api_url=_get("api_url", defaults.api_url) or defaults.api_url,
        primary_branch=_get("primary_branch", defaults.primary_branch) or defaults.primary_branch,
        post_clone_script=(
            _get("post_clone_script", defaults.post_clone_script) or defaults.post_clone_script
        ),
    )
