import os
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv

load_dotenv()

API_BASE = "https://api.github.com"
DEFAULT_OUTPUT = "pr_data.csv"
DEFAULT_PAGE_SIZE = 30
DEFAULT_MAX_PRS = 100
DEFAULT_TIMEOUT = 30.0


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class Configuration:
    owner: str
    repo: str
    token: Optional[str] = None
    output: str = DEFAULT_OUTPUT
    page_size: int = DEFAULT_PAGE_SIZE
    max_prs: int = DEFAULT_MAX_PRS
    timeout: Optional[float] = DEFAULT_TIMEOUT
    api_base: str = API_BASE

    def validate(self) -> "Configuration":
        for name in ("owner", "repo"):
            if not (getattr(self, name) or "").strip():
                raise ConfigError(f"Missing required option --{name}")
        if self.page_size <= 0:
            raise ConfigError(f"--page-size must be a positive integer, got {self.page_size}")
        if self.max_prs <= 0:
            raise ConfigError(f"--max-prs must be a positive integer, got {self.max_prs}")
        if self.timeout is not None and self.timeout <= 0:
            raise ConfigError(f"--timeout must be positive, got {self.timeout}")
        return self


def env_defaults() -> dict:
    """Defaults that may come from the environment (or a .env file)."""
    return {
        "token": os.getenv("GITHUB_TOKEN") or None,
        "timeout": os.getenv("GITHUB_TIMEOUT"),
        "api_base": (os.getenv("GITHUB_API_URL") or API_BASE).rstrip("/"),
    }


def build_config(owner=None, repo=None, token=None, output=None,
                 page_size=None, max_prs=None, timeout=None) -> Configuration:
    """Merge explicit values over environment defaults and validate.

    Raises ConfigError when owner or repo is missing, before anything
    touches the network.
    """
    env = env_defaults()
    raw_timeout = timeout if timeout is not None else env["timeout"]
    try:
        timeout = float(raw_timeout) if raw_timeout not in (None, "") else DEFAULT_TIMEOUT
    except ValueError:
        raise ConfigError(f"timeout must be a number of seconds, got {raw_timeout!r}")
    return Configuration(
        owner=owner or "",
        repo=repo or "",
        token=token or env["token"],
        output=output or DEFAULT_OUTPUT,
        page_size=page_size if page_size is not None else DEFAULT_PAGE_SIZE,
        max_prs=max_prs if max_prs is not None else DEFAULT_MAX_PRS,
        timeout=timeout,
        api_base=env["api_base"],
    ).validate()
