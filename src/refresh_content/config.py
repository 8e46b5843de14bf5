"""YAML configuration loader for the refresh pipeline."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from common.config import ConfigSingleton, find_config_path, load_yaml
from refresh_content.models import RECORD_KINDS

# Load .env file if it exists
load_dotenv()

CONFIG_DIR = Path(__file__).parent / "configs"
CONFIG_ENV_VAR = "REFRESH_CONFIG"


@dataclass
class CollectionConfig:
    """One Twitter collection and where its records land in the artifact."""

    name: str
    kind: str
    artifact_key: str
    collection_id: str
    count: int = 50

    def __post_init__(self) -> None:
        if self.kind not in RECORD_KINDS:
            raise ValueError(
                f"Invalid kind for collection {self.name}: {self.kind}. "
                f"Must be one of {list(RECORD_KINDS)}"
            )
        if not self.artifact_key:
            raise ValueError(f"Collection {self.name} requires artifact_key")
        if not self.collection_id:
            raise ValueError(f"Collection {self.name} requires collection_id")
        if self.count <= 0:
            raise ValueError(f"Collection {self.name} count must be positive, got {self.count}")


@dataclass
class RefreshConfig:
    github_owner: str
    github_repo: str
    github_path: str
    github_secret: str
    twitter_secret: str
    aws_region: str = ""

    # Order is part of the artifact format: digests are stored by position
    collections: list[CollectionConfig] = field(default_factory=list)

    def __post_init__(self) -> None:
        for name in ("github_owner", "github_repo", "github_path", "github_secret", "twitter_secret"):
            if not getattr(self, name):
                raise ValueError(f"Missing required setting: {name}")

        if not self.collections:
            raise ValueError("At least one collection must be configured")

        names = [c.name for c in self.collections]
        keys = [c.artifact_key for c in self.collections]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate collection names: {names}")
        if len(set(keys)) != len(keys):
            raise ValueError(f"Duplicate artifact keys: {keys}")


def _setting(section: dict, key: str, env_var: str) -> str:
    """Read a setting from a config section, falling back to the environment."""
    value = section.get(key) or os.getenv(env_var, "")
    return str(value)


def _parse_collection(data: dict) -> CollectionConfig:
    collection_id = data.get("collection_id") or os.getenv(data.get("collection_id_env", ""), "")
    return CollectionConfig(
        name=data["name"],
        kind=data["kind"],
        artifact_key=data["artifact_key"],
        collection_id=str(collection_id),
        count=int(data.get("count", 50)),
    )


def load_config(name: str | None = None) -> RefreshConfig:
    """Load refresh config by name (e.g. 'test' or 'prod') or path.

    Args:
        name: Config name without extension, path to a config file, or None
            to use REFRESH_CONFIG and then 'prod'

    Returns:
        RefreshConfig instance
    """
    config_path = find_config_path(name, CONFIG_DIR, env_var=CONFIG_ENV_VAR)
    data = load_yaml(config_path)

    github = data.get("github") or {}
    twitter = data.get("twitter") or {}

    return RefreshConfig(
        github_owner=_setting(github, "owner", "GITHUB_OWNER"),
        github_repo=_setting(github, "repo", "GITHUB_REPO"),
        github_path=_setting(github, "path", "GITHUB_GENERATED_CONTENT_PATH"),
        github_secret=_setting(github, "secret", "GITHUB_SECRET"),
        twitter_secret=_setting(twitter, "secret", "TWITTER_SECRET"),
        aws_region=_setting(data, "aws_region", "AWS_REGION"),
        collections=[_parse_collection(c) for c in data.get("collections") or []],
    )


_manager = ConfigSingleton(load_config)
get_config = _manager.get
set_config = _manager.set
reset_config = _manager.reset
