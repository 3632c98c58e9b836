import os
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_CONFIG: dict = {
    "artifact_name": "report",
    "comment_marker": "#outputSize",
    "bot_login": "github-actions[bot]",
    "archive_path": "report.zip",
    "report_filename": "report.md",
    "workdir": ".",
    "unzip_command": "unzip",
    "max_parallel_hides": 8,
}


def load_config(config_path: str = ".outputsize.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .outputsize.yml in the current directory
      3. CLI argument overrides
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    # Resolve credentials and endpoints from the Actions environment
    config["github_token"] = os.environ.get("GITHUB_TOKEN")
    config["api_url"] = os.environ.get("GITHUB_API_URL")

    return config
