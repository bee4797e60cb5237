import os
from pathlib import Path


def dot_mission() -> Path:
    override = os.environ.get("MC_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".mission"


def config_file() -> Path:
    return dot_mission() / "config.yaml"


def default_db() -> Path:
    return dot_mission() / "mission.db"
