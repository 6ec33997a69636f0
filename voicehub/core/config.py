import os
from pathlib import Path

import yaml

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "settings.yaml"


class Config:
    _config = None
    _path = None

    @classmethod
    def load(cls, path=None):
        if cls._config is None:
            path = path or os.getenv("VOICEHUB_CONFIG") or DEFAULT_CONFIG_PATH
            try:
                with open(path, "r") as f:
                    cls._config = yaml.safe_load(f) or {}
            except FileNotFoundError:
                cls._config = {}
            cls._path = str(path)
        return cls._config

    @classmethod
    def reset(cls):
        cls._config = None
        cls._path = None

    @classmethod
    def get(cls, *keys, default=None):
        cfg = cls.load()
        for key in keys:
            if not isinstance(cfg, dict):
                return default
            cfg = cfg.get(key)
        return cfg if cfg is not None else default
