"""
Configuration manager for hash benchmark runs.

Loads config.yaml (plus an optional config_<env>.yaml override) into a
BenchmarkConfig and applies command-line overrides on top.
"""
import argparse
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from hashbench.config.benchmark_config import BenchmarkConfig
from hashbench.consts.ImplementationRole import ImplementationRole
from hashbench.consts.MemoryProbeType import MemoryProbeType
from hashbench.errors import ConfigError
from hashbench.models.implementation_spec import ImplementationSpec

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config_yaml"


class ConfigLoader:

    def __init__(self, config_path: Path = DEFAULT_CONFIG_PATH, env: Optional[str] = None):
        self.config_path = config_path
        self.env = env
        self.config_data = self._load_config()

    def _read_yaml(self, file_path: Path) -> Dict[str, Any]:
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError as e:
            raise ConfigError(f"Config file not found: {file_path}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {file_path}: {e}") from e
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Top level of {file_path} must be a mapping")
        return data

    def _load_config(self) -> BenchmarkConfig:
        """
        Load and parse benchmark configuration from YAML file.
        Supports environment-specific overrides via config_<env>.yaml

        Returns:
            BenchmarkConfig: Configured benchmark configuration instance
        """
        data = self._read_yaml(self.config_path / "config.yaml")

        if self.env:
            env_data = self._read_yaml(self.config_path / f"config_{self.env}.yaml")
            # dict.update() overwrites top-level keys, the implementations
            # block is merged one level deeper so a single role can be changed
            implementations = dict(data.get("implementations") or {})
            for role, values in (env_data.pop("implementations", None) or {}).items():
                implementations[role] = {**(implementations.get(role) or {}), **values}
            data.update(env_data)
            data["implementations"] = implementations

        config = BenchmarkConfig()
        try:
            config.algorithm = str(data.get("algorithm", "MD5"))
            config.iterations = int(data["iterations"])
            config.warmup_iterations = int(data.get("warmup_iterations", 100))
            config.memory_probe = MemoryProbeType(data.get("memory_probe", "psutil"))
            config.random_payloads = bool(data.get("random_payloads", False))
            config.random_size = int(data.get("random_size", 4096))
            config.seed = data.get("seed")
            config.log_file = data.get("log_file")
        except KeyError as e:
            raise ConfigError(f"Missing required config key: {e}") from e
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid config value: {e}") from e

        implementations = data.get("implementations") or {}
        config.reference = self._parse_implementation(implementations, ImplementationRole.REFERENCE)
        config.candidate = self._parse_implementation(implementations, ImplementationRole.CANDIDATE)

        validate_config(config)
        return config

    @staticmethod
    def _parse_implementation(implementations: Dict[str, Any], role: ImplementationRole) -> ImplementationSpec:
        entry = implementations.get(role.value)
        if not entry or "target" not in entry:
            raise ConfigError(f"implementations.{role.value}.target is required")
        spec = ImplementationSpec(
            name=entry.get("name") or entry["target"],
            target=entry["target"],
            role=role,
            extension_path=entry.get("extension_path"),
        )
        spec.split_target()
        return spec


def validate_config(config: BenchmarkConfig) -> None:
    if config.iterations < 1:
        raise ConfigError(f"iterations must be >= 1, got {config.iterations}")
    if config.warmup_iterations < 0:
        raise ConfigError(f"warmup_iterations must be >= 0, got {config.warmup_iterations}")
    if config.random_size < 1:
        raise ConfigError(f"random_size must be >= 1, got {config.random_size}")


def apply_cli_overrides(config: BenchmarkConfig, args: argparse.Namespace) -> BenchmarkConfig:
    """Overwrite config values with any command-line options that were given."""
    if args.iterations is not None:
        config.iterations = args.iterations
    if args.warmup is not None:
        config.warmup_iterations = args.warmup
    if args.memory_probe is not None:
        config.memory_probe = MemoryProbeType(args.memory_probe)
    if args.random_payloads:
        config.random_payloads = True
    if args.seed is not None:
        config.seed = args.seed
    if args.reference is not None:
        config.reference = ImplementationSpec(
            name=args.reference_name or args.reference,
            target=args.reference,
            role=ImplementationRole.REFERENCE,
        )
    elif args.reference_name:
        config.reference.name = args.reference_name
    if args.candidate is not None:
        candidate = ImplementationSpec(
            name=args.candidate_name or args.candidate,
            target=args.candidate,
            role=ImplementationRole.CANDIDATE,
        )
        # the configured shared library only provides the configured module
        if candidate.split_target()[0] == config.candidate.split_target()[0]:
            candidate.extension_path = config.candidate.extension_path
        config.candidate = candidate
    elif args.candidate_name:
        config.candidate.name = args.candidate_name
    if args.extension is not None:
        config.candidate.extension_path = args.extension

    config.reference.split_target()
    config.candidate.split_target()
    validate_config(config)
    return config
