"""
Resolving hash implementations.

An implementation is named by a target string "module:attribute". The module
is imported normally, or, when an extension path is configured, loaded
straight from that shared library file. Loading happens once at startup so a
missing implementation stops the run before any measurement.
"""
import importlib
import importlib.util
import platform
import sys
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from typing import Any, Callable

from hashbench.consts.ImplementationRole import ImplementationRole
from hashbench.errors import ImplementationUnavailableError
from hashbench.models.implementation_spec import ImplementationSpec
from hashbench.util.log_config import setup_logger

logger = setup_logger(__name__)


@dataclass
class LoadedImplementation:
    spec: ImplementationSpec
    fn: Callable[[bytes], Any]
    module: ModuleType

    @property
    def name(self) -> str:
        return self.spec.name

    def describe(self) -> str:
        """One-line identification of the backing module for report headers."""
        parts = [self.module.__name__]
        version = getattr(self.module, "__version__", None)
        if version:
            parts.append(f"v{version}")
        origin = getattr(self.module, "__file__", None)
        parts.append(f"({origin})" if origin else "(built-in)")
        return " ".join(parts)


def runtime_description() -> str:
    return f"{platform.python_implementation()} {platform.python_version()}"


def remediation_for(spec: ImplementationSpec) -> str:
    module_name = spec.split_target()[0]
    if spec.extension_path:
        return (f"Build the extension so that '{spec.extension_path}' exists, or pass the "
                f"correct shared library with --extension PATH.")
    if spec.role == ImplementationRole.CANDIDATE:
        return (f"Build the native extension and pass its shared library, e.g.\n"
                f"  hashbench --extension ./zig-out/lib/lib{module_name}.so\n"
                f"or install a module that provides '{spec.target}'.")
    return f"Install a module that provides '{spec.target}' or choose another --{spec.role.value}."


def _load_module_from_file(spec: ImplementationSpec, module_name: str) -> ModuleType:
    path = Path(spec.extension_path).expanduser()
    if not path.is_file():
        raise ImplementationUnavailableError(
            spec.name, spec.target, f"extension file not found: {path}", remediation_for(spec))

    module_spec = importlib.util.spec_from_file_location(module_name, path)
    if module_spec is None or module_spec.loader is None:
        raise ImplementationUnavailableError(
            spec.name, spec.target, f"'{path}' is not a loadable module", remediation_for(spec))

    try:
        # extension modules are dlopened and initialised in module_from_spec
        module = importlib.util.module_from_spec(module_spec)
        module_spec.loader.exec_module(module)
    except (ImportError, OSError) as e:
        raise ImplementationUnavailableError(
            spec.name, spec.target, f"failed to load '{path}': {e}", remediation_for(spec)) from e
    sys.modules[module_name] = module
    return module


def load_module(spec: ImplementationSpec) -> ModuleType:
    module_name = spec.split_target()[0]
    if spec.extension_path:
        return _load_module_from_file(spec, module_name)
    try:
        return importlib.import_module(module_name)
    except ImportError as e:
        raise ImplementationUnavailableError(
            spec.name, spec.target, f"module '{module_name}' is not importable ({e})",
            remediation_for(spec)) from e


def load_implementation(spec: ImplementationSpec) -> LoadedImplementation:
    """
    Import the module behind spec and look up its callable.

    Raises:
        ImplementationUnavailableError: module missing or attribute not callable
        ConfigError: malformed target string
    """
    module = load_module(spec)
    attr_path = spec.split_target()[1]

    fn: Any = module
    for attr in attr_path.split("."):
        try:
            fn = getattr(fn, attr)
        except AttributeError as e:
            raise ImplementationUnavailableError(
                spec.name, spec.target, f"'{module.__name__}' has no attribute '{attr_path}'",
                remediation_for(spec)) from e

    if not callable(fn):
        raise ImplementationUnavailableError(
            spec.name, spec.target, f"'{attr_path}' is not callable", remediation_for(spec))

    loaded = LoadedImplementation(spec=spec, fn=fn, module=module)
    logger.info(f"✓ Loaded {spec.role.value}: {spec.name} -> {loaded.describe()}")
    return loaded
