"""YAML-based request handler chain declaration.

Handler chains can be declared in a YAML file instead of being wired in
code. Declaration order is registration order, so it decides which chain
wins when several could handle the same request.

File format::

    request_handler_chains:
      - handler: myskill.handlers.LaunchHandler
        request_interceptors:
          - myskill.interceptors.LocaleInterceptor
        response_interceptors: []
      - handler: myskill.handlers.HelpHandler

Every path has the form ``module.path.ClassName`` and is instantiated
without arguments. Unlike lookup by inference, an explicit declaration
must resolve: any failure raises HandlerDiscoveryError.

Example:
    >>> from skill_dispatch.discovery import mapper_from_yaml
    >>>
    >>> mapper = mapper_from_yaml(Path("config/handlers.yaml"))
    >>> chain = mapper.get_request_handler_chain(handler_input)
"""

from __future__ import annotations

import importlib
import re
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from .exceptions import HandlerDiscoveryError
from .logging import log_debug, log_info, log_warn
from .mapper import RequestHandlerChain, RequestMapper, RequestMapperBuilder

if TYPE_CHECKING:
    from .config import DispatchConfig

CHAINS_KEY = "request_handler_chains"

# module.path.ClassName: at least one dot, capitalized final component
CLASS_PATTERN = re.compile(
    r"^[a-zA-Z_][a-zA-Z0-9_]*(\.[a-zA-Z_][a-zA-Z0-9_]*)*\.[A-Z][a-zA-Z0-9_]*$"
)


def load_chain_declarations(path: Path | str) -> list[dict[str, Any]]:
    """Read chain declarations from a YAML file.

    Args:
        path: Path to the YAML file.

    Returns:
        Chain declarations in file order. May be empty.

    Raises:
        HandlerDiscoveryError: If the file cannot be read or parsed, or
            does not declare ``request_handler_chains`` as a list.
    """
    path = Path(path)
    try:
        with path.open() as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        log_warn(f"Failed to load handler configuration {path}: {e}")
        raise HandlerDiscoveryError(f"Cannot load handler configuration {path}: {e}") from e

    if not isinstance(data, dict) or CHAINS_KEY not in data:
        raise HandlerDiscoveryError(f"{path} does not declare '{CHAINS_KEY}'")

    declarations = data[CHAINS_KEY]
    if declarations is None:
        raise HandlerDiscoveryError(
            f"'{CHAINS_KEY}' in {path} is empty; declare an explicit list, such as []"
        )
    if not isinstance(declarations, list):
        raise HandlerDiscoveryError(f"'{CHAINS_KEY}' in {path} must be a list")

    log_debug(f"Loaded {len(declarations)} chain declaration(s) from {path}")
    return declarations


def import_component(class_path: str) -> Any:
    """Import ``module.path.ClassName`` and instantiate it with no arguments.

    Args:
        class_path: Full class path.

    Returns:
        The new instance.

    Raises:
        HandlerDiscoveryError: If the path is malformed, cannot be imported,
            does not name a class, or the class cannot be instantiated.
    """
    if not isinstance(class_path, str) or not CLASS_PATTERN.match(class_path):
        raise HandlerDiscoveryError(f"'{class_path}' is not a module.path.ClassName path")

    module_path, class_name = class_path.rsplit(".", 1)

    try:
        module = importlib.import_module(module_path)
    except ImportError as e:
        raise HandlerDiscoveryError(f"Cannot import module '{module_path}': {e}") from e
    except Exception as e:
        raise HandlerDiscoveryError(
            f"Cannot import module '{module_path}': failed while loading: {e}"
        ) from e

    component_class = getattr(module, class_name, None)
    if not isinstance(component_class, type):
        raise HandlerDiscoveryError(f"'{class_path}' does not name a class")

    try:
        return component_class()
    except Exception as e:
        raise HandlerDiscoveryError(f"Cannot instantiate '{class_path}': {e}") from e


def chain_from_declaration(declaration: dict[str, Any]) -> RequestHandlerChain:
    """Build one chain from its declaration.

    Raises:
        HandlerDiscoveryError: If the declaration has no handler, an
            interceptor entry is not a list, or a component cannot be loaded.
    """
    if not isinstance(declaration, dict) or not declaration.get("handler"):
        raise HandlerDiscoveryError(f"Chain declaration {declaration!r} has no 'handler'")

    request_interceptors = _interceptor_paths(declaration, "request_interceptors")
    response_interceptors = _interceptor_paths(declaration, "response_interceptors")

    return RequestHandlerChain(
        import_component(declaration["handler"]),
        [import_component(p) for p in request_interceptors],
        [import_component(p) for p in response_interceptors],
    )


def _interceptor_paths(declaration: dict[str, Any], key: str) -> list[Any]:
    paths = declaration.get(key)
    if paths is None:
        return []
    if not isinstance(paths, list):
        raise HandlerDiscoveryError(
            f"'{key}' of {declaration['handler']} must be a list, got {type(paths).__name__}"
        )
    return paths


def builder_from_declarations(declarations: list[dict[str, Any]]) -> RequestMapperBuilder:
    """Create a mapper builder holding the declared chains, in order.

    The returned builder already has its collection supplied, so it
    builds even when ``declarations`` is empty.
    """
    chains = [chain_from_declaration(d) for d in declarations]
    return RequestMapper.builder().with_request_handler_chains(chains)


def mapper_from_yaml(path: Path | str) -> RequestMapper:
    """Build a RequestMapper from a YAML declaration file.

    Args:
        path: Path to the YAML file.

    Returns:
        The built mapper.

    Raises:
        HandlerDiscoveryError: If the file or any declared component is invalid.
    """
    declarations = load_chain_declarations(path)
    mapper = builder_from_declarations(declarations).build()
    log_info(f"Loaded {len(mapper)} request handler chain(s) from {path}")
    return mapper


def mapper_from_config(config: DispatchConfig) -> RequestMapper:
    """Build a RequestMapper from the file named by ``config.handler_config_path``.

    Raises:
        HandlerDiscoveryError: If no path is configured or the file is invalid.
    """
    if config.handler_config_path is None:
        raise HandlerDiscoveryError(
            "No handler configuration path set; use SKILL_DISPATCH_HANDLER_CONFIG"
        )
    return mapper_from_yaml(config.handler_config_path)


__all__ = [
    "CHAINS_KEY",
    "builder_from_declarations",
    "chain_from_declaration",
    "import_component",
    "load_chain_declarations",
    "mapper_from_config",
    "mapper_from_yaml",
]
