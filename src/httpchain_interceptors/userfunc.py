"""Resolution of interceptor handlers given by import name.

Names have the form ``module.path:function_name`` and are used by
``InterceptorRegistry.use_named`` and by interceptors listed in settings.
"""

import importlib
import re
from collections.abc import Callable
from typing import Any

from .exceptions import UserFunctionError

NAME_PATTERN = re.compile(r"^(?P<module>[a-zA-Z_][a-zA-Z0-9_.]*):(?P<function>[a-zA-Z_][a-zA-Z0-9_]*)$")


def parse_function_name(func_name: str) -> tuple[str, str]:
    match = NAME_PATTERN.match(func_name)
    if not match:
        raise UserFunctionError(f"Invalid function name format: {func_name}") from None

    return match.group("module"), match.group("function")


def import_function(func_name: str) -> Callable[..., Any]:
    """Import a callable by its 'module.path:function_name' name.

    Args:
        func_name: Import name of the callable

    Returns:
        The imported callable

    Raises:
        UserFunctionError: If the module or the callable cannot be found
    """
    module_path, function_name = parse_function_name(func_name)

    try:
        module = importlib.import_module(module_path)
    except ImportError as e:
        raise UserFunctionError(f"Failed to import module '{module_path}'") from e

    if not hasattr(module, function_name):
        raise UserFunctionError(f"Function '{function_name}' not found in module '{module_path}'") from None

    func = getattr(module, function_name)
    if not callable(func):
        raise UserFunctionError(f"'{module_path}:{function_name}' is not callable") from None

    return func
