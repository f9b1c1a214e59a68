import importlib
import inspect
import pkgutil

from fastapi import APIRouter, FastAPI
from loguru import logger


def discover_routers(package_name: str = "app.api") -> list[APIRouter]:
    """Collect every ``APIRouter`` defined at module level in a package.

    Args:
        package_name: The package to scan, non-recursively.

    Returns:
        The routers in module name order.
    """
    package = importlib.import_module(package_name)
    package_path = getattr(package, "__path__", None)
    if not package_path:
        logger.warning(f"Cannot scan {package_name} for routers as it's not a package")
        return []

    routers: list[APIRouter] = []
    for module_info in sorted(pkgutil.iter_modules(package_path), key=lambda m: m.name):
        module = importlib.import_module(f"{package_name}.{module_info.name}")
        for _, obj in inspect.getmembers(module, lambda member: isinstance(member, APIRouter)):
            routers.append(obj)
            logger.debug(f"Discovered router {obj.prefix or '/'} in {module.__name__}")

    return routers


def register_routers(app: FastAPI, prefix: str = "/api") -> None:
    for router in discover_routers():
        app.include_router(router, prefix=prefix)
