"""Endpoint group and endpoint declarations.

A group is a class decorated with `controller(base_path)`; its endpoints
are the methods carrying a route from `get`, `post`, etc.

    @controller("users")
    class UserController:
        @get(":id")
        def find(self, id): ...
"""

from dataclasses import dataclass
from typing import Callable, Iterator

from swagger_explorer.metadata.base import HttpMethod

ROUTE_ATTR = "__swagger_route__"
GROUP_ATTR = "__swagger_base_path__"


@dataclass(frozen=True)
class RouteSpec:
    method: HttpMethod
    path: str = ""


@dataclass(frozen=True)
class Endpoint:
    """One discovered endpoint of a group."""

    name: str
    handler: Callable
    route: RouteSpec


def controller(base_path: str = ""):
    """Mark a class as an endpoint group under `base_path`."""

    def decorator(cls):
        setattr(cls, GROUP_ATTR, base_path)
        return cls

    return decorator


def route(method: HttpMethod | str, path: str = ""):
    method = HttpMethod(method.upper()) if isinstance(method, str) else method

    def decorator(func):
        setattr(func, ROUTE_ATTR, RouteSpec(method=method, path=path))
        return func

    return decorator


def get(path: str = ""):
    return route(HttpMethod.GET, path)


def put(path: str = ""):
    return route(HttpMethod.PUT, path)


def post(path: str = ""):
    return route(HttpMethod.POST, path)


def delete(path: str = ""):
    return route(HttpMethod.DELETE, path)


def options(path: str = ""):
    return route(HttpMethod.OPTIONS, path)


def head(path: str = ""):
    return route(HttpMethod.HEAD, path)


def patch(path: str = ""):
    return route(HttpMethod.PATCH, path)


def trace(path: str = ""):
    return route(HttpMethod.TRACE, path)


def group_base_path(group) -> str:
    return getattr(group, GROUP_ATTR, "")


def iter_endpoints(group) -> Iterator[Endpoint]:
    """Yield the routed methods of `group` in declaration order.

    Inherited endpoints come first; a subclass attribute with the same
    name replaces the inherited one.
    """
    members: dict[str, object] = {}
    for klass in reversed(group.__mro__[:-1]):
        members.update(vars(klass))
    for name, member in members.items():
        func = member.__func__ if isinstance(member, (staticmethod, classmethod)) else member
        spec = getattr(func, ROUTE_ATTR, None)
        if isinstance(spec, RouteSpec):
            yield Endpoint(name=name, handler=func, route=spec)
