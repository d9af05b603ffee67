"""Path joining and template variable extraction."""

import re

PATH_VARIABLE = re.compile(r":([^/]+)")


def normalize_path(path: str) -> str:
    """One leading slash, no trailing or repeated slashes; root stays "/"."""
    segments = [segment for segment in path.split("/") if segment]
    return "/" + "/".join(segments)


def join_path(base_path: str, path: str) -> str:
    """Join a group base path with an endpoint path segment."""
    return normalize_path(f"{base_path}/{path}")


def path_variables(path: str) -> list[str]:
    """Names of `:name` template variables, in path order."""
    return PATH_VARIABLE.findall(path)
