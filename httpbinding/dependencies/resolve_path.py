"""Helper module to resolve paths used in the configuration"""

import os


def resolve_path(path: str, file_path: str, config_dir: str = None) -> str:
    """
    Resolves a path:
    ~/  for paths relative to your home directory
    /   for absolute paths
    @/  for paths relative to your config folder
            only available if config_dir is specified
        anything else for paths relative to the including file's folder
    """
    if path.startswith("~"):
        return os.path.expanduser(path)
    if os.path.isabs(path):
        return path
    if config_dir and path.startswith("@/"):
        return os.path.join(config_dir, path[2:])
    if path.startswith("./"):
        path = path[2:]
    return os.path.join(os.path.dirname(file_path), path)
