"""Container naming helpers."""


def apply_prefix(name: str, prefix: str) -> str:
    """Turn an instance name into its container name."""
    return f"{prefix}{name}"


def remove_prefix(name: str, prefix: str) -> str:
    """Turn a container name back into its instance name.

    The prefix is removed at most once. Names are expected as the docker
    SDK reports them (``Container.name``), without the leading slash of the
    raw list endpoint.
    """
    if prefix and name.startswith(prefix):
        return name[len(prefix):]
    return name


def has_prefix(name: str, prefix: str) -> bool:
    """Check whether a container name belongs to spoon."""
    return name.startswith(prefix)
