"""Resource name helpers."""

NAMESPACE_SEPARATOR = "."


def resolve_resource_names(name: str, current_namespace: str) -> tuple[str, str]:
    """
    Split a possibly namespace qualified resource name.

    ``"ns.name"`` refers to ``name`` in namespace ``ns``; a name without a dot
    lives in the current namespace.

    Examples:
        >>> resolve_resource_names("jx.docker-auth", "default")
        ('docker-auth', 'jx')
        >>> resolve_resource_names("docker-auth", "default")
        ('docker-auth', 'default')
    """
    namespace, sep, local_name = name.partition(NAMESPACE_SEPARATOR)
    if not sep:
        return name, current_namespace
    return local_name, namespace
