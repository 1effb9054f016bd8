import pytest

from extsecret.secrets.domain.names import resolve_resource_names


@pytest.mark.parametrize(
    "name, expected",
    [
        ("jx.docker-auth", ("docker-auth", "jx")),
        ("tekton-pipelines.bucketrepo", ("bucketrepo", "tekton-pipelines")),
        ("a.b.c", ("b.c", "a")),
    ],
)
def test_qualified_name_selects_namespace(name, expected):
    """The text before the first dot is the namespace."""
    assert resolve_resource_names(name, "default") == expected


def test_unqualified_name_keeps_current_namespace():
    assert resolve_resource_names("docker-auth", "jx") == ("docker-auth", "jx")


def test_empty_namespace_prefix():
    assert resolve_resource_names(".docker-auth", "jx") == ("docker-auth", "")
