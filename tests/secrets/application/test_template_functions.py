"""Tests for the template function library."""

from unittest.mock import MagicMock

import bcrypt
import pytest

from extsecret.secrets.application import EvaluationScope, SecretReader, TemplateFunctionLibrary
from extsecret.secrets.application.template_functions import (
    b64dec,
    b64enc,
    rand_alpha_num,
    required,
    trim_prefix,
    trim_suffix,
    to_json,
    to_yaml,
)
from extsecret.secrets.domain.exceptions import SecretStoreError

SCOPE = EvaluationScope(namespace="jx", secret_name="jenkins-x-bucketrepo", property="htpasswd")


class TestSecret:
    def test_returns_value(self, store, library):
        store.add("docker-auth", "jx", password="hunter2")

        assert library.secret(SCOPE, "docker-auth", "password") == "hunter2"

    def test_qualified_name_reads_other_namespace(self, store, library):
        store.add("docker-auth", "tekton", password="other")

        assert library.secret(SCOPE, "tekton.docker-auth", "password") == "other"
        assert store.get_calls == [("docker-auth", "tekton")]

    def test_missing_secret_degrades_to_empty(self, store, library):
        assert library.secret(SCOPE, "docker-auth", "password") == ""
        # retried before giving up
        assert len(store.get_calls) == 4

    def test_missing_key_degrades_to_empty(self, store, library):
        store.add("docker-auth", "jx", username="bob")

        assert library.secret(SCOPE, "docker-auth", "password") == ""

    def test_binary_payload_does_not_fail(self, store, library):
        store.secrets[("jx", "keystore")] = {"jks": b"\xfe\xed\xfe\xed", "alias": b"tls"}

        value = library.secret(SCOPE, "keystore", "jks")

        assert value
        assert set(value) == {"\ufffd"}
        assert library.secret(SCOPE, "keystore", "alias") == "tls"

    def test_binary_values_in_auth(self, store, library):
        store.secrets[("jx", "docker-auth")] = {"username": b"bob", "password": b"\xff"}

        assert library.auth(SCOPE, "docker-auth", "username", "password") == "bob:\ufffd"

    def test_store_failure_degrades_to_empty(self):
        store = MagicMock()
        store.get.side_effect = SecretStoreError("forbidden")
        library = TemplateFunctionLibrary(SecretReader(store, sleep=lambda _: None))

        assert library.secret(SCOPE, "docker-auth", "password") == ""


class TestHtpasswdSecret:
    def test_hash_verifies_against_password(self, store, library):
        store.add("bucketrepo", "jx", username="bob", password="hunter2")

        result = library.htpasswd_secret(SCOPE, "bucketrepo", "username", "password")

        username, hashed = result.split(":", 1)
        assert username == "bob"
        assert bcrypt.checkpw(b"hunter2", hashed.encode("ascii"))

    def test_username_with_separator_is_rejected(self, store, library):
        store.add("bucketrepo", "jx", username="bo:b", password="hunter2")

        assert library.htpasswd_secret(SCOPE, "bucketrepo", "username", "password") == ""

    def test_missing_username(self, store, library):
        store.add("bucketrepo", "jx", password="hunter2")

        assert library.htpasswd_secret(SCOPE, "bucketrepo", "username", "password") == ""

    def test_missing_password(self, store, library):
        store.add("bucketrepo", "jx", username="bob")

        assert library.htpasswd_secret(SCOPE, "bucketrepo", "username", "password") == ""

    def test_missing_secret(self, library):
        assert library.htpasswd_secret(SCOPE, "bucketrepo", "username", "password") == ""

    def test_each_hash_is_salted(self, library):
        first = library.htpasswd("bob", "hunter2")
        second = library.htpasswd("bob", "hunter2")

        assert first != second
        assert first.startswith("bob:$2")


class TestAuth:
    def test_concatenates_raw_values(self, store, library):
        store.add("docker-auth", "jx", username="bob", password="hunter2")

        assert library.auth(SCOPE, "docker-auth", "username", "password") == "bob:hunter2"

    def test_missing_secret(self, library):
        assert library.auth(SCOPE, "docker-auth", "username", "password") == ""


class TestTemplateExports:
    def test_domain_functions_are_globals(self, library):
        names = library.template_globals()

        assert {"secret", "htpasswdSecret", "auth", "randAlphaNum", "uuidv4"} <= set(names)

    def test_filters(self, library):
        assert {"b64enc", "b64dec", "sha256sum", "toJson", "toYaml", "required"} <= set(library.template_filters())


class TestExtendedFunctions:
    def test_base64(self):
        assert b64enc("bob:hunter2") == "Ym9iOmh1bnRlcjI="
        assert b64dec("Ym9iOmh1bnRlcjI=") == "bob:hunter2"

    def test_trim(self):
        assert trim_prefix("https://example.com", "https://") == "example.com"
        assert trim_suffix("example.com/", "/") == "example.com"
        assert trim_prefix("example.com", "https://") == "example.com"

    def test_random_string(self):
        value = rand_alpha_num(20)

        assert len(value) == 20
        assert value.isalnum()

    def test_serialization(self):
        assert to_json({"b": 1, "a": "x"}) == '{"a": "x", "b": 1}'
        assert to_yaml({"a": 1}) == "a: 1"

    def test_required(self):
        assert required("value", "needed") == "value"
        with pytest.raises(ValueError, match="needed"):
            required("", "needed")
