"""
Template function library.

Domain functions that read other secrets, plus a general purpose set of
string/data helpers in the spirit of sprig. Usage inside a value template:

    {{ secret("jx.jenkins-x-bucketrepo", "password") }}
    {{ htpasswdSecret("bucketrepo", "username", "password") }}
    {{ auth("docker-auth", "username", "password") | b64enc }}

The secret functions never fail the template: a missing secret, key or
malformed username logs a warning and yields "" so one optional secret does
not block every other property of the run.
"""

from __future__ import annotations

import base64
import hashlib
import json
import secrets
import string
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import bcrypt
import yaml
from jinja2 import pass_context
from jinja2.runtime import Context

from extsecret.secrets.application.secret_reader import SecretReader
from extsecret.secrets.domain.exceptions import SecretStoreError
from extsecret.secrets.domain.names import resolve_resource_names
from extsecret.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

# Render context variable holding the EvaluationScope of the current evaluation
SCOPE_VARIABLE = "__extsecret_scope__"

HTPASSWD_SEPARATOR = ":"


@dataclass(frozen=True)
class EvaluationScope:
    """What is being computed: the secret/property and its namespace."""
    namespace: str
    secret_name: str
    property: str


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        # binary payloads (keystores, DER certificates) must not fail the template
        return value.decode("utf-8", errors="replace")
    return str(value)


class TemplateFunctionLibrary:
    """
    Functions exposed to value templates.

    One instance is shared by every evaluation of a run; per-evaluation data
    comes from the EvaluationScope in the render context.
    """

    def __init__(self, reader: SecretReader, htpasswd_rounds: int = 10):
        self._reader = reader
        self._htpasswd_rounds = htpasswd_rounds
        self._globals: dict[str, Callable[..., Any]] = {
            "secret": _scoped(self.secret),
            "htpasswdSecret": _scoped(self.htpasswd_secret),
            "auth": _scoped(self.auth),
            "htpasswd": self.htpasswd,
            "randAlphaNum": rand_alpha_num,
            "randAlpha": rand_alpha,
            "randNumeric": rand_numeric,
            "uuidv4": uuidv4,
        }

    def template_globals(self) -> dict[str, Callable[..., Any]]:
        return dict(self._globals)

    def template_filters(self) -> dict[str, Callable[..., Any]]:
        return dict(EXTENDED_FILTERS)

    def _payload(self, scope: EvaluationScope, secret_name: str) -> tuple[dict[str, bytes] | None, str, str]:
        name, namespace = resolve_resource_names(secret_name, scope.namespace)
        try:
            payload = self._reader.fetch(name, namespace)
        except SecretStoreError as e:
            logger.warning(
                "secret_lookup_failed",
                secret=name,
                namespace=namespace,
                for_secret=scope.secret_name,
                for_property=scope.property,
                error=str(e),
            )
            return None, name, namespace
        return payload, name, namespace

    def secret(self, scope: EvaluationScope, secret_name: str, key: str) -> str:
        """Value of ``key`` in the named secret, or "" if either is missing."""
        payload, name, namespace = self._payload(scope, secret_name)
        if not payload:
            logger.warning(
                "secret_not_found",
                secret=name,
                namespace=namespace,
                for_secret=scope.secret_name,
                for_property=scope.property,
            )
            return ""
        if key not in payload:
            logger.warning("secret_key_not_found", secret=name, namespace=namespace, key=key)
            return ""
        return _text(payload[key])

    def htpasswd_secret(self, scope: EvaluationScope, secret_name: str, username_key: str, password_key: str) -> str:
        """
        ``username:bcrypt-hash`` built from a username and password in the named secret.

        Returns "" when the secret, username or password is missing, or the
        username contains ":" (it would break the htpasswd line).
        """
        payload, name, namespace = self._payload(scope, secret_name)
        if not payload:
            logger.warning("htpasswd_secret_not_found", secret=name, namespace=namespace)
            return ""

        username = _text(payload.get(username_key))
        if not username:
            logger.warning("htpasswd_missing_username", secret=name, namespace=namespace, key=username_key)
            return ""
        if HTPASSWD_SEPARATOR in username:
            logger.warning("htpasswd_invalid_username", secret=name, namespace=namespace, username=username)
            return ""

        password = _text(payload.get(password_key))
        if not password:
            logger.warning("htpasswd_missing_password", secret=name, namespace=namespace, key=password_key)
            return ""

        try:
            return self.htpasswd(username, password)
        except ValueError as e:
            logger.warning("htpasswd_hash_failed", secret=name, namespace=namespace, error=str(e))
            return ""

    def auth(self, scope: EvaluationScope, secret_name: str, user_key: str, password_key: str) -> str:
        """Raw ``user:password`` from the named secret, or "" if it is missing."""
        payload, name, namespace = self._payload(scope, secret_name)
        if not payload:
            logger.warning("auth_secret_not_found", secret=name, namespace=namespace)
            return ""
        return _text(payload.get(user_key)) + HTPASSWD_SEPARATOR + _text(payload.get(password_key))

    def htpasswd(self, username: str, password: str) -> str:
        hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=self._htpasswd_rounds))
        return f"{username}{HTPASSWD_SEPARATOR}{hashed.decode('ascii')}"


def _scoped(func: Callable[..., str]) -> Callable[..., str]:
    """Adapt a scope-taking function to a Jinja global reading the scope from the context."""

    @pass_context
    def wrapper(context: Context, *args: Any) -> str:
        return func(context[SCOPE_VARIABLE], *args)

    wrapper.__name__ = func.__name__
    wrapper.__doc__ = func.__doc__
    return wrapper


# General purpose helpers

def _random_string(length: int, alphabet: str) -> str:
    return "".join(secrets.choice(alphabet) for _ in range(int(length)))


def rand_alpha_num(length: int) -> str:
    return _random_string(length, string.ascii_letters + string.digits)


def rand_alpha(length: int) -> str:
    return _random_string(length, string.ascii_letters)


def rand_numeric(length: int) -> str:
    return _random_string(length, string.digits)


def uuidv4() -> str:
    return str(uuid.uuid4())


def b64enc(value: Any) -> str:
    return base64.b64encode(_text(value).encode("utf-8")).decode("ascii")


def b64dec(value: Any) -> str:
    return base64.b64decode(_text(value)).decode("utf-8")


def sha256sum(value: Any) -> str:
    return hashlib.sha256(_text(value).encode("utf-8")).hexdigest()


def sha1sum(value: Any) -> str:
    return hashlib.sha1(_text(value).encode("utf-8")).hexdigest()


def to_json(value: Any) -> str:
    return json.dumps(value, sort_keys=True)


def to_yaml(value: Any) -> str:
    return yaml.safe_dump(value, default_flow_style=False, sort_keys=True).rstrip("\n")


def quote(value: Any) -> str:
    return json.dumps(_text(value))


def squote(value: Any) -> str:
    return f"'{_text(value)}'"


def trim_prefix(value: Any, prefix: str) -> str:
    text = _text(value)
    return text[len(prefix):] if prefix and text.startswith(prefix) else text


def trim_suffix(value: Any, suffix: str) -> str:
    text = _text(value)
    return text[: -len(suffix)] if suffix and text.endswith(suffix) else text


def required(value: Any, message: str = "a required value is empty") -> Any:
    """Fail the template when ``value`` is empty, e.g. ``secret(...) | required("need db password")``."""
    if value is None or value == "":
        raise ValueError(message)
    return value


EXTENDED_FILTERS: dict[str, Callable[..., Any]] = {
    "b64enc": b64enc,
    "b64dec": b64dec,
    "sha256sum": sha256sum,
    "sha1sum": sha1sum,
    "toJson": to_json,
    "toYaml": to_yaml,
    "quote": quote,
    "squote": squote,
    "trimPrefix": trim_prefix,
    "trimSuffix": trim_suffix,
    "required": required,
}
