"""
Secret resolution domain models.

An ExternalSecret resource names a secret in some backend store and the
keys/properties it should hold. The verify pass reports which of those are
missing as SecretGaps; resolving them produces one KeyPropertyBatch per key.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from extsecret.secrets.domain.exceptions import UnknownBackendTypeError


class BackendType(str, Enum):
    """Secret store integrations an ExternalSecret can be backed by."""
    LOCAL = "local"
    VAULT = "vault"
    GCP_SECRETS_MANAGER = "gcpSecretsManager"
    AWS_SECRETS_MANAGER = "secretsManager"
    AWS_SYSTEM_MANAGER = "systemManager"
    AZURE_KEY_VAULT = "azureKeyVault"
    ALICLOUD_SECRETS_MANAGER = "alicloudSecretsManager"
    IBMCLOUD_SECRETS_MANAGER = "ibmcloudSecretsManager"
    AKEYLESS = "akeyless"

    @classmethod
    def parse(cls, value: str | BackendType | None) -> BackendType:
        """
        Parse a backend type tag as found on an ExternalSecret.

        An empty tag means the local Kubernetes secret store.

        Raises:
            UnknownBackendTypeError: If the tag is not a known backend
        """
        if isinstance(value, BackendType):
            return value
        if not value:
            return cls.LOCAL
        for member in cls:
            if member.value.lower() == value.lower():
                return member
        raise UnknownBackendTypeError(value)


class PropertyKind(str, Enum):
    """How a property is asked for."""
    TEXT = "text"
    CONFIRM = "confirm"

    @classmethod
    def parse(cls, value: str | None) -> PropertyKind:
        if value and value.lower() == cls.CONFIRM.value:
            return cls.CONFIRM
        return cls.TEXT


@dataclass(frozen=True)
class ExternalSecretRef:
    """Identifies one declared ExternalSecret resource."""
    name: str
    namespace: str
    backend_type: BackendType = BackendType.LOCAL
    project_id: str | None = None

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}"


@dataclass(frozen=True)
class MissingEntry:
    """A key of an ExternalSecret with the properties still unresolved, in declaration order."""
    key: str
    properties: tuple[str, ...] = ()


@dataclass(frozen=True)
class SecretGaps:
    """Everything missing for one ExternalSecret, as reported by the verify pass."""
    secret: ExternalSecretRef
    entries: tuple[MissingEntry, ...] = ()


@dataclass(frozen=True)
class PropertyValue:
    property: str
    value: str


@dataclass
class KeyPropertyBatch:
    """
    The resolved properties of one key, written to the backend in one go.

    The string form lists property names only so it can go into error
    messages without leaking values.
    """
    secret: ExternalSecretRef
    key: str
    properties: list[PropertyValue] = field(default_factory=list)

    def add(self, property: str, value: str) -> None:
        self.properties.append(PropertyValue(property=property, value=value))

    def as_dict(self) -> dict[str, str]:
        return {p.property: p.value for p in self.properties}

    def property_names(self) -> list[str]:
        return [p.property for p in self.properties]

    def __str__(self) -> str:
        return f"key {self.key} properties [{', '.join(self.property_names())}]"

    def __repr__(self) -> str:
        return f"KeyPropertyBatch(secret={self.secret!s}, key={self.key!r}, properties={self.property_names()!r})"


@dataclass(frozen=True)
class PropertySpec:
    """
    Schema metadata for one property of an ExternalSecret.

    When ``template`` is set the value is computed by evaluating it instead
    of asking the operator.
    """
    name: str
    question: str = ""
    help: str = ""
    kind: PropertyKind = PropertyKind.TEXT
    template: str | None = None
    default: str | None = None
