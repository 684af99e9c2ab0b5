"""
Account Configuration Module
============================

Typed, validated account configuration decoded from a loosely-typed
mapping (integration payloads, JSON files).

Decoding rules
--------------
- camelCase keys (``accountId``, ``secretKey``) and snake_case field names
  are both accepted.
- Unknown keys are ignored.
- Missing optional keys, and keys explicitly set to ``null``, take their
  zero value (``""``, ``[]`` or ``None``).
- Type mismatches raise :class:`ConfigurationError` before any network
  call is attempted.

Example
-------
>>> from aws_describer.core.config import AccountConfig
>>>
>>> config = AccountConfig.from_mapping({
...     "accountId": "123456789012",
...     "regions": ["us-east-1", "eu-west-1"],
...     "assumeRoleName": "DescriberReadOnly",
...     "externalId": "s3cr3t",
...     "somethingElse": True,
... })
>>> config.role_arn
'arn:aws:iam::123456789012:role/DescriberReadOnly'
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from aws_describer.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def role_arn_from_name(account_id: str, role_name: str) -> str:
    """
    Build an IAM role ARN from an account ID and a role name.

    Returns an empty string when ``role_name`` is empty, meaning "no role".

    Example
    -------
    >>> role_arn_from_name("123456789012", "Reader")
    'arn:aws:iam::123456789012:role/Reader'
    >>> role_arn_from_name("123456789012", "")
    ''
    """
    if not role_name:
        return ""
    return f"arn:aws:iam::{account_id}:role/{role_name}"


def policy_arn_from_name(account_id: str, policy_name: str) -> str:
    """Build an IAM policy ARN, or ``""`` when ``policy_name`` is empty."""
    if not policy_name:
        return ""
    return f"arn:aws:iam::{account_id}:policy/{policy_name}"


class AccountConfig(BaseModel):
    """
    Per-account credential and authorization material.

    Parameters
    ----------
    account_id : str
        The 12-digit AWS account ID (alias ``accountId``).
    regions : list of str
        Regions to describe (alias ``regions``).
    access_key, secret_key, session_token : str
        Optional static credential triple.
    assume_role_name : str
        Role to assume in ``account_id``; empty means no role hop.
    external_id : str, optional
        External ID condition for the role hop. ``""`` is treated as unset.
    assume_admin_role_name : str
        Optional secondary administrative role name.
    assume_role_policy_name : str
        Optional policy name attached to the assumed role.

    Notes
    -----
    Instances are immutable. They are consumed once to build an
    :class:`~aws_describer.core.aws_client.AWSClient` and are never
    persisted by this package.
    """

    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        populate_by_name=True,
        strict=True,
    )

    account_id: str = Field(default="", alias="accountId")
    regions: List[str] = Field(default_factory=list, alias="regions")
    secret_key: str = Field(default="", alias="secretKey")
    access_key: str = Field(default="", alias="accessKey")
    session_token: str = Field(default="", alias="sessionToken")
    assume_role_name: str = Field(default="", alias="assumeRoleName")
    external_id: Optional[str] = Field(default=None, alias="externalId")
    assume_admin_role_name: str = Field(default="", alias="assumeAdminRoleName")
    assume_role_policy_name: str = Field(default="", alias="assumeRolePolicyName")

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> AccountConfig:
        """
        Decode an account configuration from a loosely-typed mapping.

        Parameters
        ----------
        mapping : Mapping
            Arbitrary key-value input.

        Returns
        -------
        AccountConfig
            Fully-specified configuration.

        Raises
        ------
        ConfigurationError
            If ``mapping`` is not a mapping or a known key has the wrong type.
        """
        if not isinstance(mapping, Mapping):
            raise ConfigurationError(
                "Account configuration must be a mapping",
                details={"received": type(mapping).__name__},
            )

        cleaned = {k: v for k, v in mapping.items() if v is not None}

        try:
            config = cls.model_validate(cleaned)
        except ValidationError as e:
            errors = [
                {
                    "field": ".".join(str(part) for part in err["loc"]),
                    "error": err["msg"],
                }
                for err in e.errors()
            ]
            raise ConfigurationError(
                "Invalid account configuration",
                details={"errors": errors},
            ) from e

        logger.debug(
            f"Decoded account config for {config.account_id or '<unknown>'} "
            f"({len(config.regions)} regions)"
        )
        return config

    @property
    def normalized_external_id(self) -> Optional[str]:
        """External ID with ``""`` folded into ``None``."""
        return self.external_id or None

    @property
    def role_arn(self) -> str:
        """ARN of the role to assume, or ``""`` when no role is configured."""
        return role_arn_from_name(self.account_id, self.assume_role_name)

    @property
    def admin_role_arn(self) -> str:
        """ARN of the secondary admin role, or ``""``."""
        return role_arn_from_name(self.account_id, self.assume_admin_role_name)

    @property
    def policy_arn(self) -> str:
        """ARN of the role policy, or ``""``."""
        return policy_arn_from_name(self.account_id, self.assume_role_policy_name)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with secrets redacted (for logs and reports)."""
        data = self.model_dump()
        for key in ("secret_key", "session_token"):
            if data.get(key):
                data[key] = "***"
        return data
