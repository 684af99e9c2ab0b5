"""
AWS Client Module
=================

Credential resolution and boto3 client management for AWS Describer.

Resolution happens in up to two passes:

1. **Base credentials.** An explicit access key / secret key / session token
   triple when an access key is supplied, otherwise boto3's default chain
   (environment, shared profile, container or instance identity). A
   session without a region falls back to :data:`DEFAULT_REGION`.
2. **Role hop (optional).** When a role ARN is supplied, the base
   session's STS client assumes the role (optionally conditioned on an
   external ID) and a fresh session is built from the temporary
   credentials.

A failure in pass 1 raises :class:`CredentialsError`; a failure in pass 2
raises :class:`RoleAssumptionError`. Neither pass retries beyond what
botocore itself does.

Example
-------
>>> from aws_describer.core.aws_client import AWSClient
>>> from aws_describer.core.config import AccountConfig
>>>
>>> config = AccountConfig.from_mapping({"accountId": "123456789012",
...                                      "assumeRoleName": "Reader"})
>>> client = AWSClient.from_account_config(config, region="eu-west-1")
>>> events = client.get_client("events")

See Also
--------
boto3 : AWS SDK for Python
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    NoCredentialsError,
    ProfileNotFound,
)

from aws_describer.core.config import AccountConfig
from aws_describer.core.exceptions import (
    AWSClientError,
    CredentialsError,
    RoleAssumptionError,
    ServiceError,
)

logger = logging.getLogger(__name__)

DEFAULT_REGION = "us-east-1"
DEFAULT_SESSION_NAME = "aws-describer"


def build_assume_role_request(
    role_arn: str,
    external_id: Optional[str] = None,
    session_name: str = DEFAULT_SESSION_NAME,
) -> Dict[str, str]:
    """
    Build the keyword arguments for ``sts.assume_role``.

    An empty external ID is dropped, so ``""`` and ``None`` produce the
    same request.

    Example
    -------
    >>> build_assume_role_request("arn:aws:iam::123456789012:role/R", "")
    {'RoleArn': 'arn:aws:iam::123456789012:role/R', 'RoleSessionName': 'aws-describer'}
    """
    request = {"RoleArn": role_arn, "RoleSessionName": session_name}
    if external_id:
        request["ExternalId"] = external_id
    return request


class AWSClient:
    """
    Thread-safe AWS client wrapper with credential and role resolution.

    Parameters
    ----------
    region : str, optional
        AWS region. When omitted, the region configured for the session
        (environment or profile) is used, falling back to ``us-east-1``.
    profile : str, optional
        AWS profile name, used only when no static access key is given.
    access_key, secret_key, session_token : str, optional
        Explicit credential triple. Used when ``access_key`` is non-empty.
    assume_role_arn : str, optional
        Role to assume after the base credentials resolve.
    external_id : str, optional
        External ID for the role hop. ``""`` is treated as unset.
    max_retries : int, default=3
        Maximum attempts per API call (botocore adaptive retries).
    timeout : int, default=30
        Connect and read timeout in seconds.
    session_name : str, default="aws-describer"
        ``RoleSessionName`` used for the role hop.

    Notes
    -----
    The session is resolved lazily on first use and then only read.
    Clients derived with :meth:`with_region` share it, so the role is
    assumed once per account and reused across regions.

    Raises
    ------
    CredentialsError
        If base credentials cannot be resolved.
    RoleAssumptionError
        If the role hop fails.
    """

    def __init__(
        self,
        region: Optional[str] = None,
        profile: Optional[str] = None,
        access_key: str = "",
        secret_key: str = "",
        session_token: str = "",
        assume_role_arn: str = "",
        external_id: Optional[str] = None,
        max_retries: int = 3,
        timeout: int = 30,
        session_name: str = DEFAULT_SESSION_NAME,
    ) -> None:
        self._region = region
        self.profile = profile
        self.access_key = access_key
        self.secret_key = secret_key
        self.session_token = session_token
        self.assume_role_arn = assume_role_arn
        self.external_id = external_id or None
        self.max_retries = max_retries
        self.timeout = timeout
        self.session_name = session_name

        self._session: Optional[boto3.Session] = None
        self._clients: Dict[str, Any] = {}
        self._lock = threading.RLock()
        self._config = self._create_config()

        logger.debug(
            f"Initialized AWSClient (region={region}, profile={profile}, "
            f"static_keys={bool(access_key)}, role={assume_role_arn or None})"
        )

    @classmethod
    def from_account_config(
        cls,
        config: AccountConfig,
        region: Optional[str] = None,
        **kwargs: Any,
    ) -> AWSClient:
        """
        Create a client from an :class:`AccountConfig`.

        The role ARN is derived from ``assume_role_name`` and ``account_id``;
        an empty role name means no role hop.
        """
        if region is None and config.regions:
            region = config.regions[0]
        return cls(
            region=region,
            access_key=config.access_key,
            secret_key=config.secret_key,
            session_token=config.session_token,
            assume_role_arn=config.role_arn,
            external_id=config.normalized_external_id,
            **kwargs,
        )

    def _create_config(self) -> Config:
        return Config(
            retries={
                "max_attempts": self.max_retries,
                "mode": "adaptive",
            },
            connect_timeout=self.timeout,
            read_timeout=self.timeout,
        )

    # =========================================================================
    # Session Resolution
    # =========================================================================

    @property
    def session(self) -> boto3.Session:
        """The resolved boto3 session (resolved on first access)."""
        if self._session is None:
            with self._lock:
                if self._session is None:
                    self._session = self._create_session()
        return self._session

    @property
    def region(self) -> str:
        """The region this client talks to."""
        if self._region:
            return self._region
        return self.session.region_name or DEFAULT_REGION

    def _create_base_session(self) -> boto3.Session:
        session_kwargs: Dict[str, Any] = {}
        if self._region:
            session_kwargs["region_name"] = self._region

        if self.access_key:
            session_kwargs.update(
                aws_access_key_id=self.access_key,
                aws_secret_access_key=self.secret_key,
                aws_session_token=self.session_token or None,
            )
        elif self.profile:
            session_kwargs["profile_name"] = self.profile

        try:
            session = boto3.Session(**session_kwargs)
            if not session.region_name:
                session_kwargs["region_name"] = DEFAULT_REGION
                session = boto3.Session(**session_kwargs)
        except ProfileNotFound as e:
            raise CredentialsError(
                f"AWS profile '{self.profile}' not found",
                details={
                    "profile": self.profile,
                    "hint": "Check ~/.aws/credentials for available profiles",
                },
            ) from e
        except BotoCoreError as e:
            raise CredentialsError(f"Failed to load AWS config: {e}") from e

        if session.get_credentials() is None:
            raise CredentialsError(
                "AWS credentials not found",
                region=session.region_name,
                details={
                    "hint": (
                        "Provide an access key, set AWS_ACCESS_KEY_ID and "
                        "AWS_SECRET_ACCESS_KEY, or configure a profile"
                    ),
                },
            )

        logger.debug(f"Resolved base session for region {session.region_name}")
        return session

    def _assume_role(self, base: boto3.Session) -> boto3.Session:
        request = build_assume_role_request(
            self.assume_role_arn, self.external_id, self.session_name
        )
        try:
            sts = base.client("sts", config=self._config)
            response = sts.assume_role(**request)
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            raise RoleAssumptionError(
                f"Failed to assume role {self.assume_role_arn}: {error_code}",
                region=base.region_name,
                details={
                    "role_arn": self.assume_role_arn,
                    "external_id_set": self.external_id is not None,
                    "error_code": error_code,
                },
            ) from e
        except NoCredentialsError as e:
            raise CredentialsError(
                "AWS credentials not found for role assumption",
                region=base.region_name,
            ) from e
        except BotoCoreError as e:
            raise RoleAssumptionError(
                f"Failed to assume role {self.assume_role_arn}: {e}",
                region=base.region_name,
                details={"role_arn": self.assume_role_arn},
            ) from e

        credentials = response["Credentials"]
        logger.info(f"Assumed role {self.assume_role_arn}")
        return boto3.Session(
            aws_access_key_id=credentials["AccessKeyId"],
            aws_secret_access_key=credentials["SecretAccessKey"],
            aws_session_token=credentials["SessionToken"],
            region_name=base.region_name,
        )

    def _create_session(self) -> boto3.Session:
        session = self._create_base_session()
        if self.assume_role_arn:
            session = self._assume_role(session)
        return session

    # =========================================================================
    # Service Clients
    # =========================================================================

    def get_client(self, service_name: str) -> Any:
        """
        Get or create a boto3 client for ``service_name`` in this region.

        Parameters
        ----------
        service_name : str
            boto3 service name (e.g. ``"events"``, ``"dynamodb"``).

        Returns
        -------
        botocore.client.BaseClient
            Cached client instance.

        Raises
        ------
        ServiceError
            If the client cannot be created.
        """
        if service_name in self._clients:
            return self._clients[service_name]

        session = self.session
        with self._lock:
            if service_name in self._clients:
                return self._clients[service_name]
            try:
                client = session.client(
                    service_name, region_name=self.region, config=self._config
                )
            except Exception as e:
                logger.exception(f"Failed to create {service_name} client")
                raise ServiceError(
                    f"Failed to create {service_name} client: {e}",
                    service=service_name,
                    region=self.region,
                ) from e
            self._clients[service_name] = client

        logger.debug(f"Created {service_name} client for {self.region}")
        return client

    # =========================================================================
    # Credential and Account Operations
    # =========================================================================

    def validate_credentials(self) -> bool:
        """
        Validate the resolved credentials with STS GetCallerIdentity.

        Raises
        ------
        CredentialsError
            If the credentials are rejected.
        """
        try:
            identity = self.get_client("sts").get_caller_identity()
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            raise CredentialsError(
                "Invalid AWS credentials",
                details={"error_code": error_code},
            ) from e
        except NoCredentialsError as e:
            raise CredentialsError("AWS credentials not found") from e

        logger.info(f"Credentials validated for {identity['Arn']}")
        return True

    def get_caller_identity(self) -> Dict[str, str]:
        """Return the STS caller identity (``Account``, ``Arn``, ``UserId``)."""
        try:
            return self.get_client("sts").get_caller_identity()
        except (ClientError, BotoCoreError) as e:
            raise AWSClientError(f"Failed to get caller identity: {e}") from e

    def get_account_id(self) -> str:
        """Return the 12-digit account ID of the resolved credentials."""
        return self.get_caller_identity()["Account"]

    # =========================================================================
    # Factory Methods
    # =========================================================================

    def with_region(self, region: str) -> AWSClient:
        """
        Derive a client for another region that shares this one's session.

        Credentials (and any assumed role) are resolved once and reused.
        """
        clone = AWSClient(
            region=region,
            profile=self.profile,
            access_key=self.access_key,
            secret_key=self.secret_key,
            session_token=self.session_token,
            assume_role_arn=self.assume_role_arn,
            external_id=self.external_id,
            max_retries=self.max_retries,
            timeout=self.timeout,
            session_name=self.session_name,
        )
        clone._session = self.session
        clone._lock = self._lock
        return clone

    def __enter__(self) -> AWSClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self._clients.clear()
        self._session = None

    def __repr__(self) -> str:
        return (
            f"AWSClient(region={self._region!r}, "
            f"profile={self.profile!r}, "
            f"role={self.assume_role_arn or None!r})"
        )
