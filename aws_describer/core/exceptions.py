"""
Custom Exceptions for AWS Describer
===================================

This module defines the exception hierarchy used throughout the describer
pipeline so that callers can tell a configuration problem from a
credential problem, and an upstream failure from a failing sink.

Exception Hierarchy
-------------------
::

    DescriberError (base)
    ├── ConfigurationError
    ├── AWSClientError
    │   ├── CredentialsError
    │   ├── RoleAssumptionError
    │   ├── RegionError
    │   └── ServiceError
    └── DescribeError
        ├── ResourceFetchError
        ├── SinkError
        ├── PaginationLimitError
        └── DescribeCancelledError
            └── DescribeTimeoutError

Absence-class provider errors ("not found", "validation") never appear in
this hierarchy: the describers translate them into empty results.

Example
-------
>>> from aws_describer.core.exceptions import CredentialsError, RoleAssumptionError
>>>
>>> try:
...     client = AWSClient.from_account_config(config)
...     client.session
... except RoleAssumptionError as e:
...     print(f"Role trust problem: {e}")
... except CredentialsError as e:
...     print(f"Credential problem: {e}")
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class DescriberError(Exception):
    """
    Base exception for all AWS Describer errors.

    Parameters
    ----------
    message : str
        Human-readable error message.
    details : dict, optional
        Additional context about the error.

    Attributes
    ----------
    message : str
        The error message.
    details : dict
        Additional error details.

    Example
    -------
    >>> raise DescriberError("Something went wrong", details={"code": 500})
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for serialization.

        Returns
        -------
        dict
            Dictionary representation of the error.
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(DescriberError):
    """
    Raised when account or describer configuration is malformed.

    Always raised before any network call is made.

    Example
    -------
    >>> raise ConfigurationError(
    ...     "Invalid account configuration",
    ...     details={"field": "regions", "error": "Input should be a valid list"}
    ... )
    """

    pass


# =============================================================================
# AWS Client Exceptions
# =============================================================================


class AWSClientError(DescriberError):
    """
    Base exception for AWS client-related errors.

    Parameters
    ----------
    message : str
        Human-readable error message.
    service : str, optional
        The AWS service that caused the error.
    region : str, optional
        The AWS region where the error occurred.
    stage : str, optional
        Which resolution stage failed ("resolve" or "assume_role").
    details : dict, optional
        Additional context about the error.
    """

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        region: Optional[str] = None,
        stage: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.service = service
        self.region = region
        self.stage = stage
        full_details = details or {}
        if service:
            full_details["service"] = service
        if region:
            full_details["region"] = region
        if stage:
            full_details["stage"] = stage
        super().__init__(message, full_details)


class CredentialsError(AWSClientError):
    """
    Raised when AWS credentials cannot be resolved or are invalid.

    Example
    -------
    >>> raise CredentialsError(
    ...     "AWS credentials not found",
    ...     stage="resolve",
    ...     details={"hint": "Set AWS_ACCESS_KEY_ID or configure a profile"}
    ... )
    """

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("stage", "resolve")
        super().__init__(message, **kwargs)


class RoleAssumptionError(AWSClientError):
    """
    Raised when the role-assumption hop fails.

    Distinct from :class:`CredentialsError`: the base credentials resolved,
    but STS refused the role (trust policy, external ID, permissions).

    Example
    -------
    >>> raise RoleAssumptionError(
    ...     "Failed to assume role",
    ...     details={"role_arn": "arn:aws:iam::123456789012:role/Reader"}
    ... )
    """

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("stage", "assume_role")
        super().__init__(message, **kwargs)


class RegionError(AWSClientError):
    """Raised when there's an issue with the specified AWS region."""

    pass


class ServiceError(AWSClientError):
    """
    Raised when a service client cannot be created.

    Example
    -------
    >>> raise ServiceError(
    ...     "Failed to create events client",
    ...     service="events",
    ...     region="us-east-1"
    ... )
    """

    pass


# =============================================================================
# Describe Exceptions
# =============================================================================


class DescribeError(DescriberError):
    """
    Base exception for errors raised while describing resources.

    Parameters
    ----------
    message : str
        Human-readable error message.
    resource_type : str, optional
        The resource type being described.
    region : str, optional
        The region being described.
    details : dict, optional
        Additional context about the error.

    Notes
    -----
    When a describe call raises, any resources already delivered to a
    streaming sink stay delivered. Treat them as a prefix of the result,
    never as the complete set.
    """

    def __init__(
        self,
        message: str,
        resource_type: Optional[str] = None,
        region: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.resource_type = resource_type
        self.region = region
        full_details = details or {}
        if resource_type:
            full_details["resource_type"] = resource_type
        if region:
            full_details["region"] = region
        super().__init__(message, full_details)


class ResourceFetchError(DescribeError):
    """
    Raised when an upstream call fails with a non-absence error.

    Parameters
    ----------
    message : str
        Human-readable error message.
    error_code : str, optional
        Provider error code (e.g. ``ThrottlingException``).
    operation : str, optional
        The API operation that failed (e.g. ``list_event_buses``).
    **kwargs
        Passed to :class:`DescribeError`.

    Example
    -------
    >>> raise ResourceFetchError(
    ...     "Failed to list event buses",
    ...     error_code="AccessDeniedException",
    ...     operation="list_event_buses",
    ...     resource_type="AWS::Events::EventBus",
    ...     region="us-east-1"
    ... )
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        operation: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        self.error_code = error_code
        self.operation = operation
        details = kwargs.pop("details", None) or {}
        if error_code:
            details["error_code"] = error_code
        if operation:
            details["operation"] = operation
        super().__init__(message, details=details, **kwargs)


class SinkError(DescribeError):
    """Raised when the streaming sink fails to accept a resource."""

    pass


class PaginationLimitError(DescribeError):
    """
    Raised when a traversal exceeds its configured page ceiling.

    Example
    -------
    >>> raise PaginationLimitError(
    ...     "Pagination exceeded 1000 pages",
    ...     details={"max_pages": 1000}
    ... )
    """

    pass


class DescribeCancelledError(DescribeError):
    """Raised when a describe call observes a cancellation request."""

    pass


class DescribeTimeoutError(DescribeCancelledError):
    """
    Raised when a describe call runs past its deadline.

    Example
    -------
    >>> raise DescribeTimeoutError(
    ...     "Describe deadline exceeded",
    ...     details={"timeout_seconds": 300}
    ... )
    """

    pass
