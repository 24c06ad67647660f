"""
identity_orchestrator.clients.cognito_federation

Identity federation into temporary cloud storage credentials.

Responsibilities:
- Exchange the Provider B id token for scoped credentials through a Cognito identity pool.
- Return the credentials as a storage context the caller carries for later S3 calls.

The identity pool trusts Provider B as an OIDC provider registered under its
domain, so the `Logins` map is keyed by that domain.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import boto3
from botocore import UNSIGNED
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from identity_orchestrator.auth.errors import FederationError
from identity_orchestrator.observability.logging import get_logger

log = get_logger(__name__)

CognitoClientFactory = Callable[[str], Any]


@dataclass(frozen=True, slots=True)
class FederationRequest:
    auth0_user: dict[str, Any]
    auth0_id_token: str = field(repr=False)
    auth0_id_token_exp: int
    auth0_domain: str
    auth0_access_token: str = field(repr=False)
    cognito_region: str
    cognito_identity_pool_id: str
    s3_bucket: str
    s3_bucket_region: str


@dataclass(frozen=True, slots=True)
class StorageCredentials:
    identity_id: str
    access_key_id: str
    secret_key: str = field(repr=False)
    session_token: str = field(repr=False)
    expiration: datetime | None = None


@dataclass(frozen=True, slots=True)
class FederatedStorage:
    """
    Active credential context for the user's storage bucket.
    """

    bucket: str
    region: str
    credentials: StorageCredentials

    def session(self) -> boto3.Session:
        return boto3.Session(
            aws_access_key_id=self.credentials.access_key_id,
            aws_secret_access_key=self.credentials.secret_key,
            aws_session_token=self.credentials.session_token,
            region_name=self.region,
        )

    def s3_client(self) -> Any:
        return self.session().client("s3")


def _unsigned_cognito_client(region: str) -> Any:
    # GetId/GetCredentialsForIdentity are public APIs; no AWS credentials needed.
    return boto3.client("cognito-identity", region_name=region, config=Config(signature_version=UNSIGNED))


class IdentityFederationClient:
    def __init__(self, *, client_factory: CognitoClientFactory | None = None) -> None:
        self._client_factory = client_factory or _unsigned_cognito_client

    async def federate(self, request: FederationRequest) -> FederatedStorage:
        if request.auth0_id_token_exp <= int(time.time()):
            raise FederationError("Identity token expired before federation")

        try:
            credentials = await asyncio.to_thread(self._exchange, request)
        except (ClientError, BotoCoreError) as e:
            raise FederationError(f"Failed to get storage credentials: {e}") from e

        storage = FederatedStorage(
            bucket=request.s3_bucket,
            region=request.s3_bucket_region,
            credentials=credentials,
        )
        log.info(
            "storage_credentials_federated",
            subject=request.auth0_user.get("sub"),
            identity_id=credentials.identity_id,
            bucket=request.s3_bucket,
        )
        return storage

    def _exchange(self, request: FederationRequest) -> StorageCredentials:
        client = self._client_factory(request.cognito_region)
        logins = {request.auth0_domain: request.auth0_id_token}

        identity = client.get_id(IdentityPoolId=request.cognito_identity_pool_id, Logins=logins)
        identity_id = identity["IdentityId"]

        response = client.get_credentials_for_identity(IdentityId=identity_id, Logins=logins)
        creds = response["Credentials"]
        return StorageCredentials(
            identity_id=identity_id,
            access_key_id=creds["AccessKeyId"],
            secret_key=creds["SecretKey"],
            session_token=creds["SessionToken"],
            expiration=creds.get("Expiration"),
        )


# --- Module Notes -----------------------------------------------------------
# Credentials are never persisted or kept on the client; every authentication
# cycle federates again and holds its own `FederatedStorage`.
