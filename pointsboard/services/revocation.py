"""Revocation ledger: append-only list of token strings that must be rejected."""

import logging

from pointsboard.models import RevokedToken
from pointsboard.services.store import CredentialStore

logger = logging.getLogger(__name__)


class RevocationLedger:
    """
    Exact-string revocation checks on top of the credential store.

    There is no un-revoke: once a string is recorded it stays rejected,
    whatever its signature or expiry. Revoking the same string again just
    appends another record.
    """

    def __init__(self, store: CredentialStore) -> None:
        self.store = store

    def is_revoked(self, token: str) -> bool:
        return self.store.is_token_revoked(token)

    def revoke(self, token: str, owner_label: str) -> RevokedToken:
        record = self.store.insert_revocation(token, owner_label)
        logger.info(
            "Token revoked",
            extra={"revocation_id": record.id, "user_label": owner_label},
        )
        return record
