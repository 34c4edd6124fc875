"""Application services for identity management."""

from idlink.application.services.credential_service import CredentialService
from idlink.application.services.identity_reconciliation_service import (
    IdentityReconciliationService,
    ReconciliationResult,
)
from idlink.application.services.session_service import SessionService

__all__ = [
    "CredentialService",
    "IdentityReconciliationService",
    "ReconciliationResult",
    "SessionService",
]
