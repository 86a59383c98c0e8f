from src.app.services.account_service import AccountService
from src.app.services.admin_service import AdminService
from src.app.services.application_service import ApplicationService
from src.app.services.approval_service import ApprovalResult, ApprovalService
from src.app.services.audit_service import AuditService
from src.app.services.catalog_service import CatalogService
from src.app.services.invitation_service import InvitationService
from src.app.services.registration_service import RegistrationService
from src.app.services.verification_service import MemberResolution, VerificationService

__all__ = [
    "AccountService",
    "AdminService",
    "ApplicationService",
    "ApprovalResult",
    "ApprovalService",
    "AuditService",
    "CatalogService",
    "InvitationService",
    "MemberResolution",
    "RegistrationService",
    "VerificationService",
]
