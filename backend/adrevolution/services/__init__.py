"""
Services Package - Business Logic Layer

This package contains service classes that implement business logic for the application.
Services sit between routes (controllers) and models (data layer), handling complex
operations, validation, and orchestration.

Architecture:
- Routes call service methods instead of directly manipulating models
- Services raise typed errors from adrevolution.utils.errors
- Entity services' create methods only flush; the caller owns the transaction
- ProvisioningService composes the entity services under one transaction

Available Services:
- AuthService: Sign-up, sign-in, sign-out, session, invitation acceptance
- ProvisioningService: Owner registration and user invitation record graphs
- UserService: User lookups, profile updates, deletion
- PasswordService, TokenService: Credential hashing and session tokens
- NotificationService: Invitation email delivery
- CompanyService, CompanyDetailsService, AccountService, BusinessHoursService,
  CommunicationService, LabourCostService, PermissionService,
  UserPositionService, ResourceService: One entity each
"""

from adrevolution.services.account_service import AccountService
from adrevolution.services.auth_service import AuthService
from adrevolution.services.business_hours_service import BusinessHoursService
from adrevolution.services.communication_service import CommunicationService
from adrevolution.services.company_details_service import CompanyDetailsService
from adrevolution.services.company_service import CompanyService
from adrevolution.services.labour_cost_service import LabourCostService
from adrevolution.services.notification_service import NotificationService
from adrevolution.services.password_service import PasswordService
from adrevolution.services.permission_service import PermissionService
from adrevolution.services.provisioning_service import ProvisioningService
from adrevolution.services.resource_service import ResourceService
from adrevolution.services.token_service import TokenService
from adrevolution.services.user_position_service import UserPositionService
from adrevolution.services.user_service import UserService

__all__ = [
    'AccountService',
    'AuthService',
    'BusinessHoursService',
    'CommunicationService',
    'CompanyDetailsService',
    'CompanyService',
    'LabourCostService',
    'NotificationService',
    'PasswordService',
    'PermissionService',
    'ProvisioningService',
    'ResourceService',
    'TokenService',
    'UserPositionService',
    'UserService',
]
