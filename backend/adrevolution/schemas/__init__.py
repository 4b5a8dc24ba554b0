"""
Marshmallow schemas for data validation and serialization.

This package contains all validation schemas for the Adrevolution backend:
- user_schema: Sign-up, sign-in, invitation acceptance, profile updates, invitations
- company_schema: Company and company details updates and responses
- settings_schema: Account, business hours, notifications, labour cost, permission, position
- resource_schema: Resource creation, updates, and responses
"""

from adrevolution.schemas.user_schema import (
    SignUpSchema,
    SignInSchema,
    VerifyAccountSchema,
    UserUpdateSchema,
    UserInviteSchema,
    UserResponseSchema,
    sign_up_schema,
    sign_in_schema,
    verify_account_schema,
    user_update_schema,
    user_invite_schema,
    user_response_schema,
    users_response_schema,
)

from adrevolution.schemas.company_schema import (
    CompanyUpdateSchema,
    CompanyDetailsUpdateSchema,
    CompanyResponseSchema,
    company_update_schema,
    company_details_update_schema,
    company_response_schema,
)

from adrevolution.schemas.settings_schema import (
    AccountUpdateSchema,
    BusinessHoursUpdateSchema,
    CommunicationUpdateSchema,
    LabourCostUpdateSchema,
    PermissionUpdateSchema,
    PositionUpdateSchema,
    account_update_schema,
    business_hours_update_schema,
    communication_update_schema,
    labour_cost_update_schema,
    permission_update_schema,
    position_update_schema,
)

from adrevolution.schemas.resource_schema import (
    ResourceCreateSchema,
    ResourceUpdateSchema,
    ResourceResponseSchema,
    resource_create_schema,
    resource_update_schema,
    resource_response_schema,
    resources_response_schema,
)

__all__ = [
    # User schemas
    'SignUpSchema',
    'SignInSchema',
    'VerifyAccountSchema',
    'UserUpdateSchema',
    'UserInviteSchema',
    'UserResponseSchema',
    'sign_up_schema',
    'sign_in_schema',
    'verify_account_schema',
    'user_update_schema',
    'user_invite_schema',
    'user_response_schema',
    'users_response_schema',
    # Company schemas
    'CompanyUpdateSchema',
    'CompanyDetailsUpdateSchema',
    'CompanyResponseSchema',
    'company_update_schema',
    'company_details_update_schema',
    'company_response_schema',
    # Settings schemas
    'AccountUpdateSchema',
    'BusinessHoursUpdateSchema',
    'CommunicationUpdateSchema',
    'LabourCostUpdateSchema',
    'PermissionUpdateSchema',
    'PositionUpdateSchema',
    'account_update_schema',
    'business_hours_update_schema',
    'communication_update_schema',
    'labour_cost_update_schema',
    'permission_update_schema',
    'position_update_schema',
    # Resource schemas
    'ResourceCreateSchema',
    'ResourceUpdateSchema',
    'ResourceResponseSchema',
    'resource_create_schema',
    'resource_update_schema',
    'resource_response_schema',
    'resources_response_schema',
]
