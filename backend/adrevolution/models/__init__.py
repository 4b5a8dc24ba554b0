"""
SQLAlchemy models for the Adrevolution backend.

This package contains all database models:
- BaseModel: Abstract base class with common fields
- User: User accounts and credentials
- Company: Tenant root, one per owning user
- CompanyMembership: User-to-company membership (one company per user)
- CompanyDetails: Onboarding metadata for a company
- Account, BusinessHours, Communication, LabourCost, Permission: per-user records
  created during provisioning
- UserPosition: Company-scoped role referenced by User.position_id
- VerificationToken: Single-use invitation tokens
- Resource: Company assets
"""

from adrevolution.models.base import BaseModel
from adrevolution.models.user import User
from adrevolution.models.company import Company
from adrevolution.models.company_membership import CompanyMembership
from adrevolution.models.company_details import CompanyDetails
from adrevolution.models.account import Account
from adrevolution.models.business_hours import BusinessHours
from adrevolution.models.communication import Communication
from adrevolution.models.labour_cost import LabourCost
from adrevolution.models.user_position import UserPosition
from adrevolution.models.permission import Permission
from adrevolution.models.verification_token import VerificationToken
from adrevolution.models.resource import Resource

__all__ = [
    'BaseModel',
    'User',
    'Company',
    'CompanyMembership',
    'CompanyDetails',
    'Account',
    'BusinessHours',
    'Communication',
    'LabourCost',
    'UserPosition',
    'Permission',
    'VerificationToken',
    'Resource',
]
