"""
UserService - Business Logic for User Management

This service handles user records outside of provisioning: lookups, profile
updates, credential updates, verification-token bookkeeping and deletion.

Key responsibilities:
- Fetch user by ID or email
- Update user profile information
- Record sign-in time and password changes
- Look up and consume verification tokens
- Delete a user together with every per-user record

Architecture:
- Service layer sits between routes (controllers) and models (data layer)
- Provisioning of new users lives in ProvisioningService
- Errors are raised as typed AppError subclasses (see utils/errors.py)
"""

import logging
from typing import Dict, List, Optional

from adrevolution.extensions import db
from adrevolution.models.account import Account
from adrevolution.models.base import parse_uuid, utcnow
from adrevolution.models.business_hours import BusinessHours
from adrevolution.models.communication import Communication
from adrevolution.models.company import Company
from adrevolution.models.company_membership import CompanyMembership
from adrevolution.models.labour_cost import LabourCost
from adrevolution.models.permission import Permission
from adrevolution.models.user import User
from adrevolution.models.verification_token import VerificationToken
from adrevolution.services.company_service import CompanyService
from adrevolution.services.permission_service import PermissionService
from adrevolution.utils.database import transaction
from adrevolution.utils.errors import BadRequestError, ForbiddenError, NotFoundError

logger = logging.getLogger(__name__)


class UserService:
    """
    Service class for user management operations.

    All methods are static since there's no instance state to maintain.
    """

    @staticmethod
    def find_by_email(email: str) -> Optional[User]:
        return User.find_by_email(email)

    @staticmethod
    def get_user_by_id(user_id) -> User:
        """
        Fetch user by UUID.

        Returns both active and inactive users (caller should check is_active if needed).

        Raises:
            NotFoundError: If no user has this id (or the id is not a UUID)
        """
        user_uuid = parse_uuid(user_id)
        user = db.session.get(User, user_uuid) if user_uuid else None
        if not user:
            logger.warning(f"User not found: {user_id}")
            raise NotFoundError.for_resource('User', user_id)
        return user

    @staticmethod
    def get_user_details(user_id) -> Dict:
        """
        Profile of a user together with the company they work in.

        Returns:
            User dictionary plus 'company_id' (None if the user has no company)
        """
        user = UserService.get_user_by_id(user_id)
        company = CompanyService.find_company_for_user(user.id)
        details = user.to_dict()
        details['company_id'] = str(company.id) if company else None
        return details

    @staticmethod
    def get_users_of_company(user_id) -> List[User]:
        """Colleagues of user_id, the user included; NotFoundError without a company."""
        return CompanyService.get_users_of_company(user_id)

    @staticmethod
    def patch_user(user_id, data: Dict) -> User:
        """
        Update profile fields of a user.

        Only User.PROFILE_FIELDS may change here: email and credentials are
        never updated through this method.

        Raises:
            BadRequestError: If no profile field is provided
            NotFoundError: If the user does not exist
        """
        changes = {
            k: v for k, v in (data or {}).items()
            if v is not None and k in User.PROFILE_FIELDS
        }
        if not changes:
            raise BadRequestError('No data provided for update')

        user = UserService.get_user_by_id(user_id)
        with transaction('update user'):
            updated_fields = user.update_from_dict(changes, User.PROFILE_FIELDS)

        logger.info(f"User {user.id} updated: {', '.join(updated_fields)}")
        return user

    @staticmethod
    def update_last_login(user: User) -> User:
        with transaction('update last login'):
            user.last_login = utcnow()
        return user

    @staticmethod
    def update_user_password(user: User, password_hash: str, password_salt: str) -> User:
        """Store new credentials on user inside the caller's transaction."""
        user.password_hash = password_hash
        user.password_salt = password_salt
        db.session.flush()
        logger.info(f"Credentials updated for user {user.id}")
        return user

    @staticmethod
    def find_verification_token(token: str) -> Optional[VerificationToken]:
        return VerificationToken.find_by_token(token)

    @staticmethod
    def delete_verification_token(verification_token: VerificationToken) -> None:
        db.session.delete(verification_token)
        db.session.flush()

    @staticmethod
    def delete_user(user_id, requester_id) -> None:
        """
        Delete a user and every per-user record.

        Args:
            user_id: User to delete
            requester_id: Authenticated user asking for the deletion

        Raises:
            NotFoundError: If the user does not exist
            ForbiddenError: If the user owns a company, or the requester is
                neither the user nor an administrator of the same company

        Business Rules:
            - Company owners cannot be deleted (the company would be orphaned)
            - Verification tokens, labour cost, communication settings,
              permission, business hours, account and membership are removed
              in the same transaction as the user row
        """
        logger.info(f"Request to delete user {user_id} by requester {requester_id}")

        user = UserService.get_user_by_id(user_id)
        if Company.find_by_owner(user.id):
            raise ForbiddenError('You cannot delete the owner of the company.')

        PermissionService.ensure_can_manage(requester_id, user.id)

        with transaction('delete user'):
            VerificationToken.query.filter_by(user_id=user.id).delete()
            LabourCost.query.filter_by(user_id=user.id).delete()
            Communication.query.filter_by(user_id=user.id).delete()
            Permission.query.filter_by(user_id=user.id).delete()
            BusinessHours.query.filter_by(owner_id=user.id).delete()
            Account.query.filter_by(owner_id=user.id).delete()
            CompanyMembership.query.filter_by(user_id=user.id).delete()
            db.session.delete(user)

        logger.info(f"User {user_id} deleted by {requester_id}")
