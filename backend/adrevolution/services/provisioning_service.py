"""
ProvisioningService - building the record graph of a new user

A user is only usable once a whole set of dependent records exists: company
membership, account, business hours, notification settings, labour cost,
position and permission. This service creates all of them for the two ways a
user comes into existence:

- Self-registration (register_owner): the user becomes the owner of a brand
  new company, with COMPANY_OWNER position and admin rights.
- Administrator invitation (invite_user): the user joins the inviter's
  company with the requested position, admin flag, labour cost and survey
  preference, and receives an invitation email with a verification token.

Transactions:
- Every record of one provisioning is written in a single transaction; any
  failure rolls back all of them, the User row included.
- The invitation email is sent only after the transaction committed. A
  delivery failure is reported (invitation_sent=False) but does not undo the
  invitation; it can be resent with AuthService.resend_invitation().
"""

import logging
from contextlib import contextmanager
from typing import Dict, Optional, Tuple

from flask import current_app

from adrevolution.extensions import db
from adrevolution.models.company import Company
from adrevolution.models.user import User
from adrevolution.models.user_position import UserPosition
from adrevolution.models.verification_token import VerificationToken
from adrevolution.services.account_service import AccountService
from adrevolution.services.business_hours_service import BusinessHoursService
from adrevolution.services.communication_service import CommunicationService
from adrevolution.services.company_details_service import CompanyDetailsService
from adrevolution.services.company_service import CompanyService
from adrevolution.services.labour_cost_service import LabourCostService
from adrevolution.services.notification_service import NotificationService
from adrevolution.services.permission_service import PermissionService
from adrevolution.services.user_position_service import UserPositionService
from adrevolution.services.user_service import UserService
from adrevolution.utils.database import transaction
from adrevolution.utils.errors import BadRequestError, ConflictError, EmailExistsError, ForbiddenError

logger = logging.getLogger(__name__)


class ProvisioningService:
    """
    Orchestrates the creation of a user and all of their dependent records.

    The step methods below only add and flush; the public entry points own
    the transaction boundary.
    """

    @staticmethod
    @contextmanager
    def _user_transaction(description: str, email: str):
        """
        transaction() for a unit of work that inserts the User row of email.

        When a concurrent registration of the same email wins the race, the
        unique violation is reported as EmailExistsError, not ConflictError.
        """
        try:
            with transaction(description) as session:
                yield session
        except ConflictError as e:
            if UserService.find_by_email(email):
                raise EmailExistsError() from e
            raise

    @staticmethod
    def _create_personal_records(user: User, labour_cost=None, cost_unit=None,
                                 surveys: Optional[bool] = None) -> None:
        AccountService.create(user.id)
        BusinessHoursService.create(user.id)
        CommunicationService.create(user.id, surveys=surveys)
        LabourCostService.create(user.id, labour_cost=labour_cost, cost_unit=cost_unit)

    @staticmethod
    def _grant_position(user: User, company: Company, position_name: str, is_admin: bool) -> None:
        position = UserPositionService.get_or_create(company.id, position_name)
        UserPositionService.assign_user_to_position(user, position)
        PermissionService.create(user.id, is_admin=is_admin)

    @staticmethod
    def _provision_owner_records(user: User, company_name: Optional[str] = None) -> Company:
        """Self-registration steps, run inside the caller's transaction."""
        company = CompanyService.create(user.id, company_name=company_name)
        details = CompanyDetailsService.create(user.id)
        CompanyService.connect_company_details(company, details)
        CompanyService.add_user_to_company(company.id, user.id)

        ProvisioningService._create_personal_records(user)

        position_name = (
            UserPosition.COMPANY_OWNER if company.is_owner(user.id) else UserPosition.MANAGER
        )
        ProvisioningService._grant_position(user, company, position_name, is_admin=True)
        return company

    @staticmethod
    def register_owner(
        email: str,
        password_hash: str,
        password_salt: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        company_name: Optional[str] = None
    ) -> User:
        """
        Create a self-registered user and provision them as a company owner.

        Args:
            email: Login email (normalized to lowercase)
            password_hash, password_salt: Credentials from PasswordService
            first_name, last_name: Optional profile names
            company_name: Optional initial company name

        Returns:
            The committed User

        Raises:
            EmailExistsError: If the email is already registered, including by a
                concurrent sign-up that committed first
            ConflictError: If another unique record already exists

        Business Rules:
            - User row, company, company details, membership, account,
              business hours, communication, labour cost, COMPANY_OWNER
              position and admin permission commit together or not at all
        """
        if UserService.find_by_email(email):
            raise EmailExistsError()

        with ProvisioningService._user_transaction('register user', email):
            user = User(
                email=email,
                password_hash=password_hash,
                password_salt=password_salt,
                first_name=first_name,
                last_name=last_name,
                is_active=True
            )
            db.session.add(user)
            db.session.flush()
            company = ProvisioningService._provision_owner_records(user, company_name)

        logger.info(f"Provisioned owner {user.id} ({user.email}) with company {company.id}")
        return user

    @staticmethod
    def provision_owner(user_id) -> Company:
        """
        Provision an existing user as the owner of a new company.

        Repairs users that exist without a company (scripts/init_db.py
        --provision-user).
        """
        user = UserService.get_user_by_id(user_id)
        with transaction('provision company owner'):
            company = ProvisioningService._provision_owner_records(user)
        return company

    @staticmethod
    def _resolve_target_company(inviter_id, company_id) -> Company:
        company = CompanyService.get_company(inviter_id)
        if company_id is not None and str(company_id) != str(company.id):
            raise ForbiddenError('You can only invite users to your own company')
        return company

    @staticmethod
    def invite_user(inviter_id, data: Dict) -> Tuple[User, bool]:
        """
        Create a user without credentials in the inviter's company.

        Args:
            inviter_id: Authenticated administrator sending the invitation
            data: email (required), profile fields, company_id (must be the
                inviter's company if given), position (default WORKER),
                is_admin, labour_cost, cost_unit, surveys,
                inviter_first_name, inviter_last_name

        Returns:
            Tuple of (User, invitation_sent)

        Raises:
            EmailExistsError: If the email is already registered
            ForbiddenError: If the inviter is not an administrator, or
                company_id names another company
            BadRequestError: If the position or cost unit is invalid

        Business Rules:
            - Nobody can be invited as COMPANY_OWNER
            - All records and the verification token commit together
            - The email is sent after commit; a failure is logged and
              reported as invitation_sent=False
        """
        if not PermissionService.is_admin(inviter_id):
            raise ForbiddenError('Administrator permission required to invite users')

        email = data['email']
        if UserService.find_by_email(email):
            raise EmailExistsError()

        position_name = data.get('position') or UserPosition.WORKER
        if position_name == UserPosition.COMPANY_OWNER:
            raise BadRequestError('Users cannot be invited as company owner')

        inviter = UserService.get_user_by_id(inviter_id)
        company = ProvisioningService._resolve_target_company(inviter_id, data.get('company_id'))

        with ProvisioningService._user_transaction('invite user', email):
            user = User(
                email=email,
                password_hash=None,
                password_salt=None,
                is_active=True,
                created_by=inviter.id,
                **{field: data.get(field) for field in User.PROFILE_FIELDS}
            )
            db.session.add(user)
            db.session.flush()

            CompanyService.add_user_to_company(company.id, user.id)
            ProvisioningService._create_personal_records(
                user,
                labour_cost=data.get('labour_cost'),
                cost_unit=data.get('cost_unit'),
                surveys=data.get('surveys')
            )
            ProvisioningService._grant_position(
                user, company, position_name, is_admin=bool(data.get('is_admin', False))
            )
            verification_token = ProvisioningService.create_verification_token(user)

        logger.info(f"User {user.id} ({user.email}) invited to company {company.id} by {inviter_id}")

        inviter_name = ' '.join(
            part for part in (
                data.get('inviter_first_name') or inviter.first_name,
                data.get('inviter_last_name') or inviter.last_name,
            ) if part
        )
        sent = NotificationService.send_invitation(
            email=user.email,
            token=verification_token.token,
            first_name=user.first_name,
            company_name=company.company_name,
            inviter_name=inviter_name
        )
        if not sent:
            logger.warning(f"Invitation email for user {user.id} was not delivered")
        return user, sent

    @staticmethod
    def create_verification_token(user: User) -> VerificationToken:
        """Add a fresh verification token for user, valid for VERIFICATION_TOKEN_TTL."""
        verification_token = VerificationToken.generate(
            user.id, current_app.config['VERIFICATION_TOKEN_TTL']
        )
        db.session.add(verification_token)
        db.session.flush()
        return verification_token
