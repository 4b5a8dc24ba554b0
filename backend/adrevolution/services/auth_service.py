"""
AuthService - Business Logic for Authentication

This service drives a user's credential lifecycle:

- Unregistered -> Registered: sign_up() hashes the password, creates the
  user, provisions their company and issues a session token.
- Registered -> Authenticated: sign_in() checks the password and issues a
  session token.
- Invited -> Activated: verify_user_and_set_password() consumes a
  verification token, stores the new credentials and issues a session token.
- Authenticated -> Unauthenticated: sign_out() is stateless; the route
  clears the session cookie and tokens stay valid until they expire.

Token Management:
- Access tokens: one day (configurable via JWT_ACCESS_TOKEN_EXPIRES)
- Verification tokens: 72 hours (configurable via VERIFICATION_TOKEN_TTL_HOURS)
"""

import logging
from typing import Any, Dict, Optional, Tuple

from adrevolution.models.user import User
from adrevolution.models.verification_token import VerificationToken
from adrevolution.services.company_service import CompanyService
from adrevolution.services.notification_service import NotificationService
from adrevolution.services.password_service import PasswordService
from adrevolution.services.permission_service import PermissionService
from adrevolution.services.provisioning_service import ProvisioningService
from adrevolution.services.token_service import TokenService
from adrevolution.services.user_service import UserService
from adrevolution.utils.database import transaction
from adrevolution.utils.errors import (
    BadRequestError,
    EmailExistsError,
    InvalidTokenError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)


class AuthService:
    """
    Service class for authentication operations.

    All methods are static since there's no instance state to maintain.
    """

    @staticmethod
    def sign_up(
        email: str,
        password: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        company_name: Optional[str] = None
    ) -> Tuple[User, str]:
        """
        Register a new user and provision their company.

        Args:
            email: User's email address (normalized to lowercase)
            password: Plain text password
            first_name, last_name: Optional profile names
            company_name: Optional initial company name

        Returns:
            Tuple of (User, access_token)

        Raises:
            EmailExistsError: If a user with this email already exists

        Example:
            user, token = AuthService.sign_up('owner@example.com', 'SecurePass123')
        """
        if UserService.find_by_email(email):
            logger.warning(f"Sign-up refused: email already registered: {email}")
            raise EmailExistsError()

        salt = PasswordService.get_salt()
        password_hash = PasswordService.get_hash(password, salt)

        user = ProvisioningService.register_owner(
            email=email,
            password_hash=password_hash,
            password_salt=salt,
            first_name=first_name,
            last_name=last_name,
            company_name=company_name
        )

        logger.info(f"User signed up: {user.id} ({user.email})")
        return user, TokenService.issue(user)

    @staticmethod
    def sign_in(email: str, password: str) -> Tuple[User, str]:
        """
        Authenticate a user with email and password.

        Returns:
            Tuple of (User, access_token)

        Raises:
            UnauthorizedError: If the email is unknown, the user has not set a
                password yet, the account is inactive, or the password is wrong

        Business Rules:
            - last_login is updated only on success
            - The same error is returned for unknown email and wrong password
        """
        user = UserService.find_by_email(email)
        if not user or not user.has_credentials():
            logger.warning(f"Sign-in failed: unknown email or no credentials: {email}")
            raise UnauthorizedError('Invalid email or password')

        if not PasswordService.verify(password, user.password_salt, user.password_hash):
            logger.warning(f"Sign-in failed: wrong password for user {user.id}")
            raise UnauthorizedError('Invalid email or password')

        if not user.is_active:
            logger.warning(f"Sign-in failed: inactive account {user.id}")
            raise UnauthorizedError('Account is inactive')

        UserService.update_last_login(user)
        logger.info(f"User signed in: {user.id}")
        return user, TokenService.issue(user)

    @staticmethod
    def sign_out(user_id: Optional[str] = None) -> None:
        # Stateless: the route clears the cookie, nothing is stored server-side
        logger.info(f"User signed out: {user_id or 'anonymous'}")

    @staticmethod
    def get_session(claims: Dict[str, Any]) -> Dict[str, Any]:
        """Public view of decoded token claims: id, email, iat, exp."""
        return {
            'id': claims.get('id') or claims.get('sub'),
            'email': claims.get('email'),
            'iat': claims.get('iat'),
            'exp': claims.get('exp'),
        }

    @staticmethod
    def _find_valid_token(token: str) -> VerificationToken:
        """
        Look up a verification token that has not expired.

        Expired tokens are deleted on sight.

        Raises:
            InvalidTokenError: If the token is unknown or expired
        """
        verification_token = UserService.find_verification_token(token)
        if not verification_token:
            raise InvalidTokenError()

        if verification_token.is_expired():
            logger.warning(f"Expired verification token used for user {verification_token.user_id}")
            with transaction('discard expired verification token'):
                UserService.delete_verification_token(verification_token)
            raise InvalidTokenError()

        return verification_token

    @staticmethod
    def verify_user_and_set_password(token: str, password: str) -> Dict[str, Any]:
        """
        Accept an invitation: set the user's password and consume the token.

        Args:
            token: Verification token from the invitation link
            password: New plain text password

        Returns:
            {'message', 'access_token', 'user': {'email', 'first_name', 'last_name'}}

        Raises:
            InvalidTokenError: If the token is unknown or expired

        Business Rules:
            - The token is single-use: it is deleted in the same transaction
              that stores the credentials
        """
        verification_token = AuthService._find_valid_token(token)
        user = UserService.get_user_by_id(verification_token.user_id)

        salt = PasswordService.get_salt()
        password_hash = PasswordService.get_hash(password, salt)

        with transaction('verify user'):
            UserService.update_user_password(user, password_hash, salt)
            UserService.delete_verification_token(verification_token)

        logger.info(f"User {user.id} verified and password set")
        return {
            'message': 'Account verified successfully',
            'access_token': TokenService.issue(user),
            'user': {
                'email': user.email,
                'first_name': user.first_name,
                'last_name': user.last_name,
            },
        }

    @staticmethod
    def get_user_by_verification_token(token: str) -> Dict[str, Any]:
        """
        Preview of the invited user for the accept-invitation page.

        Returns:
            {'email', 'first_name', 'last_name', 'company_name'}

        Raises:
            InvalidTokenError: If the token is unknown or expired
        """
        verification_token = AuthService._find_valid_token(token)
        user = UserService.get_user_by_id(verification_token.user_id)
        company = CompanyService.find_company_for_user(user.id)
        return {
            'email': user.email,
            'first_name': user.first_name,
            'last_name': user.last_name,
            'company_name': company.company_name if company else None,
        }

    @staticmethod
    def send_verification_email(user: User, company_name: Optional[str], inviter_name: str) -> bool:
        """
        Issue a fresh verification token for user and email it.

        Returns:
            True if the email was delivered
        """
        with transaction('create verification token'):
            VerificationToken.query.filter_by(user_id=user.id).delete()
            verification_token = ProvisioningService.create_verification_token(user)

        return NotificationService.send_invitation(
            email=user.email,
            token=verification_token.token,
            first_name=user.first_name,
            company_name=company_name,
            inviter_name=inviter_name
        )

    @staticmethod
    def resend_invitation(requester_id, user_id) -> bool:
        """
        Replace the verification token of a pending user and email it again.

        Raises:
            BadRequestError: If the user already set a password
            ForbiddenError: If the requester may not manage this user
        """
        PermissionService.ensure_can_manage(requester_id, user_id)
        user = UserService.get_user_by_id(user_id)
        if user.has_credentials():
            raise BadRequestError('User has already accepted the invitation')

        requester = UserService.get_user_by_id(requester_id)
        company = CompanyService.get_company(user.id)
        return AuthService.send_verification_email(
            user, company.company_name, requester.get_full_name()
        )
