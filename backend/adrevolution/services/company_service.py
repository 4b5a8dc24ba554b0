"""
CompanyService - Business Logic for Companies (tenants)

Key responsibilities:
- Create the company of a newly registered owner (one company per owner)
- Resolve the company a user works in (as owner or as member)
- Update company profile, address and locale settings
- Manage company membership and list company users

Creation and membership methods only add and flush: they run inside the
provisioning transaction and never commit on their own. Patch methods own
their transaction.
"""

import logging
from typing import Dict, List

from adrevolution.extensions import db
from adrevolution.models.base import parse_uuid
from adrevolution.models.company import Company
from adrevolution.models.company_details import CompanyDetails
from adrevolution.models.company_membership import CompanyMembership
from adrevolution.models.user import User
from adrevolution.utils.database import transaction
from adrevolution.utils.errors import BadRequestError, ConflictError, NotFoundError

logger = logging.getLogger(__name__)


class CompanyService:
    """
    Service class for company operations.

    All methods are static since there's no instance state to maintain.
    """

    @staticmethod
    def create(owner_id, company_name=None) -> Company:
        """
        Create the company owned by owner_id.

        Args:
            owner_id: UUID of the owning user
            company_name: Optional initial name

        Returns:
            The new Company (flushed, not committed)

        Raises:
            ConflictError: If the user already owns a company

        Business Rules:
            - One company per owner; the unique constraint on owner_id backs
              this check against concurrent sign-ups
            - The owner is not made a member here; see add_user_to_company
        """
        owner_id = parse_uuid(owner_id)
        if Company.find_by_owner(owner_id):
            logger.warning(f"Company creation refused: user {owner_id} already owns a company")
            raise ConflictError('Company already exists for this user.')

        company = Company(owner_id=owner_id, company_name=company_name)
        db.session.add(company)
        db.session.flush()
        logger.info(f"Company created: {company.id} for owner {owner_id}")
        return company

    @staticmethod
    def find_company_for_user(user_id):
        """Company owned by user_id, else the company user_id is a member of, else None."""
        user_id = parse_uuid(user_id)
        company = Company.find_by_owner(user_id)
        if company:
            return company
        membership = CompanyMembership.find_by_user(user_id)
        return membership.company if membership else None

    @staticmethod
    def get_company(user_id) -> Company:
        """
        Get the company a user works in.

        Raises:
            NotFoundError: If the user neither owns nor belongs to a company
        """
        company = CompanyService.find_company_for_user(user_id)
        if not company:
            raise NotFoundError.for_resource('Company', user_id)
        return company

    @staticmethod
    def get_company_by_id(company_id) -> Company:
        company_uuid = parse_uuid(company_id)
        company = db.session.get(Company, company_uuid) if company_uuid else None
        if not company:
            raise NotFoundError.for_resource('Company', company_id)
        return company

    @staticmethod
    def patch_company(user_id, data: Dict) -> Company:
        """
        Update the company of user_id.

        None values are ignored, so clients may send partial objects.

        Raises:
            BadRequestError: If no field is provided
            NotFoundError: If the user has no company
        """
        changes = {k: v for k, v in (data or {}).items() if v is not None}
        if not changes:
            raise BadRequestError('No data provided for update')

        company = CompanyService.get_company(user_id)
        with transaction('update company'):
            updated_fields = company.update_from_dict(changes, Company.PATCHABLE_FIELDS)

        logger.info(f"Company {company.id} updated: {', '.join(updated_fields)}")
        return company

    @staticmethod
    def connect_company_details(company: Company, details: CompanyDetails) -> Company:
        company.company_details_id = details.id
        db.session.flush()
        logger.debug(f"Company details {details.id} linked to company {company.id}")
        return company

    @staticmethod
    def add_user_to_company(company_id, user_id) -> CompanyMembership:
        """
        Make user_id a member of company_id.

        Raises:
            ConflictError: If the user already belongs to a company
        """
        company_id = parse_uuid(company_id)
        user_id = parse_uuid(user_id)
        existing = CompanyMembership.find_by_user(user_id)
        if existing:
            raise ConflictError(
                'User already belongs to a company',
                {'company_id': str(existing.company_id)}
            )

        membership = CompanyMembership(user_id=user_id, company_id=company_id)
        db.session.add(membership)
        db.session.flush()
        logger.info(f"User {user_id} added to company {company_id}")
        return membership

    @staticmethod
    def get_users_of_company(user_id) -> List[User]:
        """List the users of the company user_id works in, ordered by sign-up."""
        company = CompanyService.get_company(user_id)
        return (
            User.query
            .join(CompanyMembership, CompanyMembership.user_id == User.id)
            .filter(CompanyMembership.company_id == company.id)
            .order_by(User.created_at)
            .all()
        )

    @staticmethod
    def share_company(user_id, other_user_id) -> bool:
        company = CompanyService.find_company_for_user(user_id)
        other = CompanyService.find_company_for_user(other_user_id)
        return company is not None and other is not None and company.id == other.id
