"""
CompanyDetailsService - onboarding metadata of a company.

Declaring a transport industry seeds the company's starter resources once.
"""

import logging
from typing import Dict, Optional

from adrevolution.extensions import db
from adrevolution.models.base import parse_uuid
from adrevolution.models.company_details import CompanyDetails
from adrevolution.models.resource import Resource
from adrevolution.services.company_service import CompanyService
from adrevolution.services.resource_service import ResourceService, is_transport_industry
from adrevolution.utils.database import transaction
from adrevolution.utils.errors import BadRequestError, ConflictError, NotFoundError

logger = logging.getLogger(__name__)


class CompanyDetailsService:

    @staticmethod
    def create(owner_id) -> CompanyDetails:
        """
        Create empty company details for owner_id.

        Raises:
            ConflictError: If details already exist for the owner
        """
        owner_id = parse_uuid(owner_id)
        if CompanyDetails.find_by_owner(owner_id):
            raise ConflictError('Company details already exist for this user')

        details = CompanyDetails(owner_id=owner_id)
        db.session.add(details)
        db.session.flush()
        logger.info(f"Company details created for owner {owner_id}")
        return details

    @staticmethod
    def get(user_id) -> CompanyDetails:
        """Details of the company user_id works in."""
        company = CompanyService.get_company(user_id)
        if not company.company_details_id:
            raise NotFoundError.for_resource('Company details', company.id)
        return db.session.get(CompanyDetails, company.company_details_id)

    @staticmethod
    def patch(user_id, data: Dict) -> CompanyDetails:
        """
        Update company details.

        When the industry becomes a transport industry and the company has no
        resources yet, the default resources for that industry are created in
        the same transaction.

        Raises:
            BadRequestError: If no field is provided
            NotFoundError: If the user's company has no details
        """
        changes = {k: v for k, v in (data or {}).items() if v is not None}
        if not changes:
            raise BadRequestError('No data provided for update')

        company = CompanyService.get_company(user_id)
        details = CompanyDetailsService.get(user_id)

        with transaction('update company details'):
            updated_fields = details.update_from_dict(changes, CompanyDetails.PATCHABLE_FIELDS)
            if 'display_business_hours' in changes:
                company.display_business_hours = changes['display_business_hours']
                updated_fields.append('display_business_hours')

            industry = changes.get('industry')
            if is_transport_industry(industry):
                has_resources = Resource.query.filter_by(company_id=company.id).first() is not None
                if not has_resources:
                    ResourceService.create_default_resources_for_company(company.id, industry)

        logger.info(f"Company details {details.id} updated: {', '.join(updated_fields)}")
        return details

    @staticmethod
    def get_industry_by_company_id(company_id) -> Optional[str]:
        company = CompanyService.get_company_by_id(company_id)
        if not company.company_details_id:
            raise NotFoundError.for_resource('Company details', company_id)
        return db.session.get(CompanyDetails, company.company_details_id).industry
