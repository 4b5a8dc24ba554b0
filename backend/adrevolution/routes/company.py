"""
Company Blueprint - Company profile and team listing.

- GET /company - Company the current user owns or works in
- PATCH /company - Update company profile (admin)
- GET /company/users - Members of the current user's company
- GET /company-details - Onboarding details of the company
- PATCH /company-details - Update details (admin); a transport industry
  seeds the default resources
- GET /company-details/industry - Industry of the company
"""

import logging
from flask import Blueprint, request, g
from marshmallow import ValidationError

from adrevolution.schemas.company_schema import (
    company_update_schema,
    company_details_update_schema,
    company_response_schema,
)
from adrevolution.schemas.user_schema import users_response_schema
from adrevolution.services.company_details_service import CompanyDetailsService
from adrevolution.services.company_service import CompanyService
from adrevolution.services.user_service import UserService
from adrevolution.utils.decorators import jwt_required_custom, admin_required
from adrevolution.utils.responses import ok, validation_error

logger = logging.getLogger(__name__)

company_bp = Blueprint('company', __name__)


@company_bp.route('/company', methods=['GET'])
@jwt_required_custom
def get_company():
    company = CompanyService.get_company(g.user_id)
    return ok(company_response_schema.dump(company), 'Company retrieved successfully')


@company_bp.route('/company', methods=['PATCH'])
@jwt_required_custom
@admin_required
def update_company():
    """
    Update the company of the current user.

    **Request Body** (all optional):
        {
            "company_name": "Acme Freight",
            "timezone": "America/Toronto",
            "first_day_of_week": "MONDAY",
            "display_business_hours": true
        }

    **Response**:
        200 OK: Updated company
        400 Bad Request: Validation error or empty body
        403 Forbidden: Not an administrator
    """
    try:
        data = company_update_schema.load(request.get_json(silent=True) or {})
    except ValidationError as err:
        return validation_error('Invalid company data', err.messages)

    company = CompanyService.patch_company(g.user_id, data)
    return ok(company_response_schema.dump(company), 'Company updated successfully')


@company_bp.route('/company/users', methods=['GET'])
@jwt_required_custom
def get_company_users():
    users = UserService.get_users_of_company(g.user_id)
    return ok(users_response_schema.dump(users), 'Company users retrieved successfully')


@company_bp.route('/company-details', methods=['GET'])
@jwt_required_custom
def get_company_details():
    details = CompanyDetailsService.get(g.user_id)
    return ok(details.to_dict(), 'Company details retrieved successfully')


@company_bp.route('/company-details', methods=['PATCH'])
@jwt_required_custom
@admin_required
def update_company_details():
    """
    Update company details.

    Setting a transport industry (e.g. "Freight Transport") on a company
    without resources creates its starter vehicles.
    """
    try:
        data = company_details_update_schema.load(request.get_json(silent=True) or {})
    except ValidationError as err:
        return validation_error('Invalid company details', err.messages)

    details = CompanyDetailsService.patch(g.user_id, data)
    return ok(details.to_dict(), 'Company details updated successfully')


@company_bp.route('/company-details/industry', methods=['GET'])
@jwt_required_custom
def get_company_industry():
    company = CompanyService.get_company(g.user_id)
    industry = CompanyDetailsService.get_industry_by_company_id(company.id)
    return ok({'industry': industry})
