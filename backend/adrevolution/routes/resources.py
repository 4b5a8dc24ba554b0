"""
Resources Blueprint - vehicles and equipment of the current user's company.

- GET /resources - List company resources
- POST /resources - Create a resource (admin)
- GET /resources/<resource_id> - Get one resource
- PATCH /resources/<resource_id> - Update a resource (admin)
- DELETE /resources/<resource_id> - Delete a resource (admin)

Resources of other companies are reported as not found.
"""

import logging
from flask import Blueprint, request, g
from marshmallow import ValidationError

from adrevolution.schemas.resource_schema import (
    resource_create_schema,
    resource_update_schema,
    resource_response_schema,
    resources_response_schema,
)
from adrevolution.services.company_service import CompanyService
from adrevolution.services.resource_service import ResourceService
from adrevolution.utils.decorators import jwt_required_custom, admin_required
from adrevolution.utils.responses import ok, created, validation_error

logger = logging.getLogger(__name__)

resources_bp = Blueprint('resources', __name__, url_prefix='/resources')


@resources_bp.route('', methods=['GET'])
@jwt_required_custom
def list_resources():
    company = CompanyService.get_company(g.user_id)
    resources = ResourceService.list_company_resources(company.id)
    return ok(resources_response_schema.dump(resources), 'Resources retrieved successfully')


@resources_bp.route('', methods=['POST'])
@jwt_required_custom
@admin_required
def create_resource():
    """
    Create a resource for the current user's company.

    **Request Body**:
        {
            "name": "Freight Truck",
            "type": "TRUCK",
            "user_id": "uuid",                              // Optional
            "additional_properties": {"license_plate": "FR-1234"}
        }

    **Response**:
        201 Created: The resource
        400 Bad Request: Validation error
    """
    try:
        data = resource_create_schema.load(request.get_json(silent=True) or {})
    except ValidationError as err:
        return validation_error('Invalid resource data', err.messages)

    company = CompanyService.get_company(g.user_id)
    resource = ResourceService.create(company.id, data)
    return created(resource_response_schema.dump(resource), 'Resource created successfully')


@resources_bp.route('/<resource_id>', methods=['GET'])
@jwt_required_custom
def get_resource(resource_id):
    company = CompanyService.get_company(g.user_id)
    resource = ResourceService.get(company.id, resource_id)
    return ok(resource_response_schema.dump(resource), 'Resource retrieved successfully')


@resources_bp.route('/<resource_id>', methods=['PATCH'])
@jwt_required_custom
@admin_required
def update_resource(resource_id):
    try:
        data = resource_update_schema.load(request.get_json(silent=True) or {})
    except ValidationError as err:
        return validation_error('Invalid resource data', err.messages)

    company = CompanyService.get_company(g.user_id)
    resource = ResourceService.update(company.id, resource_id, data)
    return ok(resource_response_schema.dump(resource), 'Resource updated successfully')


@resources_bp.route('/<resource_id>', methods=['DELETE'])
@jwt_required_custom
@admin_required
def delete_resource(resource_id):
    company = CompanyService.get_company(g.user_id)
    ResourceService.delete(company.id, resource_id)
    return ok(message='Resource deleted successfully')
