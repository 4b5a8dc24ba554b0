"""
ResourceService - company assets (vehicles and equipment).

Besides plain CRUD, seeds a starter fleet when a company declares a transport
industry, using one template per transport company type.
"""

import copy
import logging
import uuid
from typing import Dict, List, Optional

from adrevolution.extensions import db
from adrevolution.models.base import parse_uuid
from adrevolution.models.resource import Resource
from adrevolution.services.company_service import CompanyService
from adrevolution.utils.database import transaction
from adrevolution.utils.errors import BadRequestError, NotFoundError

logger = logging.getLogger(__name__)

# Transport company types (CompanyDetails.industry values)
FREIGHT_TRANSPORT = 'Freight Transport Company'
PASSENGER_TRANSPORT = 'Passenger Transport Company'
LOGISTICS_AND_SUPPLY_CHAIN = 'Logistics and Supply Chain Company'
TRANSPORT_COMPANY_TYPES = [
    FREIGHT_TRANSPORT,
    PASSENGER_TRANSPORT,
    LOGISTICS_AND_SUPPLY_CHAIN,
    'Courier and Delivery Service',
    'Moving and Relocation Company',
    'Maritime Shipping Company',
    'Air Cargo Company',
    'Rail Transport Company',
    'Intermodal Transport Company',
    'Public Transport Company',
]
GENERIC_TRANSPORTATION = 'Transportation'


def _vehicle(name, type_, registration, brand, model, size, department, licence, fuel):
    return {
        'name': name,
        'type': type_,
        'additional_properties': {
            'registrationNumber': registration,
            'mark': brand,
            'model': model,
            'sizeInCubicMeters': size,
            'department': department,
            'drivingLicenseRequirement': licence,
            'fuelType': fuel,
        },
    }


DEFAULT_RESOURCE_TEMPLATES = {
    FREIGHT_TRANSPORT: [
        _vehicle('Freight Truck', Resource.TRUCK, 'FR-1234', 'FreightBrand', 'FreightModel',
                 '50', 'Logistics', 'C', 'Diesel'),
    ],
    PASSENGER_TRANSPORT: [
        _vehicle('Passenger Car', Resource.CAR, 'PS-5678', 'PassengerBrand', 'PassengerModel',
                 '5', 'Transport', 'B', 'Petrol'),
    ],
    LOGISTICS_AND_SUPPLY_CHAIN: [
        _vehicle('Logistics Van', Resource.VAN, 'LG-9012', 'LogisticsBrand', 'LogisticsModel',
                 '30', 'Supply Chain', 'B', 'Diesel'),
    ],
}

FALLBACK_RESOURCE_TEMPLATES = [
    _vehicle('Default Truck', Resource.TRUCK, 'DF-3456', 'DefaultBrand', 'DefaultModel',
             '50', 'General', 'C', 'Diesel'),
    _vehicle('Default Car', Resource.CAR, 'DF-7890', 'DefaultBrand', 'DefaultModel',
             '5', 'General', 'B', 'Petrol'),
]


def is_transport_industry(industry: Optional[str]) -> bool:
    return industry == GENERIC_TRANSPORTATION or industry in TRANSPORT_COMPANY_TYPES


class ResourceService:

    @staticmethod
    def _validate_type(resource_type: Optional[str]):
        if resource_type is not None and resource_type not in Resource.VALID_TYPES:
            raise BadRequestError(
                f"Invalid resource type: {resource_type}",
                {'valid_types': Resource.VALID_TYPES}
            )

    @staticmethod
    def _check_assignee(company_id, user_id) -> Optional[uuid.UUID]:
        """
        Resolve the user a resource is assigned to.

        Raises:
            BadRequestError: If user_id is not a user of company_id
        """
        if user_id is None:
            return None
        user_uuid = parse_uuid(user_id)
        company = CompanyService.find_company_for_user(user_uuid) if user_uuid else None
        if company is None or company.id != parse_uuid(company_id):
            raise BadRequestError(
                'Resources can only be assigned to users of your company',
                {'user_id': str(user_id)}
            )
        return user_uuid

    @staticmethod
    def _build(company_id, data: Dict) -> Resource:
        ResourceService._validate_type(data.get('type'))
        resource = Resource(
            company_id=company_id,
            user_id=ResourceService._check_assignee(company_id, data.get('user_id')),
            name=data['name'],
            type=data.get('type') or Resource.OTHER,
            additional_properties=data.get('additional_properties')
        )
        db.session.add(resource)
        return resource

    @staticmethod
    def create(company_id, data: Dict) -> Resource:
        """
        Create a resource for company_id.

        Args:
            company_id: Owning company
            data: name (required), type, user_id, additional_properties

        Returns:
            The created Resource
        """
        with transaction('create resource'):
            resource = ResourceService._build(parse_uuid(company_id), data)

        logger.info(f"Resource created: {resource.id} ({resource.name}) for company {company_id}")
        return resource

    @staticmethod
    def list_company_resources(company_id) -> List[Resource]:
        return (
            Resource.query
            .filter_by(company_id=parse_uuid(company_id))
            .order_by(Resource.created_at)
            .all()
        )

    @staticmethod
    def get(company_id, resource_id) -> Resource:
        """
        Fetch one resource of company_id.

        Resources of other companies are reported as not found.
        """
        resource = Resource.query.filter_by(
            id=parse_uuid(resource_id),
            company_id=parse_uuid(company_id)
        ).first()
        if not resource:
            raise NotFoundError.for_resource('Resource', resource_id)
        return resource

    @staticmethod
    def update(company_id, resource_id, data: Dict) -> Resource:
        changes = {k: v for k, v in (data or {}).items() if v is not None}
        if not changes:
            raise BadRequestError('No data provided for update')
        ResourceService._validate_type(changes.get('type'))
        resource = ResourceService.get(company_id, resource_id)
        if 'user_id' in changes:
            changes['user_id'] = ResourceService._check_assignee(resource.company_id, changes['user_id'])

        with transaction('update resource'):
            updated_fields = resource.update_from_dict(changes, Resource.PATCHABLE_FIELDS)

        logger.info(f"Resource {resource.id} updated: {', '.join(updated_fields)}")
        return resource

    @staticmethod
    def delete(company_id, resource_id) -> None:
        resource = ResourceService.get(company_id, resource_id)
        with transaction('delete resource'):
            db.session.delete(resource)
        logger.info(f"Resource {resource_id} deleted from company {company_id}")

    @staticmethod
    def create_default_resources_for_company(company_id, industry: Optional[str]) -> List[Resource]:
        """
        Add the starter resources for industry to company_id.

        Runs inside the caller's transaction. Freight, passenger and logistics
        companies get their dedicated vehicle; any other industry gets a
        generic truck and car.

        Returns:
            The resources added to the session
        """
        company_id = parse_uuid(company_id)
        templates = DEFAULT_RESOURCE_TEMPLATES.get(industry, FALLBACK_RESOURCE_TEMPLATES)

        resources = [
            ResourceService._build(company_id, copy.deepcopy(template))
            for template in templates
        ]
        db.session.flush()

        logger.info(
            f"Created {len(resources)} default resources for company {company_id} "
            f"(industry: {industry})"
        )
        return resources
