"""
Resource Schemas for Data Validation and Serialization

Schemas:
- ResourceCreateSchema: New vehicle or piece of equipment
- ResourceUpdateSchema: Partial update
- ResourceResponseSchema: For API responses
"""

from marshmallow import Schema, fields, validate

from adrevolution.models.resource import Resource


class ResourceCreateSchema(Schema):
    """
    Schema for creating a resource.

    Used for POST /resources.

    Example:
        {
            "name": "Freight Truck",
            "type": "TRUCK",
            "additional_properties": {"license_plate": "FR-1234"}
        }
    """
    name = fields.Str(required=True, validate=validate.Length(min=1, max=255))
    type = fields.Str(load_default=Resource.OTHER, validate=validate.OneOf(Resource.VALID_TYPES))
    user_id = fields.UUID(allow_none=True)
    additional_properties = fields.Dict(keys=fields.Str(), allow_none=True)


class ResourceUpdateSchema(Schema):
    """Used for PATCH /resources/<id>."""
    name = fields.Str(validate=validate.Length(min=1, max=255))
    type = fields.Str(validate=validate.OneOf(Resource.VALID_TYPES))
    user_id = fields.UUID(allow_none=True)
    additional_properties = fields.Dict(keys=fields.Str(), allow_none=True)


class ResourceResponseSchema(Schema):
    id = fields.UUID(dump_only=True)
    company_id = fields.UUID(dump_only=True)
    user_id = fields.UUID(dump_only=True)
    name = fields.Str(dump_only=True)
    type = fields.Str(dump_only=True)
    additional_properties = fields.Dict(dump_only=True)
    created_at = fields.DateTime(dump_only=True)
    updated_at = fields.DateTime(dump_only=True)


resource_create_schema = ResourceCreateSchema()
resource_update_schema = ResourceUpdateSchema()
resource_response_schema = ResourceResponseSchema()
resources_response_schema = ResourceResponseSchema(many=True)
