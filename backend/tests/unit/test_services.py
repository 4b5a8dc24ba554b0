"""
Unit Tests for Service Layer

Tests for business logic services against the in-memory test database:
- PasswordService, TokenService: credential hashing and session tokens
- ProvisioningService: owner registration and invitations, atomicity
- AuthService: sign-in, invitation acceptance, resend
- PermissionService, UserPositionService: admin flag and positions
- UserService: profile updates and deletion cascade
- Company, company details and resource services

Outbound email is disabled by TestingConfig or replaced with a mocked SMTP
client (mock_smtp fixture).
"""

import smtplib
import pytest
from datetime import timedelta
from decimal import Decimal

from adrevolution.models import (
    Account,
    BusinessHours,
    Communication,
    Company,
    CompanyDetails,
    CompanyMembership,
    LabourCost,
    Permission,
    Resource,
    User,
    UserPosition,
    VerificationToken,
)
from adrevolution.models.base import utcnow
from adrevolution.services.account_service import AccountService
from adrevolution.services.auth_service import AuthService
from adrevolution.services.business_hours_service import BusinessHoursService
from adrevolution.services.communication_service import CommunicationService
from adrevolution.services.company_details_service import CompanyDetailsService
from adrevolution.services.company_service import CompanyService
from adrevolution.services.labour_cost_service import LabourCostService
from adrevolution.services.password_service import PasswordService
from adrevolution.services.permission_service import PermissionService
from adrevolution.services.provisioning_service import ProvisioningService
from adrevolution.services.resource_service import ResourceService
from adrevolution.services.token_service import TokenService
from adrevolution.services.user_position_service import UserPositionService
from adrevolution.services.user_service import UserService
from adrevolution.utils.errors import (
    BadRequestError,
    ConflictError,
    EmailExistsError,
    ForbiddenError,
    InvalidTokenError,
    NotFoundError,
    UnauthorizedError,
)

OWNER_PASSWORD = 'OwnerPass123'  # conftest owner fixture


def token_of(user):
    return VerificationToken.query.filter_by(user_id=user.id).first()


class TestPasswordService:
    """Tests for PasswordService"""

    def test_salt_is_bcrypt_salt(self, app):
        salt = PasswordService.get_salt()
        assert salt.startswith('$2b$04$')

    def test_hash_is_deterministic(self, app):
        salt = PasswordService.get_salt()
        assert PasswordService.get_hash('SecurePass123', salt) == PasswordService.get_hash('SecurePass123', salt)

    def test_different_salt_different_hash(self, app):
        first = PasswordService.get_hash('SecurePass123', PasswordService.get_salt())
        second = PasswordService.get_hash('SecurePass123', PasswordService.get_salt())
        assert first != second

    def test_verify(self, app):
        salt = PasswordService.get_salt()
        password_hash = PasswordService.get_hash('SecurePass123', salt)

        assert PasswordService.verify('SecurePass123', salt, password_hash) is True
        assert PasswordService.verify('WrongPass123', salt, password_hash) is False

    def test_verify_without_credentials(self, app):
        assert PasswordService.verify('SecurePass123', None, None) is False


class TestTokenService:
    """Tests for TokenService"""

    def test_issue_and_verify(self, owner):
        claims = TokenService.verify(TokenService.issue(owner))

        assert claims['sub'] == str(owner.id)
        assert claims['id'] == str(owner.id)
        assert claims['email'] == 'owner@example.com'
        assert claims['exp'] - claims['iat'] == 86400

    @pytest.mark.parametrize('token', ['', 'garbage', 'a.b.c'])
    def test_verify_rejects_malformed(self, app, token):
        with pytest.raises(UnauthorizedError):
            TokenService.verify(token)

    def test_verify_rejects_tampered(self, owner):
        token = TokenService.issue(owner)
        header, payload, signature = token.split('.')
        tampered = '.'.join([header, payload, signature[::-1]])

        with pytest.raises(UnauthorizedError):
            TokenService.verify(tampered)

    def test_verify_rejects_expired(self, app, owner):
        app.config['JWT_ACCESS_TOKEN_EXPIRES'] = timedelta(seconds=-10)
        token = TokenService.issue(owner)

        with pytest.raises(UnauthorizedError) as exc_info:
            TokenService.verify(token)
        assert 'expired' in exc_info.value.message


class TestOwnerProvisioning:
    """Tests for self-registration provisioning"""

    def test_sign_up_provisions_every_record(self, owner):
        company = Company.find_by_owner(owner.id)

        assert company is not None
        assert company.company_name == 'Acme Freight'
        assert company.company_details_id is not None
        assert CompanyDetails.query.filter_by(owner_id=owner.id).count() == 1
        assert CompanyMembership.find_by_user(owner.id).company_id == company.id
        assert Account.query.filter_by(owner_id=owner.id).count() == 1
        assert BusinessHours.query.filter_by(owner_id=owner.id).count() == 1
        assert Communication.query.filter_by(user_id=owner.id).count() == 1
        assert LabourCost.query.filter_by(user_id=owner.id).count() == 1
        assert Permission.find_by_user(owner.id).is_admin is True
        assert UserPositionService.get_position_of_user(owner.id).name == UserPosition.COMPANY_OWNER

    def test_sign_up_stores_salted_credentials(self, owner):
        assert owner.password_salt
        assert owner.password_hash == PasswordService.get_hash(OWNER_PASSWORD, owner.password_salt)

    def test_sign_up_duplicate_email(self, owner):
        with pytest.raises(EmailExistsError):
            AuthService.sign_up('OWNER@example.com', 'AnotherPass123')

    def test_concurrent_sign_up_reports_email_exists(self, owner, mocker):
        # The competing sign-up commits between the email check and the insert
        lookup = mocker.patch.object(UserService, 'find_by_email', side_effect=[None, owner])

        with pytest.raises(EmailExistsError):
            ProvisioningService.register_owner('owner@example.com', 'hash', 'salt')

        assert lookup.call_count == 2
        assert User.query.filter_by(email='owner@example.com').count() == 1
        assert Company.query.count() == 1

    def test_failure_rolls_back_everything(self, app, mocker):
        mocker.patch.object(LabourCostService, 'create', side_effect=ConflictError())

        with pytest.raises(ConflictError):
            AuthService.sign_up('broken@example.com', 'SecurePass123')

        assert User.find_by_email('broken@example.com') is None
        assert Company.query.count() == 0
        assert CompanyDetails.query.count() == 0
        assert CompanyMembership.query.count() == 0
        assert Account.query.count() == 0
        assert Permission.query.count() == 0

    def test_unexpected_error_rolls_back_everything(self, app, mocker):
        mocker.patch.object(PermissionService, 'create', side_effect=RuntimeError('boom'))

        with pytest.raises(RuntimeError):
            AuthService.sign_up('broken@example.com', 'SecurePass123')

        assert User.query.count() == 0
        assert UserPosition.query.count() == 0

    def test_provision_owner_twice_conflicts(self, owner):
        with pytest.raises(ConflictError):
            ProvisioningService.provision_owner(owner.id)

        assert Company.query.filter_by(owner_id=owner.id).count() == 1

    def test_provision_owner_for_bare_user(self, db):
        user = User(email='bare@example.com')
        db.session.add(user)
        db.session.commit()

        company = ProvisioningService.provision_owner(user.id)

        assert company.owner_id == user.id
        assert PermissionService.get_permission(user.id)['level'] == UserPosition.COMPANY_OWNER

    @pytest.mark.parametrize('create', [
        lambda user_id: AccountService.create(user_id),
        lambda user_id: BusinessHoursService.create(user_id),
        lambda user_id: CommunicationService.create(user_id),
        lambda user_id: LabourCostService.create(user_id),
        lambda user_id: PermissionService.create(user_id),
        lambda user_id: CompanyService.create(user_id),
        lambda user_id: CompanyDetailsService.create(user_id),
    ])
    def test_second_create_conflicts(self, owner, create):
        with pytest.raises(ConflictError):
            create(owner.id)


class TestInvitation:
    """Tests for ProvisioningService.invite_user"""

    def test_invite_creates_pending_member(self, owner, invitee):
        company = Company.find_by_owner(owner.id)

        assert invitee.has_credentials() is False
        assert invitee.created_by == owner.id
        assert CompanyMembership.find_by_user(invitee.id).company_id == company.id
        assert Company.find_by_owner(invitee.id) is None
        assert Permission.find_by_user(invitee.id).is_admin is False
        assert UserPositionService.get_position_of_user(invitee.id).name == UserPosition.WORKER
        assert token_of(invitee) is not None

    def test_invite_applies_settings(self, owner):
        user, _ = ProvisioningService.invite_user(owner.id, {
            'email': 'dispatch@example.com',
            'position': UserPosition.DISPATCHER,
            'is_admin': True,
            'labour_cost': 2500,
            'cost_unit': LabourCost.PER_MONTH,
            'surveys': False,
            'city': 'Montreal',
        })

        labour_cost = LabourCost.find_by_user(user.id)
        assert labour_cost.labour_cost == Decimal('2500')
        assert labour_cost.cost_unit == LabourCost.PER_MONTH
        assert Communication.find_by_user(user.id).surveys is False
        assert Permission.find_by_user(user.id).is_admin is True
        assert user.city == 'Montreal'

    def test_positions_are_shared_within_company(self, owner, invitee):
        user, _ = ProvisioningService.invite_user(owner.id, {'email': 'second@example.com'})
        assert user.position_id == invitee.position_id

    def test_invite_without_mail_reports_not_sent(self, owner):
        _, sent = ProvisioningService.invite_user(owner.id, {'email': 'nomail@example.com'})
        assert sent is False

    def test_invite_sends_email(self, app, owner, mock_smtp):
        user, sent = ProvisioningService.invite_user(owner.id, {
            'email': 'mailed@example.com',
            'first_name': 'Mia',
        })

        assert sent is True
        mock_smtp.send_message.assert_called_once()
        msg = mock_smtp.send_message.call_args[0][0]
        assert msg['To'] == 'mailed@example.com'
        assert msg['Subject'] == 'Invitation to Join Acme Freight'
        html = msg.get_body(preferencelist=('html',)).get_content()
        assert f"{app.config['FRONTEND_URL']}/auth/verify/{token_of(user).token}" in html
        assert 'Olivia Owner' in html

    def test_delivery_failure_keeps_invitation(self, owner, mock_smtp):
        mock_smtp.send_message.side_effect = smtplib.SMTPException('down')

        user, sent = ProvisioningService.invite_user(owner.id, {'email': 'lost@example.com'})

        assert sent is False
        assert User.find_by_email('lost@example.com') is not None
        assert token_of(user) is not None

    def test_non_admin_cannot_invite(self, invitee):
        with pytest.raises(ForbiddenError):
            ProvisioningService.invite_user(invitee.id, {'email': 'x@example.com'})

    def test_duplicate_email(self, owner, invitee):
        with pytest.raises(EmailExistsError):
            ProvisioningService.invite_user(owner.id, {'email': 'Worker@Example.com'})

    def test_concurrent_invite_reports_email_exists(self, owner, invitee, mocker):
        mocker.patch.object(UserService, 'find_by_email', side_effect=[None, invitee])

        with pytest.raises(EmailExistsError):
            ProvisioningService.invite_user(owner.id, {'email': 'worker@example.com'})

        assert User.query.filter_by(email='worker@example.com').count() == 1

    def test_other_company_forbidden(self, owner, outsider):
        other_company = Company.find_by_owner(outsider.id)

        with pytest.raises(ForbiddenError):
            ProvisioningService.invite_user(owner.id, {
                'email': 'x@example.com',
                'company_id': other_company.id,
            })

    def test_cannot_invite_company_owner(self, owner):
        with pytest.raises(BadRequestError):
            ProvisioningService.invite_user(owner.id, {
                'email': 'x@example.com',
                'position': UserPosition.COMPANY_OWNER,
            })

    def test_invalid_cost_unit_rolls_back(self, owner):
        with pytest.raises(BadRequestError):
            ProvisioningService.invite_user(owner.id, {'email': 'x@example.com', 'cost_unit': 'PER_YEAR'})

        assert User.find_by_email('x@example.com') is None
        assert CompanyMembership.query.count() == 1


class TestAuthService:
    """Tests for AuthService"""

    def test_sign_in_success(self, owner):
        user, token = AuthService.sign_in('owner@example.com', OWNER_PASSWORD)

        assert user.id == owner.id
        assert user.last_login is not None
        assert TokenService.verify(token)['sub'] == str(owner.id)

    def test_sign_in_wrong_password(self, owner):
        with pytest.raises(UnauthorizedError):
            AuthService.sign_in('owner@example.com', 'WrongPass123')
        assert owner.last_login is None

    def test_sign_in_unknown_email(self, app):
        with pytest.raises(UnauthorizedError):
            AuthService.sign_in('nobody@example.com', 'SecurePass123')

    def test_invited_user_cannot_sign_in(self, invitee):
        with pytest.raises(UnauthorizedError):
            AuthService.sign_in('worker@example.com', 'SecurePass123')

    def test_inactive_user_cannot_sign_in(self, db, owner):
        owner.is_active = False
        db.session.commit()

        with pytest.raises(UnauthorizedError):
            AuthService.sign_in('owner@example.com', OWNER_PASSWORD)

    def test_get_session(self, owner):
        claims = TokenService.verify(TokenService.issue(owner))

        session = AuthService.get_session(claims)

        assert session == {
            'id': str(owner.id),
            'email': 'owner@example.com',
            'iat': claims['iat'],
            'exp': claims['exp'],
        }

    def test_verify_sets_password_and_consumes_token(self, invitee):
        token = token_of(invitee).token

        result = AuthService.verify_user_and_set_password(token, 'WorkerPass123')

        assert result['message'] == 'Account verified successfully'
        assert result['user'] == {'email': 'worker@example.com', 'first_name': 'Walter', 'last_name': 'Worker'}
        assert TokenService.verify(result['access_token'])['sub'] == str(invitee.id)
        assert token_of(invitee) is None

        user, _ = AuthService.sign_in('worker@example.com', 'WorkerPass123')
        assert user.id == invitee.id

    def test_verify_token_is_single_use(self, invitee):
        token = token_of(invitee).token
        AuthService.verify_user_and_set_password(token, 'WorkerPass123')

        with pytest.raises(InvalidTokenError):
            AuthService.verify_user_and_set_password(token, 'OtherPass123')

    def test_expired_token_rejected_and_deleted(self, db, invitee):
        verification_token = token_of(invitee)
        verification_token.expires_at = utcnow() - timedelta(hours=1)
        db.session.commit()
        token = verification_token.token

        with pytest.raises(InvalidTokenError):
            AuthService.verify_user_and_set_password(token, 'WorkerPass123')

        assert VerificationToken.find_by_token(token) is None
        assert User.find_by_email('worker@example.com').has_credentials() is False

    def test_unknown_token(self, app):
        with pytest.raises(InvalidTokenError):
            AuthService.get_user_by_verification_token('does-not-exist')

    def test_get_user_by_verification_token(self, invitee):
        preview = AuthService.get_user_by_verification_token(token_of(invitee).token)

        assert preview == {
            'email': 'worker@example.com',
            'first_name': 'Walter',
            'last_name': 'Worker',
            'company_name': 'Acme Freight',
        }

    def test_resend_invitation_replaces_token(self, owner, invitee, mock_smtp):
        old_token = token_of(invitee).token

        sent = AuthService.resend_invitation(owner.id, invitee.id)

        assert sent is True
        assert VerificationToken.query.filter_by(user_id=invitee.id).count() == 1
        assert token_of(invitee).token != old_token

    def test_resend_invitation_after_verification(self, owner, invitee):
        AuthService.verify_user_and_set_password(token_of(invitee).token, 'WorkerPass123')

        with pytest.raises(BadRequestError):
            AuthService.resend_invitation(owner.id, invitee.id)


class TestPermissionsAndPositions:
    """Tests for PermissionService and UserPositionService"""

    def test_owner_permission(self, owner):
        permission = PermissionService.get_permission(owner.id)

        assert permission['is_admin'] is True
        assert permission['is_owner'] is True
        assert permission['level'] == UserPosition.COMPANY_OWNER
        assert permission['user_id'] == str(owner.id)

    def test_worker_permission(self, invitee):
        permission = PermissionService.get_permission(invitee.id)

        assert permission['is_admin'] is False
        assert permission['is_owner'] is False
        assert permission['level'] == UserPosition.WORKER

    def test_missing_permission(self, db):
        user = User(email='loner@example.com')
        db.session.add(user)
        db.session.commit()

        with pytest.raises(NotFoundError):
            PermissionService.get_permission(user.id)

    def test_grant_admin(self, invitee):
        assert PermissionService.update(invitee.id, True)['is_admin'] is True
        assert PermissionService.is_admin(invitee.id) is True

    def test_owner_keeps_admin(self, owner):
        with pytest.raises(ForbiddenError):
            PermissionService.update(owner.id, False)
        assert PermissionService.is_admin(owner.id) is True

    def test_change_position(self, invitee):
        position = UserPositionService.change_position(invitee.id, UserPosition.DISPATCHER)

        assert position['name'] == UserPosition.DISPATCHER
        assert position['is_admin'] is False
        assert UserPositionService.get_user_position(invitee.id)['name'] == UserPosition.DISPATCHER

    def test_company_owner_position_is_fixed(self, owner, invitee):
        with pytest.raises(ForbiddenError):
            UserPositionService.change_position(owner.id, UserPosition.MANAGER)
        with pytest.raises(ForbiddenError):
            UserPositionService.change_position(invitee.id, UserPosition.COMPANY_OWNER)

    def test_get_or_create_reuses_position(self, owner):
        company = Company.find_by_owner(owner.id)

        first = UserPositionService.get_or_create(company.id, UserPosition.MANAGER)
        second = UserPositionService.get_or_create(company.id, UserPosition.MANAGER)

        assert first.id == second.id

    def test_get_or_create_invalid_name(self, owner):
        company = Company.find_by_owner(owner.id)
        with pytest.raises(BadRequestError):
            UserPositionService.get_or_create(company.id, 'SUPERUSER')

    def test_ensure_can_manage(self, owner, invitee, outsider):
        PermissionService.ensure_can_manage(invitee.id, invitee.id)
        PermissionService.ensure_can_manage(owner.id, invitee.id)

        with pytest.raises(ForbiddenError):
            PermissionService.ensure_can_manage(invitee.id, owner.id)
        with pytest.raises(ForbiddenError):
            PermissionService.ensure_can_manage(outsider.id, invitee.id)

    @pytest.mark.parametrize('target', ['not-a-uuid', '00000000-0000-0000-0000-000000000001'])
    def test_ensure_can_manage_unknown_target(self, owner, target):
        with pytest.raises(NotFoundError):
            PermissionService.ensure_can_manage(owner.id, target)


class TestUserService:
    """Tests for UserService"""

    def test_get_user_details(self, owner, invitee):
        details = UserService.get_user_details(invitee.id)

        assert details['email'] == 'worker@example.com'
        assert details['company_id'] == str(Company.find_by_owner(owner.id).id)

    def test_get_users_of_company_excludes_outsiders(self, owner, invitee, outsider):
        emails = {user.email for user in UserService.get_users_of_company(owner.id)}

        assert emails == {'owner@example.com', 'worker@example.com'}

    def test_get_user_by_id_not_found(self, app):
        with pytest.raises(NotFoundError):
            UserService.get_user_by_id('not-a-uuid')

    def test_patch_user(self, owner):
        user = UserService.patch_user(owner.id, {'city': 'Quebec', 'first_name': None})

        assert user.city == 'Quebec'
        assert user.first_name == 'Olivia'

    def test_patch_user_ignores_email(self, owner):
        with pytest.raises(BadRequestError):
            UserService.patch_user(owner.id, {'email': 'new@example.com'})
        assert owner.email == 'owner@example.com'

    def test_delete_user_removes_every_record(self, owner, invitee):
        invitee_id = invitee.id

        UserService.delete_user(invitee_id, owner.id)

        assert User.find_by_email('worker@example.com') is None
        assert VerificationToken.query.filter_by(user_id=invitee_id).count() == 0
        assert LabourCost.query.filter_by(user_id=invitee_id).count() == 0
        assert Communication.query.filter_by(user_id=invitee_id).count() == 0
        assert Permission.query.filter_by(user_id=invitee_id).count() == 0
        assert BusinessHours.query.filter_by(owner_id=invitee_id).count() == 0
        assert Account.query.filter_by(owner_id=invitee_id).count() == 0
        assert CompanyMembership.query.filter_by(user_id=invitee_id).count() == 0

    def test_owner_cannot_be_deleted(self, owner):
        with pytest.raises(ForbiddenError):
            UserService.delete_user(owner.id, owner.id)

    def test_outsider_cannot_delete(self, invitee, outsider):
        with pytest.raises(ForbiddenError):
            UserService.delete_user(invitee.id, outsider.id)
        assert User.find_by_email('worker@example.com') is not None


class TestCompanyServices:
    """Tests for company, company details and resource services"""

    def test_find_company_for_member(self, owner, invitee):
        assert CompanyService.find_company_for_user(invitee.id).owner_id == owner.id

    def test_get_users_of_company(self, owner, invitee, outsider):
        emails = [user.email for user in CompanyService.get_users_of_company(invitee.id)]
        assert emails == ['owner@example.com', 'worker@example.com']

    def test_patch_company_ignores_none(self, owner):
        company = CompanyService.patch_company(owner.id, {'company_name': None, 'city': 'Laval'})

        assert company.company_name == 'Acme Freight'
        assert company.city == 'Laval'

    def test_patch_company_empty(self, owner):
        with pytest.raises(BadRequestError):
            CompanyService.patch_company(owner.id, {})

    def test_user_belongs_to_one_company(self, invitee, outsider):
        other_company = Company.find_by_owner(outsider.id)
        with pytest.raises(ConflictError):
            CompanyService.add_user_to_company(other_company.id, invitee.id)

    def test_transport_industry_seeds_resources_once(self, owner):
        company = Company.find_by_owner(owner.id)

        CompanyDetailsService.patch(owner.id, {'industry': 'Freight Transport Company'})
        CompanyDetailsService.patch(owner.id, {'industry': 'Passenger Transport Company'})

        resources = ResourceService.list_company_resources(company.id)
        assert [(r.name, r.type) for r in resources] == [('Freight Truck', Resource.TRUCK)]
        assert resources[0].additional_properties['registrationNumber'] == 'FR-1234'
        assert CompanyDetailsService.get_industry_by_company_id(company.id) == 'Passenger Transport Company'

    def test_generic_transport_gets_fallback_resources(self, owner):
        company = Company.find_by_owner(owner.id)

        CompanyDetailsService.patch(owner.id, {'industry': 'Transportation'})

        names = sorted(r.name for r in ResourceService.list_company_resources(company.id))
        assert names == ['Default Car', 'Default Truck']

    def test_other_industry_seeds_nothing(self, owner):
        company = Company.find_by_owner(owner.id)
        CompanyDetailsService.patch(owner.id, {'industry': 'Retail'})
        assert ResourceService.list_company_resources(company.id) == []

    def test_display_business_hours_flag(self, owner):
        CompanyDetailsService.patch(owner.id, {'display_business_hours': True})
        assert Company.find_by_owner(owner.id).display_business_hours is True

    def test_resources_are_company_scoped(self, owner, outsider):
        company = Company.find_by_owner(owner.id)
        other_company = Company.find_by_owner(outsider.id)
        resource = ResourceService.create(company.id, {'name': 'Forklift', 'type': Resource.EQUIPMENT})

        assert ResourceService.get(company.id, resource.id).name == 'Forklift'
        with pytest.raises(NotFoundError):
            ResourceService.get(other_company.id, resource.id)

    def test_resource_update_and_delete(self, owner):
        company = Company.find_by_owner(owner.id)
        resource = ResourceService.create(company.id, {'name': 'Van 1', 'type': Resource.VAN})

        updated = ResourceService.update(company.id, resource.id, {'name': 'Van 2'})
        assert updated.name == 'Van 2'
        assert updated.type == Resource.VAN

        ResourceService.delete(company.id, resource.id)
        assert ResourceService.list_company_resources(company.id) == []

    def test_resource_invalid_type(self, owner):
        company = Company.find_by_owner(owner.id)
        with pytest.raises(BadRequestError):
            ResourceService.update(company.id, ResourceService.create(company.id, {'name': 'X'}).id, {'type': 'BOAT'})
