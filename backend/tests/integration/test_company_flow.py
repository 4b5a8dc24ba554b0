"""
Integration Tests for Company and Settings Endpoints

Covers the company profile, onboarding details (with default resource
seeding), per-user settings, permissions, positions and labour cost.
"""

import json
import pytest

WORKDAY = '{"start": "08:00", "end": "16:30", "enabled": true}'


def patch(client, url, payload, headers):
    return client.patch(url, data=json.dumps(payload), content_type='application/json', headers=headers)


class TestCompany:
    """GET/PATCH /company and /company/users"""

    def test_get_company(self, client, owner, owner_headers):
        response = client.get('/company', headers=owner_headers)

        assert response.status_code == 200
        data = response.get_json()['data']
        assert data['company_name'] == 'Acme Freight'
        assert data['owner_id'] == str(owner.id)

    def test_member_sees_same_company(self, client, owner_headers, invitee_headers):
        owner_company = client.get('/company', headers=owner_headers).get_json()['data']
        member_company = client.get('/company', headers=invitee_headers).get_json()['data']
        assert owner_company['id'] == member_company['id']

    def test_update_company(self, client, owner_headers):
        response = patch(client, '/company', {
            'timezone': 'America/Toronto',
            'first_day_of_week': 'MONDAY',
            'company_email': 'office@acme.example.com',
        }, owner_headers)

        assert response.status_code == 200
        data = response.get_json()['data']
        assert data['timezone'] == 'America/Toronto'
        assert data['first_day_of_week'] == 'MONDAY'

    def test_update_company_validation(self, client, owner_headers):
        response = patch(client, '/company', {'first_day_of_week': 'FUNDAY'}, owner_headers)

        assert response.status_code == 400
        assert 'first_day_of_week' in response.get_json()['error']['details']

    def test_worker_cannot_update_company(self, client, invitee_headers):
        response = patch(client, '/company', {'company_name': 'Hijacked'}, invitee_headers)
        assert response.status_code == 403

    def test_company_users(self, client, invitee, outsider, owner_headers):
        response = client.get('/company/users', headers=owner_headers)

        assert response.status_code == 200
        emails = [user['email'] for user in response.get_json()['data']]
        assert emails == ['owner@example.com', 'worker@example.com']


class TestCompanyDetails:
    """GET/PATCH /company-details"""

    def test_get_details(self, client, owner_headers):
        response = client.get('/company-details', headers=owner_headers)

        assert response.status_code == 200
        assert response.get_json()['data']['industry'] is None

    def test_transport_industry_seeds_resources(self, client, owner_headers):
        response = patch(client, '/company-details', {
            'industry': 'Freight Transport Company',
            'team_size': '2-10',
        }, owner_headers)

        assert response.status_code == 200
        assert response.get_json()['data']['team_size'] == '2-10'

        industry = client.get('/company-details/industry', headers=owner_headers)
        assert industry.get_json()['data'] == {'industry': 'Freight Transport Company'}

        resources = client.get('/resources', headers=owner_headers).get_json()['data']
        assert [(r['name'], r['type']) for r in resources] == [('Freight Truck', 'TRUCK')]

    def test_display_business_hours(self, client, owner_headers):
        patch(client, '/company-details', {'display_business_hours': True}, owner_headers)

        company = client.get('/company', headers=owner_headers).get_json()['data']
        assert company['display_business_hours'] is True

    def test_worker_cannot_update_details(self, client, invitee_headers):
        response = patch(client, '/company-details', {'industry': 'Retail'}, invitee_headers)
        assert response.status_code == 403


class TestPersonalSettings:
    """Account, business hours and notification settings"""

    def test_account(self, client, owner_headers):
        assert client.get('/account', headers=owner_headers).get_json()['data']['is_blocking_enabled'] is False

        response = patch(client, '/account', {'is_blocking_enabled': True}, owner_headers)

        assert response.status_code == 200
        assert response.get_json()['data']['is_blocking_enabled'] is True

    def test_account_requires_flag(self, client, owner_headers):
        response = patch(client, '/account', {}, owner_headers)

        assert response.status_code == 400
        assert response.get_json()['error']['code'] == 'VALIDATION_ERROR'

    def test_business_hours(self, client, owner_headers):
        response = patch(client, '/business-hours', {'monday': WORKDAY}, owner_headers)

        assert response.status_code == 200
        data = response.get_json()['data']
        assert json.loads(data['monday']) == {'start': '08:00', 'end': '16:30', 'enabled': True}
        assert json.loads(data['sunday'])['enabled'] is False

    @pytest.mark.parametrize('value', [
        'not json',
        '{"start": "17:00", "end": "09:00", "enabled": true}',
        '{"start": "9am", "end": "17:00", "enabled": true}',
    ])
    def test_business_hours_validation(self, client, owner_headers, value):
        response = patch(client, '/business-hours', {'tuesday': value}, owner_headers)

        assert response.status_code == 400
        assert 'tuesday' in response.get_json()['error']['details']

    @pytest.mark.parametrize('url', ['/communications', '/user-notification-settings'])
    def test_notification_settings(self, client, owner_headers, url):
        assert client.get(url, headers=owner_headers).get_json()['data']['surveys'] is True

        response = patch(client, url, {'surveys': False}, owner_headers)

        assert response.status_code == 200
        data = response.get_json()['data']
        assert data['surveys'] is False
        assert data['error_messages'] is True


class TestPermissionsAndPositions:
    """/permissions and /user-position"""

    def test_owner_permission(self, client, owner_headers):
        data = client.get('/permissions', headers=owner_headers).get_json()['data']

        assert data['is_admin'] is True
        assert data['is_owner'] is True
        assert data['level'] == 'COMPANY_OWNER'

    def test_grant_admin(self, client, invitee, owner_headers, invitee_headers):
        response = patch(client, f'/permissions/{invitee.id}', {'is_admin': True}, owner_headers)

        assert response.status_code == 200
        assert response.get_json()['data']['is_admin'] is True
        assert client.get('/permissions', headers=invitee_headers).get_json()['data']['is_admin'] is True

    def test_owner_keeps_admin(self, client, owner, owner_headers):
        response = patch(client, f'/permissions/{owner.id}', {'is_admin': False}, owner_headers)
        assert response.status_code == 403

    def test_worker_cannot_grant(self, client, invitee, invitee_headers):
        response = patch(client, f'/permissions/{invitee.id}', {'is_admin': True}, invitee_headers)
        assert response.status_code == 403

    def test_other_company_admin_cannot_grant(self, client, invitee, outsider_headers):
        response = patch(client, f'/permissions/{invitee.id}', {'is_admin': True}, outsider_headers)
        assert response.status_code == 403

    def test_change_position(self, client, invitee, owner_headers, invitee_headers):
        response = patch(client, f'/user-position/{invitee.id}', {'name': 'DISPATCHER'}, owner_headers)

        assert response.status_code == 200
        assert response.get_json()['data']['name'] == 'DISPATCHER'
        assert client.get('/user-position', headers=invitee_headers).get_json()['data']['name'] == 'DISPATCHER'

    def test_cannot_assign_company_owner(self, client, invitee, owner_headers):
        response = patch(client, f'/user-position/{invitee.id}', {'name': 'COMPANY_OWNER'}, owner_headers)

        assert response.status_code == 400
        assert 'name' in response.get_json()['error']['details']

    def test_cannot_move_owner(self, client, owner, owner_headers):
        response = patch(client, f'/user-position/{owner.id}', {'name': 'MANAGER'}, owner_headers)
        assert response.status_code == 403

    def test_list_company_positions(self, client, invitee, owner_headers, outsider_headers):
        positions = client.get('/user-position/list', headers=owner_headers).get_json()['data']

        assert [(p['name'], p['user_count']) for p in positions] == [('COMPANY_OWNER', 1), ('WORKER', 1)]
        other = client.get('/user-position/list', headers=outsider_headers).get_json()['data']
        assert [p['name'] for p in other] == ['COMPANY_OWNER']

    def test_permission_of_unknown_user(self, client, owner_headers):
        response = patch(client, '/permissions/not-a-uuid', {'is_admin': True}, owner_headers)

        assert response.status_code == 404
        assert response.get_json()['error']['code'] == 'NOT_FOUND'


class TestLabourCost:
    """/labour-cost and /payment-type"""

    def test_admin_reads_and_updates(self, client, invitee, owner_headers):
        data = client.get(f'/labour-cost/{invitee.id}', headers=owner_headers).get_json()['data']
        assert data['cost_unit'] == 'PER_HOUR'

        response = patch(client, f'/payment-type/{invitee.id}', {
            'labour_cost': 3200,
            'cost_unit': 'PER_MONTH',
        }, owner_headers)

        assert response.status_code == 200
        data = response.get_json()['data']
        assert data['labour_cost'] == 3200
        assert data['cost_unit'] == 'PER_MONTH'

    def test_user_reads_own(self, client, invitee, invitee_headers):
        response = client.get(f'/payment-type/{invitee.id}', headers=invitee_headers)
        assert response.status_code == 200

    def test_user_cannot_read_others(self, client, owner, invitee_headers):
        response = client.get(f'/labour-cost/{owner.id}', headers=invitee_headers)
        assert response.status_code == 403

    def test_negative_cost_rejected(self, client, invitee, owner_headers):
        response = patch(client, f'/labour-cost/{invitee.id}', {'labour_cost': -5}, owner_headers)

        assert response.status_code == 400
        assert 'labour_cost' in response.get_json()['error']['details']

    def test_cost_above_column_precision_rejected(self, client, invitee, owner_headers):
        response = patch(client, f'/labour-cost/{invitee.id}', {'labour_cost': 1e9}, owner_headers)

        assert response.status_code == 400
        assert 'labour_cost' in response.get_json()['error']['details']

    @pytest.mark.parametrize('prefix', ['/labour-cost', '/payment-type'])
    def test_admin_deletes(self, client, invitee, owner_headers, prefix):
        response = client.delete(f'{prefix}/{invitee.id}', headers=owner_headers)

        assert response.status_code == 200
        assert client.get(f'{prefix}/{invitee.id}', headers=owner_headers).status_code == 404
        assert client.delete(f'{prefix}/{invitee.id}', headers=owner_headers).status_code == 404

    def test_worker_cannot_delete(self, client, invitee, invitee_headers):
        response = client.delete(f'/labour-cost/{invitee.id}', headers=invitee_headers)
        assert response.status_code == 403

    def test_other_company_admin_cannot_delete(self, client, invitee, outsider_headers, owner_headers):
        response = client.delete(f'/labour-cost/{invitee.id}', headers=outsider_headers)

        assert response.status_code == 403
        assert client.get(f'/labour-cost/{invitee.id}', headers=owner_headers).status_code == 200


class TestSettingsOfOtherUsers:
    """Administrators manage business hours and notification settings of their users"""

    def test_admin_reads_and_updates_business_hours(self, client, invitee, owner_headers, invitee_headers):
        assert client.get(f'/business-hours/{invitee.id}', headers=owner_headers).status_code == 200

        response = patch(client, f'/business-hours/{invitee.id}', {'friday': WORKDAY}, owner_headers)

        assert response.status_code == 200
        own = client.get('/business-hours', headers=invitee_headers).get_json()['data']
        assert json.loads(own['friday']) == {'start': '08:00', 'end': '16:30', 'enabled': True}

    def test_business_hours_of_other_company(self, client, invitee, outsider_headers):
        assert client.get(f'/business-hours/{invitee.id}', headers=outsider_headers).status_code == 403
        response = patch(client, f'/business-hours/{invitee.id}', {'friday': WORKDAY}, outsider_headers)
        assert response.status_code == 403

    def test_worker_cannot_update_owner_hours(self, client, owner, invitee_headers):
        response = patch(client, f'/business-hours/{owner.id}', {'friday': WORKDAY}, invitee_headers)
        assert response.status_code == 403

    def test_business_hours_validation(self, client, invitee, owner_headers):
        response = patch(client, f'/business-hours/{invitee.id}', {'friday': 'not json'}, owner_headers)

        assert response.status_code == 400
        assert 'friday' in response.get_json()['error']['details']

    @pytest.mark.parametrize('prefix', ['/communications/user', '/user-notification-settings/user'])
    def test_admin_updates_surveys(self, client, invitee, owner_headers, invitee_headers, prefix):
        assert client.get(f'{prefix}/{invitee.id}', headers=owner_headers).get_json()['data']['surveys'] is True

        response = patch(client, f'{prefix}/{invitee.id}', {'surveys': False}, owner_headers)

        assert response.status_code == 200
        assert client.get('/communications', headers=invitee_headers).get_json()['data']['surveys'] is False

    def test_communications_of_other_company(self, client, invitee, outsider_headers):
        response = client.get(f'/communications/user/{invitee.id}', headers=outsider_headers)
        assert response.status_code == 403

    def test_unknown_user(self, client, owner_headers):
        unknown = '00000000-0000-0000-0000-000000000001'

        assert client.get(f'/business-hours/{unknown}', headers=owner_headers).status_code == 404
        assert client.get(f'/communications/user/{unknown}', headers=owner_headers).status_code == 404
