"""
Endpoint tests for /api/donations
"""
from ngo_dashboard.models import Donation


class TestDonations:

    def test_create_donation(self, client, make_donor, make_campaign):
        donor = make_donor()
        campaign = make_campaign()
        response = client.post('/api/donations', json={
            'donor_id': donor.id,
            'campaign_id': campaign.id,
            'amount': '125.50',
            'method': 'Bank Transfer',
            'date': '2025-04-02'
        })
        assert response.status_code == 201
        donation = response.get_json()['donation']
        assert donation['amount'] == 125.5
        assert donation['method'] == 'Bank Transfer'
        assert donation['donor']['id'] == donor.id
        assert donation['campaign']['id'] == campaign.id

    def test_campaign_is_optional(self, client, make_donor):
        donor = make_donor()
        response = client.post('/api/donations', json={
            'donor_id': donor.id, 'amount': 10, 'method': 'Cash'
        })
        assert response.status_code == 201
        assert response.get_json()['donation']['campaign'] is None

    def test_unknown_donor(self, client):
        response = client.post('/api/donations', json={'donor_id': 5, 'amount': 10, 'method': 'Cash'})
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Donor not found'

    def test_unknown_campaign(self, client, make_donor):
        donor = make_donor()
        response = client.post('/api/donations', json={
            'donor_id': donor.id, 'campaign_id': 77, 'amount': 10, 'method': 'Cash'
        })
        assert response.status_code == 400
        assert Donation.query.count() == 0

    def test_invalid_amount(self, client, make_donor):
        donor = make_donor()
        for amount in ('lots', -1):
            response = client.post('/api/donations', json={
                'donor_id': donor.id, 'amount': amount, 'method': 'Cash'
            })
            assert response.status_code == 400

    def test_list_donations(self, client, make_donor, make_donation):
        donor = make_donor(name='Listed')
        make_donation(donor, amount=20)
        donations = client.get('/api/donations').get_json()['donations']
        assert donations[0]['donor']['name'] == 'Listed'

    def test_donations_are_append_only(self, client, make_donor, make_donation):
        donation = make_donation(make_donor())
        assert client.delete(f'/api/donations/{donation.id}').status_code in (404, 405)
        assert client.put(f'/api/donations/{donation.id}', json={'amount': 1}).status_code in (404, 405)
        assert Donation.query.count() == 1

    def test_fractional_donor_id_rejected(self, client, make_donor):
        donor = make_donor()
        response = client.post('/api/donations', json={
            'donor_id': donor.id + 0.9, 'amount': 5, 'method': 'Cash'
        })
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Invalid donor_id'
        assert Donation.query.count() == 0

    def test_integral_ids_accepted(self, client, make_donor, make_campaign):
        donor = make_donor()
        campaign = make_campaign()
        response = client.post('/api/donations', json={
            'donor_id': str(donor.id), 'campaign_id': float(campaign.id), 'amount': 5, 'method': 'Cash'
        })
        assert response.status_code == 201
        assert response.get_json()['donation']['campaign']['id'] == campaign.id

    def test_non_object_body_rejected(self, client):
        response = client.post('/api/donations', json=[1, 2, 3])
        assert response.status_code == 400
        assert Donation.query.count() == 0
