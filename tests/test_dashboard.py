"""
Endpoint tests for /api/dashboard
"""
from datetime import datetime, timedelta

from ngo_dashboard.models.campaign import CampaignStatus
from ngo_dashboard.models.donation import DonationMethod
from ngo_dashboard.models.financial_record import RecordType
from ngo_dashboard.models.task import TaskStatus


class TestDashboard:

    def test_campaign_progress_scenario(self, client, make_donor, make_campaign, make_donation):
        donor = make_donor()
        campaign = make_campaign(target_amount=100000)
        make_donation(donor, amount=1000, campaign=campaign)

        body = client.get('/api/dashboard').get_json()
        entry = next(item for item in body['campaignsData'] if item['id'] == campaign.id)
        assert entry['raisedAmount'] == 1000
        assert entry['progressPercentage'] == 1
        assert body['stats']['totalDonations'] == 1000
        assert body['stats']['totalDonors'] == 1
        assert body['stats']['activeCampaigns'] == 1

    def test_progress_clamped_and_zero_target(self, client, make_donor, make_campaign, make_donation):
        donor = make_donor()
        overfunded = make_campaign(name='Over', target_amount=100)
        unfunded_target = make_campaign(name='Zero', target_amount=0)
        make_donation(donor, amount=500, campaign=overfunded)
        make_donation(donor, amount=500, campaign=unfunded_target)

        progress = {
            item['name']: item['progressPercentage']
            for item in client.get('/api/dashboard').get_json()['campaignsData']
        }
        assert progress == {'Over': 100, 'Zero': 0}

    def test_inactive_campaigns_excluded(self, client, make_campaign):
        make_campaign(name='Done', status=CampaignStatus.COMPLETED)
        body = client.get('/api/dashboard').get_json()
        assert body['campaignsData'] == []
        assert body['stats']['activeCampaigns'] == 0

    def test_empty_database(self, client):
        response = client.get('/api/dashboard')
        assert response.status_code == 200
        body = response.get_json()
        assert body['stats']['totalDonations'] == 0
        assert body['chartData']['donationSources'] == []
        assert body['chartData']['donationTrends']['monthly'] == [0] * 12
        assert body['chartData']['projectBudget']['expenses'] == [0] * 7
        assert body['chartData']['monthlyDonorsComparison']['currentYearData'] == [0] * 12
        assert body['recentDonors'] == []

    def test_donation_sources(self, client, make_donor, make_donation):
        donor = make_donor()
        make_donation(donor, amount=300, method=DonationMethod.CASH)
        make_donation(donor, amount=100, method=DonationMethod.CHECK)

        sources = {
            source['method']: source
            for source in client.get('/api/dashboard').get_json()['chartData']['donationSources']
        }
        assert sources['Cash']['percentage'] == 75
        assert sources['Check']['percentage'] == 25
        assert sources['Cash']['amount'] == 300

    def test_project_budget_and_activity(self, client, make_project, make_project_record):
        project = make_project(name='Well')
        make_project_record(project, RecordType.EXPENSE, 100, 'Advertising flyers')
        make_project_record(project, RecordType.EXPENSE, 40, 'Office rent')
        make_project_record(project, RecordType.INCOME, 900, 'Grant')

        body = client.get('/api/dashboard').get_json()
        budget = body['chartData']['projectBudget']
        assert budget['expenses'][budget['categories'].index('Marketing')] == 100
        assert budget['expenses'][budget['categories'].index('Admin')] == 40
        assert len(body['recentFinancialActivities']) == 3
        assert body['recentFinancialActivities'][0]['source'] == 'Project: Well'
        assert body['projectStats']['total'] == 1
        assert body['projectStats']['byStatus'] == {'Active': 1}
        assert body['chartData']['projectTimeline'][0]['name'] == 'Well'

    def test_upcoming_tasks(self, client, make_project, make_task):
        project = make_project()
        now = datetime.utcnow()
        make_task(project, description='Later', due_date=now + timedelta(days=10))
        make_task(project, description='Sooner', due_date=now + timedelta(days=2))
        make_task(project, description='Done', due_date=now + timedelta(days=1), status=TaskStatus.COMPLETED)
        make_task(project, description='Overdue', due_date=now - timedelta(days=1))

        tasks = client.get('/api/dashboard').get_json()['upcomingTasks']
        assert [task['description'] for task in tasks] == ['Sooner', 'Later']

    def test_recent_donors_and_donor_comparison(self, client, make_donor, make_donation):
        now = datetime.utcnow()
        donor = make_donor(name='Newest', join_date=now)
        make_donation(donor, amount=5, date=now - timedelta(days=5))
        make_donation(donor, amount=15, date=now - timedelta(days=1))
        make_donor(name='Last Year', join_date=datetime(now.year - 1, 3, 10))

        body = client.get('/api/dashboard').get_json()
        assert body['recentDonors'][0]['name'] == 'Newest'
        assert body['recentDonors'][0]['recentDonation'] == 15

        comparison = body['chartData']['monthlyDonorsComparison']
        assert comparison['currentYearData'][now.month - 1] == 1
        assert comparison['previousYearData'][2] == 1
