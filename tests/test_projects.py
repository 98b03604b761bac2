"""
Endpoint tests for /api/projects
"""
from ngo_dashboard import db
from ngo_dashboard.models import Project
from ngo_dashboard.models.financial_record import RecordType


PROJECT_PAYLOAD = {
    'name': 'Solar Clinic',
    'description': 'Solar power for rural clinic',
    'start_date': '2025-03-01',
    'end_date': '2025-09-30',
    'status': 'Planning'
}


class TestCreateProject:

    def test_create_without_campaign(self, client):
        response = client.post('/api/projects', json=PROJECT_PAYLOAD)
        assert response.status_code == 201
        project = response.get_json()['project']
        assert project['campaign_id'] is None
        assert project['status'] == 'Planning'

    def test_create_with_campaign(self, client, make_campaign):
        campaign = make_campaign()
        response = client.post('/api/projects', json=dict(PROJECT_PAYLOAD, campaign_id=campaign.id))
        assert response.status_code == 201
        assert response.get_json()['project']['campaign_id'] == campaign.id

    def test_unknown_campaign_rejected(self, client):
        response = client.post('/api/projects', json=dict(PROJECT_PAYLOAD, campaign_id=999))
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Campaign not found'
        assert Project.query.count() == 0

    def test_invalid_status(self, client):
        response = client.post('/api/projects', json=dict(PROJECT_PAYLOAD, status='Dreaming'))
        assert response.status_code == 400
        assert Project.query.count() == 0

    def test_missing_field(self, client):
        payload = dict(PROJECT_PAYLOAD)
        del payload['end_date']
        assert client.post('/api/projects', json=payload).status_code == 400


class TestReadProjects:

    def test_get_project_with_relations(self, client, make_project, make_staff, make_task,
                                        make_kpi, make_beneficiary, make_project_record):
        project = make_project()
        staff = make_staff()
        make_task(project, staff=[staff])
        make_kpi(project)
        make_beneficiary(projects=[project])
        make_project_record(project, RecordType.EXPENSE, 75, 'Build pump house')

        response = client.get(f'/api/projects/{project.id}')
        assert response.status_code == 200
        body = response.get_json()['project']
        assert body['tasks'][0]['assigned_staff'] == [{'id': staff.id, 'name': 'Sam Field'}]
        assert body['kpis'][0]['name'] == 'Households served'
        assert body['beneficiaries'][0]['demographic_info']['region'] == 'Nairobi'
        assert body['financial_records'][0]['amount'] == 75

    def test_list_projects(self, client, make_project, make_campaign):
        make_project(campaign=make_campaign(name='Parent'))
        projects = client.get('/api/projects').get_json()['projects']
        assert projects[0]['campaign']['name'] == 'Parent'
        assert 'financial_records' not in projects[0]

    def test_kpis_and_tasks(self, client, make_project, make_kpi, make_task):
        project = make_project()
        make_kpi(project)
        make_task(project)
        assert len(client.get(f'/api/projects/{project.id}/kpis').get_json()['kpis']) == 1
        assert len(client.get(f'/api/projects/{project.id}/tasks').get_json()['tasks']) == 1
        assert client.get('/api/projects/999/kpis').status_code == 404

    def test_get_missing_project(self, client):
        assert client.get('/api/projects/999').status_code == 404


class TestUpdateProject:

    def test_partial_update(self, client, make_project):
        project = make_project(name='Keep Me')
        response = client.put(f'/api/projects/{project.id}', json={'status': 'Completed'})
        assert response.status_code == 200
        body = response.get_json()['project']
        assert body['status'] == 'Completed'
        assert body['name'] == 'Keep Me'

    def test_reassign_to_unknown_campaign(self, client, make_project):
        project = make_project()
        response = client.put(f'/api/projects/{project.id}', json={'campaign_id': 404})
        assert response.status_code == 400
        assert db.session.get(Project, project.id).campaign_id is None

    def test_detach_campaign(self, client, make_project, make_campaign):
        project = make_project(campaign=make_campaign())
        response = client.put(f'/api/projects/{project.id}', json={'campaign_id': None})
        assert response.status_code == 200
        assert response.get_json()['project']['campaign_id'] is None

    def test_empty_payload(self, client, make_project):
        project = make_project()
        assert client.put(f'/api/projects/{project.id}', json={'unknown': 1}).status_code == 400


class TestDeleteProject:

    def test_blocked_by_dependents(self, client, make_project, make_task, make_kpi):
        project = make_project()
        make_task(project)
        make_kpi(project)

        response = client.delete(f'/api/projects/{project.id}')
        assert response.status_code == 400
        body = response.get_json()
        assert body['tasks'] == 1
        assert body['kpis'] == 1
        assert body['beneficiaries'] == 0
        assert db.session.get(Project, project.id) is not None

    def test_delete(self, client, make_project):
        project = make_project()
        response = client.delete(f'/api/projects/{project.id}')
        assert response.status_code == 200
        assert response.get_json() == {'deleted': True}

    def test_delete_missing(self, client):
        assert client.delete('/api/projects/999').status_code == 404


class TestProjectPayloads:

    def test_non_object_body_rejected(self, client, make_project):
        response = client.post('/api/projects', json=['name'])
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Request body must be a JSON object'

        project = make_project()
        response = client.put(f'/api/projects/{project.id}', json='Active')
        assert response.status_code == 400
        assert Project.query.count() == 1

    def test_fractional_campaign_id_rejected(self, client, make_campaign):
        campaign = make_campaign()
        response = client.post('/api/projects', json={
            'name': 'Borehole',
            'start_date': '2025-03-01',
            'end_date': '2025-09-01',
            'status': 'Planning',
            'campaign_id': campaign.id + 0.5
        })
        assert response.status_code == 400
        assert Project.query.count() == 0
