"""
Shared fixtures: an application bound to an in-memory SQLite database and
small factories for seeding rows.
"""
from datetime import datetime

import pytest

from ngo_dashboard import create_app, db
from ngo_dashboard.models import (
    Beneficiary,
    Campaign,
    CampaignFinancialRecord,
    Donation,
    Donor,
    KPI,
    Project,
    ProjectBeneficiary,
    ProjectFinancialRecord,
    Staff,
    Task,
    TaskStaff,
)
from ngo_dashboard.models.campaign import CampaignStatus
from ngo_dashboard.models.donation import DonationMethod
from ngo_dashboard.models.donor import DonorType
from ngo_dashboard.models.financial_record import RecordType
from ngo_dashboard.models.project import ProjectStatus
from ngo_dashboard.models.staff import StaffRole
from ngo_dashboard.models.task import TaskStatus


# ============================================================================
# APPLICATION
# ============================================================================

@pytest.fixture
def app():
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite://',
        'LOG_LEVEL': 'WARNING',
    })
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def _save(instance):
    db.session.add(instance)
    db.session.commit()
    return instance


# ============================================================================
# FACTORIES
# ============================================================================

@pytest.fixture
def make_donor(app):
    def factory(name='Jane Doe', email=None, donor_type=DonorType.INDIVIDUAL, join_date=None):
        return _save(Donor(
            name=name,
            email=email,
            type=donor_type,
            join_date=join_date or datetime.utcnow()
        ))
    return factory


@pytest.fixture
def make_campaign(app):
    def factory(name='Clean Water', target_amount=100000, status=CampaignStatus.ACTIVE):
        return _save(Campaign(
            name=name,
            description='Fundraising campaign',
            start_date=datetime(2025, 1, 1),
            end_date=datetime(2025, 12, 31),
            target_amount=target_amount,
            status=status
        ))
    return factory


@pytest.fixture
def make_donation(app):
    def factory(donor, amount=100, campaign=None, method=DonationMethod.CREDIT_CARD, date=None):
        return _save(Donation(
            donor_id=donor.id,
            campaign_id=campaign.id if campaign else None,
            amount=amount,
            method=method,
            date=date or datetime.utcnow()
        ))
    return factory


@pytest.fixture
def make_project(app):
    def factory(name='Village Well', campaign=None, status=ProjectStatus.ACTIVE, start_date=None):
        return _save(Project(
            name=name,
            description='Field project',
            campaign_id=campaign.id if campaign else None,
            start_date=start_date or datetime(2025, 2, 1),
            end_date=datetime(2025, 11, 30),
            status=status
        ))
    return factory


@pytest.fixture
def make_project_record(app):
    def factory(project, record_type=RecordType.INCOME, amount=100, description=None, date=None):
        return _save(ProjectFinancialRecord(
            project_id=project.id,
            type=record_type,
            amount=amount,
            description=description,
            date=date or datetime.utcnow()
        ))
    return factory


@pytest.fixture
def make_campaign_record(app):
    def factory(campaign, record_type=RecordType.INCOME, amount=100, description=None, date=None):
        return _save(CampaignFinancialRecord(
            campaign_id=campaign.id,
            type=record_type,
            amount=amount,
            description=description,
            date=date or datetime.utcnow()
        ))
    return factory


@pytest.fixture
def make_staff(app):
    def factory(name='Sam Field', email='sam@example.org', role=StaffRole.FIELD_OFFICER):
        return _save(Staff(name=name, email=email, role=role))
    return factory


@pytest.fixture
def make_task(app):
    def factory(project, description='Survey households', due_date=None,
                status=TaskStatus.NOT_STARTED, staff=()):
        task = Task(
            project_id=project.id,
            description=description,
            due_date=due_date or datetime(2030, 1, 1),
            status=status
        )
        task.task_staff = [TaskStaff(staff_id=member.id) for member in staff]
        return _save(task)
    return factory


@pytest.fixture
def make_kpi(app):
    def factory(project, name='Households served', target_value=500, current_value=120):
        return _save(KPI(
            project_id=project.id,
            name=name,
            target_value=target_value,
            current_value=current_value,
            unit='households'
        ))
    return factory


@pytest.fixture
def make_beneficiary(app):
    def factory(name='Kibera School', projects=()):
        beneficiary = _save(Beneficiary(
            name=name,
            demographic_info={'region': 'Nairobi', 'age_group': 'children'},
            contact_info={'contact_person': 'A. Otieno', 'phone': '+254700000000'}
        ))
        for project in projects:
            _save(ProjectBeneficiary(project_id=project.id, beneficiary_id=beneficiary.id))
        return beneficiary
    return factory
