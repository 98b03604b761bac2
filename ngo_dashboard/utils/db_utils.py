"""Read-only query helpers.

Every function takes the SQLAlchemy session it should run against and loads
the relations its callers serialize, so a blueprint never triggers lazy loads
row by row. Lookups by id return None when the row does not exist; datastore
errors are left to the caller.
"""
from sqlalchemy import func
from sqlalchemy.orm import joinedload, selectinload

from ngo_dashboard.models import (
    Beneficiary,
    Campaign,
    CampaignFinancialRecord,
    CampaignReport,
    Donation,
    Donor,
    KPI,
    Project,
    ProjectBeneficiary,
    ProjectFinancialRecord,
    ProjectReport,
    Staff,
    Task,
    TaskStaff,
)
from ngo_dashboard.models.campaign import CampaignStatus
from ngo_dashboard.models.task import TaskStatus

# -----------------------------------------------------------------------------
# Donors
# -----------------------------------------------------------------------------

def get_all_donors(session):
    return session.query(Donor).options(
        selectinload(Donor.donations)
    ).order_by(Donor.id).all()


def get_donor_by_id(session, donor_id):
    return session.query(Donor).options(
        selectinload(Donor.donations)
    ).filter(Donor.id == donor_id).first()


def get_donor_by_email(session, email):
    return session.query(Donor).filter(Donor.email == email).first()


def get_donor_statistics(session):
    """Donor count, lifetime donation total and the five newest donors"""
    total_donors = session.query(func.count(Donor.id)).scalar()
    total_donated = session.query(func.sum(Donation.amount)).scalar()

    recent_donors = session.query(Donor).options(
        selectinload(Donor.donations)
    ).order_by(Donor.join_date.desc()).limit(5).all()

    return {
        'totalDonors': total_donors or 0,
        'totalDonated': total_donated or 0,
        'recentDonors': recent_donors
    }


def get_recent_donors(session, limit=4):
    return session.query(Donor).options(
        selectinload(Donor.donations)
    ).order_by(Donor.join_date.desc()).limit(limit).all()


def get_donor_join_dates(session, start, end):
    rows = session.query(Donor.join_date).filter(
        Donor.join_date >= start,
        Donor.join_date < end
    ).all()
    return [join_date for (join_date,) in rows]


def count_donor_dependents(session, donor_id):
    return {
        'donations': session.query(func.count(Donation.id)).filter(
            Donation.donor_id == donor_id
        ).scalar()
    }

# -----------------------------------------------------------------------------
# Campaigns
# -----------------------------------------------------------------------------

def get_all_campaigns(session):
    return session.query(Campaign).options(
        selectinload(Campaign.donations),
        selectinload(Campaign.projects),
        selectinload(Campaign.reports),
        selectinload(Campaign.financial_records)
    ).order_by(Campaign.id).all()


def get_campaign_by_id(session, campaign_id):
    return session.query(Campaign).options(
        selectinload(Campaign.donations).joinedload(Donation.donor),
        selectinload(Campaign.projects),
        selectinload(Campaign.reports),
        selectinload(Campaign.financial_records)
    ).filter(Campaign.id == campaign_id).first()


def get_active_campaigns(session):
    return session.query(Campaign).options(
        selectinload(Campaign.donations)
    ).filter(Campaign.status == CampaignStatus.ACTIVE).order_by(Campaign.id).all()


def get_campaign_with_financials(session, campaign_id):
    """Campaign with its donations and ledger, or None when missing.

    The arithmetic lives in the aggregation module; this only fetches.
    """
    return session.query(Campaign).options(
        selectinload(Campaign.donations),
        selectinload(Campaign.financial_records)
    ).filter(Campaign.id == campaign_id).first()


def count_campaign_dependents(session, campaign_id):
    return {
        'donations': session.query(func.count(Donation.id)).filter(
            Donation.campaign_id == campaign_id
        ).scalar(),
        'projects': session.query(func.count(Project.id)).filter(
            Project.campaign_id == campaign_id
        ).scalar(),
        'financial_records': session.query(func.count(CampaignFinancialRecord.id)).filter(
            CampaignFinancialRecord.campaign_id == campaign_id
        ).scalar(),
        'reports': session.query(func.count(CampaignReport.id)).filter(
            CampaignReport.campaign_id == campaign_id
        ).scalar()
    }

# -----------------------------------------------------------------------------
# Projects
# -----------------------------------------------------------------------------

def _project_options():
    return [
        joinedload(Project.campaign),
        selectinload(Project.project_beneficiaries).joinedload(ProjectBeneficiary.beneficiary),
        selectinload(Project.kpis),
        selectinload(Project.reports),
        selectinload(Project.tasks).selectinload(Task.task_staff).joinedload(TaskStaff.staff)
    ]


def get_all_projects(session):
    return session.query(Project).options(
        *_project_options()
    ).order_by(Project.id).all()


def get_project_by_id(session, project_id):
    return session.query(Project).options(
        *_project_options(),
        selectinload(Project.financial_records)
    ).filter(Project.id == project_id).first()


def get_project_kpis(session, project_id):
    return session.query(KPI).filter(KPI.project_id == project_id).order_by(KPI.id).all()


def get_project_tasks(session, project_id):
    return session.query(Task).options(
        selectinload(Task.task_staff).joinedload(TaskStaff.staff)
    ).filter(Task.project_id == project_id).order_by(Task.due_date).all()


def get_project_timeline(session, limit=10):
    return session.query(Project).order_by(Project.start_date.asc()).limit(limit).all()


def get_project_status_counts(session):
    rows = session.query(Project.status, func.count(Project.id)).group_by(Project.status).all()
    return {status.value: count for status, count in rows}


def count_project_dependents(session, project_id):
    return {
        'tasks': session.query(func.count(Task.id)).filter(
            Task.project_id == project_id
        ).scalar(),
        'beneficiaries': session.query(func.count(ProjectBeneficiary.beneficiary_id)).filter(
            ProjectBeneficiary.project_id == project_id
        ).scalar(),
        'reports': session.query(func.count(ProjectReport.id)).filter(
            ProjectReport.project_id == project_id
        ).scalar(),
        'financial_records': session.query(func.count(ProjectFinancialRecord.id)).filter(
            ProjectFinancialRecord.project_id == project_id
        ).scalar(),
        'kpis': session.query(func.count(KPI.id)).filter(
            KPI.project_id == project_id
        ).scalar()
    }

# -----------------------------------------------------------------------------
# Donations
# -----------------------------------------------------------------------------

def get_all_donations(session):
    return session.query(Donation).options(
        joinedload(Donation.donor),
        joinedload(Donation.campaign)
    ).order_by(Donation.date.desc()).all()


def get_donations_between(session, start, end):
    return session.query(Donation).filter(
        Donation.date >= start,
        Donation.date < end
    ).all()


def get_donation_totals_by_method(session):
    rows = session.query(
        Donation.method,
        func.sum(Donation.amount)
    ).group_by(Donation.method).all()
    return [(method.value, total or 0) for method, total in rows]

# -----------------------------------------------------------------------------
# Financial records
# -----------------------------------------------------------------------------

def get_project_financial_records(session, record_type=None):
    query = session.query(ProjectFinancialRecord).options(
        joinedload(ProjectFinancialRecord.project)
    )
    if record_type is not None:
        query = query.filter(ProjectFinancialRecord.type == record_type)
    return query.order_by(ProjectFinancialRecord.date.desc()).all()


def get_campaign_financial_records(session, record_type=None):
    query = session.query(CampaignFinancialRecord).options(
        joinedload(CampaignFinancialRecord.campaign)
    )
    if record_type is not None:
        query = query.filter(CampaignFinancialRecord.type == record_type)
    return query.order_by(CampaignFinancialRecord.date.desc()).all()

# -----------------------------------------------------------------------------
# Staff, tasks and beneficiaries
# -----------------------------------------------------------------------------

def _staff_options():
    return [
        selectinload(Staff.task_staff).joinedload(TaskStaff.task).joinedload(Task.project)
    ]


def get_all_staff_with_tasks(session):
    return session.query(Staff).options(*_staff_options()).order_by(Staff.id).all()


def get_staff_by_id(session, staff_id):
    return session.query(Staff).options(*_staff_options()).filter(Staff.id == staff_id).first()


def get_upcoming_tasks(session, now, limit=5):
    """Open tasks due from now on, soonest first"""
    return session.query(Task).options(
        joinedload(Task.project),
        selectinload(Task.task_staff).joinedload(TaskStaff.staff)
    ).filter(
        Task.due_date >= now,
        Task.status != TaskStatus.COMPLETED
    ).order_by(Task.due_date.asc()).limit(limit).all()


def get_tasks_by_due_date(session, limit=10):
    return session.query(Task).options(
        joinedload(Task.project),
        selectinload(Task.task_staff).joinedload(TaskStaff.staff)
    ).order_by(Task.due_date.asc()).limit(limit).all()


def get_task_status_counts(session):
    rows = session.query(Task.status, func.count(Task.id)).group_by(Task.status).all()
    return {status.value: count for status, count in rows}


def get_all_beneficiaries(session):
    return session.query(Beneficiary).options(
        selectinload(Beneficiary.project_beneficiaries).joinedload(ProjectBeneficiary.project)
    ).order_by(Beneficiary.id).all()
