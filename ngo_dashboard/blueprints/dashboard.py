from flask import Blueprint, jsonify
from ngo_dashboard import db
from ngo_dashboard.models.financial_record import RecordType
from ngo_dashboard.models.project import ProjectStatus
from ngo_dashboard.utils import db_utils
from ngo_dashboard.utils.aggregation import (
    campaign_progress_entry,
    donation_sources,
    donation_trend,
    donor_year_comparison,
    project_budget_chart,
    transaction_feed,
)
from datetime import datetime
import logging

logger = logging.getLogger(__name__)

bp = Blueprint('dashboard', __name__)

RECENT_ACTIVITY_LIMIT = 5
UPCOMING_TASK_LIMIT = 5
TIMELINE_LIMIT = 10
RECENT_CAMPAIGN_LIMIT = 3
RECENT_DONOR_LIMIT = 4

@bp.route('', methods=['GET'])
def get_dashboard():
    """Get the composite payload for the dashboard home page"""
    try:
        return jsonify(get_dashboard_data(datetime.utcnow()))
    except Exception as e:
        logger.error(f"Error fetching dashboard data: {str(e)}", exc_info=True)
        return jsonify({'error': 'Failed to fetch dashboard data'}), 500

def get_dashboard_data(now):
    """Collect and organize everything the dashboard renders"""
    session = db.session

    # Donor statistics
    donor_stats = db_utils.get_donor_statistics(session)

    # Active campaign progress
    active_campaigns = db_utils.get_active_campaigns(session)
    campaigns_data = [campaign_progress_entry(campaign) for campaign in active_campaigns]

    # Project statistics
    project_status_counts = db_utils.get_project_status_counts(session)
    total_projects = sum(project_status_counts.values())
    active_projects = project_status_counts.get(ProjectStatus.ACTIVE.value, 0)

    # Recent financial activity across both ledgers
    recent_activity = transaction_feed(
        db_utils.get_project_financial_records(session),
        db_utils.get_campaign_financial_records(session)
    )[:RECENT_ACTIVITY_LIMIT]

    upcoming_tasks = db_utils.get_upcoming_tasks(session, now, limit=UPCOMING_TASK_LIMIT)

    return {
        'stats': {
            'totalDonations': donor_stats['totalDonated'],
            'totalDonors': donor_stats['totalDonors'],
            'activeCampaigns': len(active_campaigns),
            'activeProjects': active_projects
        },
        'donorStats': {
            'totalDonors': donor_stats['totalDonors'],
            'totalDonated': donor_stats['totalDonated'],
            'recentDonors': [donor.to_dict() for donor in donor_stats['recentDonors']]
        },
        'campaignsData': campaigns_data,
        'projectStats': {
            'total': total_projects,
            'byStatus': project_status_counts
        },
        'recentFinancialActivities': recent_activity,
        'upcomingTasks': [
            task.to_dict(include_project=True, include_staff=True) for task in upcoming_tasks
        ],
        'chartData': get_chart_data(session, active_campaigns, now),
        'recentCampaigns': campaigns_data[:RECENT_CAMPAIGN_LIMIT],
        'recentDonors': get_recent_donors(session)
    }

def get_chart_data(session, active_campaigns, now):
    """Series for the dashboard charts"""
    year_start = datetime(now.year, 1, 1)
    next_year_start = datetime(now.year + 1, 1, 1)
    previous_year_start = datetime(now.year - 1, 1, 1)

    donations_this_year = db_utils.get_donations_between(session, year_start, next_year_start)
    join_dates = db_utils.get_donor_join_dates(session, previous_year_start, next_year_start)
    project_expenses = db_utils.get_project_financial_records(session, record_type=RecordType.EXPENSE)

    return {
        'donationTrends': donation_trend(donations_this_year, active_campaigns, now.year),
        'donationSources': donation_sources(db_utils.get_donation_totals_by_method(session)),
        'projectBudget': project_budget_chart(project_expenses),
        'monthlyDonorsComparison': donor_year_comparison(join_dates, now),
        'projectTimeline': [
            project_timeline_entry(project)
            for project in db_utils.get_project_timeline(session, limit=TIMELINE_LIMIT)
        ]
    }

def project_timeline_entry(project):
    return {
        'id': project.id,
        'name': project.name,
        'start_date': project.start_date.isoformat(),
        'end_date': project.end_date.isoformat(),
        'status': project.status.value
    }

def get_recent_donors(session):
    recent_donors = []
    for donor in db_utils.get_recent_donors(session, limit=RECENT_DONOR_LIMIT):
        latest = max(donor.donations, key=lambda donation: donation.date, default=None)
        recent_donors.append({
            'id': donor.id,
            'name': donor.name,
            'joinDate': donor.join_date.isoformat(),
            'recentDonation': latest.amount if latest else 0
        })
    return recent_donors
