"""Dashboard and finance aggregations.

Pure functions over rows that were already fetched: nothing here touches the
session. Any ratio whose denominator may be zero yields 0 instead of raising,
so an empty database still renders a complete dashboard.
"""
import math
from collections import defaultdict
from datetime import datetime

from ngo_dashboard.models.financial_record import RecordType
from ngo_dashboard.models.task import TaskStatus

EXPENSE_CATEGORIES = [
    'Admin',
    'Operations',
    'Marketing',
    'Development',
    'Research',
    'Training',
    'Materials',
]

# Checked in order; the first category with a matching keyword wins.
CATEGORY_KEYWORDS = (
    ('Operations', ('operation', 'maintain')),
    ('Marketing', ('market', 'advertis')),
    ('Development', ('develop', 'build')),
    ('Research', ('research', 'study')),
    ('Training', ('train', 'workshop')),
    ('Materials', ('material', 'supply')),
)

DEFAULT_EXPENSE_CATEGORY = 'Admin'

ALLOCATION_FACTOR = 1.1


def _round_half_up(value):
    return int(math.floor(value + 0.5))


def _type_label(record_type):
    return record_type.value if isinstance(record_type, RecordType) else record_type


def _status_label(status):
    return getattr(status, 'value', status)


def _month_start(year, month):
    # month may run outside 1..12 while stepping backwards
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    return datetime(year, month, 1)

# -----------------------------------------------------------------------------
# Progress
# -----------------------------------------------------------------------------

def campaign_progress(raised, target):
    """Percentage of target raised, clamped to [0, 100].

    A zero or negative target reports 0.
    """
    if not target or target <= 0:
        return 0
    progress = (raised / target) * 100
    return max(0, min(progress, 100))


def campaign_progress_entry(campaign):
    raised = sum(donation.amount for donation in campaign.donations)
    return {
        'id': campaign.id,
        'name': campaign.name,
        'targetAmount': campaign.target_amount,
        'raisedAmount': raised,
        'progressPercentage': campaign_progress(raised, campaign.target_amount)
    }


def campaign_financial_summary(campaign):
    """Donations plus ledger totals for a single campaign"""
    total_donations = sum(donation.amount for donation in campaign.donations)
    totals = financial_totals(campaign.financial_records)
    total_income = totals['totalIncome'] + total_donations

    return {
        'campaign': campaign.to_dict(),
        'totalDonations': total_donations,
        'totalExpenses': totals['totalExpenses'],
        'totalIncome': total_income,
        'netBalance': total_income - totals['totalExpenses'],
        'progress': campaign_progress(total_income, campaign.target_amount)
    }

# -----------------------------------------------------------------------------
# Financial rollups
# -----------------------------------------------------------------------------

def financial_totals(records):
    total_income = 0
    total_expenses = 0
    for record in records:
        record_type = _type_label(record.type)
        if record_type == RecordType.INCOME.value:
            total_income += record.amount
        elif record_type == RecordType.EXPENSE.value:
            total_expenses += record.amount

    return {
        'totalIncome': total_income,
        'totalExpenses': total_expenses,
        'totalBalance': total_income - total_expenses
    }


def trailing_months(now, months=12):
    """(start, end) pairs for the trailing months, oldest first.

    Each window is half-open: start is the first instant of the month and end
    the first instant of the following month.
    """
    windows = []
    for offset in range(months - 1, -1, -1):
        start = _month_start(now.year, now.month - offset)
        end = _month_start(start.year, start.month + 1)
        windows.append((start, end))
    return windows


def monthly_financial_rollup(records, now, months=12):
    """Income, expenses and balance per month for the trailing months.

    records may mix project and campaign ledger rows. Budget and Transfer
    entries do not count toward either side.
    """
    windows = trailing_months(now, months)
    income = defaultdict(float)
    expenses = defaultdict(float)

    first_start = windows[0][0]
    last_end = windows[-1][1]
    for record in records:
        if record.date < first_start or record.date >= last_end:
            continue
        key = (record.date.year, record.date.month)
        record_type = _type_label(record.type)
        if record_type == RecordType.INCOME.value:
            income[key] += record.amount
        elif record_type == RecordType.EXPENSE.value:
            expenses[key] += record.amount

    monthly_data = []
    for start, _ in windows:
        key = (start.year, start.month)
        month_income = income.get(key, 0)
        month_expenses = expenses.get(key, 0)
        monthly_data.append({
            'month': start.strftime('%b %Y'),
            'income': month_income,
            'expenses': month_expenses,
            'balance': month_income - month_expenses
        })

    return monthly_data

# -----------------------------------------------------------------------------
# Expense categories
# -----------------------------------------------------------------------------

def categorize_expense(description):
    text = (description or '').lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return category
    return DEFAULT_EXPENSE_CATEGORY


def expenses_by_category(records):
    """Sum of Expense amounts per category, every category present"""
    totals = {category: 0 for category in EXPENSE_CATEGORIES}
    for record in records:
        if _type_label(record.type) != RecordType.EXPENSE.value:
            continue
        totals[categorize_expense(record.description)] += record.amount
    return totals


def project_budget_chart(records):
    totals = expenses_by_category(records)
    return {
        'categories': list(EXPENSE_CATEGORIES),
        'expenses': [totals[category] for category in EXPENSE_CATEGORIES],
        'allocated': [
            _round_half_up(totals[category] * ALLOCATION_FACTOR)
            for category in EXPENSE_CATEGORIES
        ]
    }

# -----------------------------------------------------------------------------
# Donations
# -----------------------------------------------------------------------------

def donation_sources(method_totals):
    """Share of the donation total per payment method.

    method_totals is an iterable of (method, amount) pairs. Percentages are
    rounded half up; with no donations every method reports 0.
    """
    method_totals = [(method, amount or 0) for method, amount in method_totals]
    total = sum(amount for _, amount in method_totals)

    sources = []
    for method, amount in method_totals:
        percentage = _round_half_up(amount / total * 100) if total > 0 else 0
        sources.append({
            'method': method,
            'amount': amount,
            'percentage': percentage
        })
    return sources


def monthly_series(dates, year, weights=None):
    """12-slot series for one calendar year, January at index 0.

    Counts the dates falling in each month, or sums the matching weights when
    they are given.
    """
    series = [0] * 12
    for index, value in enumerate(dates):
        if value.year != year:
            continue
        series[value.month - 1] += weights[index] if weights is not None else 1
    return series


def donation_trend(donations, active_campaigns, year):
    monthly = monthly_series(
        [donation.date for donation in donations],
        year,
        weights=[donation.amount for donation in donations]
    )
    total_target = sum(campaign.target_amount for campaign in active_campaigns)
    return {
        'monthly': monthly,
        'targets': [_round_half_up(total_target / 12)] * 12
    }


def donor_year_comparison(join_dates, now):
    current_year = now.year
    previous_year = current_year - 1
    return {
        'currentYear': current_year,
        'previousYear': previous_year,
        'currentYearData': monthly_series(join_dates, current_year),
        'previousYearData': monthly_series(join_dates, previous_year)
    }

# -----------------------------------------------------------------------------
# Transaction feed
# -----------------------------------------------------------------------------

def transaction_entry(record):
    return {
        'id': record.id,
        'date': record.date.isoformat(),
        'type': _type_label(record.type),
        'amount': record.amount,
        'description': record.description,
        'source': record.source_label,
        'sourceId': record.source_id,
        'sourceType': record.source_type
    }


def transaction_feed(project_records, campaign_records):
    """Both ledgers merged, newest first"""
    records = list(project_records) + list(campaign_records)
    records.sort(key=lambda record: record.date, reverse=True)
    return [transaction_entry(record) for record in records]

# -----------------------------------------------------------------------------
# HR
# -----------------------------------------------------------------------------

def count_by(items, key):
    counts = {}
    for item in items:
        label = _status_label(key(item))
        counts[label] = counts.get(label, 0) + 1
    return counts


def staff_workload(member):
    tasks = [assignment.task for assignment in member.task_staff]
    active_tasks = [task for task in tasks if task.status != TaskStatus.COMPLETED]
    projects = []
    for task in tasks:
        if task.project and task.project.name not in projects:
            projects.append(task.project.name)

    return {
        'id': member.id,
        'name': member.name,
        'email': member.email,
        'role': _status_label(member.role),
        'totalTasks': len(tasks),
        'activeTasks': len(active_tasks),
        'projects': projects
    }


def task_summary(task):
    return {
        'id': task.id,
        'description': task.description,
        'dueDate': task.due_date.isoformat(),
        'status': _status_label(task.status),
        'project': task.project.name if task.project else None,
        'projectId': task.project_id,
        'assignedStaff': [
            {'id': assignment.staff.id, 'name': assignment.staff.name}
            for assignment in task.task_staff
        ]
    }
