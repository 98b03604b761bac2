from ngo_dashboard.models.donor import Donor, DonorType
from ngo_dashboard.models.campaign import Campaign, CampaignStatus
from ngo_dashboard.models.donation import Donation, DonationMethod
from ngo_dashboard.models.project import Project, ProjectStatus
from ngo_dashboard.models.beneficiary import Beneficiary, ProjectBeneficiary
from ngo_dashboard.models.staff import Staff, StaffRole
from ngo_dashboard.models.task import Task, TaskStaff, TaskStatus
from ngo_dashboard.models.financial_record import ProjectFinancialRecord, CampaignFinancialRecord, RecordType
from ngo_dashboard.models.report import ProjectReport, CampaignReport
from ngo_dashboard.models.kpi import KPI

__all__ = [
    'Donor',
    'Campaign',
    'Donation',
    'Project',
    'Beneficiary',
    'ProjectBeneficiary',
    'Staff',
    'Task',
    'TaskStaff',
    'ProjectFinancialRecord',
    'CampaignFinancialRecord',
    'ProjectReport',
    'CampaignReport',
    'KPI'
]
