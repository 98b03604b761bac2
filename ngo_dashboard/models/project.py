from ngo_dashboard import db
from enum import Enum

class ProjectStatus(Enum):
    ACTIVE = "Active"
    COMPLETED = "Completed"
    PLANNING = "Planning"
    ON_HOLD = "On Hold"
    CANCELLED = "Cancelled"

class Project(db.Model):
    __tablename__ = 'projects'
    
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    campaign_id = db.Column(db.Integer, db.ForeignKey('campaigns.id'), nullable=True, index=True)
    start_date = db.Column(db.DateTime, nullable=False)
    end_date = db.Column(db.DateTime, nullable=False)
    status = db.Column(db.Enum(ProjectStatus), nullable=False)
    
    # Relationships
    tasks = db.relationship('Task', backref='project', lazy=True)
    project_beneficiaries = db.relationship('ProjectBeneficiary', backref='project', lazy=True)
    financial_records = db.relationship('ProjectFinancialRecord', backref='project', lazy=True)
    reports = db.relationship('ProjectReport', backref='project', lazy=True)
    kpis = db.relationship('KPI', backref='project', lazy=True)
    
    def to_dict(self, include_relations=False, include_financials=False):
        data = {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'campaign_id': self.campaign_id,
            'start_date': self.start_date.isoformat(),
            'end_date': self.end_date.isoformat(),
            'status': self.status.value
        }
        if include_relations:
            data['campaign'] = self.campaign.to_dict() if self.campaign else None
            data['beneficiaries'] = [
                link.beneficiary.to_dict() for link in self.project_beneficiaries
            ]
            data['kpis'] = [kpi.to_dict() for kpi in self.kpis]
            data['reports'] = [report.to_dict() for report in self.reports]
            data['tasks'] = [task.to_dict(include_staff=True) for task in self.tasks]
        if include_financials:
            data['financial_records'] = [record.to_dict() for record in self.financial_records]
        return data
    
    def __repr__(self):
        return f'<Project {self.name} - {self.status.value}>'
