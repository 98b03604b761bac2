from ngo_dashboard import db
from datetime import datetime
from enum import Enum

class RecordType(Enum):
    INCOME = "Income"
    EXPENSE = "Expense"
    BUDGET = "Budget"
    TRANSFER = "Transfer"

class FinancialRecordMixin:
    """Columns shared by project and campaign ledgers"""
    
    id = db.Column(db.Integer, primary_key=True)
    type = db.Column(db.Enum(RecordType), nullable=False)
    amount = db.Column(db.Float, nullable=False)
    description = db.Column(db.Text, nullable=True)
    date = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)
    
    def _base_dict(self):
        return {
            'id': self.id,
            'type': self.type.value,
            'amount': self.amount,
            'description': self.description,
            'date': self.date.isoformat()
        }

class ProjectFinancialRecord(FinancialRecordMixin, db.Model):
    __tablename__ = 'project_financial_records'
    
    project_id = db.Column(db.Integer, db.ForeignKey('projects.id'), nullable=False, index=True)
    
    source_type = 'project'
    
    @property
    def source_id(self):
        return self.project_id
    
    @property
    def source_label(self):
        return f"Project: {self.project.name}" if self.project else "Project"
    
    def to_dict(self):
        data = self._base_dict()
        data['project_id'] = self.project_id
        return data
    
    def __repr__(self):
        return f'<ProjectFinancialRecord {self.type.value} {self.amount}>'

class CampaignFinancialRecord(FinancialRecordMixin, db.Model):
    __tablename__ = 'campaign_financial_records'
    
    campaign_id = db.Column(db.Integer, db.ForeignKey('campaigns.id'), nullable=False, index=True)
    
    source_type = 'campaign'
    
    @property
    def source_id(self):
        return self.campaign_id
    
    @property
    def source_label(self):
        return f"Campaign: {self.campaign.name}" if self.campaign else "Campaign"
    
    def to_dict(self):
        data = self._base_dict()
        data['campaign_id'] = self.campaign_id
        return data
    
    def __repr__(self):
        return f'<CampaignFinancialRecord {self.type.value} {self.amount}>'
