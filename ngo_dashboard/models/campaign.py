from ngo_dashboard import db
from enum import Enum

class CampaignStatus(Enum):
    ACTIVE = "Active"
    COMPLETED = "Completed"
    PLANNED = "Planned"
    ON_HOLD = "On Hold"

class Campaign(db.Model):
    __tablename__ = 'campaigns'
    
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    start_date = db.Column(db.DateTime, nullable=False)
    end_date = db.Column(db.DateTime, nullable=False)
    target_amount = db.Column(db.Float, nullable=False)
    status = db.Column(db.Enum(CampaignStatus), nullable=False)
    
    # Relationships
    donations = db.relationship('Donation', backref='campaign', lazy=True)
    projects = db.relationship('Project', backref='campaign', lazy=True)
    financial_records = db.relationship('CampaignFinancialRecord', backref='campaign', lazy=True)
    reports = db.relationship('CampaignReport', backref='campaign', lazy=True)
    
    def to_dict(self, include_relations=False, include_donors=False):
        data = {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'start_date': self.start_date.isoformat(),
            'end_date': self.end_date.isoformat(),
            'target_amount': self.target_amount,
            'status': self.status.value
        }
        if include_relations:
            data['donations'] = [
                donation.to_dict(include_donor=include_donors) for donation in self.donations
            ]
            data['projects'] = [project.to_dict() for project in self.projects]
            data['financial_records'] = [record.to_dict() for record in self.financial_records]
            data['reports'] = [report.to_dict() for report in self.reports]
        return data
    
    def __repr__(self):
        return f'<Campaign {self.name} - {self.status.value}>'
