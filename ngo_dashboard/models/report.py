from ngo_dashboard import db
from datetime import datetime

class ReportMixin:
    """Narrative report columns shared by projects and campaigns"""
    
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    # Staff name, denormalized
    created_by = db.Column(db.String(200), nullable=False)
    created_date = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    content = db.Column(db.Text, nullable=True)
    attachment_url = db.Column(db.String(500), nullable=True)
    
    def _base_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'created_by': self.created_by,
            'created_date': self.created_date.isoformat(),
            'content': self.content,
            'attachment_url': self.attachment_url
        }

class ProjectReport(ReportMixin, db.Model):
    __tablename__ = 'project_reports'
    
    project_id = db.Column(db.Integer, db.ForeignKey('projects.id'), nullable=False, index=True)
    
    def to_dict(self):
        data = self._base_dict()
        data['project_id'] = self.project_id
        return data
    
    def __repr__(self):
        return f'<ProjectReport {self.title}>'

class CampaignReport(ReportMixin, db.Model):
    __tablename__ = 'campaign_reports'
    
    campaign_id = db.Column(db.Integer, db.ForeignKey('campaigns.id'), nullable=False, index=True)
    
    def to_dict(self):
        data = self._base_dict()
        data['campaign_id'] = self.campaign_id
        return data
    
    def __repr__(self):
        return f'<CampaignReport {self.title}>'
