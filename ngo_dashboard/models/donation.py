from ngo_dashboard import db
from datetime import datetime
from enum import Enum

class DonationMethod(Enum):
    CREDIT_CARD = "Credit Card"
    BANK_TRANSFER = "Bank Transfer"
    CHECK = "Check"
    CASH = "Cash"
    MOBILE_PAYMENT = "Mobile Payment"
    CRYPTOCURRENCY = "Cryptocurrency"

class Donation(db.Model):
    __tablename__ = 'donations'
    
    id = db.Column(db.Integer, primary_key=True)
    donor_id = db.Column(db.Integer, db.ForeignKey('donors.id'), nullable=False, index=True)
    campaign_id = db.Column(db.Integer, db.ForeignKey('campaigns.id'), nullable=True, index=True)
    amount = db.Column(db.Float, nullable=False)
    date = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    method = db.Column(db.Enum(DonationMethod), nullable=False)
    
    def to_dict(self, include_donor=False, include_campaign=False):
        data = {
            'id': self.id,
            'donor_id': self.donor_id,
            'campaign_id': self.campaign_id,
            'amount': self.amount,
            'date': self.date.isoformat(),
            'method': self.method.value
        }
        if include_donor:
            data['donor'] = self.donor.to_dict() if self.donor else None
        if include_campaign:
            data['campaign'] = self.campaign.to_dict() if self.campaign else None
        return data
    
    def __repr__(self):
        return f'<Donation {self.amount} - {self.method.value}>'
