from ngo_dashboard import db
from datetime import datetime
from enum import Enum

class DonorType(Enum):
    INDIVIDUAL = "Individual"
    CORPORATE = "Corporate"
    NON_PROFIT = "Non-Profit"
    GOVERNMENT = "Government"

class Donor(db.Model):
    __tablename__ = 'donors'
    
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=True, index=True)
    phone = db.Column(db.String(30), nullable=True)
    type = db.Column(db.Enum(DonorType), nullable=False)
    join_date = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    
    # Relationships
    donations = db.relationship('Donation', backref='donor', lazy=True)
    
    def to_dict(self, include_donations=False):
        data = {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'type': self.type.value,
            'join_date': self.join_date.isoformat()
        }
        if include_donations:
            data['donations'] = [donation.to_dict() for donation in self.donations]
        return data
    
    def __repr__(self):
        return f'<Donor {self.name} - {self.type.value}>'
