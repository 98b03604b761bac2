from ngo_dashboard import db

class Beneficiary(db.Model):
    __tablename__ = 'beneficiaries'
    
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    # Free-form attributes such as region, community size or age group
    demographic_info = db.Column(db.JSON, nullable=True)
    # Contact person, email, phone, address, coordinates
    contact_info = db.Column(db.JSON, nullable=True)
    
    # Relationships
    project_beneficiaries = db.relationship('ProjectBeneficiary', backref='beneficiary', lazy=True)
    
    def to_dict(self, include_projects=False):
        data = {
            'id': self.id,
            'name': self.name,
            'demographic_info': self.demographic_info or {},
            'contact_info': self.contact_info or {}
        }
        if include_projects:
            data['projects'] = [link.project.to_dict() for link in self.project_beneficiaries]
        return data
    
    def __repr__(self):
        return f'<Beneficiary {self.name}>'

class ProjectBeneficiary(db.Model):
    __tablename__ = 'project_beneficiaries'
    
    project_id = db.Column(db.Integer, db.ForeignKey('projects.id'), primary_key=True)
    beneficiary_id = db.Column(db.Integer, db.ForeignKey('beneficiaries.id'), primary_key=True)
    
    def __repr__(self):
        return f'<ProjectBeneficiary {self.project_id}:{self.beneficiary_id}>'
